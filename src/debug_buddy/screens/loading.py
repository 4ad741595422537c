"""Loading screen: follows one analysis through the pipeline stages."""

from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, ProgressBar, Static

from debug_buddy.models import PipelineState

STEPS = (
    PipelineState.resolving,
    PipelineState.fetching,
    PipelineState.scoring,
    PipelineState.persisting,
)

PROGRESS = {
    PipelineState.resolving: 10,
    PipelineState.fetching: 30,
    PipelineState.scoring: 70,
    PipelineState.persisting: 90,
    PipelineState.done: 100,
}

RETRY_HINT = "Press [b]  b  [/b] to go back and try again."


def step_label(state: PipelineState) -> str:
    """``Step 2/4 · fetching`` for a running stage, the bare state otherwise."""
    if state in STEPS:
        return f"Step {STEPS.index(state) + 1}/{len(STEPS)} · {state.value}"
    return state.value


def step_marker(step: PipelineState, current: PipelineState) -> str:
    """Checklist glyph for ``step`` while the pipeline sits at ``current``."""
    if current is PipelineState.done:
        return "✔"
    if current not in STEPS:
        return "·"
    position = STEPS.index(current)
    index = STEPS.index(step)
    if index < position:
        return "✔"
    if index == position:
        return "▶"
    return "·"


class LoadingScreen(Screen):
    """Displayed while a file is being fetched and scored."""

    BINDINGS = [
        ("b", "go_back", "Back"),
    ]

    CSS = """
    LoadingScreen {
        align: center middle;
    }
    #pipeline {
        width: 72;
        height: auto;
        padding: 1 3;
        border: round $primary;
        background: $surface;
    }
    #pipeline-url {
        color: $text-muted;
        margin-bottom: 1;
    }
    .step {
        margin-left: 2;
    }
    #pipeline-status {
        margin-top: 1;
        text-style: bold;
    }
    #pipeline-hint {
        color: $text-muted;
    }
    """

    def __init__(self, url: str = "", **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.url = url
        self.state = PipelineState.idle

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Center():
            with Vertical(id="pipeline"):
                yield Static("🔍  Analyzing", id="pipeline-title")
                yield Static(self.url, id="pipeline-url")
                for step in STEPS:
                    yield Label(
                        f"·  {step_label(step)}", id=f"step-{step.value}", classes="step"
                    )
                yield ProgressBar(total=100, show_eta=False, id="pipeline-progress")
                yield Label("Waiting …", id="pipeline-status")
                yield Label("", id="pipeline-hint")
        yield Footer()

    def show_state(self, state: PipelineState, message: str) -> None:
        """Move the checklist and progress bar to ``state``."""
        if state is PipelineState.failed:
            self.show_failure(message)
            return
        self.state = state
        if not self.is_mounted:
            return
        for step in STEPS:
            self.query_one(f"#step-{step.value}", Label).update(
                f"{step_marker(step, state)}  {step_label(step)}"
            )
        progress = PROGRESS.get(state)
        if progress is not None:
            self.query_one("#pipeline-progress", ProgressBar).update(progress=progress)
        self.query_one("#pipeline-status", Label).update(f"{step_label(state)}: {message}")

    def show_failure(self, message: str) -> None:
        """Stop at the current step with an error and the retry hint."""
        self.state = PipelineState.failed
        if not self.is_mounted:
            return
        self.query_one("#pipeline-status", Label).update(f"❌ {message}")
        self.query_one("#pipeline-hint", Label).update(RETRY_HINT)

    def action_go_back(self) -> None:
        """Return to the URL form."""
        self.app.show_home()  # type: ignore[attr-defined]
