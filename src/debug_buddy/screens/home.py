"""Home screen: GitHub file URL input."""

from textual import on
from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Label, Static

from debug_buddy.fetcher import parse_blob_url


class HomeScreen(Screen):
    """Collects the blob URL of the file to analyze."""

    BINDINGS = [
        ("p", "profile", "Profile"),
    ]

    CSS = """
    HomeScreen {
        align: center middle;
    }
    #home-container {
        width: 80;
        height: auto;
        padding: 1 4;
        border: round $primary;
        background: $surface;
    }
    #title {
        text-align: center;
        text-style: bold;
        color: $accent;
    }
    #subtitle {
        text-align: center;
        color: $text-muted;
        margin-bottom: 2;
    }
    .field-label {
        margin-top: 1;
        color: $text;
    }
    .hint {
        color: $text-muted;
    }
    #analyze-btn {
        margin-top: 2;
        width: 100%;
    }
    #error-label {
        color: $error;
        text-align: center;
        margin-top: 1;
    }
    """

    HINTS = [
        "Paste a link to a single file, not a repository",
        "The file must be in a public repository",
        "Use the link from the file view (…/blob/<branch>/<path>)",
    ]

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Center():
            with Vertical(id="home-container"):
                yield Static("🐞  Debug Buddy", id="title")
                yield Static("Line-level review of any GitHub file", id="subtitle")
                yield Label("GitHub file URL:", classes="field-label")
                yield Input(
                    placeholder="https://github.com/owner/repo/blob/main/src/file.swift",
                    id="url-input",
                )
                for hint in self.HINTS:
                    yield Static(f"•  {hint}", classes="hint")
                yield Button("▶  Analyze", id="analyze-btn", variant="primary")
                yield Label("", id="error-label")
        yield Footer()

    def on_mount(self) -> None:
        """Focus the URL input so paste works immediately."""
        self.query_one("#url-input", Input).focus()

    @on(Button.Pressed, "#analyze-btn")
    def start_analysis(self) -> None:
        url = self.query_one("#url-input", Input).value.strip()
        error_label = self.query_one("#error-label", Label)

        if not url:
            error_label.update("⚠  Enter a GitHub file URL")
            return
        if parse_blob_url(url) is None:
            error_label.update("⚠  Expected https://github.com/<owner>/<repo>/blob/<branch>/<path>")
            return

        error_label.update("")
        self.app.run_analysis(url)  # type: ignore[attr-defined]

    @on(Input.Submitted, "#url-input")
    def submit_on_enter(self) -> None:
        self.start_analysis()

    def action_profile(self) -> None:
        self.app.show_profile()  # type: ignore[attr-defined]
