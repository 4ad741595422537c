"""Results screen: score, issues and recommendations for one file."""

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Static

from debug_buddy.models import AnalysisReport


def score_label(score: int) -> str:
    """Coarse verdict for a 0–100 score."""
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Needs work"
    return "Poor"


def issues_heading(report: AnalysisReport) -> str:
    """Section title with the issue total and a severity breakdown of the listed rows."""
    shown = len(report.issues)
    title = f"Issues ({report.total_issues})"
    if report.total_issues > shown:
        title += f", showing first {shown}"
    counts = report.issue_count_by_severity
    if counts:
        breakdown = ", ".join(f"{n} {severity}" for severity, n in counts.items())
        title += f"  ·  listed: {breakdown}"
    return title


class ResultsScreen(Screen):
    """Shows one AnalysisReport."""

    CSS = """
    ResultsScreen {
        layout: vertical;
    }
    #results-header {
        height: 3;
        background: $primary;
        color: $text;
        text-align: center;
        padding: 1 2;
        text-style: bold;
    }
    .section-title {
        text-style: bold;
        margin: 1 0;
        color: $secondary;
    }
    #score {
        text-align: center;
        text-style: bold;
        color: $accent;
        margin: 1 0;
    }
    #issues-table {
        height: auto;
        max-height: 16;
        margin: 1 0;
    }
    .hint {
        color: $text-muted;
        text-align: center;
    }
    .recommendation {
        margin-left: 2;
    }
    """

    BINDINGS = [
        ("b", "go_back", "Analyze another file"),
        ("p", "profile", "Profile"),
    ]

    def __init__(self, report: AnalysisReport, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.report = report

    def compose(self) -> ComposeResult:
        report = self.report
        yield Header(show_clock=True)
        yield Static(f"  📄  {report.file_name}  ", id="results-header")
        with VerticalScroll():
            yield Static(
                f"{report.overall_score}/100  ·  {score_label(report.overall_score)}",
                id="score",
            )
            yield Static(report.source_url, classes="hint")

            yield Static(issues_heading(report), classes="section-title")
            if report.issues:
                yield DataTable(id="issues-table", zebra_stripes=True)
            else:
                yield Static("✅  No issues found")

            yield Static("Recommendations", classes="section-title")
            for text in report.recommendations[:3]:
                yield Static(f"💡  {text}", classes="recommendation")
        yield Footer()

    def on_mount(self) -> None:
        if not self.report.issues:
            return
        table = self.query_one("#issues-table", DataTable)
        table.add_columns("Line", "Severity", "Message", "Suggestion")
        for issue in self.report.issues:
            table.add_row(
                str(issue.line_number),
                issue.display_severity,
                issue.message,
                issue.suggestion or "",
            )

    def action_go_back(self) -> None:
        self.app.show_home()  # type: ignore[attr-defined]

    def action_profile(self) -> None:
        self.app.show_profile()  # type: ignore[attr-defined]
