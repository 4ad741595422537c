"""Profile screen: account stats and recent analyses."""

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Static

from debug_buddy.models import Account, AnalysisReport


class ProfileScreen(Screen):
    """Who is logged in, how they are doing, and what they ran last."""

    CSS = """
    #profile-header {
        height: 3;
        background: $primary;
        text-align: center;
        padding: 1 2;
        text-style: bold;
    }
    .stat-row {
        height: 5;
        margin: 1 1;
    }
    .stat-card {
        width: 1fr;
        border: round $primary-lighten-2;
        padding: 0 1;
        text-align: center;
    }
    .section-title {
        text-style: bold;
        margin: 1 0;
        color: $secondary;
    }
    .history-card {
        border: round $primary-lighten-2;
        padding: 0 2;
        margin: 0 1 1 1;
        height: auto;
    }
    #logout-btn {
        margin: 1 2;
    }
    """

    BINDINGS = [
        ("b", "go_back", "Back"),
    ]

    RECENT_LIMIT = 3

    def __init__(
        self, account: Account, reports: list[AnalysisReport], **kwargs
    ) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.account = account
        self.reports = reports

    def compose(self) -> ComposeResult:
        account = self.account
        yield Header(show_clock=True)
        yield Static(
            f"  👤  {account.username}  ·  {account.email}  ·  member since {account.join_date:%Y-%m-%d}  ",
            id="profile-header",
        )
        with VerticalScroll():
            with Horizontal(classes="stat-row"):
                yield Static(f"Analyses\n{account.analyses_count}", classes="stat-card")
                yield Static(f"Average score\n{account.average_score:.1f}", classes="stat-card")
            with Horizontal(classes="stat-row"):
                yield Static(f"Days in community\n{account.days_since_join()}", classes="stat-card")
                yield Static(f"Level\n{account.level}", classes="stat-card")

            if self.reports:
                yield Static("Recent analyses", classes="section-title")
                for report in self.reports[: self.RECENT_LIMIT]:
                    yield Static(
                        f"📄 {report.file_name}  ·  {report.overall_score}/100  ·  "
                        f"{report.total_issues} issues  ·  {report.analyzed_at:%Y-%m-%d %H:%M}",
                        classes="history-card",
                    )
            yield Button("Log out", id="logout-btn", variant="error")
        yield Footer()

    @on(Button.Pressed, "#logout-btn")
    def logout(self) -> None:
        self.app.logout()  # type: ignore[attr-defined]

    def action_go_back(self) -> None:
        self.app.pop_screen()
