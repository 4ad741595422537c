"""Main Textual TUI application for debug-buddy."""

import logging
from typing import Optional

from textual.app import App

from debug_buddy.accounts import AccountStore
from debug_buddy.analyzer import Analyzer
from debug_buddy.config import Settings, load_settings
from debug_buddy.history import AnalysisStore
from debug_buddy.models import AnalysisReport, Session
from debug_buddy.screens.home import HomeScreen
from debug_buddy.screens.loading import LoadingScreen
from debug_buddy.screens.login import LoginScreen
from debug_buddy.screens.profile import ProfileScreen
from debug_buddy.screens.results import ResultsScreen

logger = logging.getLogger(__name__)

class DebugBuddyApp(App):
    """TUI for scoring GitHub files and browsing your history."""

    TITLE = "Debug Buddy"
    SUB_TITLE = "Quick heuristic review of any GitHub file"

    CSS = """
    Screen {
        background: $background;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(self, settings: Optional[Settings] = None, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.settings = settings or load_settings()
        self.session = Session()
        self.analyzer = Analyzer.from_settings(self.settings)

    @property
    def accounts(self) -> AccountStore:
        return self.analyzer.accounts

    @property
    def history(self) -> AnalysisStore:
        return self.analyzer.history

    def on_mount(self) -> None:
        if self.accounts.restore_session(self.session) is not None:
            self.push_screen(HomeScreen())
        else:
            self.push_screen(LoginScreen())

    async def on_unmount(self) -> None:
        await self.analyzer.close()

    # ── Navigation ────────────────────────────────────────────────────────

    def show_home(self) -> None:
        """Drop everything above the base screen and show the URL form."""
        while len(self.screen_stack) > 1:
            self.pop_screen()
        self.push_screen(HomeScreen())

    def show_login(self) -> None:
        while len(self.screen_stack) > 1:
            self.pop_screen()
        self.push_screen(LoginScreen())

    def show_profile(self) -> None:
        if self.session.account is None:
            self.show_login()
            return
        reports = self.history.list_for_user(self.session.account.id)
        self.push_screen(ProfileScreen(self.session.account, reports))

    def logout(self) -> None:
        self.accounts.logout(self.session)
        self.show_login()

    # ── Analysis ──────────────────────────────────────────────────────────

    def run_analysis(self, url: str) -> None:
        """Kick off the pipeline: called from HomeScreen."""
        loading = LoadingScreen(url)
        self.push_screen(loading)
        self.analyzer.on_status = loading.show_state

        async def _do_work() -> None:
            try:
                outcome = await self.analyzer.analyze(url, self.session)
            except Exception as e:
                logger.exception("Analysis of %s crashed", url)
                loading.show_failure(f"Unexpected error: {e}")
                return
            if outcome.report is not None:
                self._show_results(outcome.report)
            else:
                loading.show_failure(outcome.error or "Analysis failed")

        self.run_worker(_do_work(), exclusive=True)

    def _show_results(self, report: AnalysisReport) -> None:
        """Replace loading screen with results."""
        self.pop_screen()
        self.push_screen(ResultsScreen(report))
