"""Analysis pipeline.

Resolves a blob URL, fetches the raw file, scores it, stores the report and
refreshes the account's aggregate stats, in that order.
"""

import logging
from typing import Callable, Optional

from debug_buddy.accounts import AccountStore
from debug_buddy.analysis.scoring import score_content
from debug_buddy.config import ScoringConfig, Settings
from debug_buddy.errors import NotAuthenticatedError
from debug_buddy.fetcher import GitHubFileFetcher, parse_blob_url
from debug_buddy.history import AnalysisStore
from debug_buddy.models import (
    AnalysisOutcome,
    FailureReason,
    PipelineState,
    Session,
)
from debug_buddy.storage import FileStore

logger = logging.getLogger(__name__)

INVALID_URL_MESSAGE = "Invalid GitHub URL format"
FETCH_FAILED_MESSAGE = "Could not load the file contents"

StatusCallback = Callable[[PipelineState, str], None]


class Analyzer:
    """End-to-end single-file analysis for the session's account."""

    def __init__(
        self,
        accounts: AccountStore,
        history: AnalysisStore,
        fetcher: Optional[GitHubFileFetcher] = None,
        scoring: Optional[ScoringConfig] = None,
        on_status: Optional[StatusCallback] = None,
    ) -> None:
        self.accounts = accounts
        self.history = history
        self.scoring = scoring or ScoringConfig()
        self._fetcher = fetcher or GitHubFileFetcher()
        self.on_status = on_status or (lambda _state, _msg: None)
        self.state = PipelineState.idle

    @classmethod
    def from_settings(
        cls, settings: Settings, on_status: Optional[StatusCallback] = None
    ) -> "Analyzer":
        """Wire file-backed stores and an HTTP fetcher from settings."""
        storage = FileStore(settings.data_dir)
        return cls(
            accounts=AccountStore(storage),
            history=AnalysisStore(storage),
            fetcher=GitHubFileFetcher(
                token=settings.github_token, timeout=settings.http_timeout
            ),
            scoring=settings.scoring,
            on_status=on_status,
        )

    # ── Status helper ─────────────────────────────────────────────────────

    def _status(self, state: PipelineState, msg: str) -> None:
        self.state = state
        logger.debug("%s: %s", state.value, msg)
        self.on_status(state, msg)

    def _fail(self, reason: FailureReason, msg: str) -> AnalysisOutcome:
        self._status(PipelineState.failed, msg)
        return AnalysisOutcome(state=PipelineState.failed, failure=reason, error=msg)

    async def close(self) -> None:
        await self._fetcher.close()

    # ── Pipeline ──────────────────────────────────────────────────────────

    async def analyze(self, url: str, session: Session) -> AnalysisOutcome:
        """Run the pipeline for ``url`` on behalf of the logged-in account.

        Bad URLs and failed fetches come back as a failed outcome; only a
        missing login raises.
        """
        if session.account is None:
            raise NotAuthenticatedError("You need to be logged in")
        user_id = session.account.id

        self._status(PipelineState.resolving, "Parsing GitHub URL …")
        ref = parse_blob_url(url)
        if ref is None:
            return self._fail(FailureReason.parse, INVALID_URL_MESSAGE)

        self._status(PipelineState.fetching, f"Downloading {ref.file_name} …")
        content = await self._fetcher.fetch_raw_content(ref)
        if content is None:
            return self._fail(FailureReason.fetch, FETCH_FAILED_MESSAGE)

        self._status(PipelineState.scoring, f"Checking {ref.file_name} …")
        report = score_content(content, ref.file_name, url.strip(), self.scoring)

        self._status(PipelineState.persisting, "Saving results …")
        self.history.save(report, user_id)
        count, average = self.history.summarize(user_id)
        self.accounts.record_analysis_stats(session, count, average)

        self._status(PipelineState.done, f"Score: {report.overall_score}/100")
        logger.info(
            "Analysed %s for %s: score %d, %d issues",
            report.file_name, user_id, report.overall_score, report.total_issues,
        )
        return AnalysisOutcome(state=PipelineState.done, report=report)
