"""Tests for the analyzer pipeline."""

from unittest.mock import AsyncMock

import httpx
import pytest
import respx

from debug_buddy.analyzer import FETCH_FAILED_MESSAGE, INVALID_URL_MESSAGE, Analyzer
from debug_buddy.config import ScoringConfig, Settings
from debug_buddy.errors import NotAuthenticatedError
from debug_buddy.fetcher import GitHubFileFetcher
from debug_buddy.models import FailureReason, PipelineState, Session
from debug_buddy.storage import FileStore

BLOB = "https://github.com/owner/repo/blob/main/src/App.swift"
RAW = "https://raw.githubusercontent.com/owner/repo/main/src/App.swift"


@pytest.fixture
def transitions():
    return []


@pytest.fixture
def analyzer(account_store, analysis_store, transitions):
    return Analyzer(
        accounts=account_store,
        history=analysis_store,
        fetcher=GitHubFileFetcher(),
        on_status=lambda state, _msg: transitions.append(state),
    )


class TestAnalyzerInit:
    def test_defaults(self, account_store, analysis_store):
        analyzer = Analyzer(account_store, analysis_store)
        assert analyzer.scoring == ScoringConfig()
        assert analyzer.state == PipelineState.idle

    def test_default_on_status(self, account_store, analysis_store):
        analyzer = Analyzer(account_store, analysis_store)
        analyzer._status(PipelineState.scoring, "no-op")  # should not raise
        assert analyzer.state == PipelineState.scoring

    def test_from_settings(self, tmp_path):
        settings = Settings(data_dir=tmp_path, github_token="tok", http_timeout=3.0)
        analyzer = Analyzer.from_settings(settings)
        assert isinstance(analyzer.accounts._storage, FileStore)
        assert analyzer._fetcher.token == "tok"
        assert analyzer._fetcher.timeout == 3.0


class TestAnalyze:
    @pytest.mark.asyncio
    @respx.mock
    async def test_success(self, analyzer, logged_in, analysis_store, sample_source, transitions):
        respx.get(RAW).mock(return_value=httpx.Response(200, text=sample_source))

        outcome = await analyzer.analyze(BLOB, logged_in)
        await analyzer.close()

        assert outcome.ok
        assert outcome.report.file_name == "App.swift"
        assert outcome.report.source_url == BLOB
        assert outcome.report.overall_score == 80
        assert transitions == [
            PipelineState.resolving,
            PipelineState.fetching,
            PipelineState.scoring,
            PipelineState.persisting,
            PipelineState.done,
        ]
        assert analysis_store.list_for_user(logged_in.user_id)[0].id == outcome.report.id

    @pytest.mark.asyncio
    async def test_bad_url_fails_while_resolving(self, analyzer, logged_in, transitions):
        outcome = await analyzer.analyze("https://github.com/owner/repo", logged_in)
        assert outcome.state == PipelineState.failed
        assert outcome.failure == FailureReason.parse
        assert outcome.error == INVALID_URL_MESSAGE
        assert outcome.report is None
        assert transitions == [PipelineState.resolving, PipelineState.failed]

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_failure(self, analyzer, logged_in, analysis_store, transitions):
        respx.get(RAW).mock(return_value=httpx.Response(404, text="404: Not Found"))

        outcome = await analyzer.analyze(BLOB, logged_in)
        await analyzer.close()

        assert outcome.failure == FailureReason.fetch
        assert outcome.error == FETCH_FAILED_MESSAGE
        assert transitions[-2:] == [PipelineState.fetching, PipelineState.failed]
        assert analysis_store.list_for_user(logged_in.user_id) == []
        assert logged_in.account.analyses_count == 0

    @pytest.mark.asyncio
    async def test_requires_login(self, analyzer, session):
        with pytest.raises(NotAuthenticatedError):
            await analyzer.analyze(BLOB, session)

    @pytest.mark.asyncio
    async def test_average_recomputed_from_full_history(
        self, account_store, analysis_store, logged_in
    ):
        fetcher = AsyncMock(spec=GitHubFileFetcher)
        fetcher.fetch_raw_content.side_effect = [
            "clean = 1",                       # 100
            "a ?? b\nc ?? d\ne ?? f",          # 85
            "\n".join(["x !! y"] * 12),        # 40
        ]
        analyzer = Analyzer(account_store, analysis_store, fetcher=fetcher)

        scores = []
        for _ in range(3):
            outcome = await analyzer.analyze(BLOB, logged_in)
            scores.append(outcome.report.overall_score)

        assert scores == [100, 85, 40]
        assert logged_in.account.analyses_count == 3
        assert logged_in.account.average_score == pytest.approx(75.0)
        stored = account_store.get(logged_in.user_id)
        assert stored.analyses_count == 3
        assert stored.average_score == pytest.approx(75.0)

    @pytest.mark.asyncio
    async def test_history_is_per_account(self, account_store, analysis_store, logged_in):
        fetcher = AsyncMock(spec=GitHubFileFetcher)
        fetcher.fetch_raw_content.return_value = "x = 1"
        analyzer = Analyzer(account_store, analysis_store, fetcher=fetcher)

        bob = Session()
        account_store.register(bob, "bob", "bob@example.com", "secret1")
        await analyzer.analyze(BLOB, logged_in)
        await analyzer.analyze(BLOB, bob)
        await analyzer.analyze(BLOB, bob)

        assert len(analysis_store.list_for_user(logged_in.user_id)) == 1
        assert bob.account.analyses_count == 2

    @pytest.mark.asyncio
    async def test_uses_configured_thresholds(self, account_store, analysis_store, logged_in):
        fetcher = AsyncMock(spec=GitHubFileFetcher)
        fetcher.fetch_raw_content.return_value = "a ?? b"
        analyzer = Analyzer(
            account_store, analysis_store, fetcher=fetcher,
            scoring=ScoringConfig(penalty_per_issue=30),
        )
        outcome = await analyzer.analyze(BLOB, logged_in)
        assert outcome.report.overall_score == 70
