"""Data models for debug-buddy."""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ── Accounts ──────────────────────────────────────────────────────────────

class Account(BaseModel):
    """A registered user with aggregate analysis stats."""

    id: str = Field(default_factory=_new_id)
    username: str
    email: str
    join_date: datetime = Field(default_factory=_utcnow)
    analyses_count: int = Field(default=0, ge=0)
    average_score: float = Field(default=0.0, ge=0.0, le=100.0)
    credential_secret: str = Field(default="", repr=False)

    def days_since_join(self, now: Optional[datetime] = None) -> int:
        """Whole days elapsed since registration."""
        now = now or _utcnow()
        return max(0, (now - self.join_date).days)

    @property
    def level(self) -> str:
        """Experience tier derived from the number of analyses."""
        if self.analyses_count < 5:
            return "Beginner"
        if self.analyses_count < 15:
            return "Experienced"
        if self.analyses_count < 30:
            return "Advanced"
        return "Expert"


class Session:
    """The caller-owned login state: at most one active account."""

    def __init__(self, account: Optional[Account] = None) -> None:
        self.account = account

    @property
    def is_authenticated(self) -> bool:
        return self.account is not None

    @property
    def user_id(self) -> Optional[str]:
        return self.account.id if self.account else None

    def set(self, account: Account) -> None:
        self.account = account

    def clear(self) -> None:
        self.account = None

    def __repr__(self) -> str:
        who = self.account.username if self.account else None
        return f"Session(account={who!r})"


# ── Source resolution ─────────────────────────────────────────────────────

RAW_CONTENT_HOST = "https://raw.githubusercontent.com"


class ResolvedFileRef(BaseModel):
    """Components of a GitHub blob URL."""

    owner: str
    repo: str
    branch: str
    path: str
    file_name: str

    @property
    def raw_url(self) -> str:
        """Raw-content URL serving the file body."""
        return f"{RAW_CONTENT_HOST}/{self.owner}/{self.repo}/{self.branch}/{self.path}"


# ── Analysis results ──────────────────────────────────────────────────────

class SeverityLevel(str, Enum):
    """Severity of a code issue."""

    critical = "critical"
    high = "high"
    medium = "medium"
    low = "low"


class CodeIssue(BaseModel):
    """A single finding on one line of the analysed file."""

    line_number: int = Field(ge=1)
    severity: SeverityLevel = SeverityLevel.low
    message: str
    suggestion: Optional[str] = None
    rule: str = ""

    @property
    def display_severity(self) -> str:
        icons = {
            SeverityLevel.critical: "🔴",
            SeverityLevel.high: "🟠",
            SeverityLevel.medium: "🟡",
            SeverityLevel.low: "🔵",
        }
        return f"{icons[self.severity]} {self.severity.value.upper()}"


class AnalysisReport(BaseModel):
    """Scored result of analysing one file. Immutable once stored."""

    id: str = Field(default_factory=_new_id)
    file_name: str
    issues: list[CodeIssue] = Field(default_factory=list)
    total_issues: int = Field(default=0, ge=0)
    overall_score: int = Field(ge=0, le=100)
    recommendations: list[str] = Field(default_factory=list, max_length=5)
    source_text: Optional[str] = None
    analyzed_at: datetime = Field(default_factory=_utcnow)
    source_url: str

    @property
    def issue_count_by_severity(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for issue in self.issues:
            counts[issue.severity.value] = counts.get(issue.severity.value, 0) + 1
        return counts


# ── Pipeline ──────────────────────────────────────────────────────────────

class PipelineState(str, Enum):
    """Stages of a single analysis request."""

    idle = "idle"
    resolving = "resolving"
    fetching = "fetching"
    scoring = "scoring"
    persisting = "persisting"
    done = "done"
    failed = "failed"


class FailureReason(str, Enum):
    """Where a failed request stopped."""

    parse = "parse"
    fetch = "fetch"


class AnalysisOutcome(BaseModel):
    """Terminal result of a pipeline run."""

    state: PipelineState
    report: Optional[AnalysisReport] = None
    failure: Optional[FailureReason] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.state == PipelineState.done and self.report is not None
