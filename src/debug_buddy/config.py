"""Runtime configuration: scoring thresholds and environment settings."""

import os
from pathlib import Path
from typing import Callable, Mapping, Optional, TypeVar

from pydantic import BaseModel, Field
from pydantic import ValidationError as SchemaError

from debug_buddy.errors import ConfigurationError

N = TypeVar("N", int, float)


class ScoringConfig(BaseModel):
    """Thresholds used by the line heuristics."""

    max_line_length: int = Field(default=100, ge=1)
    comment_check_min_length: int = Field(default=50, ge=0)
    max_words_without_comment: int = Field(default=8, ge=0)
    penalty_per_issue: int = Field(default=5, ge=0)
    max_reported_issues: int = Field(default=10, ge=0)
    adaptive_recommendations: bool = False


class Settings(BaseModel):
    """Process-level settings, normally read from the environment."""

    data_dir: Path = Field(default_factory=lambda: Path.home() / ".debug-buddy")
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    http_timeout: Optional[float] = None  # None → httpx default
    github_token: Optional[str] = None
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)


def _number(env: Mapping[str, str], name: str, cast: Callable[[str], N]) -> N:
    value = env[name]
    try:
        return cast(value.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from DEBUG_BUDDY_* variables (and GITHUB_TOKEN/GH_TOKEN).

    Raises ConfigurationError when a numeric variable doesn't parse or is
    out of range.
    """
    env = os.environ if environ is None else environ

    scoring: dict[str, object] = {}
    if env.get("DEBUG_BUDDY_MAX_LINE_LENGTH"):
        scoring["max_line_length"] = _number(env, "DEBUG_BUDDY_MAX_LINE_LENGTH", int)
    if env.get("DEBUG_BUDDY_PENALTY_PER_ISSUE"):
        scoring["penalty_per_issue"] = _number(env, "DEBUG_BUDDY_PENALTY_PER_ISSUE", int)

    values: dict[str, object] = {
        "github_token": env.get("GITHUB_TOKEN") or env.get("GH_TOKEN") or None,
        "log_file": env.get("DEBUG_BUDDY_LOG_FILE") or None,
    }
    if env.get("DEBUG_BUDDY_DATA_DIR"):
        values["data_dir"] = Path(env["DEBUG_BUDDY_DATA_DIR"]).expanduser()
    if env.get("DEBUG_BUDDY_LOG_LEVEL"):
        values["log_level"] = env["DEBUG_BUDDY_LOG_LEVEL"].upper()
    if env.get("DEBUG_BUDDY_HTTP_TIMEOUT"):
        values["http_timeout"] = _number(env, "DEBUG_BUDDY_HTTP_TIMEOUT", float)

    try:
        return Settings(scoring=ScoringConfig(**scoring), **values)
    except SchemaError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise ConfigurationError(f"Invalid setting value for {fields}") from exc
