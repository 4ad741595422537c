"""Line-level heuristics applied to fetched source text."""

import re
from typing import Callable, Optional

from debug_buddy.config import ScoringConfig
from debug_buddy.models import CodeIssue, SeverityLevel

LINE_LENGTH = "line-length"
NULL_HANDLING = "null-handling"
UNCOMMENTED_LOGIC = "uncommented-logic"

# CRLF counts once; lone CR, LF, VT, FF, NEL and the Unicode separators each end a line
_LINE_BREAK = re.compile(r"\r\n|[\n\x0b\x0c\r\x85\u2028\u2029]")
_WORD_SEPARATOR = re.compile(r"[^\S\r\n]")

NULL_HANDLING_OPERATORS = ("??", "!!")
COMMENT_MARKERS = ("//", "/*")

LineRule = Callable[[int, str, ScoringConfig], Optional[CodeIssue]]


def split_lines(content: str) -> list[str]:
    """Split on line terminators, keeping a trailing empty segment."""
    return _LINE_BREAK.split(content)


def check_line_length(number: int, line: str, config: ScoringConfig) -> Optional[CodeIssue]:
    if len(line) <= config.max_line_length:
        return None
    return CodeIssue(
        line_number=number,
        severity=SeverityLevel.low,
        message=f"Line too long ({len(line)} chars)",
        suggestion="Split it into several lines for readability",
        rule=LINE_LENGTH,
    )


def check_null_handling(number: int, line: str, config: ScoringConfig) -> Optional[CodeIssue]:
    if not any(op in line for op in NULL_HANDLING_OPERATORS):
        return None
    return CodeIssue(
        line_number=number,
        severity=SeverityLevel.medium,
        message="Complex null-handling operator",
        suggestion="Use explicit null checks",
        rule=NULL_HANDLING,
    )


def check_uncommented_logic(
    number: int, line: str, config: ScoringConfig
) -> Optional[CodeIssue]:
    trimmed = line.strip()
    if any(marker in trimmed for marker in COMMENT_MARKERS):
        return None
    if len(line) <= config.comment_check_min_length:
        return None
    # Every single whitespace char separates, so runs of spaces add empty fields
    if len(_WORD_SEPARATOR.split(trimmed)) <= config.max_words_without_comment:
        return None
    return CodeIssue(
        line_number=number,
        severity=SeverityLevel.low,
        message="Complex logic without comments",
        suggestion="Add comments explaining the complex logic",
        rule=UNCOMMENTED_LOGIC,
    )


DEFAULT_RULES: tuple[LineRule, ...] = (
    check_line_length,
    check_null_handling,
    check_uncommented_logic,
)


def find_issues(
    content: str,
    config: ScoringConfig,
    rules: tuple[LineRule, ...] = DEFAULT_RULES,
) -> list[CodeIssue]:
    """Run every rule over every line, in line order then rule order."""
    issues: list[CodeIssue] = []
    for number, line in enumerate(split_lines(content), start=1):
        for rule in rules:
            issue = rule(number, line, config)
            if issue is not None:
                issues.append(issue)
    return issues
