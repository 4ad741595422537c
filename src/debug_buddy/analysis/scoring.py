"""Turns rule findings into a scored AnalysisReport."""

from typing import Optional

from debug_buddy.analysis.rules import (
    LINE_LENGTH,
    NULL_HANDLING,
    UNCOMMENTED_LOGIC,
    find_issues,
)
from debug_buddy.config import ScoringConfig
from debug_buddy.models import AnalysisReport, CodeIssue

DEFAULT_RECOMMENDATIONS: tuple[str, ...] = (
    "Add comprehensive documentation",
    "Implement error handling",
    "Follow best practices for the language",
    "Add comments for complex logic",
    "Optimize code performance",
)

_RULE_RECOMMENDATIONS: dict[str, str] = {
    LINE_LENGTH: "Keep lines short; wrap long expressions and call chains",
    NULL_HANDLING: "Replace chained null-handling operators with explicit checks",
    UNCOMMENTED_LOGIC: "Add comments for complex logic",
}


def compute_score(issue_count: int, penalty_per_issue: int = 5) -> int:
    """100 minus the penalty per issue, clamped at 0."""
    return max(0, 100 - penalty_per_issue * issue_count)


def build_recommendations(issues: list[CodeIssue], config: ScoringConfig) -> list[str]:
    """The fixed generic list, or (adaptive mode) one entry per rule that fired."""
    if not config.adaptive_recommendations:
        return list(DEFAULT_RECOMMENDATIONS)

    recommendations: list[str] = []
    for issue in issues:
        text = _RULE_RECOMMENDATIONS.get(issue.rule)
        if text and text not in recommendations:
            recommendations.append(text)
    # Pad with generic advice, never past five entries
    for text in DEFAULT_RECOMMENDATIONS:
        if len(recommendations) >= len(DEFAULT_RECOMMENDATIONS):
            break
        if text not in recommendations:
            recommendations.append(text)
    return recommendations


def score_content(
    content: str,
    file_name: str,
    source_url: str,
    config: Optional[ScoringConfig] = None,
) -> AnalysisReport:
    """Score ``content``; the score counts every issue, the report keeps the first few."""
    config = config or ScoringConfig()
    issues = find_issues(content, config)
    return AnalysisReport(
        file_name=file_name,
        issues=issues[: config.max_reported_issues],
        total_issues=len(issues),
        overall_score=compute_score(len(issues), config.penalty_per_issue),
        recommendations=build_recommendations(issues, config),
        source_text=content,
        source_url=source_url,
    )
