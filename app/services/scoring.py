from __future__ import annotations

from typing import Iterable

from app.schemas.ats import CATEGORY_ORDER, SEVERITY_ORDER, Issue

BASELINE_SCORE = 100
MIN_SCORE = 0
MAX_SCORE = 100


def total_deduction(issues: Iterable[Issue]) -> int:
    return sum(issue.score_impact for issue in issues)


def compute_score(issues: Iterable[Issue]) -> int:
    """Deduct each fired issue's weight from the baseline and clamp to [0, 100]."""
    return max(MIN_SCORE, min(MAX_SCORE, BASELINE_SCORE - total_deduction(issues)))


def sort_issues(issues: Iterable[Issue], catalog_index: dict[str, int]) -> list[Issue]:
    """Order by category, then severity (Critical first), then catalog position."""
    fallback = len(catalog_index)
    return sorted(
        issues,
        key=lambda issue: (
            CATEGORY_ORDER.index(issue.category),
            SEVERITY_ORDER.index(issue.severity),
            catalog_index.get(issue.rule_id, fallback),
        ),
    )
