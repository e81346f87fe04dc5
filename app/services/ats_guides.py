from __future__ import annotations

from app.rules import Rule, RuleCatalog
from app.schemas.ats import CATEGORY_ORDER, SEVERITY_ORDER, BestPracticeGroup, CommonIssue, CommonIssueGroup

_PRACTICE_TITLES = {
    "Formatting": "Formatting Best Practices",
    "Content": "Content Optimization",
    "Keywords": "Keyword Strategy",
    "Structure": "Structure Guidelines",
}
_ISSUE_TITLES = {
    "Formatting": "Formatting Problems",
    "Content": "Content Issues",
    "Keywords": "Keyword Optimization Issues",
    "Structure": "ATS Parsing Issues",
}
_EXTRA_PRACTICES = {
    "Formatting": ("Save as PDF or DOCX format",),
    "Keywords": (
        "Use both acronyms and full terms (e.g., AI and Artificial Intelligence)",
        "Integrate keywords naturally into content",
    ),
}
_AVOID = (
    "Photos or images",
    "Tables or multiple columns",
    "Headers and footers",
    "Graphics or charts",
    "Special characters or symbols",
    "Creative or unusual fonts",
    "Text boxes or shapes",
)


def _practices(rules: tuple[Rule, ...], extras: tuple[str, ...]) -> list[str]:
    practices = [rule.practice for rule in rules if rule.practice]
    practices.extend(extras)
    return list(dict.fromkeys(practices))


def best_practices(catalog: RuleCatalog) -> dict[str, BestPracticeGroup]:
    guide = {
        category.lower(): BestPracticeGroup(
            title=_PRACTICE_TITLES[category],
            practices=_practices(catalog.rules_for(category), _EXTRA_PRACTICES.get(category, ())),
        )
        for category in CATEGORY_ORDER
    }
    guide["avoid"] = BestPracticeGroup(title="What to Avoid", practices=list(_AVOID))
    return guide


def _impact(rule: Rule) -> str:
    if rule.impact_note:
        return f"{rule.severity} - {rule.impact_note}"
    return rule.severity


def common_issues(catalog: RuleCatalog) -> dict[str, CommonIssueGroup]:
    index = catalog.catalog_index()
    reference: dict[str, CommonIssueGroup] = {}
    for category in CATEGORY_ORDER:
        rules = sorted(
            catalog.rules_for(category),
            key=lambda rule: (SEVERITY_ORDER.index(rule.severity), index[rule.rule_id]),
        )
        reference[category.lower()] = CommonIssueGroup(
            title=_ISSUE_TITLES[category],
            issues=[
                CommonIssue(rule_id=rule.rule_id, problem=rule.message, solution=rule.solution, impact=_impact(rule))
                for rule in rules
            ],
        )
    return reference
