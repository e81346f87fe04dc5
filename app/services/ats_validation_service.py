from __future__ import annotations

import logging

from app.features.resume_features import build_resume_features
from app.normalize.normalize_jd import normalize_jd
from app.rules import RuleCatalog, RuleContext
from app.schemas.ats import (
    BestPracticeGroup,
    CommonIssueGroup,
    FormatChecks,
    Issue,
    KeywordReport,
    ScoreAnalysis,
    ValidationResult,
)
from app.schemas.normalized import KeywordStats, ResumeDocument
from app.services import ats_guides
from app.services.score_analyzer import ScoreAnalyzer
from app.services.scoring import compute_score, sort_issues

logger = logging.getLogger(__name__)

_FONT_RULES = frozenset({"non_standard_font", "font_size_out_of_range"})
_LAYOUT_RULES = frozenset(
    {"multi_column_layout", "embedded_images", "tables_present", "headers_footers_present", "margins_out_of_range"}
)
_SECTION_RULES = frozenset({"section_headers_non_standard", "section_order", "required_sections_missing"})
_CONTACT_RULES = frozenset({"contact_info_incomplete"})


def _format_checks(issues: list[Issue]) -> FormatChecks:
    fired = {issue.rule_id for issue in issues}
    return FormatChecks(
        font_compliant=not fired & _FONT_RULES,
        layout_compliant=not fired & _LAYOUT_RULES,
        section_headers_valid=not fired & _SECTION_RULES,
        contact_info_complete=not fired & _CONTACT_RULES,
    )


def _keyword_report(stats: KeywordStats | None) -> KeywordReport | None:
    if stats is None or not stats.has_keywords:
        return None
    return KeywordReport(
        found=list(stats.found),
        missing=list(stats.missing),
        match_ratio=round(stats.match_ratio, 4),
    )


class ATSValidationService:
    """Stateless validator; safe to share across threads once constructed."""

    def __init__(self, catalog: RuleCatalog):
        self._catalog = catalog
        self._analyzer = ScoreAnalyzer(catalog.band_thresholds)

    @property
    def catalog(self) -> RuleCatalog:
        return self._catalog

    @property
    def analyzer(self) -> ScoreAnalyzer:
        return self._analyzer

    def validate(self, document: ResumeDocument, job_description: str | None = None) -> ValidationResult:
        catalog = self._catalog
        logger.info(
            "ats_validation_started has_job_description=%s experience_entries=%s catalog_version=%s",
            bool(job_description and job_description.strip()),
            len(document.work_experience),
            catalog.version,
        )

        features = build_resume_features(document, words_per_page=catalog.settings.words_per_page)
        job = normalize_jd(job_description)
        keyword_stats = catalog.matcher.match(job.text, features.text) if job is not None else None

        context = RuleContext(
            document=document,
            features=features,
            settings=catalog.settings,
            matcher=catalog.matcher,
            job=job,
            keywords=keyword_stats,
        )
        issues = sort_issues(catalog.evaluate(context), catalog.catalog_index())
        score = compute_score(issues)
        band = self._analyzer.band_for(score)
        missing = keyword_stats.missing if keyword_stats is not None else ()

        result = ValidationResult(
            score=score,
            level=band.level,
            description=band.description,
            issues=issues,
            recommendations=self._analyzer.recommendations(score, issues, missing),
            next_steps=list(band.next_steps),
            benchmarks=self._analyzer.benchmarks(),
            keywords=_keyword_report(keyword_stats),
            format_checks=_format_checks(issues),
            catalog_version=catalog.version,
        )

        logger.info(
            "ats_validation_completed score=%s level=%s issues=%s keyword_ratio=%s",
            score,
            band.level,
            len(issues),
            None if result.keywords is None else result.keywords.match_ratio,
        )
        return result

    def analyze_score(self, score: int) -> ScoreAnalysis:
        return self._analyzer.analyze(score)

    def best_practices(self) -> dict[str, BestPracticeGroup]:
        return ats_guides.best_practices(self._catalog)

    def common_issues(self) -> dict[str, CommonIssueGroup]:
        return ats_guides.common_issues(self._catalog)
