from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from app.core.config.scoring import lookup_value
from app.features.keyword_matcher import DEFAULT_STOP_WORDS, KeywordMatcher
from app.features.resume_features import ResumeFeatures
from app.schemas.ats import (
    CATEGORY_ORDER,
    SEVERITY_ORDER,
    Category,
    Issue,
    Severity,
)
from app.schemas.normalized import KeywordStats, NormalizedJD, ResumeDocument

DEFAULT_SEVERITY_WEIGHTS: Mapping[Severity, int] = MappingProxyType(
    {"Critical": 15, "High": 8, "Medium": 4, "Low": 2}
)
DEFAULT_BAND_THRESHOLDS: Mapping[str, int] = MappingProxyType(
    {"excellent": 85, "good": 70, "fair": 55}
)


class CatalogConfigError(RuntimeError):
    """Raised while building a rule catalog from an invalid configuration."""


@dataclass(frozen=True)
class RuleSettings:
    allowed_fonts: frozenset[str] = frozenset(
        {"arial", "calibri", "cambria", "garamond", "georgia", "helvetica", "times new roman", "verdana"}
    )
    font_size_min: float = 10
    font_size_max: float = 12
    margin_min: float = 0.5
    margin_max: float = 1.25
    max_file_size_kb: float = 2048
    summary_sentences_min: int = 2
    summary_sentences_max: int = 5
    min_quantified_achievements: int = 3
    max_skills: int = 30
    section_order: tuple[str, ...] = ("contact", "summary", "experience", "education", "skills")
    required_sections: tuple[str, ...] = ("experience", "education")
    pages_min: int = 1
    pages_max: int = 2
    words_per_page: int = 500
    header_match_ratio: float = 0.85
    min_match_ratio: float = 0.6
    max_missing_keywords: int = 10
    stop_words: frozenset[str] = DEFAULT_STOP_WORDS


@dataclass(frozen=True)
class RuleContext:
    document: ResumeDocument
    features: ResumeFeatures
    settings: RuleSettings
    matcher: KeywordMatcher
    job: NormalizedJD | None = None
    keywords: KeywordStats | None = None

    def has(self, prerequisite: str) -> bool:
        check = _PREREQUISITES.get(prerequisite)
        if check is None:
            raise CatalogConfigError(f"Unknown rule prerequisite '{prerequisite}'.")
        return check(self)


_PREREQUISITES: dict[str, Callable[[RuleContext], bool]] = {
    "job_description": lambda ctx: ctx.job is not None and ctx.keywords is not None and ctx.keywords.has_keywords,
    "job_title": lambda ctx: ctx.job is not None and bool(ctx.job.title),
    "required_terms": lambda ctx: ctx.job is not None and bool(ctx.job.required_terms),
    "summary": lambda ctx: bool(ctx.document.summary_text),
    "experience": lambda ctx: bool(ctx.document.work_experience),
    "columns": lambda ctx: ctx.document.configuration.columns is not None,
    "font_family": lambda ctx: bool((ctx.document.configuration.font_family or "").strip()),
    "font_size": lambda ctx: ctx.document.configuration.font_size is not None,
    "margins": lambda ctx: ctx.document.configuration.margins is not None
    and bool(ctx.document.configuration.margins.as_tuple()),
    "file_size": lambda ctx: ctx.document.configuration.file_size_kb is not None,
    "section_headers": lambda ctx: bool(ctx.document.configuration.section_headers),
    "email": lambda ctx: bool(ctx.document.personal_info.email.strip()),
    "phone": lambda ctx: bool(ctx.document.personal_info.phone.strip()),
    "location": lambda ctx: ctx.document.personal_info.location is not None,
}
PREREQUISITES = frozenset(_PREREQUISITES)


@dataclass(frozen=True)
class Rule:
    rule_id: str
    category: Category
    severity: Severity
    message: str
    solution: str
    check: Callable[[RuleContext], bool] = field(compare=False)
    requires: tuple[str, ...] = ()
    practice: str = ""
    impact_note: str = ""

    def applies(self, context: RuleContext) -> bool:
        return all(context.has(prerequisite) for prerequisite in self.requires)


@dataclass(frozen=True)
class RuleCatalog:
    """Immutable snapshot of rules, weights and thresholds shared by every validation."""

    version: int
    rules: tuple[Rule, ...]
    severity_weights: Mapping[Severity, int]
    band_thresholds: Mapping[str, int]
    settings: RuleSettings
    matcher: KeywordMatcher

    def weight(self, severity: Severity) -> int:
        return self.severity_weights[severity]

    def rules_for(self, category: Category) -> tuple[Rule, ...]:
        return tuple(rule for rule in self.rules if rule.category == category)

    def get(self, rule_id: str) -> Rule:
        for rule in self.rules:
            if rule.rule_id == rule_id:
                return rule
        raise KeyError(rule_id)

    def evaluate(self, context: RuleContext) -> list[Issue]:
        """Run every applicable rule once, in catalog order."""
        issues: list[Issue] = []
        for rule in self.rules:
            if not rule.applies(context):
                continue
            if not rule.check(context):
                continue
            issues.append(
                Issue(
                    rule_id=rule.rule_id,
                    category=rule.category,
                    severity=rule.severity,
                    message=rule.message,
                    solution=rule.solution,
                    score_impact=self.weight(rule.severity),
                )
            )
        return issues

    def catalog_index(self) -> dict[str, int]:
        return {rule.rule_id: index for index, rule in enumerate(self.rules)}


def _range(config: Mapping[str, Any], path: str, default_min: float, default_max: float) -> tuple[float, float]:
    return (
        _number(lookup_value(config, f"{path}.min", default_min), f"{path}.min"),
        _number(lookup_value(config, f"{path}.max", default_max), f"{path}.max"),
    )


def _number(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CatalogConfigError(f"Scoring config value '{path}' must be a number, got {value!r}.")
    return value


def _int(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise CatalogConfigError(f"Scoring config value '{path}' must be an integer, got {value!r}.")
    return value


def _strings(value: Any, path: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise CatalogConfigError(f"Scoring config value '{path}' must be a list of strings.")
    return tuple(item.strip().lower() for item in value if item.strip())


def build_rule_settings(config: Mapping[str, Any]) -> RuleSettings:
    defaults = RuleSettings()
    font_min, font_max = _range(config, "formatting.font_size", defaults.font_size_min, defaults.font_size_max)
    margin_min, margin_max = _range(config, "formatting.margins", defaults.margin_min, defaults.margin_max)
    summary_min, summary_max = _range(
        config, "content.summary_sentences", defaults.summary_sentences_min, defaults.summary_sentences_max
    )
    pages_min, pages_max = _range(config, "structure.pages", defaults.pages_min, defaults.pages_max)

    allowed_fonts = _strings(lookup_value(config, "formatting.allowed_fonts"), "formatting.allowed_fonts")
    section_order = _strings(lookup_value(config, "structure.section_order"), "structure.section_order")
    required_sections = _strings(lookup_value(config, "structure.required_sections"), "structure.required_sections")
    stop_words = _strings(lookup_value(config, "keywords.stop_words"), "keywords.stop_words")

    return RuleSettings(
        allowed_fonts=frozenset(allowed_fonts) if allowed_fonts else defaults.allowed_fonts,
        font_size_min=font_min,
        font_size_max=font_max,
        margin_min=margin_min,
        margin_max=margin_max,
        max_file_size_kb=_number(
            lookup_value(config, "formatting.max_file_size_kb", defaults.max_file_size_kb),
            "formatting.max_file_size_kb",
        ),
        summary_sentences_min=int(summary_min),
        summary_sentences_max=int(summary_max),
        min_quantified_achievements=_int(
            lookup_value(config, "content.min_quantified_achievements", defaults.min_quantified_achievements),
            "content.min_quantified_achievements",
        ),
        max_skills=_int(lookup_value(config, "content.max_skills", defaults.max_skills), "content.max_skills"),
        section_order=section_order or defaults.section_order,
        required_sections=required_sections or defaults.required_sections,
        pages_min=int(pages_min),
        pages_max=int(pages_max),
        words_per_page=_int(
            lookup_value(config, "structure.words_per_page", defaults.words_per_page),
            "structure.words_per_page",
        ),
        header_match_ratio=_number(
            lookup_value(config, "structure.header_match_ratio", defaults.header_match_ratio),
            "structure.header_match_ratio",
        ),
        min_match_ratio=_number(
            lookup_value(config, "keywords.min_match_ratio", defaults.min_match_ratio),
            "keywords.min_match_ratio",
        ),
        max_missing_keywords=_int(
            lookup_value(config, "keywords.max_missing_keywords", defaults.max_missing_keywords),
            "keywords.max_missing_keywords",
        ),
        stop_words=frozenset(stop_words) if stop_words else defaults.stop_words,
    )


def _severity_weights(config: Mapping[str, Any]) -> Mapping[Severity, int]:
    raw = lookup_value(config, "severity_weights", None)
    if raw is None:
        return DEFAULT_SEVERITY_WEIGHTS
    if not isinstance(raw, dict):
        raise CatalogConfigError("Scoring config value 'severity_weights' must be a mapping.")

    lowered = {str(key).strip().lower(): value for key, value in raw.items()}
    unknown = set(lowered) - {severity.lower() for severity in SEVERITY_ORDER}
    if unknown:
        raise CatalogConfigError(f"Unknown severities in 'severity_weights': {sorted(unknown)}.")

    weights: dict[Severity, int] = {}
    for severity in SEVERITY_ORDER:
        if severity.lower() not in lowered:
            raise CatalogConfigError(f"Missing weight for severity '{severity}'.")
        weights[severity] = _int(lowered[severity.lower()], f"severity_weights.{severity.lower()}")
    return MappingProxyType(weights)


def _band_thresholds(config: Mapping[str, Any]) -> Mapping[str, int]:
    raw = lookup_value(config, "bands", None)
    if raw is None:
        return DEFAULT_BAND_THRESHOLDS
    if not isinstance(raw, dict):
        raise CatalogConfigError("Scoring config value 'bands' must be a mapping.")
    thresholds = {}
    for name in DEFAULT_BAND_THRESHOLDS:
        if name not in raw:
            raise CatalogConfigError(f"Missing band threshold '{name}'.")
        thresholds[name] = _int(raw[name], f"bands.{name}")
    return MappingProxyType(thresholds)


def validate_catalog(catalog: RuleCatalog) -> None:
    for severity in SEVERITY_ORDER:
        weight = catalog.severity_weights.get(severity)
        if weight is None:
            raise CatalogConfigError(f"Missing weight for severity '{severity}'.")
        if weight < 0:
            raise CatalogConfigError(f"Severity '{severity}' has a negative weight ({weight}).")

    excellent = catalog.band_thresholds["excellent"]
    good = catalog.band_thresholds["good"]
    fair = catalog.band_thresholds["fair"]
    if not 100 >= excellent > good > fair > 0:
        raise CatalogConfigError(
            "Band thresholds must satisfy 100 >= excellent > good > fair > 0, "
            f"got excellent={excellent} good={good} fair={fair}."
        )

    settings = catalog.settings
    ranges = {
        "formatting.font_size": (settings.font_size_min, settings.font_size_max),
        "formatting.margins": (settings.margin_min, settings.margin_max),
        "content.summary_sentences": (settings.summary_sentences_min, settings.summary_sentences_max),
        "structure.pages": (settings.pages_min, settings.pages_max),
    }
    for path, (low, high) in ranges.items():
        if low < 0 or low > high:
            raise CatalogConfigError(f"Invalid range for '{path}': min={low} max={high}.")
    if not 0.0 <= settings.min_match_ratio <= 1.0:
        raise CatalogConfigError("keywords.min_match_ratio must be between 0 and 1.")
    if not 0.0 < settings.header_match_ratio <= 1.0:
        raise CatalogConfigError("structure.header_match_ratio must be in (0, 1].")
    if settings.words_per_page <= 0:
        raise CatalogConfigError("structure.words_per_page must be positive.")
    if settings.max_missing_keywords < 0 or settings.max_skills < 0 or settings.min_quantified_achievements < 0:
        raise CatalogConfigError("Keyword and content limits must be non-negative.")

    seen: set[str] = set()
    for rule in catalog.rules:
        if rule.rule_id in seen:
            raise CatalogConfigError(f"Duplicate rule id '{rule.rule_id}'.")
        seen.add(rule.rule_id)
        if rule.category not in CATEGORY_ORDER:
            raise CatalogConfigError(f"Rule '{rule.rule_id}' has unknown category '{rule.category}'.")
        if rule.severity not in SEVERITY_ORDER:
            raise CatalogConfigError(f"Rule '{rule.rule_id}' has unknown severity '{rule.severity}'.")
        if not rule.message.strip() or not rule.solution.strip():
            raise CatalogConfigError(f"Rule '{rule.rule_id}' needs a message and a solution.")
        unknown = set(rule.requires) - PREREQUISITES
        if unknown:
            raise CatalogConfigError(f"Rule '{rule.rule_id}' requires unknown inputs {sorted(unknown)}.")
        if rule.category == "Keywords" and "job_description" not in rule.requires:
            raise CatalogConfigError(f"Keyword rule '{rule.rule_id}' must require a job description.")


def build_rule_catalog(config: Mapping[str, Any], rules: Iterable[Rule]) -> RuleCatalog:
    config = dict(config)
    settings = build_rule_settings(config)
    catalog = RuleCatalog(
        version=_int(lookup_value(config, "catalog_version", 1), "catalog_version"),
        rules=tuple(rules),
        severity_weights=_severity_weights(config),
        band_thresholds=_band_thresholds(config),
        settings=settings,
        matcher=KeywordMatcher(
            stop_words=settings.stop_words,
            max_missing_keywords=settings.max_missing_keywords,
        ),
    )
    validate_catalog(catalog)
    return catalog
