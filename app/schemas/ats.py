from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.config import settings
from app.schemas.normalized import ResumeDocument

Category = Literal["Formatting", "Content", "Keywords", "Structure"]
Severity = Literal["Critical", "High", "Medium", "Low"]
BandLevel = Literal["Excellent", "Good", "Fair", "Needs Improvement"]

CATEGORY_ORDER: tuple[Category, ...] = ("Formatting", "Content", "Keywords", "Structure")
SEVERITY_ORDER: tuple[Severity, ...] = ("Critical", "High", "Medium", "Low")


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Issue(ApiModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    rule_id: str
    category: Category
    severity: Severity
    message: str
    solution: str
    score_impact: int = Field(ge=0)


class BandRange(ApiModel):
    min: int = Field(ge=0, le=100)
    max: int = Field(ge=0, le=100)


class Benchmarks(ApiModel):
    excellent: BandRange
    good: BandRange
    fair: BandRange
    poor: BandRange


class KeywordReport(ApiModel):
    found: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    match_ratio: float = Field(default=0.0, ge=0.0, le=1.0)


class FormatChecks(ApiModel):
    font_compliant: bool = True
    layout_compliant: bool = True
    section_headers_valid: bool = True
    contact_info_complete: bool = True


class ScoreAnalysis(ApiModel):
    score: int = Field(ge=0, le=100)
    level: BandLevel
    description: str
    recommendations: list[str]
    next_steps: list[str]
    benchmarks: Benchmarks


class ValidationResult(ApiModel):
    score: int = Field(ge=0, le=100)
    level: BandLevel
    description: str
    issues: list[Issue]
    recommendations: list[str]
    next_steps: list[str]
    benchmarks: Benchmarks
    keywords: KeywordReport | None = None
    format_checks: FormatChecks = Field(default_factory=FormatChecks)
    catalog_version: int = 1


class ValidationRequest(ApiModel):
    cv_data: ResumeDocument = Field(validation_alias=AliasChoices("cvData", "document", "cv_data"))
    job_description: str | None = Field(default=None, max_length=settings.max_job_description_chars)


class BestPracticeGroup(ApiModel):
    title: str
    practices: list[str]


class CommonIssue(ApiModel):
    rule_id: str
    problem: str
    solution: str
    impact: str


class CommonIssueGroup(ApiModel):
    title: str
    issues: list[CommonIssue]
