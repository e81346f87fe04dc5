from __future__ import annotations

import re
from datetime import date
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

_YEAR_MONTH_RE = re.compile(r"^\d{4}-\d{1,2}$")
_YEAR_RE = re.compile(r"^\d{4}$")
_OPEN_ENDED_DATES = {"", "present", "current", "now", "ongoing"}


def _coerce_partial_date(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    stripped = value.strip()
    if stripped.lower() in _OPEN_ENDED_DATES:
        return None
    if _YEAR_MONTH_RE.match(stripped):
        year, month = stripped.split("-")
        return f"{year}-{int(month):02d}-01"
    if _YEAR_RE.match(stripped):
        return f"{stripped}-01-01"
    return stripped


class DocumentModel(BaseModel):
    """Immutable input model; accepts camelCase wire names and snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class Location(DocumentModel):
    city: str = ""
    country: str = ""


class PersonalInfo(DocumentModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    location: Location | None = Field(
        default=None,
        validation_alias=AliasChoices("location", "address"),
    )
    linkedin: str | None = Field(
        default=None,
        validation_alias=AliasChoices("linkedIn", "linkedin"),
        serialization_alias="linkedIn",
    )


class ProfessionalSummary(DocumentModel):
    summary: str = ""
    target_position: str = ""
    key_skills: tuple[str, ...] = ()


class WorkExperienceEntry(DocumentModel):
    title: str = Field(default="", validation_alias=AliasChoices("title", "position"))
    company: str = Field(default="", validation_alias=AliasChoices("company", "companyName"))
    location: str = ""
    start_date: date | None = None
    end_date: date | None = None
    current: bool = Field(default=False, validation_alias=AliasChoices("current", "isCurrentRole"))
    description: str = ""
    achievements: tuple[str, ...] = ()
    technologies: tuple[str, ...] = ()

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _normalize_dates(cls, value: Any) -> Any:
        return _coerce_partial_date(value)

    @property
    def is_current(self) -> bool:
        return self.current or self.end_date is None


class EducationEntry(DocumentModel):
    institution: str = ""
    degree: str = ""
    field_of_study: str = Field(
        default="",
        validation_alias=AliasChoices("field", "fieldOfStudy", "field_of_study"),
    )
    start_date: date | None = None
    end_date: date | None = None
    honors: tuple[str, ...] = ()

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _normalize_dates(cls, value: Any) -> Any:
        return _coerce_partial_date(value)


def _skill_names(value: Any) -> Any:
    """Flatten plain names, ``{name}``/``{language}`` entries and ``{items: [...]}`` groups."""
    if not isinstance(value, (list, tuple)):
        return value
    names: list[str] = []
    for item in value:
        if isinstance(item, str):
            names.append(item)
        elif isinstance(item, dict):
            if "items" in item:
                names.extend(_skill_names(item["items"]))
            else:
                name = item.get("name") or item.get("language")
                if isinstance(name, str):
                    names.append(name)
    return names


class Skills(DocumentModel):
    hard: tuple[str, ...] = ()
    soft: tuple[str, ...] = ()
    languages: tuple[str, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _accept_grouped_skills(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        technical = data.pop("technical", None)
        if technical is not None and "hard" not in data:
            data["hard"] = technical
        for key in ("hard", "soft", "languages"):
            if key in data:
                data[key] = _skill_names(data[key])
        return data

    def flat(self) -> tuple[str, ...]:
        """Hard and soft skills, de-duplicated case-insensitively in order."""
        seen: set[str] = set()
        flattened: list[str] = []
        for skill in (*self.hard, *self.soft):
            cleaned = skill.strip()
            key = cleaned.lower()
            if not cleaned or key in seen:
                continue
            seen.add(key)
            flattened.append(cleaned)
        return tuple(flattened)


class Certification(DocumentModel):
    name: str = ""
    issuer: str = Field(default="", validation_alias=AliasChoices("issuer", "issuingOrganization"))
    issue_date: date | None = None

    @field_validator("issue_date", mode="before")
    @classmethod
    def _normalize_issue_date(cls, value: Any) -> Any:
        return _coerce_partial_date(value)


class Project(DocumentModel):
    name: str = ""
    description: str = ""
    technologies: tuple[str, ...] = ()
    achievements: tuple[str, ...] = ()


class Margins(DocumentModel):
    top: float | None = None
    bottom: float | None = None
    left: float | None = None
    right: float | None = None

    def as_tuple(self) -> tuple[float, ...]:
        return tuple(value for value in (self.top, self.bottom, self.left, self.right) if value is not None)


class DocumentConfiguration(DocumentModel):
    """Rendering metadata extracted from the source file by an upstream parser."""

    columns: int | None = Field(default=None, ge=1, le=6)
    font_family: str | None = None
    font_size: float | None = Field(default=None, gt=0)
    margins: Margins | None = None
    has_images: bool = Field(
        default=False,
        validation_alias=AliasChoices("hasImages", "has_images", "includePhoto"),
    )
    has_tables: bool = False
    has_headers_footers: bool = False
    file_size_kb: float | None = Field(default=None, ge=0)
    section_headers: tuple[str, ...] = ()


class ResumeDocument(DocumentModel):
    personal_info: PersonalInfo
    professional_summary: ProfessionalSummary | None = None
    work_experience: tuple[WorkExperienceEntry, ...]
    education: tuple[EducationEntry, ...]
    skills: Skills
    certifications: tuple[Certification, ...] = ()
    projects: tuple[Project, ...] = ()
    configuration: DocumentConfiguration

    @field_validator("skills", mode="before")
    @classmethod
    def _accept_flat_skill_list(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return {"hard": list(value)}
        return value

    @field_validator("certifications", "projects", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @property
    def summary_text(self) -> str:
        if self.professional_summary is None:
            return ""
        return self.professional_summary.summary.strip()
