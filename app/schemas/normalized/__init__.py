from .jd import NormalizedJD
from .match import KeywordStats
from .resume import (
    Certification,
    DocumentConfiguration,
    EducationEntry,
    Location,
    Margins,
    PersonalInfo,
    ProfessionalSummary,
    Project,
    ResumeDocument,
    Skills,
    WorkExperienceEntry,
)

__all__ = [
    "Certification",
    "DocumentConfiguration",
    "EducationEntry",
    "KeywordStats",
    "Location",
    "Margins",
    "NormalizedJD",
    "PersonalInfo",
    "ProfessionalSummary",
    "Project",
    "ResumeDocument",
    "Skills",
    "WorkExperienceEntry",
]
