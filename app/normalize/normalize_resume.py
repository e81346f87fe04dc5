from __future__ import annotations

from app.schemas.normalized import ResumeDocument

from .utils import normalize_line

_SECTION_ALIASES = {
    "contact": {"contact", "contact information", "contact details", "personal information", "personal details"},
    "summary": {
        "summary",
        "professional summary",
        "profile",
        "professional profile",
        "objective",
        "career objective",
        "about me",
    },
    "experience": {
        "experience",
        "work experience",
        "professional experience",
        "employment",
        "employment history",
        "work history",
        "career history",
    },
    "education": {"education", "academic background", "education and training"},
    "skills": {"skills", "technical skills", "core skills", "core competencies", "key skills"},
    # Recognized headers that carry no position in the standard order.
    "certifications": {"certifications", "licenses and certifications", "certificates"},
    "projects": {"projects", "personal projects"},
    "languages": {"languages"},
    "awards": {"awards", "honors and awards"},
    "volunteering": {"volunteer experience", "volunteering"},
}


def section_key(header: str) -> str:
    lowered = normalize_line(header).lower().rstrip(":")
    for key, aliases in _SECTION_ALIASES.items():
        if lowered in aliases:
            return key
    return "other"


def collect_text_parts(document: ResumeDocument) -> list[str]:
    parts: list[str] = []
    info = document.personal_info
    parts.extend([info.first_name, info.last_name])

    summary = document.professional_summary
    if summary is not None:
        parts.extend([summary.summary, summary.target_position, *summary.key_skills])

    for entry in document.work_experience:
        parts.extend([entry.title, entry.company, entry.description, *entry.achievements, *entry.technologies])

    for entry in document.education:
        parts.extend([entry.institution, entry.degree, entry.field_of_study, *entry.honors])

    skills = document.skills
    parts.extend([*skills.hard, *skills.soft, *skills.languages])

    for cert in document.certifications:
        parts.extend([cert.name, cert.issuer])

    for project in document.projects:
        parts.extend([project.name, project.description, *project.technologies, *project.achievements])

    return [part.strip() for part in parts if part and part.strip()]


def document_text(document: ResumeDocument) -> str:
    return "\n".join(collect_text_parts(document))


def present_sections(document: ResumeDocument) -> tuple[str, ...]:
    """Standard sections that carry content, in the order the renderer emits them."""
    info = document.personal_info
    sections: list[str] = []
    if any(value.strip() for value in (info.first_name, info.last_name, info.email, info.phone)):
        sections.append("contact")
    if document.summary_text:
        sections.append("summary")
    if document.work_experience:
        sections.append("experience")
    if document.education:
        sections.append("education")
    if document.skills.flat():
        sections.append("skills")
    return tuple(sections)


def rendered_section_order(document: ResumeDocument) -> tuple[str, ...]:
    headers = document.configuration.section_headers
    if not headers:
        return present_sections(document)

    order: list[str] = []
    for header in headers:
        key = section_key(header)
        if key != "other" and key not in order:
            order.append(key)
    return tuple(order)


def standard_section_headers() -> tuple[str, ...]:
    return tuple(sorted(alias for aliases in _SECTION_ALIASES.values() for alias in aliases))
