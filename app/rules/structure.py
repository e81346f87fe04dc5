from __future__ import annotations

from difflib import SequenceMatcher

from app.normalize.normalize_resume import present_sections, standard_section_headers
from app.normalize.utils import normalize_line
from app.rules.catalog import Rule, RuleContext


def _contact_incomplete(ctx: RuleContext) -> bool:
    info = ctx.document.personal_info
    return any(not value.strip() for value in (info.first_name, info.last_name, info.email, info.phone))


def _required_sections_missing(ctx: RuleContext) -> bool:
    present = set(present_sections(ctx.document))
    return any(section not in present for section in ctx.settings.required_sections)


def _section_order(ctx: RuleContext) -> bool:
    expected = ctx.settings.section_order
    positions = [expected.index(section) for section in ctx.features.section_order if section in expected]
    return any(earlier > later for earlier, later in zip(positions, positions[1:]))


def is_standard_header(header: str, allowed: tuple[str, ...], min_ratio: float) -> bool:
    normalized = normalize_line(header).lower().rstrip(":").strip()
    if not normalized:
        return False
    if normalized in allowed:
        return True
    return any(SequenceMatcher(None, normalized, candidate).ratio() >= min_ratio for candidate in allowed)


def _headers_non_standard(ctx: RuleContext) -> bool:
    allowed = standard_section_headers()
    return any(
        not is_standard_header(header, allowed, ctx.settings.header_match_ratio)
        for header in ctx.document.configuration.section_headers
    )


def _page_count(ctx: RuleContext) -> bool:
    pages = ctx.features.estimated_pages
    return not ctx.settings.pages_min <= pages <= ctx.settings.pages_max


def _not_chronological(ctx: RuleContext) -> bool:
    return not ctx.features.chronological


STRUCTURE_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="contact_info_incomplete",
        category="Structure",
        severity="Critical",
        message="Missing required contact information",
        solution="Provide first name, last name, email and phone number",
        check=_contact_incomplete,
        practice="Start with complete contact information",
        impact_note="recruiters cannot identify or reach the candidate",
    ),
    Rule(
        rule_id="required_sections_missing",
        category="Structure",
        severity="High",
        message="Work experience or education section is missing",
        solution="Add work experience and education sections with at least one entry each",
        check=_required_sections_missing,
        practice="List work experience and education details",
        impact_note="core screening fields stay empty",
    ),
    Rule(
        rule_id="section_order",
        category="Structure",
        severity="Medium",
        message="Sections are not in the standard order",
        solution="Order sections as contact, summary, experience, education, skills",
        check=_section_order,
        practice="Follow contact, summary, experience, education, skills order",
        impact_note="sections may not be properly categorized",
    ),
    Rule(
        rule_id="section_headers_non_standard",
        category="Structure",
        severity="Low",
        message="Non-standard section headers",
        solution='Use conventional headers like "WORK EXPERIENCE", "EDUCATION" and "SKILLS"',
        check=_headers_non_standard,
        requires=("section_headers",),
        practice="Use standard section headers (WORK EXPERIENCE, EDUCATION, SKILLS)",
        impact_note="sections may not be properly categorized",
    ),
    Rule(
        rule_id="page_count_out_of_range",
        category="Structure",
        severity="Medium",
        message="Estimated length is outside 1-2 pages",
        solution="Keep the resume between one and two pages",
        check=_page_count,
        practice="Keep the resume to 1-2 pages maximum",
        impact_note="overly long resumes bury relevant experience",
    ),
    Rule(
        rule_id="experience_not_chronological",
        category="Structure",
        severity="Medium",
        message="Work experience is not in reverse chronological order",
        solution="List current and most recent positions first",
        check=_not_chronological,
        requires=("experience",),
        practice="List experience in reverse chronological order",
        impact_note="employment timelines may be misread",
    ),
)
