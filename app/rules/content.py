from __future__ import annotations

import re

from app.rules.catalog import Rule, RuleContext

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^\+?[\d\s\-()]{10,}$")


def _summary_missing(ctx: RuleContext) -> bool:
    return not ctx.document.summary_text


def _summary_length(ctx: RuleContext) -> bool:
    count = ctx.features.summary_sentence_count
    return not ctx.settings.summary_sentences_min <= count <= ctx.settings.summary_sentences_max


def _description_missing(ctx: RuleContext) -> bool:
    return any(not entry.description.strip() for entry in ctx.document.work_experience)


def _achievements_not_quantified(ctx: RuleContext) -> bool:
    return ctx.features.quantified_achievement_count < ctx.settings.min_quantified_achievements


def _skills_missing(ctx: RuleContext) -> bool:
    return ctx.features.skill_count == 0


def _skills_excessive(ctx: RuleContext) -> bool:
    return ctx.features.skill_count > ctx.settings.max_skills


def _email_invalid(ctx: RuleContext) -> bool:
    return not _EMAIL_RE.match(ctx.document.personal_info.email.strip())


def _phone_invalid(ctx: RuleContext) -> bool:
    return not _PHONE_RE.match(ctx.document.personal_info.phone.strip())


def _linkedin_missing(ctx: RuleContext) -> bool:
    return not (ctx.document.personal_info.linkedin or "").strip()


def _address_incomplete(ctx: RuleContext) -> bool:
    location = ctx.document.personal_info.location
    return not (location.city.strip() and location.country.strip())


CONTENT_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="summary_missing",
        category="Content",
        severity="High",
        message="Professional summary is missing",
        solution="Add a 2-5 sentence professional summary that names your target role and key skills",
        check=_summary_missing,
        practice="Write a 3-4 sentence professional summary",
        impact_note="the first section recruiters and ATS rankers read is empty",
    ),
    Rule(
        rule_id="summary_length",
        category="Content",
        severity="Low",
        message="Professional summary length is outside 2-5 sentences",
        solution="Keep the professional summary between 2 and 5 concise sentences",
        check=_summary_length,
        requires=("summary",),
        practice="Keep the summary concise and focused",
        impact_note="summaries that are too short or too long dilute keywords",
    ),
    Rule(
        rule_id="experience_description_missing",
        category="Content",
        severity="Medium",
        message="One or more work experience entries have no description",
        solution="Describe the scope of every role in one or two sentences",
        check=_description_missing,
        requires=("experience",),
        practice="Describe the scope of every role",
        impact_note="roles without descriptions carry no searchable context",
    ),
    Rule(
        rule_id="achievements_not_quantified",
        category="Content",
        severity="High",
        message="Too few achievements include measurable results",
        solution="Quantify achievements with numbers, percentages or other metrics",
        check=_achievements_not_quantified,
        requires=("experience",),
        practice="Quantify achievements with specific numbers",
        impact_note="unquantified achievements rank lower with screeners",
    ),
    Rule(
        rule_id="skills_missing",
        category="Content",
        severity="Medium",
        message="Skills section is empty",
        solution="List the relevant hard and soft skills for your target role",
        check=_skills_missing,
        practice="Include relevant technical and soft skills",
        impact_note="skill filters cannot match an empty skills list",
    ),
    Rule(
        rule_id="skills_excessive",
        category="Content",
        severity="Low",
        message="Skills list is too long",
        solution="Trim the skills list to the most relevant skills for the role",
        check=_skills_excessive,
        practice="List the most relevant skills instead of every tool you have used",
        impact_note="long skill dumps look like keyword stuffing",
    ),
    Rule(
        rule_id="email_format_invalid",
        category="Content",
        severity="Low",
        message="Email format appears invalid",
        solution="Verify the email address format",
        check=_email_invalid,
        requires=("email",),
        practice="Use a professional email address",
        impact_note="recruiters cannot reach you",
    ),
    Rule(
        rule_id="phone_format_invalid",
        category="Content",
        severity="Low",
        message="Phone number format may not be standard",
        solution="Use a standard phone number format with country code",
        check=_phone_invalid,
        requires=("phone",),
        practice="Use a standard phone number format",
        impact_note="contact fields may not be parsed",
    ),
    Rule(
        rule_id="linkedin_missing",
        category="Content",
        severity="Low",
        message="LinkedIn profile not provided",
        solution="Add your LinkedIn profile URL to the contact details",
        check=_linkedin_missing,
        practice="Include a LinkedIn profile for professional visibility",
        impact_note="recruiters often cross-check LinkedIn profiles",
    ),
    Rule(
        rule_id="address_incomplete",
        category="Content",
        severity="Low",
        message="Incomplete address information",
        solution="Include at least your city and country",
        check=_address_incomplete,
        requires=("location",),
        practice="List your city and country in the contact details",
        impact_note="location filters may exclude the resume",
    ),
)
