from __future__ import annotations

from app.rules.catalog import Rule, RuleContext


def _job_title_missing(ctx: RuleContext) -> bool:
    if ctx.job is None or not ctx.job.title:
        return False
    return not ctx.matcher.contains_phrase(ctx.job.title, ctx.features.text)


def _match_ratio_low(ctx: RuleContext) -> bool:
    if ctx.keywords is None:
        return False
    return ctx.keywords.match_ratio < ctx.settings.min_match_ratio


def missing_required_terms(ctx: RuleContext) -> tuple[str, ...]:
    if ctx.job is None:
        return ()
    return tuple(
        term
        for term in ctx.job.required_terms
        if not ctx.matcher.contains_phrase(term, ctx.features.text)
    )


def _required_terms_missing(ctx: RuleContext) -> bool:
    return bool(missing_required_terms(ctx))


KEYWORD_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="job_title_missing",
        category="Keywords",
        severity="High",
        message="Resume does not include the exact job title",
        solution="Include the exact job title from the posting in your summary or headline",
        check=_job_title_missing,
        requires=("job_description", "job_title"),
        practice="Include the job title exactly as posted",
        impact_note="may not appear in filtered search results",
    ),
    Rule(
        rule_id="keyword_match_low",
        category="Keywords",
        severity="High",
        message="Low keyword match with the job description",
        solution="Naturally integrate 60-80% of the job posting keywords",
        check=_match_ratio_low,
        requires=("job_description",),
        practice="Match 60-80% of job posting keywords",
        impact_note="resume may rank lower in search results",
    ),
    Rule(
        rule_id="required_terms_missing",
        category="Keywords",
        severity="Critical",
        message="Required terms from the job description are missing",
        solution="Add every explicitly required skill or qualification you genuinely have, using the posting's exact wording",
        check=_required_terms_missing,
        requires=("job_description", "required_terms"),
        practice="Use exact terminology from the job description for required skills",
        impact_note="knock-out filters reject resumes missing required terms",
    ),
)
