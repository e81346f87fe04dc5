from __future__ import annotations

from app.rules.catalog import Rule, RuleContext


def _multi_column(ctx: RuleContext) -> bool:
    return (ctx.document.configuration.columns or 1) > 1


def _has_images(ctx: RuleContext) -> bool:
    return ctx.document.configuration.has_images


def _has_tables(ctx: RuleContext) -> bool:
    return ctx.document.configuration.has_tables


def _has_headers_footers(ctx: RuleContext) -> bool:
    return ctx.document.configuration.has_headers_footers


def _non_standard_font(ctx: RuleContext) -> bool:
    font = (ctx.document.configuration.font_family or "").strip().lower()
    return font not in ctx.settings.allowed_fonts


def _font_size_out_of_range(ctx: RuleContext) -> bool:
    size = ctx.document.configuration.font_size
    return size is not None and not ctx.settings.font_size_min <= size <= ctx.settings.font_size_max


def _margins_out_of_range(ctx: RuleContext) -> bool:
    margins = ctx.document.configuration.margins
    if margins is None:
        return False
    return any(
        not ctx.settings.margin_min <= value <= ctx.settings.margin_max
        for value in margins.as_tuple()
    )


def _file_too_large(ctx: RuleContext) -> bool:
    size = ctx.document.configuration.file_size_kb
    return size is not None and size > ctx.settings.max_file_size_kb


FORMATTING_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="multi_column_layout",
        category="Formatting",
        severity="Critical",
        message="Multi-column layout detected",
        solution="Use a single-column layout so ATS parsers read sections in order",
        check=_multi_column,
        requires=("columns",),
        practice="Use a single-column layout",
        impact_note="columns are read across and sections get merged",
    ),
    Rule(
        rule_id="embedded_images",
        category="Formatting",
        severity="Critical",
        message="Images or photos are not ATS-compatible",
        solution="Remove photos and images; ATS systems cannot read content inside them",
        check=_has_images,
        practice="Never include photos, logos or graphics",
        impact_note="content becomes invisible to ATS",
    ),
    Rule(
        rule_id="tables_present",
        category="Formatting",
        severity="High",
        message="Tables detected in the document",
        solution="Replace tables with plain text sections and bullet points",
        check=_has_tables,
        practice="Avoid tables and text boxes",
        impact_note="information may be misplaced or lost",
    ),
    Rule(
        rule_id="headers_footers_present",
        category="Formatting",
        severity="High",
        message="Content placed in headers or footers",
        solution="Move contact details and other content out of headers and footers into the document body",
        check=_has_headers_footers,
        practice="Keep all content out of headers and footers",
        impact_note="many parsers skip header and footer content",
    ),
    Rule(
        rule_id="non_standard_font",
        category="Formatting",
        severity="Medium",
        message="Font family is not a standard ATS-safe font",
        solution="Use a standard font such as Arial, Calibri or Times New Roman",
        check=_non_standard_font,
        requires=("font_family",),
        practice="Stick to standard fonts (Arial, Calibri, Times New Roman)",
        impact_note="unusual fonts can be decoded as garbled characters",
    ),
    Rule(
        rule_id="font_size_out_of_range",
        category="Formatting",
        severity="Low",
        message="Body font size is outside the recommended range",
        solution="Use a body font size between 10 and 12 points",
        check=_font_size_out_of_range,
        requires=("font_size",),
        practice="Use 10-12pt font size for body text",
        impact_note="affects readability and parsing accuracy",
    ),
    Rule(
        rule_id="margins_out_of_range",
        category="Formatting",
        severity="Low",
        message="Page margins are outside the recommended range",
        solution="Set margins between 0.5 and 1.25 inches on all sides",
        check=_margins_out_of_range,
        requires=("margins",),
        practice="Keep margins between 0.5 and 1.25 inches",
        impact_note="cramped or oversized margins can break text extraction",
    ),
    Rule(
        rule_id="file_size_exceeded",
        category="Formatting",
        severity="Medium",
        message="File size exceeds the upload limit of common ATS platforms",
        solution="Reduce the file size below 2MB by removing embedded objects and fonts",
        check=_file_too_large,
        requires=("file_size",),
        practice="Keep file size under 2MB",
        impact_note="oversized files may be rejected at upload",
    ),
)
