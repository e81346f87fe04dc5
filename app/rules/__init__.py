from __future__ import annotations

from typing import Any, Mapping

from .catalog import (
    CatalogConfigError,
    Rule,
    RuleCatalog,
    RuleContext,
    RuleSettings,
    build_rule_catalog,
    validate_catalog,
)
from .content import CONTENT_RULES
from .formatting import FORMATTING_RULES
from .keywords import KEYWORD_RULES
from .structure import STRUCTURE_RULES

DEFAULT_RULES: tuple[Rule, ...] = FORMATTING_RULES + CONTENT_RULES + KEYWORD_RULES + STRUCTURE_RULES


def build_default_catalog(config: Mapping[str, Any] | None = None) -> RuleCatalog:
    """Build the standard catalog; with no config the built-in defaults apply."""
    return build_rule_catalog(config or {}, DEFAULT_RULES)


__all__ = [
    "CatalogConfigError",
    "DEFAULT_RULES",
    "Rule",
    "RuleCatalog",
    "RuleContext",
    "RuleSettings",
    "build_default_catalog",
    "build_rule_catalog",
    "validate_catalog",
]
