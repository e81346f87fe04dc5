import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config.scoring import get_scoring_config  # noqa: E402
from app.rules import (  # noqa: E402
    DEFAULT_RULES,
    CatalogConfigError,
    Rule,
    build_default_catalog,
    build_rule_catalog,
)
from app.rules.registry import RuleCatalogRegistry  # noqa: E402
from app.rules.structure import is_standard_header  # noqa: E402
from app.schemas.ats import CATEGORY_ORDER  # noqa: E402


def _config(**overrides):
    config = dict(get_scoring_config())
    config.update(overrides)
    return config


class RuleCatalogTests(unittest.TestCase):
    def test_repository_config_builds_catalog(self):
        catalog = build_default_catalog(get_scoring_config())

        self.assertEqual(catalog.version, 1)
        self.assertEqual(
            dict(catalog.severity_weights),
            {"Critical": 15, "High": 8, "Medium": 4, "Low": 2},
        )
        self.assertEqual(dict(catalog.band_thresholds), {"excellent": 85, "good": 70, "fair": 55})
        self.assertEqual(catalog.settings.min_match_ratio, 0.6)
        self.assertIn("calibri", catalog.settings.allowed_fonts)

    def test_every_category_has_rules(self):
        catalog = build_default_catalog()
        for category in CATEGORY_ORDER:
            self.assertTrue(catalog.rules_for(category), category)

    def test_rule_ids_are_unique(self):
        ids = [rule.rule_id for rule in DEFAULT_RULES]
        self.assertEqual(len(ids), len(set(ids)))

    def test_keyword_rules_require_job_description(self):
        catalog = build_default_catalog()
        for rule in catalog.rules_for("Keywords"):
            self.assertIn("job_description", rule.requires)

    def test_negative_weight_is_rejected(self):
        config = _config(severity_weights={"critical": 15, "high": -1, "medium": 4, "low": 2})
        with self.assertRaises(CatalogConfigError):
            build_default_catalog(config)

    def test_missing_weight_is_rejected(self):
        config = _config(severity_weights={"critical": 15, "high": 8, "medium": 4})
        with self.assertRaises(CatalogConfigError):
            build_default_catalog(config)

    def test_overlapping_bands_are_rejected(self):
        config = _config(bands={"excellent": 70, "good": 70, "fair": 55})
        with self.assertRaises(CatalogConfigError):
            build_default_catalog(config)

    def test_inverted_range_is_rejected(self):
        config = _config(formatting={"font_size": {"min": 14, "max": 10}})
        with self.assertRaises(CatalogConfigError):
            build_default_catalog(config)

    def test_duplicate_rule_ids_are_rejected(self):
        with self.assertRaises(CatalogConfigError):
            build_rule_catalog({}, DEFAULT_RULES + DEFAULT_RULES[:1])

    def test_unknown_prerequisite_is_rejected(self):
        rule = Rule(
            rule_id="custom_rule",
            category="Content",
            severity="Low",
            message="Custom",
            solution="Fix it",
            check=lambda ctx: False,
            requires=("salary",),
        )
        with self.assertRaises(CatalogConfigError):
            build_rule_catalog({}, (rule,))

    def test_keyword_rule_without_job_description_is_rejected(self):
        rule = Rule(
            rule_id="custom_keyword_rule",
            category="Keywords",
            severity="Low",
            message="Custom",
            solution="Fix it",
            check=lambda ctx: True,
        )
        with self.assertRaises(CatalogConfigError):
            build_rule_catalog({}, (rule,))

    def test_standard_header_tolerates_small_variations(self):
        allowed = ("work experience", "education", "skills")
        self.assertTrue(is_standard_header("WORK EXPERIENCE:", allowed, 0.85))
        self.assertTrue(is_standard_header("Work Experiences", allowed, 0.85))
        self.assertFalse(is_standard_header("My Journey", allowed, 0.85))


class RuleCatalogRegistryTests(unittest.TestCase):
    def test_current_is_built_once(self):
        calls = []

        def loader():
            calls.append(1)
            return {}

        registry = RuleCatalogRegistry(loader=loader)
        first = registry.current()
        second = registry.current()

        self.assertIs(first, second)
        self.assertEqual(len(calls), 1)

    def test_reload_swaps_snapshot(self):
        versions = iter([1, 2])
        registry = RuleCatalogRegistry(loader=lambda: {"catalog_version": next(versions)})
        old = registry.current()
        new = registry.reload()

        self.assertEqual(old.version, 1)
        self.assertEqual(new.version, 2)
        self.assertIs(registry.current(), new)

    def test_failed_reload_keeps_previous_snapshot(self):
        configs = iter([{}, {"bands": {"excellent": 50, "good": 60, "fair": 10}}])
        registry = RuleCatalogRegistry(loader=lambda: next(configs))
        old = registry.current()

        with self.assertRaises(CatalogConfigError):
            registry.reload()
        self.assertIs(registry.current(), old)


if __name__ == "__main__":
    unittest.main()
