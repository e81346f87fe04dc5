import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config.scoring import get_scoring_config  # noqa: E402
from app.rules import build_default_catalog  # noqa: E402
from app.schemas.ats import CATEGORY_ORDER, SEVERITY_ORDER  # noqa: E402
from app.services.ats_validation_service import ATSValidationService  # noqa: E402
from resume_fixtures import build_document, clean_document, clean_payload  # noqa: E402


def _poor_payload():
    payload = clean_payload()
    payload["personalInfo"] = {"firstName": "Jo", "lastName": "", "email": "not-an-email", "phone": "12"}
    del payload["professionalSummary"]
    payload["workExperience"] = [
        {
            "title": "Developer",
            "company": "Hooli",
            "startDate": "2012",
            "endDate": "2015",
            "description": "",
            "achievements": ["Did many things"],
        },
        {
            "title": "Developer",
            "company": "Pied Piper",
            "startDate": "2016",
            "endDate": "2019",
            "description": "Wrote software.",
        },
    ]
    payload["education"] = []
    payload["skills"] = []
    payload["configuration"] = {
        "columns": 3,
        "fontFamily": "Comic Sans MS",
        "fontSize": 9,
        "margins": {"top": 0.2},
        "hasImages": True,
        "hasTables": True,
        "hasHeadersFooters": True,
        "fileSizeKb": 5000,
        "sectionHeaders": ["Skills", "My Journey", "Work Experience"],
    }
    return payload


class ATSValidationServiceTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.service = ATSValidationService(build_default_catalog(get_scoring_config()))

    def _rule_ids(self, result):
        return [issue.rule_id for issue in result.issues]

    def test_clean_document_scores_full_marks(self):
        result = self.service.validate(clean_document())

        self.assertEqual(result.score, 100)
        self.assertEqual(result.level, "Excellent")
        self.assertEqual(result.issues, [])
        self.assertIsNone(result.keywords)
        self.assertTrue(result.format_checks.layout_compliant)
        self.assertTrue(result.format_checks.contact_info_complete)
        self.assertEqual(result.catalog_version, 1)
        self.assertEqual(result.benchmarks.fair.min, 55)

    def test_columns_and_images_drop_to_good(self):
        payload = clean_payload()
        payload["configuration"]["columns"] = 2
        payload["configuration"]["hasImages"] = True
        result = self.service.validate(build_document(payload))

        self.assertEqual(self._rule_ids(result), ["multi_column_layout", "embedded_images"])
        self.assertTrue(all(issue.severity == "Critical" for issue in result.issues))
        self.assertEqual(result.score, 70)
        self.assertEqual(result.level, "Good")
        self.assertFalse(result.format_checks.layout_compliant)

    def test_missing_summary_and_skills(self):
        payload = clean_payload()
        del payload["professionalSummary"]
        payload["skills"] = {}
        result = self.service.validate(build_document(payload))

        self.assertEqual(self._rule_ids(result), ["summary_missing", "skills_missing"])
        self.assertEqual([issue.severity for issue in result.issues], ["High", "Medium"])
        self.assertTrue(all(issue.category == "Content" for issue in result.issues))
        self.assertEqual(result.score, 88)
        self.assertEqual(result.level, "Excellent")

    def test_keyword_report_for_partial_match(self):
        result = self.service.validate(clean_document(), "Python, Docker and Kubernetes.")

        self.assertEqual(result.keywords.found, ["python", "docker"])
        self.assertEqual(result.keywords.missing, ["kubernetes"])
        self.assertAlmostEqual(result.keywords.match_ratio, 0.6667)
        self.assertNotIn("keyword_match_low", self._rule_ids(result))
        self.assertEqual(result.score, 100)

    def test_match_ratio_at_minimum_passes(self):
        result = self.service.validate(clean_document(), "Python Docker PostgreSQL Terraform Ansible")

        self.assertEqual(result.keywords.match_ratio, 0.6)
        self.assertNotIn("keyword_match_low", self._rule_ids(result))

    def test_match_ratio_below_minimum_fires(self):
        result = self.service.validate(clean_document(), "Python Docker Terraform Ansible Kafka")

        self.assertEqual(self._rule_ids(result), ["keyword_match_low"])
        self.assertEqual(result.score, 92)
        self.assertEqual(
            result.recommendations[0],
            "Add missing keywords from the job description: terraform, ansible, kafka",
        )

    def test_stop_word_only_description_skips_keyword_rules(self):
        result = self.service.validate(clean_document(), "the and of with")

        self.assertIsNone(result.keywords)
        self.assertFalse(any(issue.category == "Keywords" for issue in result.issues))

    def test_blank_description_is_treated_as_absent(self):
        self.assertEqual(
            self.service.validate(clean_document(), "   "),
            self.service.validate(clean_document()),
        )

    def test_job_title_present_in_document(self):
        result = self.service.validate(
            clean_document(), "We are seeking a Backend Engineer to join our payments team."
        )
        self.assertNotIn("job_title_missing", self._rule_ids(result))

    def test_job_title_missing_from_document(self):
        result = self.service.validate(clean_document(), "Job Title: Data Scientist")
        self.assertIn("job_title_missing", self._rule_ids(result))

    def test_required_terms_missing(self):
        result = self.service.validate(clean_document(), "Required: Python, Kubernetes")

        issue = next(issue for issue in result.issues if issue.rule_id == "required_terms_missing")
        self.assertEqual(issue.severity, "Critical")
        self.assertEqual(issue.score_impact, 15)

    def test_required_terms_present(self):
        result = self.service.validate(clean_document(), "Required: Python, Docker")
        self.assertNotIn("required_terms_missing", self._rule_ids(result))
        self.assertEqual(result.score, 100)

    def test_required_prose_matches_resume_terms(self):
        result = self.service.validate(clean_document(), "Requirements: 3+ years of experience with Python")
        self.assertNotIn("required_terms_missing", self._rule_ids(result))

    def test_required_bullet_block_is_checked(self):
        result = self.service.validate(clean_document(), "Requirements:\n- Python\n- Kubernetes")
        self.assertIn("required_terms_missing", self._rule_ids(result))

    def test_seeking_phrase_without_title_skips_title_rule(self):
        result = self.service.validate(
            clean_document(), "We are seeking talented people with Python experience."
        )
        self.assertNotIn("job_title_missing", self._rule_ids(result))

    def test_misordered_experience_fires_single_structure_issue(self):
        payload = clean_payload()
        experience = payload["workExperience"]
        experience[1], experience[2] = experience[2], experience[1]
        result = self.service.validate(build_document(payload))

        structure = [issue for issue in result.issues if issue.category == "Structure"]
        self.assertEqual([issue.rule_id for issue in structure], ["experience_not_chronological"])
        self.assertEqual(self._rule_ids(result), ["experience_not_chronological"])
        self.assertEqual(result.score, 96)

    def test_score_is_clamped_and_issues_are_ordered(self):
        result = self.service.validate(build_document(_poor_payload()))

        self.assertEqual(result.score, 0)
        self.assertEqual(result.level, "Needs Improvement")
        self.assertGreater(sum(issue.score_impact for issue in result.issues), 100)
        keys = [
            (CATEGORY_ORDER.index(issue.category), SEVERITY_ORDER.index(issue.severity))
            for issue in result.issues
        ]
        self.assertEqual(keys, sorted(keys))
        self.assertFalse(result.format_checks.font_compliant)
        self.assertFalse(result.format_checks.section_headers_valid)
        self.assertFalse(result.format_checks.contact_info_complete)

    def test_each_rule_fires_at_most_once(self):
        result = self.service.validate(build_document(_poor_payload()), "Job Title: Data Scientist")
        ids = self._rule_ids(result)
        self.assertEqual(len(ids), len(set(ids)))

    def test_fixing_an_issue_never_lowers_the_score(self):
        payload = clean_payload()
        payload["configuration"]["columns"] = 2
        payload["configuration"]["hasTables"] = True
        broken = self.service.validate(build_document(payload))

        payload["configuration"]["columns"] = 1
        fixed = self.service.validate(build_document(payload))
        self.assertGreaterEqual(fixed.score, broken.score)

    def test_validation_is_deterministic(self):
        document = build_document(_poor_payload())
        first = self.service.validate(document, "Required: Python, Kubernetes")
        second = self.service.validate(document, "Required: Python, Kubernetes")
        self.assertEqual(first, second)

    def test_validation_logs_start_and_completion(self):
        with self.assertLogs("app.services.ats_validation_service", level="INFO") as logs:
            self.service.validate(clean_document())
        output = "\n".join(logs.output)
        self.assertIn("ats_validation_started", output)
        self.assertIn("ats_validation_completed score=100", output)

    def test_best_practices_cover_every_category(self):
        guide = self.service.best_practices()

        self.assertEqual(list(guide), ["formatting", "content", "keywords", "structure", "avoid"])
        self.assertIn("Use a single-column layout", guide["formatting"].practices)
        self.assertIn("Photos or images", guide["avoid"].practices)

    def test_common_issues_are_sorted_by_severity(self):
        reference = self.service.common_issues()

        formatting = reference["formatting"].issues
        severities = [self.service.catalog.get(item.rule_id).severity for item in formatting]
        self.assertEqual(severities, sorted(severities, key=SEVERITY_ORDER.index))
        self.assertTrue(formatting[0].impact.startswith("Critical - "))


if __name__ == "__main__":
    unittest.main()
