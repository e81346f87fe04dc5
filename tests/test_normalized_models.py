import sys
import unittest
from datetime import date
from pathlib import Path

from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.schemas.normalized import KeywordStats, NormalizedJD, ResumeDocument  # noqa: E402
from resume_fixtures import build_document, clean_payload  # noqa: E402


class NormalizedModelsTests(unittest.TestCase):
    def test_camel_case_payload_populates_document(self):
        document = build_document(clean_payload())

        self.assertEqual(document.personal_info.first_name, "Jane")
        self.assertEqual(document.personal_info.last_name, "Doe")
        self.assertEqual(document.personal_info.linkedin, "https://www.linkedin.com/in/janedoe")
        self.assertEqual(document.personal_info.location.city, "Berlin")
        self.assertEqual(document.education[0].field_of_study, "Computer Science")
        self.assertEqual(document.configuration.columns, 1)
        self.assertEqual(document.configuration.file_size_kb, 180)

    def test_partial_dates_and_current_role(self):
        document = build_document(clean_payload())
        current, previous, _ = document.work_experience

        self.assertTrue(current.is_current)
        self.assertIsNone(current.end_date)
        self.assertEqual(previous.end_date, date(2021, 6, 1))
        self.assertEqual(document.education[0].start_date, date(2012, 1, 1))
        self.assertFalse(previous.is_current)

    def test_present_end_date_means_current(self):
        payload = clean_payload()
        payload["workExperience"][1]["endDate"] = "Present"
        document = build_document(payload)
        self.assertTrue(document.work_experience[1].is_current)

    def test_alternate_field_names_are_accepted(self):
        payload = clean_payload()
        payload["workExperience"][0] = {
            "position": "Staff Engineer",
            "companyName": "Umbrella",
            "startDate": "2022-01",
            "isCurrentRole": True,
        }
        payload["configuration"] = {"includePhoto": True}
        payload["skills"] = ["Python", "python", "Go"]
        document = build_document(payload)

        entry = document.work_experience[0]
        self.assertEqual(entry.title, "Staff Engineer")
        self.assertEqual(entry.company, "Umbrella")
        self.assertTrue(entry.current)
        self.assertTrue(document.configuration.has_images)
        self.assertEqual(document.skills.flat(), ("Python", "Go"))

    def test_missing_required_section_is_rejected(self):
        payload = clean_payload()
        del payload["personalInfo"]
        with self.assertRaises(ValidationError):
            ResumeDocument.model_validate(payload)

    def test_columns_must_be_positive(self):
        payload = clean_payload()
        payload["configuration"]["columns"] = 0
        with self.assertRaises(ValidationError):
            ResumeDocument.model_validate(payload)

    def test_document_is_immutable(self):
        document = build_document(clean_payload())
        with self.assertRaises(ValidationError):
            document.personal_info.email = "other@example.com"

    def test_keyword_stats_reject_inconsistent_ratio(self):
        with self.assertRaises(ValidationError):
            KeywordStats(keywords=("python",), found=(), missing=("python",), match_ratio=1.5)

    def test_job_description_model_defaults(self):
        job = NormalizedJD(text="Python developer")
        self.assertIsNone(job.title)
        self.assertEqual(job.required_terms, ())

    def test_grouped_skills_are_flattened(self):
        payload = clean_payload()
        payload["skills"] = {
            "technical": [
                {"category": "Languages", "items": [{"name": "Python", "proficiencyLevel": "Expert"}]},
                "Docker",
            ],
            "languages": [{"language": "English", "proficiency": "Native"}],
            "soft": ["Leadership"],
        }
        document = build_document(payload)

        self.assertEqual(document.skills.hard, ("Python", "Docker"))
        self.assertEqual(document.skills.languages, ("English",))
        self.assertEqual(document.skills.flat(), ("Python", "Docker", "Leadership"))

    def test_hard_skills_win_over_technical(self):
        payload = clean_payload()
        payload["skills"] = {"hard": ["Go"], "technical": ["Rust"]}
        self.assertEqual(build_document(payload).skills.flat(), ("Go",))


if __name__ == "__main__":
    unittest.main()
