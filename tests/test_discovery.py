import unittest
import os
import sys
import json
from datetime import date
from unittest.mock import MagicMock, patch

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from disruption_alerts.exceptions import InvalidReportError
from disruption_alerts.models import CredibilityTier, MainType
from disruption_alerts.services.discovery import scout_disruptions, validate_scout_report

TODAY = date(2026, 11, 10)
HORIZON_END = date(2026, 12, 10)


def make_payload(**overrides):
    payload = {
        "city": "Edinburgh",
        "main_type": "strike",
        "sub_type": "airline_pilot",
        "title": "Ryanair Rome-Edinburgh pilot strike",
        "start_date": "2026-11-17",
        "end_date": "2026-11-18",
        "source": "Reuters",
        "url": "https://www.reuters.com/ryanair-pilot-strike",
        "summary": "All Ryanair flights from Rome to Edinburgh cancelled.",
    }
    payload.update(overrides)
    return payload


def make_completion(content):
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


class TestValidateScoutReport(unittest.TestCase):

    def validate(self, payload, known_titles=()):
        return validate_scout_report(payload, "Edinburgh", known_titles, TODAY, HORIZON_END)

    def test_valid_payload(self):
        report = self.validate(make_payload())
        self.assertEqual(report.main_type, MainType.STRIKE)
        self.assertEqual(report.start_date, date(2026, 11, 17))
        self.assertEqual(report.source_credibility, CredibilityTier.OTHER_NEWS)
        self.assertEqual(report.sub_type, "airline_pilot")

    def test_missing_field(self):
        with self.assertRaisesRegex(InvalidReportError, "summary"):
            self.validate(make_payload(summary=""))

    def test_city_mismatch(self):
        with self.assertRaisesRegex(InvalidReportError, "does not match"):
            self.validate(make_payload(city="Glasgow"))

    def test_duplicate_title(self):
        with self.assertRaisesRegex(InvalidReportError, "already exists"):
            self.validate(make_payload(), known_titles=["Ryanair Rome-Edinburgh pilot strike"])

    def test_start_in_past(self):
        with self.assertRaisesRegex(InvalidReportError, "in the past"):
            self.validate(make_payload(start_date="2026-11-09"))

    def test_start_beyond_horizon(self):
        with self.assertRaises(InvalidReportError):
            self.validate(make_payload(start_date="2026-12-11", end_date="2026-12-12"))

    def test_end_before_start(self):
        with self.assertRaisesRegex(InvalidReportError, "before start_date"):
            self.validate(make_payload(start_date="2026-11-20", end_date="2026-11-19"))

    def test_end_beyond_horizon(self):
        with self.assertRaises(InvalidReportError):
            self.validate(make_payload(start_date="2026-12-09", end_date="2026-12-12"))

    def test_unparseable_date(self):
        with self.assertRaises(InvalidReportError):
            self.validate(make_payload(start_date="next friday"))

    def test_unknown_main_type_becomes_other(self):
        report = self.validate(make_payload(main_type="volcano"))
        self.assertEqual(report.main_type, MainType.OTHER)


class TestScoutDisruptions(unittest.TestCase):

    def setUp(self):
        patcher = patch('disruption_alerts.services.discovery._today', return_value=TODAY)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = MagicMock()

    def test_collects_valid_reports_and_skips_failures(self):
        self.client.chat.completions.create.side_effect = [
            make_completion(json.dumps(make_payload())),
            RuntimeError("rate limited"),
            make_completion("not json at all"),
            make_completion(
                "```json\n"
                + json.dumps(make_payload(title="ScotRail drivers strike", sub_type="rail"))
                + "\n```"
            ),
        ]

        reports = scout_disruptions("Edinburgh", max_reports=4, client=self.client)

        self.assertEqual(
            [r.title for r in reports],
            ["Ryanair Rome-Edinburgh pilot strike", "ScotRail drivers strike"],
        )
        self.assertEqual(self.client.chat.completions.create.call_count, 4)

    def test_found_titles_excluded_from_later_prompts(self):
        self.client.chat.completions.create.side_effect = [
            make_completion(json.dumps(make_payload())),
            make_completion(json.dumps(make_payload())),
        ]

        reports = scout_disruptions(
            "Edinburgh", existing_titles=["Edinburgh Airport fog"], max_reports=2, client=self.client
        )

        # the repeated title is rejected on the second attempt
        self.assertEqual(len(reports), 1)
        second_prompt = self.client.chat.completions.create.call_args_list[1].kwargs["messages"][0][
            "content"
        ]
        self.assertIn('- "Edinburgh Airport fog"', second_prompt)
        self.assertIn('- "Ryanair Rome-Edinburgh pilot strike"', second_prompt)

    def test_empty_content_skipped(self):
        self.client.chat.completions.create.return_value = make_completion(None)
        self.assertEqual(scout_disruptions("Edinburgh", max_reports=2, client=self.client), [])


if __name__ == '__main__':
    unittest.main()
