import unittest
import os
import sys
from datetime import date
from unittest.mock import MagicMock

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from disruption_alerts.models import (
    Alert,
    AlertStatus,
    ConfidenceSource,
    CredibilityTier,
    ImpactResult,
    MainType,
    Tone,
)
from disruption_alerts.services.enrichment import LLMEnricher, when_text


def make_completion(content):
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


def make_alert():
    return Alert(
        city="Edinburgh",
        main_type=MainType.STRIKE,
        title="Ryanair pilot strike hits Edinburgh flights",
        start_date=date(2026, 11, 15),
        end_date=date(2026, 11, 16),
        status=AlertStatus.APPROVED,
        confidence=0.8,
        confidence_sources=[
            ConfidenceSource(source="Reuters", credibility_tier=CredibilityTier.MAJOR_NEWS),
            ConfidenceSource(source="Sky", credibility_tier=CredibilityTier.MAJOR_NEWS),
        ],
    )


class TestWhenText(unittest.TestCase):

    def setUp(self):
        self.reference = date(2026, 11, 10)

    def test_today_and_past(self):
        self.assertEqual(when_text(date(2026, 11, 10), self.reference), "today")
        self.assertEqual(when_text(date(2026, 11, 8), self.reference), "today")

    def test_tomorrow(self):
        self.assertEqual(when_text(date(2026, 11, 11), self.reference), "tomorrow")

    def test_within_a_week(self):
        self.assertEqual(when_text(date(2026, 11, 17), self.reference), "this weekend")

    def test_next_week(self):
        self.assertEqual(when_text(date(2026, 11, 24), self.reference), "next week")

    def test_far_future_and_missing(self):
        self.assertEqual(when_text(date(2026, 12, 20), self.reference), "this weekend")
        self.assertEqual(when_text(None, self.reference), "this weekend")


class TestLLMEnricher(unittest.TestCase):

    def setUp(self):
        self.client = MagicMock()
        self.enricher = LLMEnricher(client=self.client, model="test-model")

    def test_generate_tone_parses_answer(self):
        self.client.chat.completions.create.return_value = make_completion('"Confirmed."')

        tone = self.enricher.generate_tone("Rail strike", ["BBC", "Reuters"])

        self.assertEqual(tone, Tone.CONFIRMED)
        kwargs = self.client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs["model"], "test-model")
        self.assertEqual(kwargs["temperature"], 0.0)
        self.assertIn("BBC, Reuters", kwargs["messages"][0]["content"])

    def test_generate_tone_unexpected_answer_uses_default(self):
        self.client.chat.completions.create.return_value = make_completion("Probably ongoing")
        self.assertEqual(self.enricher.generate_tone("Rail strike", []), Tone.DEVELOPING)

    def test_generate_tone_api_failure_uses_default(self):
        self.client.chat.completions.create.side_effect = RuntimeError("timeout")
        self.assertEqual(self.enricher.generate_tone("Rail strike", []), Tone.DEVELOPING)

    def test_generate_header(self):
        self.client.chat.completions.create.return_value = make_completion(
            "Pilot strike could empty 14 rooms this weekend impacting £2,240"
        )

        header = self.enricher.generate_header(MainType.STRIKE, 14, 2240, "this weekend")

        self.assertEqual(header, "Pilot strike could empty 14 rooms this weekend impacting £2,240")
        prompt = self.client.chat.completions.create.call_args.kwargs["messages"][0]["content"]
        self.assertIn("Rooms: 14", prompt)
        self.assertIn("Value: £2,240", prompt)
        self.assertIn("When: this weekend", prompt)

    def test_generate_header_empty_answer_uses_fallback(self):
        self.client.chat.completions.create.return_value = make_completion("")
        header = self.enricher.generate_header(
            MainType.WEATHER, 3, 300, "tomorrow", fallback="Storm warning"
        )
        self.assertEqual(header, "Storm warning")

    def test_enrich_without_impact_uses_title(self):
        self.client.chat.completions.create.return_value = make_completion("Confirmed")
        alert = make_alert()

        result = self.enricher.enrich(alert)

        self.assertEqual(result.tone, Tone.CONFIRMED)
        self.assertEqual(result.header, alert.title)
        self.assertEqual(self.client.chat.completions.create.call_count, 1)

    def test_enrich_with_impact_generates_header(self):
        self.client.chat.completions.create.side_effect = [
            make_completion("Early"),
            make_completion("Strike could empty 14 rooms this weekend impacting £2,240"),
        ]
        impact = ImpactResult(nights_at_risk=14, pounds_at_risk=2240)

        result = self.enricher.enrich(make_alert(), impact, reference=date(2026, 11, 10))

        self.assertEqual(result.tone, Tone.EARLY)
        self.assertEqual(result.header, "Strike could empty 14 rooms this weekend impacting £2,240")

    def test_enrich_with_failed_impact_uses_title(self):
        self.client.chat.completions.create.return_value = make_completion("Developing")
        alert = make_alert()

        result = self.enricher.enrich(alert, ImpactResult(error="Invalid hotel size: large"))

        self.assertEqual(result.header, alert.title)
        self.assertEqual(self.client.chat.completions.create.call_count, 1)


if __name__ == '__main__':
    unittest.main()
