import unittest
import os
import sys
from dataclasses import replace
from datetime import date, datetime, timezone

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from disruption_alerts.exceptions import InvalidReportError
from disruption_alerts.models import (
    Alert,
    AlertStatus,
    ConfidenceSource,
    CredibilityTier,
    DisruptionReport,
    GuidanceGroup,
    GuidanceItem,
    MainType,
    Tone,
)


class TestEnums(unittest.TestCase):

    def test_main_type_parse(self):
        self.assertEqual(MainType.parse("Strike"), MainType.STRIKE)
        self.assertEqual(MainType.parse("flight issues"), MainType.FLIGHT_ISSUES)
        self.assertEqual(MainType.parse("flight"), MainType.FLIGHT_ISSUES)
        self.assertEqual(MainType.parse("volcano"), MainType.OTHER)
        self.assertEqual(MainType.parse(None), MainType.OTHER)

    def test_credibility_parse(self):
        self.assertEqual(CredibilityTier.parse("OFFICIAL"), CredibilityTier.OFFICIAL)
        self.assertEqual(CredibilityTier.parse("blog"), CredibilityTier.OTHER_NEWS)

    def test_tone_parse(self):
        self.assertEqual(Tone.parse("confirmed."), Tone.CONFIRMED)
        self.assertEqual(Tone.parse('"Early"'), Tone.EARLY)
        self.assertIsNone(Tone.parse("maybe"))


class TestDisruptionReport(unittest.TestCase):

    def test_from_dict_camel_case(self):
        report = DisruptionReport.from_dict(
            {
                "city": "London",
                "mainType": "weather",
                "subType": "storm",
                "title": " Storm Bert hits Heathrow ",
                "startDate": "2026-11-20T06:00:00Z",
                "endDate": "2026-11-21",
                "source": "MET",
                "sourceCredibility": "official",
            }
        )
        self.assertEqual(report.title, "Storm Bert hits Heathrow")
        self.assertEqual(report.main_type, MainType.WEATHER)
        self.assertEqual(report.start_date, date(2026, 11, 20))
        self.assertEqual(report.source_credibility, CredibilityTier.OFFICIAL)

    def test_key_is_city_and_type(self):
        report = DisruptionReport(
            city="London",
            main_type=MainType.STRIKE,
            title="Tube strike",
            start_date=date(2026, 11, 20),
            end_date=date(2026, 11, 21),
            source="BBC",
        )
        self.assertEqual(report.key, ("London", MainType.STRIKE))

    def test_from_dict_missing_fields(self):
        with self.assertRaisesRegex(InvalidReportError, "source"):
            DisruptionReport.from_dict(
                {
                    "city": "London",
                    "main_type": "weather",
                    "title": "Storm",
                    "start_date": "2026-11-20",
                    "end_date": "2026-11-21",
                }
            )

    def test_from_dict_bad_date(self):
        with self.assertRaises(InvalidReportError):
            DisruptionReport.from_dict(
                {
                    "city": "London",
                    "main_type": "weather",
                    "title": "Storm",
                    "start_date": "soon",
                    "end_date": "2026-11-21",
                    "source": "MET",
                }
            )


class TestAlert(unittest.TestCase):

    def test_confidence_clamped(self):
        self.assertEqual(Alert(city="London", main_type=MainType.OTHER, title="x", confidence=1.4).confidence, 1.0)
        self.assertEqual(Alert(city="London", main_type=MainType.OTHER, title="x", confidence=-0.2).confidence, 0.0)

    def test_document_round_trip(self):
        alert = Alert(
            city="Edinburgh",
            main_type=MainType.STRIKE,
            title="Ryanair pilot strike",
            start_date=date(2026, 11, 15),
            end_date=date(2026, 11, 16),
            status=AlertStatus.APPROVED,
            confidence=0.8,
            confidence_sources=[
                ConfidenceSource(source="Reuters", credibility_tier=CredibilityTier.MAJOR_NEWS,
                                 confidence_value=0.7, url="https://reuters.example.com")
            ],
            sectors=["Airlines"],
            whats_impacted=[
                GuidanceGroup(
                    category="Airports & Flights",
                    icon="plane",
                    items=(GuidanceItem("Flight cancellations", "Multiple routes impacted"),),
                )
            ],
            action_plan=[GuidanceGroup(category="General Actions", items=(GuidanceItem("Monitor situation"),))],
            origin_city="Edinburgh",
            tone=Tone.CONFIRMED,
            header="Strike could empty 14 rooms",
        )

        doc = alert.to_document()
        self.assertEqual(doc["startDate"], datetime(2026, 11, 15, tzinfo=timezone.utc))
        self.assertEqual(doc["confidenceSources"][0]["type"], "major_news")
        self.assertEqual(doc["tone"], "Confirmed")
        self.assertEqual(doc["originCity"], "Edinburgh")
        self.assertEqual(
            doc["whatsImpacted"][0]["items"],
            [{"title": "Flight cancellations", "description": "Multiple routes impacted"}],
        )

        doc["_id"] = "abc"
        restored = Alert.from_document(doc)
        self.assertEqual(restored, replace(alert, id="abc"))


if __name__ == '__main__':
    unittest.main()
