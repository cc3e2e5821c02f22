import unittest
import os
import sys
from types import MappingProxyType

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from disruption_alerts.models import DisruptionWindow, HotelProfile, MainType, SizeCategory
from disruption_alerts.services.impact import ImpactCalculator


class TestImpactCalculator(unittest.TestCase):

    def setUp(self):
        self.calculator = ImpactCalculator()
        self.hotel = HotelProfile(
            size_category=SizeCategory.MEDIUM,
            room_count=80,
            occupancy_rate=0.70,
            avg_nightly_rate=160,
        )
        self.strike = DisruptionWindow(main_type=MainType.STRIKE)

    def test_medium_hotel_strike_without_incentive(self):
        result = self.calculator.calculate_impact(self.hotel, self.strike)

        self.assertIsNone(result.error)
        self.assertEqual(result.nights_at_risk, 14)
        self.assertEqual(result.pounds_at_risk, 2240)
        self.assertAlmostEqual(result.recovery_rate, 0.70)
        self.assertAlmostEqual(result.nights_saved.exact, 9.8)
        self.assertEqual(result.nights_saved.min, 9)
        self.assertEqual(result.nights_saved.max, 10)
        self.assertEqual(result.pounds_saved.min, 1440)
        self.assertEqual(result.pounds_saved.max, 1600)
        self.assertEqual(result.disruption_percent, 0.25)

    def test_incentives_raise_recovery_rate(self):
        result = self.calculator.calculate_impact(
            self.hotel, self.strike, has_incentive=True, extra_incentive_count=2
        )
        self.assertAlmostEqual(result.recovery_rate, 0.85)
        self.assertAlmostEqual(result.incentive_bonus, 0.15)
        self.assertEqual(result.nights_saved.min, 11)
        self.assertEqual(result.nights_saved.max, 12)

    def test_recovery_rate_capped_at_one(self):
        result = self.calculator.calculate_impact(
            self.hotel, self.strike, has_incentive=True, extra_incentive_count=10
        )
        self.assertEqual(result.recovery_rate, 1.0)
        self.assertEqual(result.nights_saved.min, 14)
        self.assertEqual(result.nights_saved.max, 14)

    def test_uncapped_recovery_still_bounds_max_nights(self):
        calculator = ImpactCalculator(max_recovery_rate=None)
        result = calculator.calculate_impact(
            self.hotel, self.strike, has_incentive=True, extra_incentive_count=10
        )
        self.assertGreater(result.recovery_rate, 1.0)
        self.assertLessEqual(result.nights_saved.max, result.nights_at_risk)

    def test_nights_at_risk_capped_at_half_the_rooms(self):
        calculator = ImpactCalculator(
            disruption_percentages=MappingProxyType({MainType.STRIKE: 0.9})
        )
        hotel = HotelProfile(
            size_category="small", room_count=11, occupancy_rate=1.0, avg_nightly_rate=100
        )
        result = calculator.calculate_impact(hotel, self.strike)
        self.assertEqual(result.nights_at_risk, 5)
        self.assertEqual(result.pounds_at_risk, 500)

    def test_cap_holds_for_many_profiles(self):
        for rooms in (1, 3, 8, 35, 80, 150):
            for occupancy in (0.1, 0.5, 0.99, 1.0):
                hotel = HotelProfile(
                    size_category="medium",
                    room_count=rooms,
                    occupancy_rate=occupancy,
                    avg_nightly_rate=90,
                )
                for main_type in MainType:
                    result = self.calculator.calculate_impact(
                        hotel, DisruptionWindow(main_type), True, 3
                    )
                    self.assertLessEqual(result.nights_at_risk, rooms // 2)
                    self.assertLessEqual(result.nights_saved.max, result.nights_at_risk)

    def test_rounds_half_up(self):
        hotel = HotelProfile(
            size_category="small", room_count=10, occupancy_rate=1.0, avg_nightly_rate=100
        )
        # 10 * 1.0 * 0.25 = 2.5 rounds up to 3
        self.assertEqual(self.calculator.calculate_impact(hotel, self.strike).nights_at_risk, 3)

    def test_size_defaults_fill_missing_rooms_and_occupancy(self):
        hotel = HotelProfile(size_category="small", avg_nightly_rate=120)
        result = self.calculator.calculate_impact(hotel, self.strike)
        # 35 rooms * 0.65 * 0.25 = 5.69
        self.assertEqual(result.nights_at_risk, 6)
        self.assertEqual(result.pounds_at_risk, 720)

    def test_zero_rooms_not_replaced_by_default(self):
        hotel = HotelProfile(
            size_category="medium", room_count=0, occupancy_rate=0.7, avg_nightly_rate=160
        )
        result = self.calculator.calculate_impact(hotel, self.strike)
        self.assertEqual(result.nights_at_risk, 0)
        self.assertEqual(result.pounds_at_risk, 0)
        self.assertEqual(result.nights_saved.max, 0)

    def test_zero_occupancy_not_replaced_by_default(self):
        hotel = HotelProfile(
            size_category="medium", room_count=80, occupancy_rate=0.0, avg_nightly_rate=160
        )
        result = self.calculator.calculate_impact(hotel, self.strike)
        self.assertEqual(result.nights_at_risk, 0)
        self.assertEqual(result.pounds_saved.max, 0)

    def test_unknown_size_category(self):
        hotel = HotelProfile(size_category="large", room_count=200, avg_nightly_rate=150)
        result = self.calculator.calculate_impact(hotel, self.strike)

        self.assertFalse(result.ok)
        self.assertIn("large", result.error)
        self.assertEqual(result.nights_at_risk, 0)
        self.assertEqual(result.pounds_at_risk, 0)
        self.assertEqual(result.recovery_rate, 0)
        self.assertEqual(result.nights_saved.max, 0)
        self.assertEqual(result.pounds_saved.max, 0)

    def test_unknown_main_type_uses_other_rate(self):
        result = self.calculator.calculate_impact(self.hotel, DisruptionWindow("volcano"))
        self.assertAlmostEqual(result.recovery_rate, 0.55)

    def test_bulk_impact_derives_incentives(self):
        hotels = [
            HotelProfile(
                size_category="medium",
                room_count=80,
                occupancy_rate=0.7,
                avg_nightly_rate=160,
                incentive_count=3,
                hotel_id="h1",
                name="Castle View",
            ),
            HotelProfile(size_category="boutique", avg_nightly_rate=200, hotel_id="h2"),
        ]
        results = self.calculator.calculate_bulk_impact(hotels, self.strike)

        self.assertEqual([r.hotel_id for r in results], ["h1", "h2"])
        self.assertEqual(results[0].hotel_name, "Castle View")
        # first incentive is the basic one, two more add 5% each
        self.assertAlmostEqual(results[0].impact.recovery_rate, 0.85)
        self.assertEqual(results[1].hotel_name, "Unknown Hotel")
        self.assertIsNotNone(results[1].impact.error)

    def test_impact_text(self):
        result = self.calculator.calculate_impact(self.hotel, self.strike)
        text = ImpactCalculator.impact_text(result)
        self.assertEqual(text["header"], "14 rooms at risk impacting £2240")
        self.assertEqual(text["recovery"], "Tap to save 9 to 10 nights worth £1440 to £1600")


if __name__ == '__main__':
    unittest.main()
