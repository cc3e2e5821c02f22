"""Hotel revenue-at-risk estimates for a disruption.

The calculation is pure and stateless; it is typically run once per
(hotel, alert) pair, in a loop over many hotels.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..constants import (
    BASE_RECOVERY_RATES,
    DISRUPTION_PERCENTAGES,
    HOTEL_CONFIGS,
    INCENTIVE_BONUS,
    MAX_NIGHTS_AT_RISK_SHARE,
    MAX_RECOVERY_RATE,
)
from ..exceptions import UnknownHotelSizeError
from ..models.disruption import MainType
from ..models.hotel import (
    DisruptionWindow,
    HotelImpact,
    HotelProfile,
    ImpactResult,
    NightsSaved,
    PoundsSaved,
    SizeCategory,
)
from ..utils.rounding import round_half_up

logger = logging.getLogger(__name__)

# Used when a main type is missing from an injected disruption table
_DEFAULT_DISRUPTION_PERCENT: float = 0.25


def _format_amount(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:.2f}"


class ImpactCalculator:
    """Compute nights and pounds at risk and the share an incentive can save."""

    def __init__(
        self,
        base_recovery_rates: Mapping[MainType, float] = BASE_RECOVERY_RATES,
        disruption_percentages: Mapping[MainType, float] = DISRUPTION_PERCENTAGES,
        hotel_configs: Mapping[SizeCategory, Tuple[int, float]] = HOTEL_CONFIGS,
        max_recovery_rate: Optional[float] = MAX_RECOVERY_RATE,
    ) -> None:
        self.base_recovery_rates = base_recovery_rates
        self.disruption_percentages = disruption_percentages
        self.hotel_configs = hotel_configs
        # None leaves the recovery rate uncapped
        self.max_recovery_rate = max_recovery_rate

    # ------------------------------------------------------------------
    # Building blocks
    # ------------------------------------------------------------------
    def resolve_hotel(self, hotel: HotelProfile) -> Tuple[SizeCategory, int, float]:
        """Return (size, rooms, occupancy), filling gaps from the size defaults."""
        try:
            size = SizeCategory(hotel.size_category)
        except ValueError as exc:
            raise UnknownHotelSizeError(f"Invalid hotel size: {hotel.size_category}") from exc

        default_rooms, default_occupancy = self.hotel_configs[size]
        # Only missing values take the defaults; an explicit 0 is kept
        rooms = hotel.room_count if hotel.room_count is not None else default_rooms
        occupancy = (
            hotel.occupancy_rate if hotel.occupancy_rate is not None else default_occupancy
        )
        return size, rooms, occupancy

    @staticmethod
    def nights_at_risk(rooms: int, occupancy: float, disruption_percent: float) -> int:
        """``round(rooms * occupancy * percent)``, never above half the rooms."""
        rounded = int(round_half_up(rooms * occupancy * disruption_percent))
        return min(rounded, math.floor(rooms * MAX_NIGHTS_AT_RISK_SHARE))

    def recovery_rate(
        self, main_type: MainType, has_incentive: bool = False, extra_incentive_count: int = 0
    ) -> Tuple[float, float]:
        """Return ``(rate, incentive_bonus)`` for *main_type*."""
        base = self.base_recovery_rates.get(main_type, self.base_recovery_rates[MainType.OTHER])
        bonus = (INCENTIVE_BONUS if has_incentive else 0.0) + extra_incentive_count * INCENTIVE_BONUS
        rate = max(0.0, base + bonus)
        if self.max_recovery_rate is not None:
            rate = min(rate, self.max_recovery_rate)
        return rate, bonus

    @staticmethod
    def nights_saved(nights_at_risk: int, recovery_rate: float) -> NightsSaved:
        exact = round_half_up(nights_at_risk * recovery_rate, 2)
        min_nights = math.floor(exact)
        max_nights = min(min_nights + 1, nights_at_risk)
        return NightsSaved(exact=exact, min=min_nights, max=max_nights)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def calculate_impact(
        self,
        hotel: HotelProfile,
        disruption: DisruptionWindow,
        has_incentive: bool = False,
        extra_incentive_count: int = 0,
    ) -> ImpactResult:
        """Compute the :class:`ImpactResult` for *hotel* under *disruption*.

        An unrecognised size category yields a zeroed result whose ``error``
        carries the reason; nothing is raised.
        """
        try:
            _, rooms, occupancy = self.resolve_hotel(hotel)
        except UnknownHotelSizeError as exc:
            logger.error("Error calculating impact: %s", exc)
            return ImpactResult(error=str(exc))

        main_type = MainType.parse(disruption.main_type)
        disruption_percent = self.disruption_percentages.get(main_type, _DEFAULT_DISRUPTION_PERCENT)

        nights = self.nights_at_risk(rooms, occupancy, disruption_percent)
        rate, bonus = self.recovery_rate(main_type, has_incentive, extra_incentive_count)
        saved = self.nights_saved(nights, rate)
        nightly = hotel.avg_nightly_rate

        return ImpactResult(
            nights_at_risk=nights,
            pounds_at_risk=nights * nightly,
            recovery_rate=rate,
            nights_saved=saved,
            pounds_saved=PoundsSaved(min=saved.min * nightly, max=saved.max * nightly),
            incentive_bonus=bonus,
            disruption_percent=disruption_percent,
        )

    def calculate_bulk_impact(
        self, hotels: Iterable[HotelProfile], disruption: DisruptionWindow
    ) -> List[HotelImpact]:
        """Run :meth:`calculate_impact` for every hotel.

        The first incentive counts as the basic incentive; each further one
        adds to the recovery rate.
        """
        results: List[HotelImpact] = []
        for hotel in hotels:
            count = hotel.incentive_count
            has_incentive = hotel.has_incentive_program or count > 0
            results.append(
                HotelImpact(
                    hotel_id=hotel.hotel_id,
                    hotel_name=hotel.name or "Unknown Hotel",
                    impact=self.calculate_impact(
                        hotel, disruption, has_incentive, max(count - 1, 0)
                    ),
                )
            )
        return results

    @staticmethod
    def impact_text(result: ImpactResult) -> Dict[str, str]:
        """UI strings shown next to an alert."""
        saved_nights = result.nights_saved
        saved_pounds = result.pounds_saved
        return {
            "header": (
                f"{result.nights_at_risk} rooms at risk impacting "
                f"£{_format_amount(result.pounds_at_risk)}"
            ),
            "recovery": (
                f"Tap to save {saved_nights.min} to {saved_nights.max} nights worth "
                f"£{_format_amount(saved_pounds.min)} to £{_format_amount(saved_pounds.max)}"
            ),
        }


__all__ = ["ImpactCalculator"]
