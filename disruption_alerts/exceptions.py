"""Exception types raised by the disruption_alerts core."""

from __future__ import annotations


class DisruptionAlertsError(Exception):
    """Base class for all errors raised by this package."""


class InvalidReportError(DisruptionAlertsError, ValueError):
    """A disruption payload is missing a required field or has a bad value."""


class UnknownHotelSizeError(DisruptionAlertsError, ValueError):
    """The hotel's size category is not one of micro, small or medium."""


__all__ = ["DisruptionAlertsError", "InvalidReportError", "UnknownHotelSizeError"]
