"""
Domain-specific exception hierarchy for the property exchange.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import AvailabilityReport


class ExchangeError(Exception):
    """Base class for all application-level errors."""


class ValidationError(ExchangeError):
    """Raised for blank or duplicate names, out-of-range days and prices below the floor."""


class ConflictError(ExchangeError):
    """Raised when the current state blocks an operation (existing day, booked day, reservations)."""


class UnavailableDatesError(ConflictError):
    """Raised when a requested stay covers missing or already booked days."""

    def __init__(self, report: "AvailabilityReport"):
        self.report = report
        super().__init__(
            f"Days {report.describe_failures()} are not available "
            f"for a stay from day {report.check_in} to day {report.check_out}."
        )


class NotFoundError(ExchangeError):
    """Raised when a property or date cannot be found."""


class BusinessRuleError(ExchangeError):
    """Raised for an invalid check-in/check-out combination."""
