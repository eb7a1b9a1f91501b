"""
Domain layer - Pure business logic without external dependencies.
"""

from .catalog import CALENDAR_DAYS, DEFAULT_BASE_PRICE, MIN_BASE_PRICE, PropertyCatalog
from .exceptions import (
    BusinessRuleError,
    ConflictError,
    ExchangeError,
    NotFoundError,
    UnavailableDatesError,
    ValidationError,
)
from .models import AvailabilityReport, DateSlot, Reservation

__all__ = [
    "CALENDAR_DAYS",
    "DEFAULT_BASE_PRICE",
    "MIN_BASE_PRICE",
    "PropertyCatalog",
    "AvailabilityReport",
    "DateSlot",
    "Reservation",
    "ExchangeError",
    "ValidationError",
    "ConflictError",
    "UnavailableDatesError",
    "NotFoundError",
    "BusinessRuleError",
]
