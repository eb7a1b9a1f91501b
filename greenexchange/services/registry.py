"""
Application service owning every property listing in a run.

The registry enforces case-insensitive name uniqueness and the booking
window rules, then delegates inventory and booking work to the
domain-level ``PropertyCatalog``. The CLI talks only to this layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from ..domain.catalog import CALENDAR_DAYS, DEFAULT_BASE_PRICE, PropertyCatalog
from ..domain.exceptions import (
    BusinessRuleError,
    ConflictError,
    NotFoundError,
    UnavailableDatesError,
    ValidationError,
)
from ..domain.models import AvailabilityReport, DateSlot, Reservation

logger = logging.getLogger(__name__)


def _name_key(name: str) -> str:
    return (name or "").strip().casefold()


@dataclass(frozen=True)
class BookingPreview:
    """A priced but unconfirmed reservation. Discarding it leaves no trace."""
    property_name: str
    catalog: PropertyCatalog
    reservation: Reservation


class ExchangeRegistry:
    """
    Collection of property catalogs keyed by case-normalized name.
    """

    def __init__(self, default_base_price: float = DEFAULT_BASE_PRICE) -> None:
        self.default_base_price = default_base_price
        self._properties: Dict[str, PropertyCatalog] = {}

    def __len__(self) -> int:
        return len(self._properties)

    def __iter__(self) -> Iterator[PropertyCatalog]:
        return iter(list(self._properties.values()))

    def list_properties(self) -> List[PropertyCatalog]:
        return list(self._properties.values())

    # -- lookup ----------------------------------------------------------

    def find_property(self, name: str) -> Optional[PropertyCatalog]:
        """Case-insensitive lookup. Returns None if absent."""
        return self._properties.get(_name_key(name))

    def get_property(self, name: str) -> PropertyCatalog:
        """
        Case-insensitive lookup.

        Raises:
            NotFoundError: If no property has this name
        """
        catalog = self.find_property(name)
        if catalog is None:
            raise NotFoundError(f"Property '{(name or '').strip()}' not found.")
        return catalog

    # -- lifecycle -------------------------------------------------------

    def create_property(
        self,
        name: str,
        days: Sequence[int] = (),
        base_price: Optional[float] = None,
    ) -> PropertyCatalog:
        """
        Create a listing and add the requested days.

        Duplicate days within the request are dropped before they reach the
        catalog. All checks run before the property is registered.

        Raises:
            ValidationError: Blank or taken name, day outside 1..30, price below floor
        """
        key = _name_key(name)
        if not key:
            raise ValidationError("Property name cannot be blank.")
        if key in self._properties:
            raise ValidationError(f"Property name '{name.strip()}' is already in use.")

        invalid_days = sorted({day for day in days if not 1 <= day <= CALENDAR_DAYS})
        if invalid_days:
            raise ValidationError(
                f"Invalid day number(s) {invalid_days}. Must be 1-{CALENDAR_DAYS}."
            )

        unique_days: List[int] = []
        for day in days:
            if day in unique_days:
                logger.warning("Ignoring duplicate day %d for new property %s", day, name.strip())
                continue
            unique_days.append(day)

        price = self.default_base_price if base_price is None else base_price
        catalog = PropertyCatalog(name, base_price=price)
        for day in unique_days:
            catalog.add_date(day)

        self._properties[key] = catalog
        logger.info("Created property %s with %d dates", catalog.name, catalog.date_count)
        return catalog

    def seed(self, entries: Iterable) -> List[PropertyCatalog]:
        """
        Create properties from configuration entries.

        Each entry needs ``name``, ``days`` and ``base_price`` attributes.
        """
        return [
            self.create_property(entry.name, entry.days, base_price=entry.base_price)
            for entry in entries
        ]

    def rename_property(self, name: str, new_name: str) -> PropertyCatalog:
        """
        Rename a property. Changing only the letter case of its own name is allowed.

        Raises:
            NotFoundError: If the property does not exist
            ValidationError: If the new name is blank or used by another property
        """
        catalog = self.get_property(name)
        new_key = _name_key(new_name)
        if not new_key:
            raise ValidationError("Property name cannot be blank.")

        existing = self._properties.get(new_key)
        if existing is not None and existing is not catalog:
            raise ValidationError(f"Another property already uses the name '{new_name.strip()}'.")

        old_name = catalog.name
        catalog.rename(new_name)
        del self._properties[_name_key(old_name)]
        self._properties[new_key] = catalog
        logger.info("Renamed property %s to %s", old_name, catalog.name)
        return catalog

    def remove_property(self, name: str) -> PropertyCatalog:
        """
        Raises:
            NotFoundError: If the property does not exist
            ConflictError: If the property has reservations
        """
        catalog = self.get_property(name)
        if catalog.has_reservations:
            raise ConflictError(f"Cannot remove '{catalog.name}' while it has reservations.")

        del self._properties[_name_key(catalog.name)]
        logger.info("Removed property %s", catalog.name)
        return catalog

    # -- inventory -------------------------------------------------------

    def set_base_price(self, name: str, price: float) -> PropertyCatalog:
        catalog = self.get_property(name)
        catalog.set_base_price(price)
        return catalog

    def add_date(self, name: str, day_number: int) -> DateSlot:
        return self.get_property(name).add_date(day_number)

    def remove_date(self, name: str, day_number: int) -> DateSlot:
        return self.get_property(name).remove_date(day_number)

    # -- booking ---------------------------------------------------------

    @staticmethod
    def validate_booking_window(check_in: int, check_out: int) -> None:
        """
        Check the stay bounds before any availability lookup.

        Check-in must fall on days 1-29 and check-out on days
        check_in + 1 to 30.

        Raises:
            BusinessRuleError: If the combination is invalid
        """
        if not 1 <= check_in <= CALENDAR_DAYS - 1:
            raise BusinessRuleError(
                f"Check-in day must be between 1 and {CALENDAR_DAYS - 1}, got {check_in}."
            )
        if not check_in + 1 <= check_out <= CALENDAR_DAYS:
            raise BusinessRuleError(
                f"Check-out day must be between {check_in + 1} and {CALENDAR_DAYS}, got {check_out}."
            )

    def check_availability(self, name: str, check_in: int, check_out: int) -> AvailabilityReport:
        catalog = self.get_property(name)
        self.validate_booking_window(check_in, check_out)
        return catalog.availability(check_in, check_out)

    def preview_booking(
        self,
        name: str,
        guest_name: str,
        check_in: int,
        check_out: int,
    ) -> BookingPreview:
        """
        Build a priced reservation without booking anything.

        Raises:
            NotFoundError: If the property does not exist
            BusinessRuleError: If the check-in/check-out combination is invalid
            ValidationError: If the guest name is blank
            UnavailableDatesError: If any requested day is missing or booked
        """
        catalog = self.get_property(name)
        self.validate_booking_window(check_in, check_out)

        reservation = Reservation(guest_name=guest_name, check_in=check_in, check_out=check_out)

        report = catalog.availability(check_in, check_out)
        if not report.available:
            raise UnavailableDatesError(report)

        reservation.calculate_total(catalog.dates)
        return BookingPreview(property_name=catalog.name, catalog=catalog, reservation=reservation)

    def confirm_booking(self, preview: BookingPreview) -> Reservation:
        """
        Book a previewed reservation.

        Availability is checked again, since the calendar may have changed
        after the preview was made.

        Raises:
            NotFoundError: If the property was removed after the preview
            UnavailableDatesError: If the days are no longer available
        """
        catalog = preview.catalog
        if self._properties.get(_name_key(catalog.name)) is not catalog:
            raise NotFoundError(f"Property '{preview.property_name}' is no longer listed.")

        return catalog.try_book(preview.reservation)

    def total_earnings(self) -> float:
        return sum(catalog.calculate_earnings() for catalog in self._properties.values())
