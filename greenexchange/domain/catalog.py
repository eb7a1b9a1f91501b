"""
Core availability and booking logic for a single property.

This is the heart of the application - pure domain logic without any
I/O. Every operation validates fully before touching state, so a failed
call never leaves the catalog half-updated.
"""

import logging
from typing import Dict, List, Optional

from .exceptions import ConflictError, NotFoundError, UnavailableDatesError, ValidationError
from .models import AvailabilityReport, DateSlot, Reservation

logger = logging.getLogger(__name__)

CALENDAR_DAYS = 30
MIN_BASE_PRICE = 100.0
DEFAULT_BASE_PRICE = 1500.0


class PropertyCatalog:
    """
    Inventory of one property listing: its day slots and reservations.

    Invariants:
    - at most CALENDAR_DAYS slots, each with a unique day number in 1..30
    - a booked slot cannot be removed
    - the base price cannot change while reservations exist
    """

    def __init__(self, name: str, base_price: float = DEFAULT_BASE_PRICE):
        self.name = self._clean_name(name)
        if base_price < MIN_BASE_PRICE:
            raise ValidationError(f"Base price must be at least {MIN_BASE_PRICE:.2f}, got {base_price:.2f}.")
        self.base_price = float(base_price)
        self._dates: Dict[int, DateSlot] = {}
        self.reservations: List[Reservation] = []

    def __repr__(self) -> str:
        return f"PropertyCatalog(name={self.name!r}, base_price={self.base_price}, dates={self.date_count})"

    @staticmethod
    def _clean_name(name: str) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("Property name cannot be blank.")
        return cleaned

    @property
    def dates(self) -> List[DateSlot]:
        """Listed day slots in ascending day order."""
        return [self._dates[day] for day in sorted(self._dates)]

    @property
    def date_count(self) -> int:
        return len(self._dates)

    @property
    def has_reservations(self) -> bool:
        return bool(self.reservations)

    def rename(self, new_name: str) -> None:
        """Change the display name. Uniqueness is checked by the registry."""
        self.name = self._clean_name(new_name)

    # -- inventory -------------------------------------------------------

    def find_date(self, day_number: int) -> Optional[DateSlot]:
        """Return the slot for a day, or None when the day is not listed."""
        return self._dates.get(day_number)

    def add_date(self, day_number: int) -> DateSlot:
        """
        List a new day priced at the current base price.

        Raises:
            ConflictError: If 30 days are already listed or the day exists
            ValidationError: If the day is outside 1..30
        """
        if len(self._dates) >= CALENDAR_DAYS:
            raise ConflictError(f"Cannot add more than {CALENDAR_DAYS} dates to '{self.name}'.")
        if not 1 <= day_number <= CALENDAR_DAYS:
            raise ValidationError(f"Invalid day number {day_number}. Must be 1-{CALENDAR_DAYS}.")
        if day_number in self._dates:
            raise ConflictError(f"Day {day_number} already exists in '{self.name}'.")

        slot = DateSlot(day_number=day_number, price_per_night=self.base_price)
        self._dates[day_number] = slot
        logger.debug("Added day %d to %s at %.2f", day_number, self.name, self.base_price)
        return slot

    def remove_date(self, day_number: int) -> DateSlot:
        """
        Unlist a day.

        Raises:
            NotFoundError: If the day is not listed
            ConflictError: If the day is booked
        """
        slot = self.find_date(day_number)
        if slot is None:
            raise NotFoundError(f"Day {day_number} not found in '{self.name}'.")
        if slot.booked:
            raise ConflictError(f"Day {day_number} is booked and cannot be removed.")

        del self._dates[day_number]
        logger.debug("Removed day %d from %s", day_number, self.name)
        return slot

    def set_base_price(self, new_price: float) -> None:
        """
        Change the base price and propagate it to every listed day.

        Existing reservation totals are left as they were at booking time.
        """
        if new_price < MIN_BASE_PRICE:
            raise ValidationError(f"New price must be at least {MIN_BASE_PRICE:.2f}.")
        if self.reservations:
            raise ConflictError("Cannot change base price while reservations exist.")

        self.base_price = float(new_price)
        for slot in self._dates.values():
            slot.price_per_night = self.base_price
        logger.info("Base price of %s set to %.2f", self.name, self.base_price)

    # -- availability & booking ------------------------------------------

    def availability(self, check_in: int, check_out: int) -> AvailabilityReport:
        """
        Check every day in [check_in, check_out).

        A day is available only if it is listed and not booked; days
        outside the listed inventory count as unavailable.
        """
        missing: List[int] = []
        booked: List[int] = []

        for day in range(check_in, check_out):
            slot = self._dates.get(day)
            if slot is None:
                missing.append(day)
            elif slot.booked:
                booked.append(day)

        if missing:
            logger.info("%s: days not listed: %s", self.name, missing)
        if booked:
            logger.info("%s: days already booked: %s", self.name, booked)

        return AvailabilityReport(
            check_in=check_in,
            check_out=check_out,
            missing_days=tuple(missing),
            booked_days=tuple(booked),
        )

    def are_dates_available(self, check_in: int, check_out: int) -> bool:
        return self.availability(check_in, check_out).available

    def book_dates(self, check_in: int, check_out: int) -> None:
        """
        Mark every listed day in [check_in, check_out) as booked.

        Unlisted days are skipped. No availability check happens here;
        use ``try_book`` for the checked operation.
        """
        for day in range(check_in, check_out):
            slot = self._dates.get(day)
            if slot is not None:
                slot.book()

    def add_reservation(self, reservation: Reservation) -> Reservation:
        """Record a reservation and recompute its price from the current slots."""
        self.reservations.append(reservation)
        reservation.calculate_total(self._dates.values())
        return reservation

    def try_book(self, reservation: Reservation) -> Reservation:
        """
        Check availability and book the stay as one step.

        Raises:
            UnavailableDatesError: If any day in the stay is missing or booked.
                Nothing is modified in that case.
        """
        report = self.availability(reservation.check_in, reservation.check_out)
        if not report.available:
            raise UnavailableDatesError(report)

        self.book_dates(reservation.check_in, reservation.check_out)
        self.add_reservation(reservation)
        logger.info(
            "Booked %s for %s, days %d-%d, total %.2f",
            self.name,
            reservation.guest_name,
            reservation.check_in,
            reservation.check_out,
            reservation.total_price,
        )
        return reservation

    def reservation_for_day(self, day_number: int) -> Optional[Reservation]:
        """Return the reservation occupying a day, if any."""
        for reservation in self.reservations:
            if reservation.covers(day_number):
                return reservation
        return None

    # -- aggregates ------------------------------------------------------

    def calculate_earnings(self) -> float:
        """Sum of all reservation totals."""
        return sum(reservation.total_price for reservation in self.reservations)

    def available_date_count(self) -> int:
        return sum(1 for slot in self._dates.values() if not slot.booked)

    def booked_date_count(self) -> int:
        return sum(1 for slot in self._dates.values() if slot.booked)
