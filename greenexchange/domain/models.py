"""
Domain models for day slots, reservations and availability results.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple
from uuid import uuid4

import pendulum
from pendulum import DateTime

from .exceptions import BusinessRuleError, ValidationError


@dataclass
class DateSlot:
    """
    A single bookable calendar day within a property.

    The slot performs no validation; the owning catalog checks the day
    range and uniqueness before creating one.
    """
    day_number: int
    price_per_night: float
    booked: bool = False

    def book(self) -> None:
        """Mark the day as booked."""
        self.booked = True

    def unbook(self) -> None:
        """Release the day."""
        self.booked = False


@dataclass
class Reservation:
    """
    A guest's stay over the half-open day range [check_in, check_out).

    Invariant: check_in must be before check_out.
    """
    guest_name: str
    check_in: int
    check_out: int
    total_price: float = 0.0
    breakdown: List[float] = field(default_factory=list)
    reservation_id: str = field(default_factory=lambda: uuid4().hex[:8])
    booked_at: DateTime = field(default_factory=pendulum.now)

    def __post_init__(self):
        self.guest_name = (self.guest_name or "").strip()
        if not self.guest_name:
            raise ValidationError("Guest name cannot be blank.")
        if self.check_in >= self.check_out:
            raise BusinessRuleError(
                f"Check-in day {self.check_in} must be before check-out day {self.check_out}."
            )

    @property
    def nights(self) -> int:
        """Number of nights in the stay."""
        return self.check_out - self.check_in

    @property
    def days(self) -> range:
        """The occupied days (check-out day excluded)."""
        return range(self.check_in, self.check_out)

    def covers(self, day_number: int) -> bool:
        """Check if the guest occupies the given day."""
        return self.check_in <= day_number < self.check_out

    def calculate_total(self, dates: Iterable[DateSlot]) -> float:
        """
        Recompute total price and nightly breakdown from the given slots.

        Only slots inside the stay are counted, in ascending day order.
        Calling this twice on unchanged slots yields the same result.
        """
        self.total_price = 0.0
        self.breakdown = []

        for slot in sorted(dates, key=lambda s: s.day_number):
            if self.covers(slot.day_number):
                self.total_price += slot.price_per_night
                self.breakdown.append(slot.price_per_night)

        return self.total_price

    def nightly_rates(self) -> List[Tuple[int, float]]:
        """Pair each breakdown entry with its day number."""
        return [(self.check_in + offset, price) for offset, price in enumerate(self.breakdown)]


@dataclass(frozen=True)
class AvailabilityReport:
    """
    Outcome of an availability check over [check_in, check_out).
    """
    check_in: int
    check_out: int
    missing_days: Tuple[int, ...] = ()
    booked_days: Tuple[int, ...] = ()

    @property
    def available(self) -> bool:
        return not self.missing_days and not self.booked_days

    @property
    def unavailable_days(self) -> List[int]:
        return sorted(self.missing_days + self.booked_days)

    def describe_failures(self) -> str:
        """Format failing days, e.g. ``3 (booked), 12 (not listed)``."""
        reasons = {day: "not listed" for day in self.missing_days}
        reasons.update({day: "booked" for day in self.booked_days})
        return ", ".join(f"{day} ({reasons[day]})" for day in sorted(reasons))