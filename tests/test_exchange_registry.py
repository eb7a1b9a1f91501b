"""
Tests for the ExchangeRegistry service layer.
"""

import pytest

from greenexchange.config import PropertySeed
from greenexchange.domain.exceptions import (
    BusinessRuleError,
    ConflictError,
    NotFoundError,
    UnavailableDatesError,
    ValidationError,
)
from greenexchange.services.registry import ExchangeRegistry


class TestCreateAndFind:
    """Tests for property creation and lookup."""

    def test_create_property(self):
        registry = ExchangeRegistry()

        catalog = registry.create_property("Beach House", [1, 2, 3])

        assert catalog.name == "Beach House"
        assert catalog.base_price == 1500.0
        assert [slot.day_number for slot in catalog.dates] == [1, 2, 3]
        assert len(registry) == 1

    def test_default_base_price_from_registry(self):
        registry = ExchangeRegistry(default_base_price=1800)

        assert registry.create_property("Loft").base_price == 1800.0
        assert registry.create_property("Villa", base_price=2500).base_price == 2500.0

    def test_find_is_case_insensitive(self, registry):
        assert registry.find_property("beach house") is registry.find_property("BEACH HOUSE  ")
        assert registry.find_property("Lake House") is None

    def test_get_missing_property(self, registry):
        with pytest.raises(NotFoundError, match="Lake House"):
            registry.get_property("Lake House")

    def test_blank_name_rejected(self, registry):
        with pytest.raises(ValidationError, match="blank"):
            registry.create_property("   ", [1])

    def test_duplicate_name_rejected(self, registry):
        """Test that names are unique ignoring case."""
        with pytest.raises(ValidationError, match="already in use"):
            registry.create_property("beach HOUSE", [1])

        assert len(registry) == 1

    def test_duplicate_days_in_request_are_dropped(self):
        registry = ExchangeRegistry()

        catalog = registry.create_property("Loft", [4, 2, 4, 2, 7])

        assert [slot.day_number for slot in catalog.dates] == [2, 4, 7]

    def test_invalid_day_rejects_whole_request(self):
        """Test that nothing is registered when a requested day is out of range."""
        registry = ExchangeRegistry()

        with pytest.raises(ValidationError, match="31"):
            registry.create_property("Loft", [1, 2, 31])

        assert registry.find_property("Loft") is None

    def test_seed_from_config_entries(self):
        registry = ExchangeRegistry()
        seeds = [
            PropertySeed(name="Beach House", days=[1, 2, 3]),
            PropertySeed(name="Cabin", days=[5], base_price=2200),
        ]

        created = registry.seed(seeds)

        assert [catalog.name for catalog in created] == ["Beach House", "Cabin"]
        assert registry.get_property("cabin").base_price == 2200.0

    def test_iteration_preserves_creation_order(self, registry):
        registry.create_property("Cabin")
        registry.create_property("Attic")

        assert [catalog.name for catalog in registry] == ["Beach House", "Cabin", "Attic"]


class TestManageProperty:
    """Tests for rename, pricing, dates and removal through the registry."""

    def test_rename_property(self, registry):
        registry.rename_property("beach house", "Sea View")

        assert registry.find_property("Beach House") is None
        assert registry.get_property("sea view").name == "Sea View"

    def test_rename_case_only_change_allowed(self, registry):
        registry.rename_property("Beach House", "BEACH house")

        assert registry.get_property("beach house").name == "BEACH house"

    def test_rename_to_taken_name(self, registry):
        registry.create_property("Cabin")

        with pytest.raises(ValidationError, match="already uses"):
            registry.rename_property("Cabin", "beach house")

        assert registry.get_property("Cabin").name == "Cabin"

    def test_rename_to_blank(self, registry):
        with pytest.raises(ValidationError):
            registry.rename_property("Beach House", "  ")

    def test_set_base_price_and_dates(self, registry):
        registry.set_base_price("Beach House", 2000)
        registry.add_date("Beach House", 20)
        registry.remove_date("Beach House", 1)

        catalog = registry.get_property("Beach House")
        assert catalog.find_date(20).price_per_night == 2000.0
        assert catalog.find_date(1) is None

    def test_remove_property(self, registry):
        registry.remove_property("BEACH HOUSE")

        assert len(registry) == 0

    def test_remove_property_with_reservation_fails(self, registry):
        registry.confirm_booking(registry.preview_booking("Beach House", "Ana", 3, 6))

        with pytest.raises(ConflictError, match="reservations"):
            registry.remove_property("Beach House")

        assert len(registry) == 1


class TestBooking:
    """Tests for the booking workflow."""

    @pytest.mark.parametrize(
        "check_in, check_out",
        [(30, 31), (0, 3), (5, 1), (3, 1), (5, 5), (7, 4), (10, 31)],
    )
    def test_invalid_window_rejected(self, check_in, check_out):
        with pytest.raises(BusinessRuleError):
            ExchangeRegistry.validate_booking_window(check_in, check_out)

    def test_window_rejected_before_availability_check(self, registry, monkeypatch):
        """Test that check-in 30 or check-out 1 never reaches the catalog."""
        catalog = registry.get_property("Beach House")
        calls = []
        monkeypatch.setattr(catalog, "availability", lambda *args: calls.append(args))

        with pytest.raises(BusinessRuleError):
            registry.preview_booking("Beach House", "Ana", 30, 30)
        with pytest.raises(BusinessRuleError):
            registry.check_availability("Beach House", 1, 1)

        assert calls == []

    def test_last_day_can_be_check_out(self):
        ExchangeRegistry.validate_booking_window(29, 30)
        ExchangeRegistry.validate_booking_window(1, 30)

    def test_check_availability(self, registry):
        assert registry.check_availability("Beach House", 3, 6).available

        report = registry.check_availability("Beach House", 9, 12)
        assert report.missing_days == (11,)

    def test_preview_does_not_mutate(self, registry):
        """Test that declining a preview leaves the property untouched."""
        preview = registry.preview_booking("beach house", "Ana", 3, 6)

        assert preview.property_name == "Beach House"
        assert preview.reservation.total_price == 4500.0
        assert preview.reservation.breakdown == [1500.0, 1500.0, 1500.0]

        catalog = registry.get_property("Beach House")
        assert catalog.reservations == []
        assert catalog.booked_date_count() == 0

    def test_preview_unavailable_dates(self, registry):
        with pytest.raises(UnavailableDatesError) as exc_info:
            registry.preview_booking("Beach House", "Ana", 8, 13)

        assert exc_info.value.report.missing_days == (11, 12)

    def test_preview_blank_guest(self, registry):
        with pytest.raises(ValidationError):
            registry.preview_booking("Beach House", " ", 3, 6)

    def test_confirm_booking(self, registry):
        """Test the full Beach House booking for Ana."""
        reservation = registry.confirm_booking(registry.preview_booking("Beach House", "Ana", 3, 6))

        catalog = registry.get_property("Beach House")
        assert reservation.total_price == 4500.0
        assert catalog.reservations == [reservation]
        assert [catalog.find_date(day).booked for day in range(3, 7)] == [True, True, True, False]
        assert registry.total_earnings() == 4500.0

    def test_confirm_twice_fails(self, registry):
        preview = registry.preview_booking("Beach House", "Ana", 3, 6)
        registry.confirm_booking(preview)

        with pytest.raises(UnavailableDatesError):
            registry.confirm_booking(preview)

        assert len(registry.get_property("Beach House").reservations) == 1

    def test_confirm_after_overlapping_booking_fails(self, registry):
        """Test that availability is checked again at confirmation."""
        first = registry.preview_booking("Beach House", "Ana", 3, 6)
        second = registry.preview_booking("Beach House", "Ben", 5, 8)
        registry.confirm_booking(first)

        with pytest.raises(UnavailableDatesError):
            registry.confirm_booking(second)

        catalog = registry.get_property("Beach House")
        assert not catalog.find_date(6).booked
        assert not catalog.find_date(7).booked

    def test_confirm_after_property_removed(self, registry):
        preview = registry.preview_booking("Beach House", "Ana", 3, 6)
        registry.remove_property("Beach House")

        with pytest.raises(NotFoundError):
            registry.confirm_booking(preview)

    def test_confirm_after_rename(self, registry):
        preview = registry.preview_booking("Beach House", "Ana", 3, 6)
        registry.rename_property("Beach House", "Sea View")

        reservation = registry.confirm_booking(preview)

        assert registry.get_property("Sea View").reservations == [reservation]
