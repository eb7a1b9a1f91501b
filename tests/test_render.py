"""
Tests for Rich rendering of properties, calendars and reservations.
"""

from datetime import date

from rich.console import Console

from greenexchange.cli import render
from greenexchange.config import ExchangeConfig
from greenexchange.domain.models import Reservation


def _render_text(renderable) -> str:
    console = Console(record=True, width=120, color_system=None)
    console.print(renderable)
    return console.export_text()


class TestRender:
    """Tests for the render helpers."""

    def test_property_info(self, beach_house):
        beach_house.try_book(Reservation(guest_name="Ana", check_in=3, check_out=6))

        text = _render_text(render.property_info(beach_house, ExchangeConfig()))

        assert "Beach House" in text
        assert "₱1,500.00" in text
        assert "₱4,500.00" in text

    def test_calendar_marks_days(self, beach_house):
        beach_house.try_book(Reservation(guest_name="Ana", check_in=3, check_out=6))

        text = _render_text(render.calendar(beach_house, ExchangeConfig()))

        assert " 3 X" in text
        assert " 6 O" in text
        assert "30 -" in text

    def test_calendar_with_weekdays(self, beach_house):
        """Test that day 1 lands under its real weekday."""
        config = ExchangeConfig(calendar_start=date(2025, 6, 1))  # a Sunday

        table = render.calendar(beach_house, config)

        assert table.show_header
        sunday_cells = list(table.columns[6].cells)
        assert sunday_cells[0].plain == " 1 O"

    def test_day_label(self):
        assert render.day_label(ExchangeConfig(), 3) == "Day 3"
        config = ExchangeConfig(calendar_start=date(2025, 6, 1))
        assert render.day_label(config, 3) == "Day 3 (Tue, 03 Jun)"

    def test_date_info_shows_guest(self, beach_house):
        beach_house.try_book(Reservation(guest_name="Ana", check_in=3, check_out=6))

        text = _render_text(render.date_info(beach_house, 4, ExchangeConfig()))

        assert "Booked" in text
        assert "Ana" in text

    def test_reservation_details(self, beach_house):
        reservation = beach_house.try_book(Reservation(guest_name="Ana", check_in=3, check_out=6))

        text = _render_text(render.reservation_details(reservation, ExchangeConfig()))

        assert "Ana" in text
        assert "₱4,500.00" in text
        assert text.count("₱1,500.00") == 3

    def test_availability_message(self, beach_house):
        beach_house.book_dates(4, 5)

        assert "available" in render.availability_message(beach_house.availability(1, 3))
        assert "4 (booked)" in render.availability_message(beach_house.availability(3, 6))
