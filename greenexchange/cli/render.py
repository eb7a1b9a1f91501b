"""
Rich renderables for property info, calendars, day details and reservations.
"""

from typing import List, Optional

import pendulum
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config import ExchangeConfig
from ..domain.catalog import CALENDAR_DAYS, PropertyCatalog
from ..domain.models import AvailabilityReport, Reservation

WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def day_to_date(config: ExchangeConfig, day_number: int) -> Optional[pendulum.Date]:
    """Map a calendar day to a real date when ``calendar_start`` is configured."""
    if config.calendar_start is None:
        return None
    start = config.calendar_start
    return pendulum.date(start.year, start.month, start.day).add(days=day_number - 1)


def day_label(config: ExchangeConfig, day_number: int) -> str:
    """Format a day for display, e.g. ``Day 3`` or ``Day 3 (Tue, 03 Jun)``."""
    real_date = day_to_date(config, day_number)
    if real_date is None:
        return f"Day {day_number}"
    return f"Day {day_number} ({real_date.format('ddd, DD MMM')})"


def property_info(catalog: PropertyCatalog, config: ExchangeConfig) -> Panel:
    """Summary panel for one property."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Name", catalog.name)
    table.add_row("Base Price", config.format_price(catalog.base_price))
    table.add_row("Listed Dates", str(catalog.date_count))
    table.add_row("Available Dates", str(catalog.available_date_count()))
    table.add_row("Booked Dates", str(catalog.booked_date_count()))
    table.add_row("Reservations", str(len(catalog.reservations)))
    table.add_row("Total Earnings", config.format_price(catalog.calculate_earnings()))
    return Panel.fit(table, title="Property Info")


def _calendar_cell(catalog: PropertyCatalog, day_number: int) -> Text:
    slot = catalog.find_date(day_number)
    if slot is None:
        return Text(f"{day_number:>2} -", style="dim")
    if slot.booked:
        return Text(f"{day_number:>2} X", style="bold red")
    return Text(f"{day_number:>2} O", style="green")


def calendar(catalog: PropertyCatalog, config: ExchangeConfig) -> Table:
    """
    Seven-column calendar of all 30 days.

    With ``calendar_start`` configured, columns are weekdays and day 1 is
    placed under its real weekday; otherwise rows simply hold seven days.
    """
    first_date = day_to_date(config, 1)
    offset = first_date.isoweekday() - 1 if first_date is not None else 0

    table = Table(
        title=f"Calendar - {catalog.name}",
        caption="O available   X booked   - not listed",
        show_header=first_date is not None,
        header_style="bold cyan",
        show_lines=False,
    )
    for name in WEEKDAY_NAMES:
        table.add_column(name, justify="right")

    cells: List[Text] = [Text("")] * offset
    cells.extend(_calendar_cell(catalog, day) for day in range(1, CALENDAR_DAYS + 1))

    for start in range(0, len(cells), 7):
        row = cells[start:start + 7]
        row.extend([Text("")] * (7 - len(row)))
        table.add_row(*row)

    return table


def date_info(catalog: PropertyCatalog, day_number: int, config: ExchangeConfig) -> Panel:
    """Details for a single day; the caller checks the day is listed."""
    slot = catalog.find_date(day_number)
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Date", day_label(config, day_number))
    table.add_row("Price per Night", config.format_price(slot.price_per_night))
    table.add_row("Status", "[red]Booked[/red]" if slot.booked else "[green]Available[/green]")

    reservation = catalog.reservation_for_day(day_number)
    if reservation is not None:
        table.add_row("Guest", reservation.guest_name)

    return Panel.fit(table, title="Date Info")


def reservation_details(reservation: Reservation, config: ExchangeConfig, title: str = "Reservation Details") -> Panel:
    """Guest, stay and nightly price breakdown."""
    summary = Table.grid(padding=(0, 2))
    summary.add_column(style="bold")
    summary.add_column()
    summary.add_row("Reservation", reservation.reservation_id)
    summary.add_row("Guest Name", reservation.guest_name)
    summary.add_row("Check-in", day_label(config, reservation.check_in))
    summary.add_row("Check-out", day_label(config, reservation.check_out))
    summary.add_row("Nights", str(reservation.nights))
    summary.add_row("Total Price", config.format_price(reservation.total_price))

    breakdown = Table(title="Price Breakdown", show_header=True, header_style="bold cyan")
    breakdown.add_column("Night")
    breakdown.add_column("Price", justify="right")
    for day_number, price in reservation.nightly_rates():
        breakdown.add_row(day_label(config, day_number), config.format_price(price))

    return Panel.fit(Group(summary, Text(""), breakdown), title=title)


def reservation_list(catalog: PropertyCatalog, config: ExchangeConfig) -> Table:
    """One row per reservation."""
    table = Table(title=f"Reservations - {catalog.name}", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Guest", style="bold yellow")
    table.add_column("Check-in", justify="right")
    table.add_column("Check-out", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Booked At", style="dim")

    for index, reservation in enumerate(catalog.reservations, 1):
        table.add_row(
            str(index),
            reservation.guest_name,
            str(reservation.check_in),
            str(reservation.check_out),
            config.format_price(reservation.total_price),
            reservation.booked_at.format("YYYY-MM-DD HH:mm"),
        )
    return table


def availability_message(report: AvailabilityReport) -> str:
    """One-line availability summary."""
    if report.available:
        return (
            f"[green]✓ Days {report.check_in} to {report.check_out - 1} are available.[/green]"
        )
    return f"[yellow]⚠ Unavailable: {report.describe_failures()}[/yellow]"
