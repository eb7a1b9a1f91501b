"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import List, Optional, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import ExchangeConfig, load_config
from ..domain.catalog import CALENDAR_DAYS, MIN_BASE_PRICE, PropertyCatalog
from ..domain.exceptions import ExchangeError
from ..services.registry import ExchangeRegistry
from . import render

app = typer.Typer(
    name="greenexchange",
    help="Green Property Exchange - simulate short-term property rentals",
    add_completion=False
)

console = Console()

logger = logging.getLogger(__name__)

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config_or_exit(config_file: Optional[Path]) -> ExchangeConfig:
    try:
        return load_config(config_file)
    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[bold red]Invalid configuration:[/bold red] {e}")
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Prompt helpers
# ---------------------------------------------------------------------------

def _prompt_int(label: str, minimum: int, maximum: int) -> int:
    """Prompt until an integer within [minimum, maximum] is entered."""
    while True:
        value = typer.prompt(label, type=int)
        if minimum <= value <= maximum:
            return value
        console.print(f"[yellow]Enter a number between {minimum} and {maximum}.[/yellow]")


def _prompt_price(label: str, minimum: float, maximum: float) -> float:
    while True:
        value = typer.prompt(label, type=float)
        if minimum <= value <= maximum:
            return value
        console.print(f"[yellow]Enter a valid price ({minimum:.2f}-{maximum:.2f}).[/yellow]")


def _parse_day_request(raw: str) -> List[int]:
    """
    Parse the date request of a new listing.

    A single number N lists days 1..N; several numbers list exactly those days.
    """
    tokens = raw.replace(",", " ").split()
    if not tokens or not all(token.isdigit() for token in tokens):
        raise ValueError("Enter a count (e.g. 10) or day numbers (e.g. 3 5 7).")

    numbers = [int(token) for token in tokens]
    if len(numbers) == 1:
        count = numbers[0]
        if not 1 <= count <= CALENDAR_DAYS:
            raise ValueError(f"Enter a number between 1 and {CALENDAR_DAYS}.")
        return list(range(1, count + 1))
    return numbers


def _choose_property(registry: ExchangeRegistry, action: str) -> Optional[PropertyCatalog]:
    """List properties and let the user pick one by name or number."""
    properties = registry.list_properties()
    if not properties:
        console.print(f"[yellow]No properties available to {action}.[/yellow]")
        return None

    console.print("\nCurrent Properties:")
    for idx, catalog in enumerate(properties, 1):
        console.print(f"  {idx}. {catalog.name}")

    choice = typer.prompt(f"→ Property to {action} (name or number)").strip()

    catalog = registry.find_property(choice)
    if catalog is None and choice.isdigit() and 1 <= int(choice) <= len(properties):
        catalog = properties[int(choice) - 1]

    if catalog is None:
        console.print("[yellow]Property not found.[/yellow]")
    return catalog


# ---------------------------------------------------------------------------
# Menu actions
# ---------------------------------------------------------------------------

def _create_property(registry: ExchangeRegistry, config: ExchangeConfig) -> None:
    console.print("\n[bold]-- CREATE PROPERTY LISTING --[/bold]")
    name = typer.prompt("→ Property name").strip()

    if registry.find_property(name) is not None:
        console.print("[yellow]Property name must be unique.[/yellow]")
        return

    while True:
        raw_days = typer.prompt(f"→ Available dates (count 1-{CALENDAR_DAYS}, or day numbers)")
        try:
            days = _parse_day_request(raw_days)
            break
        except ValueError as e:
            console.print(f"[yellow]{e}[/yellow]")

    catalog = registry.create_property(name, days)
    console.print(
        f"[green]✓ Property '{catalog.name}' created with {catalog.date_count} date(s) "
        f"at {config.format_price(catalog.base_price)} per night.[/green]"
    )


def _show_reservations(catalog: PropertyCatalog, config: ExchangeConfig) -> None:
    if not catalog.reservations:
        console.print("[yellow]No reservations yet.[/yellow]")
        return

    console.print(render.reservation_list(catalog, config))
    index = _prompt_int("→ Reservation number for details", 1, len(catalog.reservations))
    console.print(render.reservation_details(catalog.reservations[index - 1], config))


def _view_property(registry: ExchangeRegistry, config: ExchangeConfig) -> None:
    console.print("\n[bold]-- VIEW PROPERTY --[/bold]")
    catalog = _choose_property(registry, "view")
    if catalog is None:
        return

    console.print(render.property_info(catalog, config))
    console.print(render.calendar(catalog, config))

    while True:
        console.print("\n[1] Date Info  [2] Reservations  [3] Check Availability  [4] Back")
        choice = _prompt_int("Enter choice", 1, 4)

        if choice == 1:
            day = _prompt_int(f"→ Day (1-{CALENDAR_DAYS})", 1, CALENDAR_DAYS)
            if catalog.find_date(day) is None:
                console.print(f"[yellow]Day {day} is not listed.[/yellow]")
            else:
                console.print(render.date_info(catalog, day, config))
        elif choice == 2:
            _show_reservations(catalog, config)
        elif choice == 3:
            check_in = _prompt_int("→ Check-in day", 1, CALENDAR_DAYS)
            check_out = _prompt_int("→ Check-out day", 1, CALENDAR_DAYS)
            try:
                report = registry.check_availability(catalog.name, check_in, check_out)
            except ExchangeError as e:
                console.print(f"[bold red]Error:[/bold red] {e}")
                continue
            console.print(render.availability_message(report))
        else:
            return


def _manage_property(registry: ExchangeRegistry, config: ExchangeConfig) -> None:
    console.print("\n[bold]-- MANAGE PROPERTY --[/bold]")
    catalog = _choose_property(registry, "manage")
    if catalog is None:
        return

    while True:
        console.print(f"\nManaging: [bold]{catalog.name}[/bold]")
        console.print("[1] Change Property Name")
        console.print("[2] Change Price per Night")
        console.print("[3] Add Date")
        console.print("[4] Remove Date")
        console.print("[5] Remove this Property")
        console.print("[6] Back to Main Menu")
        choice = _prompt_int("Enter choice", 1, 6)

        try:
            if choice == 1:
                new_name = typer.prompt("→ New property name")
                registry.rename_property(catalog.name, new_name)
                console.print(f"[green]✓ Property name changed to: {catalog.name}[/green]")
            elif choice == 2:
                new_price = _prompt_price(
                    f"→ New base price (>= {MIN_BASE_PRICE:.0f})",
                    MIN_BASE_PRICE,
                    config.max_base_price,
                )
                registry.set_base_price(catalog.name, new_price)
                console.print(f"[green]✓ Base price updated to {config.format_price(catalog.base_price)}[/green]")
            elif choice == 3:
                day = _prompt_int(f"→ Day to add (1-{CALENDAR_DAYS})", 1, CALENDAR_DAYS)
                registry.add_date(catalog.name, day)
                console.print(f"[green]✓ Added day {day}.[/green]")
            elif choice == 4:
                day = _prompt_int(f"→ Day to remove (1-{CALENDAR_DAYS})", 1, CALENDAR_DAYS)
                registry.remove_date(catalog.name, day)
                console.print(f"[green]✓ Removed day {day}.[/green]")
            elif choice == 5:
                registry.remove_property(catalog.name)
                console.print(f"[green]✓ Property '{catalog.name}' removed.[/green]")
                return
            else:
                return
        except ExchangeError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")


def _simulate_booking(registry: ExchangeRegistry, config: ExchangeConfig) -> None:
    console.print("\n[bold]-- SIMULATE BOOKING --[/bold]")
    catalog = _choose_property(registry, "book")
    if catalog is None:
        return

    console.print(render.calendar(catalog, config))

    guest_name = typer.prompt("→ Guest name")
    check_in = _prompt_int("→ Check-in day", 1, CALENDAR_DAYS)
    check_out = _prompt_int("→ Check-out day", 1, CALENDAR_DAYS)

    preview = registry.preview_booking(catalog.name, guest_name, check_in, check_out)
    console.print(render.reservation_details(preview.reservation, config, title="Booking Preview"))

    if not typer.confirm("Confirm booking?", default=True):
        console.print("[yellow]Booking cancelled.[/yellow]")
        return

    reservation = registry.confirm_booking(preview)
    console.print(
        f"[bold green]✓ Booking confirmed![/bold green] Reservation {reservation.reservation_id} "
        f"for {reservation.guest_name}, total {config.format_price(reservation.total_price)}"
    )


MENU_ACTIONS = {
    1: _create_property,
    2: _view_property,
    3: _manage_property,
    4: _simulate_booking,
}


def _run_menu(registry: ExchangeRegistry, config: ExchangeConfig) -> None:
    """Main menu loop; every error is reported and the menu shown again."""
    while True:
        console.print("\n" + "=" * 40)
        console.print("[bold cyan] 🏡 GREEN PROPERTY EXCHANGE[/bold cyan]")
        console.print("=" * 40)
        console.print("1. Create Property")
        console.print("2. View Property")
        console.print("3. Manage Property")
        console.print("4. Simulate Booking")
        console.print("5. Exit")
        choice = _prompt_int("Choose an option", 1, 5)

        if choice == 5:
            console.print("Exiting system. Goodbye!")
            return

        try:
            MENU_ACTIONS[choice](registry, config)
        except ExchangeError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """
    Green Property Exchange. Starts the interactive menu when no command is given.
    """
    if ctx.invoked_subcommand is None:
        run()


@app.command()
def run(
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Start the interactive property exchange menu.

    Examples:

        # Built-in defaults, no properties
        greenexchange run

        # Pre-listed properties from a config file
        greenexchange run --config config.yaml
    """
    _configure_logging(verbose)
    config = _load_config_or_exit(config_file)

    registry = ExchangeRegistry(default_base_price=config.default_base_price)
    try:
        registry.seed(config.properties)
    except ExchangeError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if len(registry):
        logger.debug("Seeded %d properties from configuration", len(registry))

    _run_menu(registry, config)


@app.command()
def list_properties(
    config_file: ConfigOption = None,
):
    """
    List the properties configured to be listed at startup.
    """
    config = _load_config_or_exit(config_file)

    if not config.properties:
        console.print("[yellow]No properties defined in the config file.[/yellow]")
        return

    table = Table(
        title="Configured Properties",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Name", style="bold yellow")
    table.add_column("Base Price", justify="right")
    table.add_column("Days", style="dim")

    for seed in config.properties:
        price = seed.base_price if seed.base_price is not None else config.default_base_price
        table.add_row(
            seed.name,
            config.format_price(price),
            ", ".join(str(day) for day in sorted(set(seed.days))) or "-"
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]greenexchange[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
