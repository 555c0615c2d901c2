"""
Main CLI application using Typer.
"""

import json
import logging
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import pendulum
import typer
from pendulum import DateTime
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..adapters.clinic_api_client import ClinicApiClient
from ..adapters.mock_clinic_client import MockClinicClient
from ..config import AppConfig, get_default_config_path
from ..domain.appointments import status_label, to_calendar_event
from ..domain.exceptions import ClinicSlotsError
from ..domain.slot_calculator import SlotAvailabilityCalculator
from ..services.availability import AvailabilityService, ClinicClientProtocol

app = typer.Typer(
    name="clinicslots",
    help="Find bookable appointment slots for the clinic",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]
MockOption = Annotated[
    bool,
    typer.Option("--mock", help="Use bundled sample data instead of the clinic backend.")
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")]
DateArgument = Annotated[Optional[str], typer.Argument(help="Day to inspect (YYYY-MM-DD). Defaults to today.")]


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _load_config(config_file: Optional[Path], verbose: bool) -> AppConfig:
    """
    Load the configuration.

    An explicit --config must exist; without it, a missing default file
    falls back to built-in defaults.
    """
    if config_file is not None:
        config = AppConfig.load_from_yaml(config_file)
    else:
        config_path = get_default_config_path()
        config = AppConfig.load_from_yaml(config_path) if config_path.exists() else AppConfig()

    _setup_logging("DEBUG" if verbose else config.log_level)
    return config


def _build_client(config: AppConfig, mock: bool) -> ClinicClientProtocol:
    if mock:
        return MockClinicClient(timezone=config.timezone)

    return ClinicApiClient(
        base_url=config.api_base_url,
        api_token=config.api_token,
        timezone=config.timezone,
    )


def _parse_day(value: Optional[str], tz: str) -> DateTime:
    if not value:
        return pendulum.now(tz).start_of("day")

    try:
        return pendulum.from_format(value, "YYYY-MM-DD", tz=tz).start_of("day")
    except ValueError as e:
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD: {e}") from e


def _format_brl(amount: float) -> str:
    """Format an amount as Brazilian reais, e.g. R$ 1.234,50."""
    formatted = f"{amount:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {formatted}"


def _fail(error: Exception) -> NoReturn:
    console.print(f"[bold red]Erro:[/bold red] {escape(str(error))}")
    raise typer.Exit(1)


@app.command()
def slots(
    date: DateArgument = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Appointment duration in minutes")] = None,
    service: Annotated[Optional[int], typer.Option("--service", "-s", help="Service id; its duration is used")] = None,
    staff: Annotated[Optional[int], typer.Option("--staff", help="Only consider this professional's agenda")] = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    List bookable slots for a day.

    Examples:

        clinicslots slots 2024-11-25 --duration 30

        clinicslots slots 2024-11-25 --service 1 --staff 2 --mock
    """
    try:
        config = _load_config(config_file, verbose)
        day = _parse_day(date, config.timezone)

        if mock:
            console.print("[yellow]⚠  Modo de teste: usando dados de exemplo[/yellow]\n")

        calculator = SlotAvailabilityCalculator(working_hours=config.working_hours())
        availability = AvailabilityService(
            clinic_client=_build_client(config, mock),
            calculator=calculator,
        )

        found = availability.find_slots(
            day=day,
            duration_minutes=duration if duration is not None else config.defaults.duration_minutes,
            service_id=service,
            staff_id=staff,
        )
    except (FileNotFoundError, ValueError, ClinicSlotsError) as e:
        _fail(e)

    if not found:
        console.print(
            "[yellow]⚠ Nenhum horário disponível.[/yellow]\n"
            "Tente outro dia ou uma duração menor."
        )
        return

    console.print(f"[bold green]✓ {len(found)} horário(s) disponível(is):[/bold green]\n")
    for slot in found:
        console.print(f"  {slot.format_display()}")
    console.print()


@app.command()
def appointments(
    date: DateArgument = None,
    staff: Annotated[Optional[int], typer.Option("--staff", help="Only show this professional's agenda")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print calendar events as JSON.")] = False,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Show the appointments booked on a day.
    """
    try:
        config = _load_config(config_file, verbose)
        day = _parse_day(date, config.timezone)
        client = _build_client(config, mock)
        availability = AvailabilityService(
            clinic_client=client,
            calculator=SlotAvailabilityCalculator(working_hours=config.working_hours()),
        )
        day_appointments = availability.appointments_for_day(day, staff_id=staff)
        staff_names = {member.id: member.full_name for member in client.get_staff()}
    except (FileNotFoundError, ValueError, ClinicSlotsError) as e:
        _fail(e)

    if as_json:
        events = [
            to_calendar_event(appointment, staff_names.get(appointment.staff_id))
            for appointment in day_appointments
        ]
        typer.echo(json.dumps(events, ensure_ascii=False, indent=2))
        return

    if not day_appointments:
        console.print("[yellow]Nenhum agendamento neste dia.[/yellow]")
        return

    table = Table(
        title=f"Agendamentos {day.format('DD/MM/YYYY')}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Horário", style="bold")
    table.add_column("Cliente")
    table.add_column("Profissional", style="dim")
    table.add_column("Duração")
    table.add_column("Status")

    for appointment in day_appointments:
        table.add_row(
            f"{appointment.start.format('HH:mm')} - {appointment.end.format('HH:mm')}",
            appointment.client_name,
            staff_names.get(appointment.staff_id, f"Profissional #{appointment.staff_id}"),
            f"{appointment.duration_minutes()} min",
            status_label(appointment.status),
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def services(
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    List the services offered by the clinic.
    """
    try:
        config = _load_config(config_file, verbose)
        offered = _build_client(config, mock).get_services()
    except (FileNotFoundError, ValueError, ClinicSlotsError) as e:
        _fail(e)

    if not offered:
        console.print("[yellow]Nenhum serviço cadastrado.[/yellow]")
        return

    table = Table(title="Serviços", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="bold yellow")
    table.add_column("Serviço")
    table.add_column("Duração")
    table.add_column("Preço", justify="right")

    for service in offered:
        table.add_row(
            str(service.id),
            service.name,
            f"{service.duration} min",
            _format_brl(service.price),
        )

    console.print()
    console.print(table)
    console.print()


if __name__ == "__main__":
    app()
