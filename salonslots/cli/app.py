"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..adapters.mock_store import MockStorageClient
from ..adapters.rest_client import RestStorageClient
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import ConfigurationError, SalonSlotsError
from ..domain.slot_calculator import SlotCalculator
from ..services.availability import AvailabilityService, AvailabilityStatus

app = typer.Typer(
    name="salonslots",
    help="Horários disponíveis para agendamento de profissionais do salão",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]
MockOption = Annotated[
    bool,
    typer.Option("--mock", help="Usar dados de exemplo em vez do banco de dados.")
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Mostrar logs de depuração.")
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True
    )


def _load_config(config_file: Optional[Path], mock: bool) -> AppConfig:
    """
    Load the configuration. In mock mode a missing file falls back to defaults.
    """
    config_path = config_file or get_default_config_path()
    if mock and not config_path.exists():
        return AppConfig()
    return AppConfig.load_from_yaml(config_path)


def _build_service(config: AppConfig, mock: bool):
    """Create the availability service and its storage client."""
    if mock:
        client = MockStorageClient(data_file=config.mock_data_file)
    else:
        if not config.storage.base_url:
            raise ConfigurationError("storage.base_url is not configured.")
        client = RestStorageClient(
            base_url=config.storage.base_url,
            api_key=config.storage.resolve_api_key(),
            timeout=config.storage.timeout_seconds
        )

    calculator = SlotCalculator(slot_interval_minutes=config.defaults.slot_interval_minutes)
    return AvailabilityService(storage_client=client, slot_calculator=calculator), client


def _parse_day(value: Optional[str], tz: str):
    if not value:
        return pendulum.now(tz).start_of("day")
    try:
        return pendulum.from_format(value, "YYYY-MM-DD", tz=tz).start_of("day")
    except ValueError as e:
        console.print(f"[red]Erro ao interpretar a data '{value}': {e}[/red]")
        raise typer.Exit(1)


@app.command()
def slots(
    professional_id: Annotated[Optional[int], typer.Argument(help="ID do profissional")] = None,
    date: Annotated[Optional[str], typer.Option("--date", help="Dia (YYYY-MM-DD). Padrão: hoje")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Duração do serviço em minutos")] = None,
    hide_past: Annotated[bool, typer.Option("--hide-past", help="Ocultar horários que já passaram.")] = False,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    List bookable start times of a professional on one day.

    Examples:

        salonslots slots 1 --date 2024-11-25 --duration 60

        salonslots slots 1 --mock --date 2024-11-25
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file, mock)
        tz = config.timezone
        day = _parse_day(date, tz)
        service_duration = duration if duration is not None else config.defaults.service_duration_minutes

        if duration is not None and duration <= 0:
            console.print("[red]A duração deve ser maior que zero.[/red]")
            raise typer.Exit(1)

        if mock:
            console.print("[yellow]⚠  MODO MOCK: usando dados de exemplo[/yellow]\n")

        service, _ = _build_service(config, mock)
        now = pendulum.now(tz) if (hide_past or config.defaults.hide_elapsed_slots) else None

        result = asyncio.run(
            service.find_slots(
                professional_id=professional_id,
                selected_date=day,
                service_duration_minutes=service_duration,
                timezone=tz,
                now=now
            )
        )

        if result.professional is not None:
            console.print(f"[bold cyan]{result.professional.name}[/bold cyan]")
            console.print(f"   Expediente: {result.professional.describe_hours()}")
        console.print(f"   Dia: {day.format('DD/MM/YYYY')}")
        console.print(f"   Duração: {service_duration} minutos\n")

        if result.status is not AvailabilityStatus.AVAILABLE:
            message = result.message
            if result.absence is not None and result.absence.reason:
                message += f" ({result.absence.reason})"
            console.print(f"[yellow]⚠ {message}[/yellow]")
            return

        console.print(f"[bold green]✓ {len(result.slots)} horário(s) disponível(is):[/bold green]\n")
        for slot in result.slots:
            console.print(f"  {slot.format_display()}")
        console.print()

    except (SalonSlotsError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def professionals(
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    List all professionals and their working hours.
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file, mock)
        service, _ = _build_service(config, mock)
        rows = asyncio.run(service.list_professionals())

        if not rows:
            console.print("[yellow]Nenhum profissional cadastrado.[/yellow]")
            return

        table = Table(
            title="Profissionais",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("ID", style="dim")
        table.add_column("Nome", style="bold yellow")
        table.add_column("Expediente")

        for professional in rows:
            table.add_row(str(professional.id), professional.name, professional.describe_hours())

        console.print()
        console.print(table)
        console.print()

    except (SalonSlotsError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def stats(
    professional_id: Annotated[int, typer.Argument(help="ID do profissional")],
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Show booking statistics of a professional.
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file, mock)
        service, _ = _build_service(config, mock)
        result = asyncio.run(
            service.get_stats(
                professional_id=professional_id,
                timezone=config.timezone,
                now=pendulum.now(config.timezone)
            )
        )

        top_service = f"{result.top_service[0]} ({result.top_service[1]})" if result.top_service else "-"
        top_client = f"{result.top_client[0]} ({result.top_client[1]})" if result.top_client else "-"

        console.print(Panel.fit(
            f"[bold]Total de serviços:[/bold] {result.total_services}\n"
            f"[bold]Este mês:[/bold] {result.monthly_services}\n"
            f"[bold]Esta semana:[/bold] {result.weekly_services}\n"
            f"[bold]Serviço mais realizado:[/bold] {top_service}\n"
            f"[bold]Cliente mais frequente:[/bold] {top_client}",
            title=f"Profissional {professional_id}"
        ))

    except (SalonSlotsError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def test_connection(
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Test the connection to the salon database.
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file, mock=False)
        _, client = _build_service(config, mock=False)

        console.print("\n[bold]Testando conexão com o banco de dados...[/bold]\n")
        count = asyncio.run(client.test_connection())

        console.print(Panel.fit(
            f"[bold green]✓ Conexão estabelecida![/bold green]\n\n"
            f"[bold]Endpoint:[/bold] {config.storage.base_url}\n"
            f"[bold]Profissionais visíveis:[/bold] {count}",
            title="✓ Teste de conexão"
        ))
        console.print()

    except (SalonSlotsError, FileNotFoundError, ValueError) as e:
        console.print(f"\n[bold red]✗ Erro:[/bold red] {e}\n")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]salonslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
