"""healthwatch CLI entry point."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from healthwatch.config.models import MonitorConfig

app = typer.Typer(
    name="healthwatch",
    help="healthwatch: periodic health probes with an aggregate report",
    no_args_is_help=True,
)
console = Console()

_STATUS_STYLES = {"ok": "green", "unreachable": "yellow"}


def _load(path: Path | None) -> MonitorConfig:
    from healthwatch.config.loader import load_config

    try:
        return load_config(path=path)
    except FileNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)


@app.command()
def serve(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Path to config file"),
    log_level: str = typer.Option("info", help="Logging level"),
) -> None:
    """Start probing in the background and serve GET /health."""
    import uvicorn

    from healthwatch.api.app import create_app
    from healthwatch.events.sink import cleanup_logs

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = _load(config_path)
    try:
        api = create_app(config)
    except OSError as exc:
        console.print(f"[red]Failed to open log directory {config.log_directory}: {exc}[/red]")
        raise typer.Exit(1)
    cleanup_logs(config.log_directory, config.log_retention_days)

    host, port = config.bind
    console.print(f"[bold]healthwatch[/bold] listening on http://{host}:{port}/health")
    uvicorn.run(api, host=host, port=port, log_level=log_level.lower())


@app.command()
def check(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Path to config file"),
) -> None:
    """Probe every component once and print the results."""
    import httpx

    from healthwatch.monitor.models import build_report
    from healthwatch.monitor.prober import PROBE_TIMEOUT
    from healthwatch.monitor.scheduler import ProbeScheduler
    from healthwatch.monitor.store import StatusStore

    config = _load(config_path)
    store = StatusStore()
    scheduler = ProbeScheduler(config.components, store, interval=config.check_interval_seconds)

    async def _once() -> None:
        async with httpx.AsyncClient(timeout=PROBE_TIMEOUT) as client:
            await scheduler.run_cycle(client)

    asyncio.run(_once())
    report = build_report(store.get_all())

    table = Table(title="healthwatch component status")
    table.add_column("Component", style="bold")
    table.add_column("Status")
    table.add_column("Endpoint")
    table.add_column("HTTP result")
    table.add_column("Error")

    for record in report.components:
        label = record.status.value
        style = _STATUS_STYLES.get(label, "red")
        table.add_row(
            record.name,
            f"[{style}]{label}[/{style}]",
            record.endpoint_status.value,
            record.http_result,
            record.error or "-",
        )

    console.print(table)
    if report.status == "ok":
        console.print("\n[green bold]All components ok.[/green bold]")
    else:
        console.print("\n[red bold]Degraded.[/red bold]")
        raise typer.Exit(1)


config_app = typer.Typer(name="config", help="Configuration commands")
app.add_typer(config_app)


@config_app.command("validate")
def config_validate(
    path: Path | None = typer.Option(None, "--path", "-p", help="Path to config file"),
) -> None:
    """Validate configuration file."""
    config = _load(path)
    console.print("[green]✓[/green] Configuration parses and validates")
    console.print(f"[green]✓[/green] {len(config.components)} component(s) with unique names")
    host, port = config.bind
    console.print(f"[green]✓[/green] Listen address resolves to {host}:{port}")
    if not config.components:
        console.print("[yellow]! No components configured; /health will always report ok[/yellow]")
    console.print("\n[green bold]Configuration is valid.[/green bold]")


@config_app.command("show")
def config_show(
    path: Path | None = typer.Option(None, "--path", "-p", help="Path to config file"),
) -> None:
    """Print resolved configuration."""
    config = _load(path)

    console.print(f"[bold]Listen address:[/bold] {config.listen_address}")
    console.print(f"[bold]Check interval:[/bold] {config.check_interval_seconds}s")
    console.print(f"[bold]Log directory:[/bold] {config.log_directory}")
    console.print(f"[bold]Log retention:[/bold] {config.log_retention_days} days\n")

    console.print("[bold]Components:[/bold]")
    for component in config.components:
        console.print(f"  {component.name} @ {component.endpoint}")


def main() -> None:
    app()
