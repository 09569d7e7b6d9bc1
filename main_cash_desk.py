"""Mini README: Entry point CLI for the SalonDesk cash control service.

Commands:
    * run - start the FastAPI application with uvicorn.
    * summary - print a day's recomputed summary from the stored register.
    * seed - add demo staff and payments to an empty register.

Settings come from ``SALONDESK_*`` environment variables or ``.env``.
"""

from __future__ import annotations

from typing import Optional

import typer
import uvicorn

from salondesk.configuration import get_settings
from salondesk.export import format_currency
from salondesk.logging_utils import configure_root_logger, level_for_environment
from salondesk.register import CashRegister

cli = typer.Typer(help="Run and inspect the salon cash register.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(level_for_environment(settings.environment))

    # Browsers cannot open 0.0.0.0, so point operators at localhost instead.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting SalonDesk on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "salondesk.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def summary(
    day: Optional[str] = typer.Option(None, help="Day to summarise as DD/MM/YYYY (default: today)."),
) -> None:
    """Print the recomputed summary for a day."""

    settings = get_settings()
    register = CashRegister.from_settings(settings)
    if register.load_error:
        typer.echo(register.load_error, err=True)
    try:
        day_summary = register.summary(day)
    except ValueError as error:
        raise typer.BadParameter(str(error), param_hint="--day") from error

    symbol = settings.currency_symbol
    typer.echo(f"Summary for {day_summary.date}")
    rows = [
        ("Opening float", day_summary.opening_float),
        ("Cash received", day_summary.total_cash),
        ("Change given", day_summary.total_change_given),
        ("Expenses", day_summary.total_expenses),
        ("Cash in register", day_summary.closing_cash_balance),
        ("Card and transfers", day_summary.total_transfers),
        ("Grand total", day_summary.grand_total),
    ]
    for label, amount in rows:
        typer.echo(f"  {label:<20} {format_currency(amount, symbol):>16}")


@cli.command()
def seed() -> None:
    """Insert demo staff and payments when the register is empty."""

    register = CashRegister.from_settings(get_settings())
    if register.load_error:
        typer.echo(register.load_error, err=True)
    result = register.seed_demo_data()
    if not result.success:
        typer.echo(result.error, err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Demo data added; grand total {result.payload.grand_total}")


if __name__ == "__main__":
    cli()
