"""Settings command."""

from typing import Optional

import click
from rich.table import Table

from tradejournal.cli.common import console, get_settings, get_store
from tradejournal.db.records import normalize_settings
from tradejournal.models import ProjectionMethod, ReturnMode, RiskType, Settings


def apply_updates(settings: Settings, updates: dict) -> Settings:
    """Apply the given (non-None) values and clamp them like stored settings."""
    changes = {key: value for key, value in updates.items() if value is not None}
    return normalize_settings({**settings.model_dump(mode="json"), **changes})


@click.command()
@click.option("--starting-balance", type=float, default=None, help="Starting balance (REAL).")
@click.option("--backtest-balance", type=float, default=None, help="Starting balance (BACKTEST).")
@click.option("--currency", default=None, help="Display currency code.")
@click.option(
    "--risk-type",
    type=click.Choice([t.value for t in RiskType], case_sensitive=False),
    default=None,
    help="Default risk type.",
)
@click.option("--risk", "risk_value", type=float, default=None, help="Default risk value.")
@click.option("--daily-stop", type=float, default=None, help="Daily stop in R (stored as negative).")
@click.option("--daily-take", type=float, default=None, help="Daily take in R.")
@click.option("--max-trades", type=click.IntRange(min=1), default=None, help="Maximum trades per day.")
@click.option(
    "--return-mode",
    type=click.Choice([m.value for m in ReturnMode], case_sensitive=False),
    default=None,
    help="Return percentage basis.",
)
@click.option(
    "--projection",
    type=click.Choice([m.value for m in ProjectionMethod], case_sensitive=False),
    default=None,
    help="Default projection method.",
)
@click.option("--defaults", is_flag=True, default=False, help="Restore default settings.")
@click.pass_context
def settings(
    ctx: click.Context,
    starting_balance: Optional[float],
    backtest_balance: Optional[float],
    currency: Optional[str],
    risk_type: Optional[str],
    risk_value: Optional[float],
    daily_stop: Optional[float],
    daily_take: Optional[float],
    max_trades: Optional[int],
    return_mode: Optional[str],
    projection: Optional[str],
    defaults: bool,
) -> None:
    """Show or update journal settings.

    \b
    Examples:
      tradejournal settings                          # show
      tradejournal settings --risk 0.5 --max-trades 2
    """
    store = get_store(ctx)
    current = Settings() if defaults else get_settings(store)

    updated = apply_updates(current, {
        "starting_balance": starting_balance,
        "backtest_starting_balance": backtest_balance,
        "currency": currency,
        "default_risk_type": risk_type.upper() if risk_type else None,
        "default_risk_value": risk_value,
        "daily_stop_r": daily_stop,
        "daily_take_r": daily_take,
        "max_trades_per_day": max_trades,
        "return_mode": return_mode.upper() if return_mode else None,
        "projection_method": projection.upper() if projection else None,
    })

    if defaults or updated != get_settings(store):
        store.save_settings(updated)
        console.print("[green]✓ Settings saved[/green]")

    table = Table(title="Settings", show_header=False, header_style="bold cyan")
    table.add_column("Setting", style="bold")
    table.add_column("Value", justify="right")
    for key, value in updated.model_dump(mode="json").items():
        table.add_row(key.replace("_", " "), str(value))
    console.print(table)
