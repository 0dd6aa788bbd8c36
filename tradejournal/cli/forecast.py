"""Projection command."""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    account_option,
    colored,
    console,
    format_money,
    format_r,
    get_store,
    load_account,
)
from tradejournal.config import get_projection_settings
from tradejournal.engine import SeededRandomSource, SystemRandomSource, project
from tradejournal.models import ProjectionMethod, ProjectionResult


def projection_rows(result: ProjectionResult, step: int = 1) -> list[tuple]:
    """Rows of ``(day, p10, p50, p90)`` every ``step`` days, always including the last day."""
    step = max(1, step)
    last = len(result.path) - 1
    days = list(range(0, last + 1, step))
    if days[-1] != last:
        days.append(last)

    if result.bands is None:
        return [(day, result.path[day], result.path[day], result.path[day]) for day in days]
    bands = result.bands
    return [(day, bands.p10[day], bands.p50[day], bands.p90[day]) for day in days]


@click.command(name="project")
@account_option
@click.option(
    "--method",
    "-m",
    type=click.Choice([m.value for m in ProjectionMethod], case_sensitive=False),
    default=None,
    help="Projection method. Defaults to the method in settings.",
)
@click.option("--days", "-d", type=int, default=None, help="Days to project.")
@click.option("--sims", type=int, default=None, help="Simulation trials (DAILY_SIM).")
@click.option("--seed", type=int, default=None, help="Seed for a reproducible simulation.")
@click.option("--step", type=int, default=1, show_default=True, help="Show every Nth day.")
@click.pass_context
def project_cmd(
    ctx: click.Context,
    account: str,
    method: Optional[str],
    days: Optional[int],
    sims: Optional[int],
    seed: Optional[int],
    step: int,
) -> None:
    """Project the account balance forward.

    \b
    Examples:
      tradejournal project                       # deterministic, 30 days
      tradejournal project -m DAILY_SIM --seed 7 # reproducible simulation
    """
    trades, settings = load_account(get_store(ctx), account)
    projection_settings = get_projection_settings(
        ctx.obj.get("config", {}),
        method=ProjectionMethod(method.upper()) if method else settings.projection_method,
        horizon_days=days,
        simulations=sims,
    )
    source = SeededRandomSource(seed) if seed is not None else SystemRandomSource()
    result = project(trades, settings, projection_settings, source)
    currency = settings.currency
    summary = result.summary

    lines = [
        f"Method: {result.method.value}",
        f"Expectancy: {format_r(result.expectancy_r)}",
        f"Start: {format_money(summary.start_balance, currency)}",
    ]
    if result.bands is None:
        change = summary.end_balance_p50 - summary.start_balance
        lines.append(f"End: {colored(format_money(summary.end_balance_p50, currency), change)}")
    else:
        lines.append(f"Simulations: {result.simulations}")
        lines.append(
            f"End P10 / P50 / P90: {format_money(summary.end_balance_p10, currency)} / "
            f"{format_money(summary.end_balance_p50, currency)} / "
            f"{format_money(summary.end_balance_p90, currency)}"
        )

    console.print(Panel(
        "\n".join(lines),
        title=f"[bold]Projection ({result.horizon_days} days)[/bold]",
        border_style="cyan",
    ))

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Day", justify="right")
    if result.bands is None:
        table.add_column("Balance", justify="right")
    else:
        table.add_column("P10", justify="right")
        table.add_column("P50", justify="right")
        table.add_column("P90", justify="right")

    for day, p10, p50, p90 in projection_rows(result, step):
        if result.bands is None:
            table.add_row(str(day), format_money(p50, currency))
        else:
            table.add_row(
                str(day),
                format_money(p10, currency),
                format_money(p50, currency),
                format_money(p90, currency),
            )

    console.print(table)
