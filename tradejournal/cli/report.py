"""Report commands: ledger, metrics and daily rules."""

from datetime import date, datetime
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    account_option,
    colored,
    console,
    format_money,
    format_pct,
    format_profit_factor,
    format_r,
    get_store,
    load_account,
)
from tradejournal.engine import (
    build_ledger,
    calculate_metrics,
    summarize_by_day,
    summary_for_day,
    validate_day_rules,
)
from tradejournal.models import DayStatus

STATUS_STYLES = {
    DayStatus.OK: "[green]OK[/green]",
    DayStatus.STOP_HIT: "[red]Stop hit[/red]",
    DayStatus.TAKE_HIT: "[cyan]Take hit[/cyan]",
    DayStatus.LIMIT_EXCEEDED: "[yellow]Limit exceeded[/yellow]",
}


def _empty_panel(title: str) -> None:
    console.print(Panel(
        "[dim]No trades recorded for this account[/dim]",
        title=f"[bold]{title}[/bold]",
        border_style="dim",
    ))


@click.command()
@account_option
@click.pass_context
def ledger(ctx: click.Context, account: str) -> None:
    """Show the running-balance ledger."""
    trades, settings = load_account(get_store(ctx), account)
    rows = build_ledger(trades, settings)

    if not rows:
        _empty_panel("Ledger")
        return

    currency = settings.currency
    table = Table(title=f"Ledger ({account.upper()})", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Date", style="bold")
    table.add_column("Trade")
    table.add_column("Before", justify="right")
    table.add_column("Risk", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("R", justify="right")
    table.add_column("Return", justify="right")
    table.add_column("After", justify="right")

    for row in rows:
        table.add_row(
            str(row.index),
            row.date.isoformat(),
            row.trade_id,
            format_money(row.balance_before, currency),
            format_money(row.risk_amount, currency),
            colored(format_money(row.pnl, currency, signed=True), row.pnl),
            colored(format_r(row.r_multiple), row.r_multiple),
            colored(format_pct(row.return_pct), row.return_pct),
            format_money(row.balance_after, currency),
        )

    console.print(table)


@click.command()
@account_option
@click.pass_context
def metrics(ctx: click.Context, account: str) -> None:
    """Show performance metrics."""
    trades, settings = load_account(get_store(ctx), account)
    rows = build_ledger(trades, settings)
    result = calculate_metrics(trades, rows, settings)
    currency = settings.currency

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Trades", str(result.trades))
    table.add_row("Wins / Losses / BE", f"{result.wins} / {result.losses} / {result.breakevens}")
    table.add_row("Win rate", f"{result.win_rate_pct:.2f}%")
    table.add_row("Avg win", format_r(result.avg_win_r))
    table.add_row("Avg loss", format_r(result.avg_loss_r))
    table.add_row("Expectancy", colored(format_r(result.expectancy_r), result.expectancy_r))
    table.add_row("Net P&L", colored(format_money(result.net_pnl, currency, signed=True), result.net_pnl))
    table.add_row("Net return", colored(format_pct(result.net_return_pct), result.net_return_pct))
    table.add_row("Profit factor", format_profit_factor(result.profit_factor))
    table.add_row("Max drawdown", f"[red]{result.max_drawdown_pct:.2f}%[/red]")

    console.print(Panel(
        table,
        title=f"[bold]Metrics ({account.upper()})[/bold]",
        border_style="cyan",
    ))


@click.command()
@account_option
@click.option(
    "--date",
    "reference_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Day to highlight (YYYY-MM-DD). Defaults to today.",
)
@click.pass_context
def daily(ctx: click.Context, account: str, reference_date: Optional[datetime]) -> None:
    """Show per-day results against the daily stop, take and trade limits."""
    trades, settings = load_account(get_store(ctx), account)
    summaries = summarize_by_day(build_ledger(trades, settings), settings)
    day = reference_date.date() if reference_date else date.today()
    currency = settings.currency

    focus = summary_for_day(summaries, day)
    console.print(Panel(
        f"Trades: {focus.trades}/{settings.max_trades_per_day}\n"
        f"P&L: {colored(format_money(focus.day_pnl, currency, signed=True), focus.day_pnl)}\n"
        f"R: {colored(format_r(focus.day_r), focus.day_r)}\n"
        f"Status: {STATUS_STYLES[focus.status]}",
        title=f"[bold]{day.strftime('%A, %d %B %Y')}[/bold]",
        border_style="cyan",
    ))

    if not summaries:
        console.print("[dim]No trades recorded for this account[/dim]")
        return

    table = Table(title="Daily Rules", show_header=True, header_style="bold cyan")
    table.add_column("Date", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("R", justify="right")
    table.add_column("Status")

    for summary in summaries:
        table.add_row(
            summary.date.isoformat(),
            str(summary.trades),
            colored(format_money(summary.day_pnl, currency, signed=True), summary.day_pnl),
            colored(format_r(summary.day_r), summary.day_r),
            STATUS_STYLES[summary.status],
        )

    console.print(table)

    report = validate_day_rules(trades, settings)
    for warning in report.warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]")
