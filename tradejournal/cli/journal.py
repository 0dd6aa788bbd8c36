"""Journal commands: record, list, delete, import and export trades."""

import json
import time
import uuid
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    ACCOUNT_CHOICE,
    colored,
    console,
    format_money,
    format_r,
    get_settings,
    get_store,
)
from tradejournal.db.records import normalize_trades
from tradejournal.engine import build_ledger, filter_by_account
from tradejournal.models import Account, ResultType, RiskType, Settings, Trade


def build_trade(
    settings: Settings,
    pnl: Optional[float] = None,
    r_multiple: Optional[float] = None,
    trade_date: Optional[date] = None,
    symbol: Optional[str] = None,
    notes: Optional[str] = None,
    risk_type: Optional[str] = None,
    risk_value: Optional[float] = None,
    account: str = Account.REAL.value,
    trade_id: Optional[str] = None,
    created_at: Optional[float] = None,
) -> Trade:
    """Build a trade from command-line values, resolving defaults from settings.

    Exactly one of ``pnl`` and ``r_multiple`` must be given; it becomes the
    trade's authoritative result.

    Raises:
        click.UsageError: If neither or both results are given.
    """
    if (pnl is None) == (r_multiple is None):
        raise click.UsageError("Give exactly one of --pnl or --r.")

    if r_multiple is not None:
        result_type, result_value = ResultType.R_MULTIPLE, r_multiple
    else:
        result_type, result_value = ResultType.MONEY, pnl

    return Trade(
        id=trade_id or uuid.uuid4().hex[:8],
        date=trade_date or date.today(),
        symbol=symbol.upper() if symbol else None,
        notes=notes or None,
        risk_type=RiskType(risk_type.upper()) if risk_type else settings.default_risk_type,
        risk_value=settings.default_risk_value if risk_value is None else risk_value,
        account=Account(account.upper()),
        result_type=result_type,
        result_value=result_value,
        created_at=time.time() * 1000 if created_at is None else created_at,
    )


@click.command()
@click.option("--pnl", type=float, default=None, help="Realized P&L in currency.")
@click.option("--r", "r_multiple", type=float, default=None, help="Realized result in R.")
@click.option(
    "--date",
    "trade_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Trade date (YYYY-MM-DD). Defaults to today.",
)
@click.option("--symbol", "-s", default=None, help="Traded symbol.")
@click.option("--notes", "-n", default=None, help="Free-text notes.")
@click.option(
    "--risk-type",
    type=click.Choice([t.value for t in RiskType], case_sensitive=False),
    default=None,
    help="Override the default risk type.",
)
@click.option("--risk", "risk_value", type=float, default=None, help="Override the default risk value.")
@click.option("--account", "-a", type=ACCOUNT_CHOICE, default=Account.REAL.value, show_default=True)
@click.option("--id", "trade_id", default=None, help="Trade ID (generated when omitted).")
@click.pass_context
def add(
    ctx: click.Context,
    pnl: Optional[float],
    r_multiple: Optional[float],
    trade_date: Optional[datetime],
    symbol: Optional[str],
    notes: Optional[str],
    risk_type: Optional[str],
    risk_value: Optional[float],
    account: str,
    trade_id: Optional[str],
) -> None:
    """Record a trade.

    \b
    Examples:
      tradejournal add --r 2 --symbol ES          # 2R win at the default risk
      tradejournal add --pnl -120 --risk 150 --risk-type FIXED
      tradejournal add --r -1 --date 2024-05-02 --account BACKTEST
    """
    store = get_store(ctx)
    settings = get_settings(store)

    trade = build_trade(
        settings,
        pnl=pnl,
        r_multiple=r_multiple,
        trade_date=trade_date.date() if trade_date else None,
        symbol=symbol,
        notes=notes,
        risk_type=risk_type,
        risk_value=risk_value,
        account=account,
        trade_id=trade_id,
    )
    store.save_trade(trade)

    account_settings = settings.for_account(trade.account)
    ledger = build_ledger(filter_by_account(store.get_trades(), trade.account), account_settings)
    row = next((r for r in ledger if r.trade_id == trade.id), None)

    console.print(f"[green]✓ Trade {trade.id} recorded[/green]")
    if row is not None:
        console.print(
            f"  Risk {format_money(row.risk_amount, settings.currency)}  "
            f"P&L {colored(format_money(row.pnl, settings.currency, signed=True), row.pnl)}  "
            f"{colored(format_r(row.r_multiple), row.r_multiple)}  "
            f"Balance {format_money(row.balance_after, settings.currency)}"
        )


@click.command()
@click.argument("trade_id")
@click.pass_context
def rm(ctx: click.Context, trade_id: str) -> None:
    """Delete a trade by ID."""
    store = get_store(ctx)
    if not store.delete_trade(trade_id):
        raise click.ClickException(f"Trade {trade_id} not found")
    console.print(f"[green]✓ Trade {trade_id} deleted[/green]")


@click.command()
@click.option(
    "--account",
    "-a",
    type=ACCOUNT_CHOICE,
    default=None,
    help="Only list trades of this account.",
)
@click.pass_context
def trades(ctx: click.Context, account: Optional[str]) -> None:
    """List recorded trades."""
    store = get_store(ctx)
    selected = Account(account.upper()) if account else None
    records = store.get_trades(account=selected)

    if not records:
        console.print(Panel(
            "[dim]No trades recorded yet[/dim]",
            title="[bold]Trades[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Trades", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="bold")
    table.add_column("Date")
    table.add_column("Symbol")
    table.add_column("Account")
    table.add_column("Risk", justify="right")
    table.add_column("Result", justify="right")
    table.add_column("Notes", max_width=30)

    for trade in records:
        risk = f"{trade.risk_value:g}%" if trade.risk_type == RiskType.PERCENT else f"{trade.risk_value:,.2f}"
        if trade.result_type == ResultType.R_MULTIPLE:
            result = format_r(trade.result_value)
        else:
            result = f"{trade.result_value:+,.2f}"
        table.add_row(
            trade.id,
            trade.date.isoformat(),
            trade.symbol or "-",
            trade.account.value,
            risk,
            colored(result, trade.result_value),
            trade.notes or "-",
        )

    console.print(table)


@click.command(name="export")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write to this file instead of stdout.",
)
@click.pass_context
def export_trades(ctx: click.Context, output: Optional[str]) -> None:
    """Export all trades as JSON."""
    store = get_store(ctx)
    payload = json.dumps(
        [trade.model_dump(mode="json") for trade in store.get_trades()],
        indent=2,
    )

    if output is None:
        click.echo(payload)
        return

    Path(output).write_text(payload, encoding="utf-8")
    console.print(f"[green]✓ Exported trades to {output}[/green]")


@click.command(name="import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--replace", is_flag=True, default=False, help="Replace the journal instead of merging.")
@click.pass_context
def import_trades(ctx: click.Context, path: str, replace: bool) -> None:
    """Import trades from a JSON file.

    Records exported by this tool or by the browser journal (camelCase keys)
    are accepted. Records without an id are skipped.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Could not read {path}: {e}")

    if not isinstance(data, list):
        raise click.ClickException(f"{path} does not contain a list of trades")

    imported = normalize_trades(data, date.today(), time.time() * 1000)
    store = get_store(ctx)

    if replace:
        store.replace_trades(imported)
    else:
        for trade in imported:
            store.save_trade(trade)

    skipped = len(data) - len(imported)
    console.print(f"[green]✓ Imported {len(imported)} trades[/green]")
    if skipped:
        console.print(f"[yellow]Skipped {skipped} records without an id[/yellow]")
