"""Shared helpers for CLI commands."""

from typing import Optional

import click
from rich.console import Console

from tradejournal.db.store import JournalStore
from tradejournal.engine import filter_by_account
from tradejournal.models import Account, Settings, Trade

console = Console()

ACCOUNT_CHOICE = click.Choice([a.value for a in Account], case_sensitive=False)


def account_option(func):
    """Add the ``--account`` option to a command."""
    return click.option(
        "--account",
        "-a",
        type=ACCOUNT_CHOICE,
        default=Account.REAL.value,
        show_default=True,
        help="Account to report on.",
    )(func)


def get_store(ctx: click.Context) -> JournalStore:
    """Get the journal store for the database selected on the command line."""
    return JournalStore(ctx.obj["db_path"])


def get_settings(store: JournalStore) -> Settings:
    """Stored settings, or the defaults when none were saved."""
    return store.load_settings() or Settings()


def load_account(store: JournalStore, account: str) -> tuple[list[Trade], Settings]:
    """Load the trades of one account and the settings seeded for it."""
    selected = Account(account.upper())
    trades = filter_by_account(store.get_trades(), selected)
    return trades, get_settings(store).for_account(selected)


def format_money(value: float, currency: str, signed: bool = False) -> str:
    """Format a currency amount with two decimals."""
    sign = "+" if signed and value > 0 else ""
    return f"{sign}{value:,.2f} {currency}"


def format_pct(value: float) -> str:
    return f"{value:+.2f}%"


def format_r(value: float) -> str:
    return f"{value:+.2f}R"


def colored(text: str, value: float) -> str:
    """Wrap ``text`` in green or red markup depending on the sign of ``value``."""
    color = "green" if value >= 0 else "red"
    return f"[{color}]{text}[/{color}]"


def format_profit_factor(value: Optional[float]) -> str:
    return "∞ (no losses)" if value is None else f"{value:.2f}"
