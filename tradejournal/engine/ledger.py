"""Ledger construction: chronological walk with a compounding balance."""

from tradejournal.engine.numeric import finite, round_to, safe_divide
from tradejournal.engine.risk import risk_amount
from tradejournal.models import (
    Account,
    LedgerRow,
    ResultType,
    ReturnMode,
    Settings,
    Trade,
)


def sort_trades(trades: list[Trade]) -> list[Trade]:
    """Order trades by date, then creation time, then id."""
    return sorted(trades, key=lambda t: (t.date, finite(t.created_at), t.id))


def filter_by_account(trades: list[Trade], account: Account) -> list[Trade]:
    """Select the trades of one account partition."""
    return [t for t in trades if t.account == account]


def build_ledger(trades: list[Trade], settings: Settings) -> list[LedgerRow]:
    """Build the running-balance ledger.

    Risk is taken against the running balance, so position size compounds
    as the account grows or shrinks. Currency and percentage fields are
    rounded to 2 decimals where they are computed.

    Args:
        trades: Trades of a single account, in any order.
        settings: Resolved settings for that account.

    Returns:
        One row per trade in chronological order.
    """
    starting_balance = finite(settings.starting_balance)
    balance = starting_balance
    ledger: list[LedgerRow] = []

    for index, trade in enumerate(sort_trades(trades), start=1):
        balance_before = balance
        risk = risk_amount(balance_before, trade.risk_type, trade.risk_value)
        result = finite(trade.result_value)

        if trade.result_type == ResultType.R_MULTIPLE:
            r_multiple = result
            pnl = round_to(risk * r_multiple)
        else:
            pnl = round_to(result)
            r_multiple = pnl / risk if risk > 0 else 0.0

        balance_after = round_to(balance_before + pnl)

        if settings.return_mode == ReturnMode.ON_PREV_BALANCE:
            base = balance_before
        else:
            base = starting_balance
        return_pct = round_to(safe_divide(pnl, base) * 100)

        ledger.append(
            LedgerRow(
                index=index,
                trade_id=trade.id,
                date=trade.date,
                balance_before=balance_before,
                risk_amount=risk,
                pnl=pnl,
                r_multiple=r_multiple,
                balance_after=balance_after,
                return_pct=return_pct,
            )
        )
        balance = balance_after

    return ledger


def final_balance(ledger: list[LedgerRow], settings: Settings) -> float:
    """Balance after the last ledger row, or the starting balance."""
    if not ledger:
        return round_to(settings.starting_balance)
    return ledger[-1].balance_after
