"""Risk amount calculation."""

from tradejournal.engine.numeric import finite, round_to
from tradejournal.models.trade import RiskType


def risk_amount(balance_before: float, risk_type: RiskType, risk_value: float) -> float:
    """Calculate the currency amount at risk on a trade.

    Args:
        balance_before: Account balance when the trade is taken.
        risk_type: PERCENT of balance or FIXED currency amount.
        risk_value: Percentage points or currency units.

    Returns:
        Non-negative amount rounded to 2 decimals.
    """
    balance = finite(balance_before)
    value = finite(risk_value)

    if risk_type == RiskType.PERCENT:
        amount = balance * value / 100
    else:
        amount = value

    return round_to(max(0.0, amount))
