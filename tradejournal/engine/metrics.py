"""Performance metrics over a ledger."""

from dataclasses import dataclass, field

from tradejournal.engine.numeric import finite, mean, round_to, safe_divide
from tradejournal.models import LedgerRow, Metrics, Settings, Trade


@dataclass(frozen=True)
class RStats:
    """R-multiple statistics of a ledger."""

    wins: int = 0
    losses: int = 0
    breakevens: int = 0
    win_rate: float = 0.0
    avg_win_r: float = 0.0
    avg_loss_r: float = 0.0
    expectancy_r: float = 0.0
    distribution: list[float] = field(default_factory=list)

    @property
    def decisive(self) -> int:
        return self.wins + self.losses


def derive_stats(ledger: list[LedgerRow]) -> RStats:
    """Derive win rate, average win/loss and expectancy from realized R.

    Breakeven rows (zero R) are counted but left out of the probabilities.
    """
    distribution = [finite(row.r_multiple) for row in ledger]
    wins = [r for r in distribution if r > 0]
    losses = [r for r in distribution if r < 0]
    decisive = len(wins) + len(losses)

    p_win = safe_divide(len(wins), decisive)
    p_loss = safe_divide(len(losses), decisive)
    avg_win_r = finite(mean(wins))
    avg_loss_r = finite(mean(losses))

    return RStats(
        wins=len(wins),
        losses=len(losses),
        breakevens=len(distribution) - decisive,
        win_rate=p_win,
        avg_win_r=avg_win_r,
        avg_loss_r=avg_loss_r,
        expectancy_r=finite(p_win * avg_win_r + p_loss * avg_loss_r),
        distribution=distribution,
    )


def max_drawdown_pct(ledger: list[LedgerRow], starting_balance: float) -> float:
    """Largest peak-to-trough decline of the balance curve, as a positive percentage."""
    peak = finite(starting_balance)
    worst = 0.0

    for row in ledger:
        if row.balance_after > peak:
            peak = row.balance_after
        if peak > 0:
            drawdown = (peak - row.balance_after) / peak * 100
            worst = max(worst, drawdown)

    return round_to(worst)


def calculate_metrics(
    trades: list[Trade], ledger: list[LedgerRow], settings: Settings
) -> Metrics:
    """Calculate a metrics snapshot.

    Args:
        trades: Trades the ledger was built from.
        ledger: Ledger produced by ``build_ledger``.
        settings: Settings the ledger was built with.

    Returns:
        Metrics. ``profit_factor`` is None when no trade lost money.
    """
    stats = derive_stats(ledger)
    starting_balance = finite(settings.starting_balance)

    net_pnl = 0.0
    if ledger:
        net_pnl = round_to(ledger[-1].balance_after - starting_balance)

    gross_profit = round_to(sum(row.pnl for row in ledger if row.pnl > 0))
    gross_loss = round_to(abs(sum(row.pnl for row in ledger if row.pnl < 0)))
    profit_factor = None if gross_loss == 0 else gross_profit / gross_loss

    return Metrics(
        trades=len(trades),
        wins=stats.wins,
        losses=stats.losses,
        breakevens=stats.breakevens,
        win_rate_pct=round_to(stats.win_rate * 100),
        avg_win_r=stats.avg_win_r,
        avg_loss_r=stats.avg_loss_r,
        expectancy_r=stats.expectancy_r,
        net_pnl=net_pnl,
        net_return_pct=round_to(safe_divide(net_pnl, starting_balance) * 100),
        profit_factor=profit_factor,
        max_drawdown_pct=max_drawdown_pct(ledger, starting_balance),
    )
