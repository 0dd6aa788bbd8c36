"""Forward balance projection.

Two methods are available:

* DETERMINISTIC walks the balance forward one expectancy-sized trade per day.
* DAILY_SIM runs independent trials that resample historical R-multiples,
  take up to ``max_trades_per_day`` trades a day and stop a day early once
  the daily take or stop is reached. The P10/P50/P90 balance of each day
  across trials forms the bands.
"""

import math
from typing import Optional

from tradejournal.engine.daily import threshold_status
from tradejournal.engine.ledger import build_ledger, final_balance
from tradejournal.engine.metrics import RStats, derive_stats
from tradejournal.engine.numeric import finite, percentile, round_to
from tradejournal.engine.random_source import SystemRandomSource, UniformSource
from tradejournal.engine.risk import risk_amount
from tradejournal.models import (
    DayStatus,
    PercentileBands,
    ProjectionMethod,
    ProjectionResult,
    ProjectionSettings,
    ProjectionSummary,
    Settings,
    Trade,
)

# Fewer trades than this are not used to estimate expectancy.
MIN_HISTORY_TRADES = 3


def _horizon(projection_settings: ProjectionSettings) -> int:
    return max(0, projection_settings.horizon_days)


def _expectancy(stats: RStats, projection_settings: ProjectionSettings) -> float:
    if len(stats.distribution) < MIN_HISTORY_TRADES:
        return finite(projection_settings.fallback_expectancy_r)
    return stats.expectancy_r


def _take_trade(balance: float, r_multiple: float, settings: Settings) -> float:
    """Apply one trade of ``r_multiple`` at the default risk and return the new balance."""
    risk = risk_amount(balance, settings.default_risk_type, settings.default_risk_value)
    pnl = round_to(risk * r_multiple)
    return round_to(balance + pnl)


def _sample(pool: list[float], source: UniformSource) -> float:
    """Draw one value uniformly from ``pool`` with replacement."""
    u = min(max(finite(source.next_uniform()), 0.0), 1.0)
    index = min(math.floor(u * len(pool)), len(pool) - 1)
    return pool[index]


def project_deterministic(
    start_balance: float,
    expectancy_r: float,
    horizon_days: int,
    settings: Settings,
) -> list[float]:
    """Walk the balance forward one expectancy trade per day.

    Returns:
        Path of ``horizon_days + 1`` balances starting at ``start_balance``.
    """
    balance = round_to(start_balance)
    path = [balance]
    for _ in range(horizon_days):
        balance = _take_trade(balance, expectancy_r, settings)
        path.append(balance)
    return path


def simulate_trial(
    start_balance: float,
    pool: list[float],
    horizon_days: int,
    settings: Settings,
    source: UniformSource,
) -> list[float]:
    """Run one simulated trial and return its end-of-day balances."""
    max_trades = max(1, settings.max_trades_per_day)

    balance = round_to(start_balance)
    path = [balance]
    for _ in range(horizon_days):
        day_r = 0.0
        for _ in range(max_trades):
            r_multiple = _sample(pool, source)
            balance = _take_trade(balance, r_multiple, settings)
            day_r += r_multiple
            if threshold_status(day_r, settings) != DayStatus.OK:
                break
        path.append(balance)
    return path


def project_daily_sim(
    start_balance: float,
    stats: RStats,
    horizon_days: int,
    simulations: int,
    settings: Settings,
    source: UniformSource,
) -> PercentileBands:
    """Run the daily simulation and reduce the trials to percentile bands."""
    pool = stats.distribution or [stats.avg_win_r, stats.avg_loss_r]
    trials = [
        simulate_trial(start_balance, pool, horizon_days, settings, source)
        for _ in range(max(1, simulations))
    ]

    p10, p50, p90 = [], [], []
    for day in range(horizon_days + 1):
        balances = [trial[day] for trial in trials]
        p10.append(round_to(percentile(balances, 0.1)))
        p50.append(round_to(percentile(balances, 0.5)))
        p90.append(round_to(percentile(balances, 0.9)))

    return PercentileBands(p10=p10, p50=p50, p90=p90)


def project(
    trades: list[Trade],
    settings: Settings,
    projection_settings: ProjectionSettings,
    source: Optional[UniformSource] = None,
) -> ProjectionResult:
    """Project the account balance forward.

    Args:
        trades: Historical trades of one account.
        settings: Resolved settings for that account.
        projection_settings: Method, horizon and simulation count.
        source: Random source for DAILY_SIM. Defaults to a system source.

    Returns:
        Projection path, percentile bands (DAILY_SIM only) and summary.
    """
    ledger = build_ledger(trades, settings)
    stats = derive_stats(ledger)
    start_balance = final_balance(ledger, settings)
    horizon_days = _horizon(projection_settings)
    expectancy_r = _expectancy(stats, projection_settings)

    if projection_settings.method == ProjectionMethod.DETERMINISTIC:
        path = project_deterministic(start_balance, expectancy_r, horizon_days, settings)
        end_balance = path[-1]
        return ProjectionResult(
            method=ProjectionMethod.DETERMINISTIC,
            horizon_days=horizon_days,
            simulations=1,
            expectancy_r=expectancy_r,
            path=path,
            summary=ProjectionSummary(
                start_balance=round_to(start_balance),
                end_balance_p10=end_balance,
                end_balance_p50=end_balance,
                end_balance_p90=end_balance,
            ),
        )

    simulations = max(1, projection_settings.simulations)
    bands = project_daily_sim(
        start_balance,
        stats,
        horizon_days,
        simulations,
        settings,
        source or SystemRandomSource(),
    )
    return ProjectionResult(
        method=ProjectionMethod.DAILY_SIM,
        horizon_days=horizon_days,
        simulations=simulations,
        expectancy_r=expectancy_r,
        path=bands.p50,
        bands=bands,
        summary=ProjectionSummary(
            start_balance=round_to(start_balance),
            end_balance_p10=bands.p10[-1],
            end_balance_p50=bands.p50[-1],
            end_balance_p90=bands.p90[-1],
        ),
    )
