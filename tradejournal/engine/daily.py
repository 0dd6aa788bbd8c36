"""Per-day aggregation and daily rule classification."""

from datetime import date

from tradejournal.engine.numeric import finite, round_to
from tradejournal.models import (
    DailySummary,
    DayRulesReport,
    DayStatus,
    LedgerRow,
    Settings,
    Trade,
)

# Summed R is rounded to this many places so float noise such as
# 1.9999999999999998 cannot flip a threshold comparison.
R_PRECISION = 6


def threshold_status(day_r: float, settings: Settings) -> DayStatus:
    """Compare a day's cumulative R with the daily stop and take.

    Shared by the retrospective summary and the forward simulation so both
    stop on the same sums.
    """
    rounded = round_to(day_r, R_PRECISION)
    if rounded <= finite(settings.daily_stop_r):
        return DayStatus.STOP_HIT
    if rounded >= finite(settings.daily_take_r):
        return DayStatus.TAKE_HIT
    return DayStatus.OK


def classify_day(trades: int, day_r: float, settings: Settings) -> DayStatus:
    """Classify a day; the first matching rule wins."""
    if trades > settings.max_trades_per_day:
        return DayStatus.LIMIT_EXCEEDED
    return threshold_status(day_r, settings)


def summarize_by_day(ledger: list[LedgerRow], settings: Settings) -> list[DailySummary]:
    """Group ledger rows by day and classify each day against the limits.

    Args:
        ledger: Ledger rows.
        settings: Settings holding the daily limits.

    Returns:
        One summary per traded day, ordered by date.
    """
    groups: dict[date, list[LedgerRow]] = {}
    for row in ledger:
        groups.setdefault(row.date, []).append(row)

    summaries = []
    for day in sorted(groups):
        rows = groups[day]
        day_r = round_to(sum(finite(row.r_multiple) for row in rows), R_PRECISION)
        summaries.append(
            DailySummary(
                date=day,
                trades=len(rows),
                day_pnl=round_to(sum(row.pnl for row in rows)),
                day_r=day_r,
                status=classify_day(len(rows), day_r, settings),
            )
        )

    return summaries


def summary_for_day(summaries: list[DailySummary], day: date) -> DailySummary:
    """Return the summary of ``day``, or an empty OK summary if nothing was traded."""
    for summary in summaries:
        if summary.date == day:
            return summary
    return DailySummary(date=day, trades=0, day_pnl=0.0, day_r=0.0, status=DayStatus.OK)


def validate_day_rules(trades: list[Trade], settings: Settings) -> DayRulesReport:
    """List the days whose trade count exceeds the configured maximum."""
    counts: dict[date, int] = {}
    for trade in trades:
        counts[trade.date] = counts.get(trade.date, 0) + 1

    warnings = [
        f"{day.isoformat()} exceeds the maximum of {settings.max_trades_per_day} "
        f"trades per day ({count})."
        for day, count in sorted(counts.items())
        if count > settings.max_trades_per_day
    ]
    return DayRulesReport(ok=not warnings, warnings=warnings)
