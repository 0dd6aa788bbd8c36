"""Tests for the daily rules summarizer.

**Feature: trade-journal**
"""

from datetime import date

from hypothesis import given, settings

from strategies import BASE_DATE, make_trade, trade_lists
from tradejournal.engine import (
    build_ledger,
    summarize_by_day,
    summary_for_day,
    threshold_status,
    validate_day_rules,
)
from tradejournal.models import DayStatus, Settings


def _summaries(trades, journal):
    return summarize_by_day(build_ledger(trades, journal), journal)


class TestDayClassification:
    """Status precedence: limit, then stop, then take."""

    def test_stop_hit(self):
        journal = Settings(starting_balance=10000, daily_stop_r=-1, max_trades_per_day=2)
        trades = [
            make_trade("a", result=-0.6, created_at=1),
            make_trade("b", result=-0.6, created_at=2),
        ]
        summaries = _summaries(trades, journal)

        assert len(summaries) == 1
        assert summaries[0].trades == 2
        assert summaries[0].day_r == -1.2
        assert summaries[0].status == DayStatus.STOP_HIT

    def test_take_hit(self):
        journal = Settings(daily_take_r=2)
        summaries = _summaries([make_trade("a", result=2)], journal)

        assert summaries[0].status == DayStatus.TAKE_HIT

    def test_limit_exceeded_takes_precedence(self):
        journal = Settings(daily_stop_r=-1, max_trades_per_day=2)
        trades = [make_trade(f"t{i}", result=-1, created_at=i) for i in range(3)]
        summaries = _summaries(trades, journal)

        assert summaries[0].status == DayStatus.LIMIT_EXCEEDED

    def test_ok_day(self):
        journal = Settings(daily_stop_r=-1, daily_take_r=2)
        summaries = _summaries([make_trade("a", result=0.5)], journal)

        assert summaries[0].status == DayStatus.OK

    def test_take_at_float_sum_boundary(self):
        journal = Settings(daily_take_r=0.3, max_trades_per_day=2)
        trades = [
            make_trade("a", result=0.1, created_at=1),
            make_trade("b", result=0.2, created_at=2),
        ]
        summaries = _summaries(trades, journal)

        assert summaries[0].status == DayStatus.TAKE_HIT

    def test_take_after_many_small_trades(self):
        journal = Settings(daily_take_r=0.8, max_trades_per_day=10)
        trades = [make_trade(f"t{i}", result=0.1, created_at=i) for i in range(8)]
        summaries = _summaries(trades, journal)

        assert summaries[0].day_r == 0.8
        assert summaries[0].status == DayStatus.TAKE_HIT
        assert threshold_status(sum([0.1] * 8), journal) == DayStatus.TAKE_HIT


class TestDailyGrouping:
    """Grouping and ordering of daily summaries."""

    def test_groups_and_sums_per_day(self):
        journal = Settings(starting_balance=10000, max_trades_per_day=2)
        trades = [
            make_trade("c", day=3, result=1),
            make_trade("a", day=0, result=1, created_at=1),
            make_trade("b", day=0, result=-0.5, created_at=2),
        ]
        summaries = _summaries(trades, journal)

        assert [s.date for s in summaries] == [date(2024, 1, 1), date(2024, 1, 4)]
        assert summaries[0].trades == 2
        assert summaries[0].day_r == 0.5
        # +100 on 10000, then -50.50 on 10100
        assert summaries[0].day_pnl == 49.5

    def test_empty_ledger(self):
        assert summarize_by_day([], Settings()) == []

    @given(trades=trade_lists())
    @settings(max_examples=100)
    def test_day_counts_cover_ledger(self, trades):
        summaries = _summaries(trades, Settings(starting_balance=10000))

        assert sum(s.trades for s in summaries) == len(trades)
        assert all(a.date < b.date for a, b in zip(summaries, summaries[1:]))


class TestSummaryForDay:
    """Lookup of the summary for an explicit reference date."""

    def test_found(self):
        summaries = _summaries([make_trade("a", result=1)], Settings())

        assert summary_for_day(summaries, BASE_DATE).trades == 1

    def test_missing_day_is_empty_ok(self):
        summary = summary_for_day([], date(2024, 6, 1))

        assert summary.date == date(2024, 6, 1)
        assert summary.trades == 0
        assert summary.day_pnl == 0
        assert summary.status == DayStatus.OK


class TestValidateDayRules:
    """Advisory trade-count warnings."""

    def test_no_warnings_within_limit(self):
        report = validate_day_rules([make_trade("a")], Settings(max_trades_per_day=1))

        assert report.ok
        assert report.warnings == []

    def test_warns_for_each_day_over_limit(self):
        trades = [
            make_trade("a", day=0),
            make_trade("b", day=0),
            make_trade("c", day=1),
        ]
        report = validate_day_rules(trades, Settings(max_trades_per_day=1))

        assert not report.ok
        assert len(report.warnings) == 1
        assert "2024-01-01" in report.warnings[0]
        assert "(2)" in report.warnings[0]
