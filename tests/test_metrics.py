"""Tests for the metrics aggregator.

**Feature: trade-journal**
"""

import math

import pytest
from hypothesis import given, settings

from strategies import make_trade, trade_lists
from tradejournal.engine import build_ledger, calculate_metrics, derive_stats
from tradejournal.models import ResultType, RiskType, Settings


def _metrics(trades, journal):
    return calculate_metrics(trades, build_ledger(trades, journal), journal)


def _fixed(trade_id, day, result, result_type=ResultType.R_MULTIPLE):
    return make_trade(
        trade_id,
        day=day,
        result=result,
        result_type=result_type,
        risk_type=RiskType.FIXED,
        risk_value=100,
    )


class TestMetricsScenarios:
    """Worked metrics examples."""

    def test_empty_journal(self):
        metrics = _metrics([], Settings(starting_balance=10000))

        assert metrics.trades == 0
        assert metrics.win_rate_pct == 0
        assert metrics.expectancy_r == 0
        assert metrics.net_pnl == 0
        assert metrics.net_return_pct == 0
        assert metrics.profit_factor is None
        assert metrics.max_drawdown_pct == 0

    def test_mixed_results(self):
        trades = [
            _fixed("a", 0, 2),
            _fixed("b", 1, -1),
            _fixed("c", 2, 0),
            _fixed("d", 3, 1),
        ]
        metrics = _metrics(trades, Settings(starting_balance=10000))

        assert metrics.trades == 4
        assert (metrics.wins, metrics.losses, metrics.breakevens) == (2, 1, 1)
        assert metrics.win_rate_pct == 66.67
        assert metrics.avg_win_r == pytest.approx(1.5)
        assert metrics.avg_loss_r == pytest.approx(-1.0)
        assert metrics.expectancy_r == pytest.approx(2 / 3 * 1.5 - 1 / 3)
        assert metrics.net_pnl == 200
        assert metrics.net_return_pct == 2.0
        assert metrics.profit_factor == pytest.approx(3.0)
        assert metrics.max_drawdown_pct == 0.98

    def test_profit_factor_undefined_without_losses(self):
        trades = [_fixed("a", 0, 1), _fixed("b", 1, 2)]
        metrics = _metrics(trades, Settings(starting_balance=10000))

        assert metrics.profit_factor is None
        assert metrics.max_drawdown_pct == 0

    def test_drawdown_reported_as_positive_magnitude(self):
        trades = [
            _fixed("a", 0, 6000, ResultType.MONEY),
            _fixed("b", 1, -2000, ResultType.MONEY),
        ]
        metrics = _metrics(trades, Settings(starting_balance=10000))

        assert metrics.max_drawdown_pct == 12.5

    def test_first_trade_loss_is_drawdown_from_start(self):
        metrics = _metrics([_fixed("a", 0, -1000, ResultType.MONEY)], Settings(starting_balance=10000))

        assert metrics.max_drawdown_pct == 10.0

    def test_breakevens_excluded_from_win_rate(self):
        trades = [_fixed("a", 0, 1), _fixed("b", 1, 0), _fixed("c", 2, 0)]
        metrics = _metrics(trades, Settings(starting_balance=10000))

        assert metrics.win_rate_pct == 100
        assert metrics.breakevens == 2

    def test_derive_stats_distribution_is_chronological(self):
        trades = [_fixed("b", 1, -1), _fixed("a", 0, 2)]
        stats = derive_stats(build_ledger(trades, Settings()))

        assert stats.distribution == [2, -1]
        assert stats.decisive == 2


class TestMetricsBounds:
    """
    **Feature: trade-journal, Property 6: Metric Bounds**

    *For any* trade history, the win rate lies in [0, 100] and the maximum
    drawdown is never negative.
    """

    def test_huge_r_values_stay_finite(self):
        trades = [
            make_trade("a", result=1e308, created_at=1),
            make_trade("b", result=1e308, created_at=2),
        ]
        journal = Settings(starting_balance=10000)
        stats = derive_stats(build_ledger(trades, journal))

        assert math.isfinite(stats.avg_win_r)
        assert math.isfinite(stats.avg_loss_r)
        assert math.isfinite(stats.expectancy_r)

        metrics = _metrics(trades, journal)
        assert math.isfinite(metrics.avg_win_r)
        assert math.isfinite(metrics.expectancy_r)

    @given(trades=trade_lists())
    @settings(max_examples=100)
    def test_win_rate_bounds(self, trades):
        metrics = _metrics(trades, Settings(starting_balance=10000))

        assert 0 <= metrics.win_rate_pct <= 100
        if metrics.wins + metrics.losses == 0:
            assert metrics.win_rate_pct == 0

    @given(trades=trade_lists())
    @settings(max_examples=100)
    def test_drawdown_non_negative(self, trades):
        metrics = _metrics(trades, Settings(starting_balance=10000))

        assert metrics.max_drawdown_pct >= 0

    @given(trades=trade_lists())
    @settings(max_examples=100)
    def test_counts_partition_trades(self, trades):
        metrics = _metrics(trades, Settings(starting_balance=10000))

        assert metrics.wins + metrics.losses + metrics.breakevens == len(trades)

    @given(trades=trade_lists())
    @settings(max_examples=100)
    def test_net_pnl_matches_ledger(self, trades):
        journal = Settings(starting_balance=10000)
        ledger = build_ledger(trades, journal)
        metrics = calculate_metrics(trades, ledger, journal)

        expected = ledger[-1].balance_after - 10000 if ledger else 0
        assert metrics.net_pnl == pytest.approx(expected, abs=0.01)
