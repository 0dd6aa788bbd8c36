"""Tests for the projection engine.

**Feature: trade-journal**
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from strategies import make_trade, trade_lists
from tradejournal.engine import (
    SeededRandomSource,
    SequenceRandomSource,
    project,
)
from tradejournal.models import (
    ProjectionMethod,
    ProjectionSettings,
    RiskType,
    Settings,
)

FIXED_RISK = Settings(
    starting_balance=10000,
    default_risk_type=RiskType.FIXED,
    default_risk_value=100,
    daily_stop_r=-1,
    daily_take_r=2,
    max_trades_per_day=2,
)


def _fixed(trade_id, day, result):
    return make_trade(trade_id, day=day, result=result, risk_type=RiskType.FIXED, risk_value=100)


def _sim(horizon_days=3, simulations=1, **kwargs):
    return ProjectionSettings(
        method=ProjectionMethod.DAILY_SIM,
        horizon_days=horizon_days,
        simulations=simulations,
        **kwargs,
    )


class TestDeterministicProjection:
    """
    **Feature: trade-journal, Property 7: Deterministic Collapse**

    *For any* history, the deterministic projection has a single path whose
    P10, P50 and P90 end balances are equal.
    """

    def test_expectancy_walk(self):
        trades = [_fixed("a", 0, 2), _fixed("b", 1, -1), _fixed("c", 2, 2)]
        result = project(trades, FIXED_RISK, ProjectionSettings(horizon_days=2))

        assert result.expectancy_r == pytest.approx(1.0)
        assert result.path == [10300, 10400, 10500]
        assert result.summary.start_balance == 10300
        assert result.bands is None
        assert result.simulations == 1

    def test_short_history_uses_fallback_expectancy(self):
        trades = [_fixed("a", 0, 5), _fixed("b", 1, 5)]
        result = project(trades, FIXED_RISK, ProjectionSettings(horizon_days=3))

        assert result.expectancy_r == 0
        assert result.path == [11000, 11000, 11000, 11000]

    def test_configured_fallback_compounds_on_percent_risk(self):
        journal = Settings(starting_balance=10000, default_risk_value=1)
        result = project(
            [], journal, ProjectionSettings(horizon_days=2, fallback_expectancy_r=0.5)
        )

        assert result.path == [10000, 10050, 10100.25]

    def test_negative_horizon_clamped(self):
        result = project([], Settings(starting_balance=5000), ProjectionSettings(horizon_days=-5))

        assert result.horizon_days == 0
        assert result.path == [5000]
        assert result.summary.end_balance_p50 == 5000

    @given(
        trades=trade_lists(),
        horizon=st.integers(min_value=0, max_value=30),
    )
    @settings(max_examples=50)
    def test_percentiles_collapse(self, trades, horizon):
        result = project(trades, Settings(), ProjectionSettings(horizon_days=horizon))
        summary = result.summary

        assert len(result.path) == horizon + 1
        assert summary.end_balance_p10 == summary.end_balance_p50 == summary.end_balance_p90
        assert summary.end_balance_p50 == result.path[-1]


class TestDailySimulation:
    """
    **Feature: trade-journal, Property 8: Simulation Reproducibility**

    *For any* seed, repeated simulations with the same seed produce
    identical bands, and the bands are ordered P10 <= P50 <= P90.
    """

    def test_always_first_pool_value_stops_at_take(self):
        trades = [_fixed("a", 0, 2), _fixed("b", 1, -1), _fixed("c", 2, -1)]
        result = project(trades, FIXED_RISK, _sim(), SequenceRandomSource([0.0]))

        # 2R reaches the daily take after the first trade of each day
        assert result.path == [10000, 10200, 10400, 10600]

    def test_always_last_pool_value_stops_at_stop(self):
        trades = [_fixed("a", 0, 2), _fixed("b", 1, -1), _fixed("c", 2, -1)]
        result = project(trades, FIXED_RISK, _sim(), SequenceRandomSource([0.9]))

        assert result.path == [10000, 9900, 9800, 9700]

    def test_trades_up_to_daily_maximum(self):
        trades = [_fixed("a", 0, 1), _fixed("b", 1, 1), _fixed("c", 2, 1)]
        journal = FIXED_RISK.model_copy(update={"daily_take_r": 5, "max_trades_per_day": 3})
        result = project(trades, journal, _sim(horizon_days=2), SequenceRandomSource([0.5]))

        assert result.path == [10300, 10600, 10900]

    def test_take_reached_on_rounded_day_sum(self):
        trades = [_fixed("a", 0, 0.1), _fixed("b", 1, 0.1), _fixed("c", 2, 0.1)]
        journal = FIXED_RISK.model_copy(update={"daily_take_r": 0.8, "max_trades_per_day": 10})
        result = project(trades, journal, _sim(horizon_days=1), SequenceRandomSource([0.0]))

        # Eight 0.1R trades sum to 0.7999999999999999 before rounding
        assert result.path == [10030, 10110]

    def test_no_history_gives_flat_path(self):
        result = project([], FIXED_RISK, _sim(simulations=20), SeededRandomSource(1))

        assert result.bands.p10 == result.bands.p90 == [10000, 10000, 10000, 10000]

    def test_summary_uses_band_ends(self):
        trades = [_fixed("a", 0, 2), _fixed("b", 1, -1), _fixed("c", 2, -1)]
        result = project(
            trades, FIXED_RISK, _sim(horizon_days=10, simulations=200), SeededRandomSource(3)
        )

        assert result.method == ProjectionMethod.DAILY_SIM
        assert result.simulations == 200
        assert result.path == result.bands.p50
        assert result.summary.end_balance_p10 == result.bands.p10[-1]
        assert result.summary.end_balance_p50 == result.bands.p50[-1]
        assert result.summary.end_balance_p90 == result.bands.p90[-1]
        assert len(result.bands.p10) == 11

    def test_simulation_count_clamped(self):
        result = project([], FIXED_RISK, _sim(simulations=0), SeededRandomSource(1))

        assert result.simulations == 1

    @given(
        trades=trade_lists(min_size=1, max_size=15),
        seed=st.integers(min_value=0, max_value=10_000),
    )
    @settings(max_examples=25, deadline=None)
    def test_same_seed_same_bands(self, trades, seed):
        projection = _sim(horizon_days=10, simulations=30)

        first = project(trades, Settings(), projection, SeededRandomSource(seed))
        second = project(trades, Settings(), projection, SeededRandomSource(seed))

        assert first.bands == second.bands
        assert first.summary == second.summary

    @given(
        trades=trade_lists(min_size=1, max_size=15),
        seed=st.integers(min_value=0, max_value=10_000),
    )
    @settings(max_examples=25, deadline=None)
    def test_bands_ordered(self, trades, seed):
        result = project(
            trades, Settings(), _sim(horizon_days=10, simulations=30), SeededRandomSource(seed)
        )

        for p10, p50, p90 in zip(result.bands.p10, result.bands.p50, result.bands.p90):
            assert p10 <= p50 <= p90


class TestRandomSources:
    """Random source behavior."""

    def test_sequence_cycles(self):
        source = SequenceRandomSource([0.1, 0.2])

        assert [source.next_uniform() for _ in range(3)] == [0.1, 0.2, 0.1]

    def test_sequence_requires_values(self):
        with pytest.raises(ValueError):
            SequenceRandomSource([])

    def test_seeded_reproducible(self):
        a, b = SeededRandomSource(9), SeededRandomSource(9)

        assert [a.next_uniform() for _ in range(5)] == [b.next_uniform() for _ in range(5)]
