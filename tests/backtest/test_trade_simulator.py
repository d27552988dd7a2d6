#!filepath: tests/backtest/test_trade_simulator.py
from __future__ import annotations

import copy

import numpy as np
import pytest

from entropy_sweep.backtest.core.types import Direction, Signal
from entropy_sweep.backtest.entropy.coder import encode, rolling_entropy
from entropy_sweep.backtest.simulator import simulate
from entropy_sweep.backtest.strategy.signal_generator import SignalPolicy, generate
from entropy_sweep.config.sweep_config import SizingPolicy
from entropy_sweep.data.bar import PriceSeries
from entropy_sweep.utils.errors import ConfigurationError


def _flat_prices(n: int) -> PriceSeries:
    return PriceSeries.from_prices([100.0] * n)


# =============================================================================
# basic accounting
# =============================================================================

def test_long_marks_to_market_and_closes_at_last_bar(make_signals):
    series = PriceSeries.from_prices([100.0, 110.0, 121.0], start=1_000)

    curve = simulate(series, make_signals(0, [1, 1, 1]), fee_bps=0.0, initial_capital=1000.0)

    assert curve.indices == [0, 1, 2]
    assert curve.timestamps == [1_000, 1_001, 1_002]
    assert curve.equities == pytest.approx([1000.0, 1100.0, 1210.0])
    assert len(curve.trades) == 1
    assert curve.trades[0].exit_index == 2
    assert not curve.bankrupt


def test_curve_starts_at_first_signal(make_signals):
    series = PriceSeries.from_prices([100.0, 101.0, 102.0, 103.0, 104.0])

    curve = simulate(series, make_signals(2, [1]), fee_bps=0.0, initial_capital=500.0)

    assert curve.indices == [2, 3, 4]
    assert curve.initial_capital == 500.0


def test_round_trip_pays_two_fee_legs(make_signals):
    curve = simulate(_flat_prices(3), make_signals(0, [1]), fee_bps=100.0, initial_capital=1000.0)

    assert curve.final_equity == pytest.approx(1000.0 * 0.99 / 1.01)
    assert curve.trades[0].fees == pytest.approx(2 * 1000.0 / 1.01 * 0.01)


def test_flip_closes_then_opens(make_signals):
    curve = simulate(_flat_prices(4), make_signals(0, [1, -1]), fee_bps=100.0, initial_capital=1000.0)

    assert [t.direction for t in curve.trades] == [Direction.LONG, Direction.SHORT]
    assert curve.final_equity == pytest.approx(1000.0 * (0.99 / 1.01) ** 2)


def test_unchanged_state_pays_nothing(make_signals):
    one = simulate(_flat_prices(5), make_signals(0, [1]), fee_bps=50.0, initial_capital=1000.0)
    many = simulate(_flat_prices(5), make_signals(0, [1, 1, 1, 1, 1]), fee_bps=50.0, initial_capital=1000.0)

    assert many.equities == one.equities
    assert len(many.trades) == 1


def test_flat_signals_never_trade(make_signals):
    curve = simulate(_flat_prices(4), make_signals(0, [0, 0, 0, 0]), fee_bps=25.0, initial_capital=1000.0)

    assert curve.equities == [1000.0] * 4
    assert curve.trades == []


def test_fixed_notional_does_not_compound(make_signals):
    series = PriceSeries.from_prices([100.0, 110.0, 100.0, 110.0])
    signals = make_signals(0, [1, 0, 1, 1])

    fixed = simulate(series, signals, 0.0, 1000.0, sizing=SizingPolicy.FIXED_NOTIONAL)
    compounding = simulate(series, signals, 0.0, 1000.0, sizing=SizingPolicy.EQUITY)

    assert fixed.final_equity == pytest.approx(1200.0)
    assert compounding.final_equity == pytest.approx(1210.0)


# =============================================================================
# bankruptcy
# =============================================================================

def test_short_squeeze_goes_bankrupt_and_stays_flat():
    series = PriceSeries.from_prices([100.0, 150.0, 250.0, 260.0])
    signals = [Signal(0, Direction.SHORT), Signal(3, Direction.LONG)]

    curve = simulate(series, signals, fee_bps=0.0, initial_capital=1000.0)

    assert curve.bankrupt
    assert curve.equities == pytest.approx([1000.0, 500.0, 0.0, 0.0])
    assert all(e >= 0.0 for e in curve.equities)
    assert len(curve.trades) == 1


# =============================================================================
# contract
# =============================================================================

def test_empty_signals_empty_curve():
    curve = simulate(_flat_prices(3), [], fee_bps=0.0, initial_capital=1000.0)

    assert len(curve) == 0
    assert curve.final_equity == 1000.0


def test_negative_fee_raises(make_signals):
    with pytest.raises(ConfigurationError):
        simulate(_flat_prices(3), make_signals(0, [1]), fee_bps=-1.0, initial_capital=1000.0)


@pytest.mark.parametrize("capital", [0.0, -10.0])
def test_non_positive_capital_raises(make_signals, capital):
    with pytest.raises(ConfigurationError):
        simulate(_flat_prices(3), make_signals(0, [1]), fee_bps=0.0, initial_capital=capital)


def test_non_increasing_signal_indices_raise():
    signals = [Signal(1, Direction.LONG), Signal(1, Direction.SHORT)]
    with pytest.raises(ValueError, match="strictly increasing"):
        simulate(_flat_prices(3), signals, fee_bps=0.0, initial_capital=1000.0)


def test_signal_outside_series_raises():
    with pytest.raises(ValueError, match="outside series"):
        simulate(_flat_prices(3), [Signal(3, Direction.LONG)], fee_bps=0.0, initial_capital=1000.0)


def test_inputs_not_mutated(make_signals):
    series = PriceSeries.from_prices([100.0, 90.0, 95.0, 120.0])
    signals = make_signals(0, [1, -1, 0, 1])
    before = copy.deepcopy(signals)
    prices = series.prices.copy()

    simulate(series, signals, fee_bps=10.0, initial_capital=1000.0)

    assert signals == before
    assert np.array_equal(series.prices, prices)


def test_higher_fee_never_improves_final_equity(random_walk):
    samples = rolling_entropy(encode(random_walk, 2), 20)
    signals = generate(samples, SignalPolicy())

    finals = [
        simulate(random_walk, signals, fee_bps=fee, initial_capital=1000.0).final_equity
        for fee in (0.0, 1.0, 5.0, 25.0, 100.0, 1000.0)
    ]

    assert all(a >= b for a, b in zip(finals, finals[1:]))
