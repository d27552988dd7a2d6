#!filepath: tests/backtest/strategy/test_signal_generator.py
from __future__ import annotations

import pytest

from entropy_sweep.backtest.core.types import Direction
from entropy_sweep.backtest.strategy.rules import DominantTrendRule, EntropyContinuationRule
from entropy_sweep.backtest.strategy.signal_generator import SignalPolicy, generate
from entropy_sweep.utils.errors import ConfigurationError


# =============================================================================
# direction rules
# =============================================================================

@pytest.mark.parametrize(
    "dominant,expected",
    [(3, Direction.LONG), (1, Direction.LONG), (2, Direction.SHORT), (0, Direction.SHORT), (None, Direction.FLAT)],
)
def test_dominant_trend_uses_latest_bit(make_sample, dominant, expected):
    assert DominantTrendRule(2).direction(make_sample(dominant=dominant)) == expected


@pytest.mark.parametrize(
    "up,down,expected",
    [(0.5, 1.0, Direction.LONG), (1.0, 0.5, Direction.SHORT), (0.8, 0.8, Direction.FLAT)],
)
def test_entropy_continuation(make_sample, up, down, expected):
    sample = make_sample(up_entropy=up, down_entropy=down)
    assert EntropyContinuationRule(2).direction(sample) == expected


# =============================================================================
# generate
# =============================================================================

def test_one_signal_per_sample_same_index(make_sample):
    samples = [make_sample(i, dominant=3) for i in range(10, 15)]

    signals = generate(samples, SignalPolicy())

    assert [s.index for s in signals] == [10, 11, 12, 13, 14]
    assert all(s.direction == Direction.LONG for s in signals)


def test_no_threshold_fires_unconditionally(make_sample):
    samples = [make_sample(1, dominant=2, zscore=None), make_sample(2, dominant=2, zscore=0.01)]

    signals = generate(samples, SignalPolicy(zscore_threshold=None))

    assert [s.direction for s in signals] == [Direction.SHORT, Direction.SHORT]


def test_threshold_gates_signal(make_sample):
    samples = [
        make_sample(1, dominant=3, zscore=None),   # undefined → FLAT
        make_sample(2, dominant=3, zscore=0.5),    # below → FLAT
        make_sample(3, dominant=3, zscore=1.5),    # == threshold → fires
        make_sample(4, dominant=3, zscore=-2.0),   # |z| above → fires
        make_sample(5, dominant=None, zscore=3.0), # tie → FLAT
    ]

    signals = generate(samples, SignalPolicy(zscore_threshold=1.5))

    assert [s.direction for s in signals] == [
        Direction.FLAT,
        Direction.FLAT,
        Direction.LONG,
        Direction.LONG,
        Direction.FLAT,
    ]


def test_empty_samples():
    assert generate([], SignalPolicy()) == []


def test_unknown_rule_raises(make_sample):
    with pytest.raises(ConfigurationError):
        generate([make_sample()], SignalPolicy(direction_rule="nope"))


def test_non_positive_threshold_raises(make_sample):
    with pytest.raises(ConfigurationError):
        generate([make_sample()], SignalPolicy(zscore_threshold=0.0))
