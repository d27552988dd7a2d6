#!filepath: tests/backtest/entropy/test_symbol_counter.py
import math
import random

import pytest

from entropy_sweep.backtest.entropy.counter import SymbolCounter


def test_empty_counter():
    c = SymbolCounter(4, 10)
    assert c.entropy() == 0.0
    assert c.dominant() is None


def test_uniform_window_is_max_entropy():
    c = SymbolCounter(4, 8)
    for s in [0, 1, 2, 3, 0, 1, 2, 3]:
        c.add(s)

    assert c.entropy() == pytest.approx(2.0)
    assert c.dominant() is None


def test_single_symbol_window_is_exactly_zero():
    c = SymbolCounter(4, 5)
    for _ in range(5):
        c.add(2)

    assert c.entropy() == 0.0
    assert c.dominant() == 2


def test_dominant_tracks_evictions():
    c = SymbolCounter(4, 10)
    for s in [1, 1, 1, 2, 2]:
        c.add(s)
    assert c.dominant() == 1

    c.evict(1)
    assert c.dominant() is None  # 2 vs 2

    c.evict(1)
    assert c.dominant() == 2


def test_evict_absent_symbol_raises():
    c = SymbolCounter(4, 3)
    c.add(0)
    with pytest.raises(ValueError, match="not in window"):
        c.evict(3)


def test_entropy_with_does_not_mutate():
    c = SymbolCounter(2, 4)
    for s in [0, 0, 1]:
        c.add(s)

    before = (list(c.counts), c.total, c.entropy())
    h = c.entropy_with(1)

    assert h == pytest.approx(1.0)
    assert (list(c.counts), c.total, c.entropy()) == before


def test_long_rolling_run_has_no_drift():
    rng = random.Random(3)
    period = 50
    c = SymbolCounter(8, period)
    window = []

    for _ in range(20_000):
        s = rng.randrange(8)
        c.add(s)
        window.append(s)
        if len(window) > period:
            c.evict(window.pop(0))

    n = len(window)
    expected = -sum(
        window.count(k) / n * math.log2(window.count(k) / n)
        for k in set(window)
    )
    assert c.entropy() == pytest.approx(expected, abs=1e-9)
