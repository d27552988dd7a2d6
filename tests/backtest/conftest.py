# tests/backtest/conftest.py
from __future__ import annotations

import pytest

from entropy_sweep.backtest.core.types import Direction, EntropySample, Signal


@pytest.fixture
def make_sample():
    def _make(
        index: int = 10,
        *,
        entropy: float = 1.0,
        zscore=None,
        dominant=None,
        up_entropy: float = 1.0,
        down_entropy: float = 1.0,
    ) -> EntropySample:
        return EntropySample(
            index=index,
            entropy=entropy,
            zscore=zscore,
            dominant=dominant,
            up_entropy=up_entropy,
            down_entropy=down_entropy,
        )

    return _make


@pytest.fixture
def make_signals():
    """make_signals(start, [1, 1, 0, -1]) → consecutive Signals from `start`."""

    def _make(start: int, directions) -> list[Signal]:
        return [Signal(index=start + k, direction=Direction(d)) for k, d in enumerate(directions)]

    return _make
