# tests/conftest.py
from __future__ import annotations

import multiprocessing

import matplotlib
import numpy as np
import pytest
from loguru import logger

matplotlib.use("Agg")

from entropy_sweep.config.sweep_config import SweepConfig  # noqa: E402
from entropy_sweep.data.bar import PriceSeries  # noqa: E402


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


@pytest.fixture(scope="session", autouse=True)
def _set_start_method():
    multiprocessing.set_start_method("spawn", force=True)


# ============================================================
# Price series
# ============================================================
@pytest.fixture
def uptrend() -> PriceSeries:
    """1000 bars, linear uptrend 100 → 1099."""
    return PriceSeries.from_prices(np.arange(100.0, 1100.0))


@pytest.fixture
def random_walk() -> PriceSeries:
    """Deterministic noisy walk (seeded), stays positive."""
    rng = np.random.default_rng(7)
    steps = rng.normal(0.0, 1.0, size=600)
    prices = 200.0 + np.cumsum(steps)
    return PriceSeries.from_prices(prices)


@pytest.fixture
def make_sweep_config():
    """
    Factory fixture for SweepConfig (testing only).

    Usage:
        cfg = make_sweep_config(periods=[50], fee_regimes=[0.0, 10.0])
    """

    def _make(**overrides) -> SweepConfig:
        raw = dict(
            bits=2,
            periods=[20, 50],
            zscore_thresholds=[None, 1.0],
            fee_regimes=[0.0, 10.0],
            initial_capital=1000.0,
            max_workers=1,
        )
        raw.update(overrides)
        return SweepConfig.build(**raw)

    return _make
