from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict

import numpy as np

from entropy_sweep.backtest.result import EquityCurve
from entropy_sweep.config.sweep_config import BarResolution
from entropy_sweep.utils.errors import InsufficientDataError


@dataclass(frozen=True)
class PerformanceMetrics:
    roi: float           # %
    sharpe: float        # annualized, ±inf when std == 0
    max_drawdown: float  # %, <= 0

    def as_dict(self) -> Dict[str, float]:
        return {"roi": self.roi, "sharpe": self.sharpe, "max_drawdown": self.max_drawdown}


class MetricsCalculator:
    """
    MetricsCalculator (FINAL)

    EquityCurve -> PerformanceMetrics

    Metrics are pure functions of the EquityCurve.
    Metrics must not affect backtest execution.

    equity path = [initial_capital] + curve.equities
    """

    def __init__(self, bar_resolution: BarResolution = BarResolution.DAY):
        self.bar_resolution = BarResolution(bar_resolution)

    def compute(self, curve: EquityCurve) -> PerformanceMetrics:
        if not curve.equities:
            raise InsufficientDataError("[MetricsCalculator] empty equity curve")

        eq = np.empty(len(curve.equities) + 1, dtype=np.float64)
        eq[0] = curve.initial_capital
        eq[1:] = curve.equities

        return PerformanceMetrics(
            roi=self.roi(eq),
            sharpe=self.sharpe(eq, self.bar_resolution.periods_per_year),
            max_drawdown=self.max_drawdown(eq),
        )

    # --------------------------------------------------
    @staticmethod
    def roi(eq: np.ndarray) -> float:
        initial = float(eq[0])
        return (float(eq[-1]) - initial) / initial * 100.0

    @staticmethod
    def sharpe(eq: np.ndarray, periods_per_year: int) -> float:
        prev = eq[:-1]
        # 前一根 equity 为 0（bankrupt）→ 收益记 0
        ret = np.divide(
            np.diff(eq),
            prev,
            out=np.zeros(len(prev), dtype=np.float64),
            where=prev != 0.0,
        )
        if len(ret) == 0:
            return math.inf

        mean = float(np.mean(ret))
        std = float(np.std(ret))
        if std == 0.0:
            return -math.inf if mean < 0.0 else math.inf
        return mean / std * math.sqrt(periods_per_year)

    @staticmethod
    def max_drawdown(eq: np.ndarray) -> float:
        peak = np.maximum.accumulate(eq)
        dd = np.divide(
            eq - peak,
            peak,
            out=np.zeros(len(eq), dtype=np.float64),
            where=peak > 0.0,
        )
        return float(min(dd.min(), 0.0)) * 100.0
