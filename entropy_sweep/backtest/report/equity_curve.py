# entropy_sweep/backtest/report/equity_curve.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Tuple

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from entropy_sweep.backtest.report.base import Report  # noqa: E402


class EquityCurveReport(Report):
    """lazy (x: time-key, y: equity) 序列 → PNG"""

    def __init__(self, output_path, title: str = "Equity Curve"):
        self._path = Path(output_path)
        self._title = title

    def render(self, points: Iterable[Tuple[int, float]]) -> None:
        xs, ys = [], []
        for x, y in points:
            xs.append(x)
            ys.append(y)

        self._path.parent.mkdir(parents=True, exist_ok=True)

        plt.figure(figsize=(10, 4))
        plt.plot(xs, ys)
        plt.title(self._title)
        plt.xlabel("Time")
        plt.ylabel("Equity")
        plt.tight_layout()
        plt.savefig(self._path)
        plt.close()
