#!filepath: entropy_sweep/data/bar.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple

import numpy as np

from entropy_sweep.utils.errors import SeriesValidationError


@dataclass(frozen=True)
class Bar:
    """一根 bar：时间键（unix ts / slot）+ 价格"""

    ts: int
    price: float


@dataclass(frozen=True, eq=False)
class PriceSeries:
    """
    PriceSeries（FINAL / FROZEN）

    不变量：
      - ts 严格递增（去重由数据源负责，核心只校验）
      - price 有限且 > 0
      - 两个数组只读，下游所有 stage 只借用不修改
    """

    ts: np.ndarray
    prices: np.ndarray

    def __post_init__(self):
        ts = np.array(self.ts, dtype=np.int64, copy=True).reshape(-1)
        prices = np.array(self.prices, dtype=np.float64, copy=True).reshape(-1)

        if len(ts) != len(prices):
            raise SeriesValidationError(
                f"[PriceSeries] length mismatch ts={len(ts)} prices={len(prices)}"
            )

        if len(prices) and not np.all(np.isfinite(prices)):
            bad = int(np.flatnonzero(~np.isfinite(prices))[0])
            raise SeriesValidationError(f"[PriceSeries] non-finite price at index {bad}")

        if len(prices) and np.any(prices <= 0.0):
            bad = int(np.flatnonzero(prices <= 0.0)[0])
            raise SeriesValidationError(
                f"[PriceSeries] non-positive price {prices[bad]} at index {bad}"
            )

        if len(ts) > 1:
            steps = np.diff(ts)
            if np.any(steps <= 0):
                bad = int(np.flatnonzero(steps <= 0)[0]) + 1
                raise SeriesValidationError(
                    f"[PriceSeries] timestamps not strictly ascending at index {bad} "
                    f"({ts[bad - 1]} -> {ts[bad]})"
                )

        ts.flags.writeable = False
        prices.flags.writeable = False
        object.__setattr__(self, "ts", ts)
        object.__setattr__(self, "prices", prices)

    # --------------------------------------------------
    @classmethod
    def from_bars(cls, bars: Iterable[Bar]) -> "PriceSeries":
        bars = list(bars)
        return cls(
            ts=np.array([b.ts for b in bars], dtype=np.int64),
            prices=np.array([b.price for b in bars], dtype=np.float64),
        )

    @classmethod
    def from_arrays(cls, ts: Sequence[int], prices: Sequence[float]) -> "PriceSeries":
        return cls(ts=np.asarray(ts), prices=np.asarray(prices))

    @classmethod
    def from_prices(cls, prices: Sequence[float], start: int = 0) -> "PriceSeries":
        """Synthetic series keyed by consecutive integers (slot-style)."""
        prices = np.asarray(prices, dtype=np.float64)
        return cls(ts=np.arange(start, start + len(prices), dtype=np.int64), prices=prices)

    # --------------------------------------------------
    def __len__(self) -> int:
        return len(self.prices)

    def bar(self, i: int) -> Bar:
        return Bar(ts=int(self.ts[i]), price=float(self.prices[i]))

    def points(self) -> Iterator[Tuple[int, float]]:
        """Lazy (time-key, price) pairs for charting consumers."""
        for t, p in zip(self.ts, self.prices):
            yield int(t), float(p)
