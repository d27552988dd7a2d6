#!filepath: entropy_sweep/backtest/entropy/zscore.py
from __future__ import annotations

import math
from collections import deque
from typing import Deque, Optional

from entropy_sweep.utils.errors import ConfigurationError

# 方差低于该值视为 0 → z-score 未定义
VARIANCE_EPS = 1e-15


class RollingZScore:
    """
    因果 rolling z-score（只用“之前”的样本）

    score(x) : x 相对最近 window 个已观测值的 z（样本标准差 ddof=1）
    push(x)  : 把 x 加入窗口

    shifted-data running sums：以 anchor 为偏移累计 Σd、Σd²，
    每 window 次 push 以窗口首元素重新 anchor 并重算。
    """

    def __init__(self, window: int):
        if window < 2:
            raise ConfigurationError(f"zscore window must be >= 2, got {window}")
        self.window = window

        self._values: Deque[float] = deque()
        self._anchor: Optional[float] = None
        self._s1 = 0.0
        self._s2 = 0.0
        self._pushes = 0

    def __len__(self) -> int:
        return len(self._values)

    def score(self, x: float) -> Optional[float]:
        n = len(self._values)
        if n < 2:
            return None

        mean_shift = self._s1 / n
        var = (self._s2 - self._s1 * mean_shift) / (n - 1)
        if var <= VARIANCE_EPS:
            return None

        return (x - self._anchor - mean_shift) / math.sqrt(var)

    def push(self, x: float) -> None:
        if self._anchor is None:
            self._anchor = x

        d = x - self._anchor
        self._values.append(x)
        self._s1 += d
        self._s2 += d * d

        if len(self._values) > self.window:
            old = self._values.popleft() - self._anchor
            self._s1 -= old
            self._s2 -= old * old

        self._pushes += 1
        if self._pushes % self.window == 0:
            self._reanchor()

    def _reanchor(self) -> None:
        self._anchor = self._values[0]
        s1 = 0.0
        s2 = 0.0
        for v in self._values:
            d = v - self._anchor
            s1 += d
            s2 += d * d
        self._s1 = s1
        self._s2 = s2
