#!filepath: entropy_sweep/backtest/entropy/counter.py
from __future__ import annotations

import math
from typing import List, Optional, Set

# 低于该值的熵视为 0（c·log2(c) 的浮点往返误差量级）
ENTROPY_EPS = 1e-12


class SymbolCounter:
    """
    SymbolCounter（rolling window 的增量频数表）

    - counts[symbol]          : 固定大小频数表（按 symbol 值索引）
    - _s = Σ c·log2(c)        : 增量维护，H = log2(n) − _s / n
    - _buckets[c]             : count == c 的 symbol 集合 → O(1) dominant
    - 每 capacity 次 evict 从频数表重算 _s，抑制浮点漂移

    add / evict / entropy / entropy_with / dominant 均为 O(1)（resync 摊还）。
    """

    def __init__(self, n_symbols: int, capacity: int):
        if n_symbols < 1:
            raise ValueError(f"n_symbols must be >= 1, got {n_symbols}")
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")

        self.n_symbols = n_symbols
        self.capacity = capacity
        self.max_entropy = math.log2(n_symbols)

        self.counts: List[int] = [0] * n_symbols
        self.total = 0

        self._clog: List[float] = []
        self._buckets: List[Set[int]] = []
        self._grow(capacity + 1)

        self._s = 0.0
        self._max = 0
        self._evictions = 0

    # --------------------------------------------------
    def _grow(self, upto: int) -> None:
        for c in range(len(self._clog), upto + 1):
            self._clog.append(c * math.log2(c) if c > 0 else 0.0)
            self._buckets.append(set())

    def add(self, symbol: int) -> None:
        c = self.counts[symbol]
        if c + 1 >= len(self._clog):
            self._grow(c + 1)

        self._s += self._clog[c + 1] - self._clog[c]
        if c > 0:
            self._buckets[c].discard(symbol)
        self._buckets[c + 1].add(symbol)

        self.counts[symbol] = c + 1
        self.total += 1
        if c + 1 > self._max:
            self._max = c + 1

    def evict(self, symbol: int) -> None:
        c = self.counts[symbol]
        if c == 0:
            raise ValueError(f"cannot evict symbol {symbol}: not in window")

        self._s += self._clog[c - 1] - self._clog[c]
        self._buckets[c].discard(symbol)
        if c > 1:
            self._buckets[c - 1].add(symbol)

        self.counts[symbol] = c - 1
        self.total -= 1
        if c == self._max and not self._buckets[c]:
            self._max = c - 1

        self._evictions += 1
        if self._evictions % self.capacity == 0:
            self.resync()

    def resync(self) -> None:
        """从频数表重算 Σ c·log2(c)。"""
        clog = self._clog
        self._s = sum(clog[c] for c in self.counts if c)

    # --------------------------------------------------
    def _entropy(self, n: int, s: float) -> float:
        if n <= 0:
            return 0.0
        h = math.log2(n) - s / n
        if h < ENTROPY_EPS:
            return 0.0
        if h > self.max_entropy:
            return self.max_entropy
        return h

    def entropy(self) -> float:
        """Shannon entropy (base 2) of the current window."""
        return self._entropy(self.total, self._s)

    def entropy_with(self, symbol: int) -> float:
        """Entropy the window would have after one more `symbol` (no mutation)."""
        c = self.counts[symbol]
        if c + 1 >= len(self._clog):
            self._grow(c + 1)
        s = self._s - self._clog[c] + self._clog[c + 1]
        return self._entropy(self.total + 1, s)

    def dominant(self) -> Optional[int]:
        """Unique most frequent symbol, None when empty or tied."""
        if self._max == 0:
            return None
        leaders = self._buckets[self._max]
        if len(leaders) != 1:
            return None
        return next(iter(leaders))
