#!filepath: entropy_sweep/backtest/entropy/coder.py
"""
EntropyCoder（FINAL / FROZEN）

量化规则（每个 run 固定，唯一）：
    sign pattern of the last `bits` returns

    symbol[t] = Σ_{j=0}^{bits-1} up(t − j) << j
    up(u)     = 1 if price[u] > price[u − 1] else 0

  - bit 0 = 最近一次价格变动
  - 价格不变记为 0（与下跌同桶）
  - 前 bits 根 bar 为 warm-up，不产生 symbol

Invariants:
  - 0 <= symbol <= 2^bits − 1
  - 0 <= entropy <= bits
  - 纯函数：不修改输入，不记录日志
"""
from __future__ import annotations

from typing import List, Optional

import numpy as np

from entropy_sweep.backtest.core.types import EntropySample, SymbolSequence
from entropy_sweep.backtest.entropy.counter import SymbolCounter
from entropy_sweep.backtest.entropy.zscore import RollingZScore
from entropy_sweep.data.bar import PriceSeries
from entropy_sweep.utils.errors import ConfigurationError

MAX_BITS = 16


def _check_bits(bits: int) -> None:
    if bits <= 0 or bits > MAX_BITS:
        raise ConfigurationError(f"[EntropyCoder] bits must be in [1, {MAX_BITS}], got {bits}")


def encode(series: PriceSeries, bits: int) -> SymbolSequence:
    _check_bits(bits)

    prices = series.prices
    n = len(prices) - bits
    if n <= 0:
        empty = np.zeros(0, dtype=np.int64)
        empty.flags.writeable = False
        return SymbolSequence(symbols=empty, bits=bits, offset=bits)

    # up[u - 1] ⇔ price[u] > price[u - 1]
    up = (np.diff(prices) > 0.0).astype(np.int64)

    symbols = np.zeros(n, dtype=np.int64)
    for j in range(bits):
        lo = bits - 1 - j
        symbols |= up[lo: lo + n] << j

    symbols.flags.writeable = False
    return SymbolSequence(symbols=symbols, bits=bits, offset=bits)


def rolling_entropy(
    symbols: SymbolSequence,
    period: int,
    zscore_window: Optional[int] = None,
) -> List[EntropySample]:
    """
    For every symbol position i with period <= i < len(symbols):
      - entropy of the trailing window [i − period, i)
      - z-score of that entropy against up to `zscore_window` prior samples
        (default: period), None while undefined

    period >= len(symbols) → [] (not an error)
    """
    if period <= 0:
        raise ConfigurationError(f"[EntropyCoder] period must be positive, got {period}")

    seq = symbols.symbols.tolist()
    n = len(seq)
    if period >= n:
        return []

    bits = symbols.bits
    mask = (1 << bits) - 1

    counter = SymbolCounter(1 << bits, period)
    for s in seq[:period]:
        counter.add(s)

    zs = RollingZScore(zscore_window if zscore_window is not None else max(period, 2))

    samples: List[EntropySample] = []
    for i in range(period, n):
        h = counter.entropy()
        z = zs.score(h)
        zs.push(h)

        # 下一根 bar 上涨 / 下跌时将出现的 symbol
        last = seq[i - 1]
        up_symbol = ((last << 1) | 1) & mask
        down_symbol = (last << 1) & mask

        samples.append(
            EntropySample(
                index=symbols.bar_index(i),
                entropy=h,
                zscore=z,
                dominant=counter.dominant(),
                up_entropy=counter.entropy_with(up_symbol),
                down_entropy=counter.entropy_with(down_symbol),
            )
        )

        counter.add(seq[i])
        counter.evict(seq[i - period])

    return samples
