# entropy_sweep/backtest/core/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np


class Direction(int, Enum):
    LONG = 1
    SHORT = -1
    FLAT = 0


@dataclass(frozen=True, eq=False)
class SymbolSequence:
    """
    离散化后的收益符号序列（纯函数产物，不可变）

    symbols[k] 属于 bar 索引 offset + k
    """

    symbols: np.ndarray
    bits: int
    offset: int

    def __len__(self) -> int:
        return len(self.symbols)

    def bar_index(self, k: int) -> int:
        return self.offset + k


@dataclass(frozen=True)
class EntropySample:
    """
    index        : bar index
    entropy      : window entropy in [0, bits]
    zscore       : None when undefined (no filter)
    dominant     : unique most frequent symbol of the window, None on tie
    up_entropy   : window entropy if the next move is up
    down_entropy : window entropy if the next move is down
    """

    index: int
    entropy: float
    zscore: Optional[float]
    dominant: Optional[int]
    up_entropy: float
    down_entropy: float


@dataclass(frozen=True)
class Signal:
    index: int
    direction: Direction


@dataclass(frozen=True)
class Position:
    index: int
    direction: Direction
    entry_price: float
    units: float


@dataclass(frozen=True)
class Trade:
    entry_index: int
    exit_index: int
    direction: Direction
    entry_price: float
    exit_price: float
    units: float
    pnl: float
    fees: float
