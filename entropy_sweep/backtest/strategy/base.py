# entropy_sweep/backtest/strategy/base.py
from __future__ import annotations

from abc import ABC, abstractmethod

from entropy_sweep.backtest.core.types import Direction, EntropySample


class DirectionRule(ABC):
    """
    DirectionRule (FINAL / FROZEN)

    纯解释器：
      EntropySample -> Direction

    - 无状态（pointwise），同一 sample 永远给出同一方向
    - 不感知 z-score 门控（由 SignalGenerator 负责）
    """

    name: str = ""

    def __init__(self, bits: int):
        self.bits = bits

    @abstractmethod
    def direction(self, sample: EntropySample) -> Direction:
        ...
