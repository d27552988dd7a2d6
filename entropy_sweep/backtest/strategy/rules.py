# entropy_sweep/backtest/strategy/rules.py
from __future__ import annotations

from entropy_sweep.backtest.core.types import Direction, EntropySample
from entropy_sweep.backtest.strategy.base import DirectionRule


class DominantTrendRule(DirectionRule):
    """
    趋势跟随：窗口内出现最多的 symbol 的最近一位

      bit 0 == 1 → LONG
      bit 0 == 0 → SHORT
      无唯一众数 → FLAT
    """

    name = "dominant_trend"

    def direction(self, sample: EntropySample) -> Direction:
        if sample.dominant is None:
            return Direction.FLAT
        return Direction.LONG if sample.dominant & 1 else Direction.SHORT


class EntropyContinuationRule(DirectionRule):
    """
    哪个延续让窗口更“有序”（熵更低），就押哪个方向。
    """

    name = "entropy_continuation"

    def direction(self, sample: EntropySample) -> Direction:
        if sample.up_entropy < sample.down_entropy:
            return Direction.LONG
        if sample.up_entropy > sample.down_entropy:
            return Direction.SHORT
        return Direction.FLAT
