# entropy_sweep/backtest/strategy/signal_generator.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from entropy_sweep.backtest.core.types import Direction, EntropySample, Signal
from entropy_sweep.backtest.strategy.factory import DirectionRuleFactory
from entropy_sweep.utils.errors import ConfigurationError


@dataclass(frozen=True)
class SignalPolicy:
    """
    zscore_threshold : None → 不过滤，rule 无条件生效
    direction_rule   : DirectionRuleFactory 注册名
    """

    zscore_threshold: Optional[float] = None
    direction_rule: str = "dominant_trend"


def generate(
    samples: Sequence[EntropySample],
    policy: SignalPolicy,
    bits: int = 2,
) -> List[Signal]:
    """
    EntropySample 序列 → Signal 序列（一一对应，pointwise）

    门控：threshold 已设置时，只有 zscore 有定义且 |z| >= threshold
    才允许非 FLAT 信号。
    """
    threshold = policy.zscore_threshold
    if threshold is not None and threshold <= 0:
        raise ConfigurationError(f"[SignalGenerator] threshold must be positive, got {threshold}")

    rule = DirectionRuleFactory.create(policy.direction_rule, bits)

    signals: List[Signal] = []
    for s in samples:
        if threshold is not None and (s.zscore is None or abs(s.zscore) < threshold):
            d = Direction.FLAT
        else:
            d = rule.direction(s)
        signals.append(Signal(index=s.index, direction=d))
    return signals
