# entropy_sweep/backtest/strategy/factory.py
from __future__ import annotations

from typing import Dict, List, Type

from entropy_sweep.backtest.strategy.base import DirectionRule
from entropy_sweep.backtest.strategy.rules import DominantTrendRule, EntropyContinuationRule
from entropy_sweep.utils.errors import ConfigurationError


class DirectionRuleFactory:
    """
    DirectionRuleFactory (FINAL / FROZEN)

    注册式 DirectionRule 构造器

    All rules must be explicitly registered in DirectionRuleFactory._REGISTRY.
    No dynamic discovery or side-effect-based registration is allowed.
    """

    _REGISTRY: Dict[str, Type[DirectionRule]] = {
        DominantTrendRule.name: DominantTrendRule,
        EntropyContinuationRule.name: EntropyContinuationRule,
        # 未来只在这里注册
    }

    # --------------------------------------------------
    @classmethod
    def create(cls, name: str, bits: int) -> DirectionRule:
        """未注册 name -> ConfigurationError"""
        if name not in cls._REGISTRY:
            raise ConfigurationError(
                f"[DirectionRuleFactory] unknown direction rule: {name}"
            )
        return cls._REGISTRY[name](bits)

    @classmethod
    def names(cls) -> List[str]:
        return list(cls._REGISTRY)
