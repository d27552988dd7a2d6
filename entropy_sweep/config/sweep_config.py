from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from entropy_sweep.backtest.entropy.coder import MAX_BITS
from entropy_sweep.backtest.strategy.factory import DirectionRuleFactory
from entropy_sweep.utils.errors import ConfigurationError


class BarResolution(str, Enum):
    MINUTE = "1m"
    HOUR = "1h"
    DAY = "1d"

    @property
    def periods_per_year(self) -> int:
        # 24/7 markets
        return {
            BarResolution.MINUTE: 525_600,
            BarResolution.HOUR: 8_760,
            BarResolution.DAY: 365,
        }[self]


class FeeUnit(str, Enum):
    BPS = "bps"
    FRACTION = "fraction"


class SizingPolicy(str, Enum):
    EQUITY = "equity"
    FIXED_NOTIONAL = "fixed_notional"


class SweepConfig(BaseModel):
    """
    SweepConfig（FINAL / FROZEN）

    语义：
      - 一次 sweep 的“实验定义”
      - periods × zscore_thresholds × fee_regimes 的笛卡尔积
      - bits / fee_unit / sizing 在整个 run 内固定
    """

    model_config = ConfigDict(frozen=True)

    bits: int = 2
    periods: List[int] = Field(..., min_length=1)

    # None = no z-score filter
    zscore_thresholds: List[Optional[float]] = Field(default_factory=lambda: [None], min_length=1)

    fee_regimes: List[float] = Field(default_factory=lambda: [0.0], min_length=1)
    fee_unit: FeeUnit = FeeUnit.BPS

    initial_capital: float = 1000.0
    bar_resolution: BarResolution = BarResolution.DAY

    direction_rule: str = "dominant_trend"
    sizing: SizingPolicy = SizingPolicy.EQUITY

    # None → cpu_count
    max_workers: Optional[int] = None

    # --------------------------------------------------
    @field_validator("bits")
    @classmethod
    def _check_bits(cls, v: int) -> int:
        if v <= 0 or v > MAX_BITS:
            raise ValueError(f"bits must be in [1, {MAX_BITS}], got {v}")
        return v

    @field_validator("periods")
    @classmethod
    def _check_periods(cls, v: List[int]) -> List[int]:
        bad = [p for p in v if p <= 0]
        if bad:
            raise ValueError(f"periods must be positive, got {bad}")
        return v

    @field_validator("zscore_thresholds")
    @classmethod
    def _check_thresholds(cls, v: List[Optional[float]]) -> List[Optional[float]]:
        bad = [t for t in v if t is not None and t <= 0]
        if bad:
            raise ValueError(f"zscore thresholds must be positive or null, got {bad}")
        return v

    @field_validator("fee_regimes")
    @classmethod
    def _check_fees(cls, v: List[float]) -> List[float]:
        bad = [f for f in v if f < 0]
        if bad:
            raise ValueError(f"fee regimes must be non-negative, got {bad}")
        return v

    @field_validator("initial_capital")
    @classmethod
    def _check_capital(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"initial_capital must be positive, got {v}")
        return v

    @field_validator("direction_rule")
    @classmethod
    def _check_rule(cls, v: str) -> str:
        if v not in DirectionRuleFactory.names():
            raise ValueError(
                f"unknown direction rule: {v} (known: {sorted(DirectionRuleFactory.names())})"
            )
        return v

    # --------------------------------------------------
    @classmethod
    def build(cls, **raw) -> "SweepConfig":
        """
        唯一推荐入口：pydantic 校验失败 → ConfigurationError（fail fast）
        """
        try:
            return cls(**raw)
        except ValidationError as e:
            raise ConfigurationError(f"[SweepConfig] invalid sweep config: {e}") from e

    # --------------------------------------------------
    # derived grid axes（去重 + 排序，保证 grid 顺序确定）
    # --------------------------------------------------
    def unique_periods(self) -> List[int]:
        return sorted(set(self.periods))

    def unique_thresholds(self) -> List[Optional[float]]:
        values = set(self.zscore_thresholds)
        has_none = None in values
        ordered = sorted(t for t in values if t is not None)
        return ([None] if has_none else []) + ordered

    def fee_bps_regimes(self) -> List[float]:
        """All fee regimes expressed in basis points."""
        scale = 10_000.0 if self.fee_unit == FeeUnit.FRACTION else 1.0
        # 0.0005 * 1e4 → 5.000000000000001；舍入到 1e-10 bps
        return sorted({round(float(f) * scale, 10) for f in self.fee_regimes})

    @property
    def n_combinations(self) -> int:
        return (
            len(self.unique_periods())
            * len(self.unique_thresholds())
            * len(self.fee_bps_regimes())
        )
