# entropy_sweep/backtest/context.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from entropy_sweep.backtest.core.types import EntropySample, Signal
from entropy_sweep.backtest.metrics.base import PerformanceMetrics
from entropy_sweep.backtest.result import EquityCurve, Summary
from entropy_sweep.config.sweep_config import BarResolution, SizingPolicy
from entropy_sweep.data.bar import PriceSeries


@dataclass
class RunContext:
    """
    RunContext（FINAL / FROZEN）

    一个参数组合的运行期唯一上下文：
      - Step 之间唯一通信载体
      - 参数段只读，series 只借用
      - 结果段由对应 Step 依次写入
    """

    # -------------------------
    # identity（只读）
    # -------------------------
    period: int
    zscore_threshold: Optional[float]
    fee_bps: float
    bits: int
    direction_rule: str
    initial_capital: float
    sizing: SizingPolicy
    bar_resolution: BarResolution

    # -------------------------
    # data layer
    # -------------------------
    series: PriceSeries

    # -------------------------
    # stage outputs
    # -------------------------
    samples: Optional[List[EntropySample]] = None
    signals: Optional[List[Signal]] = None
    curve: Optional[EquityCurve] = None
    metrics: Optional[PerformanceMetrics] = None
    summary: Optional[Summary] = None
