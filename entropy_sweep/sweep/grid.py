# entropy_sweep/sweep/grid.py
from __future__ import annotations

from dataclasses import dataclass
from itertools import product
from typing import List, Optional, Tuple

from entropy_sweep.config.sweep_config import BarResolution, SizingPolicy, SweepConfig
from entropy_sweep.data.bar import PriceSeries


@dataclass(frozen=True)
class Combination:
    period: int
    zscore_threshold: Optional[float]
    fee_bps: float


@dataclass(frozen=True)
class Partition:
    """
    一个 worker 任务：同一 period 下的全部组合

    纯数据（可 pickle）：series 以拷贝形式进入子进程，只读。
    """

    period: int
    combinations: Tuple[Combination, ...]
    series: PriceSeries
    bits: int
    direction_rule: str
    initial_capital: float
    sizing: SizingPolicy
    bar_resolution: BarResolution


def expand(config: SweepConfig) -> List[Combination]:
    """
    periods × thresholds × fees 的笛卡尔积

    顺序确定：period 升序 → threshold（None 在前）→ fee 升序
    """
    return [
        Combination(period=p, zscore_threshold=t, fee_bps=f)
        for p, t, f in product(
            config.unique_periods(),
            config.unique_thresholds(),
            config.fee_bps_regimes(),
        )
    ]


def partition(
    combinations: List[Combination],
    series: PriceSeries,
    config: SweepConfig,
) -> List[Partition]:
    """按 period 分组，保持 grid 顺序。"""
    groups: dict[int, List[Combination]] = {}
    for c in combinations:
        groups.setdefault(c.period, []).append(c)

    return [
        Partition(
            period=period,
            combinations=tuple(combos),
            series=series,
            bits=config.bits,
            direction_rule=config.direction_rule,
            initial_capital=config.initial_capital,
            sizing=config.sizing,
            bar_resolution=config.bar_resolution,
        )
        for period, combos in groups.items()
    ]
