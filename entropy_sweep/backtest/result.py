# entropy_sweep/backtest/result.py
from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from entropy_sweep.backtest.core.types import Trade


@dataclass(frozen=True)
class EquityCurve:
    """
    EquityCurve (FINAL / FROZEN)

    不可变事实结果：
      - indices / timestamps / equities 三者一一对齐
      - 从第一个可交易 bar 开始到最后一根 bar
      - equity 永不为负（bankrupt 时钳制为 0）
    """

    initial_capital: float
    indices: List[int] = field(default_factory=list)
    timestamps: List[int] = field(default_factory=list)
    equities: List[float] = field(default_factory=list)
    trades: List[Trade] = field(default_factory=list)
    bankrupt: bool = False

    def __len__(self) -> int:
        return len(self.equities)

    @property
    def final_equity(self) -> float:
        return self.equities[-1] if self.equities else self.initial_capital

    def points(self) -> Iterator[Tuple[int, float]]:
        """Lazy (time-key, equity) pairs for charting consumers."""
        for t, e in zip(self.timestamps, self.equities):
            yield t, e

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "EquityCurve":
        """
        合成曲线：values[0] 即 initial_capital，
        其后每个值对应一根 bar。
        """
        values = [float(v) for v in values]
        if not values:
            raise ValueError("[EquityCurve] from_values needs at least one value")
        rest = values[1:]
        idx = list(range(1, len(values)))
        return cls(
            initial_capital=values[0],
            indices=idx,
            timestamps=list(idx),
            equities=rest,
        )


class RunStatus(str, Enum):
    OK = "OK"
    NO_DATA = "NO_DATA"


@dataclass(frozen=True)
class Summary:
    """
    Summary (FINAL / FROZEN)

    一个参数组合的最终结论，字段顺序稳定（下游报表依赖）：
      period, zscore_threshold, fee_bps, roi, sharpe, max_drawdown,
      n_trades, win_rate, avg_trade, avg_winning_trade, avg_losing_trade,
      best_trade, worst_trade, avg_trade_size, return_usd, buy_and_hold_roi,
      bankrupt, status, bits, direction_rule

    NO_DATA：指标字段为 None（显式哨兵，不是 0）
    无成交：逐笔字段为 None
    """

    period: int
    zscore_threshold: Optional[float]
    fee_bps: float
    roi: Optional[float]
    sharpe: Optional[float]
    max_drawdown: Optional[float]
    n_trades: int = 0
    win_rate: Optional[float] = None
    avg_trade: Optional[float] = None
    avg_winning_trade: Optional[float] = None
    avg_losing_trade: Optional[float] = None
    best_trade: Optional[float] = None
    worst_trade: Optional[float] = None
    avg_trade_size: Optional[float] = None
    return_usd: Optional[float] = None
    buy_and_hold_roi: Optional[float] = None
    bankrupt: bool = False
    status: RunStatus = RunStatus.OK
    bits: int = 2
    direction_rule: str = "dominant_trend"

    @property
    def ok(self) -> bool:
        return self.status == RunStatus.OK

    def as_record(self) -> Dict[str, object]:
        out: Dict[str, object] = {}
        for f in fields(self):
            v = getattr(self, f.name)
            out[f.name] = v.value if isinstance(v, RunStatus) else v
        return out

    @classmethod
    def columns(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def no_data(
        cls,
        *,
        period: int,
        zscore_threshold: Optional[float],
        fee_bps: float,
        bits: int,
        direction_rule: str,
    ) -> "Summary":
        return cls(
            period=period,
            zscore_threshold=zscore_threshold,
            fee_bps=fee_bps,
            roi=None,
            sharpe=None,
            max_drawdown=None,
            status=RunStatus.NO_DATA,
            bits=bits,
            direction_rule=direction_rule,
        )
