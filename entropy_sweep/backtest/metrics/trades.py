#!filepath: entropy_sweep/backtest/metrics/trades.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

import numpy as np

from entropy_sweep.backtest.core.types import Trade
from entropy_sweep.backtest.result import EquityCurve
from entropy_sweep.data.bar import PriceSeries


@dataclass(frozen=True)
class TradeStats:
    """
    逐笔统计（% 字段均为百分比）

    单笔收益 = (pnl - fees) / (units * entry_price)
    无成交时 per-trade 字段为 None（显式哨兵）
    """

    win_rate: Optional[float]
    avg_trade: Optional[float]
    avg_winning_trade: Optional[float]
    avg_losing_trade: Optional[float]
    best_trade: Optional[float]
    worst_trade: Optional[float]
    avg_trade_size: Optional[float]  # quote 货币
    return_usd: float                # final_equity - initial_capital

    def as_dict(self) -> Dict[str, Optional[float]]:
        return asdict(self)


def trade_return_pct(t: Trade) -> float:
    return (t.pnl - t.fees) / (t.units * t.entry_price) * 100.0


def _mean(values: np.ndarray) -> Optional[float]:
    return float(values.mean()) if len(values) else None


class TradeStatsCalculator:
    """
    EquityCurve -> TradeStats

    与 MetricsCalculator 一样是纯函数，不影响回测执行。
    """

    def compute(self, curve: EquityCurve) -> TradeStats:
        trades: List[Trade] = curve.trades
        return_usd = curve.final_equity - curve.initial_capital

        if not trades:
            return TradeStats(
                win_rate=None,
                avg_trade=None,
                avg_winning_trade=None,
                avg_losing_trade=None,
                best_trade=None,
                worst_trade=None,
                avg_trade_size=None,
                return_usd=return_usd,
            )

        pct = np.array([trade_return_pct(t) for t in trades], dtype=np.float64)
        sizes = np.array([t.units * t.entry_price for t in trades], dtype=np.float64)
        wins = pct[pct > 0.0]
        losses = pct[pct < 0.0]

        return TradeStats(
            win_rate=len(wins) / len(pct) * 100.0,
            avg_trade=float(pct.mean()),
            avg_winning_trade=_mean(wins),
            avg_losing_trade=_mean(losses),
            best_trade=float(pct.max()),
            worst_trade=float(pct.min()),
            avg_trade_size=float(sizes.mean()),
            return_usd=return_usd,
        )


def buy_and_hold_roi(series: PriceSeries, start_index: int = 0) -> Optional[float]:
    """
    基准：在 start_index 买入、持有到最后一根 bar 的收益 %（无 fee）

    start_index 取曲线第一个可交易 bar，使基准与策略覆盖同一区间。
    """
    n = len(series)
    if n == 0 or not 0 <= start_index < n:
        return None
    first = float(series.prices[start_index])
    last = float(series.prices[-1])
    return (last - first) / first * 100.0
