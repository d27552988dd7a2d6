#!filepath: entropy_sweep/backtest/simulator.py
from __future__ import annotations

import math
from typing import List, Optional, Sequence

from entropy_sweep.backtest.core.types import Direction, Position, Signal, Trade
from entropy_sweep.backtest.result import EquityCurve
from entropy_sweep.config.sweep_config import SizingPolicy
from entropy_sweep.data.bar import PriceSeries
from entropy_sweep.utils.errors import ConfigurationError


class TradeSimulator:
    """
    TradeSimulator（FINAL / FROZEN）

    状态机：FLAT / LONG / SHORT，初始 FLAT

    每根 bar：
      1. 若有新 signal 且方向不同于当前状态：
           - 平仓（exit notional × fee）
           - 开仓（entry notional × fee）
         flip = 两条 fee 腿；状态不变 = 0 fee
      2. mark-to-market：equity = cash + dir · units · (price − entry)
      3. equity <= 0 → 强平，钳制为 0，bankrupt，之后永远 FLAT

    最后一根 bar 若仍有持仓 → 强制平仓（一条 fee 腿），final equity 为已实现值。

    纯函数：不修改 series / signals，不记录日志。
    """

    def __init__(
        self,
        *,
        fee_bps: float,
        initial_capital: float,
        sizing: SizingPolicy = SizingPolicy.EQUITY,
    ):
        if fee_bps < 0 or not math.isfinite(fee_bps):
            raise ConfigurationError(f"[TradeSimulator] fee_bps must be >= 0, got {fee_bps}")
        if initial_capital <= 0 or not math.isfinite(initial_capital):
            raise ConfigurationError(
                f"[TradeSimulator] initial_capital must be positive, got {initial_capital}"
            )

        self.rate = fee_bps / 10_000.0
        self.initial_capital = float(initial_capital)
        self.sizing = SizingPolicy(sizing)

        self._cash = self.initial_capital
        self._pos: Optional[Position] = None
        self._trades: List[Trade] = []
        self._bankrupt = False

    # --------------------------------------------------
    def run(self, series: PriceSeries, signals: Sequence[Signal]) -> EquityCurve:
        if not signals:
            return EquityCurve(initial_capital=self.initial_capital)

        n = len(series)
        prev = -1
        for s in signals:
            if s.index <= prev:
                raise ValueError(
                    f"[TradeSimulator] signal indices must be strictly increasing ({prev} -> {s.index})"
                )
            if s.index < 0 or s.index >= n:
                raise ValueError(f"[TradeSimulator] signal index {s.index} outside series of {n} bars")
            prev = s.index

        prices = series.prices
        ts = series.ts

        indices: List[int] = []
        stamps: List[int] = []
        equities: List[float] = []

        k = 0
        first = signals[0].index
        last = n - 1
        for i in range(first, n):
            price = float(prices[i])

            if k < len(signals) and signals[k].index == i:
                if not self._bankrupt:
                    self._transition(i, price, signals[k].direction)
                k += 1

            if i == last and self._pos is not None:
                self._close(i, price)

            equity = self._mark(price)
            if equity <= 0.0:
                if self._pos is not None:
                    self._close(i, price)
                equity = 0.0
                self._cash = 0.0
                self._bankrupt = True

            indices.append(i)
            stamps.append(int(ts[i]))
            equities.append(equity)

        return EquityCurve(
            initial_capital=self.initial_capital,
            indices=indices,
            timestamps=stamps,
            equities=equities,
            trades=list(self._trades),
            bankrupt=self._bankrupt,
        )

    # --------------------------------------------------
    @property
    def _direction(self) -> Direction:
        return self._pos.direction if self._pos is not None else Direction.FLAT

    def _mark(self, price: float) -> float:
        pos = self._pos
        if pos is None:
            return self._cash
        return self._cash + pos.direction.value * pos.units * (price - pos.entry_price)

    def _transition(self, i: int, price: float, target: Direction) -> None:
        if target == self._direction:
            return
        if self._pos is not None:
            self._close(i, price)
        if target != Direction.FLAT and self._cash > 0.0:
            self._open(i, price, target)

    def _open(self, i: int, price: float, direction: Direction) -> None:
        if self.sizing == SizingPolicy.EQUITY:
            # notional + entry fee == 当前 equity
            notional = self._cash / (1.0 + self.rate)
        else:
            notional = self.initial_capital

        self._cash -= notional * self.rate
        self._pos = Position(
            index=i,
            direction=direction,
            entry_price=price,
            units=notional / price,
        )

    def _close(self, i: int, price: float) -> None:
        pos = self._pos
        pnl = pos.direction.value * pos.units * (price - pos.entry_price)
        exit_fee = pos.units * price * self.rate
        entry_fee = pos.units * pos.entry_price * self.rate

        self._cash += pnl - exit_fee
        self._trades.append(
            Trade(
                entry_index=pos.index,
                exit_index=i,
                direction=pos.direction,
                entry_price=pos.entry_price,
                exit_price=price,
                units=pos.units,
                pnl=pnl,
                fees=entry_fee + exit_fee,
            )
        )
        self._pos = None


def simulate(
    series: PriceSeries,
    signals: Sequence[Signal],
    fee_bps: float,
    initial_capital: float,
    sizing: SizingPolicy = SizingPolicy.EQUITY,
) -> EquityCurve:
    """Fresh simulator per call: no state survives between runs."""
    return TradeSimulator(
        fee_bps=fee_bps,
        initial_capital=initial_capital,
        sizing=sizing,
    ).run(series, signals)
