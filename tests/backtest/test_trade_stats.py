#!filepath: tests/backtest/test_trade_stats.py
import pytest

from entropy_sweep.backtest.core.types import Direction, Trade
from entropy_sweep.backtest.metrics.trades import (
    TradeStatsCalculator,
    buy_and_hold_roi,
    trade_return_pct,
)
from entropy_sweep.backtest.result import EquityCurve


def _trade(entry: float, close: float, units: float = 1.0, fees: float = 0.0, direction=Direction.LONG) -> Trade:
    return Trade(
        entry_index=0,
        exit_index=1,
        direction=direction,
        entry_price=entry,
        exit_price=close,
        units=units,
        pnl=direction.value * units * (close - entry),
        fees=fees,
    )


def test_two_trade_curve_one_win_one_loss():
    curve = EquityCurve(
        initial_capital=1000.0,
        indices=[1, 2],
        timestamps=[1, 2],
        equities=[1100.0, 1045.0],
        trades=[_trade(100.0, 110.0, units=10.0), _trade(110.0, 104.5, units=10.0)],
    )

    stats = TradeStatsCalculator().compute(curve)

    assert stats.win_rate == pytest.approx(50.0)
    assert stats.best_trade == pytest.approx(10.0)
    assert stats.worst_trade == pytest.approx(-5.0)
    assert stats.avg_trade == pytest.approx(2.5)
    assert stats.avg_winning_trade == pytest.approx(10.0)
    assert stats.avg_losing_trade == pytest.approx(-5.0)
    assert stats.avg_trade_size == pytest.approx((1000.0 + 1100.0) / 2)
    assert stats.return_usd == pytest.approx(45.0)


def test_fees_count_against_trade_return():
    # gross +1%，fee 2 → net -1%
    assert trade_return_pct(_trade(100.0, 101.0, units=1.0, fees=2.0)) == pytest.approx(-1.0)


def test_short_trade_return_sign():
    assert trade_return_pct(_trade(100.0, 90.0, direction=Direction.SHORT)) == pytest.approx(10.0)


def test_no_trades_gives_sentinels():
    stats = TradeStatsCalculator().compute(EquityCurve.from_values([100.0, 100.0]))

    assert stats.win_rate is None
    assert stats.best_trade is None
    assert stats.avg_trade_size is None
    assert stats.return_usd == 0.0


def test_only_winners_has_no_losing_average():
    curve = EquityCurve(initial_capital=100.0, equities=[110.0], trades=[_trade(100.0, 110.0)])

    stats = TradeStatsCalculator().compute(curve)

    assert stats.win_rate == 100.0
    assert stats.avg_losing_trade is None


def test_buy_and_hold_on_uptrend(uptrend):
    # 100 → 1099
    assert buy_and_hold_roi(uptrend) == pytest.approx(999.0)
    # 从第 52 根（price 152）开始持有
    assert buy_and_hold_roi(uptrend, 52) == pytest.approx((1099.0 - 152.0) / 152.0 * 100.0)


def test_buy_and_hold_out_of_range(uptrend):
    assert buy_and_hold_roi(uptrend, len(uptrend)) is None
