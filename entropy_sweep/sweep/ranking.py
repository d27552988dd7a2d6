# entropy_sweep/sweep/ranking.py
"""
排序视图（FINAL / FROZEN）

  by_roi      : roi 降序
  by_sharpe   : sharpe 降序（+inf 最前）
  by_drawdown : |max_drawdown| 升序（最接近 0 在前）

tie-break：period 升序 → threshold（None 在前）→ fee 升序
NO_DATA 永远排在最后（组内同样按 tie-break 排序）

排序结果只依赖 Summary 内容，与执行 / 完成顺序无关。
"""
from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from entropy_sweep.backtest.result import Summary


def _tie_break(s: Summary) -> Tuple:
    t = s.zscore_threshold
    return (s.period, (0, 0.0) if t is None else (1, t), s.fee_bps)


def _ranked(summaries: Sequence[Summary], metric: Callable[[Summary], float]) -> List[Summary]:
    def key(s: Summary):
        if not s.ok:
            return (1, 0.0, _tie_break(s))
        return (0, metric(s), _tie_break(s))

    return sorted(summaries, key=key)


def rank_by_roi(summaries: Sequence[Summary]) -> List[Summary]:
    return _ranked(summaries, lambda s: -s.roi)


def rank_by_sharpe(summaries: Sequence[Summary]) -> List[Summary]:
    return _ranked(summaries, lambda s: -s.sharpe)


def rank_by_drawdown(summaries: Sequence[Summary]) -> List[Summary]:
    return _ranked(summaries, lambda s: abs(s.max_drawdown))
