# entropy_sweep/backtest/report/summary_table.py
from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd

from entropy_sweep.backtest.report.base import Report
from entropy_sweep.backtest.result import Summary


def to_frame(summaries: Sequence[Summary]) -> pd.DataFrame:
    """排序视图 → DataFrame（列顺序 == Summary 字段顺序）"""
    return pd.DataFrame(
        [s.as_record() for s in summaries],
        columns=Summary.columns(),
    )


class SummaryTableReport(Report):
    def __init__(self, output_path):
        self._path = Path(output_path)

    def render(self, summaries: Sequence[Summary]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        to_frame(summaries).to_csv(self._path, index=False)
