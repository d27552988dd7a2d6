# entropy_sweep/backtest/report/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Report(ABC):
    """
    Report (FINAL / FROZEN)

    sweep 结果 -> side effects (files, figures)

    Reports are read-only consumers of sweep results.
    Reports must not alter backtest execution or metrics.
    Deleting reports must not affect reproducibility.
    """

    @abstractmethod
    def render(self, data: Any) -> None:
        ...
