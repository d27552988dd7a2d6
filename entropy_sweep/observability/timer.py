#!filepath: entropy_sweep/observability/timer.py
import time
from typing import Dict


class Timer:
    """
    高精度计时器（perf_counter）
    - start(name)
    - end(name) → 返回耗时秒数
    - 同名计时不可嵌套；未 start 的 end 返回 0.0
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._start: Dict[str, float] = {}

    def start(self, name: str) -> None:
        if not self.enabled:
            return
        self._start[name] = time.perf_counter()

    def end(self, name: str) -> float:
        if not self.enabled:
            return 0.0
        began = self._start.pop(name, None)
        if began is None:
            return 0.0
        return time.perf_counter() - began
