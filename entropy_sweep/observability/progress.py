#!filepath: entropy_sweep/observability/progress.py
from time import perf_counter
from typing import Dict, Tuple

from entropy_sweep import logs


class ProgressReporter:
    """
    Sweep 进度（冷路径，只写日志，不依赖 Rich/TQDM）

    - start(task, total) 记录总量与起始时间
    - advance(task, by)  在父进程的聚合点累加（worker 不感知）
    - 每次 advance 输出 current/total、elapsed、ETA
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        # task → (current, total, unit, started_at)
        self._tasks: Dict[str, Tuple[int, int, str, float]] = {}

    def start(self, task: str, total: int, unit: str = ""):
        if not self.enabled:
            return
        self._tasks[task] = (0, total, unit, perf_counter())
        logs.info(f"[Progress] {task} started total={total} {unit}")

    def advance(self, task: str, by: int = 1):
        if not self.enabled or task not in self._tasks:
            return
        current, total, unit, started = self._tasks[task]
        current += by
        self._tasks[task] = (current, total, unit, started)

        elapsed = perf_counter() - started
        eta = elapsed / current * (total - current) if current else 0.0
        pct = (current / total * 100.0) if total else 100.0
        logs.info(
            f"[Progress] {task}: {current}/{total} {unit} ({pct:.1f}%) "
            f"| elapsed={elapsed:.2f}s | ETA={max(eta, 0.0):.2f}s"
        )

    def current(self, task: str) -> int:
        return self._tasks[task][0] if task in self._tasks else 0

    def done(self, task: str):
        if not self.enabled:
            return
        entry = self._tasks.pop(task, None)
        elapsed = perf_counter() - entry[3] if entry else 0.0
        logs.info(f"[Progress] {task} done total_time={elapsed:.2f}s")
