#!filepath: entropy_sweep/observability/instrumentation.py
from __future__ import annotations

from collections import OrderedDict
from contextlib import contextmanager, nullcontext
from dataclasses import dataclass
from typing import Dict

from entropy_sweep.observability.context import InstrumentationContext
from entropy_sweep.observability.metrics import MetricRecorder
from entropy_sweep.observability.progress import ProgressReporter
from entropy_sweep.observability.timeline_reporter import TimelineReporter
from entropy_sweep.observability.timer import Timer


@dataclass
class Instrumentation:
    """
    Sweep 级可观测性（只在父进程使用）

    - timeline 只包含 leaf timer（record=True），按首次出现顺序
    - 同名 leaf 多次出现时耗时累加，calls 记录次数
    - record=False 只划定 parent scope，不写 timeline
    - 数值核心（coder / simulator / metrics）不持有 Instrumentation
    """

    enabled: bool = True

    def __post_init__(self):
        self._timer = Timer(enabled=self.enabled)
        self.progress = ProgressReporter(enabled=self.enabled)
        self.metrics = MetricRecorder(enabled=self.enabled)
        self.context = InstrumentationContext()

        self.timeline: Dict[str, float] = OrderedDict()
        self.calls: Dict[str, int] = {}

    @contextmanager
    def _measure(self, name: str, record: bool):
        self._timer.start(name)
        try:
            yield
        finally:
            elapsed = self._timer.end(name)
            if record:
                self.timeline[name] = self.timeline.get(name, 0.0) + elapsed
                self.calls[name] = self.calls.get(name, 0) + 1

    def timer(self, name: str, *, record: bool = True):
        """with inst.timer("simulate"): ...  (record=False → parent scope)"""
        if not self.enabled:
            return nullcontext()
        return self._measure(name, record)

    def elapsed_ms(self, name: str) -> float | None:
        sec = self.timeline.get(name)
        return None if sec is None else sec * 1000.0

    def generate_timeline_report(self, label: str):
        TimelineReporter(self.timeline, label).print()


class NoOpInstrumentation:
    """未注入 Instrumentation 时的占位：同样的接口，什么都不做。"""

    enabled = False

    def __init__(self):
        self.progress = ProgressReporter(enabled=False)
        self.metrics = MetricRecorder(enabled=False)
        self.context = InstrumentationContext()
        self.timeline: Dict[str, float] = OrderedDict()
        self.calls: Dict[str, int] = {}

    def timer(self, name: str, *, record: bool = True):
        return nullcontext()

    def elapsed_ms(self, name: str) -> float | None:
        return None

    def generate_timeline_report(self, label: str):
        return None
