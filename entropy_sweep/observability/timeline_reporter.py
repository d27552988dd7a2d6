#!filepath: entropy_sweep/observability/timeline_reporter.py
from typing import Dict
from entropy_sweep import logs


class TimelineReporter:
    """
    Sweep Timeline 报告：
    - leaf timer name → 耗时（ms）
    """

    def __init__(self, timeline: Dict[str, float], label: str):
        self.timeline = timeline
        self.label = label

    def print(self):
        logs.info(f"[Timeline] ===== Sweep timeline for {self.label} =====")

        total = 0.0
        for name, sec in self.timeline.items():
            logs.info(f"[Timeline] {str(name):<30} {sec * 1000.0:>10.3f}ms")
            total += sec

        logs.info(f"[Timeline] Total{'':<27} {total * 1000.0:>10.3f}ms")
        logs.info("[Timeline] ===========================================")
