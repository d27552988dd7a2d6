#!filepath: entropy_sweep/observability/metrics.py
from dataclasses import dataclass, field
from typing import Dict, Any
from entropy_sweep import logs


@dataclass
class MetricRecorder:
    """
    Sweep 级计数 / 数值记录（冷路径）
    """

    enabled: bool = True
    metrics: Dict[str, Any] = field(default_factory=dict)

    def record(self, name: str, value: Any):
        if not self.enabled:
            return
        self.metrics[name] = value
        logs.info(f"[Metric] {name} = {value}")

    def increment(self, name: str, by: int = 1):
        if not self.enabled:
            return
        self.metrics[name] = self.metrics.get(name, 0) + by
