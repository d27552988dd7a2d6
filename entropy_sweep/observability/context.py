#!filepath: entropy_sweep/observability/context.py
from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass
class InstrumentationContext:
    """
    sweep 运行过程中的上下文标签：
    - bits / direction_rule
    - 组合总数 / 分区数
    """

    state: Dict[str, Any] = field(default_factory=dict)

    def set(self, key: str, value: Any):
        self.state[key] = value

    def get(self, key: str, default=None):
        return self.state.get(key, default)

    def describe(self) -> str:
        return " ".join(f"{k}={v}" for k, v in self.state.items())
