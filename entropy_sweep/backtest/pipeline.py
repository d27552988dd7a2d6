# entropy_sweep/backtest/pipeline.py
from __future__ import annotations

from typing import List

from entropy_sweep.backtest.context import RunContext
from entropy_sweep.backtest.steps.entropy_step import EntropyStep
from entropy_sweep.backtest.steps.metrics_step import MetricsStep
from entropy_sweep.backtest.steps.signal_step import SignalStep
from entropy_sweep.backtest.steps.simulate_step import SimulateStep
from entropy_sweep.pipeline.step import PipelineStep


class BacktestPipeline:
    """
    BacktestPipeline（FINAL / FROZEN）

    语义：
      - 单个参数组合的 orchestration 层
      - 只负责 Step 顺序执行
      - 纯函数：同一 (series, 参数) 永远得到同一 Summary
    """

    def __init__(self, *, steps: List[PipelineStep]) -> None:
        self.steps = steps

    @classmethod
    def default(cls, *, entropy: EntropyStep | None = None, inst=None) -> "BacktestPipeline":
        return cls(
            steps=[
                entropy if entropy is not None else EntropyStep(inst=inst),
                SignalStep(inst),
                SimulateStep(inst),
                MetricsStep(inst),
            ]
        )

    # --------------------------------------------------
    def run(self, ctx: RunContext) -> RunContext:
        for step in self.steps:
            ctx = step(ctx)
        return ctx
