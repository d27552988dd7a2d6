#!filepath: entropy_sweep/pipeline/step.py
from __future__ import annotations

from entropy_sweep.backtest.context import RunContext
from entropy_sweep.observability.instrumentation import (
    Instrumentation,
    NoOpInstrumentation,
)


class PipelineStep:
    """
    单个 stage 的薄包装：RunContext in → RunContext out

    - 子类实现 run()，把结果写到 ctx.<output_slot>
    - __call__ 负责 parent scope 计时（不进 timeline）与 slot 校验
    - 叶子计时在 run() 内部用 self.inst.timer(...) 完成
    """

    stage: str = ""
    output_slot: str = ""

    def __init__(self, inst: Instrumentation | None = None):
        self.inst = inst if inst is not None else NoOpInstrumentation()

    @property
    def step_name(self) -> str:
        return type(self).__name__

    def timed(self):
        return self.inst.timer(self.step_name, record=False)

    def __call__(self, ctx: RunContext) -> RunContext:
        with self.timed():
            ctx = self.run(ctx)
        if self.output_slot and getattr(ctx, self.output_slot, None) is None:
            raise RuntimeError(f"[{self.step_name}] left ctx.{self.output_slot} unset")
        return ctx

    def run(self, ctx: RunContext) -> RunContext:
        raise NotImplementedError
