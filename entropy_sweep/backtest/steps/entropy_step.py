# entropy_sweep/backtest/steps/entropy_step.py
from __future__ import annotations

from typing import Dict, List, Optional

from entropy_sweep.backtest.context import RunContext
from entropy_sweep.backtest.core.types import EntropySample, SymbolSequence
from entropy_sweep.backtest.entropy.coder import encode, rolling_entropy
from entropy_sweep.pipeline.step import PipelineStep
from entropy_sweep.utils.errors import InsufficientDataError


class EntropyStep(PipelineStep):
    """
    EntropyStep（FINAL）

    series → SymbolSequence → rolling entropy samples

    - symbols 可由调用方预先编码注入（同一 partition 只编码一次）
    - cache 按 period 复用 samples（同一 period 下不同 threshold / fee 共享）
    - 无样本 → InsufficientDataError（soft，由 worker 记为 NO_DATA）
    """

    stage = "entropy"
    output_slot = "samples"

    def __init__(
        self,
        symbols: Optional[SymbolSequence] = None,
        cache: Optional[Dict[int, List[EntropySample]]] = None,
        inst=None,
    ):
        super().__init__(inst)
        self.symbols = symbols
        self.cache = cache if cache is not None else {}

    def run(self, ctx: RunContext) -> RunContext:
        samples = self.cache.get(ctx.period)
        if samples is None:
            with self.inst.timer("rolling_entropy"):
                if self.symbols is None or self.symbols.bits != ctx.bits:
                    self.symbols = encode(ctx.series, ctx.bits)
                samples = rolling_entropy(self.symbols, ctx.period)
            self.cache[ctx.period] = samples

        if not samples:
            raise InsufficientDataError(
                f"[EntropyStep] period={ctx.period} needs more than "
                f"{ctx.period + ctx.bits} bars, got {len(ctx.series)}"
            )

        ctx.samples = samples
        return ctx
