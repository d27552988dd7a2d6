# entropy_sweep/sweep/worker.py
from __future__ import annotations

from typing import Dict, List

from entropy_sweep.backtest.context import RunContext
from entropy_sweep.backtest.core.types import EntropySample
from entropy_sweep.backtest.entropy.coder import encode
from entropy_sweep.backtest.pipeline import BacktestPipeline
from entropy_sweep.backtest.result import Summary
from entropy_sweep.backtest.steps.entropy_step import EntropyStep
from entropy_sweep.sweep.grid import Combination, Partition
from entropy_sweep.utils.errors import InsufficientDataError


def build_context(part: Partition, combo: Combination) -> RunContext:
    return RunContext(
        period=combo.period,
        zscore_threshold=combo.zscore_threshold,
        fee_bps=combo.fee_bps,
        bits=part.bits,
        direction_rule=part.direction_rule,
        initial_capital=part.initial_capital,
        sizing=part.sizing,
        bar_resolution=part.bar_resolution,
        series=part.series,
    )


def run_partition(part: Partition) -> List[Summary]:
    """
    Worker 入口（module-level，供 ProcessPoolExecutor pickle）

    - 每个 partition 只编码一次、每个 period 只算一次 rolling entropy
    - InsufficientDataError → Summary.no_data，不影响其它组合
    - 返回顺序 == part.combinations 顺序
    """
    symbols = encode(part.series, part.bits)
    cache: Dict[int, List[EntropySample]] = {}
    pipeline = BacktestPipeline.default(entropy=EntropyStep(symbols=symbols, cache=cache))

    out: List[Summary] = []
    for combo in part.combinations:
        try:
            ctx = pipeline.run(build_context(part, combo))
            out.append(ctx.summary)
        except InsufficientDataError:
            out.append(
                Summary.no_data(
                    period=combo.period,
                    zscore_threshold=combo.zscore_threshold,
                    fee_bps=combo.fee_bps,
                    bits=part.bits,
                    direction_rule=part.direction_rule,
                )
            )
    return out
