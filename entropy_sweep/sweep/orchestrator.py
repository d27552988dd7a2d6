# entropy_sweep/sweep/orchestrator.py
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import List, Optional

from entropy_sweep import logs
from entropy_sweep.backtest.context import RunContext
from entropy_sweep.backtest.pipeline import BacktestPipeline
from entropy_sweep.backtest.result import Summary
from entropy_sweep.config.sweep_config import SweepConfig
from entropy_sweep.data.bar import PriceSeries
from entropy_sweep.observability.instrumentation import Instrumentation, NoOpInstrumentation
from entropy_sweep.pipeline.parallel.executor import ParallelExecutor
from entropy_sweep.pipeline.parallel.types import ParallelKind
from entropy_sweep.sweep.grid import Combination, expand, partition
from entropy_sweep.sweep.ranking import rank_by_drawdown, rank_by_roi, rank_by_sharpe
from entropy_sweep.sweep.worker import build_context, run_partition
from entropy_sweep.utils.errors import ConfigurationError


@dataclass(frozen=True)
class SweepResult:
    """
    summaries : grid 顺序的全部 Summary（已完成的组合）
    by_*      : 三个排序视图
    cancelled : sweep 是否被提前中止
    """

    summaries: List[Summary] = field(default_factory=list)
    by_roi: List[Summary] = field(default_factory=list)
    by_sharpe: List[Summary] = field(default_factory=list)
    by_drawdown: List[Summary] = field(default_factory=list)
    cancelled: bool = False

    def __len__(self) -> int:
        return len(self.summaries)

    @property
    def best(self) -> Optional[Summary]:
        """Best-ROI combination with data, None when nothing ran."""
        for s in self.by_roi:
            if s.ok:
                return s
        return None


class SweepOrchestrator:
    """
    SweepOrchestrator（FINAL / FROZEN）

    语义：
      - grid 展开 → 按 period 分区 → worker pool → 单点聚合 → 三个排序视图
      - 配置 / 数据错误在任何计算开始前抛出
      - 组合之间无共享可变状态，结果与调度 / 完成顺序无关
      - 可观测性只经由注入的 Instrumentation
    """

    def __init__(self, config: SweepConfig, inst: Instrumentation | None = None):
        if not isinstance(config, SweepConfig):
            raise ConfigurationError(
                f"[SweepOrchestrator] expected SweepConfig, got {type(config).__name__}"
            )
        self.config = config
        self.inst = inst if inst is not None else NoOpInstrumentation()

    # --------------------------------------------------
    def sweep(
        self,
        series: PriceSeries,
        cancel: Optional[threading.Event] = None,
    ) -> SweepResult:
        if not isinstance(series, PriceSeries):
            raise TypeError(
                f"[SweepOrchestrator] expected PriceSeries, got {type(series).__name__}"
            )

        cfg = self.config
        inst = self.inst

        with inst.timer("expand_grid"):
            combos = expand(cfg)
            parts = partition(combos, series, cfg)

        inst.context.set("bits", cfg.bits)
        inst.context.set("direction_rule", cfg.direction_rule)
        inst.context.set("combinations", len(combos))
        inst.context.set("partitions", len(parts))
        logs.info(f"[SweepOrchestrator] start bars={len(series)} {inst.context.describe()}")

        inst.progress.start("sweep", total=len(combos), unit="combinations")
        with inst.timer("run_partitions"):
            results = ParallelExecutor.run(
                kind=ParallelKind.PARTITION,
                items=parts,
                handler=run_partition,
                max_workers=cfg.max_workers,
                cancel=cancel,
                on_result=lambda _i, res: self._partition_done(inst, res),
            )

        # 单一聚合点：按 grid 顺序拼回
        summaries: List[Summary] = []
        cancelled = False
        for part_result in results:
            if part_result is None:
                cancelled = True
                continue
            summaries.extend(part_result)

        with inst.timer("rank_by_roi"):
            by_roi = rank_by_roi(summaries)
        with inst.timer("rank_by_sharpe"):
            by_sharpe = rank_by_sharpe(summaries)
        with inst.timer("rank_by_drawdown"):
            by_drawdown = rank_by_drawdown(summaries)

        n_no_data = sum(1 for s in summaries if not s.ok)
        inst.metrics.record("combinations_completed", len(summaries))
        inst.metrics.record("combinations_no_data", n_no_data)
        inst.progress.done("sweep")

        if cancelled:
            logs.warning(
                f"[SweepOrchestrator] cancelled | completed={len(summaries)}/{len(combos)}"
            )
        else:
            logs.info(
                f"[SweepOrchestrator] done | completed={len(summaries)} no_data={n_no_data}"
            )

        return SweepResult(
            summaries=summaries,
            by_roi=by_roi,
            by_sharpe=by_sharpe,
            by_drawdown=by_drawdown,
            cancelled=cancelled,
        )

    @staticmethod
    def _partition_done(inst, summaries: List[Summary]) -> None:
        """父进程回调：每完成一个 period partition 调用一次"""
        inst.progress.advance("sweep", len(summaries))
        inst.metrics.increment("partitions_completed")

    # --------------------------------------------------
    def replay(self, series: PriceSeries, summary: Summary) -> RunContext:
        """
        重新跑一个组合，返回完整 RunContext（samples / signals / curve）。
        NO_DATA 组合同样抛出 InsufficientDataError。
        """
        cfg = self.config
        combo = Combination(
            period=summary.period,
            zscore_threshold=summary.zscore_threshold,
            fee_bps=summary.fee_bps,
        )
        part = partition([combo], series, cfg)[0]
        return BacktestPipeline.default(inst=self.inst).run(build_context(part, combo))
