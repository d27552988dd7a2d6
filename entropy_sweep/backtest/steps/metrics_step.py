# entropy_sweep/backtest/steps/metrics_step.py
from entropy_sweep.backtest.metrics.base import MetricsCalculator
from entropy_sweep.backtest.metrics.trades import TradeStatsCalculator, buy_and_hold_roi
from entropy_sweep.backtest.result import Summary
from entropy_sweep.pipeline.step import PipelineStep


class MetricsStep(PipelineStep):
    """
    MetricsStep（FINAL）

    职责：
      - curve → PerformanceMetrics + TradeStats
      - 同区间 buy & hold 基准
      - 以上 + 参数 → Summary（组合的最终结论）
    """

    stage = "metrics"
    output_slot = "summary"

    def run(self, ctx):
        curve = ctx.curve
        with self.inst.timer("metrics"):
            metrics = MetricsCalculator(ctx.bar_resolution).compute(curve)
            stats = TradeStatsCalculator().compute(curve)
            benchmark = buy_and_hold_roi(ctx.series, curve.indices[0])

        ctx.metrics = metrics
        ctx.summary = Summary(
            period=ctx.period,
            zscore_threshold=ctx.zscore_threshold,
            fee_bps=ctx.fee_bps,
            **metrics.as_dict(),
            n_trades=len(curve.trades),
            **stats.as_dict(),
            buy_and_hold_roi=benchmark,
            bankrupt=curve.bankrupt,
            bits=ctx.bits,
            direction_rule=ctx.direction_rule,
        )
        return ctx
