# entropy_sweep/backtest/steps/signal_step.py
from entropy_sweep.backtest.strategy.signal_generator import SignalPolicy, generate
from entropy_sweep.pipeline.step import PipelineStep


class SignalStep(PipelineStep):
    """samples → signals（z-score 门控 + direction rule）"""

    stage = "signal"
    output_slot = "signals"

    def run(self, ctx):
        policy = SignalPolicy(
            zscore_threshold=ctx.zscore_threshold,
            direction_rule=ctx.direction_rule,
        )
        with self.inst.timer("generate_signals"):
            ctx.signals = generate(ctx.samples, policy, bits=ctx.bits)
        return ctx
