# entropy_sweep/backtest/steps/simulate_step.py
from entropy_sweep.backtest.simulator import simulate
from entropy_sweep.pipeline.step import PipelineStep


class SimulateStep(PipelineStep):
    """signals → EquityCurve"""

    stage = "simulate"
    output_slot = "curve"

    def run(self, ctx):
        with self.inst.timer("simulate"):
            ctx.curve = simulate(
                ctx.series,
                ctx.signals,
                fee_bps=ctx.fee_bps,
                initial_capital=ctx.initial_capital,
                sizing=ctx.sizing,
            )
        return ctx
