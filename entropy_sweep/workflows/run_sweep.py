#!filepath: entropy_sweep/workflows/run_sweep.py
from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from entropy_sweep import logs
from entropy_sweep.backtest.report.equity_curve import EquityCurveReport
from entropy_sweep.backtest.report.summary_table import SummaryTableReport
from entropy_sweep.config.app_config import AppConfig
from entropy_sweep.data.loader import BarLoader
from entropy_sweep.observability.instrumentation import Instrumentation
from entropy_sweep.sweep.orchestrator import SweepOrchestrator, SweepResult


@dataclass(frozen=True)
class SweepRunSpec:
    config_path: Optional[str] = None
    data_path: Optional[str] = None     # 覆盖 data.path
    out_dir: str = "results"
    max_workers: Optional[int] = None   # 覆盖 sweep.max_workers
    render: bool = True


@logs.catch(msg="sweep workflow failed")
def run_sweep(spec: SweepRunSpec, cancel: Optional[threading.Event] = None) -> SweepResult:
    """
    load config → load bars → sweep → 导出排序表 → 画最佳 ROI 曲线 → timeline

    I/O 只发生在 sweep 之前与之后。
    """
    cfg = AppConfig.load(spec.config_path)
    logs.configure(cfg.log)

    sweep_cfg = cfg.sweep
    if spec.max_workers is not None:
        sweep_cfg = sweep_cfg.model_copy(update={"max_workers": spec.max_workers})

    data_path = spec.data_path or cfg.data.path
    series = BarLoader.load(
        data_path,
        time_column=cfg.data.time_column,
        price_column=cfg.data.price_column,
        start=cfg.data.start,
        end=cfg.data.end,
    )

    inst = Instrumentation()
    orchestrator = SweepOrchestrator(sweep_cfg, inst=inst)
    result = orchestrator.sweep(series, cancel=cancel)

    out_dir = Path(spec.out_dir)
    with inst.timer("export_tables"):
        SummaryTableReport(out_dir / "summaries.csv").render(result.summaries)
        SummaryTableReport(out_dir / "top_by_roi.csv").render(result.by_roi)
        SummaryTableReport(out_dir / "top_by_sharpe.csv").render(result.by_sharpe)
        SummaryTableReport(out_dir / "top_by_drawdown.csv").render(result.by_drawdown)

    best = result.best
    if spec.render and best is not None:
        with inst.timer("render_equity_curve"):
            ctx = orchestrator.replay(series, best)
            EquityCurveReport(
                out_dir / "best_equity.png",
                title=(
                    f"Equity Curve: period={best.period} "
                    f"z={best.zscore_threshold} fee={best.fee_bps}bps"
                ),
            ).render(ctx.curve.points())
    elif best is None:
        logs.warning("[run_sweep] no combination produced data, skip equity curve")

    inst.generate_timeline_report(Path(data_path).name)
    logs.info(f"[run_sweep] results written to {out_dir}")
    return result


if __name__ == "__main__":
    # python -m entropy_sweep.workflows.run_sweep
    run_sweep(SweepRunSpec())
