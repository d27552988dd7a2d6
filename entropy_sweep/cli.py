#!filepath: entropy_sweep/cli.py
import math
from pathlib import Path
from typing import List, Optional

import typer
from rich import print
from rich.table import Table

from entropy_sweep import __version__
from entropy_sweep.backtest.result import Summary

app = typer.Typer(help="Entropy signal backtest & parameter sweep CLI")


def _fmt(v: Optional[float], digits: int = 2) -> str:
    if v is None:
        return "-"
    if math.isinf(v):
        return "inf" if v > 0 else "-inf"
    return f"{v:.{digits}f}"


def _table(title: str, rows: List[Summary], top: int) -> Table:
    table = Table(title=title)
    cols = ("period", "z", "fee_bps", "roi %", "sharpe", "max_dd %", "trades", "win %", "b&h %", "status")
    for col in cols:
        table.add_column(col, justify="right")

    for s in rows[:top]:
        table.add_row(
            str(s.period),
            _fmt(s.zscore_threshold),
            _fmt(s.fee_bps),
            _fmt(s.roi),
            _fmt(s.sharpe, 3),
            _fmt(s.max_drawdown),
            str(s.n_trades),
            _fmt(s.win_rate, 1),
            _fmt(s.buy_and_hold_roi),
            s.status.value + (" (bankrupt)" if s.bankrupt else ""),
        )
    return table


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def sweep(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config (default: base.yml)"),
    data: Optional[Path] = typer.Option(None, "--data", "-d", help="CSV / Parquet bars, overrides data.path"),
    out: Path = typer.Option(Path("results"), "--out", "-o", help="output directory"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="worker processes"),
    top: int = typer.Option(10, "--top", help="rows per ranked table"),
    no_chart: bool = typer.Option(False, "--no-chart", help="skip equity curve rendering"),
):
    """
    跑完整参数 sweep，打印 Top by ROI / Sharpe / Drawdown
    """
    from entropy_sweep.workflows.run_sweep import SweepRunSpec, run_sweep

    print("[green]Running entropy sweep[/green]")

    result = run_sweep(
        SweepRunSpec(
            config_path=str(config) if config else None,
            data_path=str(data) if data else None,
            out_dir=str(out),
            max_workers=workers,
            render=not no_chart,
        )
    )

    print(_table("Top by ROI", result.by_roi, top))
    print(_table("Top by Sharpe", result.by_sharpe, top))
    print(_table("Top by Drawdown", result.by_drawdown, top))

    if result.cancelled:
        print("[yellow]Sweep cancelled: partial results[/yellow]")
    print(f"[blue]{len(result)} combinations, results in {out}[/blue]")


if __name__ == "__main__":
    app()

# python -m entropy_sweep.cli sweep --data data/btc_1d.csv
