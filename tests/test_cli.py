#!filepath: tests/test_cli.py
from __future__ import annotations

import numpy as np
import pandas as pd
import yaml
from typer.testing import CliRunner

from entropy_sweep import __version__
from entropy_sweep.cli import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_sweep_end_to_end(tmp_path, monkeypatch):
    monkeypatch.delenv("SWEEP_MAX_WORKERS", raising=False)

    rng = np.random.default_rng(1)
    prices = 100.0 + np.cumsum(rng.normal(0.0, 1.0, size=400))
    data = tmp_path / "bars.csv"
    pd.DataFrame({"ts": np.arange(1_700_000_000, 1_700_000_400), "close": prices}).to_csv(
        data, index=False
    )

    config = tmp_path / "config.yaml"
    config.write_text(
        yaml.safe_dump(
            {
                "log": {"dir": str(tmp_path / "logs")},
                "data": {"path": str(data)},
                "sweep": {
                    "periods": [20, 40],
                    "zscore_thresholds": [None, 1.0],
                    "fee_regimes": [0.0, 10.0],
                    "max_workers": 1,
                },
            }
        ),
        encoding="utf-8",
    )
    out = tmp_path / "results"

    result = runner.invoke(app, ["sweep", "--config", str(config), "--out", str(out)])

    assert result.exit_code == 0, result.output
    assert "Top by ROI" in result.output
    assert "Top by Sharpe" in result.output
    assert "Top by Drawdown" in result.output

    for name in ("summaries.csv", "top_by_roi.csv", "top_by_sharpe.csv", "top_by_drawdown.csv"):
        assert (out / name).exists()
    assert len(pd.read_csv(out / "summaries.csv")) == 8
    assert (out / "best_equity.png").exists()
