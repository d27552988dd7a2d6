#!filepath: entropy_sweep/data/loader.py
from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from entropy_sweep import logs
from entropy_sweep.data.bar import PriceSeries
from entropy_sweep.utils.errors import ConfigurationError, SeriesValidationError

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_EPOCH = pd.Timestamp("1970-01-01", tz="UTC")


class BarLoader:
    """
    Bar 数据源（CSV / Parquet → PriceSeries）

    数据源契约（核心不做）：
      - 时间键：整数（unix ts / slot）或 "%Y-%m-%d %H:%M:%S"（→ unix ms）
      - start / end：严格开区间过滤，单位必须与时间键一致
        （整数键 ↔ 整数边界，日期键 ↔ 日期字符串边界）
      - 过滤把非空数据全部滤掉 → warning
      - 重复时间键去重（保留最后一条），按时间升序
    之后交给 PriceSeries 做 fatal 校验。
    """

    @staticmethod
    def load(
        path: str | Path,
        *,
        time_column: Optional[str] = None,
        price_column: str = "close",
        start: Optional[str | int] = None,
        end: Optional[str | int] = None,
    ) -> PriceSeries:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"[BarLoader] bar file not found: {path}")

        if path.suffix.lower() == ".parquet":
            df = pd.read_parquet(path, engine="pyarrow")
        else:
            df = pd.read_csv(path)

        series = BarLoader.from_frame(
            df,
            time_column=time_column,
            price_column=price_column,
            start=start,
            end=end,
        )
        logs.info(f"[BarLoader] loaded {len(series)} bars from {path.name}")
        return series

    @staticmethod
    def from_frame(
        df: pd.DataFrame,
        *,
        time_column: Optional[str] = None,
        price_column: str = "close",
        start: Optional[str | int] = None,
        end: Optional[str | int] = None,
    ) -> PriceSeries:
        if df.empty:
            return PriceSeries.from_arrays([], [])

        time_column = time_column or df.columns[0]
        for col in (time_column, price_column):
            if col not in df.columns:
                raise SeriesValidationError(f"[BarLoader] missing column: {col}")

        keys, dated = BarLoader._time_keys(df[time_column])
        prices = pd.to_numeric(df[price_column], errors="coerce").to_numpy(dtype=np.float64)

        frame = pd.DataFrame({"ts": keys, "price": prices})

        total = len(frame)
        if start is not None:
            frame = frame[frame["ts"] > BarLoader._time_key(start, dated)]
        if end is not None:
            frame = frame[frame["ts"] < BarLoader._time_key(end, dated)]
        if total and frame.empty:
            logs.warning(
                f"[BarLoader] start={start!r} end={end!r} filtered out all {total} bars"
            )

        before = len(frame)
        frame = (
            frame.drop_duplicates(subset="ts", keep="last")
            .sort_values("ts", kind="mergesort")
            .reset_index(drop=True)
        )
        if len(frame) != before:
            logs.warning(f"[BarLoader] dropped {before - len(frame)} duplicate time keys")

        return PriceSeries.from_arrays(
            frame["ts"].to_numpy(dtype=np.int64),
            frame["price"].to_numpy(dtype=np.float64),
        )

    # --------------------------------------------------
    @staticmethod
    def _time_keys(col: pd.Series) -> Tuple[np.ndarray, bool]:
        """→ (int64 keys, 是否由日期字符串解析而来)"""
        if pd.api.types.is_integer_dtype(col):
            return col.to_numpy(dtype=np.int64), False

        parsed = pd.to_datetime(col, format=_DATE_FORMAT, errors="coerce", utc=True)
        if parsed.isna().any():
            bad = col[parsed.isna()].iloc[0]
            raise SeriesValidationError(f"[BarLoader] invalid date format: {bad!r}")
        ms = ((parsed - _EPOCH) // pd.Timedelta(milliseconds=1)).to_numpy(dtype=np.int64)
        return ms, True

    @staticmethod
    def _time_key(value: str | int, dated: bool) -> int:
        numeric = isinstance(value, (int, np.integer)) or (
            isinstance(value, str) and value.lstrip("-").isdigit()
        )
        if numeric == dated:
            kind = "date" if dated else "integer"
            raise ConfigurationError(
                f"[BarLoader] bound {value!r} does not match {kind} time keys"
            )
        if numeric:
            return int(value)
        ts = pd.Timestamp(pd.to_datetime(value, format=_DATE_FORMAT, utc=True))
        return int((ts - _EPOCH) // pd.Timedelta(milliseconds=1))
