#!filepath: entropy_sweep/config/data_config.py
from typing import Optional, Union

from pydantic import BaseModel


class DataConfig(BaseModel):
    """
    Bar source（CSV / Parquet）

    - time_column=None → 第一列作为时间键
    - start / end 为严格开区间过滤（与原始 CSV 导入一致）
    - 日期键用 "%Y-%m-%d %H:%M:%S" 字符串，整数键（unix ts / slot）用整数
    """

    path: str
    time_column: Optional[str] = None
    price_column: str = "close"
    start: Optional[Union[int, str]] = None
    end: Optional[Union[int, str]] = None
