#!filepath: entropy_sweep/config/log_config.py
from pydantic import BaseModel


class LogConfig(BaseModel):
    """
    loguru sink 配置

    - 文件 sink：{dir}/{YYYY-MM-DD}.log，按 rotation 切割
    - console=True 额外输出到 stderr（CLI 交互时使用）
    """

    dir: str = "logs"
    rotation: str = "1 day"
    retention: str = "30 days"
    level: str = "INFO"
    console: bool = False
