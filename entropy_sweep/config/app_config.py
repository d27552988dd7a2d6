#!filepath: entropy_sweep/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from .log_config import LogConfig
from .data_config import DataConfig
from .sweep_config import SweepConfig
from entropy_sweep.utils.errors import ConfigurationError
from entropy_sweep import logs


def project_root() -> str:
    """
    返回项目根目录（基于当前文件位置推导）:
    entropy_sweep/config/app_config.py → entropy_sweep/config → entropy_sweep → project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


def default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig
    data: DataConfig
    sweep: SweepConfig

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用 entropy_sweep/config/base.yml
        - 不依赖当前工作目录
        - SWEEP_MAX_WORKERS 覆盖 sweep.max_workers
        """
        root = project_root()

        # 1) 先加载 .env（在项目根目录下）
        load_dotenv(os.path.join(root, ".env"))

        # 2) 决定配置文件路径
        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) 读取 YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) env 覆盖
        workers = os.getenv("SWEEP_MAX_WORKERS")
        if workers:
            raw.setdefault("sweep", {})["max_workers"] = int(workers)

        try:
            cfg = cls(**raw)
        except ValidationError as e:
            raise ConfigurationError(f"[AppConfig] invalid config {path}: {e}") from e

        logs.info(f"[AppConfig] loaded {path}")
        return cfg
