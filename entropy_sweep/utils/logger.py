#!filepath: entropy_sweep/utils/logger.py
import os
import sys
import json
from functools import wraps
from time import perf_counter
from loguru import logger
from typing import Callable

# 同一进程内只打印一次初始化 banner（spawn 出的 worker 各自一次）
_LOGGER_CONFIGURED = False

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {process.name} | {message}"


class Logging:
    """
    生产级日志模块
    ---------------------------------------
    - 按日期切割
    - 日志保留周期
    - 可选 stderr sink（CLI）
    - 函数级日志装饰器
    ---------------------------------------
    数值核心（coder / simulator / metrics）从不写日志，
    只有 orchestrator / executor / workflow / CLI 使用 logs。
    """

    def __init__(
        self,
        log_dir: str = "logs",
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
        console: bool = False,
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level
        self.console = console

        self._configure()

    def _configure(self) -> None:
        """
        重建全部 sink（可被 configure() 重复调用）
        """
        global _LOGGER_CONFIGURED

        os.makedirs(self.log_dir, exist_ok=True)
        logger.remove()

        logger.add(
            sink=os.path.join(self.log_dir, "{time:YYYY-MM-DD}.log"),
            rotation=self.rotation,
            retention=self.retention,
            level=self.level,
            format=_FORMAT,
            enqueue=True,  # 多进程安全
            backtrace=True,
            diagnose=True,
        )

        if self.console:
            logger.add(sys.stderr, level=self.level, format=_FORMAT, colorize=True)

        if not _LOGGER_CONFIGURED:
            logger.info("-----------Logger initialized-----------")
        _LOGGER_CONFIGURED = True

    def configure(self, cfg) -> None:
        """从 LogConfig 重新定位 sink（dir / rotation / retention / level / console）"""
        self.log_dir = cfg.dir
        self.rotation = cfg.rotation
        self.retention = cfg.retention
        self.level = cfg.level
        self.console = cfg.console
        self._configure()

    # ----------- 日志方法（depth=1 → 记录调用方位置） -----------
    def debug(self, msg: str, *args, **kwargs):
        logger.opt(depth=1).debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.opt(depth=1).info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.opt(depth=1).warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.opt(depth=1).error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.opt(depth=1, exception=True).error(msg, *args, **kwargs)

    # ---------- 装饰器：记录耗时 / 异常后原样抛出 ----------
    def catch(self, msg: str = "failed", log_args: bool = False) -> Callable:
        def decorator(func: Callable):
            name = func.__qualname__

            @wraps(func)
            def wrapper(*args, **kwargs):
                if log_args:
                    shown = json.dumps(kwargs, ensure_ascii=False, default=str)
                    logger.debug(f"[{name}] args={args!r} kwargs={shown}")

                began = perf_counter()
                try:
                    return func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[{name}] {msg}")
                    raise
                finally:
                    logger.info(f"[{name}] took {perf_counter() - began:.3f}s")

            return wrapper

        return decorator


# 进程级单例；workflow 入口用 logs.configure(cfg.log) 重新定位 sink
logs = Logging()
