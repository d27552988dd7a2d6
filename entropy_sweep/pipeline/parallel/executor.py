# entropy_sweep/pipeline/parallel/executor.py
from __future__ import annotations

import os
import threading
from concurrent.futures import FIRST_COMPLETED, ProcessPoolExecutor, wait
from typing import Any, Callable, Iterable, List, Optional, TypeVar

from entropy_sweep import logs
from entropy_sweep.pipeline.parallel.types import ParallelKind

T = TypeVar("T")
R = TypeVar("R")


class ParallelExecutor:
    """
    ParallelExecutor

    - 统一的 ProcessPoolExecutor 封装
    - 返回顺序 == items 顺序（与完成顺序无关）
    - cancel 为粗粒度：只在 item 之间检查，
      已开始的 item 跑完，未开始的 future 被取消
    - 被取消的 item 在结果中为 None
    - on_result(i, result) 在父进程中、每个 item 完成时调用
    """

    @staticmethod
    def run(
        *,
        kind: ParallelKind,
        items: Iterable[T],
        handler: Callable[[T], R],
        max_workers: int | None = None,
        cancel: Optional[threading.Event] = None,
        on_result: Optional[Callable[[int, R], None]] = None,
    ) -> List[Optional[R]]:
        items = list(items)
        if not items:
            logs.info("[ParallelExecutor] no items to process")
            return []

        logs.info(f"[ParallelExecutor] start kind={kind.value} total={len(items)}")

        workers = ParallelExecutor._resolve_workers(items, max_workers)

        if workers == 1:
            return ParallelExecutor._run_sequential(items, handler, cancel, on_result)
        return ParallelExecutor._run_parallel(items, handler, workers, cancel, on_result)

    # ---------------- internal ----------------

    @staticmethod
    def _resolve_workers(items: list, max_workers: int | None) -> int:
        cpu = os.cpu_count() or 1
        if max_workers is None:
            return min(cpu, len(items))
        return max(1, min(max_workers, len(items)))

    @staticmethod
    def _cancelled(cancel: Optional[threading.Event]) -> bool:
        return cancel is not None and cancel.is_set()

    @staticmethod
    def _run_sequential(
        items: list,
        handler: Callable[[Any], Any],
        cancel: Optional[threading.Event],
        on_result: Optional[Callable[[int, Any], None]] = None,
    ) -> list:
        results: list = [None] * len(items)
        for i, item in enumerate(items):
            if ParallelExecutor._cancelled(cancel):
                logs.warning(f"[ParallelExecutor] cancelled after {i}/{len(items)} items")
                break
            results[i] = handler(item)
            if on_result is not None:
                on_result(i, results[i])
        return results

    @staticmethod
    def _run_parallel(
        items: list,
        handler: Callable[[Any], Any],
        workers: int,
        cancel: Optional[threading.Event],
        on_result: Optional[Callable[[int, Any], None]] = None,
    ) -> list:
        logs.info(f"[ParallelExecutor] run parallel | workers={workers}")

        results: list = [None] * len(items)
        if ParallelExecutor._cancelled(cancel):
            logs.warning("[ParallelExecutor] cancelled before start")
            return results

        with ProcessPoolExecutor(max_workers=workers) as pool:
            futures = {pool.submit(handler, item): i for i, item in enumerate(items)}
            pending = set(futures)

            while pending:
                done, pending = wait(pending, timeout=0.1, return_when=FIRST_COMPLETED)
                for fut in done:
                    # 单一聚合点：按原始位置写回
                    idx = futures[fut]
                    results[idx] = fut.result()
                    if on_result is not None:
                        on_result(idx, results[idx])

                if pending and ParallelExecutor._cancelled(cancel):
                    n_cancelled = sum(1 for fut in pending if fut.cancel())
                    logs.warning(
                        f"[ParallelExecutor] cancel requested | "
                        f"cancelled={n_cancelled} pending={len(pending)}"
                    )
                    for fut in pending:
                        if not fut.cancelled():
                            idx = futures[fut]
                            results[idx] = fut.result()
                            if on_result is not None:
                                on_result(idx, results[idx])
                    break

        return results
