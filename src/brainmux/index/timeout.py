"""带超时保护的索引包装器

嵌入索引调用可能阻塞在网络 I/O 上，每次调用在守护线程中执行并限时等待。
卡住的调用不会阻止进程退出。
"""

import concurrent.futures
import threading
from collections.abc import Callable
from typing import TypeVar

from loguru import logger

from brainmux.core.exceptions import IndexTimeoutError, IndexUnavailableError
from brainmux.index.base import BaseBrainIndex, BrainMatch

T = TypeVar("T")


class TimeoutBrainIndex(BaseBrainIndex):
    """为任意 BaseBrainIndex 增加调用超时

    超时抛出 IndexTimeoutError，其他异常包装为 IndexUnavailableError。
    超时的调用不会被强制中断，只是不再等待其结果；同时在途的调用数不超过 max_workers。
    """

    def __init__(
        self,
        inner: BaseBrainIndex,
        timeout: float = 5.0,
        max_workers: int = 4,
    ):
        """初始化包装器

        Args:
            inner: 被包装的索引
            timeout: 单次调用超时（秒）
            max_workers: 同时在途的调用上限
        """
        self.inner = inner
        self.timeout = timeout
        self._slots = threading.BoundedSemaphore(max_workers)
        self.closed = False

    @property
    def name(self) -> str:
        return f"timeout({self.inner.name})"

    def _call(self, operation: str, func: Callable[[], T]) -> T:
        if self.closed:
            raise IndexUnavailableError(operation, "索引已关闭")
        # 在途调用占满时，等待空位也计入超时
        if not self._slots.acquire(timeout=self.timeout):
            logger.warning(f"索引调用排队超时: {operation} ({self.timeout:.1f}s)")
            raise IndexTimeoutError(operation, self.timeout)

        future: concurrent.futures.Future = concurrent.futures.Future()

        def worker() -> None:
            try:
                future.set_result(func())
            except Exception as e:
                future.set_exception(e)
            finally:
                self._slots.release()

        threading.Thread(target=worker, name=f"brain-index-{operation}", daemon=True).start()

        try:
            return future.result(timeout=self.timeout)
        except concurrent.futures.TimeoutError as e:
            logger.warning(f"索引调用超时: {operation} ({self.timeout:.1f}s)")
            raise IndexTimeoutError(operation, self.timeout) from e
        except IndexUnavailableError:
            raise
        except Exception as e:
            raise IndexUnavailableError(operation, str(e)) from e

    def search(self, query: str, top_k: int) -> list[BrainMatch]:
        return self._call("search", lambda: self.inner.search(query, top_k))

    def catalog(self, top_k: int) -> list[BrainMatch]:
        return self._call("catalog", lambda: self.inner.catalog(top_k))

    def add(self, documents: list[BrainMatch]) -> None:
        self._call("add", lambda: self.inner.add(documents))

    def close(self) -> None:
        """拒绝后续调用；仍在运行的守护线程不再被等待"""
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
