"""Brain 质量表现跟踪

由调用方持有并显式传入，不作为模块级全局状态。
"""

import threading
from collections.abc import Iterable
from dataclasses import dataclass

from brainmux.aggregator.models import BrainOutput


@dataclass
class BrainPerformance:
    """单个 Brain 的质量统计"""

    brain_id: str
    execution_count: int = 0
    total_quality: float = 0.0
    min_quality: float = 1.0
    max_quality: float = 0.0

    @property
    def average_quality(self) -> float:
        if self.execution_count == 0:
            return 0.0
        return self.total_quality / self.execution_count

    def record(self, quality: float) -> None:
        self.execution_count += 1
        self.total_quality += quality
        self.min_quality = min(self.min_quality, quality)
        self.max_quality = max(self.max_quality, quality)


class BrainPerformanceTracker:
    """线程安全的 Brain 质量统计"""

    def __init__(self):
        self._lock = threading.Lock()
        self._stats: dict[str, BrainPerformance] = {}

    def record(self, output: BrainOutput) -> None:
        with self._lock:
            stats = self._stats.get(output.source)
            if stats is None:
                stats = self._stats[output.source] = BrainPerformance(output.source)
            stats.record(output.quality)

    def record_all(self, outputs: Iterable[BrainOutput]) -> None:
        for output in outputs:
            self.record(output)

    def get(self, brain_id: str) -> BrainPerformance | None:
        with self._lock:
            stats = self._stats.get(brain_id)
            if stats is None:
                return None
            return BrainPerformance(**vars(stats))

    def snapshot(self) -> dict[str, BrainPerformance]:
        """全部统计的副本"""
        with self._lock:
            return {k: BrainPerformance(**vars(v)) for k, v in self._stats.items()}

    def reset(self) -> None:
        with self._lock:
            self._stats.clear()
