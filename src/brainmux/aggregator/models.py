"""聚合数据模型

BrainOutput 由 Brain 执行层产生，只被聚合器消费；其余模型都是聚合结果。
质量统一使用 0.0-1.0 刻度。
"""

from dataclasses import dataclass, field


def normalize_quality(quality: float | int | None) -> float:
    """把质量分统一到 0.0-1.0

    大于 1 的值视为 0-100 刻度并除以 100，最后截断到 [0, 1]。
    """
    if quality is None:
        return 0.0
    value = float(quality)
    if value > 1.0:
        value /= 100.0
    return min(max(value, 0.0), 1.0)


@dataclass(frozen=True)
class BrainOutput:
    """单个 Brain 的输出"""

    source: str
    """产生该输出的 Brain 标识"""

    content: str
    """输出文本"""

    quality: float
    """质量分（0.0-1.0）"""

    @classmethod
    def from_raw(
        cls,
        source: str,
        content: str | None,
        quality: float | int | None,
    ) -> "BrainOutput":
        """执行层边界的构造入口，统一质量刻度并把空内容转为空串"""
        return cls(
            source=source,
            content=content or "",
            quality=normalize_quality(quality),
        )


@dataclass(frozen=True)
class Conflict:
    """一对被判定为相互矛盾的输出

    first/second 保持被检测时的先后顺序；preferred 为质量更高者（相同时取 second）。
    """

    first: BrainOutput
    second: BrainOutput

    @property
    def preferred(self) -> BrainOutput:
        if self.first.quality > self.second.quality:
            return self.first
        return self.second

    @property
    def other(self) -> BrainOutput:
        return self.second if self.preferred is self.first else self.first


@dataclass(frozen=True)
class MergedResponse:
    """合并结果"""

    content: str
    quality: float
    sources: list[str]

    @classmethod
    def empty(cls) -> "MergedResponse":
        return cls(content="", quality=0.0, sources=[])


@dataclass(frozen=True)
class UnifiedResponse(MergedResponse):
    """返回给调用方的最终响应"""

    user_id: str | None
    created_at_ms: int
    """创建时间（epoch 毫秒）"""

    conflicts: list[tuple[str, str]] = field(default_factory=list)
    """冲突裁决记录 (preferred, other)，仅供溯源，不影响内容"""


@dataclass(frozen=True)
class MergerStatistics:
    """一组输出的质量统计"""

    count: int
    average: float
    maximum: float
    minimum: float


@dataclass(frozen=True)
class ConsistencyReport:
    """输出间一致性报告"""

    average_similarity: float
    inconsistencies: list[str] = field(default_factory=list)
    threshold: float = 0.85

    @property
    def is_consistent(self) -> bool:
        return self.average_similarity >= self.threshold and not self.inconsistencies
