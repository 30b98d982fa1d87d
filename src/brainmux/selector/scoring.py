"""Brain 多维评分

总分 0-100，由四部分组成：
- 相关度（40%）：是否为查询的 top-1 语义匹配
- 复杂度匹配（30%）：Brain 评级与查询复杂度的接近程度
- 用户历史（20%）：用户对该 Brain 的偏好（未接入时取中性值）
- 性能（10%）：典型响应耗时越短得分越高
"""

from dataclasses import dataclass
from typing import Protocol

from loguru import logger

from brainmux.registry.registry import BrainRegistry

RELEVANCE_WEIGHT = 40.0
COMPLEXITY_WEIGHT = 30.0
HISTORY_WEIGHT = 20.0
PERFORMANCE_WEIGHT = 10.0

NON_MATCH_RELEVANCE = 10.0
"""非 top-1 匹配的相关度得分"""

NEUTRAL_HISTORY_AFFINITY = 0.5
"""无历史数据时的中性偏好"""

LATENCY_CEILING_MS = 200.0
"""耗时达到该值时性能得分为 0"""

COMPLEXITY_SPAN = 10.0


class UserHistoryProvider(Protocol):
    """用户历史信号

    由调用方显式注入，BrainMux 自身不保存任何用户状态。
    """

    def affinity(self, brain_id: str, user_id: str | None) -> float | None:
        """返回用户对该 Brain 的偏好（0.0-1.0），无数据返回 None"""
        ...


@dataclass(frozen=True)
class ScoreBreakdown:
    """单个 Brain 的评分明细"""

    brain_id: str
    relevance: float
    complexity: float
    history: float
    performance: float

    @property
    def total(self) -> float:
        """总分（0-100）"""
        return self.relevance + self.complexity + self.history + self.performance


class BrainScorer:
    """Brain 评分器

    参考表（复杂度、耗时）全部来自注入的注册表。
    """

    def __init__(
        self,
        registry: BrainRegistry,
        history_provider: UserHistoryProvider | None = None,
    ):
        self.registry = registry
        self.history_provider = history_provider

    def relevance(self, brain_id: str, top_match: str | None) -> float:
        """相关度得分

        Args:
            brain_id: Brain 标识
            top_match: 查询的 top-1 匹配 Brain；检索失败或无结果时为 None

        Returns:
            40（top-1 匹配）、10（其他）或 0（检索失败/无结果）
        """
        if top_match is None:
            return 0.0
        if brain_id == top_match:
            return RELEVANCE_WEIGHT
        return NON_MATCH_RELEVANCE

    def complexity(self, brain_id: str, complexity_level: float) -> float:
        declared = self.registry.complexity_of(brain_id)
        match = 1.0 - abs(declared - complexity_level) / COMPLEXITY_SPAN
        return max(0.0, match) * COMPLEXITY_WEIGHT

    def history(self, brain_id: str, user_id: str | None) -> float:
        affinity = None
        if self.history_provider is not None:
            affinity = self.history_provider.affinity(brain_id, user_id)
        if affinity is None:
            affinity = NEUTRAL_HISTORY_AFFINITY
        return min(max(affinity, 0.0), 1.0) * HISTORY_WEIGHT

    def performance(self, brain_id: str) -> float:
        latency = self.registry.latency_of(brain_id)
        return max(0.0, 1.0 - latency / LATENCY_CEILING_MS) * PERFORMANCE_WEIGHT

    def score(
        self,
        brain_id: str,
        top_match: str | None,
        complexity_level: float,
        user_id: str | None = None,
    ) -> ScoreBreakdown:
        """计算单个 Brain 的完整评分"""
        breakdown = ScoreBreakdown(
            brain_id=brain_id,
            relevance=self.relevance(brain_id, top_match),
            complexity=self.complexity(brain_id, complexity_level),
            history=self.history(brain_id, user_id),
            performance=self.performance(brain_id),
        )
        logger.debug(
            f"Brain {brain_id}: relevance={breakdown.relevance:.1f}, "
            f"complexity={breakdown.complexity:.1f}, history={breakdown.history:.1f}, "
            f"performance={breakdown.performance:.1f}, total={breakdown.total:.1f}"
        )
        return breakdown
