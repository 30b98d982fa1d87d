"""Brain 选择器

针对单个查询决定需要运行哪些 Brain 以及执行顺序，避免每次运行全部 Brain。

两种模式：
1. select_brains: 核心 Brain + 语义检索出的专家 Brain
2. select_top_brains: 对全部 Brain 多维评分后取 top-N

任何嵌入索引故障都退化为仅返回核心 Brain，不向调用方抛出异常。
"""

from loguru import logger

from brainmux.core.config import BrainMuxSettings, get_settings
from brainmux.index.base import BaseBrainIndex
from brainmux.index.timeout import TimeoutBrainIndex
from brainmux.registry.registry import BrainRegistry
from brainmux.selector.scoring import BrainScorer, ScoreBreakdown, UserHistoryProvider


class BrainSelector:
    """Brain 选择器

    Attributes:
        index: 嵌入索引（已带超时保护）
        registry: Brain 注册表
        scorer: 多维评分器
        search_top_k: select_brains 检索的专家数量
        catalog_top_k: 枚举全部 Brain 的检索上限
    """

    def __init__(
        self,
        index: BaseBrainIndex,
        registry: BrainRegistry | None = None,
        history_provider: UserHistoryProvider | None = None,
        settings: BrainMuxSettings | None = None,
    ):
        """初始化选择器

        Args:
            index: 嵌入索引；未包装超时保护时按配置自动包装
            registry: Brain 注册表（默认按配置构建）
            history_provider: 用户历史信号（可选）
            settings: 配置（默认全局配置）
        """
        settings = settings or get_settings()
        self.registry = registry or BrainRegistry.from_settings(settings)
        if isinstance(index, TimeoutBrainIndex):
            self.index = index
        else:
            self.index = TimeoutBrainIndex(index, timeout=settings.index_timeout_seconds)
        self.scorer = BrainScorer(self.registry, history_provider)
        self.search_top_k = settings.search_top_k
        self.catalog_top_k = settings.catalog_top_k

    @property
    def core_brains(self) -> list[str]:
        """核心 Brain（核心集合顺序）"""
        return list(self.registry.core_brains)

    def close(self) -> None:
        """关闭嵌入索引包装器"""
        self.index.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def select_brains(self, query: str) -> list[str]:
        """选择核心 Brain + 相关专家 Brain

        Example:
            select_brains("what is 10 + 20")
            → [conductorAdvisor, toolCallAdvisor, advancedCapabilitiesAdvisor,
               personalityAdvisor, selfRefineV3Advisor]

        Args:
            query: 用户查询

        Returns:
            按执行顺序排列的 Brain 列表，至少包含全部核心 Brain
        """
        try:
            brains = self.core_brains

            matches = self.index.search(query, self.search_top_k)
            specialists = [m.brain_id for m in matches if m.brain_id]

            for brain_id in specialists:
                if brain_id not in brains:
                    brains.append(brain_id)

            brains = self.registry.sort_by_order(brains)

            logger.info(
                f"BrainSelector: 核心({len(self.registry.core_brains)}) + "
                f"专家({len(specialists)}) = 合计({len(brains)})"
            )
            logger.info(f"已选 Brain: {brains}")
            return brains
        except Exception as e:
            logger.warning(f"Brain 选择失败，回退到核心 Brain: {e}")
            return self.core_brains

    def select_top_brains(
        self,
        query: str,
        complexity_level: float,
        user_id: str | None = None,
        top_n: int = 5,
    ) -> list[str]:
        """多维评分选择 top-N Brain

        缺失的核心 Brain 在截断后追加，因此 top_n <= 0 时结果恰为核心 Brain。

        Args:
            query: 用户查询
            complexity_level: 查询复杂度（0-10）
            user_id: 用户标识
            top_n: 评分保留数量

        Returns:
            按执行顺序排列的 Brain 列表
        """
        try:
            logger.info(
                f"BrainSelector: 选择 top {top_n} Brain "
                f"(complexity={complexity_level}, user={user_id})"
            )

            all_brains = self._catalog_brain_ids()
            if not all_brains:
                logger.warning("嵌入索引未返回任何 Brain，改用注册表")
                all_brains = self.registry.brain_ids

            top_match = self._top_match(query)
            scored = [
                self.scorer.score(brain_id, top_match, complexity_level, user_id)
                for brain_id in all_brains
            ]
            scored.sort(key=lambda s: s.total, reverse=True)

            top_brains = [s.brain_id for s in scored[:max(top_n, 0)]]

            for brain_id in self.registry.core_brains:
                if brain_id not in top_brains:
                    top_brains.append(brain_id)

            top_brains = self.registry.sort_by_order(top_brains)
            logger.info(f"已选 top Brain: {top_brains}")
            return top_brains
        except Exception as e:
            logger.warning(f"top Brain 选择失败，回退到核心 Brain: {e}")
            return self.core_brains

    def score_brain(
        self,
        brain_id: str,
        query: str,
        complexity_level: float,
        user_id: str | None = None,
    ) -> ScoreBreakdown:
        """计算单个 Brain 的评分明细（检索失败时相关度为 0）"""
        top_match = self._top_match(query)
        return self.scorer.score(brain_id, top_match, complexity_level, user_id)

    def get_all_brains(self) -> list[str]:
        """枚举嵌入索引中的全部 Brain（失败返回空列表）"""
        try:
            return self._catalog_brain_ids()
        except Exception as e:
            logger.error(f"枚举 Brain 失败: {e}")
            return []

    def _catalog_brain_ids(self) -> list[str]:
        brain_ids: list[str] = []
        for match in self.index.catalog(self.catalog_top_k):
            brain_id = match.brain_id
            if brain_id and brain_id not in brain_ids:
                brain_ids.append(brain_id)
        return brain_ids

    def _top_match(self, query: str) -> str | None:
        """查询的 top-1 匹配 Brain；无结果或检索失败返回 None（相关度记 0）"""
        try:
            results = self.index.search(query, 1)
        except Exception as e:
            logger.debug(f"相关度检索失败: {e}")
            return None
        if not results:
            return None
        return results[0].brain_id
