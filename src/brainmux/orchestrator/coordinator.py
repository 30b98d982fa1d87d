"""BrainMux Coordinator（协调器）

串联完整流程：
1. 选择 Brain
2. 并行执行
3. 记录 Brain 质量表现
4. 检测冲突并合并输出
5. 质量不足时重新评估（有最大轮数）
"""

from dataclasses import replace
from typing import Any

from loguru import logger

from brainmux.aggregator.consistency import ConsistencyChecker
from brainmux.aggregator.merger import OutputMerger
from brainmux.aggregator.models import UnifiedResponse
from brainmux.aggregator.performance import BrainPerformanceTracker
from brainmux.core.config import BrainMuxSettings, get_settings
from brainmux.orchestrator.context import BrainContext
from brainmux.orchestrator.runner import BrainRunner
from brainmux.selector.selector import BrainSelector


class Coordinator:
    """BrainMux 协调器

    Attributes:
        selector: Brain 选择器
        runner: Brain 执行器
        merger: 输出合并器
        checker: 一致性检查器
        tracker: Brain 质量统计
    """

    def __init__(
        self,
        selector: BrainSelector,
        runner: BrainRunner,
        merger: OutputMerger | None = None,
        checker: ConsistencyChecker | None = None,
        tracker: BrainPerformanceTracker | None = None,
        settings: BrainMuxSettings | None = None,
    ):
        settings = settings or get_settings()
        self.selector = selector
        self.runner = runner
        self.merger = merger or OutputMerger(settings)
        self.checker = checker or ConsistencyChecker(settings)
        self.tracker = tracker or BrainPerformanceTracker()

    def close(self) -> None:
        self.selector.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def select(
        self,
        query: str,
        user_id: str | None = None,
        complexity_level: float | None = None,
        top_n: int | None = None,
    ) -> list[str]:
        """给出复杂度时使用多维评分选择，否则使用核心+专家选择"""
        if complexity_level is None:
            return self.selector.select_brains(query)
        return self.selector.select_top_brains(
            query,
            complexity_level,
            user_id,
            top_n if top_n is not None else len(self.selector.core_brains) + 1,
        )

    async def process_query(
        self,
        query: str,
        user_id: str | None = None,
        complexity_level: float | None = None,
        top_n: int | None = None,
        hints: dict[str, Any] | None = None,
    ) -> UnifiedResponse:
        """处理用户查询

        Args:
            query: 用户查询
            user_id: 用户标识
            complexity_level: 查询复杂度（可选，提供时启用多维评分选择）
            top_n: 多维评分保留数量
            hints: 传给 Brain 的额外提示

        Returns:
            各轮中质量最高的 UnifiedResponse
        """
        logger.info(f"处理查询: {query}")

        brain_ids = self.select(query, user_id, complexity_level, top_n)
        context = BrainContext(
            query=query,
            user_id=user_id,
            complexity_level=complexity_level,
            hints=dict(hints or {}),
        )

        best = await self._run_cycle(brain_ids, context)
        cycles = 0
        while self.checker.should_reevaluate(best.quality, cycles):
            cycles += 1
            context = replace(context, cycle=cycles, previous_response=best.content)
            candidate = await self._run_cycle(brain_ids, context)
            if candidate.quality > best.quality:
                best = candidate

        logger.info(
            f"查询完成: 质量 {best.quality:.2f}, 来源 {best.sources}, 重新评估 {cycles} 轮"
        )
        return best

    async def _run_cycle(
        self,
        brain_ids: list[str],
        context: BrainContext,
    ) -> UnifiedResponse:
        outputs = await self.runner.run(brain_ids, context)
        self.tracker.record_all(outputs)

        report = self.checker.check(outputs)
        if not report.is_consistent:
            logger.debug(f"输出不一致: {report.inconsistencies}")

        return self.merger.create_unified_response(outputs, context.user_id)
