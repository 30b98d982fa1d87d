"""输出一致性检查与重新评估判定"""

from collections.abc import Sequence

from loguru import logger

from brainmux.aggregator.models import BrainOutput, ConsistencyReport
from brainmux.aggregator.similarity import jaccard_similarity
from brainmux.core.config import BrainMuxSettings, get_settings


class ConsistencyChecker:
    """两两比较输出的词集合相似度

    相似度低于 inconsistency_threshold 的输出对记为不一致。
    """

    def __init__(self, settings: BrainMuxSettings | None = None):
        settings = settings or get_settings()
        self.consistency_threshold = settings.consistency_threshold
        self.inconsistency_threshold = settings.inconsistency_threshold
        self.quality_threshold = settings.quality_threshold
        self.max_reevaluation_cycles = settings.max_reevaluation_cycles

    def check(self, outputs: Sequence[BrainOutput] | None) -> ConsistencyReport:
        """生成一致性报告

        少于两个输出时视为完全一致。
        """
        if not outputs or len(outputs) < 2:
            return ConsistencyReport(1.0, [], self.consistency_threshold)

        inconsistencies = []
        total_similarity = 0.0
        comparisons = 0

        for i, first in enumerate(outputs):
            for second in outputs[i + 1:]:
                similarity = jaccard_similarity(first.content, second.content)
                total_similarity += similarity
                comparisons += 1
                if similarity < self.inconsistency_threshold:
                    inconsistencies.append(
                        f"Low similarity between {first.source} and {second.source} "
                        f"({similarity:.2f})"
                    )

        average = total_similarity / comparisons
        logger.info(
            f"一致性检查: 平均相似度 {average:.2f}, 不一致 {len(inconsistencies)} 处"
        )
        return ConsistencyReport(average, inconsistencies, self.consistency_threshold)

    def should_reevaluate(self, quality: float, cycles: int) -> bool:
        """质量低于阈值且未超过最大轮数时需要重新评估"""
        needed = quality < self.quality_threshold and cycles < self.max_reevaluation_cycles
        if needed:
            logger.info(f"触发重新评估 (质量: {quality:.2f}, 已完成轮数: {cycles})")
        return needed
