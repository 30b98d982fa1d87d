"""输出合并器

把多个 Brain 的输出合并为一个统一响应：
1. 按质量排序，以最高质量输出为主体
2. 追加与主体不重复的次优输出（最多取前 3 个）
3. 检测相互矛盾的输出并记录裁决（仅用于溯源，不改变合并内容）
4. 附加用户标识和时间戳生成 UnifiedResponse

任何输入（包括 None 和空列表）都不抛出异常。
"""

import time
from collections.abc import Sequence

from loguru import logger

from brainmux.aggregator.models import (
    BrainOutput,
    Conflict,
    MergedResponse,
    MergerStatistics,
    UnifiedResponse,
)
from brainmux.aggregator.similarity import is_conflicting, is_similar
from brainmux.core.config import BrainMuxSettings, get_settings

INSIGHT_PREFIX = "Additional insight: "
PERSPECTIVE_PREFIX = "Additional perspective: "
SECTION_SEPARATOR = "\n\n"


class OutputMerger:
    """输出合并器

    Attributes:
        similarity_threshold: 相似度阈值
        max_merged_outputs: merge_outputs 考虑的最高质量输出数量
    """

    def __init__(self, settings: BrainMuxSettings | None = None):
        settings = settings or get_settings()
        self.similarity_threshold = settings.similarity_threshold
        self.max_merged_outputs = max(settings.max_merged_outputs, 1)

    def merge_outputs(self, outputs: Sequence[BrainOutput] | None) -> MergedResponse:
        """按质量合并输出

        质量为实际参与比较的前 min(3, N) 个输出的平均值，被判定为重复而未追加的
        输出仍计入分母。

        Args:
            outputs: Brain 输出（顺序任意）

        Returns:
            MergedResponse
        """
        if not outputs:
            logger.warning("OutputMerger: 没有可合并的输出")
            return MergedResponse.empty()

        sorted_outputs = sorted(outputs, key=lambda o: o.quality, reverse=True)
        considered = min(self.max_merged_outputs, len(sorted_outputs))

        primary = sorted_outputs[0]
        parts = [primary.content]
        sources = [primary.source]
        total_quality = primary.quality

        for secondary in sorted_outputs[1:considered]:
            if is_similar(primary.content, secondary.content, self.similarity_threshold):
                logger.debug(f"跳过与主体重复的输出: {secondary.source}")
                continue
            parts.append(INSIGHT_PREFIX + secondary.content)
            sources.append(secondary.source)
            total_quality += secondary.quality

        average_quality = total_quality / considered

        logger.info(f"OutputMerger: 合并 {considered} 个输出 (平均质量: {average_quality:.2f})")
        return MergedResponse(
            content=SECTION_SEPARATOR.join(parts),
            quality=average_quality,
            sources=sources,
        )

    def identify_conflicts(self, outputs: Sequence[BrainOutput] | None) -> list[Conflict]:
        """两两检测矛盾（按输入顺序，i < j）"""
        if not outputs:
            return []
        conflicts = []
        for i, first in enumerate(outputs):
            for second in outputs[i + 1:]:
                if is_conflicting(first.content, second.content):
                    conflicts.append(Conflict(first=first, second=second))
        return conflicts

    def resolve_conflict(self, conflict: Conflict) -> BrainOutput:
        """裁决矛盾：优先质量更高者

        只记录裁决结果，不修改或移除任何输出。
        """
        preferred = conflict.preferred
        logger.info(
            f"OutputMerger: 冲突裁决 {conflict.first.source} vs {conflict.second.source} "
            f"→ 采用 {preferred.source} (质量: {preferred.quality:.2f})"
        )
        return preferred

    def merge_with_conflict_resolution(
        self,
        outputs: Sequence[BrainOutput] | None,
    ) -> MergedResponse:
        """检测并裁决矛盾后合并

        裁决目前只影响日志与溯源，合并仍作用于原始输出集合。
        """
        merged, _ = self._merge_resolving(outputs)
        return merged

    def combine_insights(self, outputs: Sequence[BrainOutput] | None) -> str:
        """简单拼接

        以第一个输出为主体，追加所有与主体不重复的后续输出。
        不排序、不按质量加权、不截断到前 3 个。
        """
        if not outputs:
            return ""

        first = outputs[0]
        parts = [first.content]
        for output in outputs[1:]:
            if not is_similar(first.content, output.content, self.similarity_threshold):
                parts.append(PERSPECTIVE_PREFIX + output.content)

        logger.info(f"OutputMerger: 拼接 {len(outputs)} 个输出")
        return SECTION_SEPARATOR.join(parts)

    def create_unified_response(
        self,
        outputs: Sequence[BrainOutput] | None,
        user_id: str | None,
    ) -> UnifiedResponse:
        """生成最终响应

        Args:
            outputs: Brain 输出
            user_id: 用户标识

        Returns:
            附带用户标识、时间戳和冲突裁决记录的 UnifiedResponse
        """
        merged, resolutions = self._merge_resolving(outputs)

        response = UnifiedResponse(
            content=merged.content,
            quality=merged.quality,
            sources=list(merged.sources),
            user_id=user_id,
            created_at_ms=int(time.time() * 1000),
            conflicts=resolutions,
        )
        logger.info(
            f"OutputMerger: 生成统一响应 (质量: {response.quality:.2f}, "
            f"来源: {len(response.sources)})"
        )
        return response

    def merger_statistics(
        self,
        outputs: Sequence[BrainOutput] | None,
    ) -> MergerStatistics | None:
        """统计并记录输出质量分布，空输入返回 None"""
        if not outputs:
            return None

        qualities = [o.quality for o in outputs]
        stats = MergerStatistics(
            count=len(qualities),
            average=sum(qualities) / len(qualities),
            maximum=max(qualities),
            minimum=min(qualities),
        )
        logger.info(
            f"OutputMerger 统计: 输出={stats.count}, 平均={stats.average:.2f}, "
            f"最高={stats.maximum:.2f}, 最低={stats.minimum:.2f}"
        )
        return stats

    def _merge_resolving(
        self,
        outputs: Sequence[BrainOutput] | None,
    ) -> tuple[MergedResponse, list[tuple[str, str]]]:
        if not outputs:
            return MergedResponse.empty(), []

        resolutions = []
        conflicts = self.identify_conflicts(outputs)
        if conflicts:
            logger.info(f"OutputMerger: 发现 {len(conflicts)} 处冲突，开始裁决")
            for conflict in conflicts:
                preferred = self.resolve_conflict(conflict)
                other = conflict.other
                resolutions.append((preferred.source, other.source))

        return self.merge_outputs(outputs), resolutions
