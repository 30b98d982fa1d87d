"""Brain 输出聚合

Key Components:
    OutputMerger: merge_outputs / merge_with_conflict_resolution /
        combine_insights / create_unified_response。
    ConsistencyChecker: 两两相似度一致性报告与重新评估判定。
    BrainPerformanceTracker: 跨调用的 Brain 质量统计。
    is_similar / is_conflicting: 词面相似与矛盾启发式。
"""

from brainmux.aggregator.consistency import ConsistencyChecker
from brainmux.aggregator.merger import OutputMerger
from brainmux.aggregator.models import (
    BrainOutput,
    Conflict,
    ConsistencyReport,
    MergedResponse,
    MergerStatistics,
    UnifiedResponse,
    normalize_quality,
)
from brainmux.aggregator.performance import BrainPerformance, BrainPerformanceTracker
from brainmux.aggregator.similarity import is_conflicting, is_similar, jaccard_similarity

__all__ = [
    "OutputMerger",
    "ConsistencyChecker",
    "BrainPerformance",
    "BrainPerformanceTracker",
    "BrainOutput",
    "Conflict",
    "ConsistencyReport",
    "MergedResponse",
    "MergerStatistics",
    "UnifiedResponse",
    "normalize_quality",
    "is_similar",
    "is_conflicting",
    "jaccard_similarity",
]
