"""Brain 选择

Key Components:
    BrainSelector: select_brains / select_top_brains 两种选择模式。
    BrainScorer: 40/30/20/10 多维评分。
    ScoreBreakdown: 单个 Brain 的评分明细。
    UserHistoryProvider: 显式注入的用户历史信号接口。
"""

from brainmux.selector.scoring import (
    COMPLEXITY_WEIGHT,
    HISTORY_WEIGHT,
    PERFORMANCE_WEIGHT,
    RELEVANCE_WEIGHT,
    BrainScorer,
    ScoreBreakdown,
    UserHistoryProvider,
)
from brainmux.selector.selector import BrainSelector

__all__ = [
    "BrainSelector",
    "BrainScorer",
    "ScoreBreakdown",
    "UserHistoryProvider",
    "RELEVANCE_WEIGHT",
    "COMPLEXITY_WEIGHT",
    "HISTORY_WEIGHT",
    "PERFORMANCE_WEIGHT",
]
