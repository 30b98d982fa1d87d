"""BrainMux - 多 Brain 选择与输出聚合

Example:
    >>> from brainmux import BrainSelector, OutputMerger, BrainOutput
    >>> selector = BrainSelector(index)
    >>> selector.select_brains("what is 10 + 20")
    ['conductorAdvisor', 'toolCallAdvisor', ..., 'selfRefineV3Advisor']
    >>> OutputMerger().merge_outputs([BrainOutput("a", "Answer.", 0.9)]).content
    'Answer.'
"""

from brainmux.aggregator import (
    BrainOutput,
    ConsistencyChecker,
    MergedResponse,
    OutputMerger,
    UnifiedResponse,
    is_conflicting,
    is_similar,
)
from brainmux.core import BrainMuxError, BrainMuxSettings, get_settings
from brainmux.index import BaseBrainIndex, BrainIndexer, BrainMatch
from brainmux.orchestrator import BrainContext, BrainRunner, Coordinator
from brainmux.registry import BrainProfile, BrainRegistry
from brainmux.selector import BrainSelector, ScoreBreakdown

__version__ = "0.1.0"

__all__ = [
    # Selection
    "BrainSelector",
    "ScoreBreakdown",
    "BrainRegistry",
    "BrainProfile",
    # Index
    "BaseBrainIndex",
    "BrainMatch",
    "BrainIndexer",
    # Aggregation
    "OutputMerger",
    "ConsistencyChecker",
    "BrainOutput",
    "MergedResponse",
    "UnifiedResponse",
    "is_similar",
    "is_conflicting",
    # Orchestration
    "Coordinator",
    "BrainRunner",
    "BrainContext",
    # Core
    "BrainMuxSettings",
    "BrainMuxError",
    "get_settings",
]
