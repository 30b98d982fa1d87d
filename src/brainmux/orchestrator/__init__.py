"""Brain 编排

Key Components:
    Coordinator: 选择 → 执行 → 合并 → 重新评估的完整流程。
    BrainRunner: 有限并发、带总超时的 Brain 执行器。
    BrainContext: 传给每个 Brain 的显式上下文。
"""

from brainmux.orchestrator.context import BrainContext
from brainmux.orchestrator.coordinator import Coordinator
from brainmux.orchestrator.runner import BrainCallable, BrainRunner

__all__ = [
    "Coordinator",
    "BrainRunner",
    "BrainCallable",
    "BrainContext",
]
