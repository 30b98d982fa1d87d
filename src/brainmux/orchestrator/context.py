"""Brain 执行上下文"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class BrainContext:
    """Coordinator 传给每个 Brain 的上下文

    用户相关状态全部通过此对象显式传入，Brain 不应依赖共享的全局状态。
    """

    query: str
    """用户查询"""

    user_id: str | None = None
    """用户标识"""

    complexity_level: float | None = None
    """查询复杂度（0-10），未知时为 None"""

    cycle: int = 0
    """重新评估轮次（首轮为 0）"""

    previous_response: str | None = None
    """上一轮的合并内容（仅重新评估时提供）"""

    hints: dict[str, Any] = field(default_factory=dict)
    """调用方提供的额外提示"""
