"""Brain 注册表

Key Components:
    BrainProfile: 单个 Brain 的参考数据（执行顺序、复杂度、典型耗时、描述）。
    BrainRegistry: 核心集合与参考表的只读容器，支持内置数据或 JSON 文件。
"""

from brainmux.registry.defaults import DEFAULT_BRAINS, DEFAULT_CORE_BRAINS
from brainmux.registry.models import BrainProfile, RegistryFile
from brainmux.registry.registry import (
    DEFAULT_COMPLEXITY,
    DEFAULT_LATENCY_MS,
    DEFAULT_ORDER,
    BrainRegistry,
)

__all__ = [
    "BrainProfile",
    "RegistryFile",
    "BrainRegistry",
    "DEFAULT_BRAINS",
    "DEFAULT_CORE_BRAINS",
    "DEFAULT_ORDER",
    "DEFAULT_COMPLEXITY",
    "DEFAULT_LATENCY_MS",
]
