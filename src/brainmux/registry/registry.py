"""Brain 注册表

持有核心 Brain 集合、执行顺序和评分参考表。
启动时构建一次，之后只读，可在并发调用间共享。
"""

import json
from collections.abc import Iterable
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from brainmux.core.config import BrainMuxSettings, get_settings
from brainmux.core.exceptions import RegistryError
from brainmux.registry.defaults import DEFAULT_BRAINS, DEFAULT_CORE_BRAINS
from brainmux.registry.models import BrainProfile, RegistryFile

DEFAULT_ORDER = 500
"""未配置执行顺序时的默认值（位于核心与终结 Brain 之间）"""

DEFAULT_COMPLEXITY = 5
"""未配置复杂度评级时的默认值"""

DEFAULT_LATENCY_MS = 100
"""未配置典型耗时时的默认值"""


class BrainRegistry:
    """Brain 注册表

    Usage:
        registry = BrainRegistry.default()
        registry.order_of("conductorAdvisor")   # 0
        registry.complexity_of("unknownBrain")  # 5

    Attributes:
        core_brains: 必选 Brain（按核心顺序）
    """

    def __init__(
        self,
        profiles: Iterable[BrainProfile],
        core_brains: Iterable[str],
    ):
        """初始化注册表

        Args:
            profiles: Brain 参考数据
            core_brains: 必选 Brain 标识（按顺序）

        Raises:
            RegistryError: 标识重复、核心集合为空或核心 Brain 缺少参考数据
        """
        self._profiles: dict[str, BrainProfile] = {}
        for profile in profiles:
            if profile.brain_id in self._profiles:
                raise RegistryError(f"Brain '{profile.brain_id}' 重复注册")
            self._profiles[profile.brain_id] = profile

        core = tuple(core_brains)
        if not core:
            raise RegistryError("核心 Brain 集合不能为空")
        if len(set(core)) != len(core):
            raise RegistryError(f"核心 Brain 集合存在重复: {list(core)}")
        missing = [b for b in core if b not in self._profiles]
        if missing:
            raise RegistryError(f"核心 Brain 缺少参考数据: {missing}")

        self.core_brains: tuple[str, ...] = core

    # ==================== 构建 ====================

    @classmethod
    def default(cls) -> "BrainRegistry":
        """内置注册表"""
        return cls(DEFAULT_BRAINS, DEFAULT_CORE_BRAINS)

    @classmethod
    def from_file(cls, path: Path | str) -> "BrainRegistry":
        """从 JSON 文件加载注册表

        Args:
            path: 注册表文件路径

        Returns:
            BrainRegistry 实例

        Raises:
            RegistryError: 文件无法读取或格式无效
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            registry_file = RegistryFile.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise RegistryError(f"无法加载注册表 {path}: {e}") from e

        registry = cls(registry_file.brains, registry_file.core_brains)
        logger.info(
            f"已加载注册表 {path}: {len(registry)} 个 Brain, "
            f"核心 {list(registry.core_brains)}"
        )
        return registry

    @classmethod
    def from_settings(cls, settings: BrainMuxSettings | None = None) -> "BrainRegistry":
        """按配置构建注册表（配置了 registry_path 时从文件加载）"""
        settings = settings or get_settings()
        if settings.registry_path:
            return cls.from_file(settings.registry_path)
        return cls.default()

    # ==================== 查询 ====================

    @property
    def brain_ids(self) -> list[str]:
        """全部已登记的 Brain 标识（登记顺序）"""
        return list(self._profiles)

    @property
    def profiles(self) -> list[BrainProfile]:
        """全部参考数据（登记顺序）"""
        return list(self._profiles.values())

    def get(self, brain_id: str) -> BrainProfile | None:
        return self._profiles.get(brain_id)

    def is_core(self, brain_id: str) -> bool:
        return brain_id in self.core_brains

    def order_of(self, brain_id: str) -> int:
        """执行顺序，未知或未配置返回 DEFAULT_ORDER"""
        profile = self._profiles.get(brain_id)
        if profile is None or profile.order is None:
            return DEFAULT_ORDER
        return profile.order

    def complexity_of(self, brain_id: str) -> int:
        """复杂度评级，未知或未配置返回 DEFAULT_COMPLEXITY"""
        profile = self._profiles.get(brain_id)
        if profile is None or profile.complexity is None:
            return DEFAULT_COMPLEXITY
        return profile.complexity

    def latency_of(self, brain_id: str) -> int:
        """典型耗时（毫秒），未知或未配置返回 DEFAULT_LATENCY_MS"""
        profile = self._profiles.get(brain_id)
        if profile is None or profile.latency_ms is None:
            return DEFAULT_LATENCY_MS
        return profile.latency_ms

    def sort_by_order(self, brain_ids: Iterable[str]) -> list[str]:
        """按执行顺序稳定排序（同序保持原有相对顺序）"""
        return sorted(brain_ids, key=self.order_of)

    def __len__(self) -> int:
        return len(self._profiles)

    def __contains__(self, brain_id: str) -> bool:
        return brain_id in self._profiles
