"""测试 BrainRegistry"""

import json
from pathlib import Path

import pytest

from brainmux.core.config import BrainMuxSettings
from brainmux.core.exceptions import RegistryError
from brainmux.registry import (
    DEFAULT_COMPLEXITY,
    DEFAULT_CORE_BRAINS,
    DEFAULT_LATENCY_MS,
    DEFAULT_ORDER,
    BrainProfile,
    BrainRegistry,
)


class TestDefaultRegistry:
    """内置注册表测试"""

    def test_core_brains(self) -> None:
        """测试核心 Brain 及其顺序"""
        registry = BrainRegistry.default()
        assert registry.core_brains == (
            "conductorAdvisor",
            "toolCallAdvisor",
            "selfRefineV3Advisor",
            "personalityAdvisor",
        )
        assert registry.core_brains == DEFAULT_CORE_BRAINS

    def test_reference_tables(self) -> None:
        """测试参考表取值"""
        registry = BrainRegistry.default()
        assert registry.order_of("conductorAdvisor") == 0
        assert registry.order_of("toolCallAdvisor") == 2
        assert registry.order_of("personalityAdvisor") == 800
        assert registry.order_of("selfRefineV3Advisor") == 1000
        assert registry.complexity_of("knowledgeGraphAdvisor") == 9
        assert registry.latency_of("advancedCapabilitiesAdvisor") == 120

    def test_defaults_for_missing_entries(self) -> None:
        """测试缺省值：顺序 500、复杂度 5、耗时 100ms"""
        registry = BrainRegistry.default()
        for brain_id in ("unknownAdvisor", "conversationMemoryAdvisor"):
            assert registry.order_of(brain_id) == DEFAULT_ORDER == 500
            assert registry.latency_of(brain_id) == DEFAULT_LATENCY_MS == 100
        assert registry.complexity_of("unknownAdvisor") == DEFAULT_COMPLEXITY == 5

    def test_membership(self) -> None:
        registry = BrainRegistry.default()
        assert "knowledgeGraphAdvisor" in registry
        assert "unknownAdvisor" not in registry
        assert registry.is_core("conductorAdvisor")
        assert not registry.is_core("knowledgeGraphAdvisor")

    def test_sort_by_order_is_stable(self) -> None:
        """测试同序 Brain 保持原有相对顺序"""
        registry = BrainRegistry.default()
        ordered = registry.sort_by_order([
            "selfRefineV3Advisor", "zeta", "conductorAdvisor", "alpha",
        ])
        assert ordered == ["conductorAdvisor", "zeta", "alpha", "selfRefineV3Advisor"]


class TestValidation:
    """注册表校验测试"""

    def test_duplicate_brain(self) -> None:
        with pytest.raises(RegistryError, match="重复注册"):
            BrainRegistry(
                [BrainProfile(brain_id="a"), BrainProfile(brain_id="a")],
                ["a"],
            )

    def test_empty_core(self) -> None:
        with pytest.raises(RegistryError, match="不能为空"):
            BrainRegistry([BrainProfile(brain_id="a")], [])

    def test_core_without_profile(self) -> None:
        with pytest.raises(RegistryError, match="缺少参考数据"):
            BrainRegistry([BrainProfile(brain_id="a")], ["a", "b"])

    def test_complexity_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            BrainProfile(brain_id="a", complexity=11)

    def test_blank_brain_id(self) -> None:
        with pytest.raises(ValueError):
            BrainProfile(brain_id="  ")


class TestFromFile:
    """从文件加载测试"""

    def test_load(self, tmp_path: Path) -> None:
        """测试加载 JSON 注册表"""
        path = tmp_path / "registry.json"
        path.write_text(json.dumps({
            "core_brains": ["planner", "judge"],
            "brains": [
                {"brain_id": "planner", "order": 0, "complexity": 10, "latency_ms": 5},
                {"brain_id": "judge", "order": 1000},
                {"brain_id": "coder", "description": "Writes code", "complexity": 7},
            ],
        }), encoding="utf-8")

        registry = BrainRegistry.from_file(path)
        assert registry.core_brains == ("planner", "judge")
        assert registry.brain_ids == ["planner", "judge", "coder"]
        assert registry.complexity_of("coder") == 7
        assert registry.latency_of("judge") == 100
        assert registry.get("coder").description == "Writes code"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(RegistryError):
            BrainRegistry.from_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RegistryError):
            BrainRegistry.from_file(path)

    def test_invalid_schema(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"brains": []}), encoding="utf-8")
        with pytest.raises(RegistryError):
            BrainRegistry.from_file(path)

    def test_from_settings(self, tmp_path: Path) -> None:
        """测试按配置选择注册表来源"""
        path = tmp_path / "registry.json"
        path.write_text(json.dumps({
            "core_brains": ["solo"],
            "brains": [{"brain_id": "solo"}],
        }), encoding="utf-8")

        assert BrainRegistry.from_settings(BrainMuxSettings(registry_path=path)).core_brains == ("solo",)
        assert BrainRegistry.from_settings(BrainMuxSettings()).core_brains == DEFAULT_CORE_BRAINS
