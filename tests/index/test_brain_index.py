"""测试嵌入索引包装与索引构建"""

import subprocess
import sys
import textwrap
import threading
from unittest.mock import MagicMock

import pytest

from brainmux.core.exceptions import IndexTimeoutError, IndexUnavailableError
from brainmux.index import (
    BRAIN_NAME_KEY,
    ORDER_KEY,
    BaseBrainIndex,
    BrainIndexer,
    BrainMatch,
    TimeoutBrainIndex,
)
from brainmux.registry import BrainProfile, BrainRegistry


class InMemoryBrainIndex(BaseBrainIndex):
    """按写入顺序返回文档的内存索引"""

    def __init__(self):
        self.documents: list[BrainMatch] = []
        self.add_calls = 0

    @property
    def name(self) -> str:
        return "memory"

    def search(self, query: str, top_k: int) -> list[BrainMatch]:
        return self.documents[:top_k]

    def add(self, documents: list[BrainMatch]) -> None:
        self.add_calls += 1
        self.documents.extend(documents)


class TestBrainMatch:
    """BrainMatch 测试"""

    def test_brain_id(self) -> None:
        assert BrainMatch("desc", {BRAIN_NAME_KEY: "a"}).brain_id == "a"

    def test_missing_brain_id(self) -> None:
        assert BrainMatch("desc").brain_id is None
        assert BrainMatch("desc", {BRAIN_NAME_KEY: ""}).brain_id is None

    def test_catalog_uses_wildcard_search(self) -> None:
        """测试默认 catalog 以 "*" 检索"""
        index = InMemoryBrainIndex()
        index.search = MagicMock(return_value=[])
        index.catalog(50)
        index.search.assert_called_once_with("*", 50)


class TestTimeoutBrainIndex:
    """TimeoutBrainIndex 测试"""

    def test_passthrough(self) -> None:
        inner = InMemoryBrainIndex()
        inner.add([BrainMatch("desc", {BRAIN_NAME_KEY: "a"})])

        with TimeoutBrainIndex(inner, timeout=1.0) as index:
            assert index.name == "timeout(memory)"
            assert [m.brain_id for m in index.search("q", 5)] == ["a"]
            assert [m.brain_id for m in index.catalog(5)] == ["a"]
            index.add([BrainMatch("desc", {BRAIN_NAME_KEY: "b"})])

        assert len(inner.documents) == 2

    def test_timeout(self) -> None:
        """测试超时抛出 IndexTimeoutError"""
        release = threading.Event()
        inner = InMemoryBrainIndex()
        inner.search = lambda query, top_k: release.wait(5)

        index = TimeoutBrainIndex(inner, timeout=0.05)
        try:
            with pytest.raises(IndexTimeoutError) as exc_info:
                index.search("q", 1)
        finally:
            release.set()
            index.close()

        assert exc_info.value.operation == "search"
        assert isinstance(exc_info.value, IndexUnavailableError)

    def test_closed_index_rejects_calls(self) -> None:
        inner = InMemoryBrainIndex()
        index = TimeoutBrainIndex(inner, timeout=1.0)
        index.close()

        with pytest.raises(IndexUnavailableError, match="已关闭"):
            index.search("q", 1)

    def test_busy_slots_count_toward_timeout(self) -> None:
        """测试在途调用占满时，新调用在超时内拿不到空位即超时"""
        release = threading.Event()
        inner = InMemoryBrainIndex()
        inner.search = lambda query, top_k: release.wait(5)

        index = TimeoutBrainIndex(inner, timeout=0.05, max_workers=1)
        try:
            with pytest.raises(IndexTimeoutError):
                index.search("first", 1)
            with pytest.raises(IndexTimeoutError):
                index.search("second", 1)
        finally:
            release.set()

    def test_hung_call_does_not_delay_exit(self) -> None:
        """测试卡住的调用超时后，进程可以立即退出"""
        script = textwrap.dedent("""
            import time
            from brainmux.core.exceptions import IndexTimeoutError
            from brainmux.index import BaseBrainIndex, TimeoutBrainIndex

            class HungIndex(BaseBrainIndex):
                name = "hung"

                def search(self, query, top_k):
                    time.sleep(60)

                def add(self, documents):
                    pass

            try:
                TimeoutBrainIndex(HungIndex(), timeout=0.1).search("q", 1)
            except IndexTimeoutError:
                print("timed out")
        """)

        result = subprocess.run(
            [sys.executable, "-c", script],
            capture_output=True,
            text=True,
            timeout=20,
        )
        assert result.returncode == 0
        assert "timed out" in result.stdout

    def test_error_wrapped(self) -> None:
        """测试底层异常包装为 IndexUnavailableError"""
        inner = InMemoryBrainIndex()
        inner.search = MagicMock(side_effect=ConnectionError("refused"))

        with TimeoutBrainIndex(inner, timeout=1.0) as index:
            with pytest.raises(IndexUnavailableError, match="refused"):
                index.search("q", 1)


class TestBrainIndexer:
    """BrainIndexer 测试"""

    def test_index_default_registry(self) -> None:
        """测试内置注册表的每个有描述的 Brain 都被索引"""
        registry = BrainRegistry.default()
        index = InMemoryBrainIndex()

        count = BrainIndexer(index, registry).index_all()

        described = [p.brain_id for p in registry.profiles if p.description]
        assert count == len(described)
        assert index.add_calls == 1
        assert [d.brain_id for d in index.documents] == described

    def test_document_metadata(self) -> None:
        registry = BrainRegistry(
            [
                BrainProfile(brain_id="core", description="Core brain", order=0),
                BrainProfile(brain_id="quiet"),
                BrainProfile(brain_id="coder", description="Writes code"),
            ],
            ["core"],
        )
        documents = BrainIndexer(InMemoryBrainIndex(), registry).build_documents()

        assert [(d.content, d.metadata) for d in documents] == [
            ("Core brain", {BRAIN_NAME_KEY: "core", ORDER_KEY: "0"}),
            ("Writes code", {BRAIN_NAME_KEY: "coder", ORDER_KEY: "500"}),
        ]

    def test_nothing_to_index(self) -> None:
        registry = BrainRegistry([BrainProfile(brain_id="core")], ["core"])
        index = InMemoryBrainIndex()
        assert BrainIndexer(index, registry).index_all() == 0
        assert index.add_calls == 0
