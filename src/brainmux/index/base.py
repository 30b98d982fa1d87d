"""嵌入索引抽象基类

BrainMux 不负责嵌入计算，只通过该接口消费外部语义检索服务。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

BRAIN_NAME_KEY = "brainName"
"""元数据中保存 Brain 标识的键"""

ORDER_KEY = "order"
"""元数据中保存执行顺序的键"""

CATALOG_QUERY = "*"
"""枚举全部 Brain 时使用的检索词"""


@dataclass
class BrainMatch:
    """索引中的一条 Brain 文档（检索结果或待写入文档）"""

    content: str
    """被嵌入的内容（Brain 描述）"""

    metadata: dict[str, Any] = field(default_factory=dict)
    """元数据，至少包含 brainName"""

    score: float | None = None
    """相似度得分（可选，由索引实现提供）"""

    @property
    def brain_id(self) -> str | None:
        """Brain 标识，元数据缺失时为 None"""
        value = self.metadata.get(BRAIN_NAME_KEY)
        return str(value) if value else None


class BaseBrainIndex(ABC):
    """Brain 语义索引抽象基类

    实现方可以是任意向量库。search 必须按相关度降序返回。
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """索引名称"""
        pass

    @abstractmethod
    def search(self, query: str, top_k: int) -> list[BrainMatch]:
        """
        语义检索

        Args:
            query: 查询文本
            top_k: 返回数量上限

        Returns:
            按相关度降序排列的 BrainMatch 列表
        """
        pass

    @abstractmethod
    def add(self, documents: list[BrainMatch]) -> None:
        """
        批量写入文档

        Args:
            documents: 待写入的 Brain 文档
        """
        pass

    def catalog(self, top_k: int) -> list[BrainMatch]:
        """
        枚举索引中的全部 Brain

        以 "*" 作为查询做一次大 top_k 的相似度检索，借检索接口充当列表接口。
        向量库原生支持列举时可覆盖此方法。

        Args:
            top_k: 返回数量上限

        Returns:
            BrainMatch 列表
        """
        return self.search(CATALOG_QUERY, top_k)
