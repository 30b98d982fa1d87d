"""嵌入索引接口

提供外部语义检索服务的抽象、超时保护和索引构建。
"""

from brainmux.index.base import (
    BRAIN_NAME_KEY,
    CATALOG_QUERY,
    ORDER_KEY,
    BaseBrainIndex,
    BrainMatch,
)
from brainmux.index.indexer import BrainIndexer
from brainmux.index.timeout import TimeoutBrainIndex

__all__ = [
    "BaseBrainIndex",
    "BrainMatch",
    "BrainIndexer",
    "TimeoutBrainIndex",
    "BRAIN_NAME_KEY",
    "ORDER_KEY",
    "CATALOG_QUERY",
]
