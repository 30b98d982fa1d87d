"""Brain 索引构建

启动时把注册表中每个 Brain 的描述写入嵌入索引，供语义选择使用。
"""

from loguru import logger

from brainmux.index.base import BRAIN_NAME_KEY, ORDER_KEY, BaseBrainIndex, BrainMatch
from brainmux.registry.registry import BrainRegistry


class BrainIndexer:
    """Brain 索引构建器"""

    def __init__(self, index: BaseBrainIndex, registry: BrainRegistry):
        self.index = index
        self.registry = registry

    def build_documents(self) -> list[BrainMatch]:
        """把注册表条目转换为索引文档

        Returns:
            每个有描述的 Brain 对应一条文档（content=描述）
        """
        documents = []
        for profile in self.registry.profiles:
            if not profile.description:
                logger.debug(f"跳过无描述的 Brain: {profile.brain_id}")
                continue
            documents.append(BrainMatch(
                content=profile.description,
                metadata={
                    BRAIN_NAME_KEY: profile.brain_id,
                    ORDER_KEY: str(self.registry.order_of(profile.brain_id)),
                },
            ))
        return documents

    def index_all(self) -> int:
        """一次性写入全部 Brain 文档

        Returns:
            写入的文档数量
        """
        documents = self.build_documents()
        logger.info(f"开始索引 {len(documents)} 个 Brain 到 {self.index.name}")

        if not documents:
            logger.warning("没有可索引的 Brain")
            return 0

        for doc in documents:
            logger.debug(
                f"索引 Brain: {doc.brain_id} (order={doc.metadata[ORDER_KEY]}, "
                f"desc='{doc.content[:60]}')"
            )
        self.index.add(documents)
        logger.info(f"已索引 {len(documents)} 个 Brain")
        return len(documents)
