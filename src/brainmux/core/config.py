"""BrainMux 配置管理

使用 Pydantic Settings 管理配置，支持环境变量和 .env 文件。
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BrainMuxSettings(BaseSettings):
    """BrainMux 全局配置"""

    model_config = SettingsConfigDict(
        env_prefix="BRAINMUX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 注册表配置
    registry_path: Path | None = Field(
        default=None,
        description="Brain 注册表 JSON 文件路径（为空时使用内置注册表）",
    )

    # 选择器配置
    search_top_k: int = Field(
        default=4,
        description="select_brains 从嵌入索引取回的专家 Brain 数量",
    )
    catalog_top_k: int = Field(
        default=100,
        description="枚举全部 Brain 时的检索上限",
    )
    index_timeout_seconds: float = Field(
        default=5.0,
        description="单次嵌入索引调用的超时时间（秒）",
    )

    # 聚合器配置
    similarity_threshold: float = Field(
        default=0.6,
        description="Jaccard 相似度阈值，超过即视为重复内容",
    )
    max_merged_outputs: int = Field(
        default=3,
        description="merge_outputs 考虑的最高质量输出数量",
    )
    consistency_threshold: float = Field(
        default=0.85,
        description="一致性报告判定为一致的平均相似度下限",
    )
    inconsistency_threshold: float = Field(
        default=0.5,
        description="两两相似度低于该值时记为不一致",
    )
    quality_threshold: float = Field(
        default=0.75,
        description="低于该质量时触发重新评估",
    )
    max_reevaluation_cycles: int = Field(
        default=3,
        description="最大重新评估轮数",
    )

    # 执行配置
    max_concurrent_brains: int = Field(
        default=4,
        description="并行执行 Brain 的最大并发数",
    )
    execution_timeout_seconds: float = Field(
        default=30.0,
        description="一轮 Brain 执行的总超时时间（秒）",
    )

    # 日志配置
    log_level: str = Field(
        default="INFO",
        description="日志级别",
    )


# 全局配置实例（延迟初始化）
_settings: BrainMuxSettings | None = None


def get_settings() -> BrainMuxSettings:
    """获取全局配置实例"""
    global _settings
    if _settings is None:
        _settings = BrainMuxSettings()
    return _settings


def reset_settings():
    """重置全局配置（主要用于测试）"""
    global _settings
    _settings = None
