"""Brain 注册表数据模型

定义单个 Brain 的参考数据以及注册表文件格式。
"""

from pydantic import BaseModel, Field, field_validator


class BrainProfile(BaseModel):
    """Brain 参考数据（手工维护，启动后只读）

    order / complexity / latency_ms 允许缺省，缺省值由注册表统一补齐。
    """

    model_config = {"frozen": True}

    brain_id: str = Field(description="Brain 唯一标识（如 'conductorAdvisor'）")
    description: str = Field(default="", description="能力描述，用于写入嵌入索引")
    order: int | None = Field(default=None, description="执行顺序，越小越靠前")
    complexity: int | None = Field(
        default=None,
        ge=0,
        le=10,
        description="可处理的复杂度评级 0-10",
    )
    latency_ms: int | None = Field(
        default=None,
        ge=0,
        description="典型响应耗时（毫秒）",
    )

    @field_validator("brain_id")
    @classmethod
    def _brain_id_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("brain_id 不能为空")
        return value


class RegistryFile(BaseModel):
    """注册表 JSON 文件格式

    示例::

        {
          "core_brains": ["conductorAdvisor", "toolCallAdvisor"],
          "brains": [{"brain_id": "conductorAdvisor", "order": 0}]
        }
    """

    core_brains: list[str] = Field(description="必选 Brain（按顺序）")
    brains: list[BrainProfile] = Field(default_factory=list, description="全部 Brain 参考数据")
