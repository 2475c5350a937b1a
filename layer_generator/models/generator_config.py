"""生成配置模型."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from layer_generator.utils.constants import (
    DEFAULT_IMAGE_HEIGHT,
    DEFAULT_IMAGE_WIDTH,
    DEFAULT_MAX_TO_GENERATE,
    DEFAULT_RANDOM_MODE,
    DEFAULT_USE_ORIGINAL_SIZE,
)

# 类型别名
Size = tuple[int, int]


class GenerationMode(str, Enum):
    """生成模式枚举."""

    RANDOM = "random"  # 随机抽取
    SELECTED = "selected"  # 使用选中的图片
    ALL = "all"  # 穷举所有组合（受 random_mode 影响）



class GeneratorConfig(BaseModel):
    """生成配置.

    Attributes:
        max_to_generate: 单次请求最多生成的组合数
        image_width: 画布宽度（同时是原始尺寸模式下的最小宽度）
        image_height: 画布高度（同时是原始尺寸模式下的最小高度）
        random_mode: 未指定模式时是否随机生成
        use_original_size: 是否按所用图片的最大原始尺寸扩展画布

    Example:
        >>> config = GeneratorConfig(max_to_generate=5, random_mode=False)
        >>> config.canvas_size
        (512, 512)
    """

    model_config = ConfigDict(frozen=True)

    max_to_generate: int = Field(
        default=DEFAULT_MAX_TO_GENERATE,
        ge=1,
        description="最大生成数量",
    )
    image_width: int = Field(
        default=DEFAULT_IMAGE_WIDTH,
        ge=1,
        description="画布宽度",
    )
    image_height: int = Field(
        default=DEFAULT_IMAGE_HEIGHT,
        ge=1,
        description="画布高度",
    )
    random_mode: bool = Field(
        default=DEFAULT_RANDOM_MODE,
        description="随机生成",
    )
    use_original_size: bool = Field(
        default=DEFAULT_USE_ORIGINAL_SIZE,
        description="使用图片原始尺寸",
    )

    @property
    def canvas_size(self) -> Size:
        """获取配置的画布尺寸 (宽, 高)."""
        return (self.image_width, self.image_height)

    def to_json(self) -> str:
        """序列化为 JSON 字符串."""
        return self.model_dump_json(indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> "GeneratorConfig":
        """从 JSON 字符串反序列化."""
        return cls.model_validate_json(json_str)
