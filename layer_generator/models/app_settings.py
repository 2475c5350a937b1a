"""应用设置模型."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from layer_generator.models.generator_config import GeneratorConfig
from layer_generator.utils.constants import (
    DEFAULT_IMAGE_HEIGHT,
    DEFAULT_IMAGE_WIDTH,
    DEFAULT_MAX_TO_GENERATE,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_OUTPUT_QUALITY,
    DEFAULT_RANDOM_MODE,
    DEFAULT_USE_ORIGINAL_SIZE,
    SUPPORTED_OUTPUT_FORMATS,
)


class Settings(BaseSettings):
    """应用设置.

    支持从环境变量（前缀 ``LAYER_GENERATOR_``）和 .env 文件加载配置。

    Attributes:
        log_level: 日志级别
        max_to_generate: 默认最大生成数量
        image_width: 默认画布宽度
        image_height: 默认画布高度
        random_mode: 默认是否随机生成
        use_original_size: 默认是否使用原始尺寸
        output_format: 输出图片格式
        output_quality: 输出质量
    """

    model_config = SettingsConfigDict(
        env_prefix="LAYER_GENERATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="日志级别",
    )

    # 生成默认值
    max_to_generate: int = Field(
        default=DEFAULT_MAX_TO_GENERATE,
        ge=1,
        description="默认最大生成数量",
    )

    image_width: int = Field(
        default=DEFAULT_IMAGE_WIDTH,
        ge=1,
        description="默认画布宽度",
    )

    image_height: int = Field(
        default=DEFAULT_IMAGE_HEIGHT,
        ge=1,
        description="默认画布高度",
    )

    random_mode: bool = Field(
        default=DEFAULT_RANDOM_MODE,
        description="默认是否随机生成",
    )

    use_original_size: bool = Field(
        default=DEFAULT_USE_ORIGINAL_SIZE,
        description="默认是否使用原始尺寸",
    )

    # 输出配置
    output_format: str = Field(
        default=DEFAULT_OUTPUT_FORMAT,
        description="输出图片格式",
    )

    output_quality: int = Field(
        default=DEFAULT_OUTPUT_QUALITY,
        ge=1,
        le=100,
        description="输出质量",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """验证日志级别."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"无效的日志级别: {v}，有效值: {valid_levels}")
        return upper_v

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        """验证输出格式."""
        upper_v = v.upper()
        if upper_v == "JPG":
            upper_v = "JPEG"
        if upper_v not in SUPPORTED_OUTPUT_FORMATS:
            raise ValueError(
                f"不支持的输出格式: {v}，有效值: {SUPPORTED_OUTPUT_FORMATS}"
            )
        return upper_v

    def to_generator_config(self) -> GeneratorConfig:
        """根据设置构建默认生成配置."""
        return GeneratorConfig(
            max_to_generate=self.max_to_generate,
            image_width=self.image_width,
            image_height=self.image_height,
            random_mode=self.random_mode,
            use_original_size=self.use_original_size,
        )
