"""数据模型模块."""

from layer_generator.models.app_settings import Settings
from layer_generator.models.batch_result import BatchResult, CompositeOutcome
from layer_generator.models.combination import Combination, LayerPick
from layer_generator.models.generator_config import (
    GenerationMode,
    GeneratorConfig,
)
from layer_generator.models.layer import (
    ImageItem,
    Layer,
    are_layers_ready,
    has_selected_images,
)

__all__ = [
    # 图层
    "ImageItem",
    "Layer",
    "are_layers_ready",
    "has_selected_images",
    # 组合
    "Combination",
    "LayerPick",
    # 配置
    "GenerationMode",
    "GeneratorConfig",
    "Settings",
    # 结果
    "BatchResult",
    "CompositeOutcome",
]
