"""图片生成服务模块.

封装组合选择和图层合成的完整流程，供界面层调用。

Features:
    - 按模式批量生成
    - 实时预览（优先使用选中图片）
    - 进度回调与取消
"""

from __future__ import annotations

import random
from typing import Optional, Sequence, Set

from layer_generator.core.batch_generator import BatchGenerator, BatchProgressCallback
from layer_generator.core.combination_selector import (
    select_combinations,
    select_random,
    select_using_picks,
)
from layer_generator.core.compositor import Compositor
from layer_generator.core.config_manager import get_config
from layer_generator.models.batch_result import BatchResult
from layer_generator.models.generator_config import GenerationMode, GeneratorConfig
from layer_generator.models.layer import Layer, are_layers_ready, has_selected_images
from layer_generator.services.pillow_backend import PillowRasterBackend
from layer_generator.services.raster_backend import BaseRasterBackend
from layer_generator.utils.logger import setup_logger

logger = setup_logger(__name__)


class GeneratorService:
    """图片生成服务.

    Attributes:
        backend: 栅格后端

    Example:
        >>> service = GeneratorService()
        >>> result = await service.generate(layers, mode=GenerationMode.ALL)
        >>> len(result.outputs)
        >>>
        >>> preview = await service.generate_preview(layers)
    """

    def __init__(
        self,
        backend: Optional[BaseRasterBackend] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """初始化生成服务.

        Args:
            backend: 栅格后端，为 None 时根据应用设置创建 Pillow 后端
            rng: 随机数生成器
        """
        self._backend = backend
        self._rng = rng
        self._compositor: Optional[Compositor] = None
        # 正在运行的批量生成器，每次 generate 调用独立一个
        self._active_batches: Set[BatchGenerator] = set()

    @property
    def backend(self) -> BaseRasterBackend:
        """获取栅格后端."""
        if self._backend is None:
            settings = get_config().settings
            self._backend = PillowRasterBackend(
                output_format=settings.output_format,
                quality=settings.output_quality,
            )
        return self._backend

    @property
    def compositor(self) -> Compositor:
        """获取预览使用的合成器."""
        if self._compositor is None:
            self._compositor = Compositor(self.backend)
        return self._compositor

    @property
    def is_generating(self) -> bool:
        """是否有批量生成正在进行."""
        return bool(self._active_batches)

    async def generate(
        self,
        layers: Sequence[Layer],
        config: Optional[GeneratorConfig] = None,
        mode: Optional[GenerationMode] = None,
        on_progress: Optional[BatchProgressCallback] = None,
    ) -> BatchResult:
        """按模式生成图片.

        每次调用使用独立的批量生成器，多个调用可以并发进行，互不影响。

        Args:
            layers: 图层列表（只读快照）
            config: 生成配置，默认使用配置管理器中的默认配置
            mode: 生成模式，None 时由 ``config.random_mode`` 决定
            on_progress: 进度回调 (current, total, message)

        Returns:
            批量结果
        """
        config = config or get_config().generator_config
        combinations = select_combinations(layers, config, mode, self._rng)
        logger.info(
            f"生成请求: {len(layers)} 个图层, 模式 "
            f"{GenerationMode(mode).value if mode else 'auto'}, "
            f"{len(combinations)} 个组合"
        )

        batch = BatchGenerator(self.backend)
        self._active_batches.add(batch)
        try:
            return await batch.composite_all(combinations, config, on_progress)
        finally:
            self._active_batches.discard(batch)

    async def generate_preview(
        self,
        layers: Sequence[Layer],
        config: Optional[GeneratorConfig] = None,
    ) -> Optional[bytes]:
        """生成预览图.

        存在选中图片时使用选中组合，否则随机抽取一个组合。

        Args:
            layers: 图层列表
            config: 生成配置

        Returns:
            预览图数据；图层未就绪（无图层或存在空图层）时返回 None

        Raises:
            CompositeError: 合成失败
        """
        if not are_layers_ready(layers):
            logger.debug("图层未就绪，跳过预览")
            return None

        config = config or get_config().generator_config
        if has_selected_images(layers):
            combination = select_using_picks(layers)
        else:
            combination = select_random(layers, self._rng)

        return await self.compositor.composite(combination, config)

    def cancel(self) -> None:
        """取消所有正在进行的批量生成."""
        for batch in list(self._active_batches):
            batch.cancel()


# 单例实例
_generator_service_instance: Optional[GeneratorService] = None


def get_generator_service(
    backend: Optional[BaseRasterBackend] = None,
) -> GeneratorService:
    """获取生成服务单例.

    Args:
        backend: 栅格后端

    Returns:
        GeneratorService 实例
    """
    global _generator_service_instance

    if _generator_service_instance is None:
        _generator_service_instance = GeneratorService(backend=backend)

    return _generator_service_instance


def reset_generator_service() -> None:
    """重置生成服务单例."""
    global _generator_service_instance
    _generator_service_instance = None
