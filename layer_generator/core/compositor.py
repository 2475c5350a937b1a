"""图层合成器模块.

将一个图层组合按堆叠顺序绘制到画布上，生成最终图片。

Features:
    - 固定尺寸或按原始尺寸扩展画布
    - 按图层顺序逐层绘制（拉伸填满画布）
    - 单个图层失败即停止，不输出残缺结果
"""

from __future__ import annotations

from typing import Optional, Tuple

from layer_generator.models.combination import Combination
from layer_generator.models.generator_config import GeneratorConfig
from layer_generator.services.raster_backend import BaseRasterBackend
from layer_generator.utils.exceptions import (
    CompositeError,
    DecodeError,
    DrawError,
    EncodeError,
    describe_source,
)
from layer_generator.utils.logger import setup_logger

logger = setup_logger(__name__)


class Compositor:
    """图层合成器.

    每次调用 :meth:`composite` 都会分配自己的画布，不同调用之间不共享状态。

    Attributes:
        backend: 栅格后端

    Example:
        >>> compositor = Compositor(PillowRasterBackend())
        >>> png = await compositor.composite(combination, GeneratorConfig())
    """

    def __init__(self, backend: BaseRasterBackend) -> None:
        """初始化合成器.

        Args:
            backend: 栅格后端实例
        """
        self._backend = backend

    @property
    def backend(self) -> BaseRasterBackend:
        """获取栅格后端."""
        return self._backend

    async def resolve_canvas_size(
        self,
        combination: Combination,
        config: GeneratorConfig,
        index: Optional[int] = None,
    ) -> Tuple[int, int]:
        """确定画布尺寸.

        ``use_original_size`` 为假时直接使用配置尺寸；为真时先读取组合中
        所有图片的原始尺寸，取最大宽高，并以配置尺寸为下限。

        Args:
            combination: 图层组合
            config: 生成配置
            index: 组合在批次中的序号（用于错误诊断）

        Returns:
            (宽度, 高度) 元组

        Raises:
            CompositeError: 读取某张图片尺寸失败
        """
        width, height = config.canvas_size
        if not config.use_original_size:
            return width, height

        for layer_name, url in combination:
            try:
                w, h = await self._backend.decode_dimensions(url)
            except DecodeError as e:
                logger.error(f"读取图层 '{layer_name}' 尺寸失败: {e}")
                raise CompositeError(e, index=index, layer_name=layer_name) from e
            width = max(width, w)
            height = max(height, h)

        return width, height

    async def composite(
        self,
        combination: Combination,
        config: GeneratorConfig,
        index: Optional[int] = None,
    ) -> bytes:
        """合成一个图层组合.

        Args:
            combination: 图层组合（顺序即堆叠顺序，第一个在最底层）
            config: 生成配置
            index: 组合在批次中的序号（用于错误诊断）

        Returns:
            编码后的图片数据

        Raises:
            CompositeError: 解码、绘制或编码失败
        """
        width, height = await self.resolve_canvas_size(combination, config, index)
        logger.debug(f"合成 {len(combination)} 个图层，画布 {width}x{height}")

        try:
            canvas = await self._backend.create_canvas(width, height)
        except DrawError as e:
            raise CompositeError(e, index=index) from e

        for layer_name, url in combination:
            try:
                await self._backend.draw_scaled(canvas, url, width, height)
            except (DecodeError, DrawError) as e:
                logger.error(
                    f"绘制图层 '{layer_name}' 失败 ({describe_source(url)}): {e}"
                )
                raise CompositeError(e, index=index, layer_name=layer_name) from e

        try:
            return await self._backend.encode(canvas)
        except EncodeError as e:
            logger.error(f"编码失败: {e}")
            raise CompositeError(e, index=index) from e
