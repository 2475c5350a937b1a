"""基于 Pillow 的栅格后端实现."""

from __future__ import annotations

import asyncio
from typing import Tuple

from PIL import Image

from layer_generator.services.raster_backend import BaseRasterBackend
from layer_generator.utils.constants import (
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_OUTPUT_QUALITY,
    SUPPORTED_OUTPUT_FORMATS,
    TRANSPARENT,
)
from layer_generator.utils.exceptions import (
    DrawError,
    EncodeError,
    ImageSource,
)
from layer_generator.utils.image_utils import (
    ensure_rgba,
    image_to_bytes,
    open_image_source,
    read_image_size,
)
from layer_generator.utils.logger import setup_logger

logger = setup_logger(__name__)


class PillowRasterBackend(BaseRasterBackend):
    """Pillow 栅格后端.

    画布为 RGBA 模式的 ``PIL.Image.Image``，图层通过 alpha 合成叠加，
    透明像素保留下层内容。解码和编码在默认线程池中执行。

    Attributes:
        output_format: 输出格式 (PNG, JPEG, WEBP)
        quality: 输出质量，仅对 JPEG/WEBP 生效
    """

    def __init__(
        self,
        output_format: str = DEFAULT_OUTPUT_FORMAT,
        quality: int = DEFAULT_OUTPUT_QUALITY,
    ) -> None:
        """初始化 Pillow 后端.

        Args:
            output_format: 输出格式
            quality: 输出质量 (1-100)

        Raises:
            ValueError: 不支持的输出格式
        """
        output_format = output_format.upper()
        if output_format not in SUPPORTED_OUTPUT_FORMATS:
            raise ValueError(f"不支持的输出格式: {output_format}")
        self.output_format = output_format
        self.quality = quality

    async def decode_dimensions(self, url: ImageSource) -> Tuple[int, int]:
        """获取图片的原始尺寸."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, read_image_size, url)

    async def create_canvas(self, width: int, height: int) -> Image.Image:
        """分配一块全透明的 RGBA 画布."""
        return Image.new("RGBA", (width, height), TRANSPARENT)

    async def draw_scaled(
        self,
        canvas: Image.Image,
        url: ImageSource,
        width: int,
        height: int,
    ) -> None:
        """将图片拉伸到 (width, height) 并叠加到画布左上角."""
        loop = asyncio.get_event_loop()
        image = await loop.run_in_executor(None, open_image_source, url)

        try:
            layer = ensure_rgba(image)
            if layer.size != (width, height):
                layer = layer.resize((width, height), Image.Resampling.LANCZOS)
            canvas.alpha_composite(layer, dest=(0, 0))
        except Exception as e:
            logger.error(f"绘制图层失败: {e}")
            raise DrawError(url, str(e)) from e

    async def encode(self, canvas: Image.Image) -> bytes:
        """将画布编码为字节数据."""
        loop = asyncio.get_event_loop()
        try:
            return await loop.run_in_executor(
                None, image_to_bytes, canvas, self.output_format, self.quality
            )
        except Exception as e:
            logger.error(f"画布编码失败: {e}")
            raise EncodeError(str(e)) from e

