"""栅格后端抽象基类.

定义合成引擎依赖的图片解码、绘制和编码能力，支持替换为不同实现。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Tuple

from layer_generator.utils.exceptions import ImageSource


class BaseRasterBackend(ABC):
    """栅格后端抽象基类.

    画布对象的具体类型由实现决定，合成器只把它当作不透明句柄传回后端。
    每个画布只属于创建它的那次合成调用，不会被并发访问。

    Example:
        >>> backend = PillowRasterBackend()
        >>> canvas = await backend.create_canvas(512, 512)
        >>> await backend.draw_scaled(canvas, "body.png", 512, 512)
        >>> data = await backend.encode(canvas)
    """

    @abstractmethod
    async def decode_dimensions(self, url: ImageSource) -> Tuple[int, int]:
        """获取图片的原始尺寸.

        Args:
            url: 图片句柄

        Returns:
            (宽度, 高度) 元组

        Raises:
            DecodeError: 句柄无法解析或不是有效图片
        """

    @abstractmethod
    async def create_canvas(self, width: int, height: int) -> Any:
        """分配一块全透明的画布.

        Args:
            width: 画布宽度
            height: 画布高度

        Returns:
            画布句柄
        """

    @abstractmethod
    async def draw_scaled(
        self,
        canvas: Any,
        url: ImageSource,
        width: int,
        height: int,
    ) -> None:
        """将图片拉伸到指定矩形并绘制在画布上.

        Args:
            canvas: 画布句柄
            url: 图片句柄
            width: 目标宽度
            height: 目标高度

        Raises:
            DecodeError: 图片无法解码
            DrawError: 绘制失败
        """

    @abstractmethod
    async def encode(self, canvas: Any) -> bytes:
        """将画布编码为输出图片.

        Raises:
            EncodeError: 编码失败
        """

    async def close(self) -> None:
        """释放资源.

        子类可重写此方法释放特定资源。
        """

    async def __aenter__(self) -> "BaseRasterBackend":
        """异步上下文管理器入口."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """异步上下文管理器出口."""
        await self.close()
