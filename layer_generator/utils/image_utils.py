"""图片工具函数模块.

提供图片句柄解析、加载、格式转换等工具函数。
"""

from __future__ import annotations

import base64
import binascii
import io
from pathlib import Path
from typing import BinaryIO, Tuple

from PIL import Image, UnidentifiedImageError

from layer_generator.utils.constants import (
    DEFAULT_FLATTEN_COLOR,
    DEFAULT_OUTPUT_QUALITY,
)
from layer_generator.utils.exceptions import DecodeError, ImageSource
from layer_generator.utils.logger import setup_logger

logger = setup_logger(__name__)

DATA_URL_PREFIX = "data:"


def data_url_to_bytes(data_url: str) -> bytes:
    """data URL 转字节数据.

    Args:
        data_url: 形如 ``data:image/png;base64,....`` 的字符串

    Returns:
        解码后的字节数据

    Raises:
        ValueError: 不是合法的 base64 data URL
    """
    header, sep, payload = data_url.partition(",")
    if not sep or not header.startswith(DATA_URL_PREFIX):
        raise ValueError("不是合法的 data URL")
    if not header.endswith(";base64"):
        raise ValueError("仅支持 base64 编码的 data URL")
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"base64 数据无效: {e}") from e


def bytes_to_data_url(data: bytes, mime_type: str = "image/png") -> str:
    """字节数据转 data URL."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def _open_stream(source: ImageSource) -> BinaryIO | Path:
    """将图片句柄解析为 PIL 可打开的对象."""
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(source)
    if source.startswith(DATA_URL_PREFIX):
        try:
            return io.BytesIO(data_url_to_bytes(source))
        except ValueError as e:
            raise DecodeError(source, str(e)) from e

    path = Path(source)
    if not path.is_file():
        raise DecodeError(source, "文件不存在")
    return path


# Pillow 解码阶段可能抛出的异常，统一转换为 DecodeError
_DECODE_ERRORS = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    SyntaxError,
    ValueError,
    EOFError,
)


def open_image_source(source: ImageSource) -> Image.Image:
    """打开并完整加载图片句柄.

    支持文件路径、data URL 和编码后的字节数据。

    Args:
        source: 图片句柄

    Returns:
        已加载到内存的 PIL Image 对象

    Raises:
        DecodeError: 句柄无法解析或不是有效图片（包括像素数超限）
    """
    stream = _open_stream(source)
    try:
        img = Image.open(stream)
        img.load()  # 强制加载到内存
        return img
    except _DECODE_ERRORS as e:
        logger.error(f"加载图片失败: {e}")
        raise DecodeError(source, str(e)) from e


def read_image_size(source: ImageSource) -> Tuple[int, int]:
    """只读取图片头部获取尺寸，不解码像素数据.

    Raises:
        DecodeError: 句柄无法解析或不是有效图片
    """
    stream = _open_stream(source)
    try:
        with Image.open(stream) as img:
            return img.size
    except _DECODE_ERRORS as e:
        logger.error(f"读取图片尺寸失败: {e}")
        raise DecodeError(source, str(e)) from e


def ensure_rgba(image: Image.Image) -> Image.Image:
    """确保图片为 RGBA 模式."""
    if image.mode != "RGBA":
        return image.convert("RGBA")
    return image


def flatten_alpha(
    image: Image.Image,
    color: Tuple[int, int, int] = DEFAULT_FLATTEN_COLOR,
) -> Image.Image:
    """将透明图片铺到纯色底上，返回 RGB 图片."""
    if image.mode not in ("RGBA", "LA", "P"):
        return image.convert("RGB")
    rgba = ensure_rgba(image)
    background = Image.new("RGB", rgba.size, color)
    background.paste(rgba, mask=rgba.getchannel("A"))
    return background


def image_to_bytes(
    image: Image.Image,
    format: str = "PNG",
    quality: int = DEFAULT_OUTPUT_QUALITY,
) -> bytes:
    """图片转字节数据.

    Args:
        image: PIL Image 对象
        format: 目标格式 (PNG, JPEG, WEBP)
        quality: 质量，仅对 JPEG/WEBP 生效

    Returns:
        编码后的字节数据
    """
    format = format.upper()
    if format == "JPEG":
        image = flatten_alpha(image)

    save_kwargs = {}
    if format in ("JPEG", "WEBP"):
        save_kwargs["quality"] = quality

    buffer = io.BytesIO()
    image.save(buffer, format=format, **save_kwargs)
    return buffer.getvalue()
