"""自定义异常类."""

from __future__ import annotations

from typing import Optional, Union

# 图片句柄类型：文件路径、data URL 或编码后的字节数据
ImageSource = Union[str, bytes]


def describe_source(url: Optional[ImageSource], limit: int = 80) -> str:
    """返回适合写入日志和错误消息的图片句柄描述."""
    if url is None:
        return "<unknown>"
    if isinstance(url, (bytes, bytearray)):
        return f"<bytes: {len(url)}>"
    if len(url) > limit:
        return url[:limit] + "..."
    return url


class AppException(Exception):
    """应用基础异常类.

    所有自定义异常都应继承此类。

    Attributes:
        message: 错误消息
        code: 错误代码
    """

    def __init__(self, message: str, code: str = "UNKNOWN") -> None:
        """初始化异常.

        Args:
            message: 错误消息
            code: 错误代码
        """
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        """返回异常字符串表示."""
        return f"[{self.code}] {self.message}"


# ===================
# 配置相关异常
# ===================
class ConfigError(AppException):
    """配置错误异常."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "CONFIG_ERROR")


# ===================
# 栅格后端相关异常
# ===================
class RasterError(AppException):
    """栅格后端错误基类.

    Attributes:
        url: 出错的图片句柄（未知时为 None）
    """

    def __init__(
        self,
        message: str,
        url: Optional[ImageSource] = None,
        code: str = "RASTER_ERROR",
    ) -> None:
        self.url = url
        super().__init__(message, code)


class DecodeError(RasterError):
    """图片句柄无法解析或解码."""

    def __init__(self, url: Optional[ImageSource], reason: str = "") -> None:
        msg = f"无法解码图片: {describe_source(url)}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, url, "DECODE_ERROR")


class DrawError(RasterError):
    """图片已解码，但绘制到画布失败."""

    def __init__(self, url: Optional[ImageSource], reason: str = "") -> None:
        msg = f"绘制图片失败: {describe_source(url)}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, url, "DRAW_ERROR")


class EncodeError(RasterError):
    """最终画布编码失败."""

    def __init__(self, reason: str = "") -> None:
        msg = "画布编码失败"
        if reason:
            msg += f": {reason}"
        super().__init__(msg, None, "ENCODE_ERROR")


# ===================
# 合成相关异常
# ===================
class CompositeError(AppException):
    """单个组合合成失败.

    包装底层的栅格错误，并附带组合序号和图层名称用于诊断。

    Attributes:
        index: 组合在批次中的序号（单独合成时为 None）
        layer_name: 出错的图层名称（编码失败时为 None）
        url: 出错的图片句柄
        cause: 被包装的底层异常
    """

    def __init__(
        self,
        cause: RasterError,
        index: Optional[int] = None,
        layer_name: Optional[str] = None,
    ) -> None:
        self.cause = cause
        self.index = index
        self.layer_name = layer_name
        self.url = cause.url

        parts = []
        if index is not None:
            parts.append(f"组合 #{index}")
        if layer_name is not None:
            parts.append(f"图层 '{layer_name}'")
        prefix = f"{', '.join(parts)} " if parts else ""
        super().__init__(f"{prefix}合成失败: {cause.message}", "COMPOSITE_ERROR")
