"""文件工具函数模块.

提供从目录结构构建图层列表等文件相关工具函数。
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from layer_generator.models.layer import ImageItem, Layer
from layer_generator.utils.constants import SUPPORTED_IMAGE_FORMATS
from layer_generator.utils.logger import setup_logger

logger = setup_logger(__name__)


def get_file_extension(path: Path | str) -> str:
    """获取文件扩展名（小写，含点号）."""
    return Path(path).suffix.lower()


def is_image_file(path: Path | str) -> bool:
    """检查是否为支持的图片文件."""
    return get_file_extension(path) in SUPPORTED_IMAGE_FORMATS


def list_image_files(directory: Path | str) -> List[Path]:
    """列出目录中的图片文件（按文件名排序，不递归）.

    Args:
        directory: 目录路径

    Returns:
        图片文件路径列表
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(
        (p for p in directory.iterdir() if p.is_file() and is_image_file(p)),
        key=lambda p: p.name,
    )


def layers_from_directory(root: Path | str) -> List[Layer]:
    """从目录结构构建图层列表.

    ``root`` 下的每个子目录（按名称排序）是一个图层，图层名即目录名；
    子目录中的图片文件（按名称排序）是该图层的候选图片。

    Args:
        root: 根目录

    Returns:
        图层列表，顺序即合成堆叠顺序（第一个在最底层）

    Raises:
        NotADirectoryError: 根目录不存在
    """
    root = Path(root)
    if not root.is_dir():
        raise NotADirectoryError(f"图层目录不存在: {root}")

    layers = []
    for layer_dir in sorted((p for p in root.iterdir() if p.is_dir()), key=lambda p: p.name):
        images = [
            ImageItem(id=path.name, name=path.stem, url=str(path))
            for path in list_image_files(layer_dir)
        ]
        layers.append(Layer(name=layer_dir.name, images=images))
        logger.debug(f"加载图层 '{layer_dir.name}': {len(images)} 张图片")

    return layers
