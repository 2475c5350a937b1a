"""Pytest 配置和共享 fixtures."""

import os
import tempfile

# 在导入包之前隔离应用数据目录，避免测试写入用户目录
os.environ.setdefault(
    "LAYER_GENERATOR_HOME", tempfile.mkdtemp(prefix="layer-generator-tests-")
)

from pathlib import Path
from typing import Callable, Generator, Tuple

import pytest
from PIL import Image

from layer_generator.core.config_manager import reset_config_manager
from layer_generator.models.layer import ImageItem, Layer
from layer_generator.services.generator_service import reset_generator_service

RGBA = Tuple[int, int, int, int]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录 fixture."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """每个测试前后重置单例."""
    reset_config_manager()
    reset_generator_service()
    yield
    reset_config_manager()
    reset_generator_service()


@pytest.fixture
def make_image(temp_dir: Path) -> Callable[..., str]:
    """创建纯色测试图片，返回文件路径."""

    def _make(
        name: str,
        size: Tuple[int, int] = (8, 8),
        color: RGBA = (255, 0, 0, 255),
    ) -> str:
        path = temp_dir / name
        Image.new("RGBA", size, color).save(path)
        return str(path)

    return _make


def make_layer(name: str, count: int, selected: Tuple[int, ...] = ()) -> Layer:
    """创建带 ``count`` 张虚拟图片的图层."""
    return Layer(
        name=name,
        images=[
            ImageItem(
                id=f"{name}-{i}",
                name=f"{name} {i}",
                url=f"{name.lower()}_{i}.png",
                selected=True if i in selected else None,
            )
            for i in range(count)
        ],
    )


@pytest.fixture
def layer_factory() -> Callable[..., Layer]:
    """图层工厂 fixture."""
    return make_layer
