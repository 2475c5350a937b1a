"""生成流程集成测试.

从目录构建图层，经过组合选择和 Pillow 合成得到最终图片。
"""

from __future__ import annotations

import io
import random
from pathlib import Path

import pytest
from PIL import Image

from layer_generator.core.batch_generator import composite_all
from layer_generator.core.combination_selector import select_combinations
from layer_generator.models.generator_config import GenerationMode, GeneratorConfig
from layer_generator.services.generator_service import GeneratorService
from layer_generator.services.pillow_backend import PillowRasterBackend
from layer_generator.utils.file_utils import layers_from_directory

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)


@pytest.fixture
def artwork_dir(temp_dir: Path) -> Path:
    """创建三图层的作品目录.

    - 1_background: 红/绿两张不透明底图（尺寸不同）
    - 2_body: 100x100，中间 40x40 蓝色、四周透明
    - 3_accessory: 空图层
    """
    background = temp_dir / "1_background"
    background.mkdir()
    Image.new("RGBA", (300, 300), RED).save(background / "a_red.png")
    Image.new("RGBA", (800, 400), GREEN).save(background / "b_green.png")

    body = temp_dir / "2_body"
    body.mkdir()
    sprite = Image.new("RGBA", (100, 100), (0, 0, 0, 0))
    sprite.paste(Image.new("RGBA", (40, 40), BLUE), (30, 30))
    sprite.save(body / "robot.png")

    (temp_dir / "3_accessory").mkdir()
    return temp_dir


def _open(data: bytes) -> Image.Image:
    return Image.open(io.BytesIO(data)).convert("RGBA")


class TestGenerationPipeline:
    """测试完整生成流程."""

    @pytest.mark.asyncio
    async def test_exhaustive_generation(self, artwork_dir: Path) -> None:
        """测试穷举生成：空图层被忽略，底图可见，上层覆盖中心."""
        layers = layers_from_directory(artwork_dir)
        config = GeneratorConfig(
            max_to_generate=10,
            image_width=100,
            image_height=100,
            random_mode=False,
            use_original_size=False,
        )

        combinations = select_combinations(layers, config)
        result = await composite_all(combinations, config, PillowRasterBackend())

        assert len(combinations) == 2
        assert all(c.layer_names == ("1_background", "2_body") for c in combinations)
        assert result.succeeded
        first, second = (_open(o) for o in result.outputs)
        assert first.size == (100, 100)
        assert first.getpixel((2, 2)) == RED
        assert second.getpixel((2, 2)) == GREEN
        assert first.getpixel((50, 50)) == BLUE

    @pytest.mark.asyncio
    async def test_original_size_generation(self, artwork_dir: Path) -> None:
        """测试原始尺寸模式下每个组合的画布尺寸各自计算."""
        layers = layers_from_directory(artwork_dir)
        config = GeneratorConfig(
            image_width=512,
            image_height=512,
            random_mode=False,
            use_original_size=True,
        )

        result = await GeneratorService(backend=PillowRasterBackend()).generate(
            layers, config, GenerationMode.ALL
        )

        assert [_open(o).size for o in result.outputs] == [(512, 512), (800, 512)]

    @pytest.mark.asyncio
    async def test_random_generation_writes_files(
        self, artwork_dir: Path, temp_dir: Path
    ) -> None:
        """测试随机生成并由调用方保存文件."""
        layers = layers_from_directory(artwork_dir)
        config = GeneratorConfig(max_to_generate=3, image_width=32, image_height=32)
        service = GeneratorService(backend=PillowRasterBackend(), rng=random.Random(0))

        result = await service.generate(layers, config, GenerationMode.RANDOM)

        output_dir = temp_dir / "out"
        output_dir.mkdir()
        for i, data in enumerate(result.outputs):
            (output_dir / f"generation-{i}.png").write_bytes(data)

        assert len(list(output_dir.glob("*.png"))) == 3
