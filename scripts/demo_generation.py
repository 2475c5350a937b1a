#!/usr/bin/env python3
"""分层生成端到端演示脚本.

创建一组示例图层图片，分别以选中、穷举和随机模式生成并保存结果。

Usage:
    python scripts/demo_generation.py [图层目录]

未指定图层目录时在 ``demo_output/layers`` 下生成示例图层。
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# 添加项目根目录到路径
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from PIL import Image, ImageDraw

from layer_generator.models.generator_config import GenerationMode, GeneratorConfig
from layer_generator.services.generator_service import GeneratorService
from layer_generator.utils.file_utils import layers_from_directory


def create_demo_layers(root: Path) -> Path:
    """创建示例图层目录.

    Returns:
        图层根目录
    """
    backgrounds = {"sky": (135, 206, 235), "sunset": (250, 128, 114), "night": (25, 25, 112)}
    bodies = {"round": "ellipse", "square": "rectangle"}
    eyes = {"black": (0, 0, 0), "gold": (255, 215, 0)}

    bg_dir = root / "1_background"
    bg_dir.mkdir(parents=True, exist_ok=True)
    for name, color in backgrounds.items():
        Image.new("RGBA", (512, 512), color + (255,)).save(bg_dir / f"{name}.png")

    body_dir = root / "2_body"
    body_dir.mkdir(parents=True, exist_ok=True)
    for name, shape in bodies.items():
        img = Image.new("RGBA", (512, 512), (0, 0, 0, 0))
        draw = ImageDraw.Draw(img)
        getattr(draw, shape)([128, 128, 384, 448], fill=(240, 240, 240, 255))
        img.save(body_dir / f"{name}.png")

    eyes_dir = root / "3_eyes"
    eyes_dir.mkdir(parents=True, exist_ok=True)
    for name, color in eyes.items():
        img = Image.new("RGBA", (512, 512), (0, 0, 0, 0))
        draw = ImageDraw.Draw(img)
        draw.ellipse([190, 220, 230, 260], fill=color + (255,))
        draw.ellipse([282, 220, 322, 260], fill=color + (255,))
        img.save(eyes_dir / f"{name}.png")

    return root


async def main() -> None:
    """主函数."""
    output_dir = PROJECT_ROOT / "demo_output"
    if len(sys.argv) > 1:
        layer_root = Path(sys.argv[1])
    else:
        layer_root = create_demo_layers(output_dir / "layers")

    layers = layers_from_directory(layer_root)
    print(f"已加载 {len(layers)} 个图层:")
    for layer in layers:
        print(f"  - {layer.name}: {layer.image_count} 张图片")

    service = GeneratorService()
    config = GeneratorConfig(max_to_generate=12, random_mode=False)

    def on_progress(current: int, total: int, message: str) -> None:
        print(f"  [{current}/{total}] {message}")

    for mode in (GenerationMode.SELECTED, GenerationMode.ALL, GenerationMode.RANDOM):
        print(f"\n▶ 模式: {mode.value}")
        result = await service.generate(layers, config, mode, on_progress)

        mode_dir = output_dir / mode.value
        mode_dir.mkdir(parents=True, exist_ok=True)
        for i, data in enumerate(result.outputs):
            (mode_dir / f"generation-{i + 1:03d}.png").write_bytes(data)

        print(f"✓ 生成 {result.completed}/{result.total} 张 -> {mode_dir}")
        if result.failure:
            print(f"✗ 失败: {result.failure}")

    print(f"\n请查看输出目录: {output_dir}")


if __name__ == "__main__":
    asyncio.run(main())
