"""图片工具函数单元测试."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from PIL import Image

from layer_generator.utils.exceptions import DecodeError
from layer_generator.utils.image_utils import (
    bytes_to_data_url,
    data_url_to_bytes,
    ensure_rgba,
    flatten_alpha,
    image_to_bytes,
    open_image_source,
    read_image_size,
)


class TestDataUrl:
    """测试 data URL 转换."""

    def test_round_trip(self) -> None:
        """测试编码后可解码."""
        assert data_url_to_bytes(bytes_to_data_url(b"abc")) == b"abc"

    def test_prefix(self) -> None:
        """测试前缀."""
        assert bytes_to_data_url(b"x", "image/jpeg").startswith("data:image/jpeg;base64,")

    @pytest.mark.parametrize(
        "url",
        ["data:image/png;base64", "data:image/png,abc", "image/png;base64,YWJj", "data:;base64,@@@"],
    )
    def test_invalid(self, url: str) -> None:
        """测试无效的 data URL."""
        with pytest.raises(ValueError):
            data_url_to_bytes(url)


class TestOpenImageSource:
    """测试图片句柄解析."""

    def test_open_path(self, temp_dir: Path) -> None:
        """测试文件路径."""
        path = temp_dir / "a.png"
        Image.new("RGB", (3, 4)).save(path)

        assert open_image_source(str(path)).size == (3, 4)

    def test_open_bytes(self) -> None:
        """测试字节数据."""
        data = image_to_bytes(Image.new("RGB", (2, 2)))
        assert open_image_source(data).size == (2, 2)

    def test_open_data_url(self) -> None:
        """测试 data URL."""
        url = bytes_to_data_url(image_to_bytes(Image.new("RGB", (5, 1))))
        assert open_image_source(url).size == (5, 1)

    def test_invalid_data_url(self) -> None:
        """测试无效 data URL 抛出 DecodeError."""
        with pytest.raises(DecodeError):
            open_image_source("data:image/png;base64,@@@")

    def test_missing_file(self) -> None:
        """测试文件不存在."""
        with pytest.raises(DecodeError) as exc_info:
            open_image_source("/nonexistent/file.png")
        assert exc_info.value.url == "/nonexistent/file.png"

    def test_corrupted_file(self, temp_dir: Path) -> None:
        """测试损坏的文件."""
        path = temp_dir / "broken.png"
        path.write_bytes(b"not really a png")

        with pytest.raises(DecodeError):
            open_image_source(str(path))


class TestConversion:
    """测试格式转换."""

    def test_ensure_rgba(self) -> None:
        """测试 RGBA 转换."""
        assert ensure_rgba(Image.new("RGB", (1, 1))).mode == "RGBA"
        rgba = Image.new("RGBA", (1, 1))
        assert ensure_rgba(rgba) is rgba

    def test_flatten_alpha(self) -> None:
        """测试透明铺底."""
        flat = flatten_alpha(Image.new("RGBA", (2, 2), (0, 0, 0, 0)))
        assert flat.mode == "RGB"
        assert flat.getpixel((0, 0)) == (255, 255, 255)

    @pytest.mark.parametrize("fmt", ["PNG", "JPEG", "WEBP"])
    def test_image_to_bytes_formats(self, fmt: str) -> None:
        """测试各输出格式."""
        data = image_to_bytes(Image.new("RGBA", (4, 4), (1, 2, 3, 255)), fmt)
        assert Image.open(io.BytesIO(data)).format == fmt


class TestDecodeErrorMapping:
    """测试 Pillow 解码异常统一转换为 DecodeError."""

    def test_decompression_bomb(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """测试像素数超限的图片."""
        path = temp_dir / "huge.png"
        Image.new("RGB", (16, 16)).save(path)
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

        with pytest.raises(DecodeError) as exc_info:
            open_image_source(str(path))

        assert isinstance(exc_info.value.__cause__, Image.DecompressionBombError)

    def test_truncated_file(self, temp_dir: Path) -> None:
        """测试截断的文件."""
        data = image_to_bytes(Image.effect_noise((64, 64), 50))
        path = temp_dir / "truncated.png"
        path.write_bytes(data[: len(data) // 2])

        with pytest.raises(DecodeError):
            open_image_source(str(path))


class TestReadImageSize:
    """测试只读取尺寸."""

    def test_read_size(self, temp_dir: Path) -> None:
        """测试读取尺寸."""
        path = temp_dir / "a.png"
        Image.new("RGBA", (7, 3)).save(path)

        assert read_image_size(str(path)) == (7, 3)

    def test_read_size_from_bytes(self) -> None:
        """测试字节数据."""
        assert read_image_size(image_to_bytes(Image.new("RGB", (2, 5)))) == (2, 5)

    def test_read_size_invalid(self) -> None:
        """测试无效数据."""
        with pytest.raises(DecodeError):
            read_image_size(b"not an image")

    def test_read_size_decompression_bomb(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """测试像素数超限时读取尺寸也失败."""
        path = temp_dir / "huge.png"
        Image.new("RGB", (16, 16)).save(path)
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

        with pytest.raises(DecodeError):
            read_image_size(str(path))
