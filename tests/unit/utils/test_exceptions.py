"""自定义异常单元测试."""

from __future__ import annotations

from layer_generator.utils.exceptions import (
    AppException,
    CompositeError,
    DecodeError,
    DrawError,
    EncodeError,
    RasterError,
    describe_source,
)


class TestExceptions:
    """测试异常层级与消息."""

    def test_hierarchy(self) -> None:
        """测试继承关系."""
        for error in (DecodeError("a"), DrawError("a"), EncodeError()):
            assert isinstance(error, RasterError)
            assert isinstance(error, AppException)

    def test_str_contains_code(self) -> None:
        """测试字符串表示包含错误代码."""
        assert str(DecodeError("a.png")).startswith("[DECODE_ERROR]")

    def test_composite_error_context(self) -> None:
        """测试合成错误携带诊断信息."""
        cause = DrawError("body.png", "bad mode")
        error = CompositeError(cause, index=3, layer_name="Body")

        assert error.code == "COMPOSITE_ERROR"
        assert error.cause is cause
        assert error.url == "body.png"
        assert "#3" in error.message
        assert "Body" in error.message

    def test_composite_error_without_context(self) -> None:
        """测试无序号和图层时的消息."""
        error = CompositeError(EncodeError("x"))
        assert error.message.startswith("合成失败")
        assert error.url is None

    def test_describe_source(self) -> None:
        """测试图片句柄描述."""
        assert describe_source(b"12345") == "<bytes: 5>"
        assert describe_source(None) == "<unknown>"
        assert describe_source("a" * 100, limit=10) == "a" * 10 + "..."
        assert describe_source("a.png") == "a.png"
