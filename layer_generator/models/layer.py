"""图层数据模型.

图层与候选图片由调用方（界面层）维护，核心模块只读取快照。
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from layer_generator.utils.exceptions import ImageSource


class ImageItem(BaseModel):
    """图层中的一张候选图片.

    Attributes:
        id: 图片 ID（图层内唯一）
        name: 显示名称（不保证唯一）
        url: 图片句柄，可由栅格后端解析（文件路径、data URL 或字节数据）
        selected: 是否被用户选中
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="图片 ID")
    name: str = Field(default="", description="显示名称")
    url: Union[str, bytes] = Field(..., description="图片句柄")
    selected: Optional[bool] = Field(default=None, description="是否选中")

    @field_validator("url", mode="before")
    @classmethod
    def normalize_url(cls, v: Any) -> Any:
        """将 Path 规范化为字符串."""
        if isinstance(v, Path):
            return str(v)
        return v

    @property
    def is_selected(self) -> bool:
        """是否被选中."""
        return bool(self.selected)


class Layer(BaseModel):
    """合成堆叠中的一个图层.

    Attributes:
        name: 图层名称（列表内唯一，同时作为组合的键）
        images: 候选图片列表（顺序有意义）
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="图层名称")
    images: List[ImageItem] = Field(default_factory=list, description="候选图片")

    @property
    def is_empty(self) -> bool:
        """图层是否没有图片."""
        return not self.images

    @property
    def image_count(self) -> int:
        """候选图片数量."""
        return len(self.images)

    def urls(self) -> List[ImageSource]:
        """按顺序返回所有图片句柄."""
        return [image.url for image in self.images]


def are_layers_ready(layers: Sequence[Layer]) -> bool:
    """检查图层是否可以生成.

    至少有一个图层，且每个图层至少有一张图片。
    """
    return bool(layers) and all(not layer.is_empty for layer in layers)


def has_selected_images(layers: Sequence[Layer]) -> bool:
    """检查是否有任何图层中存在被选中的图片."""
    return any(image.is_selected for layer in layers for image in layer.images)
