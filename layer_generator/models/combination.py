"""图层组合模型."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple

from layer_generator.utils.exceptions import ImageSource

# (图层名称, 图片句柄)
LayerPick = Tuple[str, ImageSource]


@dataclass(frozen=True)
class Combination:
    """每个图层选定一张图片的组合.

    条目顺序即合成堆叠顺序（第一个在最底层），与输入图层顺序一致。
    图片为空的图层不出现在组合中。

    Example:
        >>> combo = Combination.of([("Background", "bg.png"), ("Body", "body.png")])
        >>> combo.layer_names
        ('Background', 'Body')
    """

    entries: Tuple[LayerPick, ...] = ()

    @classmethod
    def of(cls, picks: Iterable[LayerPick]) -> "Combination":
        """从 (图层名称, 图片句柄) 序列创建组合."""
        return cls(tuple((name, url) for name, url in picks))

    def __iter__(self) -> Iterator[LayerPick]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        """组合是否为空."""
        return not self.entries

    @property
    def layer_names(self) -> Tuple[str, ...]:
        """按堆叠顺序返回图层名称."""
        return tuple(name for name, _ in self.entries)

    @property
    def urls(self) -> Tuple[ImageSource, ...]:
        """按堆叠顺序返回图片句柄."""
        return tuple(url for _, url in self.entries)

    def get(self, layer_name: str) -> Optional[ImageSource]:
        """获取指定图层选中的图片句柄."""
        for name, url in self.entries:
            if name == layer_name:
                return url
        return None

    def to_dict(self) -> Dict[str, ImageSource]:
        """转换为 {图层名称: 图片句柄} 字典（保持插入顺序）."""
        return dict(self.entries)
