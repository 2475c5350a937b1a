"""组合模型单元测试."""

from __future__ import annotations

from layer_generator.models.combination import Combination


class TestCombination:
    """测试组合."""

    def test_preserves_order(self) -> None:
        """测试保持插入顺序（而非按名称排序）."""
        combo = Combination.of([("Zeta", "z.png"), ("Alpha", "a.png")])

        assert combo.layer_names == ("Zeta", "Alpha")
        assert combo.urls == ("z.png", "a.png")
        assert list(combo) == [("Zeta", "z.png"), ("Alpha", "a.png")]
        assert list(combo.to_dict()) == ["Zeta", "Alpha"]

    def test_get(self) -> None:
        """测试按图层名称获取."""
        combo = Combination.of([("A", "a.png")])
        assert combo.get("A") == "a.png"
        assert combo.get("B") is None

    def test_empty(self) -> None:
        """测试空组合."""
        combo = Combination()
        assert combo.is_empty
        assert len(combo) == 0

    def test_equality_and_hash(self) -> None:
        """测试相等性和哈希."""
        first = Combination.of([("A", "a.png"), ("B", "b.png")])
        second = Combination.of(iter([("A", "a.png"), ("B", "b.png")]))
        assert first == second
        assert len({first, second}) == 1
