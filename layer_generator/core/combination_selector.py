"""组合选择器模块.

根据图层和生成模式决定要合成哪些图层组合。所有函数都是纯函数，
不修改输入的图层数据，空图层按规则跳过而不报错。

Features:
    - 每层独立均匀随机抽取
    - 使用选中图片（无选中时回退到第一张）
    - 惰性穷举笛卡尔积，按上限截断
"""

from __future__ import annotations

import itertools
import random
from enum import Enum
from typing import Iterator, List, Optional, Sequence

from layer_generator.models.combination import Combination
from layer_generator.models.generator_config import GenerationMode, GeneratorConfig
from layer_generator.models.layer import Layer
from layer_generator.utils.exceptions import ImageSource
from layer_generator.utils.logger import setup_logger

logger = setup_logger(__name__)


class SelectionStrategy(str, Enum):
    """实际执行的选择策略."""

    RANDOM = "random"  # 重复独立随机抽取
    PICKS = "picks"  # 单个选中组合
    EXHAUSTIVE = "exhaustive"  # 穷举（受上限约束）


def pick_for_layer(layer: Layer) -> Optional[ImageSource]:
    """为单个图层挑选图片.

    优先使用第一张被选中的图片；没有选中时回退到第一张图片；
    图层为空时返回 None。
    """
    for image in layer.images:
        if image.is_selected:
            return image.url
    if layer.images:
        return layer.images[0].url
    return None


def select_random(
    layers: Sequence[Layer],
    rng: Optional[random.Random] = None,
) -> Combination:
    """每个非空图层独立地均匀随机抽取一张图片.

    Args:
        layers: 图层列表
        rng: 随机数生成器，默认使用 ``random`` 模块的全局实例

    Returns:
        随机组合
    """
    choice = rng.choice if rng is not None else random.choice
    return Combination.of(
        (layer.name, choice(layer.images).url)
        for layer in layers
        if layer.images
    )


def select_using_picks(layers: Sequence[Layer]) -> Combination:
    """按 :func:`pick_for_layer` 为每个图层挑选图片."""
    picks = []
    for layer in layers:
        url = pick_for_layer(layer)
        if url is not None:
            picks.append((layer.name, url))
    return Combination.of(picks)


def iter_all_combinations(layers: Sequence[Layer]) -> Iterator[Combination]:
    """惰性枚举所有非空图层的笛卡尔积.

    第一个图层变化最慢，最后一个图层变化最快；每个图层内按图片顺序。
    所有图层都为空时产出一个空组合。
    """
    active = [layer for layer in layers if layer.images]
    names = [layer.name for layer in active]
    for urls in itertools.product(*(layer.urls() for layer in active)):
        yield Combination(tuple(zip(names, urls)))


def select_all(layers: Sequence[Layer], limit: int) -> List[Combination]:
    """穷举组合，最多返回 ``limit`` 个.

    Args:
        layers: 图层列表
        limit: 最大组合数

    Returns:
        组合列表，数量为 min(limit, 笛卡尔积大小)
    """
    if limit <= 0:
        return []
    return list(itertools.islice(iter_all_combinations(layers), limit))


def resolve_strategy(
    mode: Optional[GenerationMode],
    config: GeneratorConfig,
) -> SelectionStrategy:
    """根据显式模式和配置确定选择策略.

    - SELECTED: 始终使用选中组合
    - RANDOM: 始终随机
    - ALL 或未指定: ``config.random_mode`` 为真时随机，否则穷举
    """
    if mode == GenerationMode.SELECTED:
        return SelectionStrategy.PICKS
    if mode == GenerationMode.RANDOM or config.random_mode:
        return SelectionStrategy.RANDOM
    return SelectionStrategy.EXHAUSTIVE


def iter_combinations(
    layers: Sequence[Layer],
    config: GeneratorConfig,
    mode: Optional[GenerationMode] = None,
    rng: Optional[random.Random] = None,
) -> Iterator[Combination]:
    """按模式惰性产出组合，数量不超过 ``config.max_to_generate``."""
    if mode is not None:
        mode = GenerationMode(mode)
    strategy = resolve_strategy(mode, config)
    logger.debug(
        f"选择策略: {strategy.value} (mode={mode.value if mode else None}, "
        f"random_mode={config.random_mode})"
    )

    if strategy == SelectionStrategy.PICKS:
        yield select_using_picks(layers)
    elif strategy == SelectionStrategy.RANDOM:
        # 各次抽取相互独立，允许重复
        for _ in range(config.max_to_generate):
            yield select_random(layers, rng)
    else:
        yield from itertools.islice(
            iter_all_combinations(layers), config.max_to_generate
        )


def select_combinations(
    layers: Sequence[Layer],
    config: GeneratorConfig,
    mode: Optional[GenerationMode] = None,
    rng: Optional[random.Random] = None,
) -> List[Combination]:
    """按模式选择要合成的组合.

    Args:
        layers: 图层列表（只读快照）
        config: 生成配置
        mode: 显式生成模式，None 时由 ``config.random_mode`` 决定
        rng: 随机数生成器

    Returns:
        组合列表

    Example:
        >>> combos = select_combinations(layers, GeneratorConfig(random_mode=False))
        >>> len(combos) <= 10
        True
    """
    combinations = list(iter_combinations(layers, config, mode, rng))
    logger.debug(f"已选择 {len(combinations)} 个组合")
    return combinations
