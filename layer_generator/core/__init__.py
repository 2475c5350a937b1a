"""核心业务逻辑模块."""

from layer_generator.core.batch_generator import (
    BatchGenerator,
    BatchProgressCallback,
    composite_all,
)
from layer_generator.core.combination_selector import (
    SelectionStrategy,
    iter_all_combinations,
    iter_combinations,
    pick_for_layer,
    resolve_strategy,
    select_all,
    select_combinations,
    select_random,
    select_using_picks,
)
from layer_generator.core.compositor import Compositor
from layer_generator.core.config_manager import (
    ConfigManager,
    get_config,
    reset_config_manager,
)

__all__ = [
    # 组合选择
    "SelectionStrategy",
    "iter_all_combinations",
    "iter_combinations",
    "pick_for_layer",
    "resolve_strategy",
    "select_all",
    "select_combinations",
    "select_random",
    "select_using_picks",
    # 合成
    "Compositor",
    "BatchGenerator",
    "BatchProgressCallback",
    "composite_all",
    # 配置
    "ConfigManager",
    "get_config",
    "reset_config_manager",
]
