"""批量生成器模块.

按顺序逐个合成组合，支持进度回调和组合之间的取消。

批次策略：遇到第一个合成失败即中止，返回已完成的输出和该失败，
之后的组合不再尝试。需要容错的调用方应单独重试失败的序号。
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from layer_generator.core.compositor import Compositor
from layer_generator.models.batch_result import BatchResult, CompositeOutcome
from layer_generator.models.combination import Combination
from layer_generator.models.generator_config import GeneratorConfig
from layer_generator.services.raster_backend import BaseRasterBackend
from layer_generator.utils.exceptions import CompositeError
from layer_generator.utils.logger import setup_logger

logger = setup_logger(__name__)

# 进度回调类型 (current, total, message)
BatchProgressCallback = Callable[[int, int, str], None]


class BatchGenerator:
    """批量生成器.

    Attributes:
        compositor: 图层合成器

    Example:
        >>> generator = BatchGenerator(PillowRasterBackend())
        >>> result = await generator.composite_all(combinations, config)
        >>> result.outputs
    """

    def __init__(self, backend: BaseRasterBackend) -> None:
        """初始化批量生成器.

        Args:
            backend: 栅格后端实例
        """
        self._compositor = Compositor(backend)
        self._is_cancelled = False
        self._is_running = False

    @property
    def compositor(self) -> Compositor:
        """获取合成器."""
        return self._compositor

    @property
    def is_running(self) -> bool:
        """是否正在生成."""
        return self._is_running

    @property
    def is_cancelled(self) -> bool:
        """是否已请求取消."""
        return self._is_cancelled

    def cancel(self) -> None:
        """请求取消.

        当前组合会完整合成，之后的组合不再开始。
        """
        if self._is_running:
            self._is_cancelled = True
            logger.info("批量生成已请求取消")

    async def composite_all(
        self,
        combinations: Sequence[Combination],
        config: GeneratorConfig,
        on_progress: Optional[BatchProgressCallback] = None,
    ) -> BatchResult:
        """逐个合成所有组合.

        Args:
            combinations: 组合列表
            config: 生成配置
            on_progress: 进度回调 (current, total, message)

        Returns:
            批量结果，包含已完成的输出、失败信息和取消标记

        Raises:
            RuntimeError: 同一生成器上已有批量正在运行
        """
        if self._is_running:
            raise RuntimeError("批量生成正在进行中，请为并发批次使用独立的生成器")

        total = len(combinations)
        result = BatchResult(total=total)
        self._is_cancelled = False
        self._is_running = True

        logger.info(f"开始批量合成，共 {total} 个组合")

        try:
            for index, combination in enumerate(combinations):
                if self._is_cancelled:
                    result.cancelled = True
                    logger.info(f"批量合成已取消，已完成 {result.completed}/{total}")
                    break

                if on_progress:
                    on_progress(index + 1, total, f"合成第 {index + 1} 张")

                try:
                    output = await self._compositor.composite(
                        combination, config, index=index
                    )
                except CompositeError as e:
                    result.outcomes.append(CompositeOutcome(index=index, error=e))
                    logger.error(f"批量合成中止 [{index + 1}/{total}]: {e}")
                    break

                result.outcomes.append(CompositeOutcome(index=index, output=output))
        finally:
            self._is_running = False

        if result.succeeded:
            logger.info(f"批量合成完成: {result.completed}/{total}")
        return result


# 便捷函数
async def composite_all(
    combinations: Sequence[Combination],
    config: GeneratorConfig,
    backend: BaseRasterBackend,
    on_progress: Optional[BatchProgressCallback] = None,
) -> BatchResult:
    """便捷的批量合成函数.

    Args:
        combinations: 组合列表
        config: 生成配置
        backend: 栅格后端
        on_progress: 进度回调

    Returns:
        批量结果
    """
    generator = BatchGenerator(backend)
    return await generator.composite_all(combinations, config, on_progress)
