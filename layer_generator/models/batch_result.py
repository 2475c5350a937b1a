"""批量合成结果模型."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from layer_generator.utils.exceptions import CompositeError


@dataclass(frozen=True)
class CompositeOutcome:
    """单个组合的合成结果.

    ``output`` 与 ``error`` 恰有一个不为 None。
    """

    index: int
    output: Optional[bytes] = None
    error: Optional[CompositeError] = None

    @property
    def ok(self) -> bool:
        """是否合成成功."""
        return self.error is None


@dataclass
class BatchResult:
    """批量合成结果.

    采用首次失败即中止的策略：失败的组合是 ``outcomes`` 的最后一项，
    之后的组合不会被尝试。

    Attributes:
        outcomes: 按序号排列的已尝试组合的结果
        total: 请求合成的组合总数
        cancelled: 是否在组合之间被取消
    """

    outcomes: List[CompositeOutcome] = field(default_factory=list)
    total: int = 0
    cancelled: bool = False

    @property
    def outputs(self) -> List[bytes]:
        """所有成功的输出（按序号排列）."""
        return [o.output for o in self.outcomes if o.output is not None]

    @property
    def failure(self) -> Optional[CompositeError]:
        """导致批次中止的错误."""
        for outcome in self.outcomes:
            if outcome.error is not None:
                return outcome.error
        return None

    @property
    def failed_index(self) -> Optional[int]:
        """失败组合的序号."""
        for outcome in self.outcomes:
            if outcome.error is not None:
                return outcome.index
        return None

    @property
    def completed(self) -> int:
        """成功合成的数量."""
        return len(self.outputs)

    @property
    def succeeded(self) -> bool:
        """全部组合都已成功合成."""
        return not self.cancelled and self.failure is None and self.completed == self.total
