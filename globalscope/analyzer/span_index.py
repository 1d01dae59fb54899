"""函数源码行区间索引。"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .model import DeclIdentity, FunctionDeclaration, FunctionRef


logger = logging.getLogger(__name__)


class SpanPolicy(str, enum.Enum):
    """多个区间同时包含某一行时的裁决策略。"""

    INNERMOST = "innermost"
    FIRST_RECORDED = "first"


@dataclass(frozen=True, slots=True)
class Interval:
    start: int
    end: int
    file: Optional[Path]
    order: int

    @property
    def width(self) -> int:
        return self.end - self.start

    def contains(self, line: int, file: Optional[Path] = None) -> bool:
        if file is not None and self.file is not None and file != self.file:
            return False
        return self.start <= line <= self.end


@dataclass(slots=True)
class FunctionSpan:
    function: FunctionRef
    intervals: List[Interval] = field(default_factory=list)


class SpanIndex:
    """按函数身份保存 ``[start, end]`` 行区间，并支持按行查找所属函数。

    同一函数可以累积多个区间（原型 + 定义），不同函数可以同名。
    ``lookup`` 在存在多个候选时按 ``policy`` 做确定性裁决：

    * ``INNERMOST``: 包含该行的最小区间胜出，宽度相同时取先记录者；
    * ``FIRST_RECORDED``: 先记录的区间胜出，与遍历顺序相关。
    """

    def __init__(self, policy: SpanPolicy = SpanPolicy.INNERMOST):
        self.policy = SpanPolicy(policy)
        self._spans: Dict[DeclIdentity, FunctionSpan] = {}
        self._counter = 0

    def record(
        self,
        name: str,
        start_line: int,
        end_line: int,
        *,
        identity: DeclIdentity | None = None,
        file: Optional[Path] = None,
    ) -> bool:
        if start_line > end_line:
            logger.debug("忽略非法区间 %s [%d, %d]", name, start_line, end_line)
            return False

        key = name if identity is None else identity
        span = self._spans.get(key)
        if span is None:
            span = FunctionSpan(FunctionRef(key, name))
            self._spans[key] = span
        span.intervals.append(Interval(start_line, end_line, file, self._counter))
        self._counter += 1
        return True

    def record_declaration(self, declaration: FunctionDeclaration) -> bool:
        """按排除规则记录一个函数声明，返回是否写入索引。"""

        if declaration.in_header:
            return False
        if declaration.start_line is None or declaration.end_line is None:
            logger.debug("函数 %s 的位置无法解析，跳过", declaration.name)
            return False
        return self.record(
            declaration.name,
            declaration.start_line,
            declaration.end_line,
            identity=declaration.identity,
            file=declaration.file,
        )

    def owner_at(self, line: int, file: Optional[Path] = None) -> Optional[FunctionRef]:
        best: Optional[tuple] = None
        for span in self._spans.values():
            for interval in span.intervals:
                if not interval.contains(line, file):
                    continue
                if self.policy is SpanPolicy.INNERMOST:
                    rank = (interval.width, interval.order)
                else:
                    rank = (interval.order,)
                if best is None or rank < best[0]:
                    best = (rank, span.function)
        return best[1] if best else None

    def lookup(self, line: int, file: Optional[Path] = None) -> Optional[str]:
        owner = self.owner_at(line, file)
        return owner.name if owner else None

    def __len__(self) -> int:
        return len(self._spans)


__all__ = ["FunctionSpan", "Interval", "SpanIndex", "SpanPolicy"]
