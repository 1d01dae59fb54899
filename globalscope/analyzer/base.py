"""检查器基类。"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from .context import AnalysisContext
from .report import Issue


class Checker(ABC):
    """所有检查器的公共接口。

    ``run`` 每次调用都应只依赖传入的 ``context``，同一实例可依次分析多个文件。
    """

    name: str

    @abstractmethod
    def run(self, context: AnalysisContext) -> Iterable[Issue]:
        """对一个翻译单元执行检测。"""


__all__ = ["Checker"]
