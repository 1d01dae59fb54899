"""单个翻译单元的全局变量使用分析。

分析分两遍进行：第一遍收集全部函数区间与全局变量声明，第二遍再解析引用。
这样引用的归属不依赖声明在遍历中出现的先后顺序。每个翻译单元都应创建新的
:class:`GlobalUsageAnalysis`，状态不会在多次分析之间共享。
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Protocol, Union

from .global_registry import GlobalRegistry
from .global_report import GlobalUsageFinding, ReportGenerator
from .location_resolver import LocationResolver
from .model import FunctionDeclaration, ReferenceEvent, VariableDeclaration
from .reference_aggregator import ReferenceAggregator
from .span_index import SpanIndex, SpanPolicy


logger = logging.getLogger(__name__)

Declaration = Union[FunctionDeclaration, VariableDeclaration]


class FrontEnd(Protocol):
    """分析所需的前端能力：声明枚举与引用枚举。"""

    def declarations(self) -> Iterable[Declaration]:
        ...

    def references(self) -> Iterable[ReferenceEvent]:
        ...


class GlobalUsageAnalysis:
    def __init__(self, policy: SpanPolicy = SpanPolicy.INNERMOST):
        self.spans = SpanIndex(policy)
        self.registry = GlobalRegistry()
        self.resolver = LocationResolver(self.spans)
        self.aggregator = ReferenceAggregator(self.registry, self.resolver)
        self.reporter = ReportGenerator(self.registry)

    def add_declaration(self, declaration: Declaration) -> None:
        if isinstance(declaration, FunctionDeclaration):
            self.spans.record_declaration(declaration)
        elif isinstance(declaration, VariableDeclaration):
            self.registry.consider(declaration)
        else:
            raise TypeError(f"未知的声明类型: {type(declaration).__name__}")

    def add_reference(self, event: ReferenceEvent) -> None:
        self.aggregator.on_reference(event)

    def run(self, frontend: FrontEnd) -> List[GlobalUsageFinding]:
        for declaration in frontend.declarations():
            self.add_declaration(declaration)
        logger.debug("收集到 %d 个函数、%d 个全局变量", len(self.spans), len(self.registry))

        for event in frontend.references():
            self.add_reference(event)
        if self.aggregator.dropped:
            logger.debug("%d 个引用位于函数之外，已忽略", self.aggregator.dropped)

        return self.reporter.generate()


__all__ = ["Declaration", "FrontEnd", "GlobalUsageAnalysis"]
