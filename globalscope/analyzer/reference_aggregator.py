"""把引用事件归并到全局变量的引用函数集合。"""

from __future__ import annotations

import logging
from typing import Optional

from .global_registry import GlobalRegistry
from .location_resolver import LocationResolver
from .model import FunctionRef, ReferenceEvent


logger = logging.getLogger(__name__)


class ReferenceAggregator:
    def __init__(self, registry: GlobalRegistry, resolver: LocationResolver):
        self.registry = registry
        self.resolver = resolver
        self.dropped = 0

    def on_reference(self, event: ReferenceEvent) -> Optional[FunctionRef]:
        """处理一次引用，返回被记入的函数；未记入时返回 None。"""

        if event.target is None or event.line is None:
            return None

        variable = self.registry.get(event.target)
        if variable is None:
            return None

        owner = self.resolver.resolve_owner(event.line, event.file)
        if owner is None:
            # 例如全局初始化表达式中的引用
            logger.debug("%s 在第 %d 行的引用不属于任何函数", variable.name, event.line)
            self.dropped += 1
            return None

        variable.add_reference(owner)
        return owner


__all__ = ["ReferenceAggregator"]
