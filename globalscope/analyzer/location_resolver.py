"""根据引用所在行确定所属函数。"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .model import FunctionRef
from .span_index import SpanIndex


class LocationResolver:
    def __init__(self, spans: SpanIndex):
        self.spans = spans

    def resolve_owner(self, line: int, file: Optional[Path] = None) -> Optional[FunctionRef]:
        return self.spans.owner_at(line, file)


__all__ = ["LocationResolver"]
