"""前端与核心分析之间传递的数据结构。

核心算法只消费这里定义的事件，不直接依赖 clang，方便替换前端或在测试中
手工构造输入。
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Hashable, Optional


DeclIdentity = Hashable


@dataclass(frozen=True, slots=True)
class SourceLocation:
    file: Optional[Path]
    line: int
    column: Optional[int] = None

    def sort_key(self):
        return (str(self.file) if self.file else "", self.line, self.column or 0)

    def __str__(self) -> str:
        text = f"{self.file or '<unknown>'}:{self.line}"
        if self.column is not None:
            text += f":{self.column}"
        return text


@dataclass(frozen=True, slots=True)
class FunctionRef:
    """函数身份 + 展示名。同名重载拥有不同的 identity。"""

    identity: DeclIdentity
    name: str


@dataclass(frozen=True, slots=True)
class FunctionDeclaration:
    identity: DeclIdentity
    name: str
    start_line: Optional[int]
    end_line: Optional[int]
    file: Optional[Path] = None
    in_header: bool = False


@dataclass(frozen=True, slots=True)
class VariableDeclaration:
    identity: DeclIdentity
    name: str
    location: SourceLocation
    has_global_storage: bool
    in_header: bool = False


@dataclass(frozen=True, slots=True)
class ReferenceEvent:
    """一次标识符引用。target 为 None 表示前端无法解析其声明。"""

    target: Optional[DeclIdentity]
    line: Optional[int]
    file: Optional[Path] = None


__all__ = [
    "DeclIdentity",
    "FunctionDeclaration",
    "FunctionRef",
    "ReferenceEvent",
    "SourceLocation",
    "VariableDeclaration",
]
