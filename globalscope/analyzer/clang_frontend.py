"""基于 clang.cindex 的前端：把 TranslationUnit 转换为声明事件与引用事件。"""

from __future__ import annotations

import logging
from typing import Hashable, Iterator, Optional, Tuple

from .global_usage import Declaration
from .model import FunctionDeclaration, ReferenceEvent, SourceLocation, VariableDeclaration
from .utils import (
    cursor_file,
    cursor_location,
    declaration_key,
    extent_lines,
    function_kinds,
    has_global_storage,
    is_function_scoped,
    is_header_location,
    iter_children,
    load_clang,
)


logger = logging.getLogger(__name__)


class ClangFrontEnd:
    """遍历 clang AST，向全局变量分析提供两类事件。

    头文件（按扩展名或系统头判断）中的声明仍会产生事件并带上 ``in_header``
    标记，但不会继续深入其子树。没有文件信息的节点照常深入。
    """

    def __init__(
        self,
        translation_unit: "clang.cindex.TranslationUnit",  # type: ignore[name-defined]
        header_suffixes: Tuple[str, ...] = (".h", ".hpp"),
        closures_as_functions: bool = False,
        ignore_function_statics: bool = False,
    ):
        self.translation_unit = translation_unit
        self.header_suffixes = tuple(header_suffixes)
        self.closures_as_functions = closures_as_functions
        self.ignore_function_statics = ignore_function_statics

    def declarations(self) -> Iterator[Declaration]:
        cindex = load_clang()
        kinds = function_kinds()

        for cursor, in_header in self._walk():
            # 没有源文件的隐式声明同样不参与分析
            in_header = in_header or cursor.location.file is None
            if cursor.kind in kinds:
                yield self._function_declaration(cursor, in_header)
            elif cursor.kind == cindex.CursorKind.LAMBDA_EXPR and self.closures_as_functions:
                yield self._lambda_declaration(cursor, in_header)
            elif cursor.kind == cindex.CursorKind.VAR_DECL:
                yield self._variable_declaration(cursor, in_header)

    def references(self) -> Iterator[ReferenceEvent]:
        cindex = load_clang()
        reference_kinds = (cindex.CursorKind.DECL_REF_EXPR, cindex.CursorKind.MEMBER_REF_EXPR)

        for cursor, in_header in self._walk():
            if in_header or cursor.kind not in reference_kinds:
                continue
            line = cursor.location.line or None
            yield ReferenceEvent(self._resolve_variable(cursor), line, cursor_file(cursor))

    def _walk(self) -> Iterator[tuple]:
        # 先序遍历，按源码顺序产出
        stack = list(reversed(list(iter_children(self.translation_unit.cursor))))
        while stack:
            current = stack.pop()
            in_header = is_header_location(current.location, self.header_suffixes)
            yield current, in_header
            if not in_header:
                stack.extend(reversed(list(iter_children(current))))

    def _function_declaration(self, cursor, in_header: bool) -> FunctionDeclaration:
        start_line, end_line = extent_lines(cursor)
        return FunctionDeclaration(
            identity=declaration_key(cursor),
            name=cursor.spelling,
            start_line=start_line,
            end_line=end_line,
            file=cursor_file(cursor),
            in_header=in_header,
        )

    def _lambda_declaration(self, cursor, in_header: bool) -> FunctionDeclaration:
        start_line, end_line = extent_lines(cursor)
        file = cursor_file(cursor)
        return FunctionDeclaration(
            identity=("lambda", str(file), cursor.location.line, cursor.location.column),
            name=f"<lambda@{cursor.location.line}>",
            start_line=start_line,
            end_line=end_line,
            file=file,
            in_header=in_header,
        )

    def _variable_declaration(self, cursor, in_header: bool) -> VariableDeclaration:
        cindex = load_clang()
        file_path, line, column = cursor_location(cursor)
        is_global = has_global_storage(cursor)
        if (
            is_global
            and self.ignore_function_statics
            and cursor.storage_class == cindex.StorageClass.STATIC
            and is_function_scoped(cursor)
        ):
            logger.debug("忽略函数内 static 变量 %s", cursor.spelling)
            is_global = False

        return VariableDeclaration(
            identity=declaration_key(cursor),
            name=cursor.spelling,
            location=SourceLocation(file_path, line, column),
            has_global_storage=is_global,
            in_header=in_header,
        )

    def _resolve_variable(self, cursor) -> Optional[Hashable]:
        """引用目标若为变量声明则返回其身份，否则返回 None。"""

        cindex = load_clang()
        referenced = cursor.referenced
        if referenced is None or referenced.kind != cindex.CursorKind.VAR_DECL:
            return None
        return declaration_key(referenced)


__all__ = ["ClangFrontEnd"]
