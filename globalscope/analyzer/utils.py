"""分析工具函数。"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Hashable, Iterable, Iterator, Optional


@lru_cache(maxsize=1)
def load_clang() -> "clang.cindex":  # type: ignore[name-defined]
    """加载 clang Python 绑定。"""

    try:
        import clang.cindex as cindex  # type: ignore
    except ImportError as exc:  # pragma: no cover - 依赖问题
        raise RuntimeError(
            "未找到 clang Python 绑定。请先安装 `pip install libclang` 并确保 libclang 可用。"
        ) from exc

    lib_path = os.getenv("LIBCLANG_PATH")
    if lib_path:
        cindex.Config.set_library_file(lib_path)

    # 尝试创建 Index 以验证库是否可用
    try:
        _ = cindex.Index.create()
    except Exception as exc:  # pragma: no cover - 依赖问题
        raise RuntimeError(
            "无法加载 libclang。请设置环境变量 LIBCLANG_PATH 指向 libclang 动态库。"
        ) from exc

    return cindex


@lru_cache(maxsize=1)
def function_kinds() -> tuple:
    cindex = load_clang()
    return (
        cindex.CursorKind.FUNCTION_DECL,
        cindex.CursorKind.CXX_METHOD,
        cindex.CursorKind.CONSTRUCTOR,
        cindex.CursorKind.DESTRUCTOR,
        cindex.CursorKind.CONVERSION_FUNCTION,
        cindex.CursorKind.FUNCTION_TEMPLATE,
    )


def iter_children(cursor: "clang.cindex.Cursor") -> Iterator["clang.cindex.Cursor"]:  # type: ignore[name-defined]
    for child in cursor.get_children():
        yield child


def cursor_location(cursor: "clang.cindex.Cursor") -> tuple[Path, int, Optional[int]]:  # type: ignore[name-defined]
    location = cursor.location
    return Path(location.file.name if location.file else "<unknown>"), location.line, location.column


def cursor_file(cursor: "clang.cindex.Cursor") -> Optional[Path]:  # type: ignore[name-defined]
    file = cursor.location.file
    return Path(file.name) if file else None


def extent_lines(cursor: "clang.cindex.Cursor") -> tuple[Optional[int], Optional[int]]:  # type: ignore[name-defined]
    """返回声明的起止行号；无法换算成行号的一端为 None。"""

    start, end = cursor.extent.start, cursor.extent.end
    start_line = start.line if start.file and start.line > 0 else None
    end_line = end.line if end.file and end.line > 0 else None
    return start_line, end_line


def is_header_location(location: "clang.cindex.SourceLocation", suffixes: Iterable[str]) -> bool:  # type: ignore[name-defined]
    if location.file is None:
        return False
    if location.is_in_system_header:
        return True
    return location.file.name.endswith(tuple(suffixes))


def declaration_key(cursor: "clang.cindex.Cursor") -> Hashable:  # type: ignore[name-defined]
    """声明的唯一身份：取规范声明的 USR 与位置，重复声明共享同一身份。"""

    canonical = cursor.canonical
    location = canonical.location
    return (
        canonical.get_usr() or canonical.spelling,
        location.file.name if location.file else None,
        location.line,
        location.column,
    )


def has_global_storage(cursor: "clang.cindex.Cursor") -> bool:  # type: ignore[name-defined]
    cindex = load_clang()
    if cursor.kind != cindex.CursorKind.VAR_DECL:
        return False

    storage = cursor.storage_class
    if storage in (cindex.StorageClass.STATIC, cindex.StorageClass.EXTERN, cindex.StorageClass.PRIVATEEXTERN):
        return True
    if storage in (cindex.StorageClass.AUTO, cindex.StorageClass.REGISTER):
        return False

    return not is_function_scoped(cursor)


def is_function_scoped(cursor: "clang.cindex.Cursor") -> bool:  # type: ignore[name-defined]
    cindex = load_clang()
    parent = cursor.semantic_parent
    if parent is None:
        return False
    return parent.kind in function_kinds() or parent.kind == cindex.CursorKind.LAMBDA_EXPR


__all__ = [
    "cursor_file",
    "cursor_location",
    "declaration_key",
    "extent_lines",
    "function_kinds",
    "has_global_storage",
    "is_function_scoped",
    "is_header_location",
    "iter_children",
    "load_clang",
]
