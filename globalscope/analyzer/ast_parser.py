"""封装 clang AST 解析。"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from .utils import load_clang


logger = logging.getLogger(__name__)


class ParseError(RuntimeError):
    """源码无法生成可用的 AST。"""

    def __init__(self, source: Path, messages: List[str]):
        self.source = source
        self.messages = messages
        detail = "; ".join(messages) if messages else "libclang 未能加载翻译单元"
        super().__init__(f"{source}: {detail}")


class ASTParser:
    """为分析器提供 clang TranslationUnit。

    ``allow_errors`` 为 False 时，只要出现 error/fatal 级别的诊断就抛出
    :class:`ParseError`，不对残缺的 AST 做部分分析。
    """

    def __init__(self, compile_args: List[str], allow_errors: bool = False):
        self.compile_args = compile_args
        self.allow_errors = allow_errors
        self.cindex = load_clang()
        self.index = self.cindex.Index.create()

    def parse(self, source: Path):
        options = self.cindex.TranslationUnit.PARSE_DETAILED_PROCESSING_RECORD
        try:
            translation_unit = self.index.parse(str(source), args=self.compile_args, options=options)
        except self.cindex.TranslationUnitLoadError as exc:
            raise ParseError(source, [str(exc)]) from exc

        errors = [
            f"{diag.location.line}:{diag.location.column}: {diag.spelling}"
            for diag in translation_unit.diagnostics
            if diag.severity >= self.cindex.Diagnostic.Error
        ]
        for message in errors:
            logger.debug("%s: %s", source, message)
        if errors and not self.allow_errors:
            raise ParseError(source, errors)
        return translation_unit


__all__ = ["ASTParser", "ParseError"]
