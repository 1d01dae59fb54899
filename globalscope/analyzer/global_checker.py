"""全局变量作用域检查。

找出只被一个函数引用的全局变量，提示其可以改为该函数的局部变量。
"""

from __future__ import annotations

import logging
from typing import Iterable

from .base import Checker
from .clang_frontend import ClangFrontEnd
from .context import AnalysisContext
from .global_report import IssueCollector, emit_findings
from .global_usage import GlobalUsageAnalysis
from .report import Issue


logger = logging.getLogger(__name__)


class GlobalVariableChecker(Checker):
    name = "global-variable"

    def run(self, context: AnalysisContext) -> Iterable[Issue]:
        config = context.config
        frontend = ClangFrontEnd(
            context.translation_unit,
            header_suffixes=config.header_suffixes,
            closures_as_functions=config.closures_as_functions,
            ignore_function_statics=config.ignore_function_statics,
        )

        analysis = GlobalUsageAnalysis(config.span_policy)
        findings = analysis.run(frontend)

        sink = IssueCollector(enable_suggestions=config.enable_suggestions)
        emit_findings(findings, sink)
        logger.info("%s: %d 个全局变量，%d 条诊断", context.source, len(analysis.registry), len(findings))
        return sink.issues


__all__ = ["GlobalVariableChecker"]
