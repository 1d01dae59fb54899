"""分析器运行入口。"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from ..config import AnalyzerConfig, DEFAULT_CONFIG
from .ast_parser import ASTParser
from .base import Checker
from .context import AnalysisContext
from .global_checker import GlobalVariableChecker
from .report import Issue, Report


logger = logging.getLogger(__name__)


class AnalyzerRunner:
    def __init__(self, config: AnalyzerConfig | None = None, checkers: List[Checker] | None = None):
        self.config = config or DEFAULT_CONFIG
        self.parser = ASTParser(self.config.compile_args, allow_errors=self.config.allow_parse_errors)
        self.checkers: List[Checker] = checkers if checkers is not None else [GlobalVariableChecker()]

    def analyze(self, source: Path) -> Report:
        try:
            translation_unit = self.parser.parse(source)
        except Exception as exc:
            logger.warning("解析 %s 失败: %s", source, exc)
            issue = Issue(
                category="infrastructure",
                severity="error",
                message=f"解析源码时出错: {exc}",
                file=source,
                line=0,
                column=None,
                suggestion=None,
            )
            return Report(source, [issue])

        context = AnalysisContext(
            source=source,
            translation_unit=translation_unit,
            config=self.config,
        )

        issues: List[Issue] = []
        for checker in self.checkers:
            logger.debug("运行检查器 %s: %s", checker.name, source)
            issues.extend(checker.run(context))
            if self.config.stop_on_error and any(issue.severity == "error" for issue in issues):
                break

        issues.sort(key=_issue_sort_key)
        return Report(source, issues)


def _issue_sort_key(issue: Issue):
    severity_rank = {"error": 0, "warning": 1, "info": 2}
    return (
        severity_rank.get(issue.severity, 3),
        str(issue.file),
        issue.line,
        issue.column or 0,
    )


__all__ = ["AnalyzerRunner"]
