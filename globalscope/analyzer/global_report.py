"""全局变量使用报告：筛选只被单个函数使用的全局变量并输出诊断。"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Sequence

from .global_registry import GlobalRegistry
from .model import SourceLocation
from .report import Issue, Suggestion


MESSAGE_TEMPLATE = "Bad Implementation of Global Variable '{0}' Found in '{1}'"

DiagnosticSink = Callable[[SourceLocation, str, Sequence[str]], None]


@dataclass(frozen=True, slots=True)
class GlobalUsageFinding:
    variable: str
    location: SourceLocation
    function: str


class ReportGenerator:
    def __init__(self, registry: GlobalRegistry):
        self.registry = registry

    def generate(self) -> List[GlobalUsageFinding]:
        findings: List[GlobalUsageFinding] = []
        for variable in self.registry.all():
            # 0 个引用函数：可能根本未使用，不属于本检查
            if len(variable.referencing_functions) != 1:
                continue
            (owner,) = variable.referencing_functions
            findings.append(GlobalUsageFinding(variable.name, variable.location, owner.name))
        findings.sort(key=lambda f: (f.location.sort_key(), f.variable))
        return findings


def emit_findings(findings: Sequence[GlobalUsageFinding], sink: DiagnosticSink) -> int:
    for finding in findings:
        sink(finding.location, MESSAGE_TEMPLATE, (finding.variable, finding.function))
    return len(findings)


class IssueCollector:
    """把诊断渲染为 :class:`Issue` 的 sink。"""

    category = "global-variable"
    severity = "warning"

    def __init__(self, enable_suggestions: bool = True):
        self.enable_suggestions = enable_suggestions
        self.issues: List[Issue] = []

    def __call__(self, location: SourceLocation, template: str, args: Sequence[str]) -> None:
        suggestion = None
        if self.enable_suggestions and len(args) >= 2:
            suggestion = Suggestion(
                title=f"将 `{args[0]}` 移入函数 `{args[1]}` 内部",
                detail="改为局部变量；如需跨调用保留取值，可声明为函数内的 static 变量。",
            )
        self.issues.append(
            Issue(
                category=self.category,
                severity=self.severity,
                message=template.format(*args),
                file=location.file or Path("<unknown>"),
                line=location.line,
                column=location.column,
                suggestion=suggestion,
            )
        )


__all__ = [
    "DiagnosticSink",
    "GlobalUsageFinding",
    "IssueCollector",
    "MESSAGE_TEMPLATE",
    "ReportGenerator",
    "emit_findings",
]
