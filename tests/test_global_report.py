# tests/test_global_report.py
"""
Tests for selecting sole-owner globals and emitting diagnostics.
"""

from pathlib import Path
from unittest.mock import MagicMock

from globalscope.analyzer.global_registry import GlobalRegistry
from globalscope.analyzer.global_report import (
    MESSAGE_TEMPLATE,
    GlobalUsageFinding,
    IssueCollector,
    ReportGenerator,
    emit_findings,
)
from globalscope.analyzer.model import FunctionRef, SourceLocation
from tests.conftest import MAIN


def _registry(**references):
    registry = GlobalRegistry()
    for line, (name, functions) in enumerate(references.items(), start=1):
        variable = registry.track(name, name, SourceLocation(MAIN, line, 5))
        for function in functions:
            variable.add_reference(FunctionRef(function, function.split("#")[0]))
    return registry


class TestReportGenerator:

    def test_single_owner_reported(self):
        findings = ReportGenerator(_registry(counter=["increment"])).generate()
        assert findings == [GlobalUsageFinding("counter", SourceLocation(MAIN, 1, 5), "increment")]

    def test_unreferenced_not_reported(self):
        assert ReportGenerator(_registry(x=[])).generate() == []

    def test_shared_not_reported(self):
        assert ReportGenerator(_registry(counter=["increment", "reset"])).generate() == []

    def test_same_named_overloads_not_merged(self):
        registry = _registry(g=["helper#int", "helper#double"])
        assert ReportGenerator(registry).generate() == []

    def test_sorted_by_declaration_location(self):
        registry = GlobalRegistry()
        for name, line in (("late", 9), ("early", 2), ("middle", 5)):
            registry.track(name, name, SourceLocation(MAIN, line, 5)).add_reference(FunctionRef("f", "f"))
        names = [f.variable for f in ReportGenerator(registry).generate()]
        assert names == ["early", "middle", "late"]


class TestEmission:

    def test_sink_called_once_per_finding(self):
        sink = MagicMock()
        findings = [
            GlobalUsageFinding("a", SourceLocation(MAIN, 1, 5), "f"),
            GlobalUsageFinding("b", SourceLocation(MAIN, 2, 5), "g"),
        ]
        assert emit_findings(findings, sink) == 2
        assert sink.call_count == 2
        sink.assert_any_call(SourceLocation(MAIN, 1, 5), MESSAGE_TEMPLATE, ("a", "f"))

    def test_issue_collector_renders_message(self):
        collector = IssueCollector()
        emit_findings([GlobalUsageFinding("counter", SourceLocation(MAIN, 1, 5), "increment")], collector)
        (issue,) = collector.issues
        assert issue.message == "Bad Implementation of Global Variable 'counter' Found in 'increment'"
        assert issue.category == "global-variable"
        assert issue.severity == "warning"
        assert (issue.file, issue.line, issue.column) == (MAIN, 1, 5)
        assert "increment" in issue.suggestion.title

    def test_issue_collector_without_suggestions(self):
        collector = IssueCollector(enable_suggestions=False)
        collector(SourceLocation(None, 3), MESSAGE_TEMPLATE, ("x", "f"))
        assert collector.issues[0].suggestion is None
        assert collector.issues[0].file == Path("<unknown>")
        assert collector.issues[0].format_compiler_style() == (
            "<unknown>:3: warning: Bad Implementation of Global Variable 'x' Found in 'f'"
        )
