# tests/conftest.py
"""
Shared helpers and fixtures.

Event builders let the core analysis be tested without libclang; the
``analyze_source`` fixture parses real C/C++ snippets and is skipped when
libclang cannot be loaded.
"""

import textwrap
from pathlib import Path

import pytest

from globalscope.analyzer.model import (
    FunctionDeclaration,
    ReferenceEvent,
    SourceLocation,
    VariableDeclaration,
)


MAIN = Path("main.c")


def func(name, start, end, identity=None, file=MAIN, in_header=False):
    return FunctionDeclaration(
        identity=identity if identity is not None else ("fn", name, start),
        name=name,
        start_line=start,
        end_line=end,
        file=file,
        in_header=in_header,
    )


def var(name, line, identity=None, file=MAIN, global_storage=True, in_header=False):
    return VariableDeclaration(
        identity=identity if identity is not None else ("var", name),
        name=name,
        location=SourceLocation(file, line, 5),
        has_global_storage=global_storage,
        in_header=in_header,
    )


def ref(target, line, file=MAIN):
    return ReferenceEvent(target=target, line=line, file=file)


class FakeFrontEnd:
    """Replays prepared events; records how often each pass was requested."""

    def __init__(self, declarations, references):
        self._declarations = list(declarations)
        self._references = list(references)
        self.calls = []

    def declarations(self):
        self.calls.append("declarations")
        return iter(self._declarations)

    def references(self):
        self.calls.append("references")
        return iter(self._references)


@pytest.fixture(scope="session")
def cindex():
    pytest.importorskip("clang.cindex")
    from globalscope.analyzer.utils import load_clang

    try:
        return load_clang()
    except RuntimeError as exc:
        pytest.skip(str(exc))


@pytest.fixture
def write_source(tmp_path):
    def _write(name, code):
        path = tmp_path / name
        path.write_text(textwrap.dedent(code), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def analyze_source(cindex, write_source):
    from globalscope.analyzer.runner import AnalyzerRunner
    from globalscope.config import AnalyzerConfig

    def _analyze(code, name="main.c", **config_overrides):
        if name.endswith(".cpp") and "compile_args" not in config_overrides:
            config_overrides["compile_args"] = ["-std=c++17"]
        source = write_source(name, code)
        runner = AnalyzerRunner(AnalyzerConfig(**config_overrides))
        return runner.analyze(source)

    return _analyze
