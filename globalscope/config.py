"""后端配置模块。

提供 Analyzer 运行时需要的可配置项，例如 clang 编译参数、头文件判定规则、
函数区间的裁决策略等。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from .analyzer.span_index import SpanPolicy


@dataclass(slots=True)
class AnalyzerConfig:
    """分析器运行配置。"""

    compile_args: List[str] = field(default_factory=lambda: ["-std=c11"])
    header_suffixes: Tuple[str, ...] = (".h", ".hpp")
    span_policy: SpanPolicy = SpanPolicy.INNERMOST
    # lambda 是否作为独立函数单元参与归属
    closures_as_functions: bool = False
    ignore_function_statics: bool = False
    enable_suggestions: bool = True
    stop_on_error: bool = False
    allow_parse_errors: bool = False


DEFAULT_CONFIG = AnalyzerConfig()

__all__ = ["AnalyzerConfig", "DEFAULT_CONFIG"]
