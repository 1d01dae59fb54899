"""分析上下文。

每个源文件分析时新建一份，检查器不在上下文之外保留跨文件状态。
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..config import AnalyzerConfig


@dataclass(slots=True)
class AnalysisContext:
    source: Path
    translation_unit: "clang.cindex.TranslationUnit"  # type: ignore[name-defined]
    config: AnalyzerConfig


__all__ = ["AnalysisContext"]
