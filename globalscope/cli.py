"""命令行接口。

对单个或多个 C/C++ 源文件执行全局变量作用域检查，并以人类可读、
编译器风格或 JSON 格式输出报告。
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, List

from .analyzer.runner import AnalyzerRunner
from .analyzer.span_index import SpanPolicy
from .config import AnalyzerConfig, DEFAULT_CONFIG


logger = logging.getLogger("globalscope")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="globalscope-lint",
        description="检测只被单个函数使用的全局变量",
    )
    parser.add_argument("sources", nargs="+", help="待分析的 C/C++ 源码文件")
    parser.add_argument(
        "--compile-arg",
        action="append",
        default=None,
        help="向 clang 传递额外的编译参数，可重复",
    )
    parser.add_argument(
        "--header-suffix",
        action="append",
        default=None,
        help="视为头文件的扩展名 (默认 .h 与 .hpp)，可重复",
    )
    parser.add_argument(
        "--span-policy",
        choices=[policy.value for policy in SpanPolicy],
        default=DEFAULT_CONFIG.span_policy.value,
        help="多个函数区间同时包含引用行时的裁决策略",
    )
    parser.add_argument(
        "--closures-as-functions",
        action="store_true",
        help="把 lambda 视为独立的函数单元",
    )
    parser.add_argument(
        "--ignore-function-statics",
        action="store_true",
        help="不检查函数内部声明的 static 变量",
    )
    parser.add_argument(
        "--allow-parse-errors",
        action="store_true",
        help="源码存在编译错误时仍继续分析",
    )
    output_format = parser.add_mutually_exclusive_group()
    output_format.add_argument(
        "--json",
        action="store_true",
        help="以 JSON 格式输出完整报告",
    )
    output_format.add_argument(
        "--compiler-style",
        action="store_true",
        help="以 file:line:col: warning: message 的形式输出",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="将结果写入指定文件 (默认输出到标准输出)",
    )
    parser.add_argument(
        "--stop-on-error",
        action="store_true",
        help="遇到首个错误时立即停止后续检查",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="输出日志 (-v 为 INFO，-vv 为 DEBUG)",
    )
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s", "%H:%M:%S"))
    logger.setLevel(level)
    logger.handlers[:] = [handler]


def _normalize_sources(sources: Iterable[str]) -> List[Path]:
    result: List[Path] = []
    for src in sources:
        path = Path(src).resolve()
        if not path.exists():
            raise FileNotFoundError(f"未找到源码文件: {path}")
        result.append(path)
    return result


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    compile_args = args.compile_arg if args.compile_arg is not None else DEFAULT_CONFIG.compile_args
    header_suffixes = args.header_suffix if args.header_suffix is not None else DEFAULT_CONFIG.header_suffixes
    config = AnalyzerConfig(
        compile_args=list(compile_args),
        header_suffixes=tuple(header_suffixes),
        span_policy=SpanPolicy(args.span_policy),
        closures_as_functions=args.closures_as_functions,
        ignore_function_statics=args.ignore_function_statics,
        enable_suggestions=True,
        stop_on_error=args.stop_on_error,
        allow_parse_errors=args.allow_parse_errors,
    )

    runner = AnalyzerRunner(config=config)
    sources = _normalize_sources(args.sources)

    reports = []
    stopped = False
    for src in sources:
        report = runner.analyze(src)
        reports.append(report)
        if config.stop_on_error and report.has_errors:
            logger.warning("%s 存在错误，停止分析后续文件", src)
            stopped = True
            break

    output = args.output.open("w", encoding="utf-8") if args.output else sys.stdout
    try:
        if args.json:
            json.dump([r.to_dict() for r in reports], output, ensure_ascii=False, indent=2)
            output.write("\n")
        elif args.compiler_style:
            for report in reports:
                if report.issues:
                    output.write(report.format_compiler_style())
                    output.write("\n")
        else:
            for report in reports:
                output.write(report.format_text())
                output.write("\n")
    finally:
        if args.output:
            output.close()

    return 1 if stopped else 0


if __name__ == "__main__":  # pragma: no cover - CLI 入口
    raise SystemExit(main())
