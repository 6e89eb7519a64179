from __future__ import annotations

import argparse
import sys
from pathlib import Path

from birch.config import load_settings
from birch.errors import ExecutionError, ParseError
from birch.parser import parse_program
from birch.render import render_program
from birch.schemas import ErrorKind, RunReport
from birch.vm import Machine

EXIT_PARSE_ERROR = 2
EXIT_EXEC_ERROR = 3


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not an integer: {value}") from e
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0: {value}")
    return n


def _read_source(args: argparse.Namespace) -> str:
    if getattr(args, "expr", None) is not None:
        return args.expr
    if args.path is None:
        raise SystemExit("birch: a PATH or --expr is required")
    try:
        if args.path == "-":
            return sys.stdin.read()
        p = Path(args.path)
        if not p.exists():
            raise SystemExit(f"birch: path not found: {args.path}")
        return p.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SystemExit(f"birch: source is not valid UTF-8: {args.path}") from e


def _cmd_run(args: argparse.Namespace) -> int:
    try:
        settings = load_settings()
    except ValueError as e:
        raise SystemExit(f"birch: {e}") from e
    trace = args.trace or settings.trace
    max_steps = args.max_steps if args.max_steps is not None else settings.max_steps
    src = _read_source(args)

    try:
        program = parse_program(src)
    except ParseError as e:
        if args.json:
            report = RunReport(ok=False, error=str(e), error_kind=ErrorKind.PARSE)
            print(report.model_dump_json(indent=2))
        else:
            print(f"parse error: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    # Trace lines would corrupt the JSON document on stdout.
    out = (lambda s: print(s, file=sys.stderr)) if args.json else None
    machine = Machine(program, trace=trace, max_steps=max_steps, out=out)
    try:
        result = machine.run()
    except ExecutionError as e:
        if args.json:
            report = RunReport(
                ok=False,
                error=str(e),
                error_kind=ErrorKind.EXECUTION,
                steps=machine.step,
                program=render_program(program),
            )
            print(report.model_dump_json(indent=2))
        else:
            print(f"execution error: {e}", file=sys.stderr)
        return EXIT_EXEC_ERROR

    if args.json:
        report = RunReport(
            ok=True, result=result, steps=machine.step, program=render_program(program)
        )
        print(report.model_dump_json(indent=2))
    else:
        print(result)
    return 0


def _cmd_fmt(args: argparse.Namespace) -> int:
    try:
        program = parse_program(_read_source(args))
    except ParseError as e:
        print(f"parse error: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR
    print(render_program(program))
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    try:
        parse_program(_read_source(args))
    except ParseError as e:
        print(f"parse error: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="birch")
    sub = parser.add_subparsers(dest="cmd", required=True)

    run_p = sub.add_parser("run", help="parse and execute a program")
    run_p.add_argument("path", nargs="?", default=None, help="source file, or - for stdin")
    run_p.add_argument("-e", "--expr", default=None, help="program source given inline")
    run_p.add_argument("--trace", action="store_true", help="print both stacks before each step")
    run_p.add_argument("--max-steps", type=_non_negative_int, default=None)
    run_p.add_argument("--json", action="store_true", help="print a JSON run report")

    fmt_p = sub.add_parser("fmt", help="print the canonical rendering of a program")
    fmt_p.add_argument("path", nargs="?", default=None)
    fmt_p.add_argument("-e", "--expr", default=None)

    check_p = sub.add_parser("check", help="parse only")
    check_p.add_argument("path", nargs="?", default=None)
    check_p.add_argument("-e", "--expr", default=None)

    args = parser.parse_args(argv)

    if args.cmd == "run":
        return _cmd_run(args)
    if args.cmd == "fmt":
        return _cmd_fmt(args)
    if args.cmd == "check":
        return _cmd_check(args)

    raise AssertionError(f"unhandled cmd: {args.cmd}")
