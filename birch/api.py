from __future__ import annotations

from collections.abc import Callable

from birch.ast import Program
from birch.parser import parse_program
from birch.vm import exec_program


def parse_source(*, src: str) -> Program:
    return parse_program(src)


def run_source(
    *,
    src: str,
    trace: bool = False,
    max_steps: int | None = None,
    out: Callable[[str], object] | None = None,
) -> int:
    program = parse_source(src=src)
    return exec_program(program, trace, max_steps=max_steps, out=out)
