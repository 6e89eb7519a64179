from __future__ import annotations

from collections.abc import Callable

from birch.ast import (
    INT64_MAX,
    INT64_MIN,
    Cmds,
    Command,
    DataElem,
    IntLit,
    Num,
    Opcode,
    Program,
    Quotation,
)
from birch.errors import ExecutionError
from birch.render import render_program, render_stack


def _trunc_div(n: int, m: int) -> int:
    q = abs(n) // abs(m)
    return q if (n < 0) == (m < 0) else -q


def _trunc_rem(n: int, m: int) -> int:
    return n - m * _trunc_div(n, m)


_ARITH: dict[Opcode, Callable[[int, int], int]] = {
    Opcode.ADD: lambda n, m: n + m,
    Opcode.SUB: lambda n, m: n - m,
    Opcode.MUL: lambda n, m: n * m,
    Opcode.DIV: _trunc_div,
    Opcode.REM: _trunc_rem,
}

_COMPARE: dict[Opcode, Callable[[int, int], bool]] = {
    Opcode.EQ: lambda n, m: n == m,
    Opcode.LT: lambda n, m: n < m,
    Opcode.GT: lambda n, m: n > m,
}


class Machine:
    """Two-stack evaluator for a single program run.

    Both stacks keep their top at the end of the list. The command stack starts
    as a copy of the program's stored sequence, so popping from the end yields
    commands in source order.
    """

    def __init__(
        self,
        program: Program,
        *,
        trace: bool = False,
        max_steps: int | None = None,
        out: Callable[[str], object] | None = None,
    ) -> None:
        if max_steps is not None and max_steps < 0:
            raise ValueError("max_steps must be >= 0")
        self.program = program
        self.trace = trace
        self.max_steps = max_steps
        self.out = out if out is not None else print
        self.cstk: list[Command] = list(program.cmds)
        self.dstk: list[DataElem] = []
        self.step = 0

    def run(self) -> int:
        if self.trace:
            self.out(f"prog: {render_program(self.program)}\n")
        while True:
            if self.trace:
                self.out(
                    f"step: {self.step}\ncstk: {render_stack(self.cstk)}\n"
                    f"dstk: {render_stack(self.dstk)}\n"
                )
            if not self.cstk:
                top = self._pop()
                if isinstance(top, Num):
                    return top.value
                raise self._error("final value is a quotation")
            if self.max_steps is not None and self.step >= self.max_steps:
                raise self._error(f"step limit of {self.max_steps} exceeded")
            self._dispatch(self.cstk.pop())
            self.step += 1

    # -- helpers ---------------------------------------------------------------

    def _error(self, message: str) -> ExecutionError:
        return ExecutionError(message, step=self.step)

    def _pop(self) -> DataElem:
        if not self.dstk:
            raise self._error("data stack underflow")
        return self.dstk.pop()

    def _pop_num(self) -> int:
        elem = self._pop()
        if not isinstance(elem, Num):
            raise self._error("expected a number, found a quotation")
        return elem.value

    def _push_num(self, value: int) -> None:
        if value < INT64_MIN or value > INT64_MAX:
            raise self._error(f"integer overflow: {value}")
        self.dstk.append(Num(value))

    # -- dispatch --------------------------------------------------------------

    def _dispatch(self, cmd: Command) -> None:
        if isinstance(cmd, IntLit):
            self.dstk.append(Num(cmd.value))
            return
        if isinstance(cmd, Quotation):
            self.dstk.append(Cmds(cmd.cmds))
            return
        if not isinstance(cmd, Opcode):
            raise TypeError(f"unknown command: {type(cmd).__name__}")

        if cmd in _ARITH:
            n = self._pop_num()
            m = self._pop_num()
            if m == 0 and cmd in (Opcode.DIV, Opcode.REM):
                raise self._error(f"{cmd.value} by zero")
            self._push_num(_ARITH[cmd](n, m))
        elif cmd in _COMPARE:
            n = self._pop_num()
            m = self._pop_num()
            self.dstk.append(Num(1 if _COMPARE[cmd](n, m) else 0))
        elif cmd is Opcode.IFZ:
            cond = self._pop()
            then_val = self._pop()
            else_val = self._pop()
            # A quotation condition counts as non-zero.
            if isinstance(cond, Num) and cond.value == 0:
                self.dstk.append(then_val)
            else:
                self.dstk.append(else_val)
        elif cmd is Opcode.DUP:
            self._dup(self._pop_num())
        elif cmd is Opcode.POP:
            self._pop()
        elif cmd is Opcode.SWAP:
            a = self._pop()
            b = self._pop()
            self.dstk.append(a)
            self.dstk.append(b)
        elif cmd is Opcode.REV:
            self.dstk.reverse()
        elif cmd is Opcode.EXEC:
            body = self._pop()
            if not isinstance(body, Cmds):
                raise self._error("exec expects a quotation")
            self.cstk.extend(body.cmds)
        else:
            raise AssertionError(f"unhandled opcode: {cmd}")

    def _dup(self, n: int) -> None:
        # n >= 0 counts down from the top (0 is the top); n < 0 counts up from
        # the bottom (-1 is the bottom).
        length = len(self.dstk)
        if n >= 0:
            if n + 1 > length:
                raise self._error(f"dup index {n} out of range")
            index = length - (n + 1)
        else:
            index = -n - 1
            if index >= length:
                raise self._error(f"dup index {n} out of range")
        # Elements are immutable, so sharing the instance is a copy.
        self.dstk.append(self.dstk[index])


def exec_program(
    program: Program,
    trace: bool = False,
    *,
    max_steps: int | None = None,
    out: Callable[[str], object] | None = None,
) -> int:
    return Machine(program, trace=trace, max_steps=max_steps, out=out).run()
