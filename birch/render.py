from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from birch.ast import Cmds, Command, IntLit, Num, Opcode, Program, Quotation

# Marks the end of a quotation body on the work stack.
_CLOSE = object()


def render_program(program: Program) -> str:
    return render_stack(program.cmds)


def render_stack(items: Iterable[Any]) -> str:
    """Render a stored sequence last element first, space separated.

    Used for programs, quotation bodies and both runtime stacks, so a stack
    always shows its top on the left. Nesting is walked with an explicit work
    stack, so arbitrarily deep quotations render without recursion.
    """
    words: list[str] = []
    work: list[Any] = list(items)
    while work:
        x = work.pop()
        if x is _CLOSE:
            words.append("]")
        elif isinstance(x, (Quotation, Cmds)):
            if not x.cmds:
                words.append("[ ]")
            else:
                words.append("[")
                work.append(_CLOSE)
                work.extend(x.cmds)
        elif isinstance(x, Opcode):
            words.append(x.value)
        elif isinstance(x, (IntLit, Num)):
            words.append(str(x.value))
        else:
            raise TypeError(f"cannot render: {type(x).__name__}")
    return " ".join(words)


def render_command(cmd: Command) -> str:
    return render_stack((cmd,))
