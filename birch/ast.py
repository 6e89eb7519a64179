from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class Opcode(str, Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    REM = "rem"
    EQ = "eq"
    LT = "lt"
    GT = "gt"
    IFZ = "ifz"
    DUP = "dup"
    POP = "pop"
    SWAP = "swap"
    REV = "rev"
    EXEC = "exec"

    @classmethod
    def from_keyword(cls, raw: str) -> "Opcode | None":
        try:
            return Opcode(raw)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class IntLit:
    value: int


@dataclass(frozen=True, slots=True, eq=False)
class Quotation:
    cmds: tuple[Command, ...]  # next-to-run last
    _hash: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Children are built first, so their hashes are already cached.
        object.__setattr__(self, "_hash", hash((Quotation, self.cmds)))

    @classmethod
    def from_commands(cls, cmds: Iterable[Command]) -> "Quotation":
        return cls(tuple(reversed(tuple(cmds))))

    @property
    def commands(self) -> tuple[Command, ...]:
        """Body in the order it was written."""
        return tuple(reversed(self.cmds))

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quotation):
            return NotImplemented
        return same_commands(self.cmds, other.cmds)


def same_commands(a: tuple[Command, ...], b: tuple[Command, ...]) -> bool:
    """Structural equality of two command sequences, without recursion."""
    pending = [(a, b)]
    while pending:
        xs, ys = pending.pop()
        if len(xs) != len(ys):
            return False
        for x, y in zip(xs, ys):
            if isinstance(x, Quotation) and isinstance(y, Quotation):
                if x is y:
                    continue
                if x._hash != y._hash:
                    return False
                pending.append((x.cmds, y.cmds))
            elif x != y:
                return False
    return True


Command = Union[IntLit, Opcode, Quotation]


@dataclass(frozen=True, slots=True)
class Num:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Cmds:
    cmds: tuple[Command, ...]  # same storage order as Quotation.cmds

    def __str__(self) -> str:
        from birch.render import render_stack

        return render_stack((self,))


DataElem = Union[Num, Cmds]


@dataclass(frozen=True, slots=True)
class Program:
    """A parsed program.

    ``cmds`` holds the commands in reverse source order: the first command
    written is the last element, so execution always pops from the end.
    Every nested ``Quotation`` follows the same convention.
    """

    cmds: tuple[Command, ...]

    @classmethod
    def from_commands(cls, cmds: Iterable[Command]) -> "Program":
        return cls(tuple(reversed(tuple(cmds))))

    @property
    def commands(self) -> tuple[Command, ...]:
        return tuple(reversed(self.cmds))

    def exec(self, trace: bool = False) -> int:
        from birch.vm import exec_program

        return exec_program(self, trace)

    def __str__(self) -> str:
        from birch.render import render_program

        return render_program(self)
