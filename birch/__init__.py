from __future__ import annotations

from birch.api import parse_source, run_source
from birch.ast import Command, IntLit, Opcode, Program, Quotation
from birch.errors import BirchError, ExecutionError, ParseError
from birch.parser import parse_program
from birch.render import render_program
from birch.vm import Machine, exec_program

__version__ = "0.1.0"

__all__ = [
    "BirchError",
    "Command",
    "ExecutionError",
    "IntLit",
    "Machine",
    "Opcode",
    "ParseError",
    "Program",
    "Quotation",
    "exec_program",
    "parse_program",
    "parse_source",
    "render_program",
    "run_source",
]
