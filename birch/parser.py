from __future__ import annotations

from birch.ast import Command, IntLit, Opcode, Program, Quotation
from birch.errors import ParseError
from birch.lexer import Token, tokenize


def parse_program(src: str) -> Program:
    top: list[Command] = []
    # One frame per open "[": the bracket token and its body in source order.
    open_quotes: list[tuple[Token, list[Command]]] = []

    def emit(cmd: Command) -> None:
        if open_quotes:
            open_quotes[-1][1].append(cmd)
        else:
            top.append(cmd)

    for tok in tokenize(src):
        if tok.kind == "INT":
            emit(IntLit(int(tok.text)))
        elif tok.kind == "LBRACKET":
            open_quotes.append((tok, []))
        elif tok.kind == "RBRACKET":
            if not open_quotes:
                raise ParseError("unmatched ']'", line=tok.line, col=tok.col)
            _, body = open_quotes.pop()
            emit(Quotation.from_commands(body))
        else:
            op = Opcode.from_keyword(tok.text)
            if op is None:
                raise ParseError(f"unknown token {tok.text!r}", line=tok.line, col=tok.col)
            emit(op)

    if open_quotes:
        opener, _ = open_quotes[-1]
        raise ParseError("unclosed '['", line=opener.line, col=opener.col)
    return Program.from_commands(top)
