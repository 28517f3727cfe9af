#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Splits the body of a print string into literal text, escape characters and
`{identifier}` interpolations.
"""

import re
from enum import IntEnum, auto
from typing import List


class PieceKind(IntEnum):
    LITERAL = auto()
    ESCAPE = auto()
    IDENTIFIER = auto()


class StringPiece:
    """One segment of a print string."""

    __slots__ = ("kind", "text")

    def __init__(self, kind: PieceKind, text: str):
        self.kind = kind
        self.text = text

    def __eq__(self, other):
        if not isinstance(other, StringPiece):
            return NotImplemented
        return self.kind == other.kind and self.text == other.text

    def __repr__(self):
        return f"StringPiece({self.kind.name}, {self.text!r})"


class StringLexer:
    """Tokenizer for the contents of a string literal (quotes already stripped)."""

    PATTERN = re.compile(
        r"(?P<ident>\{[A-Za-z_][A-Za-z0-9_]*\})"
        r"|(?P<escape>\\.)"
        r"|(?P<literal>[^{\\]+|[{\\])",
        re.DOTALL,
    )

    ESCAPES = {
        "n": "\n",
        "t": "\t",
        "r": "\r",
        "0": "\0",
    }

    def tokenize(self, text: str) -> List[StringPiece]:
        pieces: List[StringPiece] = []
        for match in self.PATTERN.finditer(text):
            kind = match.lastgroup
            lexeme = match.group()
            if kind == "ident":
                pieces.append(StringPiece(PieceKind.IDENTIFIER, lexeme[1:-1]))
            elif kind == "escape":
                char = lexeme[1]
                pieces.append(
                    StringPiece(PieceKind.ESCAPE, self.ESCAPES.get(char, char))
                )
            elif pieces and pieces[-1].kind == PieceKind.LITERAL:
                # merge a lone '{' or trailing '\' into the running literal
                pieces[-1].text += lexeme
            else:
                pieces.append(StringPiece(PieceKind.LITERAL, lexeme))
        return pieces
