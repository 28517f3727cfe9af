#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
MacroCalc lexer – converts script text into a stream of tokens.
Handles comments, decimal numbers, raw string literals and error reporting.
"""

from enum import IntEnum, auto
from typing import Generator, Optional


class TokenType(IntEnum):
    """All token kinds produced by the lexer."""

    IDENT = auto()
    NUMBER = auto()
    STRING = auto()
    KEYWORD = auto()
    OPERATOR = auto()
    DELIMITER = auto()
    EOF = auto()


class Token:
    """A single token with source location."""

    __slots__ = ("type", "value", "line", "col", "raw")

    def __init__(
        self,
        type: TokenType,
        value: str,
        line: int,
        col: int,
        raw: Optional[str] = None,
    ):
        self.type = type
        self.value = value  # string tokens: text between the quotes
        self.line = line  # 1‑based line number
        self.col = col  # 1‑based column of the first character
        self.raw = raw if raw is not None else value  # original source text

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.col})"


class LexerError(Exception):
    """Raised when the lexer encounters an invalid character or malformed literal."""

    def __init__(self, message: str, line: int, col: int, source_line: str = ""):
        self.message = message
        self.line = line
        self.col = col
        self.source_line = source_line
        super().__init__(self._format())

    def _format(self) -> str:
        snippet = self.source_line.strip()
        pointer = " " * (self.col - 1) + "^"
        return f"{self.line}:{self.col}: error: {self.message}\n{snippet}\n{pointer}"


class Lexer:
    """MacroCalc lexer. Produces tokens via the tokenize() generator."""

    KEYWORDS = {
        "else",
        "if",
        "print",
        "var",
        "while",
    }

    OPERATORS = {
        # single char
        "+",
        "-",
        "*",
        "/",
        "%",
        "=",
        "<",
        ">",
        "!",
        # multi‑char
        "**",
        "&&",
        "||",
        "==",
        "!=",
        "<=",
        ">=",
    }
    OPERATORS_SORTED = sorted(OPERATORS, key=len, reverse=True)

    DELIMITERS = {"(", ")", "{", "}", ";"}

    WHITESPACE = {" ", "\t", "\r", "\n"}

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename
        self.pos = 0  # current character index
        self.line = 1  # current line (1‑based)
        self.col = 1  # current column (1‑based)
        self.len = len(source)

    def _current(self) -> Optional[str]:
        """Return the current character or None if at EOF."""
        if self.pos >= self.len:
            return None
        return self.source[self.pos]

    def _advance(self, n: int = 1) -> None:
        """Advance the position by n characters, updating line/col."""
        for _ in range(n):
            if self.pos >= self.len:
                return
            ch = self.source[self.pos]
            self.pos += 1
            if ch == "\n":
                self.line += 1
                self.col = 1
            else:
                self.col += 1

    def _peek(self, offset: int = 1) -> Optional[str]:
        """Look ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos >= self.len:
            return None
        return self.source[peek_pos]

    def _get_source_line(self, line_no: Optional[int] = None) -> str:
        """Return the source line at the given line number (or current line)."""
        if line_no is None:
            line_no = self.line
        lines = self.source.splitlines()
        if 1 <= line_no <= len(lines):
            return lines[line_no - 1]
        return ""

    def _skip_whitespace(self) -> None:
        while (ch := self._current()) is not None and ch in self.WHITESPACE:
            self._advance()

    def _skip_line_comment(self) -> None:
        """Skip from '#' or '//' to the end of the line."""
        while (ch := self._current()) is not None and ch != "\n":
            self._advance()

    def _read_digits(self) -> None:
        while (ch := self._current()) is not None and ch.isdigit():
            self._advance()

    def _read_number(self) -> Token:
        """Read a decimal literal with optional fraction and exponent."""
        start_line, start_col = self.line, self.col
        start_pos = self.pos

        self._read_digits()
        if self._current() == "." and self._peek() and self._peek().isdigit():
            self._advance()  # consume '.'
            self._read_digits()
        if (ch := self._current()) is not None and ch in "eE":
            self._advance()
            if (ch := self._current()) is not None and ch in "+-":
                self._advance()
            if (ch := self._current()) is None or not ch.isdigit():
                raise LexerError(
                    "Expected exponent digits",
                    self.line,
                    self.col,
                    self._get_source_line(),
                )
            self._read_digits()
        if (ch := self._current()) is not None and (ch.isalpha() or ch == "_"):
            raise LexerError(
                f"Invalid character '{ch}' in number literal",
                self.line,
                self.col,
                self._get_source_line(),
            )
        value = self.source[start_pos : self.pos]
        return Token(TokenType.NUMBER, value, start_line, start_col)

    def _read_string(self) -> Token:
        """Read a double-quoted string literal; escapes are kept undecoded."""
        start_line, start_col = self.line, self.col
        start_pos = self.pos
        self._advance()  # skip opening quote

        while True:
            ch = self._current()
            if ch is None or ch == "\n":
                raise LexerError(
                    "Unterminated string literal",
                    start_line,
                    start_col,
                    self._get_source_line(start_line),
                )
            if ch == '"':
                self._advance()  # skip closing quote
                break
            if ch == "\\":
                # the escaped character never closes the string
                self._advance()
                if self._current() is None or self._current() == "\n":
                    raise LexerError(
                        "Unterminated escape sequence",
                        self.line,
                        self.col,
                        self._get_source_line(),
                    )
            self._advance()

        raw = self.source[start_pos : self.pos]
        return Token(TokenType.STRING, raw[1:-1], start_line, start_col, raw=raw)

    def _read_identifier_or_keyword(self) -> Token:
        """Read an identifier (or keyword if it matches)."""
        start_line, start_col = self.line, self.col
        start_pos = self.pos
        while (ch := self._current()) is not None and (ch.isalnum() or ch == "_"):
            self._advance()
        value = self.source[start_pos : self.pos]
        token_type = TokenType.KEYWORD if value in self.KEYWORDS else TokenType.IDENT
        return Token(token_type, value, start_line, start_col)

    def _read_operator(self) -> Optional[Token]:
        """Read an operator (multi‑character if possible)."""
        start_line, start_col = self.line, self.col
        for op in self.OPERATORS_SORTED:
            if self.source.startswith(op, self.pos):
                self._advance(len(op))
                return Token(TokenType.OPERATOR, op, start_line, start_col)
        return None

    def _read_delimiter(self) -> Optional[Token]:
        """Read a single‑character delimiter."""
        ch = self._current()
        if ch in self.DELIMITERS:
            start_line, start_col = self.line, self.col
            self._advance()
            return Token(TokenType.DELIMITER, ch, start_line, start_col)
        return None

    def tokenize(self) -> Generator[Token, None, None]:
        """Main lexer entry point: yields tokens until EOF."""
        while True:
            self._skip_whitespace()

            ch = self._current()
            if ch is None:
                break

            if ch == "#" or (ch == "/" and self._peek() == "/"):
                self._skip_line_comment()
                continue

            delim_token = self._read_delimiter()
            if delim_token is not None:
                yield delim_token
                continue

            # Numbers (including those starting with '.')
            if ch.isdigit() or (ch == "." and self._peek() and self._peek().isdigit()):
                yield self._read_number()
                continue

            if ch == '"':
                yield self._read_string()
                continue

            if ch.isalpha() or ch == "_":
                yield self._read_identifier_or_keyword()
                continue

            op_token = self._read_operator()
            if op_token is not None:
                yield op_token
                continue

            raise LexerError(
                f"Invalid character '{ch}'",
                self.line,
                self.col,
                self._get_source_line(),
            )

        yield Token(TokenType.EOF, "", self.line, self.col)
