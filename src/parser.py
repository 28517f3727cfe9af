#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
MacroCalc parser – recursive descent parser that consumes tokens from the
lexer and produces an AST. Names are declared and resolved against the
symbol table while parsing, so every Identifier node carries its slot.
"""

from typing import Iterable, List, Optional

from src.lexer import Token, TokenType
from src.macro_ast import (
    Assign,
    Conditional,
    Empty,
    Identifier,
    Node,
    Number,
    Operation,
    Print,
    Scope,
    String,
    While,
)
from src.string_lexer import PieceKind, StringLexer
from src.symbols import SymbolTable


class ParseError(Exception):
    """Raised when the parser encounters a syntax error."""

    def __init__(self, message: str, token: Optional[Token] = None):
        self.message = message
        self.token = token
        super().__init__(self._format())

    @property
    def line(self) -> int:
        return self.token.line if self.token else 0

    def _format(self) -> str:
        if self.token is None:
            return f"error: {self.message}"
        return f"{self.token.line}:{self.token.col}: error: {self.message}"


class UnexpectedEOFError(ParseError):
    """Raised when the token stream ends in the middle of a construct."""


def _describe(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "end of input"
    return f"'{token.raw}'"


class Parser:
    """Recursive descent parser for MacroCalc."""

    EQUALITY_OPS = ("==", "!=")
    RELATIONAL_OPS = ("<", ">", "<=", ">=")
    ADDITIVE_OPS = ("+", "-")
    MULTIPLICATIVE_OPS = ("*", "/", "%")

    def __init__(self, tokens: Iterable[Token], symbols: Optional[SymbolTable] = None):
        self.tokens: List[Token] = list(tokens)
        self.symbols = symbols if symbols is not None else SymbolTable()
        self.string_lexer = StringLexer()
        self.pos = 0

    # ---- token cursor -------------------------------------------------

    def at_end(self) -> bool:
        return (
            self.pos >= len(self.tokens)
            or self.tokens[self.pos].type == TokenType.EOF
        )

    def _last_token(self) -> Optional[Token]:
        return self.tokens[-1] if self.tokens else None

    def current(self) -> Token:
        """Return the current token; running off the end is an error."""
        if self.at_end():
            raise UnexpectedEOFError("unexpected end of input", self._last_token())
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        token = self.current()
        self.pos += 1
        return token

    def check(self, type: TokenType, *values: str) -> bool:
        """True if the current token has the given type (and one of the values)."""
        if self.at_end():
            return False
        token = self.tokens[self.pos]
        return token.type == type and (not values or token.value in values)

    def match(self, type: TokenType, *values: str) -> Optional[Token]:
        """Consume and return the current token if it matches, else None."""
        if self.check(type, *values):
            return self._advance()
        return None

    def expect(self, type: TokenType, *values: str) -> Token:
        """Consume a token of the given kind or raise a syntax error."""
        if self.check(type, *values):
            return self._advance()
        wanted = (
            " or ".join(f"'{v}'" for v in values) if values else type.name.lower()
        )
        if self.at_end():
            raise UnexpectedEOFError(
                f"unexpected end of input, expected {wanted}", self._last_token()
            )
        token = self.tokens[self.pos]
        raise ParseError(f"unexpected token {_describe(token)}, expected {wanted}", token)

    def _unexpected(self, expected: str) -> ParseError:
        token = self.current()
        return ParseError(f"unexpected token {_describe(token)}, expected {expected}", token)

    # ---- statements -----------------------------------------------------

    def parse_program(self) -> Scope:
        """Parse every statement into the implicit top-level scope."""
        body: List[Node] = []
        while not self.at_end():
            body.append(self.parse_statement())
        return Scope(body, line=1, col=1)

    def parse_statement(self) -> Node:
        token = self.current()
        if token.type == TokenType.DELIMITER and token.value == "{":
            return self.parse_scope()
        if token.type == TokenType.KEYWORD:
            if token.value == "var":
                return self.parse_declaration()
            if token.value == "print":
                return self.parse_print()
            if token.value == "if":
                return self.parse_if()
            if token.value == "while":
                return self.parse_while()
            raise self._unexpected("statement")
        if self._starts_expression():
            expr = self.parse_expression()
            self.expect(TokenType.DELIMITER, ";")
            return expr
        raise self._unexpected("statement")

    def parse_scope(self) -> Scope:
        open_token = self.expect(TokenType.DELIMITER, "{")
        body: List[Node] = []
        self.symbols.push_scope()
        while not self.check(TokenType.DELIMITER, "}"):
            body.append(self.parse_statement())
        self.expect(TokenType.DELIMITER, "}")
        self.symbols.pop_scope()
        return Scope(body, line=open_token.line, col=open_token.col)

    def parse_declaration(self) -> Node:
        """Parse 'var name [= expr] ;'."""
        self.expect(TokenType.KEYWORD, "var")
        name_token = self.expect(TokenType.IDENT)
        if self.match(TokenType.DELIMITER, ";"):
            self.symbols.declare(name_token.value, name_token.line, name_token.col)
            return Empty(line=name_token.line, col=name_token.col)
        self.expect(TokenType.OPERATOR, "=")
        value = self.parse_expression()
        self.expect(TokenType.DELIMITER, ";")
        # declared only after the initializer, so `var x = x;` fails to resolve
        slot = self.symbols.declare(name_token.value, name_token.line, name_token.col)
        target = Identifier(
            slot, name_token.value, line=name_token.line, col=name_token.col
        )
        return Assign(target, value, line=name_token.line, col=name_token.col)

    def parse_print(self) -> Print:
        """Parse 'print ( expr | "string" ) [;]'."""
        print_token = self.expect(TokenType.KEYWORD, "print")
        self.expect(TokenType.DELIMITER, "(")
        string_token = self.match(TokenType.STRING)
        if string_token is not None:
            items = self._string_items(string_token)
        else:
            items = [self.parse_expression()]
        self.expect(TokenType.DELIMITER, ")")
        self.match(TokenType.DELIMITER, ";")
        return Print(items, line=print_token.line, col=print_token.col)

    def _string_items(self, token: Token) -> List[Node]:
        items: List[Node] = []
        for piece in self.string_lexer.tokenize(token.value):
            if piece.kind == PieceKind.IDENTIFIER:
                slot = self.symbols.resolve(piece.text, token.line, token.col)
                items.append(
                    Identifier(slot, piece.text, line=token.line, col=token.col)
                )
            else:
                items.append(String(piece.text, line=token.line, col=token.col))
        if not items:
            # print("") still prints a line, so keep one (empty) item
            items.append(String("", line=token.line, col=token.col))
        return items

    def _parse_condition(self) -> Node:
        self.expect(TokenType.DELIMITER, "(")
        if self.check(TokenType.DELIMITER, ")"):
            raise ParseError(
                "expected condition body, found empty condition", self.current()
            )
        cond = self.parse_expression()
        self.expect(TokenType.DELIMITER, ")")
        return cond

    def parse_if(self) -> Conditional:
        if_token = self.expect(TokenType.KEYWORD, "if")
        cond = self._parse_condition()
        then_branch = self.parse_statement()
        else_branch = None
        if self.match(TokenType.KEYWORD, "else"):
            else_branch = self.parse_statement()
        return Conditional(
            cond, then_branch, else_branch, line=if_token.line, col=if_token.col
        )

    def parse_while(self) -> While:
        while_token = self.expect(TokenType.KEYWORD, "while")
        cond = self._parse_condition()
        body = self.parse_statement()
        return While(cond, body, line=while_token.line, col=while_token.col)

    # ---- expressions, lowest precedence first -------------------------

    def _starts_expression(self) -> bool:
        return (
            self.check(TokenType.NUMBER)
            or self.check(TokenType.IDENT)
            or self.check(TokenType.DELIMITER, "(")
            or self.check(TokenType.OPERATOR, "-", "!")
        )

    def parse_expression(self) -> Node:
        return self.parse_assign()

    def parse_assign(self) -> Node:
        lhs = self.parse_or()
        if self.check(TokenType.OPERATOR, "="):
            if not isinstance(lhs, Identifier):
                raise ParseError(
                    "assignment target is not an identifier", self.current()
                )
            self._advance()
            rhs = self.parse_assign()
            return Assign(lhs, rhs, line=lhs.line, col=lhs.col)
        return lhs

    def _parse_left_assoc(self, operand, ops) -> Node:
        lhs = operand()
        while (op_token := self.match(TokenType.OPERATOR, *ops)) is not None:
            rhs = operand()
            lhs = Operation(
                op_token.value, lhs, rhs, line=op_token.line, col=op_token.col
            )
        return lhs

    def _parse_single(self, operand, ops) -> Node:
        # comparisons don't chain: `a < b < c` is a syntax error
        lhs = operand()
        op_token = self.match(TokenType.OPERATOR, *ops)
        if op_token is None:
            return lhs
        rhs = operand()
        return Operation(op_token.value, lhs, rhs, line=op_token.line, col=op_token.col)

    def parse_or(self) -> Node:
        return self._parse_left_assoc(self.parse_and, ("||",))

    def parse_and(self) -> Node:
        return self._parse_left_assoc(self.parse_equality, ("&&",))

    def parse_equality(self) -> Node:
        return self._parse_single(self.parse_relational, self.EQUALITY_OPS)

    def parse_relational(self) -> Node:
        return self._parse_single(self.parse_additive, self.RELATIONAL_OPS)

    def parse_additive(self) -> Node:
        return self._parse_left_assoc(self.parse_multiplicative, self.ADDITIVE_OPS)

    def parse_multiplicative(self) -> Node:
        return self._parse_left_assoc(self.parse_power, self.MULTIPLICATIVE_OPS)

    def parse_power(self) -> Node:
        lhs = self.parse_unary()
        op_token = self.match(TokenType.OPERATOR, "**")
        if op_token is None:
            return lhs
        rhs = self.parse_power()
        return Operation("**", lhs, rhs, line=op_token.line, col=op_token.col)

    def parse_unary(self) -> Node:
        if (minus := self.match(TokenType.OPERATOR, "-")) is not None:
            # -x is -1 * x, with x parsed as a term: -2 ** 2 == (-2) ** 2
            operand = self.parse_term()
            return Operation(
                "*",
                Number(-1, line=minus.line, col=minus.col),
                operand,
                line=minus.line,
                col=minus.col,
            )
        if (bang := self.match(TokenType.OPERATOR, "!")) is not None:
            return Operation("!", self.parse_term(), line=bang.line, col=bang.col)
        return self.parse_term()

    def parse_term(self) -> Node:
        token = self.current()
        if token.type == TokenType.NUMBER:
            self._advance()
            try:
                value = float(token.value)
            except ValueError:
                raise ParseError(f"invalid number literal '{token.value}'", token)
            return Number(value, line=token.line, col=token.col)
        if token.type == TokenType.IDENT:
            self._advance()
            slot = self.symbols.resolve(token.value, token.line, token.col)
            return Identifier(slot, token.value, line=token.line, col=token.col)
        if token.type == TokenType.DELIMITER and token.value == "(":
            self._advance()
            expr = self.parse_expression()
            self.expect(TokenType.DELIMITER, ")")
            return expr
        raise self._unexpected("number, identifier or '('")
