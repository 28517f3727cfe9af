#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
MacroCalc interpreter – walks the AST depth-first and executes it against
the symbol table. Expressions yield a float, statements yield None.
"""

import math
import sys
from typing import Optional, TextIO

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
from src.symbols import SymbolTable


class EvalError(Exception):
    """Raised when a program fails while running."""

    def __init__(self, message: str, line: int = 0, col: int = 0):
        self.message = message
        self.line = line
        self.col = col
        super().__init__(self._format())

    def _format(self) -> str:
        return (
            f"{self.line}:{self.col}: error: {self.message}"
            if self.line
            else f"error: {self.message}"
        )


def format_number(value: float) -> str:
    """Format like a C++ ostream in its default state (6 significant digits)."""
    return f"{value:g}"


def power(base: float, exponent: float) -> float:
    """math.pow, except overflow and poles give inf/nan the way C's pow() does."""
    odd = exponent.is_integer() and exponent % 2 == 1
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return -math.inf if base < 0 and odd else math.inf
    except ValueError:
        if base == 0:
            # pole: only an odd exponent keeps the sign of zero
            return math.copysign(math.inf, base) if odd else math.inf
        return math.nan


class Interpreter:
    """Tree-walking evaluator. Scopes were resolved by the parser, so running
    a Scope node only runs its children."""

    def __init__(self, symbols: SymbolTable, out: Optional[TextIO] = None):
        self.symbols = symbols
        self.out = out if out is not None else sys.stdout

    def execute(self, program: Node) -> None:
        self.run(program)

    def run(self, node: Node) -> Optional[float]:
        method = getattr(self, f"run_{type(node).__name__}", None)
        if method is None:
            raise EvalError(
                f"cannot run node of type {type(node).__name__}", node.line, node.col
            )
        return method(node)

    def run_expect(self, node: Node) -> float:
        """Run `node` and insist that it produced a value."""
        result = self.run(node)
        if result is None:
            raise EvalError(
                f"{type(node).__name__} did not produce a value", node.line, node.col
            )
        return result

    def run_Empty(self, node: Empty) -> None:
        return None

    def run_Scope(self, node: Scope) -> None:
        for stmt in node.body:
            self.run(stmt)

    def run_Print(self, node: Print) -> None:
        for item in node.items:
            if isinstance(item, String):
                self.out.write(item.text)
            else:
                self.out.write(format_number(self.run_expect(item)))
        self.out.write("\n")

    def run_Assign(self, node: Assign) -> float:
        value = self.run_expect(node.value)
        self.symbols.write(node.target.slot, value)
        return value

    def run_Identifier(self, node: Identifier) -> float:
        return self.symbols.read(node.slot, node.line, node.col)

    def run_Number(self, node: Number) -> float:
        return node.value

    def run_String(self, node: String) -> None:
        # only meaningful inside print; used as an expression it has no value
        return None

    def run_Conditional(self, node: Conditional) -> None:
        if self.run_expect(node.cond) != 0:
            self.run(node.then_branch)
        elif node.else_branch is not None:
            self.run(node.else_branch)

    def run_While(self, node: While) -> None:
        while self.run_expect(node.cond) != 0:
            self.run(node.body)

    def run_Operation(self, node: Operation) -> float:
        op = node.op
        left = self.run_expect(node.operands[0])
        if node.is_unary:
            if op == "!":
                return 1.0 if left == 0 else 0.0
            if op == "-":
                return -1 * left
            raise EvalError(f"unknown operator '{op}'", node.line, node.col)

        # the right operand must not run before short-circuiting is decided
        if op == "&&":
            if left == 0:
                return 0.0
            return 1.0 if self.run_expect(node.operands[1]) != 0 else 0.0
        if op == "||":
            if left != 0:
                return 1.0
            return 1.0 if self.run_expect(node.operands[1]) != 0 else 0.0

        right = self.run_expect(node.operands[1])
        if op == "**":
            return power(left, right)
        if op == "*":
            return left * right
        if op == "/":
            if right == 0:
                raise EvalError("division by zero", node.line, node.col)
            return left / right
        if op == "%":
            if not (math.isfinite(left) and math.isfinite(right)):
                raise EvalError("modulus of a non-finite value", node.line, node.col)
            dividend, divisor = int(left), int(right)
            if divisor == 0:
                raise EvalError("modulus by zero", node.line, node.col)
            # truncating remainder: the result takes the sign of the dividend
            remainder = abs(dividend) % abs(divisor)
            return float(-remainder if dividend < 0 else remainder)
        if op == "+":
            return left + right
        if op == "-":
            return left - right
        if op == "<":
            return float(left < right)
        if op == ">":
            return float(left > right)
        if op == "<=":
            return float(left <= right)
        if op == ">=":
            return float(left >= right)
        if op == "==":
            return float(left == right)
        if op == "!=":
            return float(left != right)
        raise EvalError(f"unknown operator '{op}'", node.line, node.col)
