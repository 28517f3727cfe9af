#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Symbol table for MacroCalc – a stack of lexical scopes mapping names to
slots, and a flat, append-only table of variable records indexed by slot.
"""

from typing import Dict, List


class SymbolError(Exception):
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


class VariableRecord:
    __slots__ = ("name", "value", "declared_at_line", "initialized")

    def __init__(self, name: str, declared_at_line: int):
        self.name = name
        self.value = 0.0
        self.declared_at_line = declared_at_line
        self.initialized = False

    def __repr__(self):
        state = self.value if self.initialized else "<uninitialized>"
        return f"VariableRecord({self.name!r}, {state}, line={self.declared_at_line})"


class SymbolTable:
    """Scope stack used by the parser, value storage used by the interpreter.

    Slots handed out by `declare` are never reused or renumbered, so the
    interpreter can read and write a variable without looking its name up
    again.
    """

    def __init__(self):
        self.scopes: List[Dict[str, int]] = [{}]
        self.variables: List[VariableRecord] = []

    def __len__(self) -> int:
        return len(self.variables)

    @property
    def depth(self) -> int:
        return len(self.scopes)

    def push_scope(self) -> None:
        self.scopes.append({})

    def pop_scope(self) -> None:
        if not self.scopes:
            raise SymbolError("tried to pop nonexistent scope")
        if len(self.scopes) == 1:
            raise SymbolError("tried to pop outermost scope")
        self.scopes.pop()

    def declare(self, name: str, line: int = 0, col: int = 0) -> int:
        """Add `name` to the innermost scope and return its new slot."""
        scope = self.scopes[-1]
        if name in scope:
            first = self.variables[scope[name]].declared_at_line
            raise SymbolError(
                f"redeclaration of variable `{name}` (first declared on line {first})",
                line,
                col,
            )
        slot = len(self.variables)
        self.variables.append(VariableRecord(name, line))
        scope[name] = slot
        return slot

    def resolve(self, name: str, line: int = 0, col: int = 0) -> int:
        """Return the slot of the nearest visible declaration of `name`."""
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        raise SymbolError(f"use of undeclared variable `{name}`", line, col)

    def read(self, slot: int, line: int = 0, col: int = 0) -> float:
        record = self.variables[slot]
        if not record.initialized:
            raise SymbolError(
                f"use of uninitialized variable `{record.name}`", line, col
            )
        return record.value

    def write(self, slot: int, value: float) -> None:
        record = self.variables[slot]
        record.value = value
        record.initialized = True
