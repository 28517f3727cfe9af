#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Abstract Syntax Tree (AST) node definitions for MacroCalc.
All nodes store source location (line, col) for error reporting.
Each node owns its children; nothing is shared between nodes.
"""

from typing import List, Optional

UNARY_OPERATORS = ("!", "-")


class Node:
    """Base class for all AST nodes."""

    __slots__ = ("line", "col")

    # names of the slots compared by __eq__ (location is ignored)
    _fields = ()

    def __init__(self, line: int = 0, col: int = 0):
        self.line = line
        self.col = col

    @property
    def children(self) -> List["Node"]:
        return []

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f) for f in self._fields)

    __hash__ = None

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class Empty(Node):
    """No-op placeholder, e.g. a declaration without an initializer."""

    __slots__ = ()


class Scope(Node):
    """Ordered sequence of statements; the program root is also a Scope."""

    __slots__ = ("body",)
    _fields = ("body",)

    def __init__(self, body: Optional[List[Node]] = None, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.body = body if body is not None else []

    @property
    def children(self) -> List[Node]:
        return self.body

    def __repr__(self):
        return f"Scope(body={self.body!r})"


class Print(Node):
    """print(...) – String items are emitted verbatim, others evaluated."""

    __slots__ = ("items",)
    _fields = ("items",)

    def __init__(self, items: List[Node], line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.items = items

    @property
    def children(self) -> List[Node]:
        return self.items

    def __repr__(self):
        return f"Print({self.items!r})"


class Identifier(Node):
    """Reference to a declared variable, resolved to its slot at parse time."""

    __slots__ = ("slot", "name")
    _fields = ("slot", "name")

    def __init__(self, slot: int, name: str, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.slot = slot
        self.name = name

    def __repr__(self):
        return f"Identifier({self.name!r}, slot={self.slot})"


class Assign(Node):
    """Assignment expression; yields the assigned value."""

    __slots__ = ("target", "value")
    _fields = ("target", "value")

    def __init__(self, target: Identifier, value: Node, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.target = target
        self.value = value

    @property
    def children(self) -> List[Node]:
        return [self.target, self.value]

    def __repr__(self):
        return f"Assign({self.target!r}, {self.value!r})"


class Conditional(Node):
    """if (cond) then_branch [else else_branch]"""

    __slots__ = ("cond", "then_branch", "else_branch")
    _fields = ("cond", "then_branch", "else_branch")

    def __init__(
        self,
        cond: Node,
        then_branch: Node,
        else_branch: Optional[Node] = None,
        line: int = 0,
        col: int = 0,
    ):
        super().__init__(line, col)
        self.cond = cond
        self.then_branch = then_branch
        self.else_branch = else_branch

    @property
    def children(self) -> List[Node]:
        children = [self.cond, self.then_branch]
        if self.else_branch is not None:
            children.append(self.else_branch)
        return children

    def __repr__(self):
        return f"Conditional({self.cond!r}, {self.then_branch!r}, {self.else_branch!r})"


class Operation(Node):
    """Unary or binary operator applied to its operands."""

    __slots__ = ("op", "operands")
    _fields = ("op", "operands")

    def __init__(
        self,
        op: str,
        left: Node,
        right: Optional[Node] = None,
        line: int = 0,
        col: int = 0,
    ):
        super().__init__(line, col)
        if right is None and op not in UNARY_OPERATORS:
            raise ValueError(f"operator {op!r} needs two operands")
        if right is not None and op == "!":
            raise ValueError("operator '!' takes exactly one operand")
        self.op = op
        self.operands = [left] if right is None else [left, right]

    @property
    def children(self) -> List[Node]:
        return self.operands

    @property
    def is_unary(self) -> bool:
        return len(self.operands) == 1

    def __repr__(self):
        args = ", ".join(repr(o) for o in self.operands)
        return f"Operation({self.op!r}, {args})"


class Number(Node):
    """Numeric literal; always a double."""

    __slots__ = ("value",)
    _fields = ("value",)

    def __init__(self, value: float, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.value = float(value)

    def __repr__(self):
        return f"Number({self.value})"


class While(Node):
    __slots__ = ("cond", "body")
    _fields = ("cond", "body")

    def __init__(self, cond: Node, body: Node, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.cond = cond
        self.body = body

    @property
    def children(self) -> List[Node]:
        return [self.cond, self.body]

    def __repr__(self):
        return f"While({self.cond!r}, {self.body!r})"


class String(Node):
    """Raw text printed by a Print node; never evaluated numerically."""

    __slots__ = ("text",)
    _fields = ("text",)

    def __init__(self, text: str, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.text = text

    def __repr__(self):
        return f"String({self.text!r})"


def _label(node: Node) -> str:
    if isinstance(node, Identifier):
        return f"Identifier {node.name} (slot {node.slot})"
    if isinstance(node, Operation):
        return f"Operation {node.op}"
    if isinstance(node, Number):
        return f"Number {node.value:g}"
    if isinstance(node, String):
        return f"String {node.text!r}"
    return type(node).__name__


def dump(node: Node, indent: int = 0) -> str:
    """Render the tree one node per line, children indented under parents."""
    lines = ["  " * indent + _label(node)]
    for child in node.children:
        lines.append(dump(child, indent + 1))
    return "\n".join(lines)
