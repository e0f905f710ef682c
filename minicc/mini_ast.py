#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Abstract Syntax Tree (AST) node definitions for Mini.
All nodes store source location (line, col) for error reporting.
Equality is structural and ignores locations.
"""

from typing import List, Optional, Sequence, Tuple


class Node:
    """Base class for all AST nodes."""

    __slots__ = ("line", "col")

    # Attributes that make up the node's structure, in traversal order
    _fields: Tuple[str, ...] = ()

    def __init__(self, line: int = 0, col: int = 0):
        self.line = line
        self.col = col

    def children(self) -> List["Node"]:
        """Child nodes in traversal order, skipping absent ones."""
        result = []
        for field in self._fields:
            value = getattr(self, field)
            if isinstance(value, Node):
                result.append(value)
        return result

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f) for f in self._fields)

    __hash__ = None

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class StatementList(Node):
    """Ordered sequence of statements: the program root and every block."""

    __slots__ = ("statements",)
    _fields = ("statements",)

    def __init__(
        self, statements: Optional[Sequence[Node]] = None, line: int = 0, col: int = 0
    ):
        super().__init__(line, col)
        self.statements: List[Node] = list(statements) if statements else []

    def append(self, stmt: Node) -> None:
        self.statements.append(stmt)

    def children(self) -> List[Node]:
        return list(self.statements)

    def __iter__(self):
        return iter(self.statements)

    def __len__(self):
        return len(self.statements)

    def __repr__(self):
        return f"StatementList({self.statements!r})"


class Number(Node):
    """Integer literal (e.g., 42)."""

    __slots__ = ("value",)
    _fields = ("value",)

    def __init__(self, value: int, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.value = value

    def __repr__(self):
        return f"Number({self.value})"


class Identifier(Node):
    """Variable reference."""

    __slots__ = ("name",)
    _fields = ("name",)

    def __init__(self, name: str, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.name = name

    def __repr__(self):
        return f"Identifier({self.name!r})"


class BinOp(Node):
    """Binary operation, or unary negation when op is "neg" (right is None)."""

    __slots__ = ("op", "left", "right")
    _fields = ("op", "left", "right")

    def __init__(
        self,
        op: str,
        left: Node,
        right: Optional[Node] = None,
        line: int = 0,
        col: int = 0,
    ):
        super().__init__(line, col)
        self.op = op
        self.left = left
        self.right = right

    @property
    def is_unary(self) -> bool:
        return self.op == "neg"

    def __repr__(self):
        if self.is_unary:
            return f"BinOp({self.op!r}, {self.left!r})"
        return f"BinOp({self.op!r}, {self.left!r}, {self.right!r})"


class Assign(Node):
    """Assignment expression: name = value."""

    __slots__ = ("name", "value")
    _fields = ("name", "value")

    def __init__(self, name: str, value: Node, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.name = name
        self.value = value

    def __repr__(self):
        return f"Assign({self.name!r}, {self.value!r})"


class Decl(Node):
    """Variable declaration with an optional initializer."""

    __slots__ = ("name", "init")
    _fields = ("name", "init")

    def __init__(
        self, name: str, init: Optional[Node] = None, line: int = 0, col: int = 0
    ):
        super().__init__(line, col)
        self.name = name
        self.init = init

    def __repr__(self):
        if self.init is None:
            return f"Decl({self.name!r})"
        return f"Decl({self.name!r}, {self.init!r})"


class Print(Node):
    """print(expr): prints an integer followed by a newline."""

    __slots__ = ("value",)
    _fields = ("value",)

    def __init__(self, value: Node, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.value = value

    def __repr__(self):
        return f"Print({self.value!r})"


class PrintString(Node):
    """print("..."): text keeps its surrounding quotes and escapes verbatim."""

    __slots__ = ("text",)
    _fields = ("text",)

    def __init__(self, text: str, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.text = text

    def __repr__(self):
        return f"PrintString({self.text!r})"


class If(Node):
    """If statement with an optional else block."""

    __slots__ = ("cond", "then_block", "else_block")
    _fields = ("cond", "then_block", "else_block")

    def __init__(
        self,
        cond: Node,
        then_block: StatementList,
        else_block: Optional[StatementList] = None,
        line: int = 0,
        col: int = 0,
    ):
        super().__init__(line, col)
        self.cond = cond
        self.then_block = then_block
        self.else_block = else_block

    def __repr__(self):
        return f"If({self.cond!r}, then={self.then_block!r}, else={self.else_block!r})"
