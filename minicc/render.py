#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Mini tree renderer – draws the AST as an indented branch diagram, one node
per line, in the style of the `tree` command.
"""

from typing import List, Optional

from minicc.mini_ast import (
    Assign,
    BinOp,
    Decl,
    Identifier,
    If,
    Node,
    Number,
    Print,
    PrintString,
    StatementList,
)


class TreeRenderer:
    """Renders an AST without modifying it."""

    def __init__(self):
        self.lines: List[str] = []

    def render(self, node: Optional[Node]) -> str:
        self.lines = []
        # An empty program draws nothing, not a lone BLOCK
        if node is None or (isinstance(node, StatementList) and not node.statements):
            return ""
        # Walked with an explicit stack; operator chains nest as deep as they are long
        stack = [(node, 0, True, 0, None)]
        while stack:
            current, depth, is_last, mask, label = stack.pop()
            self.lines.append(self._branch(depth, is_last, mask) + (label or self.label(current)))

            next_mask = mask if is_last else mask | (1 << depth)
            children = self._children(current)
            # Pushed in reverse so the first child is drawn first
            for i in reversed(range(len(children))):
                child, child_label = children[i]
                stack.append(
                    (child, depth + 1, i == len(children) - 1, next_mask, child_label)
                )
        return "".join(line + "\n" for line in self.lines)

    def _branch(self, depth: int, is_last: bool, mask: int) -> str:
        # Bit d of mask is set when the ancestor at depth d has more siblings below;
        # column i sits under the ancestor at depth i + 1
        parts = ["|   " if mask & (1 << (i + 1)) else "    " for i in range(depth - 1)]
        if depth > 0:
            parts.append("+-- " if is_last else "|-- ")
        return "".join(parts)

    def _children(self, node: Node) -> list:
        if isinstance(node, If):
            children = [(node.cond, None), (node.then_block, None)]
            if node.else_block is not None:
                children.append((node.else_block, "ELSE"))
            return children
        return [(child, None) for child in node.children()]

    @staticmethod
    def label(node: Node) -> str:
        if isinstance(node, Decl):
            return f"DECL ({node.name})"
        if isinstance(node, Assign):
            return f"ASSIGN (=) {node.name}"
        if isinstance(node, Print):
            return "PRINT (Expr)"
        if isinstance(node, PrintString):
            return f"PRINT (String): {node.text}"
        if isinstance(node, If):
            return "IF"
        if isinstance(node, BinOp):
            return f"OP ({node.op})"
        if isinstance(node, Number):
            return f"NUM ({node.value})"
        if isinstance(node, Identifier):
            return f"ID ({node.name})"
        if isinstance(node, StatementList):
            return "BLOCK"
        raise TypeError(f"cannot render node {type(node).__name__}")


def render(node: Optional[Node]) -> str:
    """Render ``node`` as a branch diagram."""
    return TreeRenderer().render(node)
