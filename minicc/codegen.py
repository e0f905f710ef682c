#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Mini code generator – lowers the AST to a standalone C translation unit.
"""

from typing import List, Union

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


# Prepended to every variable so Mini names never collide with C keywords or libc
VAR_PREFIX = "v_"


class CodeGenError(Exception):
    """Raised when code generation meets a node it has no rule for."""

    pass


class CodeGen:
    """Generates C source from an AST."""

    INDENT = "    "

    def __init__(self):
        self.output: List[str] = []
        self.indent_level = 0

    def indent(self):
        self.indent_level += 1

    def dedent(self):
        self.indent_level -= 1

    def emit(self, line: str = ""):
        if line:
            self.output.append(self.INDENT * self.indent_level + line)
        else:
            self.output.append("")

    def generate(self, node) -> str:
        self.output = []
        self.indent_level = 0

        if not isinstance(node, StatementList):
            raise CodeGenError("Root node must be StatementList")

        self.emit("#include <stdio.h>")
        self.emit("#include <stdlib.h>")
        self.emit()
        self.emit("int main() {")
        self.indent()
        try:
            self.gen_block(node)
        except RecursionError:
            raise CodeGenError("error: program nests too deeply") from None
        self.emit("return 0;")
        self.dedent()
        self.emit("}")
        return "\n".join(self.output) + "\n"

    def gen_block(self, node: StatementList):
        for stmt in node.statements:
            self.gen_statement(stmt)

    def gen_statement(self, node: Node):
        if isinstance(node, Decl):
            self.gen_decl(node)
        elif isinstance(node, Print):
            self.emit(f'printf("%d\\n", {self.gen_expression(node.value)});')
        elif isinstance(node, PrintString):
            self.emit(f'printf("%s\\n", {node.text});')
        elif isinstance(node, If):
            self.gen_if(node)
        elif isinstance(node, StatementList):
            self.gen_block(node)
        else:
            # Bare expression statement; inert unless it contains an assignment
            self.emit(f"{self.gen_expression(node)};")

    def gen_decl(self, node: Decl):
        name = self.c_name(node.name)
        if node.init is None:
            self.emit(f"int {name};")
        else:
            self.emit(f"int {name} = {self.gen_expression(node.init)};")

    def gen_if(self, node: If):
        self.emit(f"if ({self.gen_expression(node.cond)}) {{")
        self.indent()
        self.gen_block(node.then_block)
        self.dedent()
        if node.else_block is None:
            self.emit("}")
            return
        self.emit("} else {")
        self.indent()
        self.gen_block(node.else_block)
        self.dedent()
        self.emit("}")

    @staticmethod
    def c_name(name: str) -> str:
        """C spelling of a Mini variable; the prefix keeps clear of C keywords and libc names."""
        return f"{VAR_PREFIX}{name}"

    def gen_expression(self, node: Node) -> str:
        # Walked with an explicit stack: long operator chains nest as deep as they are long
        parts: List[str] = []
        stack: List[Union[Node, str]] = [node]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, Number):
                parts.append(str(item.value))
            elif isinstance(item, Identifier):
                parts.append(self.c_name(item.name))
            elif isinstance(item, Assign):
                stack.extend([")", item.value, f"({self.c_name(item.name)} = "])
            elif isinstance(item, BinOp):
                if item.is_unary:
                    stack.extend([")", item.left, "(-"])
                else:
                    stack.extend([")", item.right, f" {item.op} ", item.left, "("])
            else:
                raise CodeGenError(f"unsupported expression: {type(item).__name__}")
        return "".join(parts)


def generate(node: StatementList) -> str:
    """Generate a C translation unit for a parsed program."""
    return CodeGen().generate(node)
