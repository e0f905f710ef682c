#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

import unittest

from minicc.lexer import Lexer, Token, TokenType
from minicc.mini_ast import (
    Assign,
    BinOp,
    Decl,
    Identifier,
    If,
    Number,
    Print,
    PrintString,
    StatementList,
)
from minicc.parser import ParseError, Parser
from minicc.symbols import DuplicateDeclaration, SymbolTable, UseBeforeDeclaration


class TestParser(unittest.TestCase):
    def parse(self, source: str, symbols=None):
        """Parse source and return the program's statement list."""
        return Parser(Lexer(source), symbols).parse_program()

    def test_empty_program(self):
        program = self.parse("")
        self.assertIsInstance(program, StatementList)
        self.assertEqual(program.statements, [])

    def test_empty_with_comments(self):
        program = self.parse("// just a comment\n/* block comment */")
        self.assertEqual(program.statements, [])

    def test_declare_then_print(self):
        symbols = SymbolTable()
        program = self.parse("int x = 5; print(x);", symbols)
        self.assertEqual(
            program.statements,
            [Decl("x", Number(5)), Print(Identifier("x"))],
        )
        self.assertEqual(symbols.names(), ["x"])

    def test_declaration_without_initializer(self):
        program = self.parse("int x;")
        self.assertEqual(program.statements, [Decl("x")])
        self.assertIsNone(program.statements[0].init)

    def test_duplicate_declaration(self):
        with self.assertRaises(DuplicateDeclaration) as cm:
            self.parse("int x; int x;")
        self.assertEqual(cm.exception.name, "x")
        self.assertEqual((cm.exception.line, cm.exception.col), (1, 12))

    def test_duplicate_declaration_after_other_statements(self):
        with self.assertRaises(DuplicateDeclaration):
            self.parse("int a = 1; print(a); if (a) { a = 2; } int a;")

    def test_duplicate_inside_block(self):
        # No scoping: a block cannot redeclare an outer name
        with self.assertRaises(DuplicateDeclaration):
            self.parse("int a; if (1) { int a; }")

    def test_block_declaration_is_visible_afterwards(self):
        program = self.parse("if (1) { int b; } b = 3;")
        self.assertEqual(program.statements[1], Assign("b", Number(3)))

    def test_use_before_declaration_assignment(self):
        with self.assertRaises(UseBeforeDeclaration) as cm:
            self.parse("y = 1;")
        self.assertEqual(cm.exception.name, "y")

    def test_use_before_declaration_operand(self):
        with self.assertRaises(UseBeforeDeclaration) as cm:
            self.parse("int x = 1; print(x + z);")
        self.assertEqual(cm.exception.name, "z")

    def test_self_referencing_initializer(self):
        with self.assertRaises(UseBeforeDeclaration):
            self.parse("int x = x;")

    def test_assignment_checks_value_before_target(self):
        with self.assertRaises(UseBeforeDeclaration) as cm:
            self.parse("y = z;")
        self.assertEqual(cm.exception.name, "z")

    def test_error_stops_at_first_statement(self):
        symbols = SymbolTable()
        with self.assertRaises(UseBeforeDeclaration):
            self.parse("int a; q = 1; int b;", symbols)
        self.assertEqual(symbols.names(), ["a"])

    def test_multiplication_binds_tighter(self):
        program = self.parse("int n = 2 + 3 * 4;")
        self.assertEqual(
            program.statements[0],
            Decl("n", BinOp("+", Number(2), BinOp("*", Number(3), Number(4)))),
        )

    def test_left_associativity(self):
        program = self.parse("int n = 10 - 4 - 3;")
        self.assertEqual(
            program.statements[0].init,
            BinOp("-", BinOp("-", Number(10), Number(4)), Number(3)),
        )

    def test_comparison_binds_looser_than_arithmetic(self):
        program = self.parse("int a; print(a + 1 < a * 2);")
        self.assertEqual(
            program.statements[1].value,
            BinOp(
                "<",
                BinOp("+", Identifier("a"), Number(1)),
                BinOp("*", Identifier("a"), Number(2)),
            ),
        )

    def test_all_comparison_operators(self):
        for op in ["==", "!=", "<", ">", "<=", ">="]:
            with self.subTest(op=op):
                program = self.parse(f"print(1 {op} 2);")
                self.assertEqual(
                    program.statements[0], Print(BinOp(op, Number(1), Number(2)))
                )

    def test_unary_minus_binds_tighter_than_multiplication(self):
        program = self.parse("int a; print(-a * 2);")
        self.assertEqual(
            program.statements[1].value,
            BinOp("*", BinOp("neg", Identifier("a")), Number(2)),
        )
        self.assertIsNone(program.statements[1].value.left.right)

    def test_binary_minus_with_negative_operand(self):
        program = self.parse("print(1 - -2);")
        self.assertEqual(
            program.statements[0].value,
            BinOp("-", Number(1), BinOp("neg", Number(2))),
        )

    def test_parentheses(self):
        program = self.parse("print((1 + 2) * 3);")
        self.assertEqual(
            program.statements[0].value,
            BinOp("*", BinOp("+", Number(1), Number(2)), Number(3)),
        )

    def test_assignment_is_right_associative(self):
        program = self.parse("int a; int b; a = b = 1 + 2;")
        self.assertEqual(
            program.statements[2],
            Assign("a", Assign("b", BinOp("+", Number(1), Number(2)))),
        )

    def test_assignment_inside_expression(self):
        program = self.parse("int x; print(1 + x = 2 * 3);")
        self.assertEqual(
            program.statements[1].value,
            BinOp("+", Number(1), Assign("x", BinOp("*", Number(2), Number(3)))),
        )

    def test_bare_expression_statement(self):
        program = self.parse("int a; a + 1;")
        self.assertEqual(program.statements[1], BinOp("+", Identifier("a"), Number(1)))

    def test_print_string(self):
        program = self.parse('print("hello");')
        self.assertEqual(program.statements, [PrintString('"hello"')])

    def test_if_without_else(self):
        program = self.parse("int a = 3; if (a > 2) { print(a); }")
        node = program.statements[1]
        self.assertIsInstance(node, If)
        self.assertEqual(node.cond, BinOp(">", Identifier("a"), Number(2)))
        self.assertEqual(node.then_block, StatementList([Print(Identifier("a"))]))
        self.assertIsNone(node.else_block)

    def test_if_with_else(self):
        program = self.parse(
            "int a = 3; if (a > 2) { print(a); } else { print(0); } print(1);"
        )
        self.assertEqual(len(program.statements), 3)
        node = program.statements[1]
        self.assertEqual(node.else_block, StatementList([Print(Number(0))]))
        self.assertEqual(program.statements[2], Print(Number(1)))

    def test_empty_blocks(self):
        program = self.parse("if (1) { } else { }")
        node = program.statements[0]
        self.assertEqual(node.then_block.statements, [])
        self.assertEqual(node.else_block.statements, [])

    def test_nested_if(self):
        program = self.parse("int a; if (a) { if (a == 1) { a = 2; } else { a = 3; } }")
        inner = program.statements[1].then_block.statements[0]
        self.assertIsInstance(inner, If)
        self.assertEqual(inner.else_block, StatementList([Assign("a", Number(3))]))

    def test_statement_order(self):
        program = self.parse("int a; int b; a = 1; b = 2; print(a); print(b);")
        kinds = [type(s).__name__ for s in program.statements]
        self.assertEqual(kinds, ["Decl", "Decl", "Assign", "Assign", "Print", "Print"])

    def test_locations(self):
        program = self.parse("int a;\nprint(a);")
        self.assertEqual((program.statements[1].line, program.statements[1].col), (2, 1))

    def test_missing_semicolon(self):
        with self.assertRaises(ParseError) as cm:
            self.parse("int x = 1")
        self.assertIn("expected ';'", str(cm.exception))
        self.assertIn("at end of input", str(cm.exception))

    def test_stray_else(self):
        with self.assertRaises(ParseError):
            self.parse("else { }")

    def test_stray_operator(self):
        with self.assertRaises(ParseError) as cm:
            self.parse("+;")
        self.assertIn("expected expression", str(cm.exception))
        self.assertEqual(cm.exception.token.value, "+")

    def test_unclosed_block(self):
        with self.assertRaises(ParseError):
            self.parse("if (1) { print(1);")

    def test_if_requires_block(self):
        with self.assertRaises(ParseError):
            self.parse("if (1) print(1);")

    def test_string_only_in_print(self):
        with self.assertRaises(ParseError):
            self.parse('int a = "x";')

    def test_declaration_needs_name(self):
        with self.assertRaises(ParseError):
            self.parse("int 5;")

    def test_syntax_error_precedes_later_semantic_error(self):
        with self.assertRaises(ParseError):
            self.parse("int a int a;")

    def test_long_operator_chain(self):
        program = self.parse("print(" + " + ".join(["1"] * 1500) + ");")
        node, depth = program.statements[0].value, 0
        while isinstance(node, BinOp):
            node, depth = node.left, depth + 1
        self.assertEqual(depth, 1499)

    def test_nesting_too_deep(self):
        for source in [
            "print(" + "(" * 1000 + "1" + ")" * 1000 + ");",
            "print(" + "-" * 5000 + "1);",
            "if (1) { " * 1000 + "}" * 1000,
        ]:
            with self.subTest(source=source[:20]):
                with self.assertRaises(ParseError) as cm:
                    self.parse(source)
                self.assertIn("error: program nests too deeply", str(cm.exception))

    def test_token_iterable_source(self):
        tokens = [
            Token(TokenType.KEYWORD, "int", 1, 1),
            Token(TokenType.IDENT, "k", 1, 5),
            Token(TokenType.DELIMITER, ";", 1, 6),
        ]
        program = Parser(tokens).parse_program()
        self.assertEqual(program.statements, [Decl("k")])


if __name__ == "__main__":
    unittest.main()
