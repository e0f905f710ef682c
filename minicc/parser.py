#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Mini parser – recursive descent parser that pulls tokens from the lexer,
builds the AST and checks declarations in the same pass.
"""

from typing import Iterable, Iterator, List, Optional, Union

from minicc.lexer import Lexer, Token, TokenType
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
from minicc.symbols import SymbolTable


class ParseError(Exception):
    """Raised when the parser encounters a syntax error."""

    def __init__(self, message: str, token: Token):
        self.message = message
        self.token = token
        super().__init__(self._format())

    def _format(self) -> str:
        where = (
            "at end of input"
            if self.token.type == TokenType.EOF
            else f"near '{self.token.raw}'"
        )
        return f"{self.token.line}:{self.token.col}: error: {self.message} {where}"


def _describe(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "end of input"
    return f"'{token.raw}'"


class Parser:
    """Recursive descent parser for Mini.

    Declarations and references are checked against ``symbols`` as each
    rule is recognised, so the first duplicate declaration or use of an
    undeclared name aborts the parse at the statement that caused it.
    """

    # Precedence levels for binary operators (higher = tighter)
    PRECEDENCE = {
        "==": 5,
        "!=": 5,
        "<": 5,
        ">": 5,
        "<=": 5,
        ">=": 5,
        "+": 10,
        "-": 10,
        "*": 20,
        "/": 20,
    }

    def __init__(
        self,
        lexer: Union[Lexer, Iterable[Token]],
        symbols: Optional[SymbolTable] = None,
    ):
        tokens = lexer.tokenize() if isinstance(lexer, Lexer) else lexer
        self._tokens: Iterator[Token] = iter(tokens)
        self._lookahead: List[Token] = []
        self._last: Optional[Token] = None
        self.symbols = symbols if symbols is not None else SymbolTable()

    # Token handling

    def peek_token(self, offset: int = 0) -> Token:
        """Peek ahead without consuming, pulling from the token source as needed."""
        while len(self._lookahead) <= offset:
            self._lookahead.append(self._pull())
        return self._lookahead[offset]

    def _pull(self) -> Token:
        if self._lookahead and self._lookahead[-1].type == TokenType.EOF:
            return self._lookahead[-1]
        token = next(self._tokens, None)
        if token is None:
            # Source ran dry without an explicit end marker
            last = self._lookahead[-1] if self._lookahead else self._last
            line, col = (last.line, last.col) if last else (1, 1)
            token = Token(TokenType.EOF, "", line, col)
        return token

    @property
    def current(self) -> Token:
        return self.peek_token()

    def _advance(self) -> Token:
        token = self.peek_token()
        if token.type != TokenType.EOF:
            self._lookahead.pop(0)
        self._last = token
        return token

    def check(self, type: TokenType, value: Optional[str] = None) -> bool:
        return self.current.is_(type, value)

    def consume(self, expected_type: TokenType, value: Optional[str] = None) -> Token:
        """Consume the current token if it matches; otherwise raise ParseError."""
        if self.check(expected_type, value):
            return self._advance()
        wanted = f"'{value}'" if value is not None else expected_type.name
        self._error(f"expected {wanted}, got {_describe(self.current)}")

    def _error(self, message: str, token: Optional[Token] = None) -> None:
        raise ParseError(message, token or self.current)

    # Grammar

    def parse_program(self) -> StatementList:
        """Parse a whole Mini program."""
        program = StatementList(line=1, col=1)
        try:
            while not self.check(TokenType.EOF):
                program.append(self.parse_statement())
        except RecursionError:
            # Parentheses, unary minus, assignments and blocks recurse per level
            self._error("program nests too deeply")
        return program

    def parse_block(self) -> StatementList:
        """Parse '{' statements '}'."""
        open_token = self.consume(TokenType.DELIMITER, "{")
        block = StatementList(line=open_token.line, col=open_token.col)
        while not self.check(TokenType.DELIMITER, "}"):
            if self.check(TokenType.EOF):
                self._error("expected '}' to close block")
            block.append(self.parse_statement())
        self.consume(TokenType.DELIMITER, "}")
        return block

    def parse_statement(self) -> Node:
        token = self.current
        if token.type == TokenType.KEYWORD:
            if token.value == "int":
                return self.parse_decl()
            if token.value == "print":
                return self.parse_print()
            if token.value == "if":
                return self.parse_if()
            self._error(f"unexpected {_describe(token)}")
        # A bare expression; only assignments have an effect, the rest are inert
        expr = self.parse_expression()
        self.consume(TokenType.DELIMITER, ";")
        return expr

    def parse_decl(self) -> Decl:
        """Parse 'int name [= expr] ;'."""
        start_token = self.consume(TokenType.KEYWORD, "int")
        name_token = self.consume(TokenType.IDENT)
        init = None
        if self.check(TokenType.OPERATOR, "="):
            self._advance()
            init = self.parse_expression()
        self.consume(TokenType.DELIMITER, ";")
        # Declared once the whole statement is recognised, so `int x = x;` fails
        self.symbols.declare(name_token.value, name_token.line, name_token.col)
        return Decl(name_token.value, init, line=start_token.line, col=start_token.col)

    def parse_print(self) -> Node:
        """Parse 'print ( expr ) ;' or 'print ( STRING ) ;'."""
        start_token = self.consume(TokenType.KEYWORD, "print")
        self.consume(TokenType.DELIMITER, "(")
        if self.check(TokenType.STRING):
            text = self._advance().value
            node: Node = PrintString(text, line=start_token.line, col=start_token.col)
        else:
            value = self.parse_expression()
            node = Print(value, line=start_token.line, col=start_token.col)
        self.consume(TokenType.DELIMITER, ")")
        self.consume(TokenType.DELIMITER, ";")
        return node

    def parse_if(self) -> If:
        """Parse 'if ( expr ) block [else block]'."""
        start_token = self.consume(TokenType.KEYWORD, "if")
        self.consume(TokenType.DELIMITER, "(")
        cond = self.parse_expression()
        self.consume(TokenType.DELIMITER, ")")
        then_block = self.parse_block()
        else_block = None
        if self.check(TokenType.KEYWORD, "else"):
            self._advance()
            else_block = self.parse_block()
        return If(cond, then_block, else_block, line=start_token.line, col=start_token.col)

    def parse_expression(self) -> Node:
        """Parse an expression with precedence."""
        return self.parse_binary(0)

    def parse_binary(self, min_prec: int) -> Node:
        """Parse binary expressions using precedence climbing (left-associative)."""
        lhs = self.parse_unary()
        while True:
            tok = self.current
            if tok.type != TokenType.OPERATOR:
                break
            op = tok.value
            if op not in self.PRECEDENCE:
                break
            prec = self.PRECEDENCE[op]
            if prec < min_prec:
                break
            self._advance()
            rhs = self.parse_binary(prec + 1)
            lhs = BinOp(op, lhs, rhs, line=lhs.line, col=lhs.col)
        return lhs

    def parse_unary(self) -> Node:
        if self.check(TokenType.OPERATOR, "-"):
            minus = self._advance()
            operand = self.parse_unary()
            return BinOp("neg", operand, None, line=minus.line, col=minus.col)
        return self.parse_primary()

    def parse_primary(self) -> Node:
        """Parse a primary: assignment, integer literal, identifier, or parenthesized expression."""
        token = self.current
        if token.type == TokenType.NUMBER:
            self._advance()
            try:
                value = int(token.value)
            except ValueError:
                self._error(f"invalid integer literal {token.value}", token)
            return Number(value, line=token.line, col=token.col)
        if token.type == TokenType.IDENT:
            if self.peek_token(1).is_(TokenType.OPERATOR, "="):
                return self.parse_assign()
            self._advance()
            self.symbols.require_declared(token.value, token.line, token.col)
            return Identifier(token.value, line=token.line, col=token.col)
        if token.is_(TokenType.DELIMITER, "("):
            self._advance()
            expr = self.parse_expression()
            self.consume(TokenType.DELIMITER, ")")
            return expr
        self._error(f"expected expression, got {_describe(token)}")

    def parse_assign(self) -> Assign:
        """Parse 'name = expr' (right-associative, lowest precedence)."""
        name_token = self.consume(TokenType.IDENT)
        self.consume(TokenType.OPERATOR, "=")
        value = self.parse_expression()
        self.symbols.require_declared(name_token.value, name_token.line, name_token.col)
        return Assign(name_token.value, value, line=name_token.line, col=name_token.col)


def parse(source: str, symbols: Optional[SymbolTable] = None) -> StatementList:
    """Convenience wrapper: lex and parse a whole source string."""
    return Parser(Lexer(source), symbols).parse_program()
