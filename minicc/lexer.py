#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Mini lexer – converts source text into a pull stream of tokens.
Tokens are matched with a single master regex; string literals are kept
verbatim so they can be copied into the generated C.
"""

import re
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
        self.value = value
        self.line = line  # 1‑based line number
        self.col = col  # 1‑based column of the first character
        self.raw = raw if raw is not None else value  # original source text

    def is_(self, type: TokenType, value: Optional[str] = None) -> bool:
        """True if the token has the given type (and value, when given)."""
        return self.type == type and (value is None or self.value == value)

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
        pointer = " " * (self.col - 1) + "^"
        return f"{self.line}:{self.col}: error: {self.message}\n{self.source_line}\n{pointer}"


# Character classes are spelled out so only ASCII letters and digits match
TOKEN_SPEC = [
    ("NUMBER", r"[0-9]+"),
    ("IDENT", r"[A-Za-z_][A-Za-z0-9_]*"),
    ("STRING", r'"(?:\\[^\n]|[^"\\\n])*"'),
    ("OPERATOR", r"==|!=|<=|>=|[<>=+\-*/]"),
    ("DELIMITER", r"[;(){}]"),
]
TOKEN_RE = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in TOKEN_SPEC))
SKIP_RE = re.compile(r"(?:[ \t\r\n]+|//[^\n]*)+")
COMMENT_MARK_RE = re.compile(r"/\*|\*/")
ESCAPE_RE = re.compile(r"\\(.)")
IDENT_CHAR_RE = re.compile(r"[A-Za-z0-9_]")

KEYWORDS = {"int", "print", "if", "else"}

# Escapes are copied verbatim into the generated C, so only C‑valid ones pass
STRING_ESCAPES = {"n", "t", "r", "\\", '"', "'", "0"}


class Lexer:
    """Mini lexer. Produces tokens via the tokenize() generator."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.line_start = 0  # index of the first character of the current line

    @property
    def col(self) -> int:
        return self.pos - self.line_start + 1

    def _consume(self, text: str) -> None:
        start = self.pos
        self.pos += len(text)
        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self.line_start = start + text.rindex("\n") + 1

    def _error(self, message: str, line: Optional[int] = None, col: Optional[int] = None):
        line = self.line if line is None else line
        col = self.col if col is None else col
        lines = self.source.splitlines()
        source_line = lines[line - 1] if 1 <= line <= len(lines) else ""
        raise LexerError(message, line, col, source_line)

    def _skip_block_comment(self) -> None:
        """Skip a nested block comment /* ... */."""
        line, col = self.line, self.col
        depth = 0
        for mark in COMMENT_MARK_RE.finditer(self.source, self.pos):
            depth += 1 if mark.group() == "/*" else -1
            if depth == 0:
                self._consume(self.source[self.pos : mark.end()])
                return
        self._error("Unterminated block comment", line, col)

    def _check_escapes(self, raw: str, line: int, col: int) -> None:
        for esc in ESCAPE_RE.finditer(raw):
            if esc.group(1) not in STRING_ESCAPES:
                self._error(
                    f"Unknown escape sequence '\\{esc.group(1)}'", line, col + esc.start()
                )

    def tokenize(self) -> Generator[Token, None, None]:
        """Main lexer entry point: yields tokens until EOF."""
        while True:
            skipped = SKIP_RE.match(self.source, self.pos)
            if skipped:
                self._consume(skipped.group())
            if self.pos >= len(self.source):
                break
            if self.source.startswith("/*", self.pos):
                self._skip_block_comment()
                continue

            match = TOKEN_RE.match(self.source, self.pos)
            if match is None:
                ch = self.source[self.pos]
                if ch == '"':
                    self._error("Unterminated string literal")
                self._error(f"Invalid character '{ch}'")

            kind, text = match.lastgroup, match.group()
            line, col = self.line, self.col
            if kind == "NUMBER" and IDENT_CHAR_RE.match(self.source, match.end()):
                self._error(
                    f"Invalid digit '{self.source[match.end()]}' in number literal",
                    line,
                    col + len(text),
                )
            if kind == "STRING":
                self._check_escapes(text, line, col)
            if kind == "IDENT" and text in KEYWORDS:
                kind = "KEYWORD"

            self._consume(text)
            yield Token(TokenType[kind], text, line, col)

        yield Token(TokenType.EOF, "", self.line, self.col)
