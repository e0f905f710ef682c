#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Mini symbol table – a flat registry of declared variable names.
Mini has a single scalar type and no scopes, so a name is either declared
or it is not.
"""

import logging
from typing import Dict, Iterator, List, Optional

log = logging.getLogger(__name__)


class SemanticError(Exception):
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


class DuplicateDeclaration(SemanticError):
    """A variable was declared a second time."""

    def __init__(self, name: str, line: int = 0, col: int = 0):
        self.name = name
        super().__init__(f"variable '{name}' is already declared", line, col)


class UseBeforeDeclaration(SemanticError):
    """A variable was referenced before any declaration of it."""

    def __init__(self, name: str, line: int = 0, col: int = 0):
        self.name = name
        super().__init__(f"variable '{name}' used but not declared", line, col)


class Symbol:
    __slots__ = ("name", "line", "col")

    def __init__(self, name: str, line: int, col: int):
        self.name = name
        self.line = line
        self.col = col


class SymbolTable:
    """Append-only set of declared names, kept in declaration order."""

    def __init__(self):
        self._symbols: Dict[str, Symbol] = {}

    def declare(self, name: str, line: int = 0, col: int = 0) -> None:
        if name in self._symbols:
            raise DuplicateDeclaration(name, line, col)
        log.info(f"Insert: {name}")
        self._symbols[name] = Symbol(name, line, col)

    def is_declared(self, name: str) -> bool:
        log.info(f"Lookup: {name}")
        return name in self._symbols

    def require_declared(self, name: str, line: int = 0, col: int = 0) -> None:
        if not self.is_declared(name):
            raise UseBeforeDeclaration(name, line, col)

    def lookup(self, name: str) -> Optional[Symbol]:
        return self._symbols.get(name)

    def names(self) -> List[str]:
        return list(self._symbols)

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __repr__(self):
        return f"SymbolTable({self.names()!r})"
