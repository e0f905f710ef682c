#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Mini compiler – driver that orchestrates lexing, parsing with declaration
checks, tree rendering, C code generation, and running the result through
a C compiler.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

# Add project root to sys.path so that imports from minicc work when running as script
sys.path.insert(0, str(Path(__file__).parent.parent))

from minicc.codegen import CodeGen, CodeGenError
from minicc.lexer import Lexer, LexerError
from minicc.mini_ast import StatementList
from minicc.parser import ParseError, Parser
from minicc.render import render
from minicc.runner import CCompilerRunner, CompilerRunner, ExternalToolFailure
from minicc.symbols import SemanticError, SymbolTable

log = logging.getLogger(__name__)

TREE_BANNER = "--- VISUAL PARSE TREE ---"
RESULTS_BANNER = "--- EXECUTION RESULTS ---"
RULE = "-------------------------"


class Compilation:
    """Products of one compilation run."""

    __slots__ = ("ast", "symbols", "c_source")

    def __init__(self, ast: StatementList, symbols: SymbolTable, c_source: str):
        self.ast = ast
        self.symbols = symbols
        self.c_source = c_source

    def tree(self) -> str:
        return render(self.ast)


def compile_source(source: str, filename: str = "<input>") -> Compilation:
    """Lex, parse and lower ``source``; the first error aborts the run."""
    symbols = SymbolTable()
    log.info(f"Parsing {filename}")
    parser = Parser(Lexer(source), symbols)
    ast = parser.parse_program()
    log.info(f"Parsed {len(ast)} statements, {len(symbols)} variables declared")
    c_source = CodeGen().generate(ast)
    log.info("Generated C source")
    return Compilation(ast, symbols, c_source)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(format="{message}", style="{")
    if verbose:
        logging.getLogger().setLevel(logging.INFO)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mini compiler")
    parser.add_argument("input", help="Input .mini file")
    parser.add_argument(
        "-o", "--output", default="output.c", help="Generated C file (default: output.c)"
    )
    parser.add_argument(
        "--tree", action="store_true", help="Print the visual parse tree"
    )
    parser.add_argument(
        "--run", action="store_true", help="Compile and run the generated C"
    )
    parser.add_argument(
        "--result", help="Also save the program output to this file (implies --run)"
    )
    parser.add_argument(
        "--cc",
        default=os.environ.get("CC", "cc"),
        help="C compiler used by --run (default: $CC or cc)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log pipeline stages"
    )
    return parser


def main(argv=None, runner: Optional[CompilerRunner] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.verbose)

    input_path = Path(args.input)
    output_path = Path(args.output)

    if not input_path.exists():
        print(f"Error: input file {input_path} not found", file=sys.stderr)
        return 1

    source = input_path.read_text(encoding="utf-8")

    try:
        result = compile_source(source, filename=str(input_path))

        if args.tree:
            print(TREE_BANNER)
            print(result.tree(), end="")
            print(RULE)

        output_path.write_text(result.c_source, encoding="utf-8")
        print(f"Successfully compiled {input_path} to {output_path}", file=sys.stderr)

        if args.run or args.result:
            if runner is None:
                runner = CCompilerRunner(args.cc)
            output = runner.run(result.c_source)
            print(RESULTS_BANNER)
            print(output, end="")
            print(RULE)
            if args.result:
                Path(args.result).write_text(output, encoding="utf-8")
                log.info(f"Output saved to {args.result}")

    except (LexerError, ParseError, SemanticError, CodeGenError, ExternalToolFailure) as e:
        print(str(e), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
