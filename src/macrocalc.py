#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
MacroCalc driver – reads a script, lexes and parses the whole file, then
runs it with the tree-walking interpreter.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, TextIO

# Add project root to sys.path so that imports from src work when running as script
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.interpreter import EvalError, Interpreter
from src.lexer import Lexer, LexerError
from src.macro_ast import Scope, dump
from src.parser import ParseError, Parser
from src.symbols import SymbolError, SymbolTable

ERRORS = (LexerError, ParseError, SymbolError, EvalError)


def parse_source(source: str, filename: str = "<input>"):
    """Lex and parse `source`; return the program and its symbol table."""
    symbols = SymbolTable()
    lexer = Lexer(source, filename=filename)
    parser = Parser(lexer.tokenize(), symbols)
    program = parser.parse_program()
    return program, symbols


def run_source(source: str, out: Optional[TextIO] = None) -> Scope:
    """Parse then execute `source`, writing program output to `out`."""
    program, symbols = parse_source(source)
    Interpreter(symbols, out).execute(program)
    return program


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="MacroCalc interpreter")
    parser.add_argument("input", help="Input .mc script")
    parser.add_argument(
        "--dump-ast", action="store_true", help="Print the AST before running"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream and exit"
    )
    args = parser.parse_args(argv)

    input_path = Path(args.input)
    try:
        source = input_path.read_text(encoding="utf-8")
    except OSError:
        print(f"error: unable to open file '{input_path}'", file=sys.stderr)
        return 1

    try:
        if args.tokens:
            for token in Lexer(source, filename=str(input_path)).tokenize():
                print(repr(token))
            return 0
        program, symbols = parse_source(source, filename=str(input_path))
        if args.dump_ast:
            print(dump(program))
        Interpreter(symbols).execute(program)
    except ERRORS as e:
        sys.stdout.flush()
        print(str(e), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
