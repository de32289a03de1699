"""
CLite Interpreter

This is the main entry point for the CLite interpreter.

Workflow:
1. The source script is read from the file named on the command line.
2. The Lexer scans the source code into tokens on demand.
3. The Parser builds an AST, collecting every syntax error it finds.
4. If there were no syntax errors, the Interpreter walks the AST.
5. The program result is printed: integers in decimal, floats with six
   fractional digits, and `void` when the program returned nothing.

Exit codes:
    0   success
    64  usage error
    65  syntax errors
    70  runtime error
    74  script could not be read

Set CLITEDEBUG=1 (or pass --debug) to log debug output and dump the tokens
and AST before evaluation.


File: clite.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
import argparse
import logging
import os
import sys

from clitelang.exceptions import RuntimeException
from clitelang.interpreter import DEFAULT_MAX_CALL_DEPTH, Interpreter
from clitelang.lexer import Lexer, tokenize
from clitelang.nodes import format_node, recursion_headroom, walk
from clitelang.parser import Parser
from clitelang.values import format_value

EXIT_OK = 0
EXIT_USAGE = 64
EXIT_DATAERR = 65
EXIT_SOFTWARE = 70
EXIT_IOERR = 74


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with the usage code on bad arguments."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_arg_parser() -> argparse.ArgumentParser:
    """
    Build the command line parser.
    """
    parser = _ArgumentParser(
        prog="clite",
        description="Run a CLite script and print its result.",
    )
    parser.add_argument("script", help="Path to a CLite source file.")
    parser.add_argument(
        "--debug",
        action="store_true",
        default=bool(os.environ.get("CLITEDEBUG")),
        help="Enable debug logging and dump tokens and AST (also CLITEDEBUG=1).",
    )
    parser.add_argument("--tokens", action="store_true", help="Print the token stream.")
    parser.add_argument("--ast", action="store_true", help="Print the parsed program.")
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_CALL_DEPTH,
        help=f"Deepest allowed nesting of function calls (default {DEFAULT_MAX_CALL_DEPTH}).",
    )
    return parser


def debug_print_tokens(source: str):
    """
    Print the tokenized source.
    """
    print("\nTokens:\n")
    for token in tokenize(source):
        print(f"  {token!r}")
    print(" ")


def debug_print_ast(ast):
    """
    Print the AST as source.
    """
    print(f"\nAST ({sum(1 for _ in walk(ast))} nodes):\n")
    with recursion_headroom():
        print(format_node(ast))
    print(" ")


def run_script(script_name: str, source: str, max_depth: int = DEFAULT_MAX_CALL_DEPTH,
               show_tokens: bool = False, show_ast: bool = False) -> int:
    """
    Run CLite source text and return the process exit code.
    """
    if show_tokens:
        debug_print_tokens(source)

    parser = Parser(Lexer(source), script_name)
    ast = parser.parse_program()
    if parser.had_error:
        for diagnostic in parser.diagnostics:
            print(f"{script_name}:{diagnostic}", file=sys.stderr)
        return EXIT_DATAERR

    if show_ast:
        debug_print_ast(ast)

    interpreter = Interpreter(script_name, max_depth)
    try:
        result = interpreter.interpret(ast)
    except RuntimeException as e:
        print(f"{e.kind}: {e}", file=sys.stderr)
        return EXIT_SOFTWARE

    print(format_value(result))
    return EXIT_OK


def main(argv: list[str]) -> int:
    """
    Entry point for the CLI.
    """
    args = build_arg_parser().parse_args(argv[1:])
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        with open(args.script, "r", encoding="utf-8") as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Could not read file \"{args.script}\": {e}", file=sys.stderr)
        return EXIT_IOERR

    return run_script(
        args.script,
        source,
        max_depth=args.max_depth,
        show_tokens=args.tokens or args.debug,
        show_ast=args.ast or args.debug,
    )


def cli() -> None:
    """
    Console script wrapper.
    """
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    cli()
