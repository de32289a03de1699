"""
Utility functions shared across CLite tests.
"""
from clitelang import run_source
from clitelang.lexer import Lexer
from clitelang.parser import Parser
from clitelang.values import format_value


def parse_with_errors(source: str) -> tuple[tuple, Parser]:
    """
    Parse source code and return the AST together with the parser, so the
    caller can inspect ``had_error`` and ``diagnostics``.
    """
    parser = Parser(Lexer(source), "<test>")
    program = parser.parse_program()
    return program, parser


def parse_source(source: str) -> list:
    """
    Parse source code that must be free of syntax errors and return the
    program's top-level declarations.
    """
    program, parser = parse_with_errors(source)
    assert not parser.had_error, [str(d) for d in parser.diagnostics]
    return program[1]


def run(source: str) -> str:
    """
    Run source code and return the printed form of its result.
    """
    return format_value(run_source(source, "<test>"))
