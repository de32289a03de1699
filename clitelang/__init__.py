"""CLite: a small C-like expression and statement language.

The package chains three stages: the lexer turns source text into tokens,
the parser builds a tuple AST while collecting syntax diagnostics, and the
interpreter walks the tree. :func:`run_source` runs all three and refuses to
evaluate a program that had syntax errors.


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging

from clitelang.exceptions import CompileError
from clitelang.interpreter import DEFAULT_MAX_CALL_DEPTH, Interpreter
from clitelang.lexer import Lexer
from clitelang.parser import Parser
from clitelang.values import format_value

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"


def parse_source(source: str, file: str = '<string>') -> tuple:
    """
    Parse source text into a program node.

    Raises:
        CompileError: If any syntax error was recorded.
    """
    parser = Parser(Lexer(source), file)
    program = parser.parse_program()
    if parser.had_error:
        raise CompileError(parser.diagnostics, file)
    return program


def run_source(source: str, file: str = '<string>', max_call_depth: int = DEFAULT_MAX_CALL_DEPTH):
    """
    Lex, parse and evaluate source text.

    Parameters:
        source (str): The program text.
        file (str): Name used in messages.
        max_call_depth (int): Deepest allowed nesting of function calls.

    Returns:
        The program result: the value of a top-level `return`, otherwise VOID.

    Raises:
        CompileError: If the source has syntax errors.
        RuntimeException: If evaluation fails.
    """
    program = parse_source(source, file)
    return Interpreter(file, max_call_depth).interpret(program)


__all__ = ["parse_source", "run_source", "format_value", "__version__"]
