"""Errors.

Three separate families live here:

- :class:`Diagnostic` and :class:`CompileError` describe syntax errors. The
  parser records diagnostics and keeps going; the pipeline raises a single
  ``CompileError`` carrying all of them.
- :class:`RuntimeException` and its subclasses are language-level failures
  raised by the interpreter. Each one halts evaluation of the program.
- :class:`InternalError` signals a parser/interpreter contract violation and
  is never expected from a syntactically valid program.


File: exceptions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Diagnostic:
    """
    A syntax error recorded by the parser.
    """
    line: int
    column: int
    message: str
    where: str = ''

    def __str__(self) -> str:
        return f"[line {self.line}:{self.column}] Error{self.where}: {self.message}"


class CompileError(SyntaxError):
    """
    Raised when source text could not be parsed without errors.
    """
    def __init__(self, diagnostics, file=None):
        self.diagnostics = list(diagnostics)
        self.file = file
        message = '\n'.join(str(d) for d in self.diagnostics)
        if file is not None:
            message += f"\nin {file}"
        super().__init__(message)


class ParseError(Exception):
    """
    Unwinds the parser to the nearest declaration after a syntax error.
    """


class RuntimeException(Exception):
    """
    Base class for errors raised while evaluating a program.
    """
    kind = 'RuntimeError'

    def __init__(self, message, line=None, file=None):
        self.message = message
        self.line = line
        self.file = file
        if line is not None:
            message += f" on line {line}"
        if file is not None:
            message += f" in {file}"
        super().__init__(message)


class UndefinedVariableException(RuntimeException):
    """
    Error for undefined variables.
    """
    kind = 'UndefinedVariable'

    def __init__(self, varname, line=None, file=None):
        self.varname = varname
        super().__init__(f"Undefined variable '{varname}'", line, file)


class ArityMismatchException(RuntimeException):
    """
    Error for calls with the wrong number of arguments.
    """
    kind = 'ArityMismatch'

    def __init__(self, func_name, expected, got, line=None, file=None):
        self.func_name = func_name
        self.expected = expected
        self.got = got
        super().__init__(
            f"Function '{func_name}' expects {expected} arguments but got {got}",
            line,
            file,
        )


class DivisionByZeroException(RuntimeException):
    """
    Error for division by zero.
    """
    kind = 'DivisionByZero'

    def __init__(self, line=None, file=None):
        super().__init__("Division by zero", line, file)


class TypeMisuseException(RuntimeException):
    """
    Error for operands or callees of the wrong kind.
    """
    kind = 'TypeMisuse'


class StackOverflowException(RuntimeException):
    """
    Error for call nesting deeper than the interpreter allows.
    """
    kind = 'StackOverflow'

    def __init__(self, depth, line=None, file=None):
        self.depth = depth
        super().__init__(f"Maximum call depth ({depth}) exceeded", line, file)


class InternalError(Exception):
    """
    Error for unknown node or operator combinations.
    """
    def __init__(self, what, line=None):
        self.what = what
        self.line = line
        message = f"Internal error: {what}"
        if line is not None:
            message += f" on line {line}"
        super().__init__(message)
