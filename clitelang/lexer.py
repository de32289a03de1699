"""Lexer for CLite.

The lexer is a lazy, single-pass scanner. Every call to
:meth:`Lexer.next_token` matches one combined regular expression of named
groups at the current offset and returns the next :class:`Token`, carrying
its type, the exact source slice (lexeme) and its line and column.

Whitespace and ``//`` line comments are skipped. Identifiers that exactly
match a reserved word (``int``, ``float``, ``if``, ``else``, ``while``,
``return``) become keyword tokens. Characters the language does not know
produce an ``ERROR`` token rather than an exception; the parser reports it.
Once the end of input is reached every further call returns ``EOF`` again.


File: lexer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import re
from dataclasses import dataclass


KEYWORDS: dict[str, str] = {
    'int': 'INT',
    'float': 'FLOAT',
    'if': 'IF',
    'else': 'ELSE',
    'while': 'WHILE',
    'return': 'RETURN',
}

TOKEN_CATEGORIES: dict[str, str] = {
    **{kind: 'keyword' for kind in KEYWORDS.values()},
    'ID': 'identifier',
    'INT_LITERAL': 'literal',
    'FLOAT_LITERAL': 'literal',
    **{kind: 'operator' for kind in (
        'PLUS', 'MINUS', 'MUL', 'DIV', 'ASSIGN', 'EQ', 'NE',
        'BANG', 'LT', 'LE', 'GT', 'GE', 'AND', 'OR',
    )},
    **{kind: 'punctuation' for kind in (
        'SEMICOLON', 'COMMA', 'LPAREN', 'RPAREN', 'LBRACE', 'RBRACE',
    )},
    'EOF': 'end',
    'ERROR': 'error',
}


token_specification: list[tuple[str, str]] = [
    # Literals
    ('FLOAT_LITERAL', r'\d+\.\d+'),
    ('INT_LITERAL',   r'\d+'),

    # Identifiers (keywords are split out after matching)
    ('ID',            r'[A-Za-z_][A-Za-z0-9_]*'),

    # Comments
    ('COMMENT',       r'//[^\n]*'),

    # Two-character operators
    ('EQ',            r'=='),
    ('NE',            r'!='),
    ('LE',            r'<='),
    ('GE',            r'>='),
    ('AND',           r'&&'),
    ('OR',            r'\|\|'),

    # Single-character operators
    ('PLUS',          r'\+'),
    ('MINUS',         r'-'),
    ('MUL',           r'\*'),
    ('DIV',           r'/'),
    ('ASSIGN',        r'='),
    ('BANG',          r'!'),
    ('LT',            r'<'),
    ('GT',            r'>'),

    # Delimiters
    ('SEMICOLON',     r';'),
    ('COMMA',         r','),
    ('LPAREN',        r'\('),
    ('RPAREN',        r'\)'),
    ('LBRACE',        r'\{'),
    ('RBRACE',        r'\}'),

    # Miscellaneous
    ('NEWLINE',       r'\n'),
    ('SKIP',          r'[ \t\r]+'),
    ('MISMATCH',      r'.'),
]

_TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in token_specification)
)


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    Attributes:
        type (str): The token type, e.g. ``'ID'`` or ``'SEMICOLON'``.
        lexeme (str): The exact source text, or the message for ``ERROR`` tokens.
        line (int): 1-based source line.
        column (int): 1-based column of the first character.
    """
    type: str
    lexeme: str
    line: int
    column: int

    @property
    def category(self) -> str:
        """
        Return the broad kind of the token (keyword, literal, operator ...).
        """
        return TOKEN_CATEGORIES[self.type]

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.type}, {self.lexeme!r}, line={self.line}, col={self.column})"


class Lexer:
    """
    Stateful scanner producing tokens on demand.
    """
    def __init__(self, source: str):
        """
        Initialize the lexer.

        Parameters:
            source (str): The complete source text.
        """
        self.source = source
        self.position = 0
        self.line = 1
        self.line_start = 0

    def _column(self) -> int:
        return self.position - self.line_start + 1

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Returns:
            Token: The next token; ``EOF`` once the input is exhausted.
        """
        while True:
            if self.position >= len(self.source):
                return Token('EOF', '', self.line, self._column())

            match_obj = _TOKEN_REGEX.match(self.source, self.position)
            kind = match_obj.lastgroup
            value = match_obj.group()
            column = self._column()
            self.position = match_obj.end()

            if kind == 'NEWLINE':
                self.line += 1
                self.line_start = self.position
                continue
            if kind in ('SKIP', 'COMMENT'):
                continue
            if kind == 'MISMATCH':
                return Token('ERROR', f"Unexpected character '{value}'.", self.line, column)
            if kind == 'ID':
                kind = KEYWORDS.get(value, 'ID')
            return Token(kind, value, self.line, column)

    def __iter__(self):
        """
        Yield tokens up to and including ``EOF``.
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == 'EOF':
                return


def tokenize(code: str) -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.

    Returns:
        list[Token]: All tokens, terminated by a single ``EOF`` token.
    """
    return list(Lexer(code))
