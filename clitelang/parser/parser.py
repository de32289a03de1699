"""
Main parser entry point for CLite.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process and owns the token plumbing, diagnostics and error
recovery. The actual grammar routines are split across
`clitelang.parser.expressions` and `clitelang.parser.statements`.


File: parser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging
from contextlib import contextmanager

from clitelang.exceptions import Diagnostic, ParseError
from clitelang.lexer import Lexer, Token
from clitelang.nodes import NodeType, recursion_headroom

from . import expressions as _expr
from . import statements as _stmt


logger = logging.getLogger(__name__)

# Tokens at which a recovering parser resumes.
SYNC_TOKENS = frozenset({'INT', 'FLOAT', 'IF', 'WHILE', 'RETURN'})


class Parser:
    """CLite parser."""

    def __init__(self, lexer: Lexer, file: str = '<string>'):
        """
        Initialize the parser and prime the first token.

        Parameters:
            lexer (Lexer): The token source.
            file (str): The name of the script.
        """
        self.lexer = lexer
        self.source_file = file
        self.curr_token: Token | None = None
        self.prev_token: Token | None = None
        self.diagnostics: list[Diagnostic] = []
        self.had_error = False
        self.panic_mode = False
        self.consumed = 0
        self.scopes: list[set[str]] = [set()]
        self.block_depth = 0
        self.advance()


    # Token plumbing
    def advance(self) -> None:
        """
        Move to the next token, reporting and skipping lexer error tokens.
        """
        self.prev_token = self.curr_token
        while True:
            self.curr_token = self.lexer.next_token()
            if self.curr_token.type != 'ERROR':
                break
            self.error_at(self.curr_token, self.curr_token.lexeme)
        self.consumed += 1

    def check(self, token_type: str) -> bool:
        """
        Return True if the current token has the given type.
        """
        return self.curr_token.type == token_type

    def match(self, *token_types: str) -> bool:
        """
        Consume the current token if it has one of the given types.
        """
        if self.curr_token.type in token_types:
            self.advance()
            return True
        return False

    def eat(self, token_type: str, message: str) -> Token:
        """
        Consume the current token if it matches the expected type.

        Parameters:
            token_type (str): The expected token type.
            message (str): Diagnostic to record otherwise.

        Returns:
            Token: The consumed token.

        Raises:
            ParseError: If the token does not match the expected type.
        """
        if self.curr_token.type == token_type:
            self.advance()
            return self.prev_token
        raise self.error_at(self.curr_token, message)


    # Diagnostics and recovery
    def error_at(self, token: Token, message: str) -> ParseError:
        """
        Record a diagnostic at ``token`` unless already recovering.

        Returns:
            ParseError: An exception the caller may raise to unwind.
        """
        if not self.panic_mode:
            self.panic_mode = True
            self.had_error = True
            if token.type == 'EOF':
                where = ' at end'
            elif token.type == 'ERROR':
                where = ''
            else:
                where = f" at '{token.lexeme}'"
            diagnostic = Diagnostic(token.line, token.column, message, where)
            self.diagnostics.append(diagnostic)
            logger.debug("%s: %s", self.source_file, diagnostic)
        return ParseError(message)

    def error_at_current(self, message: str) -> ParseError:
        """
        Record a diagnostic at the current token.
        """
        return self.error_at(self.curr_token, message)

    def synchronize(self, start: int) -> None:
        """
        Discard tokens until a statement boundary.

        Parameters:
            start (int): Value of ``consumed`` when the failing declaration began.
        """
        self.panic_mode = False
        if self.consumed == start:
            self.advance()
        while self.curr_token.type != 'EOF':
            if self.prev_token.type == 'SEMICOLON':
                return
            if self.curr_token.type in SYNC_TOKENS:
                return
            if self.curr_token.type == 'RBRACE' and self.block_depth > 0:
                return
            self.advance()

    def abandon_nesting(self) -> None:
        """
        Report input nested deeper than the host stack allows and skip the
        rest of it.
        """
        self.panic_mode = False
        self.error_at_current("Expression nesting too deep.")
        while not self.check('EOF'):
            self.advance()


    # Declared names
    @contextmanager
    def scope(self, new_scope: bool = True):
        """
        Track declarations of a nested scope for the duration of the block.
        """
        if not new_scope:
            yield
            return
        self.scopes.append(set())
        try:
            yield
        finally:
            self.scopes.pop()

    def declare(self, name_tok: Token) -> None:
        """
        Record a name in the innermost scope, rejecting duplicates.
        """
        names = self.scopes[-1]
        if name_tok.lexeme in names:
            self.error_at(name_tok, f"Already a variable named '{name_tok.lexeme}' in this scope.")
            return
        names.add(name_tok.lexeme)


    # Expression wrappers
    def primary(self) -> tuple:
        """
        Parse a literal, identifier, or parenthesized expression.
        """
        return _expr.parse_primary(self)

    def call(self) -> tuple:
        """
        Parse a function call or fall through to a primary expression.
        """
        return _expr.parse_call(self)

    def unary(self) -> tuple:
        """
        Parse a unary minus or logical negation.
        """
        return _expr.parse_unary(self)

    def term(self) -> tuple:
        """
        Parse a term in an expression, involving multiplication or division.
        """
        return _expr.parse_term(self)

    def add_sub(self) -> tuple:
        """
        Parse an addition or subtraction expression.
        """
        return _expr.parse_add_sub(self)

    def comparison(self) -> tuple:
        """
        Parse a comparison expression using relational operators.
        """
        return _expr.parse_comparison(self)

    def equality(self) -> tuple:
        """
        Parse an equality expression.
        """
        return _expr.parse_equality(self)

    def logical_and(self) -> tuple:
        """
        Parse a logical AND expression.
        """
        return _expr.parse_logical_and(self)

    def logical_or(self) -> tuple:
        """
        Parse a logical OR expression.
        """
        return _expr.parse_logical_or(self)

    def assignment(self) -> tuple:
        """
        Parse a right-associative assignment.
        """
        return _expr.parse_assignment(self)

    def expr(self) -> tuple:
        """
        Parse a full expression.
        """
        return _expr.parse_expr(self)


    # Statement wrappers
    def block(self, new_scope: bool = True) -> tuple:
        """
        Parse a block of declarations enclosed in braces.
        """
        return _stmt.parse_block(self, new_scope)

    def statement(self) -> tuple:
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)

    def declaration(self) -> tuple | None:
        """
        Parse a declaration or statement, recovering from syntax errors.
        """
        return _stmt.parse_declaration(self)

    def parse_if(self) -> tuple:
        """
        Parse an 'if' conditional statement.
        """
        return _stmt.parse_if(self)

    def parse_while(self) -> tuple:
        """
        Parse a 'while' loop.
        """
        return _stmt.parse_while(self)

    def parse_return(self) -> tuple:
        """
        Parse a 'return' statement.
        """
        return _stmt.parse_return(self)

    def parse_expression_statement(self) -> tuple:
        """
        Parse an expression followed by ';'.
        """
        return _stmt.parse_expression_statement(self)

    def parse_typed_declaration(self) -> tuple:
        """
        Parse a variable or function declaration after its type keyword.
        """
        return _stmt.parse_typed_declaration(self)


    def parse_program(self) -> tuple:
        """
        Parse the full input into a program node.

        A best-effort tree is returned even when errors were recorded;
        check ``had_error`` before evaluating it.
        """
        line = self.curr_token.line
        declarations = []
        with recursion_headroom():
            while not self.match('EOF'):
                try:
                    decl = self.declaration()
                except RecursionError:
                    self.abandon_nesting()
                    break
                if decl is not None:
                    declarations.append(decl)
        return (NodeType.PROGRAM, declarations, line)
