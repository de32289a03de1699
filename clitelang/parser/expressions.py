"""
Expression parsing utilities for CLite.

These functions operate on a `clitelang.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, maintaining operator
precedence and associativity. Precedence from lowest to highest:

    assignment -> || -> && -> == != -> < <= > >= -> + - -> * / -> unary -> call -> primary


File: expressions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from clitelang.nodes import NodeType
from clitelang.operations import (
    Op,
    ADDITIVE_OPS,
    EQUALITY_OPS,
    MULTIPLICATIVE_OPS,
    RELATIONAL_OPS,
    UNARY_OPS,
)

if TYPE_CHECKING:
    from clitelang.parser import Parser


MAX_ARGUMENTS = 255


# ---- Highest precedence ----

def parse_primary(parser: 'Parser') -> tuple:
    """Parse a literal, identifier, or parenthesized expression."""
    tok = parser.curr_token

    if parser.match('INT_LITERAL'):
        return (NodeType.LITERAL, 'int', tok.lexeme, tok.line)

    if parser.match('FLOAT_LITERAL'):
        return (NodeType.LITERAL, 'float', tok.lexeme, tok.line)

    if parser.match('ID'):
        return (NodeType.IDENT, tok.lexeme, tok.line)

    if parser.match('LPAREN'):
        node = parser.expr()
        parser.eat('RPAREN', "Expect ')' after expression.")
        return node

    raise parser.error_at_current("Expect expression.")


def parse_call(parser: 'Parser') -> tuple:
    """Parse a call of a named function."""
    node = parser.primary()
    if node[0] != NodeType.IDENT or not parser.match('LPAREN'):
        return node

    args = []
    if not parser.check('RPAREN'):
        while True:
            if len(args) >= MAX_ARGUMENTS:
                parser.error_at_current(f"Can't have more than {MAX_ARGUMENTS} arguments.")
            args.append(parser.expr())
            if not parser.match('COMMA'):
                break
    parser.eat('RPAREN', "Expect ')' after arguments.")
    return (NodeType.FUNC_CALL, node, args, node[-1])


def parse_unary(parser: 'Parser') -> tuple:
    """Parse unary minus and logical negation, right to left."""
    tok = parser.curr_token
    if tok.type in UNARY_OPS:
        parser.advance()
        operand = parser.unary()
        return (NodeType.UNARY, UNARY_OPS[tok.type], operand, tok.line)
    return parser.call()


def parse_term(parser: 'Parser') -> tuple:
    """Parse multiplication and division expressions."""
    result = parser.unary()
    while parser.curr_token.type in MULTIPLICATIVE_OPS:
        op_tok = parser.curr_token
        parser.advance()
        result = (NodeType.BINARY, MULTIPLICATIVE_OPS[op_tok.type], result, parser.unary(), op_tok.line)
    return result


def parse_add_sub(parser: 'Parser') -> tuple:
    """Parse addition and subtraction expressions."""
    result = parser.term()
    while parser.curr_token.type in ADDITIVE_OPS:
        op_tok = parser.curr_token
        parser.advance()
        result = (NodeType.BINARY, ADDITIVE_OPS[op_tok.type], result, parser.term(), op_tok.line)
    return result


def parse_comparison(parser: 'Parser') -> tuple:
    """Parse relational expressions (<, <=, >, >=)."""
    result = parser.add_sub()
    while parser.curr_token.type in RELATIONAL_OPS:
        op_tok = parser.curr_token
        parser.advance()
        result = (NodeType.BINARY, RELATIONAL_OPS[op_tok.type], result, parser.add_sub(), op_tok.line)
    return result


def parse_equality(parser: 'Parser') -> tuple:
    """Parse equality expressions (==, !=)."""
    result = parser.comparison()
    while parser.curr_token.type in EQUALITY_OPS:
        op_tok = parser.curr_token
        parser.advance()
        result = (NodeType.BINARY, EQUALITY_OPS[op_tok.type], result, parser.comparison(), op_tok.line)
    return result


def parse_logical_and(parser: 'Parser') -> tuple:
    """Parse logical AND expressions using '&&'."""
    result = parser.equality()
    while parser.curr_token.type == 'AND':
        tok = parser.curr_token
        parser.advance()
        result = (NodeType.BINARY, Op.AND, result, parser.equality(), tok.line)
    return result


def parse_logical_or(parser: 'Parser') -> tuple:
    """Parse logical OR expressions using '||'."""
    result = parser.logical_and()
    while parser.curr_token.type == 'OR':
        tok = parser.curr_token
        parser.advance()
        result = (NodeType.BINARY, Op.OR, result, parser.logical_and(), tok.line)
    return result


def parse_assignment(parser: 'Parser') -> tuple:
    """
    Parse an assignment. The right-hand side recurses, so ``a = b = 1``
    groups as ``a = (b = 1)``. Only identifiers are valid targets.
    """
    target = parser.logical_or()
    if not parser.check('ASSIGN'):
        return target

    equals = parser.curr_token
    parser.advance()
    value = parser.assignment()
    if target[0] == NodeType.IDENT:
        return (NodeType.ASSIGN, target, value, equals.line)

    parser.error_at(equals, "Invalid assignment target.")
    return target


# ---- Entry point ----

def parse_expr(parser: 'Parser') -> tuple:
    """Parse an expression starting from the lowest-precedence operator."""
    return parser.assignment()
