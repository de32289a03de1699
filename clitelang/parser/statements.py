"""Statement parsing utilities for CLite.

These functions operate on a `clitelang.parser.parser.Parser` instance and
handle declarations and the statement forms of the language: blocks,
conditionals, loops, returns and expression statements.


File: statements.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from clitelang.exceptions import ParseError
from clitelang.lexer import Token
from clitelang.nodes import NodeType

if TYPE_CHECKING:
    from clitelang.parser import Parser


MAX_PARAMETERS = 255


def parse_declaration(parser: 'Parser') -> tuple | None:
    """
    Parse a declaration or statement. On a syntax error, skip to the next
    statement boundary and return None so parsing can continue.

    Syntax:
        <type> <identifier> ...  |  <statement>

    Args:
        parser: The parser instance.

    Returns:
        tuple | None: The AST node, or None if it could not be parsed.
    """
    start = parser.consumed
    try:
        if parser.match('INT', 'FLOAT'):
            node = parser.parse_typed_declaration()
        else:
            node = parser.statement()
    except ParseError:
        parser.synchronize(start)
        return None
    parser.panic_mode = False
    return node


def parse_typed_declaration(parser: 'Parser') -> tuple:
    """
    Parse the remainder of a declaration whose type keyword was consumed.
    A name followed by '(' starts a function declaration.

    Syntax:
        <type> <identifier> [= <expression>] ;
        <type> <identifier> ( <params> ) { <declaration>* }

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('var_decl', ...) or ('func_decl', ...)
    """
    type_tok = parser.prev_token
    type_node = (NodeType.TYPE, type_tok.lexeme, type_tok.line)
    name_tok = parser.eat('ID', "Expect variable name.")
    if parser.check('LPAREN'):
        return _parse_function(parser, type_node, name_tok)
    return _parse_variable(parser, type_node, name_tok)


def _parse_variable(parser: 'Parser', type_node: tuple, name_tok: Token) -> tuple:
    initializer = None
    if parser.match('ASSIGN'):
        initializer = parser.expr()
    parser.eat('SEMICOLON', "Expect ';' after variable declaration.")
    # Declared after the initializer, which still sees any outer binding.
    parser.declare(name_tok)
    ident = (NodeType.IDENT, name_tok.lexeme, name_tok.line)
    return (NodeType.VAR_DECL, type_node, ident, initializer, type_node[-1])


def _parse_function(parser: 'Parser', type_node: tuple, name_tok: Token) -> tuple:
    parser.declare(name_tok)
    parser.eat('LPAREN', "Expect '(' after function name.")
    params = []
    # Parameters and top-level body declarations share one scope.
    with parser.scope():
        if not parser.check('RPAREN'):
            while True:
                if len(params) >= MAX_PARAMETERS:
                    parser.error_at_current(f"Can't have more than {MAX_PARAMETERS} parameters.")
                if not parser.match('INT', 'FLOAT'):
                    raise parser.error_at_current("Expect parameter type.")
                param_type = parser.prev_token
                param_name = parser.eat('ID', "Expect parameter name.")
                parser.declare(param_name)
                params.append((
                    NodeType.VAR_DECL,
                    (NodeType.TYPE, param_type.lexeme, param_type.line),
                    (NodeType.IDENT, param_name.lexeme, param_name.line),
                    None,
                    param_type.line,
                ))
                if not parser.match('COMMA'):
                    break
        parser.eat('RPAREN', "Expect ')' after parameters.")
        if not parser.check('LBRACE'):
            raise parser.error_at_current("Expect '{' before function body.")
        body = parser.block(new_scope=False)
    ident = (NodeType.IDENT, name_tok.lexeme, name_tok.line)
    return (NodeType.FUNC_DECL, type_node, ident, params, body, type_node[-1])


def parse_block(parser: 'Parser', new_scope: bool = True) -> tuple:
    """
    Parse a block of declarations enclosed in braces.

    Syntax:
        { <declaration>* }

    Args:
        parser: The parser instance.
        new_scope: False when the block shares the scope of its function.

    Returns:
        tuple: ('block', list_of_statements, line_number)
    """
    tok = parser.eat('LBRACE', "Expect '{' before block.")
    statements = []
    parser.block_depth += 1
    try:
        with parser.scope(new_scope):
            while not parser.check('RBRACE') and not parser.check('EOF'):
                stmt = parser.declaration()
                if stmt is not None:
                    statements.append(stmt)
    finally:
        parser.block_depth -= 1
    parser.eat('RBRACE', "Expect '}' after block.")
    return (NodeType.BLOCK, statements, tok.line)


def parse_statement(parser: 'Parser') -> tuple:
    """
    Parse a single statement.

    Syntax:
        <if> | <while> | <return> | <block> | <expression> ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: representing the AST node.
    """
    if parser.match('IF'):
        return parser.parse_if()
    if parser.match('WHILE'):
        return parser.parse_while()
    if parser.match('RETURN'):
        return parser.parse_return()
    if parser.check('LBRACE'):
        return parser.block()
    return parser.parse_expression_statement()


def parse_if(parser: 'Parser') -> tuple:
    """
    Parse a conditional 'if' statement with an optional else branch.

    Syntax:
        if ( <condition> ) <statement> [else <statement>]

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('if', condition, then_branch, else_branch, line_number)
    """
    tok = parser.prev_token
    parser.eat('LPAREN', "Expect '(' after 'if'.")
    condition = parser.expr()
    parser.eat('RPAREN', "Expect ')' after if condition.")
    then_branch = parser.statement()
    else_branch = None
    if parser.match('ELSE'):
        else_branch = parser.statement()
    return (NodeType.IF, condition, then_branch, else_branch, tok.line)


def parse_while(parser: 'Parser') -> tuple:
    """
    Parse a 'while' loop.

    Syntax:
        while ( <condition> ) <statement>

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('while', condition, body, line_number)
    """
    tok = parser.prev_token
    parser.eat('LPAREN', "Expect '(' after 'while'.")
    condition = parser.expr()
    parser.eat('RPAREN', "Expect ')' after while condition.")
    body = parser.statement()
    return (NodeType.WHILE, condition, body, tok.line)


def parse_return(parser: 'Parser') -> tuple:
    """
    Parse a 'return' statement.

    Syntax:
        return [<expression>] ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('return', expression_or_None, line_number)
    """
    tok = parser.prev_token
    expr_node = None
    if not parser.check('SEMICOLON'):
        expr_node = parser.expr()
    parser.eat('SEMICOLON', "Expect ';' after return value.")
    return (NodeType.RETURN, expr_node, tok.line)


def parse_expression_statement(parser: 'Parser') -> tuple:
    """
    Parse an expression evaluated for its effect.

    Syntax:
        <expression> ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('expr_stmt', expression, line_number)
    """
    expr_node = parser.expr()
    parser.eat('SEMICOLON', "Expect ';' after expression.")
    return (NodeType.EXPR_STMT, expr_node, expr_node[-1])
