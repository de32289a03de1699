"""AST node vocabulary for CLite.

Nodes are plain tuples. The first element is a :class:`NodeType` tag and the
last element is the source line, so ``node[0]`` and ``node[-1]`` work on every
node. Shapes:

    ('program',    [declarations], line)
    ('func_decl',  type, ident, [params], body_block, line)
    ('var_decl',   type, ident, initializer | None, line)
    ('type',       'int' | 'float', line)
    ('ident',      name, line)
    ('block',      [declarations], line)
    ('if',         condition, then_stmt, else_stmt | None, line)
    ('while',      condition, body_stmt, line)
    ('return',     expression | None, line)
    ('expr_stmt',  expression, line)
    ('binary',     Op, left, right, line)
    ('unary',      Op, operand, line)
    ('literal',    'int' | 'float', lexeme, line)
    ('assign',     ident, value, line)
    ('func_call',  ident, [arguments], line)

Function parameters are ``var_decl`` nodes without an initializer. Every node
owns its children; no node is shared between two parents.


File: nodes.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import sys
from contextlib import contextmanager
from enum import Enum
from typing import Iterator

from clitelang.exceptions import InternalError


# Extra host frames allowed while building or rendering deeply nested trees.
NESTING_HEADROOM = 10000


@contextmanager
def recursion_headroom(frames: int = NESTING_HEADROOM):
    """
    Raise the host recursion limit by ``frames`` for the duration of the block.
    """
    saved_limit = sys.getrecursionlimit()
    sys.setrecursionlimit(saved_limit + frames)
    try:
        yield
    finally:
        sys.setrecursionlimit(saved_limit)


class NodeType(str, Enum):
    """
    Enumeration of AST node tags.
    """
    PROGRAM = "program"
    FUNC_DECL = "func_decl"
    VAR_DECL = "var_decl"
    TYPE = "type"
    IDENT = "ident"
    BLOCK = "block"
    IF = "if"
    WHILE = "while"
    RETURN = "return"
    EXPR_STMT = "expr_stmt"
    BINARY = "binary"
    UNARY = "unary"
    LITERAL = "literal"
    ASSIGN = "assign"
    FUNC_CALL = "func_call"

    def __str__(self) -> str:
        return self.value


def children(node: tuple) -> Iterator[tuple]:
    """
    Yield the direct child nodes of ``node`` in source order.

    Raises:
        InternalError: If the node tag is unknown.
    """
    match node[0]:
        case NodeType.PROGRAM | NodeType.BLOCK:
            yield from node[1]
        case NodeType.FUNC_DECL:
            _, type_node, ident, params, body, _ = node
            yield type_node
            yield ident
            yield from params
            yield body
        case NodeType.VAR_DECL:
            _, type_node, ident, initializer, _ = node
            yield type_node
            yield ident
            if initializer is not None:
                yield initializer
        case NodeType.TYPE | NodeType.IDENT | NodeType.LITERAL:
            return
        case NodeType.IF:
            _, cond, then_branch, else_branch, _ = node
            yield cond
            yield then_branch
            if else_branch is not None:
                yield else_branch
        case NodeType.WHILE:
            yield node[1]
            yield node[2]
        case NodeType.RETURN:
            if node[1] is not None:
                yield node[1]
        case NodeType.EXPR_STMT:
            yield node[1]
        case NodeType.BINARY:
            yield node[2]
            yield node[3]
        case NodeType.UNARY:
            yield node[2]
        case NodeType.ASSIGN:
            yield node[1]
            yield node[2]
        case NodeType.FUNC_CALL:
            yield node[1]
            yield from node[2]
        case _:
            raise InternalError(f"unknown node {node[0]!r}", node[-1])


def walk(node: tuple) -> Iterator[tuple]:
    """
    Yield every node of the tree rooted at ``node`` exactly once, pre-order.

    Uses an explicit stack so very deep trees do not hit the recursion limit.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(children(current))))


def format_node(node: tuple, indent: int = 0) -> str:
    """
    Convert a tree back into readable source for debugging.

    Args:
        node (tuple): Any AST node.
        indent (int): Indentation level for statements.

    Returns:
        str: A source-like rendering of the node.
    """
    pad = '    ' * indent
    tag = node[0]
    match tag:
        case NodeType.PROGRAM:
            return '\n'.join(format_node(decl, indent) for decl in node[1])
        case NodeType.BLOCK:
            inner = '\n'.join(format_node(stmt, indent + 1) for stmt in node[1])
            return f"{pad}{{\n{inner}\n{pad}}}" if inner else f"{pad}{{}}"
        case NodeType.FUNC_DECL:
            _, type_node, ident, params, body, _ = node
            param_text = ', '.join(f"{p[1][1]} {p[2][1]}" for p in params)
            return (
                f"{pad}{type_node[1]} {ident[1]}({param_text})\n"
                f"{format_node(body, indent)}"
            )
        case NodeType.VAR_DECL:
            _, type_node, ident, initializer, _ = node
            if initializer is None:
                return f"{pad}{type_node[1]} {ident[1]};"
            return f"{pad}{type_node[1]} {ident[1]} = {format_node(initializer)};"
        case NodeType.IF:
            _, cond, then_branch, else_branch, _ = node
            text = f"{pad}if ({format_node(cond)})\n{format_node(then_branch, indent + 1)}"
            if else_branch is not None:
                text += f"\n{pad}else\n{format_node(else_branch, indent + 1)}"
            return text
        case NodeType.WHILE:
            return f"{pad}while ({format_node(node[1])})\n{format_node(node[2], indent + 1)}"
        case NodeType.RETURN:
            if node[1] is None:
                return f"{pad}return;"
            return f"{pad}return {format_node(node[1])};"
        case NodeType.EXPR_STMT:
            return f"{pad}{format_node(node[1])};"
        case NodeType.TYPE | NodeType.IDENT:
            return node[1]
        case NodeType.LITERAL:
            return node[2]
        case NodeType.BINARY:
            _, op, left, right, _ = node
            return f"({format_node(left)} {op.symbol} {format_node(right)})"
        case NodeType.UNARY:
            return f"{node[1].symbol}{format_node(node[2])}"
        case NodeType.ASSIGN:
            return f"{format_node(node[1])} = {format_node(node[2])}"
        case NodeType.FUNC_CALL:
            args = ', '.join(format_node(arg) for arg in node[2])
            return f"{node[1][1]}({args})"
        case _:
            return f"<node {tag}>"
