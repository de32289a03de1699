"""Shared definitions for AST operator identifiers.

The parser labels binary and unary nodes with members of :class:`Op` and the
interpreter dispatches on them. Keeping them in one place prevents the two
components from drifting apart when an operator is added or renamed.


File: operations.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from enum import Enum


class Op(str, Enum):
    """
    Enumeration of supported operators.
    """

    # Arithmetic
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"

    # Comparison
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    LT = "lt"
    GE = "ge"
    LE = "le"

    # Unary
    NEG = "neg"
    NOT = "not"

    # Boolean
    AND = "and"
    OR = "or"

    @property
    def symbol(self) -> str:
        """
        Return the source spelling of the operator.
        """
        return _SYMBOLS[self]

    def __str__(self) -> str:  # pragma: no cover - trivial
        """
        Return the underlying string value for nicer debug output.
        """
        return self.value


_SYMBOLS = {
    Op.ADD: '+',
    Op.SUB: '-',
    Op.MUL: '*',
    Op.DIV: '/',
    Op.EQ: '==',
    Op.NE: '!=',
    Op.GT: '>',
    Op.LT: '<',
    Op.GE: '>=',
    Op.LE: '<=',
    Op.NEG: '-',
    Op.NOT: '!',
    Op.AND: '&&',
    Op.OR: '||',
}

# Token type -> operator, per precedence level.
EQUALITY_OPS = {'EQ': Op.EQ, 'NE': Op.NE}
RELATIONAL_OPS = {'LT': Op.LT, 'LE': Op.LE, 'GT': Op.GT, 'GE': Op.GE}
ADDITIVE_OPS = {'PLUS': Op.ADD, 'MINUS': Op.SUB}
MULTIPLICATIVE_OPS = {'MUL': Op.MUL, 'DIV': Op.DIV}
UNARY_OPS = {'MINUS': Op.NEG, 'BANG': Op.NOT}


__all__ = [
    "Op",
    "EQUALITY_OPS",
    "RELATIONAL_OPS",
    "ADDITIVE_OPS",
    "MULTIPLICATIVE_OPS",
    "UNARY_OPS",
]
