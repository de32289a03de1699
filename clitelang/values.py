"""Runtime values for CLite.

Integers are Python ``int`` objects kept inside the signed 32-bit range
(results wrap around), floats are Python ``float`` objects rounded to IEEE
single precision after every operation, and :data:`VOID` is the value of a
statement or of a function that returns nothing. Declared functions are bound
as :class:`FunctionValue` instances.


File: values.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import math
import struct


INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


class VoidType:
    """Type of the single :data:`VOID` value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'void'

    def __bool__(self) -> bool:
        return False


VOID = VoidType()


class FunctionValue:
    """Runtime representation of a declared function."""

    def __init__(self, name, return_type, params, body):
        self.name = name
        self.return_type = return_type
        # (type_name, param_name) pairs
        self.params = params
        self.body = body

    @property
    def arity(self) -> int:
        return len(self.params)

    def __repr__(self) -> str:
        return f"<function {self.name}/{self.arity}>"


def to_i32(value: int) -> int:
    """
    Wrap an arbitrary Python integer into the signed 32-bit range.
    """
    return (value - INT_MIN) % 2 ** 32 + INT_MIN


def to_f32(value: float) -> float:
    """
    Round a Python float to the nearest single-precision value.

    Magnitudes beyond the single-precision range become infinities.
    """
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return struct.unpack('<f', struct.pack('<f', value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def is_numeric(value) -> bool:
    """
    Return True for CLite integers and floats.
    """
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def convert(value, type_name: str):
    """
    Convert a numeric value to the declared type ``'int'`` or ``'float'``.

    Float to int truncates toward zero; int to float widens.
    """
    if type_name == 'float':
        return to_f32(float(value))
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return 0
        return to_i32(int(value))
    return value


def default_value(type_name: str):
    """
    Return the zero value of a declared type.
    """
    return 0.0 if type_name == 'float' else 0


def format_value(value) -> str:
    """
    Render a value the way the command line prints a program result.

    Integers print in decimal, floats with six fractional digits and
    :data:`VOID` as ``void``.
    """
    if value is VOID:
        return 'void'
    if isinstance(value, float):
        return f"{value:.6f}"
    if isinstance(value, FunctionValue):
        return repr(value)
    return str(value)
