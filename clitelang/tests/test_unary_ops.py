"""
Tests for unary operators in CLite.
"""
import pytest

from clitelang import run_source
from clitelang.exceptions import TypeMisuseException

from clitelang.tests.utils import run


def test_negation():
    """
    Test that negation keeps the numeric kind of its operand.
    """
    assert run("return -5;") == "-5"
    assert run("return --5;") == "5"
    assert run("return -2.5;") == "-2.500000"
    assert run("int x = 3;\nreturn -x * 2;") == "-6"


def test_negating_the_minimum_integer_wraps():
    """
    Test that -(-2147483648) wraps back to itself.
    """
    assert run("return -(-2147483647 - 1);") == "-2147483648"


def test_logical_not():
    """
    Test that '!' maps zero to 1 and anything else to 0.
    """
    assert run("return !0;") == "1"
    assert run("return !7;") == "0"
    assert run("return !0.0;") == "1"
    assert run("return !-0.5;") == "0"
    assert run("return !!42;") == "1"


def test_unary_operand_must_be_numeric():
    """
    Test that a function cannot be negated.
    """
    with pytest.raises(TypeMisuseException) as excinfo:
        run_source("int f() { return 1; }\nreturn !f;")
    assert "'!'" in excinfo.value.message
    assert excinfo.value.line == 2
