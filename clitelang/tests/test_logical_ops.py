"""
Tests for '&&', '||' and conditionals in CLite.
"""
import pytest

from clitelang import run_source
from clitelang.exceptions import TypeMisuseException

from clitelang.tests.utils import run


def test_logical_results_are_zero_or_one():
    """
    Test that logical operators normalize their result.
    """
    assert run("return 2 && 3;") == "1"
    assert run("return 2 && 0;") == "0"
    assert run("return 0 || 0.0;") == "0"
    assert run("return 0 || -4;") == "1"
    assert run("return 0.5 && 1;") == "1"


def test_and_short_circuits():
    """
    Test that the right side of '&&' is skipped when the left is false.
    """
    assert run("int x = 0;\nreturn (x != 0) && (1 / x > 0);") == "0"
    assert run("int c = 0;\nint r = 0 && (c = 1);\nreturn c;") == "0"
    assert run("int c = 0;\nint r = 1 && (c = 5);\nreturn c;") == "5"


def test_or_short_circuits():
    """
    Test that the right side of '||' is skipped when the left is true.
    """
    assert run("return 1 || 1 / 0;") == "1"
    assert run("int c = 0;\nint r = 3 || (c = 1);\nreturn c;") == "0"
    assert run("int c = 0;\nint r = 0 || (c = 2);\nreturn c + r;") == "3"


def test_if_else_selects_branch():
    """
    Test conditionals with int and float conditions.
    """
    assert run("if (2.5) return 1; else return 2;") == "1"
    assert run("if (0.0) return 1; else return 2;") == "2"
    assert run("int x = 5;\nif (x > 3) { x = x * 2; }\nreturn x;") == "10"
    assert run("int x = 5;\nif (x > 9) x = 0;\nreturn x;") == "5"


def test_dangling_else_at_runtime():
    """
    Test that 'else' belongs to the inner 'if'.
    """
    source = (
        "int r = 0;\n"
        "if (0) if (1) r = 1; else r = 2;\n"
        "return r;\n"
    )
    assert run(source) == "0"


def test_condition_must_be_numeric():
    """
    Test that a function used as a condition is rejected.
    """
    with pytest.raises(TypeMisuseException) as excinfo:
        run_source("int f() { return 1; }\nif (f) return 1;")
    assert excinfo.value.message == "Condition must be numeric, got function 'f'"
    assert excinfo.value.line == 2

    with pytest.raises(TypeMisuseException):
        run_source("int f() { return 1; }\nreturn f || 1;")
