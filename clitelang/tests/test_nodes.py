"""
Tests for AST traversal helpers and internal error handling.
"""
import pytest

from clitelang.exceptions import InternalError, RuntimeException
from clitelang.interpreter import Interpreter
from clitelang.nodes import NodeType, children, format_node, walk

from clitelang.tests.utils import parse_source


def test_walk_visits_every_node_once():
    """
    Test pre-order traversal of a small program.
    """
    program = (NodeType.PROGRAM, parse_source("int x = 1 + 2;\nreturn x;"), 1)
    tags = [node[0] for node in walk(program)]
    assert tags == [
        'program', 'var_decl', 'type', 'ident', 'binary', 'literal', 'literal',
        'return', 'ident',
    ]


def test_children_of_function_and_call():
    """
    Test the child order of declarations and calls.
    """
    func, call_stmt = parse_source("int f(int a) { return a; }\nf(2);")
    assert [child[0] for child in children(func)] == ['type', 'ident', 'var_decl', 'block']
    assert [child[0] for child in children(call_stmt[1])] == ['ident', 'literal']


def test_unknown_node_is_an_internal_error():
    """
    Test that unknown tags are contract violations, not language errors.
    """
    with pytest.raises(InternalError):
        list(children(('bogus', 1)))

    interpreter = Interpreter('<test>')
    with pytest.raises(InternalError) as excinfo:
        interpreter.execute(('bogus', 3))
    assert not isinstance(excinfo.value, RuntimeException)
    assert "line 3" in str(excinfo.value)

    with pytest.raises(InternalError):
        interpreter.interpret((NodeType.BLOCK, [], 1))


def test_format_node_renders_source():
    """
    Test the source-like rendering used by debug output and error messages.
    """
    decl, stmt = parse_source("float y = f(1, x);\nz = 1 + 2 * -x;")
    assert format_node(decl) == "float y = f(1, x);"
    assert format_node(stmt) == "z = (1 + (2 * -x));"

    block = parse_source("{ return; }")[0]
    assert format_node(block) == "{\n    return;\n}"
