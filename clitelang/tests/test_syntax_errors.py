"""
Tests for syntax error reporting and recovery in the CLite parser.
"""
import sys

import pytest

from clitelang import run_source
from clitelang.exceptions import CompileError

from clitelang.tests.utils import parse_with_errors, run


def messages(source: str) -> list[str]:
    """
    Parse source code and return the recorded diagnostic messages.
    """
    _, parser = parse_with_errors(source)
    return [d.message for d in parser.diagnostics]


def test_missing_expression_is_reported_with_position():
    """
    Test that a diagnostic carries line, column and the offending lexeme.
    """
    program, parser = parse_with_errors("int x = ;")
    assert parser.had_error
    assert len(parser.diagnostics) == 1
    diagnostic = parser.diagnostics[0]
    assert (diagnostic.line, diagnostic.column) == (1, 9)
    assert diagnostic.message == "Expect expression."
    assert str(diagnostic) == "[line 1:9] Error at ';': Expect expression."
    assert program[1] == []


def test_errors_in_separate_statements_are_all_collected():
    """
    Test that parsing continues after an error and finds later ones.
    """
    program, parser = parse_with_errors(
        "int x = ;\n"
        "int y = 2;\n"
        "int z = ;\n"
    )
    assert [d.line for d in parser.diagnostics] == [1, 3]
    assert len(program[1]) == 1
    assert program[1][0][2] == ('ident', 'y', 2)


def test_missing_semicolon_resumes_at_next_declaration():
    """
    Test that the parser resynchronizes at a token that starts a declaration.
    """
    program, parser = parse_with_errors("int x = 1\nint y = 2;")
    assert [str(d) for d in parser.diagnostics] == [
        "[line 2:1] Error at 'int': Expect ';' after variable declaration.",
    ]
    assert [decl[2][1] for decl in program[1]] == ['y']


def test_error_inside_block_recovers_within_block():
    """
    Test that recovery inside a block keeps the rest of the block.
    """
    program, parser = parse_with_errors("{ int a = ; int b = 2; }\nint c = 3;")
    assert len(parser.diagnostics) == 1
    block, decl_c = program[1]
    assert block[0] == 'block'
    assert [stmt[2][1] for stmt in block[1]] == ['b']
    assert decl_c[2][1] == 'c'


def test_stray_closing_brace_is_skipped():
    """
    Test that a token which cannot start anything is discarded.
    """
    program, parser = parse_with_errors("} int x = 1;")
    assert messages("} int x = 1;") == ["Expect expression."]
    assert program[1][0][0] == 'var_decl'


def test_unterminated_block_reports_at_end():
    """
    Test that running out of input inside a block is reported 'at end'.
    """
    _, parser = parse_with_errors("{ int x = 1;")
    assert [str(d) for d in parser.diagnostics] == [
        "[line 1:13] Error at end: Expect '}' after block.",
    ]


def test_lexer_error_is_reported_once_per_statement():
    """
    Test that an error token is reported and suppresses follow-on errors.
    """
    _, parser = parse_with_errors("int x = 1 @ 2;\nint y = 3;")
    assert [str(d) for d in parser.diagnostics] == [
        "[line 1:11] Error: Unexpected character '@'.",
    ]


def test_invalid_assignment_target():
    """
    Test that only identifiers may be assigned to.
    """
    assert messages("1 = 2;") == ["Invalid assignment target."]
    assert messages("a + b = 2;") == ["Invalid assignment target."]
    assert messages("(a) = 2;") == []


def test_duplicate_declarations_in_one_scope():
    """
    Test that a name may be declared only once per scope.
    """
    assert messages("int x = 1; int x = 2;") == ["Already a variable named 'x' in this scope."]
    assert messages("int x = 1; { int x = 2; }") == []
    assert messages("int f(int a, int a) { return a; }") == [
        "Already a variable named 'a' in this scope.",
    ]
    assert messages("int f(int a) { int a = 1; return a; }") == [
        "Already a variable named 'a' in this scope.",
    ]
    assert messages("int f(int a) { { int a = 1; } return a; }") == []
    assert messages("int f() { return 1; } float f;") == [
        "Already a variable named 'f' in this scope.",
    ]


def test_parameter_limit():
    """
    Test that more than 255 parameters is reported but does not stop parsing.
    """
    def declare(count: int) -> str:
        params = ', '.join(f"int p{i}" for i in range(count))
        return f"int f({params}) {{ return p0; }}\nint after = 1;"

    assert messages(declare(255)) == []

    program, parser = parse_with_errors(declare(256))
    assert [d.message for d in parser.diagnostics] == ["Can't have more than 255 parameters."]
    func, after = program[1]
    assert func[0] == 'func_decl'
    assert len(func[3]) == 256
    assert after[2][1] == 'after'


def test_malformed_declarations():
    """
    Test diagnostics for broken declaration and statement syntax.
    """
    assert messages("int = 3;") == ["Expect variable name."]
    assert messages("int f(x) { }") == ["Expect parameter type."]
    assert messages("int f(int) { }") == ["Expect parameter name."]
    assert messages("int f(int a { }") == ["Expect ')' after parameters."]
    assert messages("int f() return 1;") == ["Expect '{' before function body."]
    assert messages("if x) y;") == ["Expect '(' after 'if'."]
    assert messages("while (x y;") == ["Expect ')' after while condition."]
    assert messages("return 1") == ["Expect ';' after return value."]
    assert messages("f(1, 2;") == ["Expect ')' after arguments."]
    assert messages("x") == ["Expect ';' after expression."]


def test_run_source_refuses_programs_with_syntax_errors():
    """
    Test that the pipeline raises CompileError carrying every diagnostic.
    """
    with pytest.raises(CompileError) as excinfo:
        run_source("int x = ;\nreturn 1 +;\n", "prog.cl")
    assert len(excinfo.value.diagnostics) == 2
    assert isinstance(excinfo.value, SyntaxError)
    assert "prog.cl" in str(excinfo.value)


def test_argument_limit():
    """
    Test that more than 255 call arguments is reported but does not stop parsing.
    """
    def call(count: int) -> str:
        args = ', '.join(str(i) for i in range(count))
        return f"f({args});\nint after = 1;"

    assert messages(call(255)) == []

    program, parser = parse_with_errors(call(256))
    assert [d.message for d in parser.diagnostics] == ["Can't have more than 255 arguments."]
    call_stmt, after = program[1]
    assert call_stmt[1][0] == 'func_call'
    assert len(call_stmt[1][2]) == 256
    assert after[2][1] == 'after'


def test_deeply_nested_input_parses():
    """
    Test that nesting well past the default host recursion limit still parses
    and runs.
    """
    parens = "return " + "(" * 100 + "1" + ")" * 100 + ";"
    assert run(parens) == "1"

    blocks = "{" * 200 + "return 7;" + "}" * 200
    assert run(blocks) == "7"


def test_nesting_beyond_the_host_stack_is_a_syntax_error():
    """
    Test that input too deep to parse is reported as a diagnostic and the
    recursion limit is restored afterwards.
    """
    limit = sys.getrecursionlimit()
    source = "return " + "(" * 5000 + "1" + ")" * 5000 + ";\nint x = ;"
    program, parser = parse_with_errors(source)
    assert parser.had_error
    assert [d.message for d in parser.diagnostics] == ["Expression nesting too deep."]
    assert program[1] == []
    assert sys.getrecursionlimit() == limit

    with pytest.raises(CompileError):
        run_source(source)
