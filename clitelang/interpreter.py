"""Interpreter.

This is a tree-walk interpreter for evaluating AST nodes produced by the parser. It supports
integer and float arithmetic, variables, nested scopes, conditionals, loops and recursive
function calls.

1. Execution Model
The interpreter evaluates the AST top-down and recursively. Statements are executed via
`execute()`, expressions are evaluated with `eval_expr()`. Both dispatch on the tag in the first
element of each node tuple.

2. Environment
The interpreter holds exactly one current `Environment`. Blocks and function calls install a
child environment through the `scope()` context manager, which restores the previous
environment and releases the child on every exit path, early returns and errors included.
Function bodies run in a fresh environment whose parent is the global environment.

3. Expression Evaluation
Arithmetic widens to float when either operand is a float and otherwise uses 32-bit integer
arithmetic with division truncating toward zero. Comparisons and the short-circuiting `&&` and
`||` yield the integers 0 and 1.

4. Control Flow
`execute()` returns None when a statement completes normally and a `ReturnSignal` when a `return`
was reached. Blocks, `if` and `while` hand the signal straight back to their caller, so nothing
after a `return` runs. Function calls consume the signal. A signal that reaches the program level
ends the program and its value is the program result.

5. Error Handling
Language-level failures (undefined variables, arity mismatches, division by zero, operands of
the wrong kind, runaway recursion) are raised as `RuntimeException` subclasses carrying the line
and file. Unknown node tags raise `InternalError`.


File: interpreter.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging
from contextlib import contextmanager

from clitelang.environment import Environment
from clitelang.exceptions import (
    ArityMismatchException,
    DivisionByZeroException,
    InternalError,
    StackOverflowException,
    TypeMisuseException,
    UndefinedVariableException,
)
from clitelang.nodes import NodeType, format_node, recursion_headroom
from clitelang.operations import Op
from clitelang.values import (
    VOID,
    FunctionValue,
    convert,
    default_value,
    is_numeric,
    to_f32,
    to_i32,
)


logger = logging.getLogger(__name__)

DEFAULT_MAX_CALL_DEPTH = 2000

# Host frames consumed per nested call, used to size the recursion limit.
FRAMES_PER_CALL = 30

COMPARISONS = {
    Op.EQ: lambda a, b: a == b,
    Op.NE: lambda a, b: a != b,
    Op.LT: lambda a, b: a < b,
    Op.LE: lambda a, b: a <= b,
    Op.GT: lambda a, b: a > b,
    Op.GE: lambda a, b: a >= b,
}


class ReturnSignal:
    """Result of executing a `return` statement."""

    __slots__ = ('value',)

    def __init__(self, value):
        self.value = value

    def __repr__(self) -> str:
        return f"ReturnSignal({self.value!r})"


def _describe(value) -> str:
    if value is VOID:
        return 'void'
    if isinstance(value, FunctionValue):
        return f"function '{value.name}'"
    if isinstance(value, float):
        return 'float'
    return 'int'


class Interpreter:
    """Tree-walk interpreter for CLite."""

    def __init__(self, file: str = '<string>', max_call_depth: int = DEFAULT_MAX_CALL_DEPTH):
        """
        Initialize the interpreter.

        Parameters:
            file (str): The name of the script, used in error messages.
            max_call_depth (int): Deepest allowed nesting of function calls.
        """
        self.file = file
        self.max_call_depth = max_call_depth
        self.globals = Environment()
        self.env = self.globals
        self.call_depth = 0

    @contextmanager
    def scope(self, env: Environment):
        """
        Make ``env`` current for the duration of the block, then restore the
        previous environment and release ``env``.
        """
        previous = self.env
        self.env = env
        try:
            yield env
        finally:
            self.env = previous
            env.release()

    def interpret(self, program: tuple):
        """
        Execute a program node and return its result.

        Parameters:
            program (tuple): A ('program', declarations, line) node.

        Returns:
            The value of a top-level `return`, otherwise VOID.

        Raises:
            RuntimeException: On any language-level runtime failure.
            InternalError: If the tree is not a program.
        """
        if program[0] != NodeType.PROGRAM:
            raise InternalError(f"expected a program node, got {program[0]!r}", program[-1])

        try:
            with recursion_headroom(self.max_call_depth * FRAMES_PER_CALL):
                signal = self.execute_statements(program[1])
        except RecursionError as e:
            raise StackOverflowException(self.max_call_depth, file=self.file) from e

        if signal is None:
            return VOID
        return signal.value

    def execute_statements(self, statements: list) -> ReturnSignal | None:
        """
        Execute statements in order, stopping at the first return signal.
        """
        for stmt in statements:
            signal = self.execute(stmt)
            if signal is not None:
                return signal
        return None

    def execute(self, stmt: tuple) -> ReturnSignal | None:
        """
        Execute a single statement or declaration.

        Parameters:
            stmt (tuple): A statement node.

        Returns:
            ReturnSignal | None: The pending return, if one was reached.

        Raises:
            InternalError: For unknown statement types.
        """
        kind = stmt[0]
        line = stmt[-1]

        if kind == NodeType.VAR_DECL:
            _, type_node, ident, initializer, _ = stmt
            type_name = type_node[1]
            if initializer is None:
                value = default_value(type_name)
            else:
                value = self._coerce(self.eval_expr(initializer), type_name, line)
            self.env.define(ident[1], value, type_name)

        elif kind == NodeType.FUNC_DECL:
            _, type_node, ident, params, body, _ = stmt
            signature = [(param[1][1], param[2][1]) for param in params]
            self.env.define(ident[1], FunctionValue(ident[1], type_node[1], signature, body))

        elif kind == NodeType.BLOCK:
            with self.scope(Environment(self.env)):
                return self.execute_statements(stmt[1])

        elif kind == NodeType.IF:
            _, cond_node, then_branch, else_branch, _ = stmt
            if self._truthy(self.eval_expr(cond_node), line):
                return self.execute(then_branch)
            if else_branch is not None:
                return self.execute(else_branch)

        elif kind == NodeType.WHILE:
            _, cond_node, body, _ = stmt
            while self._truthy(self.eval_expr(cond_node), line):
                signal = self.execute(body)
                if signal is not None:
                    return signal

        elif kind == NodeType.RETURN:
            expr_node = stmt[1]
            value = VOID if expr_node is None else self.eval_expr(expr_node)
            return ReturnSignal(value)

        elif kind == NodeType.EXPR_STMT:
            self.eval_expr(stmt[1])

        else:
            raise InternalError(f"unknown statement type {kind!r}", line)

        return None

    def eval_expr(self, node: tuple):
        """
        Recursively evaluate an expression node and return its computed value.

        Parameters:
            node (tuple): An expression node. The first element is the node tag,
                          the last the line number for error reporting.

        Returns:
            The evaluated result of the expression.

        Raises:
            UndefinedVariableException: If a name is referenced that has not been declared.
            RuntimeException: For other language-level failures.
            InternalError: If the node is not an expression.
        """
        kind = node[0]
        line = node[-1]

        if kind == NodeType.LITERAL:
            _, literal_type, lexeme, _ = node
            if literal_type == 'float':
                return to_f32(float(lexeme))
            return to_i32(int(lexeme))

        elif kind == NodeType.IDENT:
            name = node[1]
            env = self.env.resolve(name)
            if env is None:
                raise UndefinedVariableException(name, line, self.file)
            return env.values[name]

        elif kind == NodeType.ASSIGN:
            _, target, value_node, _ = node
            value = self.eval_expr(value_node)
            name = target[1]
            env = self.env.resolve(name)
            if env is None:
                raise UndefinedVariableException(name, line, self.file)
            if isinstance(env.values[name], FunctionValue):
                raise TypeMisuseException(f"Cannot assign to function '{name}'", line, self.file)
            value = self._coerce(value, env.types.get(name), line)
            env.values[name] = value
            return value

        elif kind == NodeType.UNARY:
            _, op, operand_node, _ = node
            operand = self.eval_expr(operand_node)
            self._require_numeric(operand, op, node)
            if op == Op.NEG:
                return -operand if isinstance(operand, float) else to_i32(-operand)
            if op == Op.NOT:
                return 1 if operand == 0 else 0
            raise InternalError(f"unknown unary operator {op!r}", line)

        elif kind == NodeType.BINARY:
            _, op, left, right, _ = node
            lhs = self.eval_expr(left)
            if op == Op.AND:
                if not self._truthy(lhs, line):
                    return 0
                return 1 if self._truthy(self.eval_expr(right), line) else 0
            if op == Op.OR:
                if self._truthy(lhs, line):
                    return 1
                return 1 if self._truthy(self.eval_expr(right), line) else 0
            rhs = self.eval_expr(right)
            return self._binary(op, lhs, rhs, node)

        elif kind == NodeType.FUNC_CALL:
            return self._call(node)

        raise InternalError(f"invalid expression node {kind!r}", line)

    def _binary(self, op: Op, lhs, rhs, node: tuple):
        line = node[-1]
        self._require_numeric(lhs, op, node)
        self._require_numeric(rhs, op, node)

        is_float = isinstance(lhs, float) or isinstance(rhs, float)
        if is_float:
            lhs, rhs = to_f32(float(lhs)), to_f32(float(rhs))

        if op in COMPARISONS:
            return 1 if COMPARISONS[op](lhs, rhs) else 0

        match op:
            case Op.ADD:
                term = lhs + rhs
            case Op.SUB:
                term = lhs - rhs
            case Op.MUL:
                term = lhs * rhs
            case Op.DIV:
                if rhs == 0:
                    raise DivisionByZeroException(line, self.file)
                if is_float:
                    term = lhs / rhs
                else:
                    term = abs(lhs) // abs(rhs)
                    if (lhs < 0) != (rhs < 0):
                        term = -term
            case _:
                raise InternalError(f"unknown binary operator {op!r}", line)

        return to_f32(term) if is_float else to_i32(term)

    def _call(self, node: tuple):
        _, callee, arg_nodes, line = node
        name = callee[1]
        env = self.env.resolve(name)
        if env is None:
            raise UndefinedVariableException(name, line, self.file)
        func = env.values[name]
        if not isinstance(func, FunctionValue):
            raise TypeMisuseException(f"'{name}' is not a function", line, self.file)

        args = [self.eval_expr(arg) for arg in arg_nodes]
        if len(args) != func.arity:
            raise ArityMismatchException(name, func.arity, len(args), line, self.file)
        if self.call_depth >= self.max_call_depth:
            raise StackOverflowException(self.max_call_depth, line, self.file)

        call_env = Environment(self.globals)
        for (type_name, param_name), arg in zip(func.params, args):
            call_env.define(param_name, self._coerce(arg, type_name, line), type_name)

        logger.debug("call %s(%s) depth=%d", name, ', '.join(map(repr, args)), self.call_depth + 1)
        self.call_depth += 1
        try:
            with self.scope(call_env):
                signal = self.execute_statements(func.body[1])
        finally:
            self.call_depth -= 1

        if signal is None or signal.value is VOID:
            return VOID
        return self._coerce(signal.value, func.return_type, line)

    def _coerce(self, value, type_name: str | None, line: int):
        if type_name is None:
            return value
        if not is_numeric(value):
            raise TypeMisuseException(
                f"Cannot use {_describe(value)} as '{type_name}'", line, self.file
            )
        return convert(value, type_name)

    def _truthy(self, value, line: int) -> bool:
        if not is_numeric(value):
            raise TypeMisuseException(
                f"Condition must be numeric, got {_describe(value)}", line, self.file
            )
        return value != 0

    def _require_numeric(self, value, op: Op, node: tuple) -> None:
        if not is_numeric(value):
            raise TypeMisuseException(
                f"Operator '{op.symbol}' requires numeric operands, got {_describe(value)} "
                f"in {format_node(node)}",
                node[-1],
                self.file,
            )
