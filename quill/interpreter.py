"""Tree-walking evaluator for the Quill language.

`Interpreter.evaluate` dispatches on the AST node type and returns a
runtime value from `quill.values`. Any failure is raised as a `QuillError`
subclass and aborts the rest of the program.
"""

from __future__ import annotations

from typing import Any, List, Optional

from .ast import (
    Program, NumericLiteral, Identifier, Comment, ObjectLiteral,
    VarDeclaration, FnDeclaration, AssignmentExpr, CallExpr, BinaryExpr, Node,
)
from .builtin_function import BuiltinRegistry, NativeFunction
from .environment import Environment, create_global_environment
from .errors import (
    QuillError, InvalidAssignment, InvalidOperator, ValueNotAFunction,
    ArityMismatch, DivisionByZero, CallDepthExceeded, UnexpectedStatement,
    InvalidNumericLiteral,
)
from .parser import parse_program
from .values import (
    NullVal, NumberVal, ObjectVal, FunctionVal, check_int64, to_string, type_name,
)

DEFAULT_MAX_CALL_DEPTH = 100


def _trunc_div(a: int, b: int) -> int:
    # integer division rounding toward zero, as 64-bit hardware does
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q


class Interpreter:
    """Core interpreter that evaluates Quill AST.

    The global environment persists across `run` calls, so one interpreter
    can serve a whole interactive session.
    """
    def __init__(self, global_env: Optional[Environment] = None,
                 registry: Optional[BuiltinRegistry] = None,
                 debug_level: int = 0, debug_file: str = 'debug.txt',
                 max_call_depth: int = DEFAULT_MAX_CALL_DEPTH):
        if global_env is None:
            global_env = create_global_environment(registry)
        self.global_env = global_env
        self.max_call_depth = max_call_depth
        self.call_depth = 0
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0 and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Any:
        if env is None:
            env = self.global_env
        self.debug(f"run program ({len(program.body)} statements)")
        try:
            result = self.evaluate(program, env)
        except QuillError as ex:
            self.debug(f"error: {ex}")
            raise
        self.debug(f"result: {to_string(result)}")
        return result

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Program):
            return self.evaluate_body(node.body, env)
        if isinstance(node, NumericLiteral):
            try:
                number = int(node.value)
            except ValueError:
                raise InvalidNumericLiteral(node.value) from None
            return NumberVal(check_int64(number, node.value))
        if isinstance(node, Identifier):
            return env.lookup(node.symbol)
        if isinstance(node, Comment):
            return NullVal()
        if isinstance(node, ObjectLiteral):
            properties = {}
            for prop in node.properties:
                if prop.value is None:
                    # shorthand { key } reads the variable of the same name
                    properties[prop.key] = env.lookup(prop.key)
                else:
                    properties[prop.key] = self.evaluate(prop.value, env)
            return ObjectVal(properties)
        if isinstance(node, AssignmentExpr):
            value = self.evaluate(node.value, env)
            if not isinstance(node.assignee, Identifier):
                raise InvalidAssignment(node.assignee)
            return env.assign(node.assignee.symbol, value)
        if isinstance(node, VarDeclaration):
            value = self.evaluate(node.value, env) if node.value is not None else NullVal()
            env.declare(node.identifier, value, node.constant)
            if self.debug_level >= 2:
                kind = 'const' if node.constant else 'let'
                self.debug(f"declare {kind} {node.identifier}: {type_name(value)} = {to_string(value)}")
            return value
        if isinstance(node, FnDeclaration):
            func = FunctionVal(node.name, list(node.parameters), env, node.body)
            env.declare(node.name, func, constant=True)
            if self.debug_level >= 2:
                self.debug(f"define function {node.name}({', '.join(node.parameters)})")
            return func
        if isinstance(node, CallExpr):
            args = [self.evaluate(arg, env) for arg in node.args]
            func = self.evaluate(node.caller, env)
            return self.call_function(func, args, env, node)
        if isinstance(node, BinaryExpr):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            if isinstance(left, NumberVal) and isinstance(right, NumberVal):
                return self.apply_binary_op(node.operator, left.value, right.value)
            # no coercion: anything but two numbers yields null
            return NullVal()
        raise UnexpectedStatement(node)

    def evaluate_body(self, statements: List[Node], env: Environment) -> Any:
        """Evaluate statements in order and return the last value.

        Comments are evaluated but never become the result.
        """
        result = NullVal()
        for stmt in statements:
            value = self.evaluate(stmt, env)
            if not isinstance(stmt, Comment):
                result = value
        return result

    def call_function(self, func: Any, args: List[Any], env: Environment, node: CallExpr) -> Any:
        if isinstance(func, NativeFunction):
            if self.debug_level >= 3:
                self.debug(f"call native {func.name}({', '.join(to_string(a) for a in args)})")
            return func(args, env)
        if isinstance(func, FunctionVal):
            if len(args) != len(func.parameters):
                raise ArityMismatch(func.name, len(func.parameters), len(args))
            if self.call_depth >= self.max_call_depth:
                raise CallDepthExceeded(self.max_call_depth)
            if self.debug_level >= 3:
                self.debug(f"call {func.name}({', '.join(to_string(a) for a in args)}) depth={self.call_depth + 1}")
            # closures share their defining scope rather than copying it
            scope = Environment(parent=func.declaration_env)
            for param, arg in zip(func.parameters, args):
                scope.declare(param, arg, constant=False)
            self.call_depth += 1
            try:
                return self.evaluate_body(func.body, scope)
            except RecursionError:
                # the Python stack ran out before max_call_depth did
                raise CallDepthExceeded(self.call_depth) from None
            finally:
                self.call_depth -= 1
        raise ValueNotAFunction(node.caller, func)

    def apply_binary_op(self, op: str, a: int, b: int) -> NumberVal:
        if op == '+':
            result = a + b
        elif op == '-':
            result = a - b
        elif op == '*':
            result = a * b
        elif op == '/':
            if b == 0:
                raise DivisionByZero(op)
            result = _trunc_div(a, b)
        elif op == '%':
            if b == 0:
                raise DivisionByZero(op)
            # remainder takes the sign of the dividend
            result = a - b * _trunc_div(a, b)
        else:
            raise InvalidOperator(op)
        return NumberVal(check_int64(result))


def run_program(source: str, debug_level: int = 0, registry: Optional[BuiltinRegistry] = None) -> Any:
    """Convenience function to parse and evaluate a Quill program from source string."""
    program = parse_program(source)
    interpreter = Interpreter(registry=registry, debug_level=debug_level)
    try:
        return interpreter.run(program)
    finally:
        interpreter.close()

