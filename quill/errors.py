"""Error types raised by the Quill lexer, parser, environment and evaluator.

Each layer has its own base class so callers can catch a whole layer or a
single kind of failure without inspecting messages.
"""

from typing import Any


class QuillError(Exception):
    """Base class for all Quill errors."""
    def __init__(self, message: str):
        super().__init__(f"{type(self).__name__}: {message}")
        self.message = message

    @property
    def name(self) -> str:
        return type(self).__name__


###############################################################################
# Lexer
###############################################################################

class LexError(QuillError):
    pass


class UnexpectedCharacter(LexError):
    def __init__(self, char: str, line: int, column: int):
        super().__init__(f"unexpected character {char!r} at {line}:{column}")
        self.char = char
        self.line = line
        self.column = column


###############################################################################
# Parser
###############################################################################

class ParseError(QuillError):
    pass


class ExpectedToken(ParseError):
    """A specific token kind was required but another one was found."""
    def __init__(self, expected: Any, actual: Any, context: str):
        super().__init__(f"{context}: expected {expected.name}, got {actual.type.name} {actual.value!r} "
                         f"at {actual.line}:{actual.column}")
        self.expected = expected
        self.actual = actual
        self.context = context


class UnexpectedEndOfInput(ParseError):
    def __init__(self, context: str):
        super().__init__(f"{context}: unexpected end of input")
        self.context = context


class UnsupportedTokenType(ParseError):
    def __init__(self, token: Any):
        super().__init__(f"unsupported token {token.type.name} {token.value!r} at {token.line}:{token.column}")
        self.token = token


class NoDotOperatorWithoutRhsIdentifier(ParseError):
    def __init__(self):
        super().__init__("the right-hand side of '.' must be an identifier")


class ConstValueRequired(ParseError):
    def __init__(self, name: str):
        super().__init__(f"a value is required for const declaration {name}")
        self.identifier = name


class ExpectedParameterToBeIdentifier(ParseError):
    def __init__(self, node: Any):
        super().__init__(f"function parameters must be identifiers, got {type(node).__name__}")
        self.node = node


class NestingTooDeep(ParseError):
    def __init__(self, limit: int):
        super().__init__(f"expressions and function bodies may nest at most {limit} levels deep")
        self.limit = limit


###############################################################################
# Environment
###############################################################################

class EnvError(QuillError):
    def __init__(self, message: str, symbol: str):
        super().__init__(message)
        self.symbol = symbol


class RedeclareVariable(EnvError):
    def __init__(self, name: str):
        super().__init__(f"cannot redeclare variable {name}", name)


class ReassignVariable(EnvError):
    def __init__(self, name: str):
        super().__init__(f"cannot reassign constant {name}", name)


class VariableNotFound(EnvError):
    def __init__(self, name: str):
        super().__init__(f"cannot resolve {name} since it does not exist", name)


###############################################################################
# Evaluator
###############################################################################

class EvalError(QuillError):
    pass


class InvalidAssignment(EvalError):
    def __init__(self, target: Any):
        super().__init__(f"cannot assign to {type(target).__name__}, only to an identifier")
        self.target = target


class InvalidOperator(EvalError):
    def __init__(self, operator: str):
        super().__init__(f"unsupported binary operator {operator!r}")
        self.operator = operator


class ValueNotAFunction(EvalError):
    def __init__(self, caller: Any, value: Any):
        super().__init__(f"{type(value).__name__} is not a function")
        self.caller = caller
        self.value = value


class ArityMismatch(EvalError):
    def __init__(self, name: str, expected: int, got: int):
        super().__init__(f"{name} expects {expected} arguments, got {got}")
        self.function_name = name
        self.expected = expected
        self.got = got


class DivisionByZero(EvalError):
    def __init__(self, operator: str):
        super().__init__("division by zero" if operator == '/' else "modulo by zero")
        self.operator = operator


class IntegerOverflow(EvalError):
    def __init__(self, text: str):
        super().__init__(f"{text} does not fit in a 64-bit signed integer")
        self.text = text


class InvalidNumericLiteral(EvalError):
    def __init__(self, text: str):
        super().__init__(f"{text!r} is not a number")
        self.text = text


class CallDepthExceeded(EvalError):
    def __init__(self, limit: int):
        super().__init__(f"maximum call depth of {limit} exceeded")
        self.limit = limit


class UnexpectedStatement(EvalError):
    def __init__(self, node: Any):
        super().__init__(f"unexpected statement {type(node).__name__}")
        self.node = node
