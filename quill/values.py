"""Runtime values produced by the Quill evaluator.

Numbers are parsed once, when a numeric literal is evaluated, and carried
as Python ints restricted to the signed 64-bit range.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List

from .builtin_function import NativeFunction
from .errors import IntegerOverflow

if TYPE_CHECKING:
    from .ast import Node
    from .environment import Environment

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class NullVal:
    def __repr__(self) -> str:
        return 'null'


@dataclass(frozen=True)
class BooleanVal:
    value: bool


@dataclass(frozen=True)
class NumberVal:
    value: int


@dataclass
class ObjectVal:
    properties: Dict[str, Any] = field(default_factory=dict)


@dataclass(eq=False)
class FunctionVal:
    """A user-defined function together with the scope it was declared in."""
    name: str
    parameters: List[str]
    declaration_env: 'Environment' = field(repr=False)
    body: List['Node'] = field(repr=False)

    def __repr__(self) -> str:
        return f"<fn {self.name}>"


def copy_value(value: Any) -> Any:
    # Objects are the only mutable values; functions keep their shared scope.
    if isinstance(value, ObjectVal):
        return ObjectVal({k: copy_value(v) for k, v in value.properties.items()})
    return value


def check_int64(value: int, text: str = None) -> int:
    if value < INT64_MIN or value > INT64_MAX:
        raise IntegerOverflow(text if text is not None else str(value))
    return value


def type_name(value: Any) -> str:
    if isinstance(value, NullVal):
        return 'null'
    if isinstance(value, BooleanVal):
        return 'boolean'
    if isinstance(value, NumberVal):
        return 'number'
    if isinstance(value, ObjectVal):
        return 'object'
    if isinstance(value, (FunctionVal, NativeFunction)):
        return 'function'
    return type(value).__name__


def to_string(value: Any) -> str:
    """Render a runtime value the way `print` and the REPL show it."""
    if isinstance(value, NullVal):
        return 'null'
    if isinstance(value, BooleanVal):
        return 'true' if value.value else 'false'
    if isinstance(value, NumberVal):
        return str(value.value)
    if isinstance(value, ObjectVal):
        if not value.properties:
            return '{}'
        inner = ', '.join(f"{k}: {to_string(v)}" for k, v in value.properties.items())
        return '{ ' + inner + ' }'
    if isinstance(value, FunctionVal):
        return f"<fn {value.name}>"
    if isinstance(value, NativeFunction):
        return f"<native fn {value.name}>"
    return str(value)
