from typing import IO, Any, List, Optional
import sys

from quill.builtin_function import BuiltinRegistry
from quill.values import NullVal, NumberVal, to_string


def default_registry(out: Optional[IO[str]] = None) -> BuiltinRegistry:
    """Build the registry of natives every global scope starts with.

    `print` writes each argument on its own line to `out` (stdout when
    omitted, looked up at call time so captured output works). `time` is a
    placeholder clock that always answers 0.
    """
    registry = BuiltinRegistry()

    def std_print(args: List[Any], env: Any) -> Any:
        dest = out if out is not None else sys.stdout
        for arg in args:
            print(to_string(arg), file=dest)
        return NullVal()

    def std_time(args: List[Any], env: Any) -> Any:
        return NumberVal(0)

    registry.register('print', std_print)
    registry.register('time', std_time)
    return registry
