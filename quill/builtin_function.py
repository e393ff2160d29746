from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Tuple

# (args, env) -> value
NativeFn = Callable[[List[Any], Any], Any]


@dataclass(eq=False)
class NativeFunction:
    name: str
    fn: NativeFn

    def __call__(self, args: List[Any], env: Any) -> Any:
        return self.fn(args, env)

    def __repr__(self) -> str:
        return f"<native fn {self.name}>"


class BuiltinRegistry:
    """Named native functions to seed into a global environment."""
    def __init__(self):
        self._functions: Dict[str, NativeFunction] = {}

    def register(self, name: str, fn: NativeFn) -> NativeFunction:
        native = NativeFunction(name, fn)
        self._functions[name] = native
        return native

    def __iter__(self) -> Iterator[Tuple[str, NativeFunction]]:
        return iter(self._functions.items())
