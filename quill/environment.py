from typing import Any, Dict, List, Optional, Set

from quill.builtin_function import BuiltinRegistry
from quill.errors import RedeclareVariable, ReassignVariable, VariableNotFound
from quill.std import default_registry
from quill.values import BooleanVal, NullVal, copy_value


class Environment:
    """A lexical scope: bindings, the names among them that are constant,
    and a link to the enclosing scope."""
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.variables: Dict[str, Any] = {}
        self.constants: Set[str] = set()

    def declare(self, name: str, value: Any, constant: bool = False) -> Any:
        # Only this scope is checked; shadowing an outer binding is allowed.
        if name in self.variables:
            raise RedeclareVariable(name)
        self.variables[name] = value
        if constant:
            self.constants.add(name)
        return value

    def assign(self, name: str, value: Any) -> Any:
        env = self.resolve(name)
        if name in env.constants:
            raise ReassignVariable(name)
        env.variables[name] = value
        return value

    def lookup(self, name: str) -> Any:
        """Return a copy of the bound value, so callers cannot mutate the binding."""
        return copy_value(self.resolve(name).variables[name])

    def resolve(self, name: str) -> 'Environment':
        env = self
        while env is not None:
            if name in env.variables:
                return env
            env = env.parent
        raise VariableNotFound(name)

    def names(self) -> List[str]:
        """Every name visible from this scope, nearest binding first."""
        seen: Dict[str, None] = {}
        env = self
        while env is not None:
            for name in env.variables:
                seen.setdefault(name, None)
            env = env.parent
        return list(seen)


def create_global_environment(registry: Optional[BuiltinRegistry] = None) -> Environment:
    """Create a root scope seeded with true/false/null and the registry's
    native functions, all constant."""
    if registry is None:
        registry = default_registry()
    env = Environment()
    env.declare('true', BooleanVal(True), constant=True)
    env.declare('false', BooleanVal(False), constant=True)
    env.declare('null', NullVal(), constant=True)
    for name, native in registry:
        env.declare(name, native, constant=True)
    return env
