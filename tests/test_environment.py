import pytest

from quill.builtin_function import BuiltinRegistry, NativeFunction
from quill.environment import Environment, create_global_environment
from quill.errors import RedeclareVariable, ReassignVariable, VariableNotFound
from quill.values import BooleanVal, NullVal, NumberVal, ObjectVal


def test_global_scope_is_seeded():
    env = create_global_environment()
    assert env.lookup('true') == BooleanVal(True)
    assert env.lookup('false') == BooleanVal(False)
    assert env.lookup('null') == NullVal()
    assert isinstance(env.lookup('print'), NativeFunction)
    assert isinstance(env.lookup('time'), NativeFunction)
    assert {'true', 'false', 'null', 'print', 'time'} <= env.constants


def test_missing_variable():
    env = create_global_environment()
    with pytest.raises(VariableNotFound) as exc:
        env.lookup('foo')
    assert str(exc.value) == "VariableNotFound: cannot resolve foo since it does not exist"
    assert exc.value.symbol == 'foo'


def test_redeclare_in_same_scope_fails():
    env = Environment()
    env.declare('n', NumberVal(1))
    with pytest.raises(RedeclareVariable):
        env.declare('n', NumberVal(2))
    assert env.lookup('n') == NumberVal(1)


def test_shadowing_in_child_scope():
    parent = Environment()
    parent.declare('n', NumberVal(1))
    child = Environment(parent)
    assert child.declare('n', NumberVal(2)) == NumberVal(2)
    assert child.lookup('n') == NumberVal(2)
    assert parent.lookup('n') == NumberVal(1)


def test_assign_updates_resolving_scope():
    parent = Environment()
    parent.declare('n', NumberVal(1))
    child = Environment(parent)
    assert child.assign('n', NumberVal(5)) == NumberVal(5)
    assert parent.lookup('n') == NumberVal(5)
    assert 'n' not in child.variables


def test_assign_unknown_name():
    with pytest.raises(VariableNotFound):
        Environment(Environment()).assign('ghost', NullVal())


def test_constants_cannot_be_reassigned_at_any_depth():
    root = Environment()
    root.declare('c', NumberVal(1), constant=True)
    scope = root
    for _ in range(4):
        scope = Environment(scope)
        with pytest.raises(ReassignVariable):
            scope.assign('c', NumberVal(2))
    assert root.lookup('c') == NumberVal(1)


def test_shadowed_constant_can_be_reassigned_locally():
    root = Environment()
    root.declare('c', NumberVal(1), constant=True)
    child = Environment(root)
    child.declare('c', NumberVal(2))
    child.assign('c', NumberVal(3))
    assert child.lookup('c') == NumberVal(3)
    assert root.lookup('c') == NumberVal(1)


def test_resolve_returns_nearest_scope():
    root = Environment()
    root.declare('a', NullVal())
    middle = Environment(root)
    middle.declare('a', NullVal())
    leaf = Environment(middle)
    assert leaf.resolve('a') is middle


def test_names_lists_visible_bindings():
    root = Environment()
    root.declare('a', NullVal())
    child = Environment(root)
    child.declare('b', NullVal())
    child.declare('a', NullVal())
    assert child.names() == ['b', 'a']


def test_custom_registry_replaces_builtins():
    registry = BuiltinRegistry()
    registry.register('answer', lambda args, env: NumberVal(42))
    env = create_global_environment(registry)
    assert env.lookup('answer')([], env) == NumberVal(42)
    with pytest.raises(VariableNotFound):
        env.lookup('print')
    assert env.lookup('true') == BooleanVal(True)


def test_lookup_returns_a_copy_of_objects():
    env = Environment()
    original = ObjectVal({'a': NumberVal(1), 'inner': ObjectVal({'b': NumberVal(2)})})
    env.declare('o', original)
    found = env.lookup('o')
    found.properties['a'] = NumberVal(9)
    found.properties['inner'].properties.clear()
    assert env.lookup('o') == ObjectVal({'a': NumberVal(1), 'inner': ObjectVal({'b': NumberVal(2)})})


def test_lookup_shares_functions():
    env = create_global_environment()
    assert env.lookup('print') is env.lookup('print')
