import pytest

from lox.lox_env import Environment


def test_declare_and_lookup() -> None:
    env: Environment[int] = Environment()
    assert env.declare("x", 1) is False
    assert env.lookup("x") == 1
    assert "x" in env
    assert "y" not in env


def test_lookup_missing_raises_key_error() -> None:
    with pytest.raises(KeyError):
        Environment().lookup("missing")


def test_inner_declaration_shadows_outer() -> None:
    env: Environment[int] = Environment()
    env.declare("x", 1)
    env.push()
    assert env.declare("x", 2) is False
    assert env.lookup("x") == 2
    env.pop()
    assert env.lookup("x") == 1


def test_same_frame_redeclaration_reports_shadowing() -> None:
    env: Environment[int] = Environment()
    env.declare("x", 1)
    assert env.declare("x", 2) is True
    assert env.lookup("x") == 2


def test_assign_updates_innermost_holder() -> None:
    env: Environment[int] = Environment()
    env.declare("x", 1)
    env.push()
    assert env.assign("x", 5) is True
    assert env.frames[-1] == {}
    env.pop()
    assert env.lookup("x") == 5


def test_assign_prefers_nearest_shadow() -> None:
    env: Environment[int] = Environment()
    env.declare("x", 1)
    with env.scope():
        env.declare("x", 2)
        env.assign("x", 3)
        assert env.lookup("x") == 3
    assert env.lookup("x") == 1


def test_assign_missing_never_declares() -> None:
    env: Environment[int] = Environment()
    assert env.assign("x", 1) is False
    assert "x" not in env


def test_scope_pops_on_error() -> None:
    env: Environment[int] = Environment()
    with pytest.raises(ValueError):
        with env.scope():
            assert env.depth == 2
            raise ValueError("boom")
    assert env.depth == 1


def test_global_frame_cannot_be_popped() -> None:
    with pytest.raises(RuntimeError):
        Environment().pop()


def test_repr_lists_names() -> None:
    env: Environment[int] = Environment()
    env.declare("b", 1)
    env.declare("a", 2)
    assert repr(env) == "Environment(depth=1, names=[['a', 'b']])"
