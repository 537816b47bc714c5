import pytest

from lox.environment import Environment
from lox.errors import LoxRuntimeError
from lox.tokens import Token, TokenType


def name(text):
    return Token(TokenType.IDENTIFIER, text, None, 1)


def test_lookup_walks_outward():
    outer = Environment()
    outer.define('a', 1.0)
    inner = Environment(parent=Environment(parent=outer))
    assert inner.get(name('a')) == 1.0


def test_redefinition_in_same_frame_replaces_binding():
    env = Environment()
    env.define('a', 1.0)
    env.define('a', 'again')
    assert env.get(name('a')) == 'again'


def test_assign_updates_the_defining_frame():
    outer = Environment()
    outer.define('a', 1.0)
    inner = Environment(parent=outer)
    inner.assign(name('a'), 2.0)
    assert outer.values['a'] == 2.0
    assert 'a' not in inner.values


def test_undefined_variable():
    env = Environment(parent=Environment())
    with pytest.raises(LoxRuntimeError) as exc:
        env.get(name('missing'))
    assert exc.value.message == "Undefined variable 'missing'."
    with pytest.raises(LoxRuntimeError):
        env.assign(name('missing'), 1.0)


def test_distance_access_skips_nearer_shadows():
    outer = Environment()
    outer.define('a', 'outer')
    inner = Environment(parent=outer)
    inner.define('a', 'inner')
    assert inner.ancestor(1) is outer
    assert inner.get_at(1, name('a')) == 'outer'
    inner.assign_at(1, 'a', 'changed')
    assert outer.values['a'] == 'changed'
    assert inner.values['a'] == 'inner'


def test_distance_access_to_missing_binding_is_a_runtime_error():
    outer = Environment()
    inner = Environment(parent=outer)
    with pytest.raises(LoxRuntimeError) as exc:
        inner.get_at(1, name('late'))
    assert exc.value.message == "Undefined variable 'late'."
