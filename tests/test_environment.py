from yolol.ast import Identifier
from yolol.environment import Environment

from helpers import n, run


def test_new_environment():
    env = Environment('chip')
    assert env.name == 'chip'
    assert env.next_line == 1
    assert env.error == ''
    assert list(env.iter_variables()) == []


def test_get_unset_is_none():
    env = Environment()
    assert env.get(Identifier('a')) is None


def test_shared_and_local_do_not_collide():
    env = Environment()
    env.set(Identifier('x', True), n(1))
    env.set(Identifier('x'), 'local')
    assert env.get(Identifier('x', True)) == n(1)
    assert env.get(Identifier('x')) == 'local'
    assert env.shared_variables() == {'x': n(1)}


def test_iter_variables_in_insertion_order():
    env = run('b = 2 :a = "s"')
    assert list(env.iter_variables()) == [('b', False, n(2)), ('a', True, 's')]


def test_str_lists_state():
    env = run('b = 2.5 :a = "s"', Environment('chip'))
    env.error = 'TypeError: boom'
    assert str(env) == '\n'.join([
        "Environment 'chip'",
        '  next line: 1',
        '  error: TypeError: boom',
        '  b = 2.5',
        '  :a = "s"',
    ])
