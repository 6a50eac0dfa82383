import math

import pytest

from bella.ast import (
    Numeral, BooleanLiteral, Identifier, UnaryExpression, BinaryExpression,
    ConditionalExpression, ArrayLiteral, SubscriptExpression, Call,
)
from bella.environment import Environment
from bella.errors import (
    UndeclaredIdentifier, InvalidOperandType, InvalidOperator, DivisionByZero,
    InvalidSubscript, NotAFunction, ArityMismatch,
)
from bella.interpreter import Interpreter
from bella.types import UNDEFINED, UserFunction


def num(n):
    return Numeral(n)


def bool_(b):
    return BooleanLiteral(b)


def id_(name):
    return Identifier(name)


def unary(op, x):
    return UnaryExpression(op, x)


def binary(op, x, y):
    return BinaryExpression(op, x, y)


@pytest.fixture
def interp():
    return Interpreter()


@pytest.fixture
def env():
    return Environment({'x': 1, 'y': 2, 'a': True, 'b': False, 'xs': [10, 20, 30]})


def test_literals(interp, env):
    assert interp.evaluate(num(8), env) == 8
    assert interp.evaluate(bool_(True), env) is True
    assert interp.evaluate(bool_(False), Environment()) is False


def test_identifier_lookup(interp, env):
    assert interp.evaluate(id_('x'), env) == 1
    assert interp.evaluate(id_('y'), env) == 2
    with pytest.raises(UndeclaredIdentifier) as exc:
        interp.evaluate(id_('z'), env)
    assert exc.value.err.name == 'UndeclaredIdentifier'
    assert "'z'" in exc.value.err.message


def test_identifier_bound_to_undefined_is_undeclared(interp):
    with pytest.raises(UndeclaredIdentifier):
        interp.evaluate(id_('gone'), Environment({'gone': UNDEFINED}))


def test_unary_minus(interp, env):
    assert interp.evaluate(unary('-', num(8)), env) == -8
    assert interp.evaluate(unary('-', id_('x')), env) == -1
    with pytest.raises(UndeclaredIdentifier):
        interp.evaluate(unary('-', id_('nope')), env)
    with pytest.raises(InvalidOperandType):
        interp.evaluate(unary('-', id_('a')), env)
    with pytest.raises(InvalidOperandType):
        interp.evaluate(unary('-', id_('xs')), env)


@pytest.mark.parametrize('operand, expected', [
    (True, False),
    (False, True),
    (0, True),
    (3, False),
    (math.nan, True),
    ([], False),
])
def test_unary_not_coerces(interp, operand, expected):
    assert interp.evaluate(unary('!', id_('v')), Environment({'v': operand})) is expected


def test_unary_invalid_operator(interp, env):
    with pytest.raises(InvalidOperator):
        interp.evaluate(unary('~', num(1)), env)


def test_arithmetic(interp, env):
    assert interp.evaluate(binary('+', id_('x'), num(8)), env) == 9
    assert interp.evaluate(binary('-', id_('x'), num(8)), env) == -7
    assert interp.evaluate(binary('*', id_('x'), num(8)), env) == 8
    assert interp.evaluate(binary('/', num(8), id_('y')), env) == 4
    assert interp.evaluate(binary('/', num(5), num(2)), env) == 2.5
    assert interp.evaluate(binary('%', id_('y'), num(9)), env) == 2


def test_remainder_keeps_sign_of_dividend(interp, env):
    assert interp.evaluate(binary('%', num(-7), num(3)), env) == -1
    assert interp.evaluate(binary('%', num(7), num(-3)), env) == 1
    assert interp.evaluate(binary('%', num(5.5), num(2)), env) == 1.5


@pytest.mark.parametrize('op', ['+', '-', '*', '/', '%', '<', '<=', '>', '>='])
def test_numeric_operators_reject_other_kinds(interp, env, op):
    with pytest.raises(InvalidOperandType) as exc:
        interp.evaluate(binary(op, id_('x'), id_('a')), env)
    assert f"'{op}'" in str(exc.value)
    with pytest.raises(InvalidOperandType):
        interp.evaluate(binary(op, id_('xs'), num(1)), env)


def test_undeclared_operand(interp, env):
    with pytest.raises(UndeclaredIdentifier):
        interp.evaluate(binary('+', id_('x'), id_('z')), env)


@pytest.mark.parametrize('op', ['/', '%'])
def test_division_by_zero(interp, env, op):
    with pytest.raises(DivisionByZero):
        interp.evaluate(binary(op, num(8), num(0)), env)
    with pytest.raises(DivisionByZero):
        interp.evaluate(binary(op, num(8), num(0.0)), env)


def test_ordering(interp, env):
    assert interp.evaluate(binary('<=', num(8), num(9)), env) is True
    assert interp.evaluate(binary('<', num(8), num(9)), env) is True
    assert interp.evaluate(binary('>', num(8), num(9)), env) is False
    assert interp.evaluate(binary('>=', num(8), num(9)), env) is False
    assert interp.evaluate(binary('>=', num(9), num(9)), env) is True


def test_equality_scalars(interp, env):
    assert interp.evaluate(binary('==', num(8), num(9)), env) is False
    assert interp.evaluate(binary('!=', num(8), num(9)), env) is True
    assert interp.evaluate(binary('==', num(2), num(2.0)), env) is True
    assert interp.evaluate(binary('==', id_('a'), bool_(True)), env) is True
    assert interp.evaluate(binary('!=', id_('a'), id_('b')), env) is True


def test_equality_requires_same_kind(interp, env):
    with pytest.raises(InvalidOperandType):
        interp.evaluate(binary('==', num(1), bool_(True)), env)
    with pytest.raises(InvalidOperandType):
        interp.evaluate(binary('!=', id_('xs'), num(1)), env)


def test_equality_arrays_by_reference(interp, env):
    assert interp.evaluate(binary('==', id_('xs'), id_('xs')), env) is True
    same_contents = binary('==', ArrayLiteral([num(1)]), ArrayLiteral([num(1)]))
    assert interp.evaluate(same_contents, env) is False


def test_equality_functions_by_reference(interp):
    f = UserFunction([id_('n')], id_('n'))
    g = UserFunction([id_('n')], id_('n'))
    env = Environment({'f': f, 'g': g, 'h': f})
    assert interp.evaluate(binary('==', id_('f'), id_('h')), env) is True
    assert interp.evaluate(binary('==', id_('f'), id_('g')), env) is False


def test_logical_operators_coerce(interp, env):
    assert interp.evaluate(binary('&&', bool_(True), bool_(False)), env) is False
    assert interp.evaluate(binary('||', bool_(True), bool_(False)), env) is True
    assert interp.evaluate(binary('&&', num(1), id_('xs')), env) is True
    assert interp.evaluate(binary('||', num(0), num(0)), env) is False


def test_logical_operators_evaluate_both_sides(interp, env):
    with pytest.raises(UndeclaredIdentifier):
        interp.evaluate(binary('||', bool_(True), id_('missing')), env)
    with pytest.raises(UndeclaredIdentifier):
        interp.evaluate(binary('&&', bool_(False), id_('missing')), env)


@pytest.mark.parametrize('op', ['!==', '**', '^', ''])
def test_binary_invalid_operator(interp, env, op):
    with pytest.raises(InvalidOperator):
        interp.evaluate(binary(op, num(1), num(2)), env)


def test_conditional_only_evaluates_chosen_branch(interp, env):
    chosen = ConditionalExpression(id_('a'), num(1), id_('missing'))
    assert interp.evaluate(chosen, env) == 1
    other = ConditionalExpression(id_('b'), id_('missing'), num(2))
    assert interp.evaluate(other, env) == 2
    assert interp.evaluate(ConditionalExpression(num(0), num(1), num(2)), env) == 2


def test_array_literal(interp, env):
    node = ArrayLiteral([num(1), binary('+', id_('x'), id_('y')), bool_(False)])
    assert interp.evaluate(node, env) == [1, 3, False]
    assert interp.evaluate(ArrayLiteral([]), env) == []


def test_subscript(interp, env):
    array = ArrayLiteral([num(1), num(2), num(3)])
    assert interp.evaluate(SubscriptExpression(array, num(1)), env) == 2
    assert interp.evaluate(SubscriptExpression(id_('xs'), num(2.0)), env) == 30


@pytest.mark.parametrize('index', [3, 99, -1, 0.5])
def test_subscript_outside_array_is_undefined(interp, env, index):
    assert interp.evaluate(SubscriptExpression(id_('xs'), num(index)), env) is UNDEFINED


def test_invalid_subscript(interp, env):
    with pytest.raises(InvalidSubscript):
        interp.evaluate(SubscriptExpression(id_('x'), num(0)), env)
    with pytest.raises(InvalidSubscript):
        interp.evaluate(SubscriptExpression(id_('xs'), bool_(True)), env)


def test_call_user_function(interp):
    f = UserFunction([id_('n')], binary('+', id_('n'), num(1)))
    env = Environment({'f': f})
    assert interp.evaluate(Call(id_('f'), [num(4)]), env) == 5


def test_call_uses_caller_environment(interp):
    # no environment is captured when the function is created
    f = UserFunction([id_('n')], binary('*', id_('n'), id_('scale')))
    assert interp.evaluate(Call(id_('f'), [num(3)]), Environment({'f': f, 'scale': 10})) == 30
    assert interp.evaluate(Call(id_('f'), [num(3)]), Environment({'f': f, 'scale': 2})) == 6


def test_call_parameters_shadow_and_do_not_leak(interp):
    f = UserFunction([id_('x')], binary('*', id_('x'), num(2)))
    env = Environment({'f': f, 'x': 100})
    assert interp.evaluate(Call(id_('f'), [num(4)]), env) == 8
    assert env.get('x') == 100


def test_call_arity_mismatch(interp):
    f = UserFunction([id_('p'), id_('q')], id_('p'))
    env = Environment({'f': f})
    with pytest.raises(ArityMismatch):
        interp.evaluate(Call(id_('f'), [num(1)]), env)
    with pytest.raises(ArityMismatch):
        interp.evaluate(Call(id_('f'), [num(1), num(2), num(3)]), env)


def test_call_errors(interp, env):
    with pytest.raises(UndeclaredIdentifier):
        interp.evaluate(Call(id_('nope'), []), env)
    with pytest.raises(NotAFunction):
        interp.evaluate(Call(id_('x'), []), env)
    with pytest.raises(NotAFunction):
        interp.evaluate(Call(id_('xs'), [num(0)]), env)


def test_call_builtin(interp):
    env = interp.initial_environment()
    assert interp.evaluate(Call(id_('sqrt'), [num(16)]), env) == 4
    assert interp.evaluate(Call(id_('hypot'), [num(3), num(4)]), env) == 5
