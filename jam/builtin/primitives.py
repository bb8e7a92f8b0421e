"""Primitive operations for the Jam runtime.

This module defines the unary operators, binary operators and primitive
functions of Jam as tables keyed by operator/function name. Every entry
receives already-forced values, so nothing here depends on the evaluation
policy in use.
"""
from __future__ import annotations

from typing import Callable

from jam import JamValue
from jam.errors import JamTypeError, JamArithmeticError
from jam.types.values import (
    Bool, Closure, Cons, EMPTY, FALSE, PrimFun, TRUE,
    is_int, is_list, to_bool, values_equal,
)


def _expect_int(op: str, value: JamValue) -> int:
    if not is_int(value):
        raise JamTypeError(f"Operator {op} expects an integer; got {value}")
    return value


def _expect_bool(op: str, value: JamValue) -> Bool:
    if value is not TRUE and value is not FALSE:
        raise JamTypeError(f"Operator {op} expects a boolean; got {value}")
    return value


# -------------------------------
# Unary operators
# -------------------------------
def positive(arg: JamValue) -> int:
    return _expect_int("+", arg)


def negate(arg: JamValue) -> int:
    return -_expect_int("-", arg)


def logical_not(arg: JamValue) -> Bool:
    return FALSE if _expect_bool("~", arg) is TRUE else TRUE


UNARY_OPS: dict[str, Callable[[JamValue], JamValue]] = {
    "+": positive,
    "-": negate,
    "~": logical_not,
}


# -------------------------------
# Binary operators
# -------------------------------
def add(left: JamValue, right: JamValue) -> int:
    return _expect_int("+", left) + _expect_int("+", right)


def sub(left: JamValue, right: JamValue) -> int:
    return _expect_int("-", left) - _expect_int("-", right)


def mul(left: JamValue, right: JamValue) -> int:
    return _expect_int("*", left) * _expect_int("*", right)


def div(left: JamValue, right: JamValue) -> int:
    """Integer division truncating toward zero."""
    n, d = _expect_int("/", left), _expect_int("/", right)
    if d == 0:
        raise JamArithmeticError(f"Division by zero: {n} / {d}")
    q = abs(n) // abs(d)
    return q if (n >= 0) == (d > 0) else -q


def equals(left: JamValue, right: JamValue) -> Bool:
    return to_bool(values_equal(left, right))


def not_equals(left: JamValue, right: JamValue) -> Bool:
    return to_bool(not values_equal(left, right))


def lt(left: JamValue, right: JamValue) -> Bool:
    return to_bool(_expect_int("<", left) < _expect_int("<", right))


def gt(left: JamValue, right: JamValue) -> Bool:
    return to_bool(_expect_int(">", left) > _expect_int(">", right))


def lte(left: JamValue, right: JamValue) -> Bool:
    return to_bool(_expect_int("<=", left) <= _expect_int("<=", right))


def gte(left: JamValue, right: JamValue) -> Bool:
    return to_bool(_expect_int(">=", left) >= _expect_int(">=", right))


BINARY_OPS: dict[str, Callable[[JamValue, JamValue], JamValue]] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "=": equals,
    "!=": not_equals,
    "<": lt,
    ">": gt,
    "<=": lte,
    ">=": gte,
}

# Short-circuit connectives; the evaluator decides whether the right operand runs.
LOGICAL_OPS = frozenset({"&", "|"})


def check_bool_operand(op: str, value: JamValue) -> Bool:
    """Used by the evaluator for the operands of & and |."""
    return _expect_bool(op, value)


# -------------------------------
# Primitive functions
# -------------------------------
def is_number(arg: JamValue) -> Bool:
    return to_bool(is_int(arg))


def is_function(arg: JamValue) -> Bool:
    return to_bool(isinstance(arg, (Closure, PrimFun)))


def is_list_p(arg: JamValue) -> Bool:
    return to_bool(is_list(arg))


def is_null(arg: JamValue) -> Bool:
    return to_bool(arg is EMPTY)


def is_cons(arg: JamValue) -> Bool:
    return to_bool(isinstance(arg, Cons))


def arity(arg: JamValue) -> int:
    if isinstance(arg, (Closure, PrimFun)):
        return arg.arity
    raise JamTypeError(f"arity expects a function; got {arg}")


def cons(first: JamValue, rest: JamValue) -> Cons:
    if not is_list(rest):
        raise JamTypeError(f"cons expects a list as its second argument; got {rest}")
    return Cons(first, rest)


def first(arg: JamValue) -> JamValue:
    if not isinstance(arg, Cons):
        raise JamTypeError(f"first expects a non-empty list; got {arg}")
    return arg.first


def rest(arg: JamValue) -> JamValue:
    if not isinstance(arg, Cons):
        raise JamTypeError(f"rest expects a non-empty list; got {arg}")
    return arg.rest


PRIM_FUNS: dict[str, PrimFun] = {
    p.name: p
    for p in (
        PrimFun("number?", 1, is_number),
        PrimFun("function?", 1, is_function),
        PrimFun("list?", 1, is_list_p),
        PrimFun("null?", 1, is_null),
        PrimFun("cons?", 1, is_cons),
        PrimFun("arity", 1, arity),
        PrimFun("cons", 2, cons),
        PrimFun("first", 1, first),
        PrimFun("rest", 1, rest),
    )
}


def apply_unary(op: str, arg: JamValue) -> JamValue:
    try:
        fn = UNARY_OPS[op]
    except KeyError:
        raise JamTypeError(f"Unknown unary operator {op}") from None
    return fn(arg)


def apply_binary(op: str, left: JamValue, right: JamValue) -> JamValue:
    try:
        fn = BINARY_OPS[op]
    except KeyError:
        raise JamTypeError(f"Unknown binary operator {op}") from None
    return fn(left, right)
