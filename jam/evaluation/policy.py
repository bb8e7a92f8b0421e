"""Evaluation policies: call-by-value, call-by-name and call-by-need.

A policy decides which Binding variant to build when a variable is bound by
`let` or by function application. Policies hold no state, so one instance of
each is shared by every evaluator that uses it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from jam import AST, Mode
from jam.types.binding import Binding, NameBinding, NeedBinding, ValueBinding
from jam.types.variable import Variable

if TYPE_CHECKING:
    from jam.evaluation.evaluator import Evaluator


class EvalPolicy(ABC):
    __slots__ = ()

    mode: Mode

    @abstractmethod
    def new_binding(self, var: Variable, exp: AST, evaluator: Evaluator) -> Binding:
        """Bind `var` to `exp`, whose free variables are resolved in `evaluator.env`."""

    def __repr__(self):
        return f"{type(self).__name__}()"


class CallByValue(EvalPolicy):
    __slots__ = ()
    mode = "value"

    def new_binding(self, var: Variable, exp: AST, evaluator: Evaluator) -> Binding:
        return ValueBinding(var, exp, evaluator)


class CallByName(EvalPolicy):
    __slots__ = ()
    mode = "name"

    def new_binding(self, var: Variable, exp: AST, evaluator: Evaluator) -> Binding:
        return NameBinding(var, exp, evaluator)


class CallByNeed(EvalPolicy):
    __slots__ = ()
    mode = "need"

    def new_binding(self, var: Variable, exp: AST, evaluator: Evaluator) -> Binding:
        return NeedBinding(var, exp, evaluator)


CALL_BY_VALUE = CallByValue()
CALL_BY_NAME = CallByName()
CALL_BY_NEED = CallByNeed()

POLICIES: dict[str, EvalPolicy] = {
    p.mode: p for p in (CALL_BY_VALUE, CALL_BY_NAME, CALL_BY_NEED)
}


def get_policy(mode: Mode) -> EvalPolicy:
    try:
        return POLICIES[mode]
    except KeyError:
        raise ValueError(f"Unknown evaluation mode {mode!r}; expected one of {sorted(POLICIES)}") from None
