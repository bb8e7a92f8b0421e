"""Bindings: what a variable resolves to in an environment.

Each binding variant decides when, and how often, the defining expression of
a variable is evaluated:

- ValueBinding evaluates once, eagerly, when the binding is built (call-by-value).
- NameBinding keeps the thunk and evaluates it on every lookup (call-by-name).
- NeedBinding keeps the thunk and evaluates it on the first lookup only,
  sharing the result with every later lookup (call-by-need).

A thunk is evaluated in the environment captured when the binding was built,
under the evaluation policy of the evaluator passed to `resolve`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

from jam import AST, JamValue
from jam.errors import JamSelfReferenceError, JamUnboundVariable
from jam.types.environment import Environment
from jam.types.variable import Variable

if TYPE_CHECKING:
    from jam.evaluation.evaluator import Evaluator


class Binding(ABC):
    __slots__ = ("var",)

    def __init__(self, var: Variable):
        self.var = var

    @abstractmethod
    def resolve(self, evaluator: Evaluator) -> JamValue:
        """Return the value of this binding's variable."""


class ValueBinding(Binding):
    __slots__ = ("value",)

    def __init__(self, var: Variable, exp: AST, evaluator: Evaluator):
        super().__init__(var)
        self.value: JamValue = evaluator.evaluate(exp)

    def resolve(self, evaluator: Evaluator) -> JamValue:
        return self.value

    def __repr__(self):
        return f"ValueBinding({self.var}, {self.value})"


class NameBinding(Binding):
    __slots__ = ("exp", "env")

    def __init__(self, var: Variable, exp: AST, evaluator: Evaluator):
        super().__init__(var)
        self.exp = exp
        self.env: Environment = evaluator.env

    def resolve(self, evaluator: Evaluator) -> JamValue:
        return evaluator.new_evaluator(self.env).evaluate(self.exp)

    def __repr__(self):
        return f"NameBinding({self.var}, {self.exp})"


class MemoState(Enum):
    UNEVALUATED = "unevaluated"
    IN_PROGRESS = "in progress"
    EVALUATED = "evaluated"


class NeedBinding(Binding):
    __slots__ = ("exp", "env", "state", "value")

    def __init__(self, var: Variable, exp: AST, evaluator: Evaluator):
        super().__init__(var)
        self.exp: AST | None = exp
        self.env: Environment | None = evaluator.env
        self.state = MemoState.UNEVALUATED
        self.value: JamValue = None

    def resolve(self, evaluator: Evaluator) -> JamValue:
        if self.state is MemoState.EVALUATED:
            return self.value
        if self.state is MemoState.IN_PROGRESS:
            raise JamSelfReferenceError(
                f"Binding of {self.var} forced while being computed: {self.exp}"
            )
        self.state = MemoState.IN_PROGRESS
        try:
            value = evaluator.new_evaluator(self.env).evaluate(self.exp)
        except BaseException:
            self.state = MemoState.UNEVALUATED
            raise
        self.value = value
        self.state = MemoState.EVALUATED
        # The thunk is never needed again
        self.exp = None
        self.env = None
        return value

    def __repr__(self):
        if self.state is MemoState.EVALUATED:
            return f"NeedBinding({self.var}, {self.value})"
        return f"NeedBinding({self.var}, {self.exp}, {self.state.value})"


class Undefined(Binding):
    """Placeholder occupying a recursive-let slot until its real binding is built."""

    __slots__ = ()

    def resolve(self, evaluator: Evaluator) -> JamValue:
        raise JamUnboundVariable(f"Variable {self.var} referenced before its definition")

    def __repr__(self):
        return f"Undefined({self.var})"
