"""Application engine for Jam.

Centralizes function application for the evaluator:
- Closures bind each formal parameter to its unevaluated argument through the
  active policy, in a frame extending the closure's captured environment.
- Primitive functions receive their arguments evaluated eagerly, left to right.
"""

from __future__ import annotations

from typing import Sequence, TYPE_CHECKING

from jam import AST, JamValue
from jam.errors import JamArityError, JamTypeError
from jam.types.values import Closure, PrimFun

if TYPE_CHECKING:
    from jam.evaluation.evaluator import Evaluator


def apply_closure(fn: Closure, args: Sequence[AST], evaluator: Evaluator) -> JamValue:
    """Apply a Jam closure.

    Parameters:
    - fn: The closure being applied.
    - args: The unevaluated argument expressions.
    - evaluator: The caller's evaluator; argument expressions are resolved in
      its environment, while the body is evaluated in the closure's own.
    """
    if len(args) != fn.arity:
        raise JamArityError(
            f"{fn} expects {fn.arity} argument(s); got {len(args)}"
        )
    policy = evaluator.policy
    bindings = [policy.new_binding(p, a, evaluator) for p, a in zip(fn.params, args)]
    new_env = fn.env.extend(fn.params, bindings)
    return evaluator.new_evaluator(new_env).evaluate(fn.body)


def apply_prim(fn: PrimFun, args: Sequence[AST], evaluator: Evaluator) -> JamValue:
    if len(args) != fn.arity:
        raise JamArityError(
            f"Primitive {fn} expects {fn.arity} argument(s); got {len(args)}"
        )
    return fn(*map(evaluator.evaluate, args))


def apply(head: JamValue, args: Sequence[AST], evaluator: Evaluator) -> JamValue:
    """Apply either a Closure or a PrimFun; anything else is a type error."""
    if isinstance(head, Closure):
        return apply_closure(head, args, evaluator)
    elif isinstance(head, PrimFun):
        return apply_prim(head, args, evaluator)
    else:
        raise JamTypeError(f"Cannot apply non-function {head}")
