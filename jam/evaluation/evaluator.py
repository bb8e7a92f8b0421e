"""Core evaluator for the Jam interpreter.

An Evaluator pairs an environment with an evaluation policy and reduces AST
nodes to values. The policy is consulted only when a variable is bound (by
`let` or by function application); everything else is shared by the three
disciplines.
"""

from __future__ import annotations

from jam import AST, JamValue
from jam.builtin.primitives import LOGICAL_OPS, apply_binary, apply_unary, check_bool_operand
from jam.errors import JamTypeError
from jam.evaluation.apply import apply, apply_closure, apply_prim
from jam.evaluation.policy import CALL_BY_VALUE, EvalPolicy
from jam.types.ast_nodes import (
    App, BinOpApp, BoolConstant, If, IntConstant, Let, Map, NullConstant, UnOpApp,
)
from jam.types.binding import Undefined
from jam.types.environment import Environment
from jam.types.values import Closure, EMPTY, FALSE, PrimFun, TRUE, to_bool
from jam.types.variable import Variable


class Evaluator:
    """Reduces AST nodes to values in `env` under `policy`.

    With `recursive_let` (the default) the defining expressions of a `let`
    are evaluated in the frame they populate, so a definition sees the ones
    before it and, lazily, itself and the ones after it. With it off they are
    evaluated in the enclosing environment.
    """

    __slots__ = ("env", "policy", "recursive_let")

    def __init__(
        self,
        policy: EvalPolicy,
        env: Environment | None = None,
        recursive_let: bool = True,
    ):
        self.policy = policy
        self.env: Environment = env if env is not None else Environment()
        self.recursive_let = recursive_let

    def new_evaluator(self, env: Environment) -> Evaluator:
        """Evaluator over `env` sharing this evaluator's policy and let semantics."""
        return Evaluator(self.policy, env, self.recursive_let)

    def evaluate(self, node: AST) -> JamValue:
        # if, binary operators and application stay inline to keep the number
        # of Python frames per Jam call low
        match node:
            case IntConstant(value):
                return value
            case BoolConstant(value):
                return to_bool(value)
            case NullConstant():
                return EMPTY
            case PrimFun():
                return node
            case Variable():
                return self.env.lookup(node).resolve(self)
            case UnOpApp(op, arg):
                # Every unary operator needs its operand's value
                return apply_unary(op, self.evaluate(arg))
            case BinOpApp(op, left, right) if op in LOGICAL_OPS:
                lhs = check_bool_operand(op, self.evaluate(left))
                if op == "&" and lhs is FALSE:
                    return FALSE
                if op == "|" and lhs is TRUE:
                    return TRUE
                return check_bool_operand(op, self.evaluate(right))
            case BinOpApp(op, left, right):
                lhs = self.evaluate(left)
                return apply_binary(op, lhs, self.evaluate(right))
            case If(test, conseq, alt):
                cond = self.evaluate(test)
                if cond is TRUE:
                    return self.evaluate(conseq)
                if cond is FALSE:
                    return self.evaluate(alt)
                raise JamTypeError(f"Test of '{node}' is not a boolean: {cond}")
            case Map(params, body):
                return Closure(params, body, self.env)
            case App(rator, args):
                head = self.evaluate(rator)
                if isinstance(head, Closure):
                    return apply_closure(head, args, self)
                if isinstance(head, PrimFun):
                    return apply_prim(head, args, self)
                return apply(head, args, self)
            case Let():
                return self._let(node)
        raise JamTypeError(f"Cannot evaluate {node!r}")

    def _let(self, node: Let) -> JamValue:
        if self.recursive_let:
            # Defining expressions see the new frame; slots are filled left to right
            frame = {var: Undefined(var) for var in node.vars}
            inner = self.new_evaluator(Environment(self.env, frame))
            for var, exp in zip(node.vars, node.exps):
                frame[var] = self.policy.new_binding(var, exp, inner)
            return inner.evaluate(node.body)

        bindings = [self.policy.new_binding(v, e, self) for v, e in zip(node.vars, node.exps)]
        return self.new_evaluator(self.env.extend(node.vars, bindings)).evaluate(node.body)

    def __repr__(self):
        return f"Evaluator({self.policy!r}, depth={self.env.depth()})"


def evaluate(
    expr: AST, policy: EvalPolicy = CALL_BY_VALUE, recursive_let: bool = True
) -> JamValue:
    """Evaluate `expr` under `policy` starting from an empty environment."""
    return Evaluator(policy, Environment(), recursive_let).evaluate(expr)
