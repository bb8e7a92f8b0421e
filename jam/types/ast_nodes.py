"""Abstract syntax tree for Jam programs.

The node set is closed: the evaluator pattern-matches on exactly these kinds.
``Variable`` (jam.types.variable) and ``PrimFun`` (jam.types.values) double as
leaf nodes. Every node renders back to Jam concrete syntax with ``str()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from jam import AST
from jam.types.values import PrimFun
from jam.types.variable import Variable


@dataclass(frozen=True)
class IntConstant:
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class BoolConstant:
    value: bool

    def __str__(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class NullConstant:
    def __str__(self):
        return "null"


@dataclass(frozen=True)
class UnOpApp:
    op: str
    arg: AST

    def __str__(self):
        return f"{self.op}{_operand(self.arg)}"


@dataclass(frozen=True)
class BinOpApp:
    op: str
    left: AST
    right: AST

    def __str__(self):
        return f"{_operand(self.left)} {self.op} {_operand(self.right)}"


@dataclass(frozen=True)
class If:
    test: AST
    conseq: AST
    alt: AST

    def __str__(self):
        return f"if {self.test} then {self.conseq} else {self.alt}"


@dataclass(frozen=True)
class Map:
    params: tuple[Variable, ...]
    body: AST

    def __str__(self):
        if not self.params:
            return f"map to {self.body}"
        return f"map {', '.join(str(p) for p in self.params)} to {self.body}"


@dataclass(frozen=True)
class App:
    rator: AST
    args: tuple[AST, ...]

    def __str__(self):
        return f"{_operand(self.rator)}({', '.join(str(a) for a in self.args)})"


@dataclass(frozen=True)
class Let:
    vars: tuple[Variable, ...]
    exps: tuple[AST, ...]
    body: AST

    def __post_init__(self):
        if len(self.vars) != len(self.exps):
            raise ValueError("Let requires one defining expression per variable")

    def __str__(self):
        defs = " ".join(f"{v} := {e};" for v, e in zip(self.vars, self.exps))
        return f"let {defs} in {self.body}"


_ATOMIC = (IntConstant, BoolConstant, NullConstant, Variable, PrimFun, App)


def _operand(node: AST) -> str:
    # Compound operands are parenthesized so the rendering re-parses to the same tree
    if isinstance(node, _ATOMIC):
        return str(node)
    return f"({node})"
