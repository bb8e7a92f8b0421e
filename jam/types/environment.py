"""Runtime environment for Jam.

An Environment is one frame of Variable -> Binding associations plus an
`outer` link to the frame it extends. Frames are persistent: extending an
environment builds a new frame and leaves the original untouched, so any
number of closures can share a common tail.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterable, Optional, TYPE_CHECKING

from jam.errors import JamUnboundVariable
from jam.types.variable import Variable

if TYPE_CHECKING:
    from jam.types.binding import Binding


class Environment:
    """Linked chain of immutable frames mapping Variables to Bindings."""

    __slots__ = ("vars", "outer")

    def __init__(
        self,
        outer: Optional[Environment] = None,
        vars: dict[Variable, Binding] | None = None,
    ):
        self.vars: dict[Variable, Binding] = vars if vars is not None else {}
        self.outer: Environment | None = outer

    def extend(self, variables: Iterable[Variable], bindings: Iterable[Binding]) -> Environment:
        """Return a new frame binding each variable to its binding, with self as outer."""
        return Environment(self, dict(zip(variables, bindings)))

    def find(self, var: Variable) -> Optional[Environment]:
        """Find the nearest frame in the chain that binds `var`."""
        env: Optional[Environment] = self
        while env is not None:
            if var in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, var: Variable) -> Binding:
        """Return the binding for `var`; raises JamUnboundVariable if there is none."""
        env = self.find(var)
        if env is None:
            raise JamUnboundVariable(f"Unbound variable {var}")
        return env.vars[var]

    def __contains__(self, var: Variable) -> bool:
        return self.find(var) is not None

    def depth(self) -> int:
        n = 0
        env = self.outer
        while env is not None:
            n += 1
            env = env.outer
        return n

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            chain = []
            env: Optional[Environment] = self
            while env is not None:
                frame = StringIO()
                env._write_vars(frame)
                chain.append(frame.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
