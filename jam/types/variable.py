from __future__ import annotations
import sys


class Variable:
    """A variable reference, interned by name.

    Constructing ``Variable("x")`` twice returns the same object, so
    environments compare variables with ``is``.
    """

    __slots__ = ("name",)

    _interned: dict[str, Variable] = {}

    def __new__(cls, name: str) -> Variable:
        name = sys.intern(name)
        var = cls._interned.get(name)
        if var is None:
            var = super().__new__(cls)
            var.name = name
            cls._interned[name] = var
        return var

    def __reduce__(self):
        return Variable, (self.name,)

    def __repr__(self):
        return f"Variable({self.name!r})"

    def __str__(self):
        return self.name
