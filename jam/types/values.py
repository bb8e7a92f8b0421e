"""Runtime values for Jam.

Integers are plain Python ints. Booleans and the empty list are singletons
compared by identity; ``Cons`` and ``Closure`` are immutable once built.
"""

from __future__ import annotations

from io import StringIO
from typing import Callable, Iterable, TYPE_CHECKING

from jam import JamValue, AST

if TYPE_CHECKING:
    from jam.types.environment import Environment
    from jam.types.variable import Variable


class Bool:
    """Jam boolean. Only two instances exist; `Bool(flag)` returns TRUE or FALSE."""

    __slots__ = ("value",)
    _instances: dict[bool, Bool] = {}

    def __new__(cls, value: bool):
        value = bool(value)
        instance = cls._instances.get(value)
        if instance is None:
            instance = super().__new__(cls)
            instance.value = value
            cls._instances[value] = instance
        return instance

    def __reduce__(self):
        return Bool, (self.value,)

    def __bool__(self):
        return self.value

    def __repr__(self):
        return "TRUE" if self.value else "FALSE"

    def __str__(self):
        return "true" if self.value else "false"


TRUE = Bool(True)
FALSE = Bool(False)


def to_bool(flag: bool) -> Bool:
    return TRUE if flag else FALSE


class EmptyList:
    def __repr__(self): return "EMPTY"
    def __str__(self): return "()"
    def __bool__(self): return False
    def __iter__(self): return iter(())


EMPTY = EmptyList()


class Cons:
    """A list cell. ``rest`` is either another Cons or EMPTY."""

    __slots__ = ("first", "rest")

    def __init__(self, first: JamValue, rest: Cons | EmptyList):
        self.first = first
        self.rest = rest

    def __iter__(self):
        cell = self
        while isinstance(cell, Cons):
            yield cell.first
            cell = cell.rest

    def __eq__(self, other):
        if not isinstance(other, Cons):
            return NotImplemented
        a, b = self, other
        while isinstance(a, Cons) and isinstance(b, Cons):
            if not values_equal(a.first, b.first):
                return False
            a, b = a.rest, b.rest
        return a is b

    def __hash__(self):
        return hash(tuple(hash(v) for v in self))

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(")
            buffer.write(" ".join(str(v) for v in self))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"Cons({self.first!r}, {self.rest!r})"


class Closure:
    """A function value: formal parameters, body, and captured environment."""

    __slots__ = ("params", "body", "env")

    def __init__(self, params: tuple[Variable, ...], body: AST, env: Environment):
        self.params = params
        self.body = body
        self.env = env

    @property
    def arity(self) -> int:
        return len(self.params)

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(closure: map ")
            if self.params:
                buffer.write(", ".join(str(p) for p in self.params))
                buffer.write(" ")
            buffer.write("to ")
            buffer.write(str(self.body))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)


class PrimFun:
    """A primitive function.

    Appears both as an AST constant (the parser emits the shared instance for
    names like ``cons``) and as the value that constant evaluates to.
    ``fn`` receives already-forced argument values.
    """

    __slots__ = ("name", "arity", "fn")

    def __init__(self, name: str, arity: int, fn: Callable[..., JamValue]):
        self.name = name
        self.arity = arity
        self.fn = fn

    def __call__(self, *args: JamValue) -> JamValue:
        return self.fn(*args)

    def __repr__(self):
        return f"PrimFun({self.name!r})"

    def __str__(self):
        return self.name


def is_list(value: JamValue) -> bool:
    return value is EMPTY or isinstance(value, Cons)


def is_int(value: JamValue) -> bool:
    return type(value) is int


def values_equal(a: JamValue, b: JamValue) -> bool:
    """Jam equality: ints by value, lists structurally, everything else by identity."""
    if a is b:
        return True
    if is_int(a) and is_int(b):
        return a == b
    if isinstance(a, Cons) and isinstance(b, Cons):
        return a == b
    return False


def from_python_list(items: Iterable[JamValue]) -> Cons | EmptyList:
    result: Cons | EmptyList = EMPTY
    for item in reversed(list(items)):
        result = Cons(item, result)
    return result


def to_python_list(value: Cons | EmptyList) -> list[JamValue]:
    return list(value)
