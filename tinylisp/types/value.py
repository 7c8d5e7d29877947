"""Runtime value variants for tinylisp.

Every datum the reader produces or the evaluator computes is one of the
variants below. Each variant carries its own typed fields; callers reach them
either directly (when the variant is already known) or through the checked
accessors at the bottom of this module, which raise LispTypeError on a
mismatch instead of assuming a layout.

Only Cons is mutable. Number and String compare by payload; the remaining
variants compare by identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator

from tinylisp import LispValue, PrimitiveFn
from tinylisp.errors import LispTypeError, LispOverflowError
from tinylisp.types.nil import Nil

if TYPE_CHECKING:
    from tinylisp.types.environment import Environment
    from tinylisp.types.symbol import Symbol

INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


class Value:
    """Base class of all variants."""
    __slots__ = ()


class Cons(Value):
    """Mutable pair; chains of Cons cells form lists and association lists."""

    __slots__ = ("car", "cdr")

    def __init__(self, car: LispValue, cdr: LispValue = Nil):
        self.car = car
        self.cdr = cdr

    def __iter__(self) -> Iterator[LispValue]:
        return iter_list(self)

    def __repr__(self) -> str:
        return f"<conscell:{id(self):#x}>"


@dataclass(frozen=True, slots=True)
class Number(Value):
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise LispTypeError(f"Number requires an int, got {self.value!r}")
        if not INT_MIN <= self.value <= INT_MAX:
            raise LispOverflowError(f"integer {self.value} does not fit in 64 bits")

    def __str__(self) -> str:
        return str(self.value)


class Boolean(Value):
    """Two instances exist, TRUE and FALSE; the constructor returns them."""

    __slots__ = ("value",)
    _instances: dict[bool, Boolean] = {}

    def __new__(cls, value: bool):
        flag = bool(value)
        inst = cls._instances.get(flag)
        if inst is None:
            inst = super().__new__(cls)
            object.__setattr__(inst, "value", flag)
            cls._instances[flag] = inst
        return inst

    def __setattr__(self, key, value):
        raise AttributeError("Boolean is immutable")

    def __reduce__(self):
        return (Boolean, (self.value,))

    def __repr__(self) -> str:
        return "true" if self.value else "false"


TRUE = Boolean(True)
FALSE = Boolean(False)


@dataclass(frozen=True, slots=True)
class String(Value):
    text: str

    def __str__(self) -> str:
        return self.text


class Primitive(Value):
    """Host-implemented procedure; the evaluator never looks inside `fn`."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: PrimitiveFn):
        self.name = name
        self.fn = fn

    def __repr__(self) -> str:
        return f"<prim:{self.name}>"


class Function(Value):
    """User-defined procedure: parameter list, body list and closure environment."""

    __slots__ = ("params", "body", "env")

    def __init__(self, params: LispValue, body: LispValue, env: Environment):
        self.params = params
        self.body = body
        self.env = env

    def __repr__(self) -> str:
        return f"<func:{id(self):#x}>"


def make_bool(flag: bool) -> Boolean:
    return TRUE if flag else FALSE


def type_name(value: LispValue) -> str:
    if value is Nil:
        return "nil"
    if isinstance(value, Value):
        return type(value).__name__.lower()
    return type(value).__name__


# -------------------------------
# Checked accessors
# -------------------------------
def expect(value: LispValue, kind: type, what: str = "") -> LispValue:
    """Return `value` if it is an instance of `kind`, else raise LispTypeError."""
    if not isinstance(value, kind):
        where = f" in {what}" if what else ""
        raise LispTypeError(
            f"expected {kind.__name__.lower()}{where}, got {type_name(value)}"
        )
    return value


def car(value: LispValue) -> LispValue:
    return expect(value, Cons, "car").car


def cdr(value: LispValue) -> LispValue:
    return expect(value, Cons, "cdr").cdr


def set_car(cell: LispValue, value: LispValue) -> LispValue:
    expect(cell, Cons, "set-car!").car = value
    return value


def set_cdr(cell: LispValue, value: LispValue) -> LispValue:
    expect(cell, Cons, "set-cdr!").cdr = value
    return value


def as_number(value: LispValue) -> int:
    return expect(value, Number).value


def as_string(value: LispValue) -> str:
    return expect(value, String).text


def as_symbol(value: LispValue) -> str:
    from tinylisp.types.symbol import Symbol
    return expect(value, Symbol).name


def as_bool(value: LispValue) -> bool:
    return expect(value, Boolean).value


def as_primitive(value: LispValue) -> PrimitiveFn:
    return expect(value, Primitive).fn


def as_function(value: LispValue) -> Function:
    return expect(value, Function)


# -------------------------------
# List helpers
# -------------------------------
def from_iterable(values: Iterable[LispValue]) -> LispValue:
    """Build a proper list from a Python iterable, preserving order."""
    items = list(values)
    result: LispValue = Nil
    for item in reversed(items):
        result = Cons(item, result)
    return result


def iter_list(lst: LispValue) -> Iterator[LispValue]:
    """Yield the elements of a proper list; an improper tail is a type error."""
    while lst is not Nil:
        if not isinstance(lst, Cons):
            raise LispTypeError(f"expected a proper list, found {type_name(lst)} tail")
        yield lst.car
        lst = lst.cdr


def list_length(lst: LispValue) -> int:
    return sum(1 for _ in iter_list(lst))


def nth(lst: LispValue, index: int) -> LispValue:
    for i, item in enumerate(iter_list(lst)):
        if i == index:
            return item
    raise LispTypeError(f"list has no element at index {index}")


def nreverse(lst: LispValue) -> LispValue:
    """Reverse a proper list in place by relinking cdr fields; returns the new head."""
    reversed_head: LispValue = Nil
    while lst is not Nil:
        cell = expect(lst, Cons, "nreverse")
        lst = cell.cdr
        cell.cdr = reversed_head
        reversed_head = cell
    return reversed_head
