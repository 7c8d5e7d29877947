"""Built-in primitives for the tinylisp global environment.

This module defines integer arithmetic and comparison, pair construction and
mutation, list helpers, predicates and `load`, plus the `register` helper
that binds them into a RuntimeContext's globals.

Every primitive receives the Lisp list of already-evaluated arguments and
validates its own arity and operand types.
"""
from __future__ import annotations

import logging
from functools import reduce
from typing import TYPE_CHECKING, Callable

from tinylisp import LispValue
from tinylisp.errors import LispArityError, LispError
from tinylisp.types.nil import Nil
from tinylisp.types.value import (
    Cons, Number, Primitive, as_number, as_string, car as car_of, cdr as cdr_of,
    from_iterable, iter_list, make_bool, set_car as set_car_of, set_cdr as set_cdr_of,
)

if TYPE_CHECKING:
    from tinylisp.interpreter import Interpreter
    from tinylisp.runtime_context import RuntimeContext

logger = logging.getLogger(__name__)


def arguments(args: LispValue, name: str, min_count: int, max_count: int | None = -1) -> list[LispValue]:
    """Convert the argument list to a Python list and check its length.

    `max_count` defaults to `min_count`; pass None for no upper bound.
    """
    values = list(iter_list(args))
    if max_count == -1:
        max_count = min_count
    if len(values) < min_count or (max_count is not None and len(values) > max_count):
        if max_count is None:
            expected = f"at least {min_count}"
        elif max_count == min_count:
            expected = str(min_count)
        else:
            expected = f"{min_count} to {max_count}"
        raise LispArityError(f"{name} expects {expected} argument(s), got {len(values)}")
    return values


# -------------------------------
# Arithmetic
# -------------------------------
def add(args: LispValue) -> LispValue:
    """Return the sum of all arguments; (+) is 0."""
    return Number(sum(as_number(a) for a in iter_list(args)))


def sub(args: LispValue) -> LispValue:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    values = [as_number(a) for a in arguments(args, "-", 1, None)]
    if len(values) == 1:
        return Number(-values[0])
    return Number(reduce(lambda x, y: x - y, values))


def mul(args: LispValue) -> LispValue:
    """Return the product of all arguments; (*) is 1."""
    return Number(reduce(lambda x, y: x * y, (as_number(a) for a in iter_list(args)), 1))


# -------------------------------
# Comparison
# -------------------------------
def _chain(name: str, test: Callable[[int, int], bool]) -> Callable[[LispValue], LispValue]:
    def compare(args: LispValue) -> LispValue:
        values = [as_number(a) for a in arguments(args, name, 1, None)]
        return make_bool(all(test(x, y) for x, y in zip(values, values[1:])))
    compare.__name__ = f"compare_{name}"
    return compare


num_eq = _chain("=", lambda x, y: x == y)
num_lt = _chain("<", lambda x, y: x < y)


def is_eq(args: LispValue) -> LispValue:
    """Identity comparison; numbers compare by value."""
    a, b = arguments(args, "eq?", 2)
    if isinstance(a, Number) and isinstance(b, Number):
        return make_bool(a.value == b.value)
    return make_bool(a is b)


def is_null(args: LispValue) -> LispValue:
    (value,) = arguments(args, "null?", 1)
    return make_bool(value is Nil)


# -------------------------------
# Pairs and lists
# -------------------------------
def cons(args: LispValue) -> LispValue:
    head, tail = arguments(args, "cons", 2)
    return Cons(head, tail)


def car(args: LispValue) -> LispValue:
    (cell,) = arguments(args, "car", 1)
    return car_of(cell)


def cdr(args: LispValue) -> LispValue:
    (cell,) = arguments(args, "cdr", 1)
    return cdr_of(cell)


def set_car(args: LispValue) -> LispValue:
    cell, value = arguments(args, "set-car!", 2)
    return set_car_of(cell, value)


def set_cdr(args: LispValue) -> LispValue:
    cell, value = arguments(args, "set-cdr!", 2)
    return set_cdr_of(cell, value)


def list_builtin(args: LispValue) -> LispValue:
    """Return a fresh list of the arguments."""
    return from_iterable(iter_list(args))


def make_load(interpreter: Interpreter) -> Callable[[LispValue], LispValue]:
    def load(args: LispValue) -> LispValue:
        """Evaluate every form of the named file in the global environment."""
        (name,) = arguments(args, "load", 1)
        try:
            interpreter.load(as_string(name))
        except (OSError, UnicodeDecodeError) as e:
            raise LispError(f"load: {e}") from e
        return Nil
    return load


BUILTINS: dict[str, Callable[[LispValue], LispValue]] = {
    "+": add,
    "-": sub,
    "*": mul,
    "=": num_eq,
    "<": num_lt,
    "eq?": is_eq,
    "null?": is_null,
    "cons": cons,
    "car": car,
    "cdr": cdr,
    "set-car!": set_car,
    "set-cdr!": set_cdr,
    "list": list_builtin,
}


def register(context: RuntimeContext, interpreter: Interpreter | None = None) -> None:
    """Bind the built-in primitives into the context's global environment."""
    for name, fn in BUILTINS.items():
        context.globals.define(context.intern(name), Primitive(name, fn))
    logger.debug("registered %d primitives", len(BUILTINS))
    if interpreter is not None:
        register_load(context, interpreter)


def register_load(context: RuntimeContext, interpreter: Interpreter) -> None:
    """Bind `load`, which needs an interpreter to evaluate the file with."""
    context.globals.define(context.intern("load"), Primitive("load", make_load(interpreter)))
