"""Runtime environment for tinylisp.

Bindings live in association lists built from Cons cells: a frame is a list
of `(symbol . value)` pairs, newest first. An Environment holds one such
frame plus a link to its enclosing Environment; the outermost Environment is
the global frame.

Symbols are compared by identity, which relies on interning.
"""

from __future__ import annotations

from typing import Iterator, Optional

from tinylisp import LispValue
from tinylisp.errors import LispInvalidSymbol, LispUnboundSymbol, LispArityError
from tinylisp.types.nil import Nil
from tinylisp.types.symbol import Symbol
from tinylisp.types.value import Cons, iter_list, list_length


def extend(alist: LispValue, symbol: Symbol, value: LispValue) -> Cons:
    """Return `alist` with `(symbol . value)` prepended. `alist` is not modified."""
    return Cons(Cons(symbol, value), alist)


def assoc(symbol: Symbol, alist: LispValue) -> Optional[Cons]:
    """Return the first `(key . value)` pair whose key is `symbol`, or None."""
    while alist is not Nil:
        pair = alist.car
        if pair.car is symbol:
            return pair
        alist = alist.cdr
    return None


class Environment:
    """Chain of association-list frames mapping Symbols to values."""

    __slots__ = ("bindings", "outer")

    def __init__(self, bindings: LispValue = Nil, outer: Optional[Environment] = None):
        self.bindings: LispValue = bindings
        self.outer: Optional[Environment] = outer

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def define(self, name: Symbol, value: LispValue) -> LispValue:
        """Bind `name` to `value` in this frame, shadowing any earlier binding.

        Raises LispInvalidSymbol if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise LispInvalidSymbol(f"Cannot define {name!r} as a symbol")
        self.bindings = extend(self.bindings, name, value)
        return value

    def find(self, symbol: Symbol) -> Optional[Cons]:
        """Find the innermost binding pair for `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            pair = assoc(symbol, env.bindings)
            if pair is not None:
                return pair
            env = env.outer
        return None

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name`.

        Raises LispUnboundSymbol if not found.
        """
        pair = self.find(name)
        if pair is None:
            raise LispUnboundSymbol(name)
        return pair.cdr

    def set(self, name: Symbol, value: LispValue) -> LispValue:
        """Overwrite the existing binding for `name` in place.

        An unbound `name` is defined in the global frame instead.
        """
        if not isinstance(name, Symbol):
            raise LispInvalidSymbol(f"Cannot set {name!r}, not a symbol")
        pair = self.find(name)
        if pair is None:
            return self.root().define(name, value)
        pair.cdr = value
        return value

    def extend_frame(self, params: LispValue, args: LispValue) -> Environment:
        """Return a child environment binding each parameter to its argument."""
        n_params, n_args = list_length(params), list_length(args)
        if n_params != n_args:
            raise LispArityError(f"expected {n_params} argument(s), got {n_args}")
        frame: LispValue = Nil
        for param, arg in zip(iter_list(params), iter_list(args)):
            if not isinstance(param, Symbol):
                raise LispInvalidSymbol(f"parameter {param!r} is not a symbol")
            frame = extend(frame, param, arg)
        return Environment(frame, self)

    def names(self) -> Iterator[Symbol]:
        """Yield every visible symbol once, innermost binding first."""
        seen: set[int] = set()
        env: Optional[Environment] = self
        while env is not None:
            for pair in iter_list(env.bindings):
                if id(pair.car) not in seen:
                    seen.add(id(pair.car))
                    yield pair.car
            env = env.outer

    def __contains__(self, name: Symbol) -> bool:
        return self.find(name) is not None

    def __repr__(self) -> str:
        depth = 0
        env = self.outer
        while env is not None:
            depth += 1
            env = env.outer
        return f"<Environment frame={list_length(self.bindings)} depth={depth}>"
