from __future__ import annotations

import threading
from typing import Iterator, Optional

from tinylisp.errors import LispInvalidSymbol
from tinylisp.types.value import Value


class Symbol(Value):
    """Interned identifier.

    Instances are created only by SymbolTable.intern, so two symbols with the
    same name from one table are the same object and compare with `is`.
    """

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self):
        return f"Symbol({self.name!r})"

    def __str__(self):
        return self.name


class SymbolTable:
    """Registry mapping symbol text to its one canonical Symbol."""

    __slots__ = ("_index", "_order", "_lock")

    def __init__(self):
        self._index: dict[str, Symbol] = {}
        self._order: list[Symbol] = []
        # interning is check-then-insert
        self._lock = threading.Lock()

    def intern(self, name: str) -> Symbol:
        if not isinstance(name, str) or not name:
            raise LispInvalidSymbol(f"Cannot intern {name!r} as a symbol")
        sym = self._index.get(name)
        if sym is not None:
            return sym
        with self._lock:
            sym = self._index.get(name)
            if sym is None:
                sym = Symbol(name)
                self._index[name] = sym
                self._order.append(sym)
            return sym

    def find(self, name: str) -> Optional[Symbol]:
        """Return the interned symbol for `name` without creating one."""
        return self._index.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[Symbol]:
        # most recently interned first
        return reversed(self._order.copy())
