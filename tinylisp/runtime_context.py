from __future__ import annotations

import threading
from typing import Optional

from tinylisp.types.environment import Environment
from tinylisp.types.symbol import Symbol, SymbolTable
from tinylisp.types.value import TRUE, FALSE


class RuntimeContext:
    """Process state shared by the reader and the evaluator.

    Owns the symbol table and the global environment. Construction interns the
    special-form names and binds `true`/`false`; primitives are added by
    tinylisp.builtin.env_builtin.register. Nothing is torn down explicitly.
    """

    def __init__(self, with_builtins: bool = True):
        from tinylisp.evaluation.special_forms import SPECIAL_FORMS

        self.symbols = SymbolTable()
        self.globals = Environment()
        self.special_forms = {
            self.symbols.intern(name): handler for name, handler in SPECIAL_FORMS.items()
        }
        self.true = TRUE
        self.false = FALSE
        self.globals.define(self.symbols.intern("true"), TRUE)
        self.globals.define(self.symbols.intern("false"), FALSE)
        if with_builtins:
            from tinylisp.builtin.env_builtin import register
            register(self)

    def intern(self, name: str) -> Symbol:
        return self.symbols.intern(name)

    def is_special_form(self, symbol: object) -> bool:
        return symbol in self.special_forms


# NOTE: process-global default used when no context is passed explicitly.
_default_context: Optional[RuntimeContext] = None
_default_lock = threading.Lock()


def default_context() -> RuntimeContext:
    global _default_context
    with _default_lock:
        if _default_context is None:
            _default_context = RuntimeContext()
        return _default_context


def reset_default_context() -> None:
    global _default_context
    with _default_lock:
        _default_context = None
