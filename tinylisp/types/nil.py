from __future__ import annotations


class NilType:
    """The empty list.

    Nil marks the absence of a cell: it is not a Value variant, so the checked
    accessors in tinylisp.types.value reject it like any other mismatch.
    """
    _instance: NilType | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "nil"
    def __bool__(self): return False
    def __iter__(self): return iter(())

    def __reduce__(self):
        return (NilType, ())


Nil = NilType()
