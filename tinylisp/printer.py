"""Display formatting for tinylisp values.

Every variant renders distinguishably: numbers in decimal, booleans as
`true`/`false`, strings in double quotes, symbols by name and nil as `nil`.
Cons cells, primitives and functions print as opaque tokens unless the list
form is requested with `display_list`.
"""

from io import StringIO

from tinylisp import LispValue
from tinylisp.types.nil import Nil
from tinylisp.types.symbol import Symbol
from tinylisp.types.value import Boolean, Cons, Function, Number, Primitive, String


def to_string(value: LispValue, readable: bool = True) -> str:
    """Render one value; `readable=False` shows strings without quotes."""
    if value is Nil:
        return "nil"
    if isinstance(value, Number):
        return str(value.value)
    if isinstance(value, Boolean):
        return "true" if value.value else "false"
    if isinstance(value, String):
        return f'"{value.text}"' if readable else value.text
    if isinstance(value, Symbol):
        return value.name
    if isinstance(value, Cons):
        return f"<conscell:{id(value):#x}>"
    if isinstance(value, Primitive):
        return f"<prim:{value.name}>"
    if isinstance(value, Function):
        return f"<func:{id(value):#x}>"
    return repr(value)


def display_list(value: LispValue, max_depth: int = 16) -> str:
    """Render lists structurally, e.g. `(quote (1 2))`; improper tails use ` . `."""
    with StringIO() as buffer:
        _write(buffer, value, max_depth, set())
        return buffer.getvalue()


def _write(buffer: StringIO, value: LispValue, depth: int, active: set[int]) -> None:
    if not isinstance(value, Cons):
        buffer.write(to_string(value))
        return
    if depth <= 0 or id(value) in active:
        buffer.write("...")
        return
    active.add(id(value))
    buffer.write("(")
    first = True
    cell: LispValue = value
    seen: set[int] = set()
    while isinstance(cell, Cons):
        if id(cell) in seen:
            buffer.write(" ...")
            break
        seen.add(id(cell))
        if not first:
            buffer.write(" ")
        _write(buffer, cell.car, depth - 1, active)
        first = False
        cell = cell.cdr
    else:
        if cell is not Nil:
            buffer.write(" . ")
            _write(buffer, cell, depth - 1, active)
    buffer.write(")")
    active.discard(id(value))
