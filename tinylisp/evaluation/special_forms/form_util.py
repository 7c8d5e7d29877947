from tinylisp import SExpression
from tinylisp.errors import LispArityError, LispTypeError
from tinylisp.types.value import iter_list


def operands(tail: SExpression, form: str, min_count: int, max_count: int | None = None) -> list[SExpression]:
    """Return the operands of a special form as a Python list, checking their count."""
    try:
        items = list(iter_list(tail))
    except LispTypeError:
        raise LispTypeError(f"{form}: malformed form, operands must be a proper list") from None
    if max_count is None:
        max_count = min_count
    if not min_count <= len(items) <= max_count:
        expected = str(min_count) if min_count == max_count else f"{min_count} to {max_count}"
        raise LispArityError(f"{form} expects {expected} operand(s), got {len(items)}")
    return items
