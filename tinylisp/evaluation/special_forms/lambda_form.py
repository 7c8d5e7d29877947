from tinylisp import EvaluatorFn
from tinylisp import SExpression, LispValue
from tinylisp.errors import LispArityError, LispInvalidSymbol, LispTypeError
from tinylisp.types.environment import Environment
from tinylisp.types.symbol import Symbol
from tinylisp.types.value import Cons, Function, iter_list


def _proper(lst: SExpression, what: str) -> list[SExpression]:
    try:
        return list(iter_list(lst))
    except LispTypeError:
        raise LispTypeError(f"fn {what} must be a proper list") from None


def lambda_form(
    tail: SExpression,
    env: Environment,
    context,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    # (fn (params...) body...) allows zero or more body forms; an empty body
    # makes the function return nil.
    if not isinstance(tail, Cons):
        raise LispArityError("fn requires at least a parameter list")

    params, body = tail.car, tail.cdr
    for param in _proper(params, "parameters"):
        if not isinstance(param, Symbol):
            raise LispInvalidSymbol(f"fn parameter must be a symbol, got {param!r}")
    _proper(body, "body")

    return Function(params, body, env)
