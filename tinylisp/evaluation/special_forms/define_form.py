from tinylisp import EvaluatorFn
from tinylisp import SExpression, LispValue
from tinylisp.errors import LispInvalidSymbol
from tinylisp.types.environment import Environment
from tinylisp.types.symbol import Symbol
from tinylisp.evaluation.special_forms.form_util import operands


def define_form(
    tail: SExpression,
    env: Environment,
    context,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (def name value)
    Extends the current frame, shadowing any earlier binding of `name`; returns the value.
    """
    name, val_expr = operands(tail, "def", 2)
    if not isinstance(name, Symbol):
        raise LispInvalidSymbol(f"def first argument must be a symbol, got {name!r}")
    value = evaluate_fn(val_expr, env, context)
    return env.define(name, value)
