from tinylisp import EvaluatorFn
from tinylisp import SExpression, LispValue
from tinylisp.errors import LispInvalidSymbol
from tinylisp.types.environment import Environment
from tinylisp.types.symbol import Symbol
from tinylisp.evaluation.special_forms.form_util import operands


def set_form(
    tail: SExpression,
    env: Environment,
    context,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    var_sym, val_expr = operands(tail, "set!", 2)
    if not isinstance(var_sym, Symbol):
        raise LispInvalidSymbol(f"set! first argument must be a symbol, got {var_sym!r}")
    value = evaluate_fn(val_expr, env, context)
    # unbound names become globals
    return env.set(var_sym, value)
