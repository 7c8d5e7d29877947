from tinylisp import SExpression, LispValue, EvaluatorFn
from tinylisp.evaluation.special_forms.form_util import operands


def quote_form(tail: SExpression, env, context, evaluate_fn: EvaluatorFn) -> LispValue:
    """(quote x) -> x, unevaluated."""
    (quoted,) = operands(tail, "quote", 1)
    return quoted
