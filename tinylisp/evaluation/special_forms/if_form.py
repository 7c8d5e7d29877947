from tinylisp import EvaluatorFn
from tinylisp import SExpression, LispValue
from tinylisp.types.environment import Environment
from tinylisp.types.nil import Nil
from tinylisp.types.value import FALSE
from tinylisp.evaluation.special_forms.form_util import operands


def if_form(
    tail: SExpression,
    env: Environment,
    context,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    cond_expr, then_expr, *rest = operands(tail, "if", 2, 3)

    cond = evaluate_fn(cond_expr, env, context)
    # only the false singleton is false; 0, "" and () are all true
    if cond is not FALSE:
        return evaluate_fn(then_expr, env, context)
    elif rest:
        return evaluate_fn(rest[0], env, context)
    else:
        return Nil
