"""Registry of special forms for the tinylisp evaluator.

Maps form names to handler functions that implement non-standard evaluation
rules. Each RuntimeContext interns these names and the evaluator consults the
resulting table before ordinary function application.

Handlers take `(tail, env, context, evaluate_fn)` where `tail` is the Lisp list
of unevaluated operands.
"""

from tinylisp.evaluation.special_forms.quote_form import quote_form
from tinylisp.evaluation.special_forms.lambda_form import lambda_form
from tinylisp.evaluation.special_forms.define_form import define_form
from tinylisp.evaluation.special_forms.set_form import set_form
from tinylisp.evaluation.special_forms.if_form import if_form

SPECIAL_FORMS = {
    "quote": quote_form,
    "fn": lambda_form,
    "def": define_form,
    "set!": set_form,
    "if": if_form,
}
