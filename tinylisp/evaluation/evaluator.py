"""Core evaluator for the tinylisp interpreter.

Implements special-form dispatch, symbol lookup, self-evaluation of atoms and
ordinary application. Evaluation is plain recursion on the host stack; a
Python RecursionError is reported as LispRecursionError by `evaluate`.
"""

from __future__ import annotations

from typing import Optional

from tinylisp import SExpression, LispValue
from tinylisp.errors import LispRecursionError, LispTypeError
from tinylisp.evaluation.apply import apply
from tinylisp.runtime_context import RuntimeContext, default_context
from tinylisp.types.environment import Environment
from tinylisp.types.nil import Nil
from tinylisp.types.symbol import Symbol
from tinylisp.types.value import Cons


def evaluate(
    expr: SExpression, env: Optional[Environment] = None, context: Optional[RuntimeContext] = None
) -> LispValue:
    """
    Evaluate `expr` in `env` (the context's globals when omitted).
    """
    if context is None:
        context = default_context()
    if env is None:
        env = context.globals
    try:
        return evaluate0(expr, env, context)
    except RecursionError:
        raise LispRecursionError("maximum evaluation depth exceeded") from None


def evaluate0(expr: SExpression, env: Environment, context: RuntimeContext) -> LispValue:
    """
    Single evaluation step, recursing for subexpressions.
    """
    match expr:
        case Cons(car=head, cdr=tail_args):
            handler = context.special_forms.get(head) if isinstance(head, Symbol) else None
            if handler is not None:
                return handler(tail_args, env, context, evaluate0)

            proc = evaluate0(head, env, context)
            return apply(proc, evaluate_list(tail_args, env, context), context, evaluate0)

        case Symbol():
            return env.lookup(expr)

    # --- Atoms (and nil) return as-is ---
    return expr


def evaluate_list(exprs: SExpression, env: Environment, context: RuntimeContext) -> LispValue:
    """Evaluate each expression left to right, collecting the values in order."""
    head: LispValue = Nil
    last: Optional[Cons] = None
    while exprs is not Nil:
        if not isinstance(exprs, Cons):
            raise LispTypeError("argument list must be a proper list")
        cell = Cons(evaluate0(exprs.car, env, context), Nil)
        if last is None:
            head = cell
        else:
            last.cdr = cell
        last = cell
        exprs = exprs.cdr
    return head
