"""Application engine for tinylisp.

Centralizes procedure application for the evaluator:
- Primitives receive the Lisp list of evaluated arguments and their result is
  returned as-is.
- Functions bind their parameters in a fresh frame whose enclosing
  environment is the closure captured by `fn` (lexical scope), then run the
  body expressions in order; the last one produces the result.
"""

from tinylisp import LispValue, EvaluatorFn
from tinylisp.errors import LispNotAProcedure
from tinylisp.types.environment import Environment
from tinylisp.types.nil import Nil
from tinylisp.types.value import Function, Primitive, type_name


def bind_arguments(fn: Function, args: LispValue) -> Environment:
    """Return the environment a call to `fn` with `args` evaluates its body in.

    The argument count must match the parameter count exactly.
    """
    return fn.env.extend_frame(fn.params, args)


def apply_function(fn: Function, args: LispValue, context, evaluate_fn: EvaluatorFn) -> LispValue:
    env = bind_arguments(fn, args)
    result: LispValue = Nil
    body = fn.body
    while body is not Nil:
        result = evaluate_fn(body.car, env, context)
        body = body.cdr
    return result


def apply(proc: LispValue, args: LispValue, context, evaluate_fn: EvaluatorFn) -> LispValue:
    """Apply a Primitive or Function to an argument list.

    Raises LispNotAProcedure for anything else.
    """
    if isinstance(proc, Primitive):
        return proc.fn(args)
    elif isinstance(proc, Function):
        return apply_function(proc, args, context, evaluate_fn)
    else:
        raise LispNotAProcedure(f"Cannot apply non-procedure {type_name(proc)}: {proc!r}")
