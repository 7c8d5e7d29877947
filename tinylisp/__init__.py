# Core type aliases for tinylisp's data model.
# Runtime data is represented by the tagged Value variants in tinylisp.types.value
# (Cons, Number, Boolean, String, Symbol, Primitive, Function) plus the Nil sentinel.
#
# Naming guidance:
# - SExpression: Use in reader/special-form code to denote syntactic forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` so that Nil (which is not a Value) fits either.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Forms alias (code and data share one representation)
SExpression = LispValue

# Evaluator function type: passed into special forms so they can recurse
EvaluatorFn = Callable[..., LispValue]

# Host procedure wrapped by a Primitive: receives a Lisp list of evaluated arguments
PrimitiveFn = Callable[[LispValue], LispValue]

__version__ = "0.1.0"
