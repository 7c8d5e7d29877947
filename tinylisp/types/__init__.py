from tinylisp.types.nil import Nil, NilType
from tinylisp.types.value import (
    Value, Cons, Number, Boolean, String, Primitive, Function, TRUE, FALSE,
)
from tinylisp.types.symbol import Symbol, SymbolTable
from tinylisp.types.environment import Environment
