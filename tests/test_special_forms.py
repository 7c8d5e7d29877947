import pytest

from tinylisp.errors import LispArityError, LispInvalidSymbol, LispTypeError, LispUnboundSymbol
from tinylisp.evaluation.special_forms import SPECIAL_FORMS
from tinylisp.types.nil import Nil
from tinylisp.types.value import Cons, Number, String, iter_list


def test_registry_names():
    assert set(SPECIAL_FORMS) == {"quote", "fn", "def", "set!", "if"}


def test_context_interns_special_forms(context):
    for name in SPECIAL_FORMS:
        assert context.is_special_form(context.intern(name))
    assert not context.is_special_form(context.intern("car"))


# -----------------------------------------------------
# quote
# -----------------------------------------------------
def test_quote_returns_operand_unevaluated(interp):
    value = interp.eval("(quote (1 undefined))")
    assert isinstance(value, Cons)
    assert value.car == Number(1)
    assert value.cdr.car is interp.context.intern("undefined")


def test_quote_sugar(interp):
    assert interp.eval("'sym") is interp.context.intern("sym")
    assert interp.eval("''x").car is interp.context.intern("quote")
    assert interp.eval("'()") is Nil


@pytest.mark.parametrize("source", ["(quote)", "(quote a b)"])
def test_quote_arity(interp, source):
    with pytest.raises(LispArityError):
        interp.eval(source)


# -----------------------------------------------------
# if
# -----------------------------------------------------
@pytest.mark.parametrize(
    "source, expected",
    [
        ("(if false 1 2)", 2),
        ("(if true 1 2)", 1),
        ("(if 0 1 2)", 1),
        ('(if "" 1 2)', 1),
        ("(if '() 1 2)", 1),
        ("(if (fn () 0) 1 2)", 1),
        ("(if (< 2 1) 1 2)", 2),
    ],
)
def test_only_false_is_false(interp, source, expected):
    assert interp.eval(source) == Number(expected)


def test_if_evaluates_only_the_chosen_branch(interp):
    assert interp.eval("(if true 1 unbound-a)") == Number(1)
    assert interp.eval("(if false unbound-b 2)") == Number(2)


def test_if_without_else(interp):
    assert interp.eval("(if false 1)") is Nil
    assert interp.eval("(if true 1)") == Number(1)


@pytest.mark.parametrize("source", ["(if)", "(if true)", "(if true 1 2 3)"])
def test_if_arity(interp, source):
    with pytest.raises(LispArityError):
        interp.eval(source)


# -----------------------------------------------------
# def / set!
# -----------------------------------------------------
def test_def_then_lookup(interp):
    assert interp.eval("(def x 5)") == Number(5)
    assert interp.eval("x") == Number(5)


def test_set_then_lookup(interp):
    interp.eval("(def x 5)")
    assert interp.eval("(set! x 6)") == Number(6)
    assert interp.eval("x") == Number(6)


def test_def_evaluates_its_value(interp):
    interp.eval('(def s (if true "yes" "no"))')
    assert interp.eval("s") == String("yes")


def test_def_inside_function_is_local(interp):
    interp.eval("((fn () (def local 1) local))")
    with pytest.raises(LispUnboundSymbol):
        interp.eval("local")


def test_set_of_unbound_defines_a_global(interp):
    interp.eval("(def f (fn () (set! made-here 10)))")
    interp.eval("(f)")
    assert interp.eval("made-here") == Number(10)


def test_set_reaches_enclosing_binding(interp):
    interp.eval("(def x 1)")
    interp.eval("((fn () (set! x 2)))")
    assert interp.eval("x") == Number(2)


def test_set_on_parameter_does_not_leak(interp):
    interp.eval("(def x 1)")
    interp.eval("((fn (x) (set! x 99)) 0)")
    assert interp.eval("x") == Number(1)


@pytest.mark.parametrize("source", ["(def 1 2)", '(def "x" 2)', "(set! 1 2)", "(set! (x) 2)"])
def test_def_and_set_require_symbols(interp, source):
    with pytest.raises(LispInvalidSymbol):
        interp.eval(source)


@pytest.mark.parametrize("source", ["(def)", "(def x)", "(def x 1 2)", "(set! x)"])
def test_def_and_set_arity(interp, source):
    with pytest.raises(LispArityError):
        interp.eval(source)


# -----------------------------------------------------
# fn
# -----------------------------------------------------
def test_fn_keeps_body_list(interp):
    fn = interp.eval("(fn (a) 1 2)")
    assert [n.value for n in iter_list(fn.body)] == [1, 2]


def test_fn_requires_parameter_list(interp):
    with pytest.raises(LispArityError):
        interp.eval("(fn)")


@pytest.mark.parametrize("source", ["(fn (1) 1)", '(fn ("a") 1)'])
def test_fn_parameters_must_be_symbols(interp, source):
    with pytest.raises(LispInvalidSymbol):
        interp.eval(source)


def test_fn_parameter_list_must_be_a_list(interp):
    with pytest.raises(LispTypeError):
        interp.eval("(fn x x)")
