import io

import pytest
from hypothesis import given, strategies as st

from tinylisp.errors import EndOfInput, LispSyntaxError
from tinylisp.reader.char_source import FileSource, PortStack, StringSource
from tinylisp.reader.parser import Reader, parse_integer
from tinylisp.runtime_context import default_context, reset_default_context
from tinylisp.types.nil import Nil
from tinylisp.types.symbol import Symbol
from tinylisp.types.value import Cons, Number, String, INT_MAX, INT_MIN, iter_list


@pytest.mark.parametrize(
    "source, expected",
    [
        ("123", 123),
        ("-5", -5),
        ("+5", 5),
        ("0", 0),
        ("007", 7),
        ("0x1F", 31),
        ("0XfF", 255),
        ("0o17", 15),
        ("0b101", 5),
        ("-0x10", -16),
        ("  \n\t42", 42),
    ],
)
def test_read_numbers(read, source, expected):
    value = read(source)
    assert isinstance(value, Number)
    assert value.value == expected


@pytest.mark.parametrize("source", ["0x", "0xZZ", "0b12"])
def test_malformed_prefixed_numbers(read, source):
    with pytest.raises(LispSyntaxError):
        read(source)


@pytest.mark.parametrize("source, name", [("-", "-"), ("+", "+"), ("-abc", "-abc"), ("foo", "foo"), ("set!", "set!")])
def test_signs_without_digits_read_as_symbols(read, context, source, name):
    assert read(source) is context.intern(name)


def test_read_symbol(read, context):
    value = read("foo")
    assert isinstance(value, Symbol)
    assert value is context.intern("foo")


def test_read_empty_string(read):
    value = read('""')
    assert isinstance(value, String)
    assert value.text == ""


def test_strings_are_copied_raw(read):
    assert read('"a\\nb (c)"') == String("a\\nb (c)")


def test_read_quoted_symbol(read, context):
    value = read("'foo")
    assert isinstance(value, Cons)
    assert value.car is context.intern("quote")
    assert value.cdr.car is context.intern("foo")
    assert value.cdr.cdr is Nil


def test_read_list_preserves_order(read):
    value = read("(1 2 3)")
    assert [n.value for n in iter_list(value)] == [1, 2, 3]


def test_read_nested_lists(read, context):
    value = read("(a (b c) ())")
    a, inner, empty = iter_list(value)
    assert a is context.intern("a")
    assert list(iter_list(inner)) == [context.intern("b"), context.intern("c")]
    assert empty is Nil


@pytest.mark.parametrize("source", ["()", "( )", "(\n)"])
def test_empty_list_reads_as_nil(read, source):
    assert read(source) is Nil


def test_reading_is_a_pure_pull(context):
    reader = Reader("1 (2) three", context)
    assert reader.read() == Number(1)
    assert reader.read().car == Number(2)
    assert reader.read() is context.intern("three")
    with pytest.raises(EndOfInput):
        reader.read()


def test_digits_stop_a_number_token(context):
    reader = Reader("123abc", context)
    assert reader.read() == Number(123)
    assert reader.read() is context.intern("abc")


def test_quote_is_a_delimiter_inside_symbols(context):
    values = list(Reader("a'b", context).read_all())
    assert values[0] is context.intern("a")
    assert values[1].car is context.intern("quote")


@pytest.mark.parametrize("source", ["", "   ", "\n\n"])
def test_end_of_input(context, source):
    with pytest.raises(EndOfInput):
        Reader(source, context).read()


@pytest.mark.parametrize("source", [")", "]", "[", "{", "}", "(1 ]", "(1 2", '"abc', "'"])
def test_syntax_errors(read, source):
    with pytest.raises(LispSyntaxError):
        read(source)


def test_syntax_error_discards_rest_of_line(context):
    reader = Reader("] 1 2\n42", context)
    with pytest.raises(LispSyntaxError):
        reader.read()
    assert reader.read() == Number(42)


def test_recovering_reader_skips_bad_lines(context, caplog):
    reader = Reader("{ junk\n7", context, recover=True)
    assert reader.read() == Number(7)
    assert "syntax error" in caplog.text


def test_syntax_error_reports_position(context):
    reader = Reader("1\n  ]", context)
    reader.read()
    with pytest.raises(LispSyntaxError) as info:
        reader.read()
    assert (info.value.line, info.value.column) == (2, 3)
    assert "line 2, column 3" in str(info.value)


def test_unterminated_list_reports_its_start(context):
    with pytest.raises(LispSyntaxError) as info:
        Reader("\n (1 2", context).read()
    assert (info.value.line, info.value.column) == (2, 2)


def test_out_of_range_literal_is_a_syntax_error(context):
    reader = Reader("99999999999999999999 7", context)
    with pytest.raises(LispSyntaxError, match="does not fit in 64 bits") as info:
        reader.read()
    assert (info.value.line, info.value.column) == (1, 1)
    assert reader.read() == Number(7)


@pytest.mark.parametrize("source", ["99999999999999999999 7", "-0x8000000000000001 7"])
def test_recovering_reader_skips_out_of_range_literals(context, source):
    assert Reader(source, context, recover=True).read() == Number(7)


def test_deep_nesting_is_a_syntax_error(context):
    reader = Reader("(" * 3000 + ")" * 3000 + "\n42", context)
    with pytest.raises(LispSyntaxError, match="nesting too deep") as info:
        reader.read()
    assert (info.value.line, info.value.column) == (1, 1)
    assert reader.read() == Number(42)


@given(st.integers(min_value=INT_MIN, max_value=INT_MAX))
def test_integer_literals_read_back(n):
    reset_default_context()
    assert Reader(str(n)).read() == Number(n)


def test_default_context_is_shared():
    reset_default_context()
    a = Reader("x").read()
    b = Reader("x").read()
    assert a is b
    assert a is default_context().intern("x")


def test_parse_integer():
    assert parse_integer("-0b11") == -3
    with pytest.raises(LispSyntaxError):
        parse_integer("+")


# ------------------------
# Character sources
# ------------------------
def test_string_source_tracks_position():
    src = StringSource("a\nb")
    assert src.peek() == "a"
    assert src.consume() == "a"
    assert (src.line, src.column) == (1, 2)
    src.consume()
    assert (src.line, src.column) == (2, 1)
    assert src.consume() == "b"
    assert src.peek() is None
    assert src.consume() is None


def test_file_source_reads_lazily_from_stream(context):
    stream = io.StringIO("(1 2) rest")
    reader = Reader(FileSource(stream), context)
    reader.read()
    # only the first form (and nothing beyond it) has been taken
    assert stream.read() == " rest"


def test_file_source_from_path(tmp_path, context):
    path = tmp_path / "forms.lisp"
    path.write_text("(a b)\n42\n", encoding="utf-8")
    with FileSource(path) as src:
        values = list(Reader(src, context).read_all())
    assert values[1] == Number(42)
    assert src.stream.closed


def test_port_stack_reads_sources_in_order(context):
    ports = PortStack(StringSource("1 2"), StringSource(" 3"))
    assert [v.value for v in Reader(ports, context).read_all()] == [1, 2, 3]
    assert ports.peek() is None


def test_port_stack_push_reads_new_source_first(context):
    ports = PortStack(StringSource("2"))
    ports.push(StringSource("1 "))
    assert [v.value for v in Reader(ports, context).read_all()] == [1, 2]
