"""
  Lisp Reader

- Pull-based: one `read()` call consumes exactly the characters of one value
- Emits tinylisp values:

    - numbers -> Number (optional sign, decimal or 0x/0o/0b prefixed)
    - strings -> String (raw text between double quotes, no escapes)
    - symbols -> Symbol, interned in the runtime context's SymbolTable
    - lists -> chains of Cons cells, () -> Nil
    - 'x -> (quote x)

  `[`, `]`, `{` and `}` are reserved and, like a stray `)`, are syntax errors.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, TYPE_CHECKING

from tinylisp import LispValue
from tinylisp.errors import LispSyntaxError, EndOfInput
from tinylisp.reader.char_source import CharSource, as_source
from tinylisp.types.nil import Nil
from tinylisp.types.value import INT_MAX, INT_MIN, Cons, Number, String, nreverse

if TYPE_CHECKING:
    from tinylisp.runtime_context import RuntimeContext

logger = logging.getLogger(__name__)

DELIMITERS = "()[]{}'\""
BASE_PREFIXES = "xXoObB"


def is_space(ch: Optional[str]) -> bool:
    return ch is not None and ch.isspace()


def is_digit(ch: Optional[str]) -> bool:
    return ch is not None and "0" <= ch <= "9"


def is_symbol_char(ch: Optional[str]) -> bool:
    return ch is not None and ch not in DELIMITERS and not ch.isspace()


class Reader:
    """Reads values one at a time from a character source."""

    def __init__(
        self,
        source: CharSource | str,
        context: Optional[RuntimeContext] = None,
        recover: bool = False,
    ):
        if context is None:
            from tinylisp.runtime_context import default_context
            context = default_context()
        self.source: CharSource = as_source(source)
        self.context = context
        self.recover = recover
        self.quote = context.symbols.intern("quote")

    # ------------------------
    # Character helpers
    # ------------------------
    def skip_whitespace(self) -> None:
        while is_space(self.source.peek()):
            self.source.consume()

    def discard_line(self) -> None:
        """Drop input up to and including the next newline."""
        while True:
            ch = self.source.consume()
            if ch is None or ch == "\n":
                return

    def _take_while(self, buf: list[str], pred) -> None:
        while pred(self.source.peek()):
            buf.append(self.source.consume())

    # ------------------------
    # Entry points
    # ------------------------
    def read(self) -> LispValue:
        """Read the next value, raising EndOfInput when none is left."""
        while True:
            try:
                return self._read_bounded()
            except LispSyntaxError as e:
                if not self.recover:
                    raise
                logger.warning("syntax error: %s", e)

    def _read_bounded(self) -> LispValue:
        # lists are read recursively; running out of host stack is a read error
        self.skip_whitespace()
        line, column = self.source.line, self.source.column
        try:
            return self._read_value()
        except RecursionError:
            self.discard_line()
            raise LispSyntaxError("nesting too deep", line, column) from None

    def read_all(self) -> Iterator[LispValue]:
        while True:
            try:
                yield self.read()
            except EndOfInput:
                return

    # ------------------------
    # Dispatch
    # ------------------------
    def _read_value(self) -> LispValue:
        self.skip_whitespace()
        ch = self.source.peek()
        if ch is None:
            raise EndOfInput()
        if is_digit(ch) or ch in "+-":
            return self._read_number()
        if ch == '"':
            return self._read_string()
        if ch == "'":
            return self._read_quote()
        if ch == "(":
            return self._read_list()
        if ch not in DELIMITERS:
            return self._read_symbol([])
        # stray delimiter: report, then skip the rest of the line
        line, column = self.source.line, self.source.column
        self.discard_line()
        raise LispSyntaxError(f"unexpected {ch!r}", line, column)

    def _read_number(self) -> LispValue:
        line, column = self.source.line, self.source.column
        buf: list[str] = []
        if self.source.peek() in ("+", "-"):
            buf.append(self.source.consume())
            if not is_digit(self.source.peek()):
                # a lone sign (or sign-led name) is a symbol
                return self._read_symbol(buf)
        first = self.source.consume()
        buf.append(first)
        if first == "0" and self.source.peek() is not None and self.source.peek() in BASE_PREFIXES:
            buf.append(self.source.consume())
            self._take_while(buf, lambda c: c is not None and c.isalnum())
        else:
            self._take_while(buf, is_digit)
        text = "".join(buf)
        value = parse_integer(text, line, column)
        if not INT_MIN <= value <= INT_MAX:
            # the whole token is consumed, so reading resumes right after it
            raise LispSyntaxError(f"integer literal {text} does not fit in 64 bits", line, column)
        return Number(value)

    def _read_string(self) -> LispValue:
        line, column = self.source.line, self.source.column
        self.source.consume()  # opening quote
        buf: list[str] = []
        while True:
            ch = self.source.consume()
            if ch is None:
                raise LispSyntaxError("unterminated string", line, column)
            if ch == '"':
                return String("".join(buf))
            buf.append(ch)

    def _read_quote(self) -> LispValue:
        line, column = self.source.line, self.source.column
        self.source.consume()
        try:
            quoted = self._read_value()
        except EndOfInput:
            raise LispSyntaxError("nothing to quote before end of input", line, column) from None
        return Cons(self.quote, Cons(quoted, Nil))

    def _read_list(self) -> LispValue:
        line, column = self.source.line, self.source.column
        self.source.consume()  # (
        items: LispValue = Nil
        while True:
            self.skip_whitespace()
            ch = self.source.peek()
            if ch is None:
                raise LispSyntaxError("unterminated list", line, column)
            if ch == ")":
                self.source.consume()
                break
            # accumulated newest first, put in order below
            items = Cons(self._read_value(), items)
        return nreverse(items)

    def _read_symbol(self, buf: list[str]) -> LispValue:
        self._take_while(buf, is_symbol_char)
        if not buf:
            raise EndOfInput()
        return self.context.symbols.intern("".join(buf))


def parse_integer(text: str, line: int | None = None, column: int | None = None) -> int:
    """Parse an optionally signed, optionally base-prefixed integer literal."""
    sign, digits = "", text
    if digits[:1] in ("+", "-"):
        sign, digits = digits[0], digits[1:]
    base = 10
    if len(digits) > 1 and digits[0] == "0" and digits[1] in BASE_PREFIXES:
        base = {"x": 16, "o": 8, "b": 2}[digits[1].lower()]
        digits = digits[2:]
    try:
        if not digits:
            raise ValueError(text)
        value = int(digits, base)
    except ValueError:
        raise LispSyntaxError(f"malformed number {text!r}", line, column) from None
    return -value if sign == "-" else value
