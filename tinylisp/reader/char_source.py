"""Character sources for the reader.

A source offers one character of lookahead (`peek`) and consumption
(`consume`); both return None once the input is exhausted. Sources track the
line and column of the next unconsumed character for error reporting.
"""

from __future__ import annotations

import os
from typing import Optional, Protocol, TextIO


class CharSource(Protocol):
    line: int
    column: int

    def peek(self) -> Optional[str]: ...
    def consume(self) -> Optional[str]: ...


class _PositionTracking:
    __slots__ = ()

    def _advance_position(self, ch: str) -> None:
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1


class StringSource(_PositionTracking):
    """Characters from an in-memory string."""

    __slots__ = ("text", "pos", "line", "column")

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1

    def peek(self) -> Optional[str]:
        if self.pos < len(self.text):
            return self.text[self.pos]
        return None

    def consume(self) -> Optional[str]:
        ch = self.peek()
        if ch is not None:
            self.pos += 1
            self._advance_position(ch)
        return ch


class FileSource(_PositionTracking):
    """Characters from a text stream or a file path.

    Reads lazily one character at a time so an interactive stream (stdin)
    is only consumed as far as the reader needs.
    """

    __slots__ = ("stream", "name", "_pending", "_owned", "line", "column")

    def __init__(self, stream: TextIO | str | os.PathLike):
        if isinstance(stream, (str, os.PathLike)):
            self.name = os.fspath(stream)
            self.stream: TextIO = open(stream, "r", encoding="utf-8")
            self._owned = True
        else:
            self.name = getattr(stream, "name", "<stream>")
            self.stream = stream
            self._owned = False
        self._pending: Optional[str] = None
        self.line = 1
        self.column = 1

    def peek(self) -> Optional[str]:
        if self._pending is None:
            ch = self.stream.read(1)
            if not ch:
                return None
            self._pending = ch
        return self._pending

    def consume(self) -> Optional[str]:
        ch = self.peek()
        if ch is not None:
            self._pending = None
            self._advance_position(ch)
        return ch

    def close(self) -> None:
        if self._owned:
            self.stream.close()

    def __enter__(self) -> FileSource:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class PortStack:
    """A stack of sources read top first.

    When the top source runs dry it is closed and popped, and reading carries
    on with the source beneath it; the stack is exhausted when empty.
    """

    __slots__ = ("ports",)

    def __init__(self, *sources: CharSource):
        # last pushed is read first
        self.ports: list[CharSource] = list(reversed(sources))

    def push(self, source: CharSource) -> None:
        self.ports.append(source)

    def _top(self) -> Optional[CharSource]:
        while self.ports:
            top = self.ports[-1]
            if top.peek() is not None:
                return top
            self.ports.pop()
            close = getattr(top, "close", None)
            if close is not None:
                close()
        return None

    def peek(self) -> Optional[str]:
        top = self._top()
        return top.peek() if top is not None else None

    def consume(self) -> Optional[str]:
        top = self._top()
        return top.consume() if top is not None else None

    @property
    def line(self) -> int:
        return self.ports[-1].line if self.ports else 0

    @property
    def column(self) -> int:
        return self.ports[-1].column if self.ports else 0


def as_source(text_or_stream: str | TextIO | CharSource) -> CharSource:
    """Wrap a string or text stream; pass an existing source through."""
    if isinstance(text_or_stream, str):
        return StringSource(text_or_stream)
    if hasattr(text_or_stream, "read"):
        return FileSource(text_or_stream)
    return text_or_stream
