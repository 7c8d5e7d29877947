import pytest

from tinylisp.interpreter import Interpreter
from tinylisp.reader.parser import Reader
from tinylisp.runtime_context import RuntimeContext


@pytest.fixture
def context():
    """Fresh runtime context (symbol table + globals with primitives) per test."""
    return RuntimeContext()


@pytest.fixture
def interp():
    """Fresh interpreter, including `load`."""
    return Interpreter()


@pytest.fixture
def read(context):
    """Read the first value of a source string in the test's context."""
    def _read(source: str):
        return Reader(source, context).read()
    return _read
