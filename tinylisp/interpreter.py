from __future__ import annotations

import logging
import os
import sys
from typing import Iterable, Optional, TextIO

from tinylisp import SExpression, LispValue
from tinylisp.builtin.env_builtin import register, register_load
from tinylisp.config import resolve_load_path
from tinylisp.errors import EndOfInput, LispError
from tinylisp.evaluation.evaluator import evaluate
from tinylisp.printer import to_string
from tinylisp.reader.char_source import FileSource, PortStack, as_source
from tinylisp.reader.parser import Reader
from tinylisp.runtime_context import RuntimeContext
from tinylisp.types.nil import Nil

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating tinylisp code.
    Every form is evaluated in the context's global environment, so `def`
    and `set!` persist across calls.
    """

    def __init__(self, context: Optional[RuntimeContext] = None):
        if context is None:
            context = RuntimeContext(with_builtins=False)
            register(context, self)
        else:
            register_load(context, self)
        self.context = context

    @property
    def globals(self):
        return self.context.globals

    def read(self, code: str) -> list[SExpression]:
        """Read every form of `code` without evaluating."""
        return list(Reader(code, self.context).read_all())

    def eval_value(self, expr: SExpression) -> LispValue:
        return evaluate(expr, self.context.globals, self.context)

    def eval(self, code: str) -> LispValue:
        """Evaluate each form of `code` in order, returning the last result (nil if none)."""
        result: LispValue = Nil
        for expr in Reader(code, self.context).read_all():
            result = self.eval_value(expr)
        return result

    def load(self, path: str | os.PathLike) -> LispValue:
        """Evaluate a file form by form; relative names are searched on the load path."""
        resolved = resolve_load_path(path)
        logger.debug("loading %s", resolved)
        result: LispValue = Nil
        with FileSource(resolved) as source:
            for expr in Reader(source, self.context).read_all():
                result = self.eval_value(expr)
        return result

    def repl(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        preload: Iterable[str | os.PathLike] = (),
        prompt: str = "",
    ) -> None:
        """Read-eval-print until input runs out.

        Files in `preload` are read first, in order, ahead of `stdin`; their
        results are printed like typed input. Errors are reported and the loop
        continues with the next form.
        """
        stdin = stdin if stdin is not None else sys.stdin
        stdout = stdout if stdout is not None else sys.stdout
        # resolve every name before opening anything
        paths = [resolve_load_path(p) for p in preload]
        sources: list[FileSource] = []
        try:
            for path in paths:
                sources.append(FileSource(path))
        except OSError:
            for source in sources:
                source.close()
            raise
        ports = PortStack(*sources, as_source(stdin))
        reader = Reader(ports, self.context)
        while True:
            if prompt:
                stdout.write(prompt)
                stdout.flush()
            try:
                expr = reader.read()
                stdout.write(to_string(self.eval_value(expr)) + "\n")
            except EndOfInput:
                break
            except LispError as e:
                logger.debug("error in repl", exc_info=True)
                stdout.write(f"Error: {e}\n")
            stdout.flush()
