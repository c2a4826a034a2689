"""Run FinnLang source text end to end.

Workflow:
1. The Lexer tokenizes the source code into meaningful tokens.
2. The Parser processes tokens into an AST following the language grammar.
3. The Interpreter walks the AST, evaluating expressions and executing statements.

:func:`run_source` never raises for a failing program: lexical, syntax and
runtime errors, as well as exhausting the host's call stack, are returned as a
failed :class:`RunResult` tagged with the kind of failure. :func:`run` is the
raising variant.


File: runner.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging
import sys
import threading
from dataclasses import dataclass
from typing import Optional, TextIO

from finnlang.exceptions import FinnException
from finnlang.interpreter import Interpreter
from finnlang.lexer import tokenize
from finnlang.parser import Parser

logger = logging.getLogger(__name__)

# Each FinnLang call nests a handful of Python frames, so programs run on a
# worker thread with a raised recursion limit and a stack large enough for it.
RECURSION_LIMIT = 30_000
STACK_SIZE = 512 * 1024 * 1024

_deep_lock = threading.Lock()


@dataclass
class RunResult:
    """Outcome of running a program."""

    success: bool
    output: str
    error: Optional[str] = None
    # One of "lexical", "syntax", "runtime" or "resource" on failure.
    kind: Optional[str] = None
    # True when the source stopped in the middle of a statement.
    incomplete: bool = False

    def to_json(self) -> dict:
        """Return the response body used by the HTTP front end."""
        if self.success:
            return {"success": True, "output": self.output}
        return {"success": False, "error": self.error}


def parse_source(source: str, file: str = "<string>") -> list:
    """
    Tokenize and parse ``source``.

    Raises:
        LexicalException: If the source cannot be tokenized.
        ParseException: If the tokens do not form a program.
    """
    tokens = tokenize(source, file)
    logger.debug("tokenized %s into %d tokens", file, len(tokens))
    ast = Parser(tokens, file).parse()
    logger.debug("parsed %s into %d top-level statements", file, len(ast))
    return ast


def _parse_and_run(interpreter: Interpreter, source: str, file: str) -> str:
    return interpreter.run(parse_source(source, file))


def run_deep(func, *args):
    """
    Call ``func(*args)`` on a worker thread with a deep call stack.

    The recursion limit is raised for the duration of the call and restored
    afterwards. Calls are serialized because the limit is process-wide.

    Returns:
        Whatever ``func`` returns.

    Raises:
        Any exception raised by ``func``, re-raised in the calling thread.
    """
    outcome = {}

    def target():
        try:
            outcome["value"] = func(*args)
        except BaseException as e:  # noqa: B036 - re-raised below
            outcome["error"] = e

    with _deep_lock:
        old_limit = sys.getrecursionlimit()
        old_stack = threading.stack_size(STACK_SIZE)
        try:
            sys.setrecursionlimit(max(old_limit, RECURSION_LIMIT))
            worker = threading.Thread(target=target, name="finnlang-run", daemon=True)
            worker.start()
            worker.join()
        finally:
            threading.stack_size(old_stack)
            sys.setrecursionlimit(old_limit)

    if "error" in outcome:
        raise outcome["error"]
    return outcome.get("value")


def run(source: str, file: str = "<string>") -> str:
    """
    Run ``source`` and return everything it printed.

    Raises:
        FinnException: The first lexical, syntax or runtime error.
    """
    return run_deep(_parse_and_run, Interpreter(file), source, file)


def run_source(
    source: str,
    file: str = "<string>",
    stream: TextIO | None = None,
    interpreter: Interpreter | None = None,
) -> RunResult:
    """
    Run ``source`` and report the outcome as a :class:`RunResult`.

    Parameters:
        source (str): Program text.
        file (str): Script name used in error messages.
        stream (TextIO | None): Optional stream receiving output as it is produced.
        interpreter (Interpreter | None): An existing interpreter whose variables and
            functions should be reused, as the REPL does. A new one is created otherwise.

    Returns:
        RunResult: Output produced by this run, plus the error on failure.
    """
    if interpreter is None:
        interpreter = Interpreter(file, stream)
    start = len(interpreter.output)

    def produced() -> str:
        return ''.join(interpreter.output[start:])

    try:
        run_deep(_parse_and_run, interpreter, source, file)
    except FinnException as e:
        logger.debug("%s failed with %s error: %s", file, e.kind, e)
        return RunResult(
            False, produced(), f"{type(e).__name__}: {e}", e.kind, incomplete=e.at_eof
        )
    except RecursionError:
        logger.debug("%s exhausted the call stack", file)
        return RunResult(
            False,
            produced(),
            f"RecursionError: maximum call depth exceeded in {file}",
            "resource",
        )
    return RunResult(True, produced())
