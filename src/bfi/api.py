from __future__ import annotations

import sys
from typing import Optional, TextIO

from .interpreter import Interpreter
from .state import RunOptions, RunResult


def run(program: str, input_text: str = "", *, options: Optional[RunOptions] = None,
        out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> RunResult:
    """Run `program`, streaming its output (plus a trailing newline) to `out`,
    which defaults to stdout."""
    interpreter = Interpreter(options)
    return interpreter.run(program, input_text, out=out if out is not None else sys.stdout, err=err)


def run_string(program: str, input_text: str = "", *, options: Optional[RunOptions] = None) -> RunResult:
    interpreter = Interpreter(options)
    return interpreter.run(program, input_text)
