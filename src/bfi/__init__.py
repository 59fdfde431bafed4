
from .api import run, run_string
from .errors import (
    ArgumentCountError,
    BFError,
    BracketError,
    InputExhaustedError,
    StepLimitError,
    TapeBoundsError,
)
from .interpreter import Interpreter
from .lexer import build_jump_table
from .state import MachineState, RunOptions, RunResult, dump_tape

__all__ = [
    'Interpreter',
    'MachineState',
    'RunOptions',
    'RunResult',
    'run',
    'run_string',
    'build_jump_table',
    'dump_tape',
    'BFError',
    'ArgumentCountError',
    'BracketError',
    'TapeBoundsError',
    'InputExhaustedError',
    'StepLimitError',
]
