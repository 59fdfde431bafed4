from __future__ import annotations

import sys
from typing import Dict, Optional, TextIO

from .errors import StepLimitError, make_bounds_error, make_input_error
from .lexer import build_jump_table, is_code_char
from .state import MachineState, RunOptions, RunResult


class Interpreter:
    """Runs one Brainfuck program per call to `run`.

    A fresh `MachineState` is built for every run, so nothing (tape, pointer,
    input cursor) carries over between runs of the same interpreter.
    """

    def __init__(self, options: Optional[RunOptions] = None):
        self.options = options if options is not None else RunOptions()

    def run(self, program: str, input_text: str = "", *,
            out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> RunResult:
        """Execute `program` reading `,` from the UTF-8 bytes of `input_text`.

        Each `.` writes one raw byte to `out` as it is produced (to `out.buffer`
        when the stream has one, otherwise as the latin-1 character of that
        byte), then a trailing newline once the program finishes. With
        `out=None` nothing is written and the output is only returned in the
        result.
        """
        jump_table = build_jump_table(program)
        state = MachineState.fresh(self.options.tape_size)
        data = input_text.encode("utf-8", "surrogateescape")
        output = bytearray()
        trace = (err if err is not None else sys.stderr) if self.options.trace else None

        length = len(program)
        while state.ip < length:
            cmd = program[state.ip]
            if is_code_char(cmd):
                self._count_step(state)
                if trace is not None:
                    trace.write(f"step {state.steps}: ip={state.ip} cmd='{cmd}' "
                                f"ptr={state.pointer} cell={state.cell}\n")
                self._execute(cmd, program, data, state, jump_table, output, out)
            state.ip += 1

        if out is not None:
            _emit(out, 0x0A)

        return RunResult(
            output=output.decode("latin-1"),
            tape=state.tape,
            pointer=state.pointer,
            steps=state.steps,
        )

    def _count_step(self, state: MachineState) -> None:
        limit = self.options.max_steps
        if limit is not None and state.steps >= limit:
            raise StepLimitError(
                message=f"StepLimitError: program did not finish within {limit} steps",
                limit=limit,
            )
        state.steps += 1

    def _execute(self, cmd: str, program: str, data: bytes, state: MachineState,
                 jump_table: Dict[int, int], output: bytearray, out: Optional[TextIO]) -> None:
        if cmd == '>':
            self._move(program, state, 1)
        elif cmd == '<':
            self._move(program, state, -1)
        elif cmd == '+':
            state.cell = state.cell + 1
        elif cmd == '-':
            state.cell = state.cell - 1
        elif cmd == '.':
            output.append(state.cell)
            if out is not None:
                _emit(out, state.cell)
        elif cmd == ',':
            self._read(program, data, state)
        elif cmd == '[':
            if state.cell == 0:
                # ip lands on the matching ']' and the caller steps past it
                state.ip = jump_table[state.ip]
        elif cmd == ']':
            if state.cell != 0:
                # resume at the matching '[' itself, which re-tests the cell
                state.ip = jump_table[state.ip] - 1

    def _move(self, program: str, state: MachineState, delta: int) -> None:
        size = len(state.tape)
        target = state.pointer + delta
        if 0 <= target < size:
            state.pointer = target
        elif self.options.bounds == 'wrap':
            state.pointer = target % size
        else:
            raise make_bounds_error(source=program, position=state.ip, pointer=target, tape_size=size)

    def _read(self, program: str, data: bytes, state: MachineState) -> None:
        if state.input_pos < len(data):
            state.cell = data[state.input_pos]
            state.input_pos += 1
            return

        eof = self.options.eof
        if eof == 'zero':
            state.cell = 0
        elif eof == 'error':
            raise make_input_error(source=program, position=state.ip, consumed=state.input_pos)


def _emit(out: TextIO, value: int) -> None:
    raw = getattr(out, 'buffer', None)
    if raw is None:
        out.write(chr(value))
        out.flush()
        return
    # keep ordering with anything already written through the text layer
    out.flush()
    raw.write(bytes((value,)))
    raw.flush()
