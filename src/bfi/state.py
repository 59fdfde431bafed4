from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

DEFAULT_TAPE_SIZE = 1001


def new_tape(size: int = DEFAULT_TAPE_SIZE) -> np.ndarray:
    return np.zeros(size, dtype=np.uint8)


def dump_tape(tape: np.ndarray, start: int = 0, stop: Optional[int] = None, *,
              width: int = 8, mark: Optional[int] = None) -> str:
    """Render tape[start:stop] as rows of `width` cells, each row prefixed by
    the address of its first cell. The cell at `mark` is shown in brackets.
    """
    if stop is None:
        stop = len(tape)
    start = max(0, start)
    stop = min(len(tape), stop)

    rows: List[str] = []
    for row_start in range(start, stop, width):
        cells = tape[row_start:min(row_start + width, stop)]
        parts = []
        for offset, value in enumerate(cells.tolist()):
            addr = row_start + offset
            text = f"{value:3d}"
            parts.append(f"[{text}]" if addr == mark else f" {text} ")
        rows.append(f"{row_start:5d}:" + "".join(parts))
    return "\n".join(rows)


@dataclass(eq=False)
class MachineState:
    tape: np.ndarray = field(default_factory=new_tape)
    pointer: int = 0
    ip: int = 0
    input_pos: int = 0
    steps: int = 0

    @classmethod
    def fresh(cls, tape_size: int = DEFAULT_TAPE_SIZE) -> "MachineState":
        return cls(tape=new_tape(tape_size), pointer=tape_size // 2)

    @property
    def cell(self) -> int:
        return int(self.tape[self.pointer])

    @cell.setter
    def cell(self, value: int) -> None:
        self.tape[self.pointer] = value & 0xFF


BOUNDS_POLICIES = ('error', 'wrap')
EOF_POLICIES = ('zero', 'unchanged', 'error')


@dataclass(frozen=True)
class RunOptions:
    tape_size: int = DEFAULT_TAPE_SIZE
    bounds: str = 'error'
    eof: str = 'zero'
    max_steps: Optional[int] = None
    trace: bool = False

    def __post_init__(self) -> None:
        if self.tape_size < 1:
            raise ValueError(f"tape_size must be at least 1, got {self.tape_size}")
        if self.bounds not in BOUNDS_POLICIES:
            raise ValueError(f"bounds must be one of {', '.join(BOUNDS_POLICIES)}, got {self.bounds!r}")
        if self.eof not in EOF_POLICIES:
            raise ValueError(f"eof must be one of {', '.join(EOF_POLICIES)}, got {self.eof!r}")
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {self.max_steps}")


@dataclass(frozen=True, eq=False)
class RunResult:
    output: str
    tape: np.ndarray
    pointer: int
    steps: int

    @property
    def output_bytes(self) -> bytes:
        """The bytes written by `.`; `output` holds them as latin-1 text."""
        return self.output.encode("latin-1")

    def dump(self, radius: int = 8, *, width: int = 8) -> str:
        return dump_tape(self.tape, self.pointer - radius, self.pointer + radius + 1,
                         width=width, mark=self.pointer)
