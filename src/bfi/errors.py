from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


def location(source: str, index: int) -> Tuple[int, int]:
    """1-based (line, column) of `source[index]`."""
    line = source.count("\n", 0, index) + 1
    column = index - (source.rfind("\n", 0, index) + 1) + 1
    return line, column


def _build_context(source: str, line_no_1: int, column_1: int, *, context: int = 1) -> str:
    lines = source.split('\n')
    idx = max(1, min(line_no_1, len(lines)))
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"       | {' ' * (column_1 - 1)}^")
    return "\n".join(out)


def _hint_for(message: str, *, kind: str) -> Optional[str]:
    msg = message.lower()
    if kind == 'bracket':
        if "unmatched ']'" in msg:
            return 'Remove the stray "]" or add a "[" before it.'
        if "unmatched '['" in msg:
            return 'Every "[" needs a "]" later in the program.'
        return None
    if kind == 'bounds':
        if 'left of cell 0' in msg:
            return 'The pointer starts in the middle of the tape. Use a larger --tape-size or --bounds wrap.'
        if 'past the last cell' in msg:
            return 'Use a larger --tape-size or --bounds wrap.'
        return None
    if kind == 'input':
        return 'Supply more input text or use --eof zero / --eof unchanged.'
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BracketError(BFError):
    position: int
    line: int
    column: int
    context: str


@dataclass
class TapeBoundsError(BFError):
    position: int
    pointer: int
    tape_size: int


@dataclass
class InputExhaustedError(BFError):
    position: int
    consumed: int


@dataclass
class StepLimitError(BFError):
    limit: int


@dataclass
class ArgumentCountError(BFError):
    given: int


def _with_hint(text: str, hint: Optional[str]) -> str:
    return f"{text}\nHint: {hint}" if hint else text


def make_bracket_error(*, message: str, source: str, position: int) -> BracketError:
    line, column = location(source, position)
    ctx = _build_context(source, line, column)
    hint = _hint_for(message, kind='bracket')
    return BracketError(
        message=_with_hint(f"BracketError: {message} (line {line}, column {column})\n{ctx}", hint),
        position=position,
        line=line,
        column=column,
        context=ctx,
    )


def make_bounds_error(*, source: str, position: int, pointer: int, tape_size: int) -> TapeBoundsError:
    if pointer < 0:
        what = 'moved left of cell 0'
    else:
        what = f'moved past the last cell ({tape_size - 1})'
    line, column = location(source, position)
    ctx = _build_context(source, line, column)
    message = f"data pointer {what}"
    hint = _hint_for(message, kind='bounds')
    return TapeBoundsError(
        message=_with_hint(f"TapeBoundsError: {message} (line {line}, column {column})\n{ctx}", hint),
        position=position,
        pointer=pointer,
        tape_size=tape_size,
    )


def make_input_error(*, source: str, position: int, consumed: int) -> InputExhaustedError:
    line, column = location(source, position)
    ctx = _build_context(source, line, column)
    hint = _hint_for('', kind='input')
    return InputExhaustedError(
        message=_with_hint(
            f"InputExhaustedError: ',' after all {consumed} input byte(s) were read "
            f"(line {line}, column {column})\n{ctx}",
            hint,
        ),
        position=position,
        consumed=consumed,
    )
