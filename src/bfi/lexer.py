from typing import Dict, List

from .errors import location, make_bracket_error

COMMANDS = '><+-.,[]'

__all__ = ['COMMANDS', 'is_code_char', 'location', 'build_jump_table']


def is_code_char(ch: str) -> bool:
    return ch in COMMANDS


def build_jump_table(program: str) -> Dict[int, int]:
    """Map every bracket index in `program` to the index of its partner.

    Indexes refer to the unfiltered program text, so comment characters keep
    their positions and error locations point at the real source.
    """
    jump_table: Dict[int, int] = {}
    stack: List[int] = []

    for pos, cmd in enumerate(program):
        if cmd == '[':
            stack.append(pos)
        elif cmd == ']':
            if not stack:
                raise make_bracket_error(message="unmatched ']'", source=program, position=pos)
            start = stack.pop()
            jump_table[start] = pos
            jump_table[pos] = start

    if stack:
        raise make_bracket_error(message="unmatched '['", source=program, position=stack[-1])

    return jump_table
