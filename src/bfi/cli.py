from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Tuple

from .api import run
from .errors import ArgumentCountError, BFError
from .state import BOUNDS_POLICIES, DEFAULT_TAPE_SIZE, EOF_POLICIES, RunOptions

# flag -> 'value' (always takes one), 'optional' (may take a number) or 'flag'
_FLAGS = {
    '--tape-size': 'value',
    '--bounds': 'value',
    '--eof': 'value',
    '--max-steps': 'value',
    '--trace': 'flag',
    '--dump': 'optional',
    '-h': 'flag',
    '--help': 'flag',
}


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="bfi",
        description="Run a Brainfuck program against a fixed-size byte tape.",
    )
    parser.add_argument("program", help="program text")
    parser.add_argument("input", help="input text consumed by ',' left to right")
    parser.add_argument("--tape-size", type=int, default=DEFAULT_TAPE_SIZE,
                        help=f"number of cells (default {DEFAULT_TAPE_SIZE}); the pointer starts in the middle")
    parser.add_argument("--bounds", choices=BOUNDS_POLICIES, default='error',
                        help="what happens when the pointer leaves the tape (default error)")
    parser.add_argument("--eof", choices=EOF_POLICIES, default='zero',
                        help="what ',' does after the input is used up (default zero)")
    parser.add_argument("--max-steps", type=int, default=None, help="stop with an error after N instructions")
    parser.add_argument("--trace", action="store_true", help="log every instruction to stderr")
    parser.add_argument("--dump", type=int, nargs='?', const=8, default=None, metavar="RADIUS",
                        help="print the tape around the final pointer to stderr (default radius 8)")
    return parser


def _split_argv(argv: List[str]) -> Tuple[List[str], List[str]]:
    # Program text such as "-[-]" looks like an option to argparse, so only
    # known flags are treated as options and everything else is positional.
    flags: List[str] = []
    positionals: List[str] = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        name = arg.split('=', 1)[0]
        if arg == '--':
            positionals.extend(argv[i + 1:])
            break
        if name not in _FLAGS:
            positionals.append(arg)
        else:
            flags.append(arg)
            takes = _FLAGS[name]
            if '=' not in arg and i + 1 < len(argv):
                nxt = argv[i + 1]
                if takes == 'value' or (takes == 'optional' and nxt.isdigit()):
                    flags.append(nxt)
                    i += 1
        i += 1
    return flags, positionals


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    flags, positionals = _split_argv(list(argv))

    parser = build_parser()
    if '-h' in flags or '--help' in flags:
        parser.parse_args(['--help'])

    try:
        if len(positionals) != 2:
            raise ArgumentCountError(
                message=f"invalid arguments: expected <program-text> <input-text>, got {len(positionals)} argument(s)",
                given=len(positionals),
            )
        args = parser.parse_args(flags + ['--'] + positionals)
        try:
            options = RunOptions(
                tape_size=args.tape_size,
                bounds=args.bounds,
                eof=args.eof,
                max_steps=args.max_steps,
                trace=args.trace,
            )
        except ValueError as e:
            parser.error(str(e))
        result = run(args.program, args.input, options=options, out=sys.stdout, err=sys.stderr)
    except BFError as e:
        sys.stdout.flush()
        print(e, file=sys.stderr)
        return 1

    if args.dump is not None:
        print(result.dump(args.dump), file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
