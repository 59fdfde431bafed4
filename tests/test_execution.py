#!/usr/bin/env python3
"""
Test actual execution of Brainfuck programs.
"""

import io
import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bfi import Interpreter, RunOptions, run, run_string


def test_increment_and_output(capsys):
    run("+++.")
    assert capsys.readouterr().out == "\x03\n"


def test_echo_single_character(capsys):
    run(",.", "A")
    assert capsys.readouterr().out == "A\n"


def test_simple_loop_multiplies():
    result = run_string("++[>+++<-]>.")
    assert result.output == "\x06"
    assert result.pointer == 501
    # the '[' is re-tested once after the first ']' jumps back
    assert result.steps == 20


def test_empty_program_prints_only_newline(capsys):
    result = run("", "ignored")
    assert capsys.readouterr().out == "\n"
    assert result.steps == 0


def test_output_goes_to_given_stream(capsys):
    out = io.StringIO()
    run("++++++++[>++++++++<-]>+.", out=out)
    assert out.getvalue() == "A\n"
    assert capsys.readouterr().out == ""


def test_binary_backed_stream_gets_raw_bytes():
    raw = io.BytesIO()
    out = io.TextIOWrapper(raw, encoding="utf-8")
    result = run("-.", out=out)
    assert raw.getvalue() == b"\xff\n"
    assert result.output == "\xff"
    assert result.output_bytes == b"\xff"


def test_run_string_does_not_write_stdout(capsys):
    result = run_string(",.,.", "hi")
    assert result.output == "hi"
    assert capsys.readouterr().out == ""


def test_cells_wrap_modulo_256():
    assert run_string("-.").output == "\xff"
    assert run_string("+" * 256 + ".").output == "\x00"
    assert run_string("+" * 257 + ".").output == "\x01"


def test_comments_are_ignored():
    plain = run_string("+.")
    commented = run_string("+hello.")
    assert commented.output == plain.output == "\x01"
    assert commented.steps == plain.steps == 2


def test_comment_text_with_newlines():
    program = """
    set cell to 2:  ++
    double it:      [>++<-]>
    print:          .
    """
    assert run_string(program).output == "\x04"


def test_fresh_state_per_run():
    interp = Interpreter()
    for _ in range(3):
        assert interp.run(",.", "xy").output == "x"

    # the same holds across module-level calls, one character per call
    text = "abc"
    echoed = "".join(run_string(",.", ch).output for ch in text)
    assert echoed == text


def test_nested_loops_tape_layout():
    result = run_string("++[>++[>+<-]<-]")
    start = 1001 // 2
    assert result.pointer == start
    assert result.tape[start:start + 3].tolist() == [0, 0, 4]
    assert result.dump(2) == "  498:   0    0 [  0]   0    4 "


def test_nested_loops_are_reproducible():
    first = run_string("++[>++[>+<-]<-]")
    second = run_string("++[>++[>+<-]<-]")
    assert (first.tape == second.tape).all()
    assert first.steps == second.steps


def test_loop_skipped_when_cell_is_zero():
    result = run_string("[+++.]+.")
    assert result.output == "\x01"


def test_skip_over_nested_loop():
    result = run_string("[[-]+.]+.")
    assert result.output == "\x01"
    # '[', then '+' and '.' after the outer ']'
    assert result.steps == 3


def test_hello_world():
    program = (
        "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
        ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
    )
    assert run_string(program, options=RunOptions(bounds='error')).output == "Hello World!\n"


def test_pointer_starts_mid_tape():
    result = run_string("+", options=RunOptions(tape_size=10))
    assert result.pointer == 5
    assert result.tape.tolist() == [0, 0, 0, 0, 0, 1, 0, 0, 0, 0]


def test_trace_lines(capsys):
    run_string("+.", options=RunOptions(trace=True))
    assert capsys.readouterr().err.splitlines() == [
        "step 1: ip=0 cmd='+' ptr=500 cell=0",
        "step 2: ip=1 cmd='.' ptr=500 cell=1",
    ]

    out = io.StringIO()
    err = io.StringIO()
    run("a+", out=out, err=err, options=RunOptions(trace=True))
    assert err.getvalue() == "step 1: ip=1 cmd='+' ptr=500 cell=0\n"


def main():
    print("=== Execution Tests ===\n")
    for name, value in list(globals().items()):
        if name.startswith("test_") and value.__code__.co_argcount == 0:
            value()
            print(f"✓ {name}")


if __name__ == "__main__":
    main()
