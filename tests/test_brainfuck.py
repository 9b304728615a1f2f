"""Engine behaviour shared by both tape models."""

import io

import pytest

from brainfuck import (
    DynamicInterpreter,
    EndOfInput,
    Interpreter,
    LoopStack,
    PerformanceInterpreter,
    TapeIndexError,
    UnmatchedBracketError,
)

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


@pytest.fixture(params=["dynamic", "performance"])
def make(request):
    def factory(code=""):
        if request.param == "dynamic":
            return DynamicInterpreter(code)
        return PerformanceInterpreter(code, 64)
    return factory


@pytest.mark.parametrize("n", [0, 1, 7, 255, 256, 300, 513])
def test_increments_wrap_modulo_256(make, n):
    itp = make("+" * n)
    itp.interpret()
    assert itp.get_value() == n % 256


@pytest.mark.parametrize("n", [1, 10, 256, 400])
def test_increment_then_decrement_restores_cell(make, n):
    itp = make("+" * n + "-" * n)
    itp.interpret()
    assert itp.get_value() == 0


def test_decrement_from_zero_wraps_to_255(make):
    itp = make("-")
    itp.interpret()
    assert itp.get_value() == 255


def test_multiplication_loop(make):
    itp = make("++++++++[->++++++<]>.")
    assert itp.interpret() == chr(48)
    assert itp.get_tape()[:2] == [0, 48]


def test_echo(make):
    itp = make(",." * 12)
    assert itp.interpret("Hello World!") == "Hello World!"


def test_nested_loops_hello_world(make):
    assert make(HELLO_WORLD).interpret() == "Hello World!\n"


def test_comments_are_ignored(make):
    itp = make("add three: +++ then print it .")
    assert itp.interpret() == chr(3)


def test_loop_body_runs_once_on_zero_cell(make):
    # [ never skips forward, so the body executes before the first test
    itp = make("[+++++.-----]")
    assert itp.interpret() == chr(5)
    assert len(itp.loops) == 0


def test_empty_loop_on_zero_cell_pops_stack(make):
    itp = make("[]")
    itp.interpret()
    assert len(itp.loops) == 0
    assert itp.finished


def test_unmatched_close_bracket(make):
    with pytest.raises(UnmatchedBracketError):
        make("+]").interpret()
    with pytest.raises(UnmatchedBracketError):
        make("]").interpret()


def test_end_of_input_keeps_cell_and_output(make):
    itp = make("+++.,")
    with pytest.raises(EndOfInput):
        itp.interpret("")
    assert itp.output == chr(3)
    assert itp.get_value() == 3
    # the failing , has not been consumed
    assert itp.current_instruction == ","


def test_resume_after_adding_input(make):
    itp = make(",.")
    with pytest.raises(EndOfInput):
        itp.interpret()
    itp.add_input("x")
    while itp.step():
        pass
    assert itp.output == "x"


def test_input_is_consumed_across_runs(make):
    itp = make(",.")
    itp.set_input("ab")
    assert itp.interpret() == "a"
    assert itp.input == "b"
    assert itp.interpret() == "b"


def test_input_above_byte_range_is_wrapped(make):
    itp = make(",")
    itp.interpret(chr(256 + 65))
    assert itp.get_value() == 65


def test_repeated_runs_are_idempotent(make):
    itp = make(",[->+>++<<]>>.")
    first = itp.interpret("\x05")
    first_tape = itp.get_tape()
    second = itp.interpret("\x05")
    assert first == second == chr(10)
    assert itp.get_tape() == first_tape


def test_reset_restores_initial_state(make):
    itp = make("+>+[.")
    itp.interpret()
    itp.reset()
    assert itp.position == 0
    assert itp.index == 0
    assert itp.output == ""
    assert len(itp.loops) == 0
    assert set(itp.get_tape()) == {0}


def test_step_executes_one_instruction(make):
    itp = make("+>+")
    itp.reset()
    assert itp.step()
    assert itp.position == 1
    assert itp.get_value() == 1
    assert itp.step()
    assert itp.index == 1
    assert itp.step()
    assert itp.finished
    assert not itp.step()
    assert itp.current_instruction is None


def test_load_replaces_code_without_resetting(make):
    itp = make("+++")
    itp.interpret()
    itp.load("-")
    assert itp.get_value() == 3
    assert itp.code == "-"
    itp.interpret()
    assert itp.get_value() == 255


def test_load_from_text_stream(make):
    itp = make()
    itp.load(io.StringIO("++\n.\n"))
    assert itp.code == "++\n.\n"
    assert itp.interpret() == chr(2)


def test_load_from_binary_stream_is_verbatim(make):
    itp = make()
    itp.load(io.BytesIO(b"+\xff."))
    assert itp.code == "+\xff."


def test_output_accessors(make):
    itp = make("+.")
    itp.interpret()
    itp.output = itp.output + "!"
    assert itp.output == "\x01!"
    itp.clear_output()
    assert itp.output == ""


def test_position_and_index_setters(make):
    itp = make(">+++++")
    itp.reset()
    itp.step()
    itp.position = 4
    while itp.step():
        pass
    assert itp.get_tape()[:2] == [0, 2]

    itp.index = 0
    itp.position = 5
    itp.step()
    assert itp.get_tape()[:2] == [1, 2]


def test_cell_accessors(make):
    itp = make(">>")
    itp.interpret()
    itp.set_value(300, 1)
    assert itp.get_value(1) == 44
    itp.set_value(-1)
    assert itp.get_value() == 255
    assert itp.get_value(2) == 255


@pytest.mark.parametrize("i", [-1, 64, 1000])
def test_cell_accessors_out_of_range(make, i):
    itp = make(">" * 5)
    itp.interpret()
    with pytest.raises(TapeIndexError):
        itp.get_value(i)
    with pytest.raises(IndexError):
        itp.set_value(1, i)


def test_loop_stack():
    stack = LoopStack()
    stack.push(3)
    stack.push(7)
    assert stack.peek() == 7
    assert stack.pop() == 7
    assert len(stack) == 1
    stack.clear()
    with pytest.raises(UnmatchedBracketError):
        stack.peek()
    with pytest.raises(UnmatchedBracketError):
        stack.pop()


def test_construct_from_text_stream():
    itp = DynamicInterpreter(io.StringIO("+++."))
    assert itp.code == "+++."
    assert itp.interpret() == chr(3)


def test_construct_fixed_from_binary_stream():
    itp = PerformanceInterpreter(io.BytesIO(b"\xff+>++."), 4)
    assert itp.code == "\xff+>++."
    assert itp.interpret() == chr(2)
    assert itp.get_tape() == [1, 2, 0, 0]


def test_base_interpreter_cannot_run():
    with pytest.raises(NotImplementedError):
        Interpreter(".").interpret()


@pytest.mark.parametrize("i", [-1, 3, 50])
def test_dynamic_index_must_stay_on_tape(i):
    itp = DynamicInterpreter(">>")
    itp.interpret()
    with pytest.raises(TapeIndexError):
        itp.index = i
    assert itp.index == 2


def test_dynamic_tape_still_grows_after_moving_pointer():
    itp = DynamicInterpreter(">>")
    itp.interpret()
    itp.index = 2
    itp.code = ">+"
    itp.position = 0
    while itp.step():
        pass
    assert itp.get_tape() == [0, 0, 0, 1]


def test_fixed_index_is_unchecked():
    itp = PerformanceInterpreter("", 4)
    itp.index = 10
    assert itp.index == 10
