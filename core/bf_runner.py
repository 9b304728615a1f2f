from typing import Optional, TextIO
import sys

from brainfuck import (
    DynamicInterpreter,
    EndOfInput,
    Interpreter,
    PerformanceInterpreter,
    read_source,
)
from brainfuck_debugger import print_tape
from core.config import RunConfig

DEBUG_DUMP = '#'


class SourceError(Exception):
    """Raised when no program text can be loaded."""


def load_source(config: RunConfig) -> str:
    """Program text for the run: the target itself with --eval, else the file's content."""
    if config.expression:
        code = config.target
    else:
        try:
            with open(config.target, 'rb') as f:
                code = read_source(f)
        except (FileNotFoundError, IsADirectoryError, PermissionError):
            raise SourceError(f"File {config.target} not found")
    if code == "":
        raise SourceError("No code to evaluate")
    return code


def build_interpreter(config: RunConfig, code: str) -> Interpreter:
    """Pick the tape model once, at construction."""
    if config.performance:
        return PerformanceInterpreter(code, config.width)
    return DynamicInterpreter(code)


def run(itp: Interpreter, input_data: Optional[str] = None,
        stdin: Optional[TextIO] = None, dump_file: Optional[TextIO] = None) -> str:
    """Run the loaded program to the end.

    A '#' in the code prints the tape before it executes. When ',' finds the
    input empty one more line is read from stdin and the same instruction is
    retried; once stdin is exhausted the EndOfInput propagates.
    """
    if input_data is not None:
        itp.set_input(input_data)
    itp.reset()
    while not itp.finished:
        if itp.current_instruction == DEBUG_DUMP:
            print("Debug:", file=dump_file or sys.stdout)
            print_tape(itp, file=dump_file)
        try:
            itp.step()
        except EndOfInput:
            if stdin is None:
                raise
            line = stdin.readline()
            if line == "":
                raise
            itp.add_input(line.rstrip("\n"))
    return itp.output
