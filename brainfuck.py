#!/usr/bin/env python3
"""
Brainfuck Interpreter

Brainfuck is an esoteric programming language with only 8 commands:
    >   Move the pointer to the right
    <   Move the pointer to the left
    +   Increment the memory cell at the pointer
    -   Decrement the memory cell at the pointer
    .   Output the character signified by the cell at the pointer
    ,   Input a character and store it in the cell at the pointer
    [   Mark the start of a loop
    ]   Jump back to the matching [ if the cell at the pointer is nonzero

All other characters are treated as comments and ignored.

Two tape models are provided:
    DynamicInterpreter      tape grows to the right on demand, < stops at 0
    PerformanceInterpreter  fixed-width uint8 tape, pointer is not checked

Loops are resolved while running: [ pushes its position and ] jumps back to
the position on top of the stack. There is no jump table, so [ never skips
forward and every loop body runs at least once.
"""

from typing import List, Optional

import numpy as np

COMMANDS = '><+-.,[]'
CELL_MODULUS = 256
DEFAULT_TAPE_WIDTH = 256

# Pointer arithmetic for the fixed tape behaves like an unsigned 64-bit index
INDEX_MODULUS = 2 ** 64


class BrainfuckError(Exception):
    """Base class for errors raised while running a program."""


class EndOfInput(BrainfuckError, EOFError):
    """Raised when , executes with an empty input buffer."""


class TapeIndexError(BrainfuckError, IndexError):
    """Raised when a cell outside the tape is addressed."""


class UnmatchedBracketError(BrainfuckError):
    """Raised when ] executes with no open loop."""


class LoopStack:
    """LIFO of instruction positions for the loops currently open."""

    def __init__(self):
        self._positions: List[int] = []

    def push(self, position: int) -> None:
        self._positions.append(position)

    def peek(self) -> int:
        if not self._positions:
            raise UnmatchedBracketError("Unmatched ']': no open loop")
        return self._positions[-1]

    def pop(self) -> int:
        if not self._positions:
            raise UnmatchedBracketError("Unmatched ']': no open loop")
        return self._positions.pop()

    def clear(self) -> None:
        self._positions.clear()

    def __len__(self):
        return len(self._positions)

    def __repr__(self):
        return f"LoopStack({self._positions!r})"


def read_source(source) -> str:
    """Return program text from a string or a readable stream, verbatim."""
    if isinstance(source, str):
        return source
    data = source.read()
    if isinstance(data, (bytes, bytearray)):
        # latin-1 maps every byte to the code point of the same value
        return data.decode('latin-1')
    return data


class Interpreter:
    """Shared engine contract. Subclasses own the tape."""

    def __init__(self, source=""):
        self._code = read_source(source)
        self.position = 0
        self.active_cell = 0
        self.loops = LoopStack()
        self._input = ""
        self._output: List[str] = []

    # -- tape model, provided by subclasses -------------------------------

    def _reset_tape(self) -> None:
        raise NotImplementedError

    def _move_left(self) -> None:
        raise NotImplementedError

    def _move_right(self) -> None:
        raise NotImplementedError

    def _read_cell(self, i: int) -> int:
        raise NotImplementedError

    def _write_cell(self, i: int, value: int) -> None:
        raise NotImplementedError

    def _place_pointer(self, i: int) -> None:
        self.active_cell = i

    @property
    def size(self) -> int:
        raise NotImplementedError

    def get_tape(self) -> List[int]:
        raise NotImplementedError

    # -- execution --------------------------------------------------------

    def load(self, source) -> None:
        """Replace the program. State is left alone until the next reset."""
        self._code = read_source(source)

    def reset(self) -> None:
        """Put pointers, tape, loops and output back to their initial state."""
        self.position = 0
        self.active_cell = 0
        self.loops.clear()
        self._output = []
        self._reset_tape()

    def interpret(self, input_data: Optional[str] = None) -> str:
        """Run the program from the beginning and return everything it printed."""
        if input_data is not None:
            self._input = input_data
        self.reset()
        while self.position < len(self._code):
            self.step()
        return self.output

    def step(self) -> bool:
        """Execute one instruction. Returns False once the program has ended."""
        if self.position >= len(self._code):
            return False

        cmd = self._code[self.position]

        if cmd == '+':
            cell = self._read_cell(self.active_cell)
            self._write_cell(self.active_cell, (cell + 1) % CELL_MODULUS)

        elif cmd == '-':
            cell = self._read_cell(self.active_cell)
            self._write_cell(self.active_cell, (cell - 1) % CELL_MODULUS)

        elif cmd == '<':
            self._move_left()

        elif cmd == '>':
            self._move_right()

        elif cmd == '[':
            self.loops.push(self.position)

        elif cmd == ']':
            if self._read_cell(self.active_cell) == 0:
                self.loops.pop()
            else:
                self.position = self.loops.peek()

        elif cmd == '.':
            self._output.append(chr(self._read_cell(self.active_cell)))

        elif cmd == ',':
            if not self._input:
                raise EndOfInput("End of input")
            self._write_cell(self.active_cell, ord(self._input[0]) % CELL_MODULUS)
            self._input = self._input[1:]

        self.position += 1
        return True

    @property
    def finished(self) -> bool:
        return self.position >= len(self._code)

    @property
    def current_instruction(self) -> Optional[str]:
        if self.finished:
            return None
        return self._code[self.position]

    # -- accessors --------------------------------------------------------

    @property
    def code(self) -> str:
        return self._code

    @code.setter
    def code(self, source: str) -> None:
        self._code = source

    @property
    def output(self) -> str:
        return ''.join(self._output)

    @output.setter
    def output(self, text: str) -> None:
        self._output = list(text)

    def clear_output(self) -> None:
        self._output = []

    @property
    def input(self) -> str:
        return self._input

    @input.setter
    def input(self, text: str) -> None:
        self._input = text

    def set_input(self, text: str) -> None:
        self._input = text

    def add_input(self, text: str) -> None:
        self._input += text

    @property
    def index(self) -> int:
        return self.active_cell

    @index.setter
    def index(self, i: int) -> None:
        self._place_pointer(i)

    def get_value(self, i: Optional[int] = None) -> int:
        """Value of cell i, or of the active cell when i is omitted."""
        if i is None:
            return self._read_cell(self.active_cell)
        self._check_index(i)
        return self._read_cell(i)

    def set_value(self, value: int, i: Optional[int] = None) -> None:
        """Store value (mod 256) in cell i, or in the active cell."""
        if i is None:
            i = self.active_cell
        else:
            self._check_index(i)
        self._write_cell(i, value % CELL_MODULUS)

    def _check_index(self, i: int) -> None:
        if not 0 <= i < self.size:
            raise TapeIndexError(f"Cell {i} is out of bounds (tape size {self.size})")

    def __len__(self):
        return self.size

    def __repr__(self):
        return (f"{type(self).__name__}(size={self.size}, position={self.position}, "
                f"index={self.active_cell})")


class DynamicInterpreter(Interpreter):
    """Tape starts with one cell and grows to the right as > needs it.

    Moving left of cell 0 is a no-op, so negative cells never exist.
    """

    def __init__(self, source=""):
        super().__init__(source)
        self.cells = bytearray(1)

    def _reset_tape(self) -> None:
        self.cells = bytearray(1)

    def _place_pointer(self, i: int) -> None:
        self._check_index(i)
        self.active_cell = i

    def _move_left(self) -> None:
        if self.active_cell > 0:
            self.active_cell -= 1

    def _move_right(self) -> None:
        if self.active_cell == len(self.cells) - 1:
            self.cells.append(0)
        self.active_cell += 1

    def _read_cell(self, i: int) -> int:
        if not 0 <= i < len(self.cells):
            raise TapeIndexError(f"Cell {i} is out of bounds (tape size {len(self.cells)})")
        return self.cells[i]

    def _write_cell(self, i: int, value: int) -> None:
        if not 0 <= i < len(self.cells):
            raise TapeIndexError(f"Cell {i} is out of bounds (tape size {len(self.cells)})")
        self.cells[i] = value

    @property
    def size(self) -> int:
        return len(self.cells)

    def get_tape(self) -> List[int]:
        return list(self.cells)


class PerformanceInterpreter(Interpreter):
    """Fixed-width tape of uint8 cells with no hand holds on the pointer.

    < and > never check the tape edges. The pointer wraps like an unsigned
    64-bit index, so < at cell 0 lands far past the end of the tape and the
    next access to the active cell raises TapeIndexError.
    """

    def __init__(self, source="", width: int = DEFAULT_TAPE_WIDTH):
        if isinstance(width, bool) or not isinstance(width, (int, np.integer)) or width <= 0:
            raise ValueError(f"Tape width must be a positive integer, got {width!r}")
        super().__init__(source)
        self._width = int(width)
        self.cells = np.zeros(self._width, dtype=np.uint8)

    @property
    def width(self) -> int:
        return self._width

    def _reset_tape(self) -> None:
        self.cells = np.zeros(self._width, dtype=np.uint8)

    def _move_left(self) -> None:
        self.active_cell = (self.active_cell - 1) % INDEX_MODULUS

    def _move_right(self) -> None:
        self.active_cell = (self.active_cell + 1) % INDEX_MODULUS

    def _read_cell(self, i: int) -> int:
        if not 0 <= i < self._width:
            raise TapeIndexError(f"Cell {i} is out of bounds (tape width {self._width})")
        return int(self.cells[i])

    def _write_cell(self, i: int, value: int) -> None:
        if not 0 <= i < self._width:
            raise TapeIndexError(f"Cell {i} is out of bounds (tape width {self._width})")
        self.cells[i] = value

    @property
    def size(self) -> int:
        return self._width

    def get_tape(self) -> List[int]:
        return self.cells.tolist()
