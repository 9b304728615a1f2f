#!/usr/bin/env python3
"""
Brainfuck Step-by-Step Debugger

Tape dumps and a tracing debugger that drives an interpreter one instruction
at a time, displaying the tape, the input buffer and the output after each
step.
"""

import sys
from typing import Optional

from brainfuck import COMMANDS, Interpreter, PerformanceInterpreter


def _printable(value: int) -> str:
    char = chr(value)
    return char if char.isprintable() else ' '


def format_tape(interp: Interpreter) -> str:
    """Render every cell as 'index: value char' rows."""
    lines = ["Cell\tVal\tChar"]
    for i, value in enumerate(interp.get_tape()):
        lines.append(f"{i}:\t{value}\t'{_printable(value)}'")
    return "\n".join(lines)


def print_tape(interp: Interpreter, file=None) -> None:
    """Print the tape dump followed by a blank line."""
    print(format_tape(interp), file=file or sys.stdout)
    print(file=file or sys.stdout)


class BrainfuckDebugger:
    """Single-steps an interpreter and shows its state after every step."""

    def __init__(self, interp: Interpreter, show_memory_range: int = 10, file=None):
        self.interp = interp
        self.show_memory_range = show_memory_range
        self.file = file or sys.stdout
        self.step_count = 0

    def _print(self, text: str = "") -> None:
        print(text, file=self.file)

    def trace(self, input_data: Optional[str] = None, max_steps: int = 100) -> str:
        """Run the loaded program from the start with state shown after each step."""
        interp = self.interp
        if input_data is not None:
            interp.set_input(input_data)
        interp.reset()
        self.step_count = 0

        self._print("🐛 BRAINFUCK DEBUGGER")
        self._print(f"Program: {interp.code}")
        self._print(f"Input: {interp.input!r} (as chars: {[ord(c) for c in interp.input]})")
        self._print("=" * 80)
        self.show_state("INITIAL")

        while not interp.finished and self.step_count < max_steps:
            cmd = interp.current_instruction
            if cmd not in COMMANDS:
                # Comments are skipped without counting as a step
                interp.step()
                continue

            self.step_count += 1
            self._print(f"\nStep {self.step_count}: Execute '{cmd}' at position {interp.position}")
            interp.step()
            self.show_state(f"AFTER STEP {self.step_count}")

        if not interp.finished:
            self._print(f"\n⚠️ Execution stopped after {max_steps} steps (possible infinite loop)")

        self._print("\n🎯 FINAL RESULT:")
        self._print(f"Output: {interp.output!r} → {[ord(c) for c in interp.output]}")
        return interp.output

    def show_state(self, label: str) -> None:
        """Show current state of the tape, pointers and output."""
        interp = self.interp
        self._print(f"\n{label}:")

        # Show program with instruction pointer
        program_display = ""
        for i, cmd in enumerate(interp.code):
            if cmd not in COMMANDS:
                continue
            if i == interp.position:
                program_display += f"[{cmd}]"
            else:
                program_display += cmd
        if interp.finished:
            program_display += "[END]"
        self._print(f"Program:  {program_display}")
        self._print(f"Input:    {interp.input!r}")
        self._print(f"Loops:    {len(interp.loops)} open")

        if interp.active_cell >= interp.size:
            self._print(f"Pointer:  {interp.active_cell} (outside the tape)")
        else:
            self._show_memory()

        if interp.output:
            output_nums = [ord(c) for c in interp.output]
            self._print(f"Output:   {interp.output!r} → {output_nums}")
        else:
            self._print("Output:   (empty)")

    def _show_memory(self) -> None:
        interp = self.interp
        tape = interp.get_tape()
        pointer = interp.active_cell

        # Show memory tape (focused around pointer)
        start = max(0, pointer - self.show_memory_range // 2)
        end = min(len(tape), start + self.show_memory_range)

        # Adjust start if we're near the end
        if end - start < self.show_memory_range:
            start = max(0, end - self.show_memory_range)

        memory_vals = []
        memory_ptrs = []
        memory_addrs = []
        for i in range(start, end):
            memory_vals.append(f"{tape[i]:3d}")
            memory_ptrs.append(" ^ " if i == pointer else "   ")
            memory_addrs.append(f"{i:3d}")

        kind = "fixed" if isinstance(interp, PerformanceInterpreter) else "growable"
        self._print(f"Memory:   [" + "|".join(memory_vals) + f"]  ({kind}, {len(tape)} cells)")
        self._print("Pointer:   " + " ".join(memory_ptrs))
        self._print("Address:   " + " ".join(memory_addrs))
