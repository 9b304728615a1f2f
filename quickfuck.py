#!/usr/bin/env python3
"""
QuickFuck: a lightweight Brainfuck interpreter

Usage:
    quickfuck <file> [flags]
    quickfuck -e '<code>' [flags]

Flags:
    -p, --performance [WIDTH]  fixed-width tape (default 256 cells)
    -v, --verbose              show the contents of the cells after the run
    -e, --eval                 interpret the argument as code, not a path
    -i, --input TEXT           input for ','; stdin is read when it runs out
    -t, --trace                run under the step-by-step debugger
    -h, --help                 print usage and exit
"""

import sys
from typing import List, Optional

from brainfuck import BrainfuckError, PerformanceInterpreter
from brainfuck_debugger import BrainfuckDebugger, print_tape
from core.bf_runner import SourceError, build_interpreter, load_source, run
from core.config import ConfigError, parse_args


def main(argv: Optional[List[str]] = None) -> int:
    try:
        config = parse_args(argv)
        code = load_source(config)
        itp = build_interpreter(config, code)
    except (ConfigError, SourceError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if config.verbose:
        print("Performance Mode" if isinstance(itp, PerformanceInterpreter) else "Dynamic Mode")

    try:
        if config.trace:
            BrainfuckDebugger(itp).trace(config.input_data, max_steps=config.max_steps)
        else:
            output = run(itp, config.input_data, stdin=sys.stdin)
            print(output)
    except BrainfuckError as e:
        # Whatever was printed before the failure is still worth showing
        if itp.output:
            print(itp.output)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if config.verbose:
        print_tape(itp)
    return 0


if __name__ == "__main__":
    sys.exit(main())
