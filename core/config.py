from dataclasses import dataclass
from typing import List, Optional
import argparse
import os

from dotenv import load_dotenv

from brainfuck import DEFAULT_TAPE_WIDTH

load_dotenv()

USAGE_EPILOG = """\
examples:
  quickfuck hello.bf
  quickfuck -e '++++++++[->++++++<]>.'
  quickfuck -p 32 -v hello.bf

Put '#' anywhere in the code to print the tape at that point."""


class ConfigError(ValueError):
    """Raised for command lines that cannot be turned into a run."""


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def default_tape_width() -> int:
    return _env_int("QF_TAPE_WIDTH", DEFAULT_TAPE_WIDTH)


def default_max_steps() -> int:
    return _env_int("QF_MAX_TRACE_STEPS", 100)


@dataclass(frozen=True)
class RunConfig:
    """Everything a single run needs, parsed once from the command line."""
    target: str
    expression: bool = False
    performance: bool = False
    width: int = DEFAULT_TAPE_WIDTH
    verbose: bool = False
    input_data: Optional[str] = None
    trace: bool = False
    max_steps: int = 100

    def __post_init__(self):
        if not self.target:
            raise ConfigError(f"{'expression' if self.expression else 'path'} cannot be empty")
        if self.width <= 0:
            raise ConfigError(f"Tape width must be positive, got {self.width}")
        if self.max_steps <= 0:
            raise ConfigError(f"--max-steps must be positive, got {self.max_steps}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quickfuck",
        description="A lightweight Brainfuck interpreter.",
        epilog=USAGE_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("target", nargs="?", default=None,
                        help="The file to interpret, or the code itself with --eval.")
    parser.add_argument("-p", "--performance", nargs="?", const="", default=None, metavar="WIDTH",
                        help="Use the fixed-width tape. Optional tape size, ex: '-p 32' "
                             "(default: $QF_TAPE_WIDTH or 256).")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show contents of cells after evaluation ends.")
    parser.add_argument("-e", "--eval", dest="expression", action="store_true",
                        help="Interpret the argument as code instead of a file path.")
    parser.add_argument("-i", "--input", dest="input_data", default=None,
                        help="Input for ',' (read from stdin when exhausted).")
    parser.add_argument("-t", "--trace", action="store_true",
                        help="Run under the step-by-step debugger.")
    parser.add_argument("--max-steps", type=int, default=None,
                        help="Step limit for --trace (default: $QF_MAX_TRACE_STEPS or 100).")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> RunConfig:
    """Parse argv into a RunConfig. -h/--help exits with status 0."""
    parser = build_parser()
    args, extras = parser.parse_known_args(argv)

    target = args.target
    if extras:
        # Code such as "-[--->+<]>." looks like an option to argparse
        if not (args.expression and target is None and len(extras) == 1):
            parser.error(f"unrecognized arguments: {' '.join(extras)}")
        target = extras[0]

    performance = args.performance is not None
    width = default_tape_width() if performance else DEFAULT_TAPE_WIDTH
    if performance and args.performance != "":
        try:
            width = int(args.performance)
        except ValueError:
            # '-p prog.bf': the word after -p is the target, not a width
            if target is not None:
                raise ConfigError(f"Invalid tape width {args.performance!r}")
            target = args.performance

    max_steps = args.max_steps if args.max_steps is not None else default_max_steps()

    return RunConfig(
        target=target or "",
        expression=args.expression,
        performance=performance,
        width=width,
        verbose=args.verbose,
        input_data=args.input_data,
        trace=args.trace,
        max_steps=max_steps,
    )
