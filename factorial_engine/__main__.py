"""
Command-line front end for the factorial engine.

Usage examples:
  python -m factorial_engine 40000                  # automatic method
  python -m factorial_engine 5000 --method parallel --threads 4
  python -m factorial_engine                        # interactive menu
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional, TextIO

from pydantic import ValidationError

from .container import Container
from .engine import FactorialEngine
from .exceptions import FactorialError, InvalidInputError
from .logging_config import setup_logging
from .models import FactorialMethod, FactorialRequest


logger = logging.getLogger(__name__)

MENU_LABELS = {
    FactorialMethod.FOR_LOOP: "For Loop",
    FactorialMethod.FOR_LOOP_PRE_MULTIPLY: "For Loop - Pre Multiplied",
    FactorialMethod.FOR_LOOP_PRE_MULTIPLY_ENDS: "For Loop - Pre Multiplied Ends",
    FactorialMethod.PARALLEL: "Parallel For Loops",
    FactorialMethod.PARALLEL_PRE_MULTIPLY_ENDS: "Parallel For Loops - Pre Multiplied Ends",
    FactorialMethod.RECURSIVE: "Recursive",
    FactorialMethod.LOG_APPROXIMATION: "Logarithmic Approximation - Accurate to 5 decimal places.",
}


def parse_input(text: str) -> int:
    """Parse user text as an integer.

    Raises:
        InvalidInputError: If the text is not an integer.
    """
    try:
        return int(text.strip())
    except (AttributeError, ValueError):
        raise InvalidInputError(f"The value provided is not a valid number: {text!r}") from None


def render_menu() -> str:
    lines = ["Choose the preferred method", ""]
    for method in FactorialMethod:
        lines.append(f"{method.menu_number}) {MENU_LABELS[method]}")
    lines.append("0) Return to start screen")
    return "\n".join(lines)


def compute_and_report(engine: FactorialEngine,
                       text: str,
                       method: Optional[FactorialMethod],
                       threads: Optional[int],
                       precision: int,
                       out: TextIO) -> None:
    """Compute the factorial of ``text`` and print ``n! = ... in ...ms``."""
    n = parse_input(text)
    # unvalidated so that a negative n reaches the strategy and raises NegativeArgumentError
    request = FactorialRequest.model_construct(n=n, method=method, parallelism=threads)
    result = engine.run(request)
    out.write(f"{n}! = {result.scientific(precision)} in {result.elapsed_ms:.0f}ms\n")
    if result.approximate:
        out.write("(approximated to 5 significant digits)\n")


def interactive(engine: FactorialEngine,
                threads: Optional[int],
                precision: int,
                read: Callable[[str], str] = input,
                out: TextIO = sys.stdout) -> None:
    """Prompt for a number, then for a method, until input runs out."""
    while True:
        try:
            text = read("Please input a number.\n")
        except EOFError:
            return
        if not text.strip():
            return

        while True:
            out.write(render_menu() + "\n")
            try:
                choice = read("> ").strip()
            except EOFError:
                return
            if choice == "0":
                break
            if not choice.isdigit() or not 1 <= int(choice) <= len(FactorialMethod):
                continue

            method = FactorialMethod.from_menu_number(int(choice))
            try:
                compute_and_report(engine, text, method, threads, precision, out)
            except FactorialError as e:
                out.write(f"\n{e}\n")
                break


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="factorial_engine",
        description="Compute n! with one of several factorial strategies.")
    parser.add_argument("n", nargs="?", help="non-negative integer; omit for the interactive menu")
    parser.add_argument(
        "--method",
        default="auto",
        help="auto or one of: " + ", ".join(m.value for m in FactorialMethod),
    )
    parser.add_argument("--threads", type=int, default=None,
                        help="worker threads for the parallel methods")
    parser.add_argument("--precision", type=int, default=15,
                        help="digits after the decimal point in the output")
    parser.add_argument("--log-dir", default=None, help="also write logs to this directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: Optional[List[str]] = None, out: TextIO = sys.stdout) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("factorial_engine", args.log_dir,
                  logging.DEBUG if args.verbose else logging.WARNING)

    if args.threads is not None and args.threads < 1:
        parser.error("--threads must be at least 1")
    if args.precision < 0:
        parser.error("--precision must not be negative")

    try:
        method = None if args.method == "auto" else FactorialMethod.parse(args.method)
    except FactorialError as e:
        parser.error(str(e))

    try:
        engine = Container().engine()
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()
        )
        logger.error("Invalid FACTORIAL_* settings: %s", problems)
        out.write(f"Invalid FACTORIAL_* settings: {problems}\n")
        return 1

    if args.n is None:
        interactive(engine, args.threads, args.precision, out=out)
        return 0

    try:
        compute_and_report(engine, args.n, method, args.threads, args.precision, out)
    except FactorialError as e:
        logger.error("%s", e)
        out.write(f"{e}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
