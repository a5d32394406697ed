# Command-line front end for the calculator: a line-oriented REPL and a one-shot mode.
#
# Each input line is handed to the core once (tokenize -> to_postfix -> evaluate) and the
# answer or an "Invalid Input" message is printed. The loop ends on EOF; Ctrl-C only
# abandons the current line.
#
# When stdin is a terminal the REPL reads through prompt_toolkit with persistent history;
# otherwise (pipes, tests) it falls back to plain input().

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.input import Input
from prompt_toolkit.output import Output
from pydantic import ValidationError

from rpncalc import calc
from rpncalc.settings import Settings

logger = logging.getLogger(__name__)

BANNER = "\nHello, world! Write any mathematical expression\n"
INVALID_INPUT = "Invalid Input"

# --------------------------
# REPL
# --------------------------

class REPL:
    """Read-Eval-Print Loop over the calculator core."""

    def __init__(self, settings: Optional[Settings] = None, interactive: Optional[bool] = None,
                 input: Optional[Input] = None, output: Optional[Output] = None):
        """input/output are handed to prompt_toolkit; None means the real terminal."""
        self.settings = settings or Settings()
        if interactive is None:
            interactive = sys.stdin.isatty()
        self.session: Optional[PromptSession] = None
        if interactive:
            if self.settings.history_file:
                history = FileHistory(self.settings.history_file)
            else:
                history = InMemoryHistory()
            self.session = PromptSession(history=history, input=input, output=output)

    def evaluate_line(self, line: str) -> Tuple[bool, str]:
        """Evaluate a single expression line. Returns (ok, output)."""
        try:
            value = calc.calculate(line, operand_order=self.settings.operand_order)
        except calc.CalcError as e:
            logger.info("rejected %r: %s", line, e)
            if self.settings.verbose_errors:
                return False, f"{INVALID_INPUT}: {e}"
            return False, INVALID_INPUT
        return True, f"Answer is: {calc.format_value(value)}"

    def _read_line(self) -> str:
        if self.session is not None:
            return self.session.prompt(self.settings.prompt)
        return input(self.settings.prompt)

    def repl_loop(self) -> None:
        """Interactive loop; returns on EOF."""
        print(BANNER)
        while True:
            try:
                line = self._read_line()
            except KeyboardInterrupt:
                print("^C")
                continue
            except EOFError:
                print("Exiting.")
                break
            if not line.strip():
                continue
            ok, out = self.evaluate_line(line)
            print(out)

# --------------------------
# Entry point
# --------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rpncalc",
        description="Evaluate integer arithmetic expressions with + - * / and parentheses.",
    )
    parser.add_argument(
        "-e", "--expression",
        action="append",
        default=[],
        metavar="EXPR",
        help="Evaluate EXPR and exit instead of starting the REPL (may be repeated).",
    )
    parser.add_argument(
        "--reversed-operands",
        action="store_true",
        default=None,
        help="Apply operators as 'first popped OP second popped' (compatibility with early releases).",
    )
    parser.add_argument(
        "--verbose-errors",
        action="store_true",
        default=None,
        help="Show why an input was rejected.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (default: WARNING, or RPNCALC_LOG_LEVEL).",
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Environment settings with command-line overrides applied."""
    settings = Settings.from_env()
    overrides = {}
    if args.reversed_operands:
        overrides["operand_order"] = calc.REVERSED
    if args.verbose_errors:
        overrides["verbose_errors"] = True
    if args.log_level:
        overrides["log_level"] = args.log_level
    if overrides:
        settings = Settings(**{**settings.model_dump(), **overrides})
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args)
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.debug("settings: %s", settings)

    repl = REPL(settings, interactive=False if args.expression else None)
    if args.expression:
        status = 0
        for expr in args.expression:
            ok, out = repl.evaluate_line(expr)
            print(out)
            if not ok:
                status = 1
        return status

    repl.repl_loop()
    return 0

if __name__ == '__main__':
    raise SystemExit(main())
