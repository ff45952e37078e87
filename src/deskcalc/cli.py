"""Console front end.

Each input line is split on whitespace and every piece is dispatched as a
command token, e.g. ``7 + 3 =``. The display is printed after each line,
prefixed with ``!`` while an error is showing. ``quit`` or ``exit`` ends the
session.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import TextIO

from deskcalc.config import CalculatorConfig
from deskcalc.dispatcher import CommandDispatcher
from deskcalc.exceptions import CalculatorError
from deskcalc.scheduling import ManualScheduler

PROMPT = "> "


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deskcalc",
        description="Keystroke-driven calculator with normal, scientific and programmer modes.",
    )
    parser.add_argument(
        "--tokens",
        help='run these whitespace-separated tokens and print the display, e.g. "2 + 2 ="',
    )
    parser.add_argument(
        "--precision",
        type=int,
        help="fraction digits shown in normal and scientific modes (0-15)",
    )
    parser.add_argument("--log-level", help="logging level, e.g. DEBUG")
    return parser


def format_display(calc: CommandDispatcher) -> str:
    return f"! {calc.display_text}" if calc.is_error else calc.display_text


def run_line(calc: CommandDispatcher, scheduler: ManualScheduler, line: str) -> None:
    """Dispatch every token on ``line``; an error left by the previous line clears first."""
    scheduler.run_pending()
    for token in line.split():
        calc.dispatch(token)


def repl(
    calc: CommandDispatcher,
    scheduler: ManualScheduler,
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
) -> None:
    print(format_display(calc), file=stdout)
    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            print(file=stdout)
            break
        line = line.strip()
        if line.lower() in ("quit", "exit"):
            break
        if not line:
            continue
        try:
            run_line(calc, scheduler, line)
        except CalculatorError as err:
            print(err, file=stdout)
        print(format_display(calc), file=stdout)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = CalculatorConfig.from_env()
        if args.log_level:
            config = replace(config, log_level=args.log_level.upper())
    except CalculatorError as err:
        print(f"deskcalc: {err}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    scheduler = ManualScheduler()
    calc = CommandDispatcher(config=config, scheduler=scheduler)
    try:
        if args.precision is not None:
            calc.set_precision(args.precision)
        if args.tokens is not None:
            run_line(calc, scheduler, args.tokens)
            print(format_display(calc))
            return 1 if calc.is_error else 0
    except CalculatorError as err:
        print(f"deskcalc: {err}", file=sys.stderr)
        return 2

    repl(calc, scheduler)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
