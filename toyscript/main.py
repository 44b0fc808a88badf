"""Runs toyscript files. Every file is scanned, validated and evaluated in argument order; all files share one variable
environment, seeded with x = 1 and y = 3. An error aborts only the file it occurred in.
"""

import argparse
import logging
import sys

from toyscript.lang.environment import Environment
from toyscript.lang.error import ErrorHandler
from toyscript.lang.numerical import hex_number, number
from toyscript.lang.session import Session

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def define(arg):
    """Parses a NAME=VALUE command-line define. VALUE is a decimal or '#' hex literal, optionally negative."""
    name, sep, value = arg.partition("=")
    name = name.strip()
    if not (sep and name.isascii() and name.isalnum() and name[:1].isalpha()):
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{arg}'")

    value = value.strip()
    sign = -1 if value.startswith("-") else 1
    literal = value[1:] if sign < 0 else value
    try:
        return name, sign * (hex_number(literal) if literal.startswith("#") else number(literal))
    except ValueError as error:
        raise argparse.ArgumentTypeError(str(error))


def build_parser():
    parser = argparse.ArgumentParser(prog="toyscript", description=__doc__)
    parser.add_argument("files", nargs="+", metavar="FILE", help="toyscript source file to run")
    parser.add_argument("-D", "--define", type=define, action="append", default=[], metavar="NAME=VALUE",
                        help="seed variable NAME with VALUE before the first file runs")
    parser.add_argument("--color", choices=["auto", "always", "never"], default="auto",
                        help="highlight error reports (auto: only when stdout is a terminal)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="log to stderr (-vv for debug)")
    return parser


def main(argv=None):
    """Runs toyscript. Called from the toyscript console script."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=LOG_LEVELS[min(args.verbose, len(LOG_LEVELS) - 1)],
                        format="%(levelname)s:%(name)s: %(message)s", stream=sys.stderr)

    color = {"auto": None, "always": True, "never": False}[args.color]
    session = Session(ErrorHandler(color=color), Environment.seeded(dict(args.define)))
    session.run(args.files)
    return 0


if __name__ == "__main__":
    sys.exit(main())
