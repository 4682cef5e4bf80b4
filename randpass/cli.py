"""
Command-line interface.

With one or more COUNT arguments, passwords are printed on standard output,
one per line, as they are produced. Without any, the graphical interface is
started using the options as its initial values.
"""
from __future__ import annotations

import argparse
import logging
import random
import re
import sys
from dataclasses import replace
from typing import Sequence, TextIO

from .alphabet import decode_alphabet
from .config import (
    COUNT_LOWER,
    COUNT_UPPER,
    DEFAULT_CONFIG,
    DELAY_LOWER,
    DELAY_UPPER,
    FONT_SIZE_LOWER,
    FONT_SIZE_UPPER,
    LENGTH_LOWER,
    LENGTH_UPPER,
    PROGRAM_TITLE,
    RandomPassConfig,
)
from .errors import (
    InvalidCount,
    InvalidDelay,
    InvalidLength,
    ValidationError,
)
from .sampler import GenerationRequest, GenerationResult, PasswordSampler, parse_bounded, validate

logger = logging.getLogger(__name__)

EXIT_CANCELLED = 130

_WINDOW_RE = re.compile(
    r"\s*\(\s*(\d{1,5})\s*,\s*(\d{1,5})\s*,\s*(\d{1,5})\s*,\s*(\d{1,5})\s*\)\s*"
)


# ---------- argument types ----------

def _bounded(error: type[ValidationError], lower: int, upper: int):
    def convert(text: str) -> int:
        try:
            return parse_bounded(text, error, lower, upper)
        except ValidationError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc

    convert.__name__ = error.__name__
    return convert


def _alphabet(text: str) -> str:
    try:
        decode_alphabet(text)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return text


def _font_size(text: str) -> int:
    try:
        size = int(text)
    except ValueError:
        size = -1
    if not FONT_SIZE_LOWER <= size <= FONT_SIZE_UPPER:
        raise argparse.ArgumentTypeError(
            f"Dialog font size must be from {FONT_SIZE_LOWER} to {FONT_SIZE_UPPER}: {text!r}"
        )
    return size


def _window(text: str) -> tuple[int, int, int, int]:
    match = _WINDOW_RE.fullmatch(text)
    if match is None:
        raise argparse.ArgumentTypeError(f"Invalid window position or size: {text!r}")
    left, top, width, height = (int(group) for group in match.groups())
    return left, top, width, height


def build_parser() -> argparse.ArgumentParser:
    cfg = DEFAULT_CONFIG
    parser = argparse.ArgumentParser(
        prog="randpass",
        description=f"{PROGRAM_TITLE}: random passwords from a given alphabet.",
        epilog=(
            "Without COUNT the graphical interface is started. "
            "Passwords use a general-purpose random generator and are not "
            "suitable as security tokens."
        ),
    )
    parser.add_argument(
        "counts",
        metavar="COUNT",
        nargs="*",
        type=_bounded(InvalidCount, COUNT_LOWER, COUNT_UPPER),
        help=f"generate COUNT passwords on standard output ({COUNT_LOWER}-{COUNT_UPPER})",
    )
    parser.add_argument(
        "-a", "--alphabet",
        type=_alphabet,
        default=cfg.alphabet,
        help=f"available characters; default is {cfg.alphabet}",
    )
    parser.add_argument(
        "-c", "--length",
        type=_bounded(InvalidLength, LENGTH_LOWER, LENGTH_UPPER),
        default=cfg.password_length,
        help=f"characters in each password; default is {cfg.password_length}",
    )
    parser.add_argument(
        "-n", "--number",
        type=_bounded(InvalidCount, COUNT_LOWER, COUNT_UPPER),
        default=cfg.password_count,
        help=f"initial number of passwords (GUI only); default is {cfg.password_count}",
    )
    parser.add_argument(
        "-t", "--delay",
        type=_bounded(InvalidDelay, DELAY_LOWER, DELAY_UPPER),
        default=cfg.delay_ms,
        help=f"delay between passwords in milliseconds; default is {cfg.delay_ms}",
    )
    parser.add_argument(
        "-s", "--seed",
        type=int,
        default=None,
        help="seed for the random generator, for repeatable output",
    )
    parser.add_argument(
        "-u", "--font-size",
        type=_font_size,
        default=cfg.font_size,
        help=f"GUI font point size; default is {cfg.font_size}",
    )
    parser.add_argument(
        "-w", "--window",
        type=_window,
        default=cfg.window,
        metavar="(X,Y,W,H)",
        help="initial window position and size in pixels",
    )
    parser.add_argument(
        "-x", "--maximize",
        action="store_true",
        help="maximize the GUI window",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> RandomPassConfig:
    return replace(
        DEFAULT_CONFIG,
        alphabet=args.alphabet,
        password_length=args.length,
        password_count=args.number,
        delay_ms=args.delay,
        font_size=args.font_size,
        window=args.window,
        maximize=args.maximize,
    )


def run_console(
    request: GenerationRequest,
    stream: TextIO | None = None,
    rng: random.Random | None = None,
) -> GenerationResult:
    """
    Print each password on its own line as soon as it is produced.
    """
    out = stream or sys.stdout

    def emit(_index: int, password: str) -> None:
        out.write(password + "\n")
        out.flush()

    return PasswordSampler(request).run(on_item=emit, rng=rng)


def main(argv: Sequence[str] | None = None) -> int:
    """
    Entry point for `randpass`, `python -m randpass` or `run_randpass.py`.
    """
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = config_from_args(args)

    if not args.counts:
        # Imported here so console use never needs QtWidgets.
        from .gui_qt import main as gui_main

        return gui_main(config, seed=args.seed)

    # Shared by every COUNT so each batch continues the same sequence.
    rng = random.Random(args.seed)
    for count in args.counts:
        try:
            request = validate(
                config.alphabet,
                config.password_length,
                count,
                config.delay_ms,
                seed=args.seed,
            )
        except ValidationError as exc:
            logger.error(str(exc))
            return 1

        try:
            result = run_console(request, rng=rng)
        except KeyboardInterrupt:
            print("Cancelled by user.", file=sys.stderr)
            return EXIT_CANCELLED
        if result.cancelled:
            return EXIT_CANCELLED

    return 0


if __name__ == "__main__":
    sys.exit(main())
