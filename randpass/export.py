"""
Writing generated passwords to a text file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .errors import WriteFailure

logger = logging.getLogger(__name__)


def format_passwords(passwords: Iterable[str]) -> str:
    """One password per line, with a trailing newline."""
    lines = list(passwords)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def write_passwords(path: str | Path, passwords: Iterable[str]) -> Path:
    """
    Write passwords to `path` as UTF-8 text, replacing any existing file.

    Raises WriteFailure if the file can not be written.
    """
    path = Path(path)
    text = format_passwords(passwords)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        logger.error("Could not write %s: %s", path, exc)
        raise WriteFailure(path, exc.strerror or str(exc)) from exc
    logger.info("Wrote %d bytes to %s", len(text.encode("utf-8")), path)
    return path
