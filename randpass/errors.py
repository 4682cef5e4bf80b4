"""
Exception types raised by the random password generator.
"""

from __future__ import annotations

from pathlib import Path


class RandomPassError(Exception):
    """Base class for all randpass errors."""


class ValidationError(RandomPassError, ValueError):
    """
    A generation parameter is outside its accepted range.

    Raised before any password is produced. Carries the offending value
    and the inclusive bounds so the caller can tell the user what to fix.
    """

    what = "Value"

    def __init__(self, value: object, lower: int, upper: int | None, message: str | None = None) -> None:
        self.value = value
        self.lower = lower
        self.upper = upper
        if message is None:
            message = f"{self.what} must be from {lower} to {upper}: {value!r}"
        super().__init__(message)


class InvalidAlphabet(ValidationError):
    what = "Alphabet"

    def __init__(self, value: object, message: str | None = None) -> None:
        if message is None:
            message = f"Alphabet of available characters can not be empty: {value!r}"
        super().__init__(value, 1, None, message)


class InvalidLength(ValidationError):
    what = "Length of each password (characters)"


class InvalidCount(ValidationError):
    what = "Number of passwords to generate"


class InvalidDelay(ValidationError):
    what = "Time delay between passwords (milliseconds)"


class WriteFailure(RandomPassError, OSError):
    """Output text could not be written. In-memory results are unaffected."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Can't write to text file {self.path}: {reason}")
