"""
Alphabet decoding: turn the text a user typed into whole display characters.

Passwords are built by picking tokens from the decoded alphabet, never by
indexing into the raw text, so a character that needs more than one storage
unit can not be split in half.
"""

from __future__ import annotations

import math
import unicodedata
from dataclasses import dataclass
from typing import Iterator

from .errors import InvalidAlphabet


@dataclass(frozen=True)
class Alphabet:
    """Ordered display characters to draw from. Repeats are kept."""

    tokens: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.tokens:
            raise InvalidAlphabet("")

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> str:
        return self.tokens[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    @property
    def text(self) -> str:
        return "".join(self.tokens)

    def entropy_bits(self, length: int) -> float:
        """
        Theoretical entropy of one password of `length` uniform draws.

        Repeated tokens are counted as separate choices, so this overstates
        the entropy of an alphabet with duplicates.
        """
        return length * math.log2(len(self.tokens))

    def __repr__(self) -> str:
        text = self.text
        shown = text if len(text) <= 10 else text[:10] + "..."
        return f"Alphabet({shown!r}, size={len(self.tokens)})"


def _join_surrogates(text: str) -> str:
    """
    Combine any UTF-16 surrogate pairs left in `text` into code points.

    Strings that crossed a `surrogatepass` boundary can hold a character
    outside the Basic Multilingual Plane as two separate surrogates.
    """
    try:
        return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le")
    except UnicodeDecodeError as exc:
        raise InvalidAlphabet(
            text,
            f"Alphabet contains an unpaired surrogate at position {exc.start // 2}: {text!r}",
        ) from exc


def decode_alphabet(text: str) -> Alphabet:
    """
    Decode raw alphabet text into display-character tokens.

    - Surrogate pairs become one character; a lone surrogate is rejected.
    - Combining marks stay attached to the character before them.
    - Empty text (or text that decodes to nothing) raises InvalidAlphabet.
    """
    if not isinstance(text, str):
        raise InvalidAlphabet(text, f"Alphabet must be text: {text!r}")

    tokens: list[str] = []
    for ch in _join_surrogates(text):
        if tokens and unicodedata.combining(ch):
            tokens[-1] += ch
        else:
            tokens.append(ch)

    if not tokens:
        raise InvalidAlphabet(text)
    return Alphabet(tuple(tokens))

