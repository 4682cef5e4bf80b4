"""
Password sampler: validate a request, then draw passwords uniformly at
random (with replacement) from the decoded alphabet.

The generator is Python's general-purpose `random.Random`, seeded from the
system unless a seed is given. It is not meant for security tokens.
"""

from __future__ import annotations

import enum
import logging
import random
import re
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .alphabet import Alphabet, decode_alphabet
from .config import (
    COUNT_LOWER,
    COUNT_UPPER,
    DEFAULT_ALPHABET,
    DELAY_LOWER,
    DELAY_UPPER,
    LENGTH_LOWER,
    LENGTH_UPPER,
)
from .errors import InvalidCount, InvalidDelay, InvalidLength, ValidationError

logger = logging.getLogger(__name__)

ItemCallback = Callable[[int, str], None]
ProgressCallback = Callable[[int, int], None]

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


class GenerationStatus(enum.Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class GenerationRequest:
    """Parameters for one run. Build it with `validate()`."""

    alphabet: Alphabet
    length: int
    count: int
    delay_ms: int = 250
    # None seeds from the system; an int makes a run reproducible.
    seed: Optional[int] = None


@dataclass(frozen=True)
class GenerationResult:
    passwords: tuple[str, ...]
    status: GenerationStatus

    @property
    def completed(self) -> bool:
        return self.status is GenerationStatus.COMPLETED

    @property
    def cancelled(self) -> bool:
        return self.status is GenerationStatus.CANCELLED


class RunContext:
    """
    Per-run cancellation and completion flags, owned by the caller.

    The cancel flag is written by the caller and read by the sampler.
    Whether the run is over is reported by the separate finished flag.
    """

    def __init__(self) -> None:
        self._cancel = threading.Event()
        self._finished = threading.Event()

    def cancel(self) -> None:
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def wait(self, seconds: float) -> None:
        """Sleep for `seconds`, waking early if cancellation is requested."""
        self._cancel.wait(seconds)

    def mark_finished(self) -> None:
        self._finished.set()

    @property
    def finished(self) -> bool:
        return self._finished.is_set()

    def wait_finished(self, timeout: float | None = None) -> bool:
        return self._finished.wait(timeout)


def parse_bounded(value: object, error: type[ValidationError], lower: int, upper: int) -> int:
    """
    Accept an int or a decimal string within [lower, upper].

    Strings must be plain ASCII digits with an optional sign; underscores
    and other digit scripts are rejected. Booleans and floats are rejected
    rather than coerced.
    """
    if isinstance(value, bool):
        raise error(value, lower, upper)
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if _DECIMAL_RE.fullmatch(text) is None:
            raise error(value, lower, upper)
        number = int(text)
    else:
        raise error(value, lower, upper)

    if not lower <= number <= upper:
        raise error(value, lower, upper)
    return number


def validate(
    alphabet_text: str,
    length: int | str,
    count: int | str,
    delay_ms: int | str = 250,
    seed: int | None = None,
) -> GenerationRequest:
    """
    Check user input and build a GenerationRequest.

    Raises InvalidAlphabet, InvalidLength, InvalidCount or InvalidDelay,
    checked in that order.
    """
    alphabet = decode_alphabet(alphabet_text)
    return GenerationRequest(
        alphabet=alphabet,
        length=parse_bounded(length, InvalidLength, LENGTH_LOWER, LENGTH_UPPER),
        count=parse_bounded(count, InvalidCount, COUNT_LOWER, COUNT_UPPER),
        delay_ms=parse_bounded(delay_ms, InvalidDelay, DELAY_LOWER, DELAY_UPPER),
        seed=seed,
    )


def make_password(alphabet: Alphabet, length: int, rng: random.Random) -> str:
    size = len(alphabet)
    return "".join(alphabet[rng.randrange(size)] for _ in range(length))


def generate(
    request: GenerationRequest,
    on_item: ItemCallback,
    on_cancel_check: Callable[[], bool],
    on_progress: ProgressCallback | None = None,
    sleep: Callable[[float], None] = time.sleep,
    rng: random.Random | None = None,
) -> GenerationResult:
    """
    Produce `request.count` passwords, one at a time.

    Before item i: report progress, pause for the configured delay, then
    poll `on_cancel_check`. A cancelled run stops without emitting item i;
    items already emitted stay as they are. `on_item(i, password)` is
    called once per produced password with a 1-based index.
    """
    if rng is None:
        rng = random.Random(request.seed)
    delay = request.delay_ms / 1000.0
    produced: list[str] = []

    logger.debug(
        "Starting run: count=%d length=%d alphabet_size=%d delay_ms=%d",
        request.count,
        request.length,
        len(request.alphabet),
        request.delay_ms,
    )

    for index in range(1, request.count + 1):
        if on_progress is not None:
            on_progress(index, request.count)
        if delay > 0:
            sleep(delay)
        if on_cancel_check():
            logger.info("Run cancelled after %d of %d passwords", len(produced), request.count)
            return GenerationResult(tuple(produced), GenerationStatus.CANCELLED)

        password = make_password(request.alphabet, request.length, rng)
        produced.append(password)
        on_item(index, password)

    logger.debug("Run completed: %d passwords", len(produced))
    return GenerationResult(tuple(produced), GenerationStatus.COMPLETED)


class PasswordSampler:
    """
    Binds one request to a RunContext, for callers running it on a worker.
    """

    def __init__(self, request: GenerationRequest, context: RunContext | None = None) -> None:
        self.request = request
        self.context = context or RunContext()

    def cancel(self) -> None:
        self.context.cancel()

    def run(
        self,
        on_item: ItemCallback | None = None,
        on_progress: ProgressCallback | None = None,
        rng: random.Random | None = None,
    ) -> GenerationResult:
        try:
            return generate(
                self.request,
                on_item or (lambda _index, _password: None),
                lambda: self.context.cancelled,
                on_progress=on_progress,
                sleep=self.context.wait,
                rng=rng,
            )
        finally:
            self.context.mark_finished()


def generate_passwords(
    alphabet_text: str = DEFAULT_ALPHABET,
    length: int | str = 10,
    count: int | str = 5,
    delay_ms: int | str = 0,
    seed: int | None = None,
) -> list[str]:
    """
    High-level function: validate the input and return all passwords.
    """
    request = validate(alphabet_text, length, count, delay_ms, seed=seed)
    return list(PasswordSampler(request).run().passwords)
