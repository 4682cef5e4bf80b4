"""
Random password generator package.
"""

from .alphabet import Alphabet, decode_alphabet
from .config import RandomPassConfig, DEFAULT_CONFIG, DEFAULT_ALPHABET
from .errors import (
    RandomPassError,
    ValidationError,
    InvalidAlphabet,
    InvalidLength,
    InvalidCount,
    InvalidDelay,
    WriteFailure,
)
from .sampler import (
    GenerationRequest,
    GenerationResult,
    GenerationStatus,
    PasswordSampler,
    RunContext,
    generate,
    generate_passwords,
    validate,
)

__all__ = [
    "Alphabet",
    "decode_alphabet",
    "RandomPassConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_ALPHABET",
    "RandomPassError",
    "ValidationError",
    "InvalidAlphabet",
    "InvalidLength",
    "InvalidCount",
    "InvalidDelay",
    "WriteFailure",
    "GenerationRequest",
    "GenerationResult",
    "GenerationStatus",
    "PasswordSampler",
    "RunContext",
    "generate",
    "generate_passwords",
    "validate",
]
