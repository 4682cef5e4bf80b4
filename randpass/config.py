"""
Configuration for the random password generator.
"""

from __future__ import annotations

from dataclasses import dataclass

PROGRAM_TITLE = "Generate Random Passwords"

# Letters and digits that most people can tell apart when written on paper.
DEFAULT_ALPHABET = "2346789ADEFHJLMNRTVWXYabcdeghknprstuz"

# Inclusive bounds, shared by the command line and the GUI.
LENGTH_LOWER = 1
LENGTH_UPPER = 100
COUNT_LOWER = 1
COUNT_UPPER = 500
DELAY_LOWER = 0
DELAY_UPPER = 5000
FONT_SIZE_LOWER = 10
FONT_SIZE_UPPER = 99

# Suggested values for the editable combo boxes.
LENGTH_CHOICES = ("2", "4", "6", "8", "10", "12", "15", "20")
COUNT_CHOICES = ("1", "2", "5", "10", "20", "50", "100", "200")
FONT_SIZES = ("12", "14", "16", "18", "20", "24", "30", "36")

# Status line refresh while a run is in progress.
STATUS_INTERVAL_MS = 1000


@dataclass
class RandomPassConfig:
    # Characters to draw from. Repeats make a character more likely.
    alphabet: str = DEFAULT_ALPHABET

    # Display characters per password.
    password_length: int = 10

    # Passwords per run (GUI initial value when launched without a count).
    password_count: int = 5

    # Pause before each password. Purely cosmetic pacing.
    delay_ms: int = 250

    # Output area font. None picks the platform's fixed-width font.
    font_name: str | None = None
    font_size: int = 16

    # Initial window (left, top, width, height). Negative size = packed default.
    window: tuple[int, int, int, int] = (50, 50, -1, -1)
    maximize: bool = False


# Default configuration instance you can import elsewhere
DEFAULT_CONFIG = RandomPassConfig()
