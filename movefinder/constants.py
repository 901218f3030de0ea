"""Game constants: board geometry, tile values and the premium layout."""

from __future__ import annotations

import string

BOARD_SIZE = 15
CENTER = 7  # 0-indexed center square

ALPHABET: frozenset[str] = frozenset(string.ascii_uppercase)

WILDCARD = "?"  # tray character for one blank tile
RACK_CAPACITY = 7
MIN_WORD_LENGTH = 2  # shortest word a list entry or a move may spell
BINGO_BONUS = 50  # bonus for playing a full rack in one turn

# Classic English Scrabble tile values
SCRABBLE_VALUES: dict[str, int] = {
    'A': 1, 'B': 3, 'C': 3, 'D': 2, 'E': 1, 'F': 4, 'G': 2,
    'H': 4, 'I': 1, 'J': 8, 'K': 5, 'L': 1, 'M': 3, 'N': 1,
    'O': 1, 'P': 3, 'Q': 10, 'R': 1, 'S': 1, 'T': 1, 'U': 1,
    'V': 4, 'W': 4, 'X': 8, 'Y': 4, 'Z': 10,
}

# Words With Friends tile values
WWF_VALUES: dict[str, int] = {
    'A': 1, 'B': 4, 'C': 4, 'D': 2, 'E': 1, 'F': 4, 'G': 3,
    'H': 3, 'I': 1, 'J': 10, 'K': 5, 'L': 2, 'M': 4, 'N': 2,
    'O': 1, 'P': 4, 'Q': 10, 'R': 1, 'S': 1, 'T': 1, 'U': 2,
    'V': 5, 'W': 4, 'X': 8, 'Y': 3, 'Z': 10,
}

LETTER_SCORINGS: dict[str, dict[str, int]] = {
    "scrabble": SCRABBLE_VALUES,
    "wwf": WWF_VALUES,
}

# Premium square codes -> (letter multiplier, word multiplier)
PREMIUM_CODES: dict[str, tuple[int, int]] = {
    ".": (1, 1),
    "DL": (2, 1),
    "TL": (3, 1),
    "DW": (1, 2),
    "TW": (1, 3),
}

# Standard Scrabble layout; the center star is a double word square.
# fmt: off
BONUS_GRID: list[list[str]] = [
    ["TW", ".",  ".",  "DL", ".",  ".",  ".",  "TW", ".",  ".",  ".",  "DL", ".",  ".",  "TW"],
    [".",  "DW", ".",  ".",  ".",  "TL", ".",  ".",  ".",  "TL", ".",  ".",  ".",  "DW", "." ],
    [".",  ".",  "DW", ".",  ".",  ".",  "DL", ".",  "DL", ".",  ".",  ".",  "DW", ".",  "." ],
    ["DL", ".",  ".",  "DW", ".",  ".",  ".",  "DL", ".",  ".",  ".",  "DW", ".",  ".",  "DL"],
    [".",  ".",  ".",  ".",  "DW", ".",  ".",  ".",  ".",  ".",  "DW", ".",  ".",  ".",  "." ],
    [".",  "TL", ".",  ".",  ".",  "TL", ".",  ".",  ".",  "TL", ".",  ".",  ".",  "TL", "." ],
    [".",  ".",  "DL", ".",  ".",  ".",  "DL", ".",  "DL", ".",  ".",  ".",  "DL", ".",  "." ],
    ["TW", ".",  ".",  "DL", ".",  ".",  ".",  "DW", ".",  ".",  ".",  "DL", ".",  ".",  "TW"],
    [".",  ".",  "DL", ".",  ".",  ".",  "DL", ".",  "DL", ".",  ".",  ".",  "DL", ".",  "." ],
    [".",  "TL", ".",  ".",  ".",  "TL", ".",  ".",  ".",  "TL", ".",  ".",  ".",  "TL", "." ],
    [".",  ".",  ".",  ".",  "DW", ".",  ".",  ".",  ".",  ".",  "DW", ".",  ".",  ".",  "." ],
    ["DL", ".",  ".",  "DW", ".",  ".",  ".",  "DL", ".",  ".",  ".",  "DW", ".",  ".",  "DL"],
    [".",  ".",  "DW", ".",  ".",  ".",  "DL", ".",  "DL", ".",  ".",  ".",  "DW", ".",  "." ],
    [".",  "DW", ".",  ".",  ".",  "TL", ".",  ".",  ".",  "TL", ".",  ".",  ".",  "DW", "." ],
    ["TW", ".",  ".",  "DL", ".",  ".",  ".",  "TW", ".",  ".",  ".",  "DL", ".",  ".",  "TW"],
]
# fmt: on
