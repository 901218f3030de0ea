"""Move finder for Scrabble-like word games."""

from movefinder.constants import BOARD_SIZE, CENTER, BONUS_GRID, BINGO_BONUS, SCRABBLE_VALUES, WWF_VALUES
from movefinder.errors import (
    ConfigError,
    DictionaryLoadError,
    InvalidBoardError,
    InvalidRackError,
    MoveFinderError,
    RackExhaustedError,
)
from movefinder.dawg import DictionaryIndex
from movefinder.dictionary import compile_dictionary, load_dictionary
from movefinder.board import Board
from movefinder.rack import Rack
from movefinder.move import Move, PlacedTile
from movefinder.config import Rules, Settings, load_settings
from movefinder.wildcards import FIXED, MULTI_MEANING, policy_for
from movefinder.scoring import ScoreCalculator
from movefinder.engine import MoveEngine

__all__ = [
    "BOARD_SIZE",
    "CENTER",
    "BONUS_GRID",
    "BINGO_BONUS",
    "SCRABBLE_VALUES",
    "WWF_VALUES",
    "Board",
    "ConfigError",
    "DictionaryIndex",
    "DictionaryLoadError",
    "FIXED",
    "InvalidBoardError",
    "InvalidRackError",
    "MULTI_MEANING",
    "Move",
    "MoveEngine",
    "MoveFinderError",
    "PlacedTile",
    "Rack",
    "RackExhaustedError",
    "Rules",
    "ScoreCalculator",
    "Settings",
    "compile_dictionary",
    "load_dictionary",
    "load_settings",
    "policy_for",
]
