import pytest

from movefinder.board import Board
from movefinder.dawg import DictionaryIndex
from movefinder.engine import MoveEngine

WORDS = [
    "AT", "TA", "AS", "SO", "TO", "OS",
    "CAT", "CATS", "COT", "CUT", "BAT", "BATS", "TAB", "TABS",
    "ACT", "ACTS", "SCAT", "OAT", "OATS", "STOA", "TACO", "TACOS",
    "COAST", "COATS", "COSTA", "TACT",
]


def _rows(size):
    return [["."] * size for _ in range(size)]


def board_with(placements, size=15):
    """Board holding each (row, col, word, direction) of *placements*."""
    rows = _rows(size)
    for r, c, word, d in placements:
        for i, ch in enumerate(word):
            rr, cc = (r, c + i) if d == "H" else (r + i, c)
            rows[rr][cc] = ch
    return Board.from_string("\n".join("".join(row) for row in rows))


@pytest.fixture
def make_board():
    return board_with


@pytest.fixture
def words():
    return list(WORDS)


@pytest.fixture
def dictionary():
    return DictionaryIndex.from_words(WORDS)


@pytest.fixture
def engine(dictionary):
    return MoveEngine(dictionary)


@pytest.fixture
def word_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("\n".join(WORDS + ["a", "x-ray", "don't", ""]) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def board_file(tmp_path):
    path = tmp_path / "board.txt"
    path.write_text("\n".join("." * 15 for _ in range(15)) + "\n", encoding="utf-8")
    return path
