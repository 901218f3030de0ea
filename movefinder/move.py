"""Move representation."""

from __future__ import annotations

from typing import NamedTuple


class PlacedTile(NamedTuple):
    """One square of a move's main word."""

    row: int
    col: int
    letter: str
    from_rack: bool  # False for a tile already on the board
    is_wildcard: bool


class Move:
    """A candidate placement: one contiguous word in one direction."""

    __slots__ = ("word", "row", "col", "direction", "tiles", "score", "cross_words", "is_bingo")

    def __init__(
        self,
        word: str,
        row: int,
        col: int,
        direction: str,
        tiles: list[PlacedTile],
        score: int = 0,
        cross_words: list[str] | None = None,
        is_bingo: bool = False,
    ):
        self.word = word
        self.row = row
        self.col = col
        self.direction = direction  # 'H' or 'V'
        self.tiles = tiles  # every square of the word, in order
        self.score = score
        self.cross_words = cross_words or []
        self.is_bingo = is_bingo

    @property
    def key(self) -> tuple[str, int, int, str]:
        """Identity used to drop duplicates found from different anchors.

        A lone rack tile forms words both ways, so it is keyed by its square.
        """
        used = self.tiles_used
        if len(used) == 1:
            t = used[0]
            return ("1", t.row, t.col, t.letter)
        return (self.direction, self.row, self.col, self.word)

    @property
    def tiles_used(self) -> list[PlacedTile]:
        """Tiles that come from the rack."""
        return [t for t in self.tiles if t.from_rack]

    @property
    def blank_positions(self) -> set[tuple[int, int]]:
        return {(t.row, t.col) for t in self.tiles if t.from_rack and t.is_wildcard}

    def sort_key(self) -> tuple:
        """Best score first, then word, position and direction."""
        return (-self.score, self.word, self.row, self.col, self.direction)

    def as_tuple(self) -> tuple[str, tuple[int, int], str, int]:
        return (self.word, (self.row, self.col), self.direction, self.score)

    def pattern(self, wildcard: str = "*") -> str:
        """Tiles placed, '_' for squares already on the board, *wildcard* for blanks."""
        return "".join(
            (wildcard if t.is_wildcard else t.letter) if t.from_rack else "_"
            for t in self.tiles
        ).strip("_")

    @property
    def first_placed(self) -> PlacedTile:
        """First tile taken from the rack (where a player starts laying tiles)."""
        return next(t for t in self.tiles if t.from_rack)

    def __repr__(self) -> str:
        bingo = " +BINGO!" if self.is_bingo else ""
        arrow = "→" if self.direction == "H" else "↓"
        return f"{self.word} at ({self.row},{self.col}) {arrow} = {self.score} pts{bingo}"
