"""Game board: tiles, premium squares, anchors and cross-checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from movefinder.constants import ALPHABET, BOARD_SIZE, BONUS_GRID, PREMIUM_CODES
from movefinder.errors import InvalidBoardError

if TYPE_CHECKING:
    from movefinder.dawg import DictionaryIndex
    from movefinder.move import Move
    from movefinder.wildcards import WildcardPolicy

EMPTY_SYMBOLS = frozenset("._ ")
DIRECTIONS = ("H", "V")


def step_of(direction: str) -> tuple[int, int]:
    """(row step, col step) along *direction*."""
    return (0, 1) if direction == "H" else (1, 0)


def premiums_from_codes(codes: list[list[str]]) -> tuple[np.ndarray, np.ndarray]:
    """Letter and word multiplier grids from a grid of ``TW/DW/TL/DL/.`` codes."""
    try:
        pairs = [[PREMIUM_CODES[code] for code in row] for row in codes]
        grid = np.array(pairs, dtype=np.int8)
    except (KeyError, ValueError) as exc:
        raise InvalidBoardError(f"bad premium layout: {exc}") from exc
    if grid.ndim != 3 or grid.shape[0] != grid.shape[1]:
        raise InvalidBoardError("premium layout must be a square grid")
    return grid[:, :, 0], grid[:, :, 1]


def default_premiums(size: int) -> tuple[np.ndarray, np.ndarray]:
    """Standard layout on a 15x15 board, no premiums on any other size."""
    if size == BOARD_SIZE:
        return premiums_from_codes(BONUS_GRID)
    ones = np.ones((size, size), dtype=np.int8)
    return ones, ones.copy()


class Board:
    """Square game board snapshot.

    Cells are None (empty), 'A'-'Z' (tile), or lowercase 'a'-'z' (wildcard
    tile standing for that letter). The move engine only reads boards; use
    :meth:`apply` to get the board after a move.
    """

    def __init__(
        self,
        cells: list[list[str | None]] | None = None,
        letter_multipliers: np.ndarray | None = None,
        word_multipliers: np.ndarray | None = None,
    ):
        if cells is None:
            cells = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        size = len(cells)
        if size == 0 or any(len(row) != size for row in cells):
            raise InvalidBoardError("board must be a non-empty square grid")
        for r, row in enumerate(cells):
            for c, cell in enumerate(row):
                if cell is not None and not (len(cell) == 1 and cell.isascii() and cell.isalpha()):
                    raise InvalidBoardError(f"unknown cell symbol {cell!r} at ({r},{c})")
        self.cells: list[list[str | None]] = [list(row) for row in cells]
        self.size = size

        if letter_multipliers is None or word_multipliers is None:
            letter_multipliers, word_multipliers = default_premiums(size)
        self.letter_multipliers = np.asarray(letter_multipliers, dtype=np.int8)
        self.word_multipliers = np.asarray(word_multipliers, dtype=np.int8)
        for grid in (self.letter_multipliers, self.word_multipliers):
            if grid.shape != (size, size):
                raise InvalidBoardError(
                    f"premium grid shape {grid.shape} does not match a {size}x{size} board"
                )

    # construction

    @classmethod
    def empty(cls, size: int = BOARD_SIZE) -> Board:
        return cls([[None] * size for _ in range(size)])

    @classmethod
    def from_string(
        cls,
        text: str,
        letter_multipliers: np.ndarray | None = None,
        word_multipliers: np.ndarray | None = None,
    ) -> Board:
        """One line per row: '.', '_' or ' ' empty, A-Z tile, a-z wildcard tile."""
        rows = text.splitlines()
        while rows and rows[-1] == "":
            rows.pop()
        if not rows:
            raise InvalidBoardError("board text is empty")
        cells: list[list[str | None]] = []
        for r, line in enumerate(rows):
            if len(line) != len(rows):
                raise InvalidBoardError(
                    f"row {r} has {len(line)} squares, expected {len(rows)}"
                )
            row: list[str | None] = []
            for c, ch in enumerate(line):
                if ch in EMPTY_SYMBOLS:
                    row.append(None)
                elif ch.isascii() and ch.isalpha():
                    row.append(ch)
                else:
                    raise InvalidBoardError(f"unknown board symbol {ch!r} at ({r},{c})")
            cells.append(row)
        return cls(cells, letter_multipliers, word_multipliers)

    def transposed(self) -> Board:
        """The same snapshot with rows and columns swapped."""
        cells = [list(col) for col in zip(*self.cells)]
        return Board(cells, self.letter_multipliers.T, self.word_multipliers.T)

    def apply(self, move: Move) -> Board:
        """New board with *move* played (wildcards stored lower-case)."""
        cells = [row[:] for row in self.cells]
        for tile in move.tiles:
            if tile.from_rack:
                cells[tile.row][tile.col] = tile.letter.lower() if tile.is_wildcard else tile.letter
        return Board(cells, self.letter_multipliers, self.word_multipliers)

    # cell access

    @property
    def center(self) -> tuple[int, int]:
        return self.size // 2, self.size // 2

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> str | None:
        """Letter at (row, col), or None."""
        if self.in_bounds(row, col):
            return self.cells[row][col]
        return None

    def is_empty(self, row: int, col: int) -> bool:
        """True if no tile at (row, col)."""
        return self.get(row, col) is None

    def is_occupied(self, row: int, col: int) -> bool:
        """True if there's a tile at (row, col)."""
        return not self.is_empty(row, col)

    def is_wildcard(self, row: int, col: int) -> bool:
        cell = self.get(row, col)
        return cell is not None and cell.islower()

    def is_board_empty(self) -> bool:
        """True if no tiles on the board."""
        return all(cell is None for row in self.cells for cell in row)

    def count_tiles(self) -> int:
        """Number of tiles on the board."""
        return sum(1 for row in self.cells for cell in row if cell is not None)

    def letter_multiplier(self, row: int, col: int) -> int:
        return int(self.letter_multipliers[row, col])

    def word_multiplier(self, row: int, col: int) -> int:
        return int(self.word_multipliers[row, col])

    def run(self, row: int, col: int, dr: int, dc: int) -> list[str]:
        """Consecutive tiles starting one step from (row, col) in direction (dr, dc)."""
        cells: list[str] = []
        r, c = row + dr, col + dc
        while self.in_bounds(r, c) and self.cells[r][c] is not None:
            cells.append(self.cells[r][c])
            r += dr
            c += dc
        return cells

    # analysis

    def anchors(self, direction: str = "H") -> set[tuple[int, int]]:
        """Empty squares touching a tile; the center square on an empty board.

        Orthogonal adjacency is the same in both directions, so *direction*
        only documents which search the anchors are meant for.
        """
        if self.is_board_empty():
            return {self.center}
        anchors: set[tuple[int, int]] = set()
        for r in range(self.size):
            for c in range(self.size):
                if self.cells[r][c] is not None:
                    continue
                for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
                    if self.is_occupied(r + dr, c + dc):
                        anchors.add((r, c))
                        break
        return anchors

    def max_left_extension(
        self,
        row: int,
        col: int,
        direction: str = "H",
        anchors: set[tuple[int, int]] | None = None,
    ) -> int:
        """Free squares before an anchor (left for 'H', above for 'V').

        Counting stops at the edge, at a tile, or at another anchor.
        """
        if anchors is None:
            anchors = self.anchors(direction)
        dr, dc = step_of(direction)
        count = 0
        r, c = row - dr, col - dc
        while self.in_bounds(r, c) and self.cells[r][c] is None and (r, c) not in anchors:
            count += 1
            r -= dr
            c -= dc
        return count

    def perpendicular_run(
        self, row: int, col: int, direction: str
    ) -> tuple[list[str], list[str]]:
        """Tiles before and after (row, col) across *direction*."""
        dr, dc = step_of(direction)
        pr, pc = dc, dr  # perpendicular
        before = self.run(row, col, -pr, -pc)
        before.reverse()
        after = self.run(row, col, pr, pc)
        return before, after

    def cross_check_set(
        self,
        row: int,
        col: int,
        direction: str,
        dictionary: DictionaryIndex,
        policy: WildcardPolicy,
    ) -> frozenset[str]:
        """Letters playable at an empty square without breaking the perpendicular word."""
        before, after = self.perpendicular_run(row, col, direction)
        if not before and not after:
            return ALPHABET
        return policy.cross_check(dictionary, before, after)

    def cross_checks(
        self,
        direction: str,
        dictionary: DictionaryIndex,
        policy: WildcardPolicy,
    ) -> dict[tuple[int, int], frozenset[str]]:
        """Cross-check sets of every empty square, for one search direction."""
        checks: dict[tuple[int, int], frozenset[str]] = {}
        seen: dict[tuple[tuple[str, ...], tuple[str, ...]], frozenset[str]] = {}
        for r in range(self.size):
            for c in range(self.size):
                if self.cells[r][c] is not None:
                    continue
                before, after = self.perpendicular_run(r, c, direction)
                if not before and not after:
                    checks[(r, c)] = ALPHABET
                    continue
                key = (tuple(before), tuple(after))
                allowed = seen.get(key)
                if allowed is None:
                    allowed = seen[key] = policy.cross_check(dictionary, before, after)
                checks[(r, c)] = allowed
        return checks

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.cells == other.cells
            and np.array_equal(self.letter_multipliers, other.letter_multipliers)
            and np.array_equal(self.word_multipliers, other.word_multipliers)
        )

    def __str__(self) -> str:
        header = "    " + " ".join(f"{c:>2}" for c in range(self.size))
        sep = "   " + "---" * self.size
        lines = [header, sep]
        for r in range(self.size):
            parts = [f"{r:>2} |"]
            for c in range(self.size):
                val = self.cells[r][c]
                if val:
                    parts.append(f" {val} ")
                else:
                    lm, wm = self.letter_multiplier(r, c), self.word_multiplier(r, c)
                    if wm > 1:
                        parts.append(f" {wm}W")
                    elif lm > 1:
                        parts.append(f" {lm}L")
                    else:
                        parts.append(" . ")
            lines.append("".join(parts))
        return "\n".join(lines)

    def to_string(self) -> str:
        """Inverse of :meth:`from_string` (empty squares as '.')."""
        return "\n".join("".join(cell or "." for cell in row) for row in self.cells)
