"""Move engine: anchor-based generation with automaton pruning.

Moves are searched left to right along rows (Appel-Jacobson). Vertical moves
are found by running the same row search over the transposed board and
swapping coordinates back.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from movefinder.board import DIRECTIONS, Board
from movefinder.config import Rules
from movefinder.constants import MIN_WORD_LENGTH
from movefinder.dawg import DictionaryIndex
from movefinder.move import Move, PlacedTile
from movefinder.rack import Rack
from movefinder.scoring import ScoreCalculator
from movefinder.wildcards import WildcardPolicy, policy_for

log = logging.getLogger("movefinder.engine")


class _RowSearch:
    """Row-wise search over one board view.

    Holds only data derived from the snapshot (anchors, cross-checks), so a
    single instance can serve several workers, each with its own rack.
    """

    def __init__(self, view: Board, dictionary: DictionaryIndex, policy: WildcardPolicy):
        self.view = view
        self.cells = view.cells
        self.size = view.size
        self.dict = dictionary
        self.policy = policy
        self.anchors = view.anchors("H")
        self.cross = view.cross_checks("H", dictionary, policy)

    def run(self, anchor: tuple[int, int], rack: Rack) -> list[list[PlacedTile]]:
        """Every placement whose leftmost new tile is at or before *anchor* and covers it."""
        row, col = anchor
        found: list[list[PlacedTile]] = []

        if col > 0 and self.cells[row][col - 1] is not None:
            # Tiles already left of the anchor form a fixed prefix
            start = col
            while start > 0 and self.cells[row][start - 1] is not None:
                start -= 1
            self._board_prefix(row, start, col, [], self.dict.start_state(), rack, found)
        else:
            limit = self.view.max_left_extension(row, col, "H", self.anchors)
            self._left_part(row, col, [], self.dict.start_state(), limit, rack, found)
        return found

    def _board_prefix(
        self,
        row: int,
        c: int,
        anchor_col: int,
        placed: list[PlacedTile],
        state: int,
        rack: Rack,
        found: list[list[PlacedTile]],
    ) -> None:
        if c == anchor_col:
            self._extend_right(row, c, anchor_col, placed, state, rack, found)
            return
        cell = self.cells[row][c]
        for letter, child in self.policy.through_board_tile(self.dict, state, cell):
            placed.append(PlacedTile(row, c, letter, False, cell.islower()))
            self._board_prefix(row, c + 1, anchor_col, placed, child, rack, found)
            placed.pop()

    def _left_part(
        self,
        row: int,
        anchor_col: int,
        part: list[tuple[str, bool]],
        state: int,
        limit: int,
        rack: Rack,
        found: list[list[PlacedTile]],
    ) -> None:
        """Grow rack tiles leftwards of the anchor, one length at a time.

        Left-part squares touch no tile, so any letter the automaton accepts
        may go there.
        """
        start = anchor_col - len(part)
        placed = [
            PlacedTile(row, start + i, letter, True, is_wild)
            for i, (letter, is_wild) in enumerate(part)
        ]
        self._extend_right(row, anchor_col, anchor_col, placed, state, rack, found)
        if limit == 0:
            return

        for letter, child in self.dict.children(state).items():
            if rack.available(letter) > 0:
                with rack.holding(letter):
                    part.append((letter, False))
                    self._left_part(row, anchor_col, part, child, limit - 1, rack, found)
                    part.pop()
            if rack.wildcards > 0:
                with rack.holding(letter, wildcard=True):
                    part.append((letter, True))
                    self._left_part(row, anchor_col, part, child, limit - 1, rack, found)
                    part.pop()

    def _extend_right(
        self,
        row: int,
        col: int,
        anchor_col: int,
        placed: list[PlacedTile],
        state: int,
        rack: Rack,
        found: list[list[PlacedTile]],
    ) -> None:
        if col >= self.size or self.cells[row][col] is None:
            # The word ends here if nothing on the board continues it
            if (
                col > anchor_col
                and len(placed) >= MIN_WORD_LENGTH
                and self.dict.is_terminal(state)
            ):
                found.append(list(placed))
            if col >= self.size:
                return

            cross = self.cross[(row, col)]
            if not cross:
                return
            for letter, child in self.dict.children(state).items():
                if letter in cross and rack.available(letter) > 0:
                    with rack.holding(letter):
                        placed.append(PlacedTile(row, col, letter, True, False))
                        self._extend_right(row, col + 1, anchor_col, placed, child, rack, found)
                        placed.pop()
                if rack.wildcards > 0 and self.policy.wildcard_fits(letter, cross):
                    with rack.holding(letter, wildcard=True):
                        placed.append(PlacedTile(row, col, letter, True, True))
                        self._extend_right(row, col + 1, anchor_col, placed, child, rack, found)
                        placed.pop()
        else:
            cell = self.cells[row][col]
            for letter, child in self.policy.through_board_tile(self.dict, state, cell):
                placed.append(PlacedTile(row, col, letter, False, cell.islower()))
                self._extend_right(row, col + 1, anchor_col, placed, child, rack, found)
                placed.pop()


def _to_move(tiles: list[PlacedTile], direction: str) -> Move:
    if direction == "V":
        tiles = [t._replace(row=t.col, col=t.row) for t in tiles]
    word = "".join(t.letter for t in tiles)
    return Move(word, tiles[0].row, tiles[0].col, direction, tiles)


def _variant_rank(move: Move) -> tuple:
    """Among duplicates of one play, prefer the best score and fewest blanks; H wins ties."""
    blanks = sorted(move.blank_positions)
    return (-move.score, len(blanks), blanks, move.direction)


class MoveEngine:
    """Finds legal moves using anchor-based generation with automaton pruning
    (Appel-Jacobson)."""

    def __init__(
        self,
        dictionary: DictionaryIndex,
        rules: Rules | None = None,
        workers: int = 1,
    ):
        self.dict = dictionary
        self.rules = rules or Rules()
        self.policy = policy_for(self.rules.wildcards_have_multi_meaning)
        self.scorer = ScoreCalculator(self.rules)
        self.workers = max(1, workers)

    # public API

    def find_best_moves(
        self, board: Board, rack: Rack | str, top_n: int | None = None
    ) -> list[Move]:
        """Top N highest-scoring legal moves (all of them if N is None)."""
        moves = self.generate(board, rack)
        if top_n is None:
            top_n = self.rules.top_n
        return moves if top_n is None else moves[:top_n]

    def generate(self, board: Board, rack: Rack | str) -> list[Move]:
        """Every distinct legal move, scored and sorted best first."""
        if isinstance(rack, str):
            rack = Rack.from_string(rack, self.rules.rack_capacity, self.rules.wildcard)
        if rack.total == 0:
            return []

        jobs: list[tuple[str, _RowSearch, tuple[int, int]]] = []
        for direction in DIRECTIONS:
            view = board if direction == "H" else board.transposed()
            search = _RowSearch(view, self.dict, self.policy)
            jobs.extend((direction, search, anchor) for anchor in sorted(search.anchors))
        log.debug("Searching %d anchor jobs with rack %s", len(jobs), rack)

        def run_job(job: tuple[str, _RowSearch, tuple[int, int]]) -> list[Move]:
            direction, search, anchor = job
            return [_to_move(tiles, direction) for tiles in search.run(anchor, rack.copy())]

        if self.workers > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                batches = list(pool.map(run_job, jobs))
        else:
            batches = [run_job(job) for job in jobs]

        best: dict[tuple[str, int, int, str], Move] = {}
        total = 0
        for batch in batches:
            for move in batch:
                total += 1
                self.scorer.evaluate(board, move, self.dict, self.policy)
                kept = best.get(move.key)
                if kept is None or _variant_rank(move) < _variant_rank(kept):
                    best[move.key] = move

        moves = sorted(best.values(), key=Move.sort_key)
        log.debug("Found %d placements, %d distinct", total, len(moves))
        return moves
