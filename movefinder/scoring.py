"""Scoring of candidate moves under letter/word multipliers and the bingo bonus."""

from __future__ import annotations

from typing import TYPE_CHECKING

from movefinder.board import Board, step_of
from movefinder.config import Rules
from movefinder.move import Move, PlacedTile

if TYPE_CHECKING:
    from movefinder.dawg import DictionaryIndex
    from movefinder.wildcards import WildcardPolicy


class ScoreCalculator:
    """Scores moves against the board they would be played on.

    Premiums count only for squares the move covers for the first time; a
    premium under a new tile applies to every word that tile belongs to.
    Wildcards are worth 0 wherever they are.
    """

    def __init__(self, rules: Rules | None = None):
        self.rules = rules or Rules()

    def cell_value(self, cell: str) -> int:
        """Face value of a tile already on the board."""
        return 0 if cell.islower() else self.rules.letter_value(cell)

    def tile_value(self, tile: PlacedTile) -> int:
        return 0 if tile.is_wildcard else self.rules.letter_value(tile.letter)

    def is_bingo(self, move: Move) -> bool:
        return len(move.tiles_used) == self.rules.rack_capacity

    def score(self, board: Board, move: Move) -> int:
        dr, dc = step_of(move.direction)
        pr, pc = dc, dr  # perpendicular

        main_score = 0
        word_mult = 1
        total_cross = 0

        for tile in move.tiles:
            letter_val = self.tile_value(tile)
            if not tile.from_rack:
                # Existing tile on board -- no bonus
                main_score += letter_val
                continue

            lm = board.letter_multiplier(tile.row, tile.col)
            wm = board.word_multiplier(tile.row, tile.col)
            main_score += letter_val * lm
            word_mult *= wm

            before = board.run(tile.row, tile.col, -pr, -pc)
            after = board.run(tile.row, tile.col, pr, pc)
            if before or after:
                cross = sum(self.cell_value(c) for c in before) + letter_val * lm
                cross += sum(self.cell_value(c) for c in after)
                total_cross += cross * wm

        total = main_score * word_mult + total_cross
        if self.is_bingo(move):
            total += self.rules.bingo_bonus
        return total

    def cross_words(
        self,
        board: Board,
        move: Move,
        dictionary: DictionaryIndex,
        policy: WildcardPolicy,
    ) -> list[str]:
        """Perpendicular words formed by the move's new tiles."""
        words: list[str] = []
        for tile in move.tiles_used:
            before, after = board.perpendicular_run(tile.row, tile.col, move.direction)
            if not before and not after:
                continue
            word = policy.resolve_word(dictionary, before + [tile.letter] + after)
            if tile.is_wildcard and policy.multi_meaning and word not in dictionary:
                # the blank reads as another letter across
                word = policy.resolve_word(dictionary, before + [tile.letter.lower()] + after)
            words.append(word)
        return words

    def evaluate(
        self,
        board: Board,
        move: Move,
        dictionary: DictionaryIndex,
        policy: WildcardPolicy,
    ) -> Move:
        """Fill in the move's score, bingo flag and cross words."""
        move.score = self.score(board, move)
        move.is_bingo = self.is_bingo(move)
        move.cross_words = self.cross_words(board, move, dictionary, policy)
        return move
