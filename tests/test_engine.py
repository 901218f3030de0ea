import logging
from collections import Counter

import pytest

from movefinder.board import Board
from movefinder.config import Rules
from movefinder.dawg import DictionaryIndex
from movefinder.engine import MoveEngine
from movefinder.rack import Rack

CENTER = (7, 7)


def keys(moves):
    return {(m.word, m.row, m.col, m.direction) for m in moves}


def covers(move, square):
    return any((t.row, t.col) == square for t in move.tiles)


class TestScenarios:
    def test_empty_board_single_word(self):
        engine = MoveEngine(DictionaryIndex.from_words(["cat", "at", "ta"]))
        moves = engine.generate(Board.empty(), "cat")
        assert {m.word for m in moves if len(m.word) == 3} == {"CAT"}
        best = moves[0]
        assert best.word == "CAT"
        assert best.score == (3 + 1 + 1) * 2
        assert all(covers(m, CENTER) for m in moves)
        assert {m.direction for m in moves} == {"H", "V"}

    def test_rack_wildcard_resolves_to_each_letter(self):
        engine = MoveEngine(DictionaryIndex.from_words(["cat", "cot", "cut"]))
        moves = engine.generate(Board.empty(), "C?T")
        assert {m.word for m in moves} == {"CAT", "COT", "CUT"}
        for m in moves:
            assert len(m.blank_positions) == 1
            blank = next(t for t in m.tiles if t.is_wildcard)
            assert blank.letter == m.word[1]
            assert m.score == (3 + 0 + 1) * 2
            assert covers(m, CENTER)

    def test_board_wildcard_read_per_word(self):
        board = Board.from_string("\n".join(
            "." * 15 if r != 7 else "." * 7 + "a" + "." * 7 for r in range(15)
        ))
        index = DictionaryIndex.from_words(["CAT", "COT", "DOG"])

        fixed = MoveEngine(index).generate(board, "CT")
        assert keys(fixed) == {("CAT", 7, 6, "H"), ("CAT", 6, 7, "V")}

        multi = MoveEngine(index, Rules(wildcards_have_multi_meaning=True)).generate(board, "CT")
        assert keys(multi) == {
            ("CAT", 7, 6, "H"), ("COT", 7, 6, "H"),
            ("CAT", 6, 7, "V"), ("COT", 6, 7, "V"),
        }
        cot = next(m for m in multi if m.word == "COT" and m.direction == "H")
        middle = cot.tiles[1]
        assert (middle.letter, middle.from_rack, middle.is_wildcard) == ("O", False, True)
        # the board wildcard is worth nothing and its premium is spent
        assert all(m.score == 4 for m in multi)

    def test_no_moves_on_full_board(self):
        board = Board.from_string("\n".join(["CATSO"] * 5))
        engine = MoveEngine(DictionaryIndex.from_words(["CAT", "AT"]))
        assert engine.generate(board, "A") == []

    def test_rack_wildcard_reads_differently_across(self):
        board = Board.from_string("\n".join(
            "." * 15 if r != 6 else "." * 8 + "A" + "." * 6 for r in range(15)
        ))
        index = DictionaryIndex.from_words(["AT", "BA"])

        fixed = MoveEngine(index).generate(board, "B?")
        assert ("BA", 7, 7, "H") not in keys(fixed)

        multi = MoveEngine(index, Rules(wildcards_have_multi_meaning=True)).generate(board, "B?")
        ba = next(m for m in multi if (m.word, m.row, m.col, m.direction) == ("BA", 7, 7, "H"))
        assert ba.cross_words == ["AT"]
        # B doubled on the center square, plus AT with a zero-point blank
        assert ba.score == 3 * 2 + 1


class TestSearch:
    def test_extends_through_board_tiles(self, make_board):
        board = make_board([(7, 9, "S", "H")])
        engine = MoveEngine(DictionaryIndex.from_words(["CAT", "CATS"]))
        moves = engine.generate(board, "CAT")
        assert [m.as_tuple() for m in moves] == [
            ("CATS", (7, 6), "H", 12),
            ("CATS", (4, 9), "V", 8),
        ]

    def test_left_part_from_wildcard(self, make_board):
        board = make_board([(7, 7, "AT", "H")])
        engine = MoveEngine(DictionaryIndex.from_words(["CAT", "AT"]))
        moves = engine.generate(board, "?")
        cat = next(m for m in moves if m.word == "CAT")
        assert cat.as_tuple() == ("CAT", (7, 6), "H", 2)
        assert cat.blank_positions == {(7, 6)}
        assert cat.pattern() == "*"

    def test_single_tile_reported_once(self):
        board = Board.from_string("\n".join([".....", "..A..", ".A...", ".....", "....."]))
        engine = MoveEngine(DictionaryIndex.from_words(["AT", "TA"]))
        moves = engine.generate(board, "T")
        squares = [(m.tiles_used[0].row, m.tiles_used[0].col) for m in moves]
        assert len(squares) == len(set(squares))
        # T at (2, 2) spells AT across and AT down
        at = [m for m in moves if covers(m, (2, 2))]
        assert [m.as_tuple() for m in at] == [("AT", (2, 1), "H", 4)]
        assert at[0].cross_words == ["AT"]
        # T at (1, 1) spells TA both ways too
        ta = [m for m in moves if covers(m, (1, 1))]
        assert [m.as_tuple() for m in ta] == [("TA", (1, 1), "H", 4)]

    def test_empty_rack(self, engine, make_board):
        board = make_board([(7, 6, "CAT", "H")])
        assert engine.generate(board, "") == []
        assert engine.generate(board, Rack()) == []

    def test_no_playable_word(self, engine):
        assert engine.generate(Board.empty(), "ZZQ") == []

    def test_top_n(self, dictionary):
        engine = MoveEngine(dictionary)
        moves = engine.generate(Board.empty(), "TACOS")
        best = engine.find_best_moves(Board.empty(), "TACOS", top_n=3)
        assert [m.as_tuple() for m in best] == [m.as_tuple() for m in moves[:3]]
        limited = MoveEngine(dictionary, Rules(top_n=1))
        assert len(limited.find_best_moves(Board.empty(), "TACOS")) == 1

    def test_logs_search_size(self, engine, caplog):
        caplog.set_level(logging.DEBUG, logger="movefinder.engine")
        engine.generate(Board.empty(), "CAT")
        assert any("anchor jobs" in r.message for r in caplog.records)


class TestProperties:
    RACK = "TACOS?A"

    @pytest.fixture
    def board(self, make_board):
        return make_board([(7, 5, "COAST", "H"), (6, 7, "OATS", "V")])

    @pytest.fixture
    def moves(self, engine, board):
        return engine.generate(board, self.RACK)

    def test_finds_moves(self, moves):
        assert moves

    def test_words_are_valid(self, moves, dictionary):
        for m in moves:
            assert m.word in dictionary
            for w in m.cross_words:
                assert w in dictionary, (m, w)

    def test_rack_is_conserved(self, moves):
        rack = Counter(self.RACK.replace("?", ""))
        for m in moves:
            used = Counter(t.letter for t in m.tiles_used if not t.is_wildcard)
            assert not used - rack, m
            assert len(m.blank_positions) <= self.RACK.count("?")
            assert m.tiles_used

    def test_board_after_move_is_consistent(self, moves, board, dictionary):
        for m in moves:
            after = board.apply(m)
            dr, dc = (0, 1) if m.direction == "H" else (1, 0)
            # the main word is delimited on both ends
            assert after.is_empty(m.row - dr, m.col - dc)
            end = m.tiles[-1]
            assert after.is_empty(end.row + dr, end.col + dc)
            assert "".join(after.get(t.row, t.col).upper() for t in m.tiles) == m.word
            for t in m.tiles_used:
                before, rest = after.perpendicular_run(t.row, t.col, m.direction)
                if before or rest:
                    word = "".join(c.upper() for c in before + [after.get(t.row, t.col)] + rest)
                    assert word in dictionary, (m, word)

    def test_sorted_and_deduplicated(self, moves):
        assert moves == sorted(moves, key=lambda m: m.sort_key())
        assert len(keys(moves)) == len(moves)

    def test_deterministic(self, engine, board, moves):
        again = engine.generate(board, self.RACK)
        assert [m.as_tuple() for m in again] == [m.as_tuple() for m in moves]

    def test_workers_agree(self, dictionary, board, moves):
        parallel = MoveEngine(dictionary, workers=4).generate(board, self.RACK)
        assert [m.as_tuple() for m in parallel] == [m.as_tuple() for m in moves]

    def test_empty_board_moves_cover_center(self, engine):
        moves = engine.generate(Board.empty(), self.RACK)
        assert moves
        assert all(covers(m, CENTER) for m in moves)
