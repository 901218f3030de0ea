import pytest

from movefinder.cli import format_move, format_position, main, print_moves
from movefinder.config import Settings
from movefinder.dictionary import load_dictionary
from movefinder.move import Move, PlacedTile


def test_format_position():
    assert format_position(7, 7).strip() == "H-8"
    assert format_position(0, 14).strip() == "O-1"
    assert format_position(0, 14, "digit_letter").strip() == "15-A"


def test_format_move_marks_board_squares_and_blanks():
    move = Move("CATS", 7, 6, "H", [
        PlacedTile(7, 6, "C", True, False),
        PlacedTile(7, 7, "A", False, False),
        PlacedTile(7, 8, "T", True, True),
        PlacedTile(7, 9, "S", False, False),
    ])
    assert format_move(move) == " G-8  →, C_*"
    vertical = Move("AT", 3, 2, "V", [PlacedTile(3, 2, "A", True, False), PlacedTile(4, 2, "T", True, False)])
    assert format_move(vertical, "digit_letter") == " 3-D  ↓, AT"


def _moves(*scores):
    return [
        Move("AT", 7, 7 + i, "H", [PlacedTile(7, 7 + i, "A", True, False)], score=s)
        for i, s in enumerate(scores)
    ]


def test_equal_scores_are_grouped(capsys):
    print_moves(_moves(5, 5, 3), Settings())
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("  5: ")
    assert lines[1].startswith("     ")
    assert lines[2].startswith("  3: ")


def test_show_each_score(capsys):
    print_moves(_moves(5, 5), Settings(show_each_score=True))
    lines = capsys.readouterr().out.splitlines()
    assert all(line.startswith("  5: ") for line in lines)


def test_solve(word_file, board_file, capsys):
    code = main(["solve", "-d", str(word_file), "-b", str(board_file), "-t", "TACOS", "-n", "3"])
    out = capsys.readouterr().out.splitlines()
    assert code == 0
    assert len(out) == 3
    # C on the double letter square at H-4
    assert "COAST" in out[0]


def test_solve_from_settings_file(tmp_path, word_file, board_file, capsys):
    settings = tmp_path / "settings.yaml"
    settings.write_text(
        f"dictionary: {word_file}\n"
        f"board: {{file: {board_file}}}\n"
        "tray: CAT\n"
        "n_shown: 1\n",
        encoding="utf-8",
    )
    assert main(["solve", "-c", str(settings), "--workers", "2"]) == 0
    out = capsys.readouterr().out
    assert "ACT" in out


def test_settings_wildcard_marker(tmp_path, word_file, board_file, capsys):
    settings = tmp_path / "settings.yaml"
    settings.write_text(
        f"dictionary: {word_file}\n"
        f"board: {{file: {board_file}}}\n"
        "tray: \"CA*\"\n"
        "wildcard: \"*\"\n",
        encoding="utf-8",
    )
    assert main(["solve", "-c", str(settings)]) == 0
    assert "*" in capsys.readouterr().out


def test_no_moves_exit_code(word_file, board_file, capsys):
    assert main(["solve", "-d", str(word_file), "-b", str(board_file), "-t", "ZZ"]) == 1
    assert "No valid moves" in capsys.readouterr().out


@pytest.mark.parametrize("extra", [
    ["-t", "AB1"],
    ["-t", "ABCDEFGHI"],
])
def test_bad_tray(word_file, board_file, extra):
    assert main(["solve", "-d", str(word_file), "-b", str(board_file)] + extra) == 2


def test_missing_inputs(word_file):
    assert main(["solve", "-d", str(word_file)]) == 2


def test_missing_dictionary(tmp_path, board_file):
    assert main(["solve", "-d", str(tmp_path / "nope.txt"), "-b", str(board_file), "-t", "A"]) == 2


def test_bad_board(tmp_path, word_file):
    board = tmp_path / "board.txt"
    board.write_text("..\n.\n", encoding="utf-8")
    assert main(["solve", "-d", str(word_file), "-b", str(board), "-t", "A"]) == 2


def test_compile(word_file, tmp_path):
    out = tmp_path / "words.dawg"
    assert main(["compile", "-i", str(word_file), "-o", str(out), "-v"]) == 0
    assert "TACOS" in load_dictionary(str(out))


def test_compile_missing_input(tmp_path):
    assert main(["compile", "-i", str(tmp_path / "none.txt"), "-o", str(tmp_path / "x.dawg")]) == 2
