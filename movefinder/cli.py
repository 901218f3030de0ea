"""Command-line entry point: ``movefinder solve`` and ``movefinder compile``."""

from __future__ import annotations

import argparse
import logging
import time

from movefinder.board import Board
from movefinder.config import Settings, load_settings
from movefinder.dictionary import compile_dictionary, load_dictionary
from movefinder.engine import MoveEngine
from movefinder.errors import ConfigError, MoveFinderError
from movefinder.move import Move

log = logging.getLogger("movefinder")

EXIT_FOUND = 0
EXIT_NONE = 1
EXIT_INPUT_ERROR = 2


def format_position(row: int, col: int, position_format: str = "letter_digit") -> str:
    """``H-8`` style (column letter, row number) or ``8-H`` (column number, row letter)."""
    if position_format == "digit_letter":
        return f"{col + 1:>2}-{chr(ord('A') + row):<2}"
    return f"{chr(ord('A') + col):>2}-{row + 1:<2}"


def format_move(move: Move, position_format: str = "letter_digit") -> str:
    first = move.first_placed
    arrow = "→" if move.direction == "H" else "↓"
    return f"{format_position(first.row, first.col, position_format)} {arrow}, {move.pattern()}"


def print_moves(moves: list[Move], settings: Settings) -> None:
    last_score = None
    for m in moves:
        if not settings.show_each_score and m.score == last_score:
            prefix = " " * 5
        else:
            last_score = m.score
            prefix = f"{m.score:>3}: "
        extra = f"  ({', '.join(m.cross_words)})" if m.cross_words else ""
        bingo = "  +BINGO!" if m.is_bingo else ""
        print(f"{prefix}{format_move(m, settings.position_format):<23} {m.word}{extra}{bingo}")


def _read_board(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as exc:
        raise ConfigError(f"cannot read board file {path}: {exc}") from exc


def _settings_for(args: argparse.Namespace) -> Settings:
    """Settings file values, overridden by whatever flags were given."""
    settings = load_settings(args.config) if args.config else Settings()
    if args.dict:
        settings.dictionary = args.dict
    if args.board:
        settings.board = _read_board(args.board)
    if args.tray:
        settings.tray = args.tray
    if args.n is not None:
        settings.n_shown = args.n
    if args.multi_meaning:
        settings.wildcards_have_multi_meaning = True
    if args.workers is not None:
        settings.workers = args.workers

    missing = [name for name in ("dictionary", "board", "tray") if getattr(settings, name) is None]
    if missing:
        raise ConfigError(f"missing {', '.join(missing)} (give a flag or a settings file)")
    return settings


def run_solve(args: argparse.Namespace) -> int:
    settings = _settings_for(args)
    rules = settings.rules()
    dictionary = load_dictionary(settings.dictionary)
    board = Board.from_string(settings.board)
    engine = MoveEngine(dictionary, rules, workers=settings.workers)

    t0 = time.perf_counter()
    moves = engine.find_best_moves(board, settings.tray)
    log.info("Search took %.2fs", time.perf_counter() - t0)

    if not moves:
        print("No valid moves found.")
        return EXIT_NONE
    print_moves(moves, settings)
    return EXIT_FOUND


def run_compile(args: argparse.Namespace) -> int:
    try:
        compile_dictionary(args.input, args.output)
    except OSError as exc:
        log.error("cannot write %s: %s", args.output, exc)
        return EXIT_INPUT_ERROR
    return EXIT_FOUND


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="movefinder",
        description="Finds the highest-scoring moves for a board and a rack",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug-level logging")
    sub = parser.add_subparsers(dest="command", required=True)

    solve = sub.add_parser("solve", parents=[common],
                           help="List the best moves for a position")
    solve.add_argument("--config", "-c", type=str, default=None,
                       help="YAML settings file")
    solve.add_argument("--dict", "-d", type=str, default=None,
                       help="Word list (.txt) or compiled dictionary (.dawg)")
    solve.add_argument("--board", "-b", type=str, default=None,
                       help="Board file, one line per row")
    solve.add_argument("--tray", "-t", type=str, default=None,
                       help="Rack letters, ? for a wildcard")
    solve.add_argument("-n", type=int, default=None,
                       help="Number of moves to show")
    solve.add_argument("--multi-meaning", action="store_true",
                       help="Wildcards may read as different letters across and down")
    solve.add_argument("--workers", type=int, default=None,
                       help="Search threads")
    solve.set_defaults(func=run_solve)

    comp = sub.add_parser("compile", parents=[common],
                          help="Compile a word list into a .dawg file")
    comp.add_argument("--input", "-i", type=str, required=True,
                      help="Word list, one word per line")
    comp.add_argument("--output", "-o", type=str, required=True,
                      help="Compiled dictionary to write")
    comp.set_defaults(func=run_compile)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        return args.func(args)
    except MoveFinderError as exc:
        log.error("%s", exc)
        return EXIT_INPUT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
