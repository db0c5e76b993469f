"""Command-line front end: parse a board given on the command line, solve it, and print the framed grid (or a JSON report), optionally saving a PNG rendering."""

# solve_cli.py
# Usage:
#   python -m apps.cli.solve_cli '[[".",".","9","7","4","8",".",".","."],...]' simple
#   python -m apps.cli.solve_cli 53..7....6..195....98....6.8...6...34..8..6...2...3.6....28....419..5....8..79 --json
#
# Exit codes: 0 solved, 1 invalid board or config, 2 stuck, 3 contradiction.

import argparse
import json
import logging
import sys

import yaml

from sudoku_engine.board import parse_board
from sudoku_engine.config import load_config
from sudoku_engine.display import print_state
from sudoku_engine.errors import Contradiction, InvalidBoard, Stuck
from sudoku_engine.solver import Solver, solve_tool

from .board_renderer import render_png

EXIT_CODES = {"solved": 0, "invalid": 1, "stuck": 2, "contradiction": 3}


def build_parser():
    ap = argparse.ArgumentParser(prog="sudoku-solve", description="Solve a 9x9 Sudoku by propagation and single-cell forks.")
    ap.add_argument("board", help="bracketed list, 81-character string, or 9 lines of 9 characters")
    ap.add_argument("format", nargs="?", choices=["simple", "verbose"], default=None,
                    help="how to print the final state (default from config: verbose)")
    ap.add_argument("--config", type=str, default=None, help="YAML config file")
    ap.add_argument("--max-fork-depth", type=int, default=None)
    ap.add_argument("--json", action="store_true", help="print a JSON report instead of the framed grid")
    ap.add_argument("--png", type=str, default=None, help="also render the final state to this PNG path")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging (every placement and fork)")
    return ap


def main(args) -> int:
    simple = None if args.format is None else args.format == "simple"
    try:
        cfg = load_config(
            args.config,
            max_fork_depth=args.max_fork_depth,
            simple_output=simple,
            log_level="DEBUG" if args.verbose else None,
        )
    except (OSError, ValueError, yaml.YAMLError) as ex:
        print(f"Invalid configuration: {ex}", file=sys.stderr)
        return EXIT_CODES["invalid"]
    logging.basicConfig(level=cfg.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    board = parse_board(args.board)

    if args.json:
        payload = solve_tool(board, config=cfg)
        print(json.dumps(payload, indent=2))
        return EXIT_CODES[payload["status"]]

    try:
        solver = Solver(board, config=cfg)
    except InvalidBoard as ex:
        print(f"Invalid board: {ex}", file=sys.stderr)
        return EXIT_CODES["invalid"]

    print("Input:")
    print_state(solver.state, simple=True)
    print(f"Unknown elements: {solver.unknown_count()} ({solver.unknown_percent():g}%)")
    print("Working on a solution...")
    try:
        solver.solve()
        print("Solution:")
        code = EXIT_CODES["solved"]
    except Stuck as ex:
        print(f"The solver stopped with this error: {ex}")
        code = EXIT_CODES["stuck"]
    except Contradiction as ex:
        print(f"The solver stopped with this error: {ex}")
        code = EXIT_CODES["contradiction"]
    print_state(solver.state, simple=cfg.simple_output)

    if args.png:
        render_png(solver.state, args.png, moves=solver.moves)
        print(f"Saved {args.png}")
    return code


def cli():
    sys.exit(main(build_parser().parse_args()))


if __name__ == "__main__":
    cli()
