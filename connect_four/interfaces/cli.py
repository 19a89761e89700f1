"""
cli.py - Command-line interface for Connect Four

This module provides the terminal session loop for two players sharing a
keyboard, a command that replays a list of columns and prints the
result, and a small benchmark of the engine.
"""

import argparse
import os
import random
import sys
from typing import List, Optional, Sequence

from connect_four.debug import debug, DebugLevel
from connect_four.errors import ColumnFull, InvalidInputFormat, OutOfRangeColumn
from connect_four.game.board import Board
from connect_four.game.rules import ConnectFourGame
from connect_four.utils import GLYPH_SETS, GlyphSet, Move, PLAIN_GLYPHS

QUIT_COMMANDS = ('q', 'quit', 'exit')


def parse_column(raw: str) -> int:
    """
    Turn raw user input into a column index.

    Only the text is checked here; whether the column exists is left to
    the board.

    Raises:
        InvalidInputFormat: If the trimmed text is not an integer
    """
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        raise InvalidInputFormat(text) from None


def format_move_history(moves: Sequence[Move]) -> str:
    """One ``ply:Player@column`` entry per move, separated by spaces."""
    return " ".join(f"{ply}:{move.player.label}@{move.col}"
                    for ply, move in enumerate(moves, start=1))


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not an integer") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def clear_screen() -> None:
    os.system('cls' if os.name == 'nt' else 'clear')


class SimpleCLI:
    """Simple command-line interface for Connect Four."""

    def __init__(self, game: Optional[ConnectFourGame] = None):
        """Initialize the CLI with the game session it drives."""
        self.game = game if game is not None else ConnectFourGame()
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument('--debug', action='store_true', help='Enable debug logging')
        common.add_argument('--log-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level (ignored with --debug)')
        common.add_argument('--log-file', default=None, help='Also write the log to this file')

        parser = argparse.ArgumentParser(description='Connect Four CLI')
        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', parents=[common],
                                            help='Play a two-player game in the terminal')
        play_parser.add_argument('--glyphs', choices=sorted(GLYPH_SETS), default='emoji',
                                 help='How pieces are drawn')
        play_parser.add_argument('--no-clear', dest='clear', action='store_false',
                                 help='Do not clear the screen between turns')

        replay_parser = subparsers.add_parser('replay', parents=[common],
                                              help='Play a list of columns and show the result')
        replay_parser.add_argument('--moves', required=True,
                                   help='Comma-separated columns, e.g. 3,3,4,2')
        replay_parser.add_argument('--glyphs', choices=sorted(GLYPH_SETS), default='plain',
                                   help='How pieces are drawn')

        benchmark_parser = subparsers.add_parser('benchmark', parents=[common],
                                                 help='Benchmark performance')
        benchmark_parser.add_argument('--iterations', type=positive_int, default=1000,
                                      help='Number of iterations for benchmarking')

        self.args = parser.parse_args(argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        elif getattr(self.args, 'log_level', None):
            debug.set_from_string(self.args.log_level)
        if getattr(self.args, 'log_file', None):
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Run the CLI based on the parsed arguments.

        Returns:
            Process exit status
        """
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'replay':
            return self.replay_moves()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def show(self, glyphs: GlyphSet, message: Optional[str] = None) -> None:
        if self.args.clear:
            clear_screen()
        print(self.game.render(glyphs))
        if message:
            print(message)

    def play_game(self) -> None:
        """Play a Connect Four game between two people at one keyboard."""
        glyphs = GLYPH_SETS[self.args.glyphs]
        last_col = self.game.board.cols - 1
        message = f"Enter a column number (0-{last_col}), or 'q' to quit."

        while not self.game.is_game_over():
            self.show(glyphs, message)
            player = self.game.get_current_player()

            try:
                raw = input(f"{player.label} to move: ")
            except EOFError:
                print("\nQuitting game.")
                return

            if raw.strip().lower() in QUIT_COMMANDS:
                print("Quitting game.")
                return

            try:
                move = self.game.drop(parse_column(raw))
            except (InvalidInputFormat, OutOfRangeColumn, ColumnFull) as e:
                debug.debug(f"Rejected input {raw!r}: {e}", "cli")
                message = f"{e}. Try again."
                continue

            message = f"{move.player.label} played column {move.col}."

        self.show(glyphs)
        print(self.game_over_message())

    def game_over_message(self) -> str:
        winner = self.game.get_winner()
        if winner is not None:
            return f"Game over! {winner.label} wins!"
        return "Game over! It's a draw!"

    def replay_moves(self) -> int:
        """Replay the columns given with --moves and print the final position."""
        glyphs = GLYPH_SETS[self.args.glyphs]

        try:
            columns = [parse_column(raw) for raw in self.args.moves.split(',')]
        except InvalidInputFormat as e:
            print(f"Error parsing moves: {e}")
            return 1

        self.game.reset()
        status = 0
        for index, column in enumerate(columns):
            if self.game.is_game_over():
                print(f"Game ended after {index} moves; ignoring {len(columns) - index} more.")
                break
            try:
                self.game.drop(column)
            except (OutOfRangeColumn, ColumnFull) as e:
                print(f"Move {index + 1} rejected: {e}")
                status = 1
                break

        print(self.game.render(glyphs))
        print(f"Moves: {format_move_history(self.game.board.moves)}")
        if self.game.is_game_over():
            print(self.game_over_message())
            line = self.game.board.winning_line()
            if line:
                print(f"Winning line: {line}")
        else:
            print(f"{self.game.get_current_player().label} to move.")
        return status

    def benchmark(self) -> None:
        """Benchmark the performance of the Connect Four implementation."""
        iterations = self.args.iterations
        print(f"Running benchmark with {iterations} iterations...")

        debug.start_timer("board_init")
        for _ in range(iterations):
            Board()
        board_init_time = debug.end_timer("board_init")
        print(f"Board initialization: {board_init_time:.6f} seconds total, "
              f"{board_init_time/iterations*1000:.6f} ms per board")

        debug.start_timer("game_simulation")
        games_played = 0
        total_moves = 0
        for _ in range(max(1, iterations // 10)):  # Fewer iterations for full games
            game = ConnectFourGame()
            while not game.is_game_over():
                game.drop(random.choice(game.get_valid_moves()))
                total_moves += 1
            games_played += 1
        simulation_time = debug.end_timer("game_simulation")
        print(f"Played {games_played} games with {total_moves} total moves: "
              f"{simulation_time:.6f} seconds total, "
              f"{simulation_time/games_played*1000:.6f} ms per game, "
              f"{simulation_time/total_moves*1000:.6f} ms per move")

        board = Board()
        debug.start_timer("rendering")
        for _ in range(iterations):
            board.render(PLAIN_GLYPHS)
        rendering_time = debug.end_timer("rendering")
        print(f"Rendering board {iterations} times: {rendering_time:.6f} seconds total, "
              f"{rendering_time/iterations*1000:.6f} ms per render")


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    sys.exit(cli.run(argv))


if __name__ == "__main__":
    main()
