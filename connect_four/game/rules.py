"""
rules.py - Game session management for Connect Four

ConnectFourGame owns one Board and turns a column choice into a complete
turn: find the landing row, place the piece, hand the turn over. A column
that is out of range or full is rejected before anything changes, so the
same player can simply choose again.
"""

from typing import Iterable, List, Optional

from connect_four.debug import debug
from connect_four.errors import ColumnFull, ContractViolation
from connect_four.game.board import Board
from connect_four.utils import Pawn, Move, GlyphSet, PLAIN_GLYPHS


class ConnectFourGame:
    """
    High-level Connect Four game manager.

    The board is passed in or created here and is owned by this session
    for the rest of the game.
    """

    def __init__(self, board: Optional[Board] = None):
        """Initialize a new Connect Four game."""
        debug.debug("Initializing ConnectFourGame", "game")
        self.board = board if board is not None else Board()

    def reset(self) -> None:
        """Reset the game to initial state."""
        debug.debug("Resetting game", "game")
        self.board.reset()

    def drop(self, column: int) -> Move:
        """
        Drop the current player's piece into ``column``.

        Args:
            column: Column to place a piece (0-indexed)

        Returns:
            The move that was made

        Raises:
            OutOfRangeColumn: If the column does not exist
            ColumnFull: If the column has no empty cell
            ContractViolation: If the game is already over
        """
        debug.debug(f"Game: {self.board.current_player.label} drops in column {column}", "game")

        if self.board.is_over():
            raise ContractViolation(f"Cannot drop in column {column}: the game is over", col=column)

        row = self.board.lowest_empty_row(column)
        if row is None:
            raise ColumnFull(column)

        move = self.board.place(row, column)
        self.board.switch_turn()
        return move

    def replay(self, columns: Iterable[int]) -> List[Move]:
        """
        Drop pieces into ``columns`` one after another.

        Stops at the first column that raises; the moves made before it
        stay on the board.

        Returns:
            The moves made, in order
        """
        return [self.drop(column) for column in columns]

    def is_game_over(self) -> bool:
        return self.board.is_over()

    def get_winner(self) -> Optional[Pawn]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or draw
        """
        return self.board.winner

    def get_current_player(self) -> Pawn:
        return self.board.current_player

    def get_valid_moves(self) -> List[int]:
        return self.board.valid_columns()

    def render(self, glyphs: GlyphSet = PLAIN_GLYPHS) -> str:
        """
        Render the game as a string.

        Returns:
            String representation of the board
        """
        return self.board.render(glyphs)
