"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class: the grid, the player to move,
the win/draw flags and the append-only move log. Placement is split in
two steps, ``lowest_empty_row`` then ``place``, and the turn only moves
on when the caller calls ``switch_turn``.
"""

from typing import Iterator, List, Optional, Tuple

import numpy as np

from connect_four.debug import debug
from connect_four.errors import ContractViolation, OutOfRangeColumn
from connect_four.utils import (ROWS, COLS, CONNECT_N, Pawn, GameResult, Move,
                                GlyphSet, PLAIN_GLYPHS, find_line_through,
                                is_valid_position, render_board)


class Board:
    """
    Represents a Connect Four game board.

    The grid is only ever changed by ``place``. After every placement the
    ``connected`` and ``draw`` flags are recomputed from the new piece;
    once either is set the board accepts no more pieces.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS):
        """
        Initialize an empty board with RED to move.

        Args:
            rows: Number of rows
            cols: Number of columns
        """
        if min(rows, cols) < CONNECT_N:
            raise ValueError(f"Board must be at least {CONNECT_N}x{CONNECT_N}, got {rows}x{cols}")

        debug.debug(f"Initializing new {rows}x{cols} Board", "board")
        self.rows = rows
        self.cols = cols
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        self.grid = np.full((self.rows, self.cols), Pawn.EMPTY.value, dtype=np.int8)
        self._moves: List[Move] = []
        self.current_player = Pawn.RED
        self.connected = False
        self.draw = False

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        new_board = Board(self.rows, self.cols)
        new_board.grid = self.grid.copy()
        new_board._moves = list(self._moves)
        new_board.current_player = self.current_player
        new_board.connected = self.connected
        new_board.draw = self.draw
        return new_board

    @property
    def moves(self) -> Tuple[Move, ...]:
        """The move log, oldest first."""
        return tuple(self._moves)

    @property
    def last_move(self) -> Optional[Move]:
        return self._moves[-1] if self._moves else None

    @property
    def result(self) -> GameResult:
        if self.connected:
            return GameResult.WIN
        if self.draw:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    @property
    def winner(self) -> Optional[Pawn]:
        """The player who made the last move, if that move connected four."""
        if not self.connected:
            return None
        return self._moves[-1].player

    def cell(self, row: int, col: int) -> Pawn:
        return Pawn(int(self.grid[row, col]))

    def rows_top_down(self) -> Iterator[Tuple[Pawn, ...]]:
        """Yield rows from top to bottom, each cell from left to right."""
        for row in self.grid:
            yield tuple(Pawn(int(value)) for value in row)

    def lowest_empty_row(self, col: int) -> Optional[int]:
        """
        Find the row a piece dropped in ``col`` would land on.

        Args:
            col: The column to drop into (0-indexed)

        Returns:
            The lowest empty row, or None if the column is full

        Raises:
            OutOfRangeColumn: If ``col`` is not a column of this board
        """
        if not (0 <= col < self.cols):
            debug.debug(f"Column {col} out of bounds", "board")
            raise OutOfRangeColumn(col, self.cols)

        for row in range(self.rows - 1, -1, -1):
            if self.grid[row, col] == Pawn.EMPTY.value:
                return row
        return None

    def valid_columns(self) -> List[int]:
        """
        Get the columns that can still take a piece.

        Returns:
            List of column indices, empty once the game is over
        """
        if self.is_over():
            return []
        return [col for col in range(self.cols) if self.grid[0, col] == Pawn.EMPTY.value]

    def place(self, row: int, col: int) -> Move:
        """
        Put the current player's piece at (row, col).

        The turn is not switched; call ``switch_turn`` afterwards.

        Args:
            row: Row index, normally from ``lowest_empty_row``
            col: Column index

        Returns:
            The move appended to the log

        Raises:
            ContractViolation: If the game is over, the position is off the
                board, or the cell is already taken
        """
        if self.is_over():
            raise ContractViolation(f"Cannot place at ({row}, {col}): the game is over", row, col)
        if not is_valid_position(row, col, self.rows, self.cols):
            raise ContractViolation(f"Position ({row}, {col}) is off the board", row, col)
        if self.grid[row, col] != Pawn.EMPTY.value:
            raise ContractViolation(f"Cell ({row}, {col}) is already taken", row, col)

        debug.trace(f"Placing {self.current_player.label} at ({row}, {col})", "board")
        self.grid[row, col] = self.current_player.value
        move = Move(self.current_player, row, col)
        self._moves.append(move)

        debug.start_timer("win_check")
        self.connected = self.is_connected(row, col)
        self.draw = self.is_full() and not self.connected
        debug.end_timer("win_check", "board")

        if self.connected:
            debug.info(f"{move.player.label} wins after move at ({row}, {col})", "board")
        elif self.draw:
            debug.info("Game ends in a draw", "board")

        return move

    def switch_turn(self) -> Pawn:
        """Hand the turn to the other player and return the new player."""
        self.current_player = self.current_player.other()
        debug.debug(f"Switching to player {self.current_player.label}", "board")
        return self.current_player

    def is_connected(self, row: int, col: int) -> bool:
        """
        Check whether the piece at (row, col) is part of a line of four.

        Each of the four axis families through the cell is extracted edge
        to edge and searched with a sliding window.

        Returns:
            True if there is a win through this cell, False otherwise
        """
        return bool(find_line_through(self.grid, row, col, CONNECT_N))

    def is_full(self) -> bool:
        """True when no empty cell remains."""
        return not np.any(self.grid == Pawn.EMPTY.value)

    def is_over(self) -> bool:
        return self.connected or self.draw

    def winning_line(self) -> List[Tuple[int, int]]:
        """
        Get the positions of the winning line if the game is won.

        Returns:
            List of (row, col) positions, or an empty list if there is no win
        """
        if not self.connected:
            return []

        last = self._moves[-1]
        return find_line_through(self.grid, last.row, last.col, CONNECT_N)

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Copy of the grid holding Pawn values
        """
        return self.grid.copy()

    def render(self, glyphs: GlyphSet = PLAIN_GLYPHS) -> str:
        return render_board(self.rows_top_down(), glyphs)

    def __str__(self) -> str:
        return self.render()
