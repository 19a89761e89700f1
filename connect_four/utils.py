"""
utils.py - Constants, enumerations and helpers shared by the Connect Four package

This module holds the board dimensions, the cell/player enumeration, the
axis families used by the win check, the line extraction and sliding-window
matching that implement the win check, and the glyph tables used to draw
a board in the terminal.
"""

from enum import Enum, auto
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win


class Pawn(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    RED = 1    # Moves first
    BLUE = 2

    def other(self) -> 'Pawn':
        """Get the other player. EMPTY has no opponent and stays EMPTY."""
        if self == Pawn.RED:
            return Pawn.BLUE
        elif self == Pawn.BLUE:
            return Pawn.RED
        return Pawn.EMPTY

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def __str__(self):
        return PLAIN_GLYPHS.tokens[self]


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS


class Direction(Enum):
    """The four axis families a line of pieces can follow."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN = auto()  # "\" from top-left to bottom-right
    DIAGONAL_UP = auto()    # "/" from bottom-left to top-right


# Direction vectors (row, col) for each direction
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN: (1, 1),
    Direction.DIAGONAL_UP: (-1, 1),
}


class Move(NamedTuple):
    """One entry of the move log."""
    player: Pawn
    row: int
    col: int


def is_valid_position(row: int, col: int, rows: int = ROWS, cols: int = COLS) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index
        rows: Number of rows on the board
        cols: Number of columns on the board

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < rows and 0 <= col < cols


def extract_line(rows: int, cols: int, row: int, col: int,
                 direction: Direction) -> List[Tuple[int, int]]:
    """
    Get every position on the line through (row, col) along ``direction``.

    The line runs edge to edge and is clipped to the board, so it never
    wraps around or leaves the grid.

    Args:
        rows: Number of rows on the board
        cols: Number of columns on the board
        row: Row index of the anchor
        col: Column index of the anchor
        direction: Axis family to follow

    Returns:
        Positions ordered along the direction vector, anchor included
    """
    dr, dc = DIRECTION_VECTORS[direction]

    # Back up to the edge of the board
    r, c = row, col
    while is_valid_position(r - dr, c - dc, rows, cols):
        r -= dr
        c -= dc

    line = []
    while is_valid_position(r, c, rows, cols):
        line.append((r, c))
        r += dr
        c += dc
    return line


def find_window(values: Sequence[int], target: int, length: int = CONNECT_N) -> Optional[int]:
    """
    Slide a window of ``length`` cells along ``values``.

    Returns:
        Start index of the first window made only of ``target``,
        or None if there is none
    """
    values = np.asarray(values)
    if len(values) < length:
        return None

    windows = sliding_window_view(values, length)
    matches = np.flatnonzero(np.all(windows == target, axis=1))
    if matches.size == 0:
        return None
    return int(matches[0])


def find_line_through(grid: np.ndarray, row: int, col: int,
                      length: int = CONNECT_N) -> List[Tuple[int, int]]:
    """
    Find a run of ``length`` pieces through (row, col) of that cell's color.

    Args:
        grid: The game board
        row: Row index of the anchor
        col: Column index of the anchor
        length: Required run length

    Returns:
        Positions of the first matching window, or an empty list
    """
    player_value = grid[row, col]
    if player_value == Pawn.EMPTY.value:
        return []

    rows, cols = grid.shape
    for direction in Direction:
        line = extract_line(rows, cols, row, col, direction)
        line_rows, line_cols = zip(*line)
        start = find_window(grid[list(line_rows), list(line_cols)], player_value, length)
        if start is not None:
            return line[start:start + length]

    return []


def check_win_at_position(grid: np.ndarray, row: int, col: int,
                          length: int = CONNECT_N) -> bool:
    """Check if the piece at (row, col) is part of a winning line."""
    return bool(find_line_through(grid, row, col, length))


def find_connection(grid: np.ndarray, length: int = CONNECT_N) -> Optional[Pawn]:
    """
    Scan the whole board for any winning line.

    Slower than anchoring the check at the last move; the result is the
    reference the incremental check is measured against.

    Returns:
        The color owning the first line found, or None
    """
    rows, cols = grid.shape
    for row in range(rows):
        for col in range(cols):
            if check_win_at_position(grid, row, col, length):
                return Pawn(int(grid[row, col]))
    return None


class GlyphSet(NamedTuple):
    """Display token for each cell value, with the terminal width of a token."""
    tokens: Dict[Pawn, str]
    width: int = 1


# ANSI color codes for terminal output
ANSI_RED = "\033[91m"
ANSI_BLUE = "\033[94m"
ANSI_DIM = "\033[2m"
ANSI_RESET = "\033[0m"

PLAIN_GLYPHS = GlyphSet({Pawn.EMPTY: ".", Pawn.RED: "X", Pawn.BLUE: "O"})

COLOR_GLYPHS = GlyphSet({
    Pawn.EMPTY: f"{ANSI_DIM}o{ANSI_RESET}",
    Pawn.RED: f"{ANSI_RED}●{ANSI_RESET}",
    Pawn.BLUE: f"{ANSI_BLUE}●{ANSI_RESET}",
})

EMOJI_GLYPHS = GlyphSet({
    Pawn.EMPTY: "\u26aa",
    Pawn.RED: "\U0001f534",
    Pawn.BLUE: "\U0001f535",
}, width=2)

GLYPH_SETS = {
    'plain': PLAIN_GLYPHS,
    'color': COLOR_GLYPHS,
    'emoji': EMOJI_GLYPHS,
}


def render_board(rows: Iterable[Sequence[Pawn]], glyphs: GlyphSet = PLAIN_GLYPHS) -> str:
    """
    Render board rows, given top to bottom, as text.

    Args:
        rows: Rows of cell values, top row first
        glyphs: Token table used for the cells

    Returns:
        Bordered board with column numbers underneath
    """
    rows = [list(row) for row in rows]
    cols = len(rows[0]) if rows else 0
    border = "|" + "-" * (cols * (glyphs.width + 1) - 1) + "|"

    result = [border]
    for row in rows:
        result.append("|" + " ".join(glyphs.tokens[pawn] for pawn in row) + "|")
    result.append(border)
    result.append("|" + " ".join(str(i).ljust(glyphs.width) for i in range(cols)) + "|")

    return "\n".join(result)
