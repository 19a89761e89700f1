"""
errors.py - Exceptions raised by the Connect Four engine and session

OutOfRangeColumn, ColumnFull and InvalidInputFormat are recoverable: the
session loop reports them and asks again. ContractViolation means the
caller broke a precondition of Board.place and is never caught.
"""

from typing import Optional


class ConnectFourError(Exception):
    """Base class for every error raised by this package."""


class OutOfRangeColumn(ConnectFourError, ValueError):
    """A column index outside [0, cols)."""

    def __init__(self, column: int, cols: int):
        self.column = column
        self.cols = cols
        super().__init__(f"Column {column} is out of range (0-{cols - 1})")


class ColumnFull(ConnectFourError):
    """The requested column has no empty cell left."""

    def __init__(self, column: int):
        self.column = column
        super().__init__(f"Column {column} is full")


class InvalidInputFormat(ConnectFourError, ValueError):
    """Raw user input that does not parse as a column number."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"'{raw}' is not a column number")


class ContractViolation(ConnectFourError, RuntimeError):
    """A placement the engine must refuse: a bug in the caller."""

    def __init__(self, message: str, row: Optional[int] = None, col: Optional[int] = None):
        self.row = row
        self.col = col
        super().__init__(message)
