import pytest

from connect_four.debug import debug, DebugLevel
from connect_four.game.board import Board
from connect_four.game.rules import ConnectFourGame
from connect_four.utils import Pawn

R, B = Pawn.RED, Pawn.BLUE

# Full 6x7 board with no four in a row anywhere
DRAW_PATTERN = [
    [R, R, R, B, B, B, R],
    [B, B, B, R, R, R, B],
    [R, R, R, B, B, B, R],
    [B, B, B, R, R, R, B],
    [R, R, R, B, B, B, R],
    [B, B, B, R, R, R, B],
]


def place_as(board: Board, player: Pawn, row: int, col: int):
    """Place a piece for ``player`` regardless of whose turn it is."""
    board.current_player = player
    return board.place(row, col)


@pytest.fixture(autouse=True)
def quiet_debug():
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[])
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[])


@pytest.fixture
def board():
    return Board()


@pytest.fixture
def game():
    return ConnectFourGame()
