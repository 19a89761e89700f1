import random

import numpy as np
import pytest

from connect_four.errors import ContractViolation, OutOfRangeColumn
from connect_four.game.board import Board
from connect_four.game.rules import ConnectFourGame
from connect_four.utils import ROWS, COLS, GameResult, Move, Pawn, find_connection

from conftest import DRAW_PATTERN, place_as


def snapshot(board):
    return (board.grid.copy(), board.moves, board.current_player,
            board.connected, board.draw)


def assert_same_state(board, before):
    grid, moves, player, connected, draw = before
    assert np.array_equal(board.grid, grid)
    assert board.moves == moves
    assert board.current_player == player
    assert board.connected == connected
    assert board.draw == draw


def test_new_board_is_empty_with_red_to_move(board):
    assert board.grid.shape == (ROWS, COLS)
    assert np.all(board.grid == Pawn.EMPTY.value)
    assert board.current_player == Pawn.RED
    assert board.moves == ()
    assert board.last_move is None
    assert not board.connected
    assert not board.draw
    assert not board.is_over()
    assert board.result == GameResult.IN_PROGRESS
    assert board.winner is None


def test_board_smaller_than_connect_length_rejected():
    with pytest.raises(ValueError):
        Board(rows=3, cols=7)


def test_lowest_empty_row_follows_gravity(board):
    assert board.lowest_empty_row(3) == ROWS - 1
    board.place(ROWS - 1, 3)
    assert board.lowest_empty_row(3) == ROWS - 2
    assert board.lowest_empty_row(4) == ROWS - 1


@pytest.mark.parametrize("col", [-1, COLS, 100])
def test_lowest_empty_row_out_of_range(board, col):
    with pytest.raises(OutOfRangeColumn) as excinfo:
        board.lowest_empty_row(col)
    assert excinfo.value.column == col
    assert isinstance(excinfo.value, ValueError)


def test_full_column_reports_none_and_rejects_forced_place(board):
    for _ in range(ROWS):
        row = board.lowest_empty_row(0)
        board.place(row, 0)
        board.switch_turn()

    assert board.lowest_empty_row(0) is None
    assert all(board.cell(row, 0) != Pawn.EMPTY for row in range(ROWS))

    before = snapshot(board)
    with pytest.raises(ContractViolation):
        board.place(0, 0)
    assert_same_state(board, before)


def test_place_records_move_without_switching_turn(board):
    move = board.place(ROWS - 1, 2)
    assert move == Move(Pawn.RED, ROWS - 1, 2)
    assert board.moves == (move,)
    assert board.last_move == move
    assert board.cell(ROWS - 1, 2) == Pawn.RED
    assert board.current_player == Pawn.RED

    assert board.switch_turn() == Pawn.BLUE
    assert board.place(ROWS - 1, 3).player == Pawn.BLUE


@pytest.mark.parametrize("row,col", [(-1, 0), (ROWS, 0), (0, -1), (0, COLS)])
def test_place_off_board_is_contract_violation(board, row, col):
    with pytest.raises(ContractViolation):
        board.place(row, col)
    assert board.moves == ()


def test_place_on_taken_cell_is_contract_violation(board):
    board.place(ROWS - 1, 0)
    board.switch_turn()
    before = snapshot(board)
    with pytest.raises(ContractViolation):
        board.place(ROWS - 1, 0)
    assert_same_state(board, before)


def test_vertical_win(game):
    game.replay([0, 1, 0, 1, 0, 1])
    assert not game.board.connected
    game.drop(0)
    assert game.board.connected
    assert game.board.winner == Pawn.RED
    assert game.board.result == GameResult.WIN
    assert not game.board.draw


def test_horizontal_win(game):
    game.replay([0, 0, 1, 1, 2, 2])
    assert not game.board.connected
    game.drop(3)
    assert game.board.connected
    assert game.board.winner == Pawn.RED
    assert sorted(game.board.winning_line()) == [(5, 0), (5, 1), (5, 2), (5, 3)]


def test_diagonal_up_win(board):
    red = [(5, 0), (4, 1), (3, 2), (2, 3)]
    blue = [(5, 6), (4, 6), (3, 6)]
    for red_cell, blue_cell in zip(red, blue):
        place_as(board, Pawn.RED, *red_cell)
        place_as(board, Pawn.BLUE, *blue_cell)
    assert not board.connected

    place_as(board, Pawn.RED, *red[-1])
    assert board.connected
    assert board.winner == Pawn.RED
    assert sorted(board.winning_line()) == sorted(red)


def test_diagonal_down_win(board):
    blue = [(2, 0), (3, 1), (4, 2), (5, 3)]
    red = [(5, 6), (4, 6), (5, 5)]
    for red_cell, blue_cell in zip(red, blue):
        place_as(board, Pawn.RED, *red_cell)
        place_as(board, Pawn.BLUE, *blue_cell)
    assert not board.connected

    place_as(board, Pawn.BLUE, *blue[-1])
    assert board.connected
    assert board.winner == Pawn.BLUE


@pytest.mark.parametrize("gap_value", [Pawn.EMPTY, Pawn.BLUE])
def test_near_miss_with_gap_is_not_connected(board, gap_value):
    for col in (0, 1, 3, 4):
        place_as(board, Pawn.RED, ROWS - 1, col)
    if gap_value != Pawn.EMPTY:
        place_as(board, gap_value, ROWS - 1, 2)
    assert not board.connected
    assert not board.is_connected(ROWS - 1, 4)


@pytest.mark.parametrize("line", [
    [(0, 3), (0, 4), (0, 5), (0, 6)],   # top edge, right corner
    [(0, 6), (1, 6), (2, 6), (3, 6)],   # right edge
    [(2, 0), (3, 0), (4, 0), (5, 0)],   # left edge, bottom
    [(0, 3), (1, 4), (2, 5), (3, 6)],   # "\" ending in the right edge
    [(3, 6), (2, 5), (1, 4), (0, 3)],   # same cells, other order
    [(5, 3), (4, 4), (3, 5), (2, 6)],   # "/" ending in the right edge
])
def test_lines_touching_the_edge(line):
    for last in range(len(line)):
        board = Board()
        order = line[:last] + line[last + 1:] + [line[last]]
        for row, col in order:
            place_as(board, Pawn.BLUE, row, col)
        assert board.connected, f"anchor {line[last]}"
        assert board.winner == Pawn.BLUE


def test_empty_cell_is_never_connected(board):
    assert not board.is_connected(0, 0)


def test_full_board_without_line_is_draw(board):
    for row in range(ROWS):
        for col in range(COLS):
            if (row, col) != (0, 6):
                board.grid[row, col] = DRAW_PATTERN[row][col].value
    assert not board.is_full()

    place_as(board, DRAW_PATTERN[0][6], 0, 6)
    assert board.is_full()
    assert not board.connected
    assert board.draw
    assert board.is_over()
    assert board.result == GameResult.DRAW
    assert board.winner is None
    assert board.valid_columns() == []
    assert find_connection(board.grid) is None


def test_place_after_game_over_changes_nothing(game):
    game.replay([0, 1, 0, 1, 0, 1, 0])
    board = game.board
    before = snapshot(board)

    for row, col in [(5, 6), (1, 0), (99, 99)]:
        with pytest.raises(ContractViolation):
            board.place(row, col)
    assert_same_state(board, before)


@pytest.mark.parametrize("seed", range(25))
def test_random_games_keep_invariants(seed):
    rng = random.Random(seed)
    game = ConnectFourGame()
    board = game.board

    while not board.is_over():
        game.drop(rng.choice(board.valid_columns()))

        red = int(np.sum(board.grid == Pawn.RED.value))
        blue = int(np.sum(board.grid == Pawn.BLUE.value))
        assert abs(red - blue) <= 1
        assert red + blue == len(board.moves)

        # Incremental flags agree with a scan of the whole board
        scanned = find_connection(board.grid)
        assert board.connected == (scanned is not None)
        assert board.draw == (board.is_full() and scanned is None)
        assert not (board.connected and board.draw)

    if board.connected:
        assert board.winner == board.moves[-1].player
        assert board.last_move in [(board.winner, r, c) for r, c in board.winning_line()]


def test_smaller_board_uses_same_check():
    board = Board(rows=4, cols=5)
    game = ConnectFourGame(board)
    game.replay([4, 3, 4, 3, 4, 3])
    assert not board.connected
    game.drop(4)
    assert board.connected
    assert board.winner == Pawn.RED
    assert board.lowest_empty_row(4) is None


def test_rows_top_down_order(board):
    board.place(ROWS - 1, 1)
    rows = list(board.rows_top_down())
    assert len(rows) == ROWS
    assert rows[0] == (Pawn.EMPTY,) * COLS
    assert rows[-1][1] == Pawn.RED
    assert all(len(row) == COLS for row in rows)


def test_copy_is_independent(board):
    board.place(ROWS - 1, 0)
    clone = board.copy()
    clone.switch_turn()
    clone.place(ROWS - 1, 1)

    assert len(board.moves) == 1
    assert board.cell(ROWS - 1, 1) == Pawn.EMPTY
    assert board.current_player == Pawn.RED


def test_get_state_returns_copy(board):
    state = board.get_state()
    state[0, 0] = Pawn.BLUE.value
    assert board.cell(0, 0) == Pawn.EMPTY


def test_reset_clears_everything(game):
    game.replay([0, 1, 0, 1, 0, 1, 0])
    game.reset()
    assert game.board.moves == ()
    assert not game.board.is_over()
    assert game.get_current_player() == Pawn.RED
    assert np.all(game.board.grid == Pawn.EMPTY.value)
