"""
connect_four.game - Core game mechanics for Connect Four

This package contains the board state machine and the game session
that drives it one turn at a time.
"""

from connect_four.game.board import Board
from connect_four.game.rules import ConnectFourGame

__all__ = ['Board', 'ConnectFourGame']
