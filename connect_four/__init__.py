"""
connect_four - Two-player Connect Four for the terminal

This package provides the Connect Four board engine, a game session
that drives it turn by turn, and a command-line interface to play it.
"""

# Version number
__version__ = '0.1.0'
