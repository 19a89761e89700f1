#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four

Usage:
    python run.py play [--glyphs emoji|color|plain] [--no-clear]
    python run.py replay --moves 3,3,4,4,5,5,6
    python run.py benchmark --iterations 1000
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from connect_four.interfaces.cli import main


if __name__ == "__main__":
    main()
