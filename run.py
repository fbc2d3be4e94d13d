#!/usr/bin/env python3
"""
run.py - Main entry point for Four-in-a-Row

Examples:
    # Pick a mode from the menu
    python run.py play

    # Play against the computer straight away
    python run.py play --mode pvc

    # Two players, with debug logging written to a file
    python run.py --debug --log-file game.log play --mode pvp

    # Ask the computer what it would play in a position
    python run.py analyze --position 0,0,0,...,1,2,1

    # Time the engine
    python run.py benchmark --iterations 5000
"""

import sys

from fourinarow.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
