"""
fourinarow - Four-in-a-Row (Connect Four) game engine

This package provides the board engine, a rule-based computer opponent,
a terminal front end for human-vs-human and human-vs-computer play, and a
Gymnasium environment built on the same rules.
"""

# Version number
__version__ = '0.1.0'
