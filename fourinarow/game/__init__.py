"""
fourinarow.game - Core game mechanics for Four-in-a-Row

This package contains the board engine, the game session that runs
player-vs-computer turns, and the Gymnasium environment.
"""

from fourinarow.game.board import Board, Placement, Rejection, RejectReason
from fourinarow.game.rules import FourInARowGame, FourInARowEnv, TurnOutcome

__all__ = ['Board', 'Placement', 'Rejection', 'RejectReason',
           'FourInARowGame', 'FourInARowEnv', 'TurnOutcome']
