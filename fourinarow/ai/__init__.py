"""
fourinarow.ai - Computer opponent for Four-in-a-Row

This package provides the rule-based move advisor used for the computer
side in player-vs-computer games.
"""

from fourinarow.ai.advisor import MoveAdvisor, Tier

__all__ = ['MoveAdvisor', 'Tier']
