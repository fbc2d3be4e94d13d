"""
fourinarow.interfaces - User interfaces for Four-in-a-Row

This package contains the terminal front end. It only renders and routes
input; all rules live in fourinarow.game.
"""

# Don't import anything here to avoid circular imports
__all__ = []
