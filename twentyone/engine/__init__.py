"""
Core engine for the twentyone package.

This package provides the round engine that runs a blackjack table,
implementing the game logic independently of any presentation layer.
"""

from twentyone.engine.base import TableEngine
from twentyone.engine.blackjack import BlackjackEngine

__all__ = ["TableEngine", "BlackjackEngine"]
