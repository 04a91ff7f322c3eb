"""
Immutable state management for the round engine.

This package provides immutable state classes and pure transition functions
for managing round state in a predictable and testable way.
"""

from twentyone.state.models import (
    Outcome,
    Phase,
    PlayerHand,
    RoundState,
)

from twentyone.state.transitions import StateTransitionEngine

__all__ = [
    "Outcome",
    "Phase",
    "PlayerHand",
    "RoundState",
    "StateTransitionEngine",
]
