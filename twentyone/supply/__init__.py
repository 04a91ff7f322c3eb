"""
Card supplies: the source of shuffled cards the round engine draws from.
"""

from twentyone.supply.base import CardSupply, DrawResult, ShoeHandle
from twentyone.supply.local import LocalCardSupply
from twentyone.supply.remote import RemoteCardSupply

__all__ = [
    "CardSupply",
    "DrawResult",
    "ShoeHandle",
    "LocalCardSupply",
    "RemoteCardSupply",
]
