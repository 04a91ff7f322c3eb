"""
Platform adapters for the round engine.

This package provides adapters that translate between the table loop and a
concrete front end (terminal, scripted tests).
"""

from twentyone.adapters.base import PlatformAdapter
from twentyone.adapters.cli import CLIAdapter
from twentyone.adapters.dummy import DummyAdapter

__all__ = ["PlatformAdapter", "CLIAdapter", "DummyAdapter"]
