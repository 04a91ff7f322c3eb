"""
Event system for the round engine.

This package provides the event bus the engine publishes round progress on.
"""

from twentyone.events.emitter import EventEmitter, EventBus, EngineEventType

__all__ = ["EventEmitter", "EventBus", "EngineEventType"]
