"""Core framework components for Ski Chase."""

from skichase.core.geometry import Position, Rect
from skichase.core.state import StateMachine
from skichase.core.events import EventBus, Event, EventType

__all__ = ["Position", "Rect", "StateMachine", "EventBus", "Event", "EventType"]
