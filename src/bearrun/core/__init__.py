"""Core framework components for BEAR RUN."""

from .state import State, StateMachine
from .events import EventBus, Event, EventType

__all__ = ["State", "StateMachine", "EventBus", "Event", "EventType"]
