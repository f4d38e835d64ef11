"""
Observability port for pipeline diagnostics.

Emitted events are informational only; no caller branches on them.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple


class EventEmitter(ABC):
    """Structured event sink injected into the extraction pipeline."""

    @abstractmethod
    def emit(self, event: str, **fields: Any) -> None:
        pass


class NullEventEmitter(EventEmitter):
    def emit(self, event: str, **fields: Any) -> None:
        return None


class RecordingEventEmitter(EventEmitter):
    """Keeps every event in memory, handy for inspecting a single run."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    def emit(self, event: str, **fields: Any) -> None:
        self.events.append((event, fields))

    def names(self) -> List[str]:
        return [name for name, _ in self.events]
