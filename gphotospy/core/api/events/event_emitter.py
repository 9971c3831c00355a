"""Event emitter implementation using Observer Pattern."""
from typing import Callable, Dict, List, Optional

PAGING = 'paging'
UPLOAD_PROGRESS = 'upload_progress'


class EventEmitter:
    """
    Event emitter using Observer Pattern.

    Callbacks run synchronously, in registration order, on the task that
    emits. They receive the progress dataclass as their only argument.
    """

    def __init__(self):
        """Initializes event emitter."""
        self._events: Dict[str, List[Callable]] = {}

    def on(self, event: str, callback: Callable) -> 'EventEmitter':
        """Registers an event handler."""
        self._events.setdefault(event, []).append(callback)
        return self

    def off(self, event: str, callback: Optional[Callable] = None) -> 'EventEmitter':
        """Removes one handler, or every handler of an event."""
        if event not in self._events:
            return self

        if callback is None:
            del self._events[event]
        else:
            self._events[event] = [cb for cb in self._events[event] if cb != callback]

        return self

    def emit(self, event: str, *args, **kwargs) -> int:
        """Emits an event. Returns how many handlers were called."""
        callbacks = list(self._events.get(event, ()))
        for callback in callbacks:
            callback(*args, **kwargs)
        return len(callbacks)

    def listener_count(self, event: str) -> int:
        return len(self._events.get(event, ()))

    def bind(self, event: str) -> Callable:
        """Returns a single-argument callable that emits ``event``."""
        def _emit(payload) -> None:
            self.emit(event, payload)
        return _emit
