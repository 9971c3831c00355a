"""Event emitter using Observer Pattern."""
from .event_emitter import EventEmitter, PAGING, UPLOAD_PROGRESS

__all__ = [
    'EventEmitter',
    'PAGING',
    'UPLOAD_PROGRESS',
]
