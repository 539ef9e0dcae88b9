"""History subpackage - saved calculations and their storage."""
from .models import HistoryRecord
from .storage import KeyValueStorage, FileKeyValueStorage, MemoryKeyValueStorage
from .store import HistoryStore, HISTORY_KEY, HISTORY_LIMIT

__all__ = [
    'HistoryRecord', 'HistoryStore', 'HISTORY_KEY', 'HISTORY_LIMIT',
    'KeyValueStorage', 'FileKeyValueStorage', 'MemoryKeyValueStorage',
]
