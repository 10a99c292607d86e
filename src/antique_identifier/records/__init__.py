"""Saved antique records and the store they are persisted to."""

from .model import SavedAntiqueRecord, record_from_result
from .store import JsonRecordStore, RecordStore

__all__ = [
    "JsonRecordStore",
    "RecordStore",
    "SavedAntiqueRecord",
    "record_from_result",
]
