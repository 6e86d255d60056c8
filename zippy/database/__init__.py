"""Record store layer for Zippy."""

from .base import RecordStoreBase
from .json_store import JsonRecordStore, CorruptReadPolicy
from .memory import InMemoryRecordStore
from .models import UrlRecord, UserRecord

__all__ = [
    "RecordStoreBase",
    "JsonRecordStore",
    "CorruptReadPolicy",
    "InMemoryRecordStore",
    "UrlRecord",
    "UserRecord",
]
