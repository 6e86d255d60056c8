"""Short code allocation and URL/user persistence core."""

from .shortcode import ShortCodeGenerator, CodeAllocator
from .service import UrlDirectory
from .users import UserDirectory
from .core import Zippy
from .database.models import UrlRecord, UserRecord
from .errors import (
    ZippyError,
    ValidationError,
    DuplicateEmailError,
    StorageReadCorrupt,
    StorageWriteError,
    AllocationExhausted,
    StoreBusyError,
    StoreClosedError,
    MalformedRecordError,
)

__all__ = [
    "ShortCodeGenerator",
    "CodeAllocator",
    "UrlDirectory",
    "UserDirectory",
    "Zippy",
    "UrlRecord",
    "UserRecord",
    "ZippyError",
    "ValidationError",
    "DuplicateEmailError",
    "StorageReadCorrupt",
    "StorageWriteError",
    "AllocationExhausted",
    "StoreBusyError",
    "StoreClosedError",
    "MalformedRecordError",
]
