"""Exception types raised by the Zippy persistence core."""

from typing import Optional


class ZippyError(Exception):
    """Base class for all Zippy errors."""


class ValidationError(ZippyError):
    """A required field is missing or has the wrong shape."""


class DuplicateEmailError(ZippyError):
    """A user with the given email already exists."""

    def __init__(self, email: str):
        super().__init__(f"User with email '{email}' already exists")
        self.email = email


class StorageReadCorrupt(ZippyError):
    """Backing storage exists but could not be parsed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Corrupt record store at {path}: {reason}")
        self.path = path
        self.reason = reason


class StorageWriteError(ZippyError):
    """Backing storage could not be written."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        message = f"Failed to write record store at {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.path = path


class AllocationExhausted(ZippyError):
    """No free short code was found within the attempt limit."""

    def __init__(self, attempts: int):
        super().__init__(f"Unable to allocate a unique short code after {attempts} attempts")
        self.attempts = attempts


class StoreBusyError(ZippyError):
    """The store's critical section could not be entered in time."""

    def __init__(self, name: str, timeout: float):
        super().__init__(f"Timed out after {timeout}s waiting for the '{name}' store")
        self.name = name
        self.timeout = timeout


class MalformedRecordError(ZippyError):
    """A stored record is missing fields and cannot be used."""

    def __init__(self, store: str, key: str, missing: str):
        super().__init__(f"Malformed record for '{key}' in the '{store}' store (missing {missing})")
        self.store = store
        self.key = key


class StoreClosedError(ZippyError):
    """The store was used after being closed."""

    def __init__(self, name: str):
        super().__init__(f"The '{name}' store is closed")
        self.name = name
