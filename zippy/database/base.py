"""Abstract base class for Zippy record stores."""

import asyncio
import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Dict, Any, Optional

from ..errors import StoreBusyError, StoreClosedError


class RecordStoreBase(ABC):
    """Full-collection read/replace storage for one entity type.

    ``load`` and ``replace`` are raw primitives. Any load, mutate, replace
    cycle must run inside ``transaction()`` so that writers for this entity
    type are serialized.
    """

    def __init__(
        self,
        name: str,
        lock_timeout_seconds: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the store.

        Args:
            name: Entity collection name (e.g. "urls", "users")
            lock_timeout_seconds: Max wait for the critical section (None waits forever)
            logger: Optional logger instance
        """
        self.name = name
        self.lock_timeout_seconds = lock_timeout_seconds
        self.logger = logger or logging.getLogger(__name__)
        self._lock = asyncio.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["RecordStoreBase"]:
        """Enter the store's critical section.

        Raises:
            StoreBusyError: If the section is not acquired within the timeout
            StoreClosedError: If the store has been closed
        """
        self._check_open()

        if self.lock_timeout_seconds is None:
            await self._lock.acquire()
        else:
            try:
                await asyncio.wait_for(self._lock.acquire(), timeout=self.lock_timeout_seconds)
            except asyncio.TimeoutError:
                self.logger.error(f"Timed out waiting for the '{self.name}' store")
                raise StoreBusyError(self.name, self.lock_timeout_seconds) from None

        try:
            self._check_open()
            yield self
        finally:
            self._lock.release()

    @abstractmethod
    async def load(self) -> List[Dict[str, Any]]:
        """Return the full current collection.

        Returns:
            List of record dictionaries, empty if nothing is stored yet
        """
        pass

    @abstractmethod
    async def replace(self, records: List[Dict[str, Any]]) -> None:
        """Atomically overwrite the full collection.

        Args:
            records: The complete new collection

        Raises:
            StorageWriteError: If the backing medium cannot be written
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is usable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    async def close(self) -> None:
        """Close the store once in-flight transactions have finished."""
        async with self._lock:
            self._closed = True
        self.logger.debug(f"Closed '{self.name}' store")

    def _check_open(self) -> None:
        if self._closed:
            raise StoreClosedError(self.name)
