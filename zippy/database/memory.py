"""In-memory implementation of the Zippy record store."""

import copy
import logging
from typing import Optional, List, Dict, Any

from .base import RecordStoreBase


class InMemoryRecordStore(RecordStoreBase):
    """Keeps one entity collection in process memory.

    Records are deep-copied on the way in and out, so callers never share
    state with the store.
    """

    def __init__(
        self,
        name: str,
        records: Optional[List[Dict[str, Any]]] = None,
        lock_timeout_seconds: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(name=name, lock_timeout_seconds=lock_timeout_seconds, logger=logger)
        self._records: List[Dict[str, Any]] = copy.deepcopy(records or [])

    async def load(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._records)

    async def replace(self, records: List[Dict[str, Any]]) -> None:
        self._records = copy.deepcopy(records)

    async def health_check(self) -> bool:
        return not self.closed
