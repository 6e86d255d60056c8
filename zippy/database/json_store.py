"""JSON file implementation of the Zippy record store."""

import os
import json
import asyncio
import logging
from contextlib import suppress
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional, List, Dict, Any, Union

from .base import RecordStoreBase
from ..errors import StorageReadCorrupt, StorageWriteError


class CorruptReadPolicy(str, Enum):
    """What ``load`` does when the backing file cannot be parsed."""
    RECOVER = "recover"
    RAISE = "raise"


class JsonRecordStore(RecordStoreBase):
    """Stores one entity collection as a UTF-8 JSON array of objects.

    The whole document is rewritten on every ``replace``: the new content is
    written to a temp file in the same directory, then renamed over the
    original, so readers never see a partial write.
    """

    def __init__(
        self,
        path: Union[str, Path],
        name: Optional[str] = None,
        corrupt_read_policy: Union[str, CorruptReadPolicy] = CorruptReadPolicy.RECOVER,
        lock_timeout_seconds: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the JSON record store.

        Args:
            path: Path of the JSON document
            name: Entity collection name (defaults to the file stem)
            corrupt_read_policy: "recover" to move a corrupt file aside and
                start empty, "raise" to raise StorageReadCorrupt
            lock_timeout_seconds: Max wait for the critical section
            logger: Optional logger instance
        """
        self.path = Path(path)
        super().__init__(
            name=name or self.path.stem,
            lock_timeout_seconds=lock_timeout_seconds,
            logger=logger,
        )
        self.corrupt_read_policy = CorruptReadPolicy(corrupt_read_policy)

        self.logger.debug(
            f"JSON store '{self.name}' at {self.path} "
            f"(corrupt_read_policy={self.corrupt_read_policy.value})"
        )

    async def load(self) -> List[Dict[str, Any]]:
        """Return the full current collection.

        A missing or empty file is an empty collection.

        Raises:
            StorageReadCorrupt: If the file is unparseable and the policy is "raise"
            OSError: If the file exists but cannot be read
        """
        return await asyncio.to_thread(self._read)

    async def replace(self, records: List[Dict[str, Any]]) -> None:
        """Atomically overwrite the full collection.

        Raises:
            StorageWriteError: If the document cannot be serialized or written
        """
        await asyncio.to_thread(self._write, records)
        self.logger.debug(f"Wrote {len(records)} records to {self.path}")

    async def health_check(self) -> bool:
        """Check that the store is open and its directory is writable."""
        if self.closed:
            return False
        return await asyncio.to_thread(self._is_writable)

    def _read(self) -> List[Dict[str, Any]]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self.logger.debug(f"No file at {self.path}, starting with an empty '{self.name}' store")
            return []
        except UnicodeDecodeError as e:
            return self._handle_corrupt(f"not valid UTF-8 ({e})")

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            return self._handle_corrupt(f"invalid JSON ({e})")

        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            return self._handle_corrupt("expected an array of objects")

        return data

    def _handle_corrupt(self, reason: str) -> List[Dict[str, Any]]:
        if self.corrupt_read_policy is CorruptReadPolicy.RAISE:
            self.logger.error(f"Corrupt '{self.name}' store at {self.path}: {reason}")
            raise StorageReadCorrupt(str(self.path), reason)

        # Keep the unreadable bytes; the next replace would otherwise overwrite them.
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        backup_path = self.path.with_name(f"{self.path.name}.corrupt-{stamp}")
        try:
            self.path.replace(backup_path)
            self.logger.error(
                f"Corrupt '{self.name}' store at {self.path}: {reason}. "
                f"Moved it to {backup_path} and continuing with an empty collection"
            )
        except OSError as e:
            self.logger.error(
                f"Corrupt '{self.name}' store at {self.path}: {reason}. "
                f"Could not move it aside ({e}); continuing with an empty collection"
            )
        return []

    def _write(self, records: List[Dict[str, Any]]) -> None:
        tmp_path = self.path.with_name(f".{self.path.name}.tmp")
        try:
            payload = json.dumps(records, indent=2, ensure_ascii=False)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            tmp_path.replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            self.logger.error(f"Error writing '{self.name}' store to {self.path}: {e}")
            with suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise StorageWriteError(str(self.path), e) from e

    def _is_writable(self) -> bool:
        directory = self.path.parent
        while not directory.exists():
            if directory.parent == directory:
                return False
            directory = directory.parent
        return os.access(directory, os.W_OK)
