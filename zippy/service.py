"""URL directory service: creation and lookup of short code mappings."""

import logging
from typing import Optional, List, Dict, Any

from .shortcode import CodeAllocator
from .database.base import RecordStoreBase
from .database.models import UrlRecord
from .common.validators import check_required, check_non_empty_string
from .errors import MalformedRecordError, ValidationError


class UrlDirectory:
    """Service layer over the URL record store.

    Every operation runs inside the store's critical section, so short code
    uniqueness holds under concurrent callers.
    """

    def __init__(
        self,
        store: RecordStoreBase,
        allocator: Optional[CodeAllocator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the URL directory.

        Args:
            store: Record store holding URL records
            allocator: Optional short code allocator
            logger: Optional logger
        """
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.allocator = allocator or CodeAllocator(logger=self.logger)

    async def create(
        self,
        original_url: str,
        short_code: Optional[str] = None,
        owned_by_user: bool = False,
    ) -> UrlRecord:
        """Create a short URL, or return the record already using ``short_code``.

        Args:
            original_url: The original long URL (already syntax-checked)
            short_code: Optional explicit short code; allocated when None
            owned_by_user: Whether an authenticated account created it

        Returns:
            The new record, or the existing one when the explicit code is taken

        Raises:
            ValidationError: If a required value is missing
            MalformedRecordError: If the explicit code belongs to a malformed record
            AllocationExhausted: If no free code could be generated
            StorageWriteError: If the record could not be persisted
        """
        is_valid, error = check_required(original_url=original_url, owned_by_user=owned_by_user)
        if not is_valid:
            raise ValidationError(error)

        is_valid, error = check_non_empty_string("original_url", original_url)
        if not is_valid:
            raise ValidationError(error)

        if short_code is not None:
            short_code = str(short_code)
            is_valid, error = check_non_empty_string("short_code", short_code)
            if not is_valid:
                raise ValidationError(error)

        async with self.store.transaction():
            records = await self.store.load()

            if short_code is not None:
                existing = self._find(records, "short_code", short_code)
                if existing is None and any(data.get("short_code") == short_code for data in records):
                    self.logger.error(f"Short code {short_code} is held by a malformed record")
                    raise MalformedRecordError(self.store.name, short_code, "original_url")
                if existing is not None:
                    self.logger.info(f"Short code already exists, returning it: {short_code}")
                    return existing
            else:
                taken = {data.get("short_code") for data in records}
                short_code = self.allocator.allocate(lambda code: code in taken)

            record = UrlRecord(
                original_url=original_url,
                short_code=short_code,
                owned_by_user=bool(owned_by_user),
            )
            records.append(record.to_dict())
            await self.store.replace(records)

        self.logger.info(f"Created short URL: {short_code} -> {original_url}")
        return record

    async def find_by_code(self, short_code: str) -> Optional[UrlRecord]:
        """Get the record for a short code.

        Args:
            short_code: The short code to lookup (case-sensitive)

        Returns:
            The record, or None if not found
        """
        if not short_code:
            return None

        async with self.store.transaction():
            records = await self.store.load()

        record = self._find(records, "short_code", short_code)
        if record is None:
            self.logger.warning(f"Short code not found: {short_code}")
        else:
            self.logger.debug(f"Retrieved URL: {short_code} -> {record.original_url}")
        return record

    async def find_by_original_url(self, original_url: str) -> Optional[UrlRecord]:
        """Get the first record created for a long URL.

        Args:
            original_url: The original URL to lookup

        Returns:
            The earliest matching record, or None
        """
        if not original_url:
            return None

        async with self.store.transaction():
            records = await self.store.load()

        return self._find(records, "original_url", original_url)

    async def code_exists(self, short_code: str) -> bool:
        """Check if a short code is taken."""
        return await self.find_by_code(short_code) is not None

    async def list_urls(self, limit: Optional[int] = None) -> List[UrlRecord]:
        """List URL records, most recently created first.

        Args:
            limit: Maximum number to return (all if None)

        Returns:
            List of records
        """
        async with self.store.transaction():
            records = await self.store.load()

        result = []
        for data in reversed(records):
            if limit is not None and len(result) >= limit:
                break
            record = self._to_record(data)
            if record is not None:
                result.append(record)
        return result

    async def get_statistics(self) -> Dict[str, Any]:
        """Get directory statistics.

        Returns:
            Dictionary with total, owned and anonymous URL counts
        """
        async with self.store.transaction():
            records = await self.store.load()

        owned = sum(1 for data in records if data.get("owned_by_user"))
        return {
            "total_urls": len(records),
            "owned_urls": owned,
            "anonymous_urls": len(records) - owned,
            "store": self.store.name,
        }

    def _find(self, records: List[Dict[str, Any]], key: str, value: str) -> Optional[UrlRecord]:
        for data in records:
            if data.get(key) == value:
                record = self._to_record(data)
                if record is not None:
                    return record
        return None

    def _to_record(self, data: Dict[str, Any]) -> Optional[UrlRecord]:
        try:
            return UrlRecord.from_dict(data)
        except KeyError as e:
            self.logger.warning(f"Skipping malformed URL record (missing {e}): {data}")
            return None
