"""Process-wide container wiring the stores to the directories."""

import logging
from typing import Dict, Optional

from .common.logging_config import setup_logging
from .config import Config, load_config
from .database.base import RecordStoreBase
from .database.json_store import JsonRecordStore
from .database.memory import InMemoryRecordStore
from .service import UrlDirectory
from .shortcode import CodeAllocator, ShortCodeGenerator
from .users import UserDirectory


class Zippy:
    """Owns one URL store, one user store and the directories over them.

    Create it once per process at startup and close it at shutdown, or use
    it as an async context manager.
    """

    def __init__(
        self,
        url_store: RecordStoreBase,
        user_store: RecordStoreBase,
        allocator: Optional[CodeAllocator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.url_store = url_store
        self.user_store = user_store
        self.urls = UrlDirectory(url_store, allocator=allocator, logger=self.logger)
        self.users = UserDirectory(user_store, logger=self.logger)

    @classmethod
    def from_config(
        cls,
        config: Optional[Config] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "Zippy":
        """Build the stores and directories described by ``config``.

        Args:
            config: Configuration (loaded from the environment if None)
            logger: Optional logger (the "zippy" logger set up from ``config``
                when None)

        Returns:
            A ready container
        """
        config = config or load_config()
        if logger is None:
            logger = setup_logging(
                level=config.log_level,
                log_file=config.log_file,
                json_format=config.log_json,
            )

        if config.store_backend == "memory":
            url_store: RecordStoreBase = InMemoryRecordStore(
                "urls",
                lock_timeout_seconds=config.lock_timeout_seconds,
                logger=logger,
            )
            user_store: RecordStoreBase = InMemoryRecordStore(
                "users",
                lock_timeout_seconds=config.lock_timeout_seconds,
                logger=logger,
            )
        else:
            url_store = JsonRecordStore(
                config.urls_path,
                name="urls",
                corrupt_read_policy=config.corrupt_read_policy,
                lock_timeout_seconds=config.lock_timeout_seconds,
                logger=logger,
            )
            user_store = JsonRecordStore(
                config.users_path,
                name="users",
                corrupt_read_policy=config.corrupt_read_policy,
                lock_timeout_seconds=config.lock_timeout_seconds,
                logger=logger,
            )

        generator = ShortCodeGenerator(default_length=config.short_code_length)
        allocator = CodeAllocator(
            generate=(
                generator.generate_random
                if config.short_code_source == "random"
                else generator.generate_from_uuid
            ),
            max_attempts=config.max_allocation_attempts,
            logger=logger,
        )

        logger.info(f"Zippy core ready ({config.store_backend} store backend)")
        return cls(url_store, user_store, allocator=allocator, logger=logger)

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with per-store and overall health
        """
        urls_healthy = await self.url_store.health_check()
        users_healthy = await self.user_store.health_check()
        return {
            "urls": urls_healthy,
            "users": users_healthy,
            "overall": urls_healthy and users_healthy,
        }

    async def close(self) -> None:
        """Close both stores after in-flight operations finish."""
        await self.url_store.close()
        await self.user_store.close()
        self.logger.info("Zippy core closed")

    async def __aenter__(self) -> "Zippy":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
