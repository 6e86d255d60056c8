"""Pytest configuration and fixtures."""

import json
import pytest
from typing import AsyncGenerator

from zippy.database.json_store import JsonRecordStore
from zippy.service import UrlDirectory
from zippy.users import UserDirectory
from zippy.shortcode import CodeAllocator, ShortCodeGenerator
from zippy.common.logging_config import setup_logging


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def data_dir(tmp_path):
    """Temporary data directory for the JSON stores."""
    return tmp_path / "data"


@pytest.fixture
async def url_store(data_dir, logger) -> AsyncGenerator[JsonRecordStore, None]:
    """Create URL store backed by a temporary file."""
    store = JsonRecordStore(data_dir / "urls.json", name="urls", lock_timeout_seconds=10, logger=logger)

    yield store

    if not store.closed:
        await store.close()


@pytest.fixture
async def user_store(data_dir, logger) -> AsyncGenerator[JsonRecordStore, None]:
    """Create user store backed by a temporary file."""
    store = JsonRecordStore(data_dir / "users.json", name="users", lock_timeout_seconds=10, logger=logger)

    yield store

    if not store.closed:
        await store.close()


@pytest.fixture
def allocator(logger):
    """Create allocator producing 6-character UUID prefixes."""
    generator = ShortCodeGenerator(default_length=6)
    return CodeAllocator(generate=generator.generate_from_uuid, max_attempts=10, logger=logger)


@pytest.fixture
def urls(url_store, allocator, logger) -> UrlDirectory:
    """Create URL directory."""
    return UrlDirectory(url_store, allocator=allocator, logger=logger)


@pytest.fixture
def users(user_store, logger) -> UserDirectory:
    """Create user directory."""
    return UserDirectory(user_store, logger=logger)


@pytest.fixture
def read_json():
    """Read a store file straight from disk."""
    def _read(path):
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    return _read


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
