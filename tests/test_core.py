"""Tests for configuration and the process container."""

import pytest

from zippy.config import Config, load_config
from zippy.common.logging_config import setup_logging
from zippy.core import Zippy
from zippy.database.json_store import JsonRecordStore
from zippy.database.memory import InMemoryRecordStore
from zippy.errors import AllocationExhausted
from zippy.shortcode import ShortCodeGenerator


class TestConfig:
    """Test configuration loading."""

    def test_defaults(self, monkeypatch):
        for name in ("DATA_DIR", "STORE_BACKEND", "SHORT_CODE_LENGTH", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        config = Config(_env_file=None)

        assert config.store_backend == "json"
        assert config.short_code_length == 6
        assert config.corrupt_read_policy == "recover"
        assert config.short_code_source == "uuid"
        assert str(config.urls_path).endswith("urls.json")
        assert str(config.users_path).endswith("users.json")

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DATA_DIR", str(tmp_path))
        monkeypatch.setenv("SHORT_CODE_LENGTH", "8")
        monkeypatch.setenv("CORRUPT_READ_POLICY", "raise")

        config = load_config()

        assert config.urls_path == tmp_path / "urls.json"
        assert config.short_code_length == 8
        assert config.corrupt_read_policy == "raise"

    def test_invalid_values_rejected(self):
        with pytest.raises(ValueError):
            Config(_env_file=None, store_backend="postgres")

        with pytest.raises(ValueError):
            Config(_env_file=None, short_code_length=0)

        with pytest.raises(ValueError):
            Config(_env_file=None, short_code_source="sequential")


class TestZippy:
    """Test the process container."""

    @pytest.mark.asyncio
    async def test_from_config_json(self, tmp_path, logger):
        config = load_config(data_dir=str(tmp_path), store_backend="json")

        async with Zippy.from_config(config, logger=logger) as zippy:
            assert isinstance(zippy.url_store, JsonRecordStore)
            created = await zippy.urls.create("https://example.com")
            await zippy.users.create_user("A", "a@b.com", False, "h")
            await zippy.users.add_owned_code("a@b.com", created.short_code)

        assert (tmp_path / "urls.json").exists()
        assert (tmp_path / "users.json").exists()
        assert zippy.url_store.closed
        assert zippy.user_store.closed

        async with Zippy.from_config(config, logger=logger) as reopened:
            assert await reopened.urls.find_by_code(created.short_code) == created
            user = await reopened.users.find_user_by_email("a@b.com")
            assert user.owned_codes == [created.short_code]

    @pytest.mark.asyncio
    async def test_from_config_memory(self, logger):
        config = load_config(store_backend="memory", short_code_length=8)

        async with Zippy.from_config(config, logger=logger) as zippy:
            assert isinstance(zippy.url_store, InMemoryRecordStore)
            created = await zippy.urls.create("https://example.com")
            assert len(created.short_code) == 8

    @pytest.mark.asyncio
    async def test_allocation_attempts_from_config(self, logger):
        config = load_config(store_backend="memory", max_allocation_attempts=2)
        zippy = Zippy.from_config(config, logger=logger)
        zippy.urls.allocator.generate = lambda: "same00"

        await zippy.urls.create("https://example.com")
        with pytest.raises(AllocationExhausted) as exc_info:
            await zippy.urls.create("https://example.org")

        assert exc_info.value.attempts == 2
        await zippy.close()

    @pytest.mark.asyncio
    async def test_health_check(self, tmp_path, logger):
        zippy = Zippy.from_config(load_config(data_dir=str(tmp_path)), logger=logger)

        assert await zippy.health_check() == {"urls": True, "users": True, "overall": True}

        await zippy.close()

        health = await zippy.health_check()
        assert health["overall"] is False

    @pytest.mark.asyncio
    async def test_random_code_source(self, logger):
        config = load_config(store_backend="memory", short_code_source="random", short_code_length=10)

        async with Zippy.from_config(config, logger=logger) as zippy:
            codes = [(await zippy.urls.create(f"https://example.com/{i}")).short_code for i in range(20)]

        assert all(len(code) == 10 for code in codes)
        assert all(ShortCodeGenerator.is_valid_format(code) for code in codes)
        assert len(set(codes)) == 20

    @pytest.mark.asyncio
    async def test_logging_configured_from_config(self, tmp_path):
        """Without an explicit logger the config's log settings apply."""
        log_file = tmp_path / "zippy.log"
        config = load_config(store_backend="memory", log_level="DEBUG", log_file=str(log_file), log_json=True)

        try:
            async with Zippy.from_config(config) as zippy:
                assert zippy.logger.name == "zippy"
                await zippy.urls.create("https://example.com", short_code="abc")
        finally:
            setup_logging("INFO")

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert any('"Created short URL: abc -> https://example.com"' in line for line in lines)
        assert all(line.startswith("{") for line in lines)
