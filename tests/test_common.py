"""Tests for common utilities."""

import json
import logging

from zippy.common.logging_config import setup_logging, get_logger
from zippy.common.validators import (
    check_required,
    check_non_empty_string,
    is_string_list,
    missing_fields,
)


class TestValidators:
    """Test validation utilities."""

    def test_check_required(self):
        valid, error = check_required(original_url="https://example.com", owned_by_user=False)
        assert valid
        assert error == ""

        valid, error = check_required(original_url=None, owned_by_user=None)
        assert not valid
        assert "original_url" in error
        assert "owned_by_user" in error

    def test_missing_fields_keeps_falsy_values(self):
        assert missing_fields(a=0, b=False, c="", d=None) == ["d"]

    def test_check_non_empty_string(self):
        valid, _ = check_non_empty_string("email", "a@b.com")
        assert valid

        valid, error = check_non_empty_string("email", "   ")
        assert not valid
        assert "empty" in error

        valid, error = check_non_empty_string("email", 42)
        assert not valid
        assert "string" in error

    def test_is_string_list(self):
        assert is_string_list([])
        assert is_string_list(["abc", "def"])
        assert is_string_list(("abc",))

        assert not is_string_list("abc")
        assert not is_string_list(["abc", 1])
        assert not is_string_list(None)
        assert not is_string_list({"abc": 1})


class TestLogging:
    """Test logging setup."""

    def test_setup_logging_level(self):
        logger = setup_logging(level="warning")

        assert logger.name == "zippy"
        assert logger.level == logging.WARNING

    def test_setup_logging_is_idempotent(self):
        setup_logging(level="INFO")
        logger = setup_logging(level="INFO")

        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        log_path = tmp_path / "zippy.log"
        logger = setup_logging(level="INFO", log_file=str(log_path))

        logger.info("Created short URL: abc123")
        for handler in logger.handlers:
            handler.flush()

        assert "Created short URL: abc123" in log_path.read_text(encoding="utf-8")
        setup_logging(level="INFO")

    def test_json_format(self, tmp_path):
        log_path = tmp_path / "zippy.log"
        logger = setup_logging(level="INFO", log_file=str(log_path), json_format=True)

        logger.warning('Short code not found: "abc"')
        for handler in logger.handlers:
            handler.flush()

        line = log_path.read_text(encoding="utf-8").strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "zippy"
        assert payload["message"] == 'Short code not found: "abc"'
        setup_logging(level="INFO")

    def test_get_logger_namespaces(self):
        assert get_logger().name == "zippy"
        assert get_logger("store").name == "zippy.store"
        assert get_logger("zippy.users").name == "zippy.users"
