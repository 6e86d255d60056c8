"""Configuration management for Zippy."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration."""

    # Storage settings
    store_backend: Literal["json", "memory"] = Field(
        default="json",
        description="Record store backend: 'json' files or process 'memory'"
    )

    data_dir: str = Field(
        default="data",
        description="Directory holding the JSON record files"
    )

    urls_file: str = Field(
        default="urls.json",
        description="File name of the URL collection"
    )

    users_file: str = Field(
        default="users.json",
        description="File name of the user collection"
    )

    corrupt_read_policy: Literal["recover", "raise"] = Field(
        default="recover",
        description="On an unparseable file: 'recover' moves it aside and starts empty, 'raise' fails"
    )

    lock_timeout_seconds: Optional[float] = Field(
        default=30.0,
        gt=0,
        description="Max seconds to wait for a store's critical section (unset waits forever)"
    )

    # Short code settings
    short_code_length: int = Field(
        default=6,
        ge=1,
        le=32,
        description="Length of generated short codes"
    )

    short_code_source: Literal["uuid", "random"] = Field(
        default="uuid",
        description="Generated code alphabet: 'uuid' hex prefixes or 'random' base62"
    )

    max_allocation_attempts: int = Field(
        default=10,
        ge=1,
        description="Candidates tried before short code allocation gives up"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @property
    def urls_path(self) -> Path:
        return Path(self.data_dir) / self.urls_file

    @property
    def users_path(self) -> Path:
        return Path(self.data_dir) / self.users_file


def load_config(**overrides) -> Config:
    """Load configuration from environment, with optional explicit overrides."""
    return Config(**overrides)
