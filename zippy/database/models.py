"""Data models for the Zippy record stores."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class UrlRecord:
    """Represents a short code to URL mapping."""

    original_url: str
    short_code: str
    owned_by_user: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "original_url": self.original_url,
            "short_code": self.short_code,
            "owned_by_user": self.owned_by_user,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UrlRecord":
        """Create from dictionary."""
        return cls(
            original_url=data["original_url"],
            short_code=data["short_code"],
            owned_by_user=bool(data.get("owned_by_user", False)),
        )


@dataclass
class UserRecord:
    """Represents a registered account and the short codes it owns."""

    full_name: str
    email: str
    email_verified: bool
    password_hash: str
    owned_codes: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "full_name": self.full_name,
            "email": self.email,
            "email_verified": self.email_verified,
            "password_hash": self.password_hash,
            "owned_codes": list(self.owned_codes),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserRecord":
        """Create from dictionary.

        A missing or non-list ``owned_codes`` becomes an empty list.
        """
        owned_codes = data.get("owned_codes")
        return cls(
            full_name=data["full_name"],
            email=data["email"],
            email_verified=bool(data.get("email_verified", False)),
            password_hash=data["password_hash"],
            owned_codes=list(owned_codes) if isinstance(owned_codes, list) else [],
        )
