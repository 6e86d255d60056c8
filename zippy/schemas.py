"""Pydantic schemas for partial record updates."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr, field_validator


class UserUpdate(BaseModel):
    """Fields that may be overwritten on an existing user.

    Only the fields actually provided are applied; see
    ``model_dump(exclude_unset=True)``.
    """

    model_config = ConfigDict(extra="forbid")

    full_name: Optional[StrictStr] = None
    email: Optional[StrictStr] = None
    email_verified: Optional[StrictBool] = None
    password_hash: Optional[StrictStr] = None
    owned_codes: Optional[List[StrictStr]] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        """Reject a blank email key."""
        if v is not None and not v.strip():
            raise ValueError("email must not be empty")
        return v

    def changes(self) -> dict:
        """Return the provided fields, rejecting explicit nulls."""
        provided = self.model_dump(exclude_unset=True)
        nulls = [name for name, value in provided.items() if value is None]
        if nulls:
            raise ValueError(f"Field(s) cannot be set to null: {', '.join(nulls)}")
        return provided
