"""User directory: account records and the short codes they own."""

import logging
from collections.abc import Mapping
from typing import Optional, List, Dict, Any

from pydantic import ValidationError as PydanticValidationError

from .database.base import RecordStoreBase
from .database.models import UserRecord
from .common.validators import check_required, check_non_empty_string, is_string_list
from .errors import DuplicateEmailError, MalformedRecordError, ValidationError
from .schemas import UserUpdate


class UserDirectory:
    """Service layer over the user record store.

    Emails are unique, compared exactly. Linking a user to a short code is a
    separate call from creating the URL; the two are not atomic.
    """

    def __init__(
        self,
        store: RecordStoreBase,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.logger = logger or logging.getLogger(__name__)

    async def create_user(
        self,
        full_name: str,
        email: str,
        email_verified: bool,
        password_hash: str,
        owned_codes: Optional[List[str]] = None,
    ) -> UserRecord:
        """Register a new user.

        Args:
            full_name: Display name
            email: Unique account email
            email_verified: Whether the email has been confirmed
            password_hash: Opaque credential material
            owned_codes: Short codes already owned by the user

        Returns:
            The saved user

        Raises:
            ValidationError: If a required value is missing
            DuplicateEmailError: If the email is already registered
        """
        is_valid, error = check_required(
            full_name=full_name,
            email=email,
            email_verified=email_verified,
            password_hash=password_hash,
        )
        if not is_valid:
            raise ValidationError(error)

        is_valid, error = check_non_empty_string("email", email)
        if not is_valid:
            raise ValidationError(error)

        user = UserRecord(
            full_name=full_name,
            email=email,
            email_verified=bool(email_verified),
            password_hash=password_hash,
            owned_codes=self._normalize_codes(email, owned_codes),
        )

        async with self.store.transaction():
            records = await self.store.load()
            if self._index_of(records, email) is not None:
                self.logger.warning(f"Rejected duplicate registration for {email}")
                raise DuplicateEmailError(email)

            records.append(user.to_dict())
            await self.store.replace(records)

        self.logger.info(f"Created user: {email}")
        return user

    async def find_user_by_email(self, email: str) -> Optional[UserRecord]:
        """Get a user by email.

        Returns:
            The user, or None if not registered
        """
        if not email:
            return None

        async with self.store.transaction():
            records = await self.store.load()

        index = self._index_of(records, email)
        if index is None:
            self.logger.debug(f"User not found: {email}")
            return None

        try:
            return self._to_user(records[index])
        except MalformedRecordError as e:
            self.logger.warning(f"Ignoring stored user: {e}")
            return None

    async def update_user_by_email(
        self,
        email: str,
        fields: Mapping,
    ) -> Optional[UserRecord]:
        """Overwrite some fields of an existing user.

        A present but malformed ``owned_codes`` (anything other than a list
        of strings) is stored as an empty list instead.

        Args:
            email: Email of the user to update
            fields: Field names and their new values

        Returns:
            The updated user, or None if no user has that email

        Raises:
            ValidationError: If email or fields are missing, or a field is
                unknown or has the wrong type
            MalformedRecordError: If the stored user is missing fields the
                update does not supply
            DuplicateEmailError: If the email is changed to one already in use
        """
        if not email or fields is None:
            raise ValidationError("Email and fields are required for updating a user")
        if not isinstance(fields, Mapping):
            raise ValidationError("fields must be a mapping of field names to values")

        fields = dict(fields)
        if "owned_codes" in fields and not is_string_list(fields["owned_codes"]):
            self.logger.warning(
                f"Corrected 'owned_codes' to an empty list for user {email}. "
                f"Original value: {fields['owned_codes']!r}"
            )
            fields["owned_codes"] = []

        try:
            changes = UserUpdate.model_validate(fields).changes()
        except (PydanticValidationError, ValueError) as e:
            raise ValidationError(f"Invalid user update: {e}") from e

        async with self.store.transaction():
            records = await self.store.load()
            index = self._index_of(records, email)
            if index is None:
                self.logger.debug(f"Cannot update - user not found: {email}")
                return None

            new_email = changes.get("email")
            if new_email is not None and new_email != email:
                if self._index_of(records, new_email) is not None:
                    raise DuplicateEmailError(new_email)

            merged = {**records[index], **changes}
            user = self._to_user(merged)
            records[index] = merged
            await self.store.replace(records)

        self.logger.info(f"Updated user {email}: {sorted(changes)}")
        return user

    async def add_owned_code(self, email: str, short_code: str) -> Optional[UserRecord]:
        """Link a short code to a user, keeping insertion order.

        Adding a code the user already owns is a no-op.

        Returns:
            The updated user, or None if no user has that email
        """
        return await self._change_owned_codes(email, short_code, add=True)

    async def remove_owned_code(self, email: str, short_code: str) -> Optional[UserRecord]:
        """Unlink a short code from a user.

        Returns:
            The updated user, or None if no user has that email
        """
        return await self._change_owned_codes(email, short_code, add=False)

    async def _change_owned_codes(
        self,
        email: str,
        short_code: str,
        add: bool,
    ) -> Optional[UserRecord]:
        if not email:
            raise ValidationError("Email is required")
        is_valid, error = check_non_empty_string("short_code", short_code)
        if not is_valid:
            raise ValidationError(error)

        async with self.store.transaction():
            records = await self.store.load()
            index = self._index_of(records, email)
            if index is None:
                self.logger.debug(f"Cannot change owned codes - user not found: {email}")
                return None

            user = self._to_user(records[index])
            if add and short_code not in user.owned_codes:
                user.owned_codes.append(short_code)
            elif not add and short_code in user.owned_codes:
                user.owned_codes.remove(short_code)
            else:
                return user

            records[index] = {**records[index], "owned_codes": list(user.owned_codes)}
            await self.store.replace(records)

        self.logger.info(f"{'Linked' if add else 'Unlinked'} {short_code} for user {email}")
        return user

    def _normalize_codes(self, email: str, owned_codes: Any) -> List[str]:
        if owned_codes is None:
            return []
        if not is_string_list(owned_codes):
            self.logger.warning(
                f"Corrected 'owned_codes' to an empty list for user {email}. "
                f"Original value: {owned_codes!r}"
            )
            return []
        return list(owned_codes)

    def _to_user(self, data: Dict[str, Any]) -> UserRecord:
        try:
            return UserRecord.from_dict(data)
        except KeyError as e:
            raise MalformedRecordError(self.store.name, str(data.get("email")), str(e.args[0])) from e

    @staticmethod
    def _index_of(records: List[Dict[str, Any]], email: str) -> Optional[int]:
        for index, data in enumerate(records):
            if data.get("email") == email:
                return index
        return None
