"""Short code generation and allocation."""

import logging
import random
import string
import uuid
from typing import Callable, Optional

from .errors import AllocationExhausted


class ShortCodeGenerator:
    """Generate candidate short codes."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    def __init__(self, default_length: int = 6):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
        """
        if default_length < 1:
            raise ValueError("default_length must be at least 1")
        self.default_length = default_length

    def generate_from_uuid(self, length: Optional[int] = None) -> str:
        """Generate short code from a random UUID.

        Takes the leading hex digits of a UUID4, so codes are lowercase
        hexadecimal.

        Args:
            length: Length of the code (uses default if not specified, max 32)

        Returns:
            Short code based on UUID
        """
        length = length or self.default_length
        return uuid.uuid4().hex[:length]

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random base62 short code.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(random.choices(self.BASE62_CHARS, k=length))

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code has valid format (alphanumeric, '-' or '_').

        Generated codes always pass. Callers accepting user-chosen codes use
        it before handing them to ``UrlDirectory.create``, which stores any
        non-empty code as given.

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        return bool(code) and all(c in ShortCodeGenerator.BASE62_CHARS or c in '-_' for c in code)


class CodeAllocator:
    """Retry-until-unique short code allocation.

    Both the candidate source and the uniqueness check are injected. The
    ``exists`` predicate must reflect the collection the code will be
    inserted into; callers run ``allocate`` inside the store's critical
    section so the answer cannot go stale before the insert.
    """

    def __init__(
        self,
        generate: Optional[Callable[[], str]] = None,
        max_attempts: int = 10,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the allocator.

        Args:
            generate: Zero-argument candidate source (defaults to 6-char UUID prefixes)
            max_attempts: Number of candidates to try before giving up
            logger: Optional logger
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.generate = generate or ShortCodeGenerator().generate_from_uuid
        self.max_attempts = max_attempts
        self.logger = logger or logging.getLogger(__name__)

    def allocate(self, exists: Callable[[str], bool]) -> str:
        """Return a code for which ``exists`` is False.

        Args:
            exists: Predicate telling whether a code is already taken

        Returns:
            A free short code

        Raises:
            AllocationExhausted: If every attempt collided
        """
        for attempt in range(1, self.max_attempts + 1):
            code = self.generate()
            if not exists(code):
                if attempt > 1:
                    self.logger.debug(f"Allocated code after {attempt} attempts: {code}")
                return code
            self.logger.debug(f"Short code collision on attempt {attempt}: {code}")

        self.logger.error(f"Short code allocation exhausted after {self.max_attempts} attempts")
        raise AllocationExhausted(self.max_attempts)
