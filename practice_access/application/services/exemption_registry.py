"""Exemption registry: emails that skip subscription enforcement."""

from __future__ import annotations

import logging

from practice_access.application.dtos.exemption import ExemptionEntryResult
from practice_access.application.interfaces.repositories import IExemptionRepository
from practice_access.application.services.store_calls import (
    DEFAULT_STORE_TIMEOUT_SECONDS,
    bounded,
)
from practice_access.domain.exceptions import (
    PracticeAccessException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Lowercase and trim; exemptions are matched by this value only."""
    return email.strip().lower()


class ExemptionRegistry:
    """Add, remove and look up exempted emails (case-insensitive)."""

    def __init__(
        self,
        exemption_repo: IExemptionRepository,
        timeout: float = DEFAULT_STORE_TIMEOUT_SECONDS,
    ) -> None:
        self.exemption_repo = exemption_repo
        self.timeout = timeout

    async def lookup(self, email: str) -> ExemptionEntryResult | None:
        """Return the entry for email. Store failures propagate as PersistenceException."""
        normalized = normalize_email(email)
        if not normalized:
            return None
        return await bounded(
            self.exemption_repo.get_by_email(normalized),
            "exempted_users.find_one",
            self.timeout,
        )

    async def is_exempt(self, email: str | None) -> bool:
        """True if email is exempt. A failed lookup is logged and treated as not exempt."""
        if not email:
            return False
        try:
            return await self.lookup(email) is not None
        except PracticeAccessException as e:
            logger.warning("Exemption lookup failed; treating as not exempt: %s", e.message)
            return False

    async def add(self, email: str, created_by: str) -> ExemptionEntryResult:
        """Add an exemption.

        Raises:
            ValidationException: email is empty or malformed.
            DuplicateExemptionException: email is already exempt.
        """
        normalized = normalize_email(email)
        if not normalized or "@" not in normalized:
            raise ValidationException("A valid email is required", field="email")
        entry = await bounded(
            self.exemption_repo.create(normalized, created_by),
            "exempted_users.insert",
            self.timeout,
        )
        logger.info("Exemption added for %s by admin %s", normalized, created_by)
        return entry

    async def remove(self, entry_id: str) -> None:
        """Remove an exemption by id. Raises ResourceNotFoundException if absent."""
        deleted = await bounded(
            self.exemption_repo.delete(entry_id), "exempted_users.delete", self.timeout
        )
        if not deleted:
            raise ResourceNotFoundException("exemption", entry_id)
        logger.info("Exemption %s removed", entry_id)

    async def list_entries(self, skip: int = 0, limit: int = 100) -> list[ExemptionEntryResult]:
        return await bounded(
            self.exemption_repo.list(skip=skip, limit=limit),
            "exempted_users.list",
            self.timeout,
        )
