"""Service interfaces (ports) for the application layer.

Protocols define contracts for external collaborators (DIP): the blob store
holding payment proofs and the notification channel to administrators.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from practice_access.domain.enums import NotificationKind

if TYPE_CHECKING:
    from practice_access.application.dtos.access import ReminderCandidate


# Blob store interface
class IProofStore(Protocol):
    """Protocol for the payment proof blob store. Never interprets file bytes."""

    async def upload_proof(
        self,
        principal_id: str,
        filename: str,
        content_type: str,
        data: bytes,
    ) -> str:
        """Store a proof under the principal and return its opaque reference."""

    async def list_proofs(self, principal_id: str) -> list[str]:
        """Return the principal's proof references, newest first."""

    async def delete_proof(self, ref: str) -> bool:
        """Delete a proof; return False if it did not exist."""


# Notification service interface
class INotificationService(Protocol):
    """Protocol for notifying administrators and doctors. Failures never propagate."""

    async def notify_admins(
        self,
        kind: NotificationKind,
        doctor_id: str,
        doctor_name: str,
        doctor_email: str,
    ) -> bool:
        """Notify administrators about a doctor; return False if delivery failed."""

    async def send_payment_reminder(self, candidate: ReminderCandidate) -> bool:
        """Remind a doctor that payment is due soon; return False if delivery failed."""
