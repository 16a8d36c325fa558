"""Doctor-facing subscription operations: registration, payment proofs, summary.

Every state change is computed by SubscriptionStateMachine as a full field set
and written in a single update; nothing is applied locally before the write
succeeds.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection
from datetime import datetime

from practice_access.application.dtos.access import RoleResolution
from practice_access.application.dtos.doctor import (
    DoctorAccountResult,
    DoctorCreate,
    DoctorProfile,
    ProofUploadResult,
    SubscriptionSummary,
)
from practice_access.application.interfaces.repositories import IDoctorRepository
from practice_access.application.interfaces.services import (
    INotificationService,
    IProofStore,
)
from practice_access.application.services.exemption_registry import (
    ExemptionRegistry,
    normalize_email,
)
from practice_access.application.services.store_calls import (
    DEFAULT_STORE_TIMEOUT_SECONDS,
    bounded,
)
from practice_access.domain.entities.subscription import (
    SubscriptionPatch,
    SubscriptionStateMachine,
)
from practice_access.domain.enums import NotificationKind, PrincipalRole
from practice_access.domain.exceptions import (
    AuthenticationException,
    DuplicateDoctorException,
    ResourceNotFoundException,
    ValidationException,
)
from practice_access.shared.utils.datetime import days_until, utc_now

logger = logging.getLogger(__name__)

DEFAULT_MAX_PROOF_SIZE = 5 * 1024 * 1024
DEFAULT_PROOF_TYPES = frozenset({"application/pdf", "image/jpeg", "image/jpg", "image/png"})
DEFAULT_REMINDER_WINDOW_DAYS = 5


class SubscriptionService:
    """Registration, payment proof upload/removal and the subscription summary."""

    def __init__(
        self,
        doctor_repo: IDoctorRepository,
        exemption_registry: ExemptionRegistry,
        proof_store: IProofStore,
        notifier: INotificationService,
        state_machine: SubscriptionStateMachine | None = None,
        *,
        timeout: float = DEFAULT_STORE_TIMEOUT_SECONDS,
        max_proof_size: int = DEFAULT_MAX_PROOF_SIZE,
        allowed_proof_types: Collection[str] = DEFAULT_PROOF_TYPES,
        reminder_window_days: int = DEFAULT_REMINDER_WINDOW_DAYS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.doctor_repo = doctor_repo
        self.exemption_registry = exemption_registry
        self.proof_store = proof_store
        self.notifier = notifier
        self.state_machine = state_machine or SubscriptionStateMachine()
        self.timeout = timeout
        self.max_proof_size = max_proof_size
        self.allowed_proof_types = frozenset(t.lower() for t in allowed_proof_types)
        self.reminder_window_days = reminder_window_days
        self.clock = clock

    async def register(
        self,
        resolution: RoleResolution,
        profile: DoctorProfile,
        payment_proof_ref: str | None = None,
    ) -> DoctorAccountResult:
        """Create the doctor account for a principal that has no role yet.

        Exemption is decided here from the registry, never from client input.
        Exempt emails start active without notifying admins; everyone else
        starts pending and admins are notified.

        Raises:
            AuthenticationException: no valid session.
            DuplicateDoctorException: the principal already is an admin or doctor.
            ValidationException: missing email or name.
        """
        principal = resolution.principal
        if not resolution.is_authenticated or principal is None:
            raise AuthenticationException()
        if resolution.role != PrincipalRole.UNKNOWN:
            raise DuplicateDoctorException(principal.id)
        if not principal.email:
            raise ValidationException("Session has no email address", field="email")
        if not profile.full_name.strip():
            raise ValidationException("Full name is required", field="full_name")

        email = normalize_email(principal.email)
        exempt = await self.exemption_registry.is_exempt(email)
        state = self.state_machine.initial_state(
            self.clock(), exempt=exempt, payment_proof_ref=payment_proof_ref
        )
        doctor = await bounded(
            self.doctor_repo.create(
                DoctorCreate(id=principal.id, email=email, profile=profile, subscription=state)
            ),
            "doctors.insert",
            self.timeout,
        )
        logger.info(
            "Doctor %s registered (status=%s, exempt=%s)",
            doctor.id,
            doctor.subscription_status.value,
            exempt,
        )
        if not exempt:
            await self.notifier.notify_admins(
                NotificationKind.NEW_REGISTRATION, doctor.id, doctor.full_name, doctor.email
            )
        return doctor

    def validate_proof(self, content_type: str | None, size: int) -> str:
        """Return the normalized content type or raise ValidationException."""
        normalized = (content_type or "").split(";")[0].strip().lower()
        if normalized not in self.allowed_proof_types:
            raise ValidationException(
                "Unsupported file type. Use PDF, JPG or PNG.", field="file"
            )
        if size <= 0:
            raise ValidationException("File is empty", field="file")
        if size > self.max_proof_size:
            raise ValidationException(
                f"File is too large. Maximum size is {self.max_proof_size // (1024 * 1024)}MB",
                field="file",
            )
        return normalized

    async def store_proof(
        self, owner_id: str, filename: str, content_type: str | None, data: bytes
    ) -> str:
        """Validate and store a proof file; return its reference. No state change."""
        normalized_type = self.validate_proof(content_type, len(data))
        return await self.proof_store.upload_proof(owner_id, filename, normalized_type, data)

    async def upload_payment_proof(
        self,
        doctor: DoctorAccountResult,
        filename: str,
        content_type: str | None,
        data: bytes,
    ) -> ProofUploadResult:
        """Store a payment proof and apply the upload transition.

        Admins are notified whenever the account ends up pending verification;
        an auto-renewal notifies nobody.
        """
        ref = await self.store_proof(doctor.id, filename, content_type, data)
        patch = self.state_machine.on_proof_uploaded(doctor.subscription, self.clock(), ref)
        updated = await self._write(doctor.id, patch)
        auto_renewed = not patch.requires_review()
        logger.info(
            "Payment proof uploaded by doctor %s (auto_renewed=%s)", doctor.id, auto_renewed
        )
        notified = False
        if patch.requires_review():
            notified = await self.notifier.notify_admins(
                NotificationKind.PAYMENT_UPLOADED, updated.id, updated.full_name, updated.email
            )
        return ProofUploadResult(
            doctor=updated,
            payment_proof_ref=ref,
            auto_renewed=auto_renewed,
            admins_notified=notified,
        )

    async def remove_payment_proof(self, doctor: DoctorAccountResult) -> DoctorAccountResult:
        """Clear the proof reference; status and dates are unchanged."""
        return await self._write(doctor.id, self.state_machine.clear_proof_patch())

    async def list_payment_proofs(self, doctor: DoctorAccountResult) -> list[str]:
        """Return the doctor's stored proofs, newest first."""
        return await self.proof_store.list_proofs(doctor.id)

    async def summary(self, doctor: DoctorAccountResult) -> SubscriptionSummary:
        remaining = (
            days_until(doctor.next_payment_date, self.clock())
            if doctor.next_payment_date is not None
            else None
        )
        return SubscriptionSummary(
            subscription_status=doctor.subscription_status,
            is_active=doctor.is_active,
            last_payment_date=doctor.last_payment_date,
            next_payment_date=doctor.next_payment_date,
            payment_proof_ref=doctor.payment_proof_ref,
            days_until_payment=remaining,
            reminder_due=remaining is not None and 0 <= remaining <= self.reminder_window_days,
            is_exempt=await self.exemption_registry.is_exempt(doctor.email),
        )

    async def _write(self, doctor_id: str, patch: SubscriptionPatch) -> DoctorAccountResult:
        updated = await bounded(
            self.doctor_repo.apply_patch(doctor_id, patch), "doctors.update", self.timeout
        )
        if updated is None:
            raise ResourceNotFoundException("doctor", doctor_id)
        return updated
