"""Infrastructure services: notification delivery."""

from practice_access.infrastructure.services.admin_notification_service import (
    LogOnlyNotificationService,
)

__all__ = ["LogOnlyNotificationService"]
