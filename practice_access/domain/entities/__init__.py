"""Domain entities: subscription state and its transition rules."""

from practice_access.domain.entities.subscription import (
    SubscriptionPatch,
    SubscriptionState,
    SubscriptionStateMachine,
)

__all__ = [
    "SubscriptionPatch",
    "SubscriptionState",
    "SubscriptionStateMachine",
]
