"""Shared utilities: UTC datetime helpers and ID generators."""

from practice_access.shared.utils.datetime import (
    add_months,
    days_until,
    ensure_utc,
    utc_now,
)
from practice_access.shared.utils.generators import generate_cuid

__all__ = [
    "add_months",
    "days_until",
    "ensure_utc",
    "generate_cuid",
    "utc_now",
]
