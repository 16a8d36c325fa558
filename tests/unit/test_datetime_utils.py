"""UTC datetime helper tests."""

from datetime import UTC, datetime, timedelta, timezone

from practice_access.shared.utils.datetime import add_months, days_until, ensure_utc

T = datetime(2024, 3, 10, 8, 0, tzinfo=UTC)


def test_ensure_utc() -> None:
    assert ensure_utc(None) is None
    assert ensure_utc(datetime(2024, 1, 1)).tzinfo is UTC
    plus_two = datetime(2024, 1, 1, 12, tzinfo=timezone(timedelta(hours=2)))
    assert ensure_utc(plus_two) == datetime(2024, 1, 1, 10, tzinfo=UTC)


def test_add_months_clamps_day() -> None:
    assert add_months(datetime(2024, 1, 31, tzinfo=UTC), 1) == datetime(2024, 2, 29, tzinfo=UTC)
    assert add_months(datetime(2023, 1, 31, tzinfo=UTC), 1) == datetime(2023, 2, 28, tzinfo=UTC)
    assert add_months(datetime(2024, 12, 15, tzinfo=UTC), 1) == datetime(2025, 1, 15, tzinfo=UTC)
    assert add_months(datetime(2024, 3, 31, tzinfo=UTC), -1) == datetime(2024, 2, 29, tzinfo=UTC)


def test_days_until_rounds_up() -> None:
    assert days_until(T + timedelta(seconds=1), T) == 1
    assert days_until(T, T) == 0
    assert days_until(T - timedelta(seconds=1), T) == 0
    assert days_until(T - timedelta(days=1, seconds=1), T) == -1
    assert days_until(T + timedelta(days=5), T) == 5


def test_days_until_accepts_naive_values_as_utc() -> None:
    assert days_until(datetime(2024, 3, 12, 8, 0), T) == 2
