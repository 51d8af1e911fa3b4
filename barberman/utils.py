"""Shared helpers for progress math and calendar windows."""

from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.utils import timezone


def round_half_up(value) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percentage(progress, requirement) -> int:
    """Progress as an integer percentage, capped at 100."""
    if not requirement or requirement <= 0:
        return 100
    return min(100, round_half_up(Decimal(str(progress)) / Decimal(str(requirement)) * 100))


def start_of_day(day: date) -> datetime:
    """Aware datetime at local midnight of ``day``."""
    return timezone.make_aware(datetime.combine(day, time.min))


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """[start, end) of a local calendar day."""
    return start_of_day(day), start_of_day(day + timedelta(days=1))


def week_start(day: date) -> date:
    """Sunday that starts the week containing ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def month_start(day: date) -> date:
    return day.replace(day=1)


def next_month_start(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)
