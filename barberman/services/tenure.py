"""Tenure math — elapsed calendar months/days and duration display.

Eligibility uses whole calendar months (a cursor advanced one month at a
time from the join date). The progress bar uses an average-days-per-month
percentage so it moves daily instead of once a month.
"""

import calendar
import math
from dataclasses import dataclass
from datetime import date, datetime

from django.utils import timezone

from barberman.conf import barberman_settings
from barberman.utils import round_half_up


@dataclass(frozen=True)
class DurationProgress:
    """Tenure measured against a requirement expressed in months."""

    total_days_worked: int
    whole_months_worked: int
    remaining_days: int
    display_text: str
    required_days: int
    progress_percentage: int
    requirement_months: int

    @property
    def is_eligible(self) -> bool:
        return self.whole_months_worked >= self.requirement_months

    def as_dict(self) -> dict:
        return {
            "total_days": self.total_days_worked,
            "months": self.whole_months_worked,
            "remaining_days": self.remaining_days,
            "display_text": self.display_text,
        }


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    return value


def add_months(start: date, months: int) -> date:
    """Shift by calendar months, clamping to the last day of short months."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def whole_months_between(start: date | datetime, end: date | datetime) -> int:
    """Count whole calendar months from start while the cursor stays <= end."""
    start, end = _as_date(start), _as_date(end)
    months = 0
    while add_months(start, months + 1) <= end:
        months += 1
    return months


def days_between(start: date | datetime, end: date | datetime) -> int:
    return max(0, (_as_date(end) - _as_date(start)).days)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_duration(months: int, days: int) -> str:
    """Render '1 year, 2 months, 3 days', omitting zero components."""
    years, rest = divmod(months, 12)
    parts = []
    if years:
        parts.append(_plural(years, "year"))
    if rest:
        parts.append(_plural(rest, "month"))
    if days or not parts:
        parts.append(_plural(days, "day"))
    return ", ".join(parts)


def duration_progress(
    join_date: date | datetime,
    requirement_months: int,
    today: date | None = None,
) -> DurationProgress:
    """
    Measure tenure from join_date to today against a month requirement.

    Example:
        >>> p = duration_progress(date(2024, 1, 15), 6, today=date(2024, 7, 20))
        >>> p.whole_months_worked, p.remaining_days, p.display_text
        (6, 5, '6 months, 5 days')
    """
    today = today or timezone.localdate()
    join = _as_date(join_date)
    if join > today:
        join = today

    total_days = days_between(join, today)
    months = whole_months_between(join, today)
    remaining_days = (today - add_months(join, months)).days

    required_days = math.floor(requirement_months * barberman_settings.AVERAGE_DAYS_PER_MONTH)
    if required_days > 0:
        pct = min(100, round_half_up(total_days / required_days * 100))
    else:
        pct = 100

    return DurationProgress(
        total_days_worked=total_days,
        whole_months_worked=months,
        remaining_days=remaining_days,
        display_text=format_duration(months, remaining_days),
        required_days=required_days,
        progress_percentage=pct,
        requirement_months=requirement_months,
    )
