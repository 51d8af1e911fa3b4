"""
Progress calculators, one per achievement category.

Each calculator reads StaffFacts and windowed counts from a
StaffFactsBackend and returns a ProgressResult. Categories without a
calculator (teamwork, learning, milestone) are skipped by the service.

Adding a category means adding a ProgressCalculator subclass and
registering it in CALCULATORS.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from barberman.conf import barberman_settings
from barberman.contrib.achievements.models import (
    CLIENT_RETENTION,
    DAILY_VISITS,
    SERVICE_VARIETY,
    WEEKLY_CONSISTENCY,
    Achievement,
    AchievementCategory,
    RequirementType,
    Timeframe,
)
from barberman.protocols.staff import StaffFacts, StaffFactsBackend
from barberman.services.tenure import days_between, whole_months_between
from barberman.utils import (
    day_bounds,
    month_start,
    next_month_start,
    start_of_day,
    week_start,
)


@dataclass(frozen=True)
class ProgressResult:
    progress: int
    streak: int = 0
    metadata: dict = field(default_factory=dict)


def timeframe_window(timeframe: str, today: date) -> tuple[datetime, datetime] | None:
    """[start, end) of the current calendar period, or None for all-time."""
    if timeframe == Timeframe.DAILY:
        return day_bounds(today)
    if timeframe == Timeframe.WEEKLY:
        first = week_start(today)
        return start_of_day(first), start_of_day(first + timedelta(days=7))
    if timeframe == Timeframe.MONTHLY:
        return start_of_day(month_start(today)), start_of_day(next_month_start(today))
    if timeframe == Timeframe.YEARLY:
        return start_of_day(date(today.year, 1, 1)), start_of_day(date(today.year + 1, 1, 1))
    return None


class ProgressCalculator(ABC):
    """Computes a barber's progress on achievements of one category."""

    category: str = ""

    @abstractmethod
    def calculate(
        self,
        facts: StaffFacts,
        achievement: Achievement,
        backend: StaffFactsBackend,
        today: date,
    ) -> ProgressResult:
        ...


class TenureCalculator(ProgressCalculator):
    category = AchievementCategory.TENURE

    def calculate(self, facts, achievement, backend, today):
        if facts.join_date is None:
            return ProgressResult(0)

        days = days_between(facts.join_date, today)
        if achievement.requirement_type == RequirementType.DAYS:
            return ProgressResult(min(days, achievement.requirement))
        if achievement.requirement_type == RequirementType.MILESTONE:
            months = whole_months_between(facts.join_date, today)
            return ProgressResult(min(months, achievement.requirement))
        return ProgressResult(days)


class VisitsCalculator(ProgressCalculator):
    category = AchievementCategory.VISITS

    def calculate(self, facts, achievement, backend, today):
        window = timeframe_window(achievement.timeframe, today)
        if window is None:
            return ProgressResult(facts.total_visits)
        return ProgressResult(backend.count_visits(facts.barber_id, *window))


class ClientsCalculator(ProgressCalculator):
    category = AchievementCategory.CLIENTS

    def calculate(self, facts, achievement, backend, today):
        window = timeframe_window(achievement.timeframe, today)
        if window is None:
            return ProgressResult(facts.unique_clients)
        return ProgressResult(backend.count_clients(facts.barber_id, *window))


class ConsistencyCalculator(ProgressCalculator):
    category = AchievementCategory.CONSISTENCY

    def calculate(self, facts, achievement, backend, today):
        if achievement.subcategory == DAILY_VISITS:
            return self._daily_streak(facts, achievement, backend, today)
        if achievement.subcategory == WEEKLY_CONSISTENCY:
            return self._consistent_weeks(facts, achievement, backend, today)
        return ProgressResult(0)

    def _daily_streak(self, facts, achievement, backend, today) -> ProgressResult:
        """
        Consecutive qualifying days walking back from today.

        Today may still be in progress, so a miss on day 0 does not end the
        scan; any other miss does.
        """
        minimum = achievement.minimum_value
        if minimum is None:
            minimum = barberman_settings.DEFAULT_DAILY_MINIMUM

        streak = 0
        today_met = False
        for offset in range(barberman_settings.STREAK_LOOKBACK_DAYS):
            day = today - timedelta(days=offset)
            if backend.count_visits(facts.barber_id, *day_bounds(day)) >= minimum:
                streak += 1
                if offset == 0:
                    today_met = True
            elif offset > 0:
                break

        return ProgressResult(
            progress=streak,
            streak=streak,
            metadata={"current_streak": streak, "today_met": today_met},
        )

    def _consistent_weeks(self, facts, achievement, backend, today) -> ProgressResult:
        """Weeks (Sunday start) in the lookback that met the minimum, contiguous or not."""
        minimum = achievement.minimum_value
        if minimum is None:
            minimum = barberman_settings.DEFAULT_WEEKLY_MINIMUM

        current_week = week_start(today)
        weeks = 0
        for offset in range(barberman_settings.CONSISTENCY_LOOKBACK_WEEKS):
            first = current_week - timedelta(weeks=offset)
            start, end = start_of_day(first), start_of_day(first + timedelta(days=7))
            if backend.count_visits(facts.barber_id, start, end) >= minimum:
                weeks += 1

        return ProgressResult(progress=weeks, metadata={"consistent_weeks": weeks})


class QualityCalculator(ProgressCalculator):
    category = AchievementCategory.QUALITY

    def calculate(self, facts, achievement, backend, today):
        if achievement.subcategory == CLIENT_RETENTION:
            return ProgressResult(math.floor(facts.retention_rate))
        if achievement.subcategory == SERVICE_VARIETY:
            return ProgressResult(facts.service_variety)
        return ProgressResult(0)


CALCULATORS: dict[str, ProgressCalculator] = {
    calculator.category: calculator
    for calculator in (
        TenureCalculator(),
        VisitsCalculator(),
        ClientsCalculator(),
        ConsistencyCalculator(),
        QualityCalculator(),
    )
}


def get_calculator(category: str) -> ProgressCalculator | None:
    """Calculator for a category, or None when the category is not computed."""
    return CALCULATORS.get(category)
