"""Tests for achievement progress calculators."""

from datetime import date, timedelta
from decimal import Decimal

from django.utils import timezone

from barberman.contrib.achievements.calculators import (
    ClientsCalculator,
    ConsistencyCalculator,
    QualityCalculator,
    TenureCalculator,
    VisitsCalculator,
    get_calculator,
    timeframe_window,
)
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


TODAY = date(2024, 7, 17)  # a Wednesday


class FakeBackend:
    """In-memory StaffFactsBackend keyed by the local date a window starts on."""

    def __init__(self, visits=None, clients=None):
        self.visits = visits or {}
        self.clients = clients or {}

    def get_facts(self, barber_id):
        return None

    def count_visits(self, barber_id, start, end):
        return self.visits.get(timezone.localtime(start).date(), 0)

    def count_clients(self, barber_id, start, end):
        return self.clients.get(timezone.localtime(start).date(), 0)


def make_facts(**kwargs):
    kwargs.setdefault("barber_id", 1)
    kwargs.setdefault("join_date", date(2024, 1, 15))
    return StaffFacts(**kwargs)


def make_achievement(**kwargs):
    kwargs.setdefault("title", "Test")
    kwargs.setdefault("requirement", 10)
    return Achievement(**kwargs)


class TestTimeframeWindow:
    """Tests for calendar windows."""

    def test_weekly_starts_on_sunday(self):
        start, end = timeframe_window(Timeframe.WEEKLY, TODAY)

        assert timezone.localtime(start).date() == date(2024, 7, 14)
        assert timezone.localtime(end).date() == date(2024, 7, 21)

    def test_monthly(self):
        start, end = timeframe_window(Timeframe.MONTHLY, TODAY)

        assert timezone.localtime(start).date() == date(2024, 7, 1)
        assert timezone.localtime(end).date() == date(2024, 8, 1)

    def test_all_time(self):
        assert timeframe_window(Timeframe.ALL_TIME, TODAY) is None


class TestTenureCalculator:
    """Tests for tenure progress."""

    def test_days_capped_at_requirement(self):
        achievement = make_achievement(
            category=AchievementCategory.TENURE,
            requirement_type=RequirementType.DAYS,
            requirement=100,
        )

        result = TenureCalculator().calculate(make_facts(), achievement, FakeBackend(), TODAY)

        assert result.progress == 100

    def test_milestone_counts_calendar_months(self):
        achievement = make_achievement(
            category=AchievementCategory.TENURE,
            requirement_type=RequirementType.MILESTONE,
            requirement=12,
        )

        result = TenureCalculator().calculate(make_facts(), achievement, FakeBackend(), TODAY)

        assert result.progress == 6

    def test_without_join_date(self):
        achievement = make_achievement(category=AchievementCategory.TENURE)

        result = TenureCalculator().calculate(
            make_facts(join_date=None), achievement, FakeBackend(), TODAY
        )

        assert result.progress == 0


class TestCountCalculators:
    """Tests for visit and client counts."""

    def test_all_time_visits_use_totals(self):
        achievement = make_achievement(category=AchievementCategory.VISITS)

        result = VisitsCalculator().calculate(
            make_facts(total_visits=42), achievement, FakeBackend(), TODAY
        )

        assert result.progress == 42

    def test_monthly_visits_use_window(self):
        achievement = make_achievement(
            category=AchievementCategory.VISITS,
            timeframe=Timeframe.MONTHLY,
        )
        backend = FakeBackend(visits={date(2024, 7, 1): 17})

        result = VisitsCalculator().calculate(
            make_facts(total_visits=42), achievement, backend, TODAY
        )

        assert result.progress == 17

    def test_daily_clients_use_window(self):
        achievement = make_achievement(
            category=AchievementCategory.CLIENTS,
            timeframe=Timeframe.DAILY,
        )
        backend = FakeBackend(clients={TODAY: 4})

        result = ClientsCalculator().calculate(
            make_facts(unique_clients=90), achievement, backend, TODAY
        )

        assert result.progress == 4


class TestDailyStreak:
    """Tests for consecutive-day streaks."""

    def _achievement(self, minimum=None):
        return make_achievement(
            category=AchievementCategory.CONSISTENCY,
            subcategory=DAILY_VISITS,
            requirement_type=RequirementType.STREAK,
            minimum_value=minimum,
        )

    def test_stops_at_first_missed_day(self):
        backend = FakeBackend(visits={
            TODAY: 1,
            TODAY - timedelta(days=1): 1,
            TODAY - timedelta(days=2): 1,
            TODAY - timedelta(days=4): 1,
            TODAY - timedelta(days=5): 1,
        })

        result = ConsistencyCalculator().calculate(make_facts(), self._achievement(), backend, TODAY)

        assert result.progress == 3
        assert result.metadata == {"current_streak": 3, "today_met": True}

    def test_today_in_progress_does_not_break_streak(self):
        backend = FakeBackend(visits={
            TODAY - timedelta(days=1): 1,
            TODAY - timedelta(days=2): 1,
        })

        result = ConsistencyCalculator().calculate(make_facts(), self._achievement(), backend, TODAY)

        assert result.progress == 2
        assert result.streak == 2
        assert result.metadata == {"current_streak": 2, "today_met": False}

    def test_earlier_miss_ends_streak(self):
        backend = FakeBackend(visits={
            TODAY: 1,
            TODAY - timedelta(days=2): 1,
            TODAY - timedelta(days=3): 1,
        })

        result = ConsistencyCalculator().calculate(make_facts(), self._achievement(), backend, TODAY)

        assert result.progress == 1
        assert result.metadata["today_met"] is True

    def test_minimum_value(self):
        backend = FakeBackend(visits={TODAY: 3, TODAY - timedelta(days=1): 2})

        result = ConsistencyCalculator().calculate(
            make_facts(), self._achievement(minimum=3), backend, TODAY
        )

        assert result.progress == 1

    def test_lookback_bounds_streak(self, settings):
        settings.BARBERMAN = {"STREAK_LOOKBACK_DAYS": 5}
        backend = FakeBackend(visits={TODAY - timedelta(days=n): 1 for n in range(10)})

        result = ConsistencyCalculator().calculate(make_facts(), self._achievement(), backend, TODAY)

        assert result.progress == 5


class TestWeeklyConsistency:
    """Tests for qualifying weeks."""

    def test_counts_non_contiguous_weeks(self):
        this_week = date(2024, 7, 14)
        backend = FakeBackend(visits={
            this_week: 5,
            this_week - timedelta(weeks=1): 2,
            this_week - timedelta(weeks=2): 6,
            this_week - timedelta(weeks=12): 9,
        })
        achievement = make_achievement(
            category=AchievementCategory.CONSISTENCY,
            subcategory=WEEKLY_CONSISTENCY,
        )

        result = ConsistencyCalculator().calculate(make_facts(), achievement, backend, TODAY)

        assert result.progress == 2
        assert result.metadata == {"consistent_weeks": 2}


class TestQualityCalculator:
    """Tests for quality progress."""

    def test_retention_is_floored(self):
        achievement = make_achievement(
            category=AchievementCategory.QUALITY,
            subcategory=CLIENT_RETENTION,
        )

        result = QualityCalculator().calculate(
            make_facts(retention_rate=Decimal("79.90")), achievement, FakeBackend(), TODAY
        )

        assert result.progress == 79

    def test_service_variety(self):
        achievement = make_achievement(
            category=AchievementCategory.QUALITY,
            subcategory=SERVICE_VARIETY,
        )

        result = QualityCalculator().calculate(
            make_facts(service_variety=4), achievement, FakeBackend(), TODAY
        )

        assert result.progress == 4


class TestRegistry:
    """Tests for the calculator registry."""

    def test_uncomputed_categories(self):
        assert get_calculator(AchievementCategory.TEAMWORK) is None
        assert get_calculator(AchievementCategory.LEARNING) is None
        assert isinstance(get_calculator(AchievementCategory.VISITS), VisitsCalculator)

    def test_fake_backend_satisfies_protocol(self):
        assert isinstance(FakeBackend(), StaffFactsBackend)
