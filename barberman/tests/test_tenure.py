"""Tests for tenure math."""

from datetime import date

import pytest

from barberman.services.tenure import (
    add_months,
    days_between,
    duration_progress,
    format_duration,
    whole_months_between,
)


class TestCalendarMonths:
    """Tests for whole calendar month counting."""

    def test_add_months_clamps_to_month_end(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
        assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)

    def test_whole_months(self):
        assert whole_months_between(date(2024, 1, 15), date(2024, 7, 20)) == 6
        assert whole_months_between(date(2024, 1, 15), date(2024, 7, 14)) == 5
        assert whole_months_between(date(2024, 1, 15), date(2024, 7, 15)) == 6
        assert whole_months_between(date(2024, 1, 15), date(2024, 1, 15)) == 0

    def test_days_between_never_negative(self):
        assert days_between(date(2024, 1, 15), date(2024, 1, 20)) == 5
        assert days_between(date(2024, 1, 20), date(2024, 1, 15)) == 0


class TestFormatDuration:
    """Tests for duration display text."""

    @pytest.mark.parametrize(
        "months,days,expected",
        [
            (0, 0, "0 days"),
            (0, 1, "1 day"),
            (1, 0, "1 month"),
            (6, 5, "6 months, 5 days"),
            (12, 0, "1 year"),
            (14, 3, "1 year, 2 months, 3 days"),
            (25, 1, "2 years, 1 month, 1 day"),
        ],
    )
    def test_format(self, months, days, expected):
        assert format_duration(months, days) == expected


class TestDurationProgress:
    """Tests for tenure progress against a month requirement."""

    def test_example_breakdown(self):
        progress = duration_progress(date(2024, 1, 15), 6, today=date(2024, 7, 20))

        assert progress.whole_months_worked == 6
        assert progress.remaining_days == 5
        assert progress.total_days_worked == 187
        assert progress.display_text == "6 months, 5 days"
        assert progress.is_eligible is True

    def test_percentage_uses_average_month(self):
        # 6 * 30.44 = 182.64 -> 182 required days; 91 / 182 = 50%
        progress = duration_progress(date(2024, 1, 1), 6, today=date(2024, 4, 1))

        assert progress.required_days == 182
        assert progress.total_days_worked == 91
        assert progress.progress_percentage == 50
        assert progress.is_eligible is False

    def test_percentage_capped(self):
        progress = duration_progress(date(2020, 1, 1), 3, today=date(2024, 1, 1))

        assert progress.progress_percentage == 100

    def test_future_join_date(self):
        progress = duration_progress(date(2025, 1, 1), 3, today=date(2024, 1, 1))

        assert progress.total_days_worked == 0
        assert progress.whole_months_worked == 0
        assert progress.display_text == "0 days"

    def test_as_dict(self):
        progress = duration_progress(date(2024, 1, 15), 6, today=date(2024, 7, 20))

        assert progress.as_dict() == {
            "total_days": 187,
            "months": 6,
            "remaining_days": 5,
            "display_text": "6 months, 5 days",
        }

    def test_custom_average_days_per_month(self, settings):
        settings.BARBERMAN = {"AVERAGE_DAYS_PER_MONTH": 30}

        progress = duration_progress(date(2024, 1, 1), 1, today=date(2024, 1, 16))

        assert progress.required_days == 30
        assert progress.progress_percentage == 50
