"""Tests for the staff leaderboard."""

from datetime import date
from decimal import Decimal

import pytest
from django.utils import timezone

from barberman.contrib.staff_rewards import LeaderboardService
from barberman.contrib.staff_rewards.leaderboard import badges_for, performance_score
from barberman.contrib.staff_rewards.models import (
    BarberReward,
    BarberRewardRedemption,
    RedemptionStatus,
)
from barberman.models import Barber, StaffStats


pytestmark = pytest.mark.django_db

TODAY = date(2024, 7, 20)


def make_barber(code, join_date=TODAY, **stats):
    barber = Barber.objects.create(code=code, name=code.title(), join_date=join_date)
    if stats:
        StaffStats.objects.create(barber=barber, **stats)
    return barber


class TestScore:
    """Tests for score and badge rules."""

    def test_weights(self):
        assert performance_score(
            total_visits=100,
            unique_clients=20,
            months_worked=3,
            retention_rate=50.0,
            earned_rewards=1,
        ) == 100 + 40 + 30 + 25 + 50

    def test_badges(self):
        metrics = {
            "months_worked": 13,
            "total_visits": 600,
            "unique_clients": 150,
            "retention_rate": 85.0,
            "earned_rewards": 6,
        }

        assert badges_for(metrics) == ["👑", "🥇", "🤝", "⭐"]
        assert badges_for(metrics, max_badges=2) == ["👑", "🥇"]

    def test_no_badges(self):
        assert badges_for({"total_visits": 99}) == []


class TestLeaderboard:
    """Tests for LeaderboardService.get_leaderboard."""

    def test_ranked_by_score(self):
        make_barber("alpha", total_visits=10)
        make_barber("bravo", total_visits=30)
        make_barber("charlie")

        board = LeaderboardService.get_leaderboard(today=TODAY)

        assert [(e.rank, e.barber_code) for e in board] == [(1, "bravo"), (2, "alpha"), (3, "charlie")]
        assert board[2].score == 0

    def test_tie_broken_by_visits(self):
        # 2 visits + 1 month = 12 and 12 visits = 12
        make_barber("tenured", join_date=date(2024, 6, 20), total_visits=2)
        make_barber("busy", total_visits=12)

        board = LeaderboardService.get_leaderboard(today=TODAY)

        assert [e.score for e in board] == [12, 12]
        assert [e.barber_code for e in board] == ["busy", "tenured"]

    def test_tie_broken_by_months(self):
        # 10 visits + 1 month = 20 and 10 visits + 5 clients = 20
        make_barber("clients", total_visits=10, unique_clients=5)
        make_barber("tenured", join_date=date(2024, 6, 20), total_visits=10)

        board = LeaderboardService.get_leaderboard(today=TODAY)

        assert [e.barber_code for e in board] == ["tenured", "clients"]

    def test_score_rounded_half_up(self):
        # 47% retention weighs 23.5
        make_barber("alpha", retention_rate=Decimal("47.00"))

        (entry,) = LeaderboardService.get_leaderboard(today=TODAY)

        assert entry.score == 24
        assert isinstance(entry.score, int)

    def test_ranked_on_unrounded_score(self):
        # 2 visits + 1.3 retention = 3.3 outranks 3 visits = 3
        make_barber("retained", total_visits=2, retention_rate=Decimal("2.60"))
        make_barber("busy", total_visits=3)

        board = LeaderboardService.get_leaderboard(today=TODAY)

        assert [e.barber_code for e in board] == ["retained", "busy"]
        assert [e.score for e in board] == [3, 3]

    def test_counts_earned_and_redeemed_rewards(self):
        barber = make_barber("alpha", total_visits=5, retention_rate=Decimal("40.00"))
        for index, status in enumerate([RedemptionStatus.EARNED, RedemptionStatus.REDEEMED]):
            reward = BarberReward.objects.create(
                name=f"Reward {index}",
                reward_type="gift",
                reward_value="Mug",
                requirement_type="visits",
                requirement_value=1,
            )
            BarberRewardRedemption.objects.create(
                barber=barber,
                reward=reward,
                status=status,
                earned_at=timezone.now(),
            )

        (entry,) = LeaderboardService.get_leaderboard(today=TODAY)

        assert entry.earned_rewards == 1
        assert entry.redeemed_rewards == 1
        assert entry.retention_rate == 40.0
        assert entry.score == 5 + 20 + 50

    def test_inactive_barbers_excluded(self):
        make_barber("alpha", total_visits=5)
        inactive = make_barber("bravo", total_visits=50)
        inactive.is_active = False
        inactive.save()

        board = LeaderboardService.get_leaderboard(today=TODAY)

        assert [e.barber_code for e in board] == ["alpha"]

    def test_limit(self, settings):
        for index in range(4):
            make_barber(f"barber-{index}", total_visits=index)
        settings.BARBERMAN = {"LEADERBOARD_LIMIT": 2}

        assert len(LeaderboardService.get_leaderboard(today=TODAY)) == 2
        assert len(LeaderboardService.get_leaderboard(limit=3, today=TODAY)) == 3
