"""Staff leaderboard — weighted performance score and badges."""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from django.db.models import Count, Q
from django.utils import timezone

from barberman.conf import barberman_settings
from barberman.contrib.staff_rewards.models import RedemptionStatus
from barberman.models import Barber
from barberman.services.tenure import whole_months_between
from barberman.utils import round_half_up

logger = logging.getLogger(__name__)

# Score weights
VISIT_WEIGHT = 1
CLIENT_WEIGHT = 2
MONTH_WEIGHT = 10
RETENTION_WEIGHT = 0.5
EARNED_REWARD_WEIGHT = 50

# (metric, threshold, badge); first match per metric wins
BADGE_RULES = [
    ("months_worked", [(12, "👑"), (6, "🏆"), (3, "🥇")]),
    ("total_visits", [(1000, "💎"), (500, "🥇"), (100, "🥈")]),
    ("unique_clients", [(200, "🌟"), (100, "🤝")]),
    ("retention_rate", [(80, "⭐")]),
    ("earned_rewards", [(5, "🎖️")]),
]


@dataclass
class LeaderboardEntry:
    rank: int
    barber_id: int
    barber_code: str
    name: str
    join_date: date | None
    months_worked: int
    total_visits: int
    unique_clients: int
    retention_rate: float
    average_visits_per_day: float
    earned_rewards: int
    redeemed_rewards: int
    score: int
    badges: list[str] = field(default_factory=list)


def performance_score(
    total_visits: int,
    unique_clients: int,
    months_worked: int,
    retention_rate: float,
    earned_rewards: int,
) -> float:
    return (
        total_visits * VISIT_WEIGHT
        + unique_clients * CLIENT_WEIGHT
        + months_worked * MONTH_WEIGHT
        + retention_rate * RETENTION_WEIGHT
        + earned_rewards * EARNED_REWARD_WEIGHT
    )


def badges_for(metrics: dict, max_badges: int | None = None) -> list[str]:
    """Badges earned by a set of leaderboard metrics, capped at max_badges."""
    max_badges = barberman_settings.LEADERBOARD_MAX_BADGES if max_badges is None else max_badges
    badges = []
    for metric, tiers in BADGE_RULES:
        value = metrics.get(metric, 0)
        for threshold, badge in tiers:
            if value >= threshold:
                badges.append(badge)
                break
    return badges[:max_badges]


class LeaderboardService:
    """
    Service for the staff leaderboard.

    Uses @classmethod for extensibility (consistent with other services).
    """

    @classmethod
    def get_leaderboard(
        cls,
        limit: int | None = None,
        today: date | None = None,
    ) -> list[LeaderboardEntry]:
        """
        Rank active barbers by weighted performance score.

        Ties are broken by total visits, then months worked (both descending).
        Barbers without stored stats count as zero. Scores are rounded to
        whole points once ranks are assigned.
        """
        limit = limit or barberman_settings.LEADERBOARD_LIMIT
        today = today or timezone.localdate()

        barbers = (
            Barber.objects.filter(is_active=True)
            .select_related("stats")
            .annotate(
                earned_count=Count(
                    "reward_redemptions",
                    filter=Q(reward_redemptions__status=RedemptionStatus.EARNED),
                ),
                redeemed_count=Count(
                    "reward_redemptions",
                    filter=Q(reward_redemptions__status=RedemptionStatus.REDEEMED),
                ),
            )
        )

        entries = []
        for barber in barbers:
            stats = getattr(barber, "stats", None)
            total_visits = stats.total_visits if stats else 0
            unique_clients = stats.unique_clients if stats else 0
            retention_rate = float(stats.retention_rate if stats else Decimal("0"))
            average_per_day = float(stats.average_visits_per_day if stats else Decimal("0"))
            months = whole_months_between(barber.join_date, today) if barber.join_date else 0

            metrics = {
                "months_worked": months,
                "total_visits": total_visits,
                "unique_clients": unique_clients,
                "retention_rate": retention_rate,
                "earned_rewards": barber.earned_count,
            }
            entries.append(
                LeaderboardEntry(
                    rank=0,
                    barber_id=barber.pk,
                    barber_code=barber.code,
                    name=barber.name,
                    join_date=barber.join_date,
                    months_worked=months,
                    total_visits=total_visits,
                    unique_clients=unique_clients,
                    retention_rate=round(retention_rate, 1),
                    average_visits_per_day=round(average_per_day, 1),
                    earned_rewards=barber.earned_count,
                    redeemed_rewards=barber.redeemed_count,
                    score=performance_score(
                        total_visits, unique_clients, months, retention_rate, barber.earned_count
                    ),
                    badges=badges_for(metrics),
                )
            )

        entries.sort(key=lambda e: (-e.score, -e.total_visits, -e.months_worked))
        entries = entries[:limit]
        for rank, entry in enumerate(entries, start=1):
            entry.rank = rank
            # ranked on the exact score, reported rounded
            entry.score = round_half_up(entry.score)

        logger.debug("Built staff leaderboard with %d entries", len(entries))
        return entries
