"""Achievement service — staff achievement progress and completion."""

import logging
from dataclasses import dataclass
from datetime import date, datetime

from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from barberman.conf import barberman_settings
from barberman.contrib.achievements.calculators import ProgressResult, get_calculator
from barberman.contrib.achievements.models import (
    TIER_ORDER,
    Achievement,
    AchievementCategory,
    BarberAchievement,
    Tier,
)
from barberman.exceptions import NotFound
from barberman.models import Barber
from barberman.services.stats import StatsService, get_staff_facts_backend
from barberman.signals import achievement_completed
from barberman.utils import percentage

logger = logging.getLogger(__name__)


@dataclass
class AchievementProgress:
    """Achievement definition merged with a barber's stored progress."""

    achievement_id: int
    title: str
    description: str
    category: str
    tier: str
    badge: str
    color: str
    points: int
    progress: int
    requirement: int
    is_completed: bool
    completed_at: datetime | None
    completion_count: int
    current_streak: int
    progress_percentage: int
    reward: dict | None = None


@dataclass
class AchievementLeaderboardEntry:
    rank: int
    barber_id: int
    barber_code: str
    name: str
    total_points: int
    completed_achievements: int
    gold_achievements: int
    platinum_achievements: int
    diamond_achievements: int


class AchievementService:
    """
    Service for staff achievement operations.

    Uses @classmethod for extensibility (consistent with other services).
    """

    @classmethod
    def update_progress(cls, barber_code: str, today: date | None = None) -> list[BarberAchievement]:
        """
        Recompute progress on every active achievement for a barber.

        A failure on one achievement is logged and skipped; the others are
        still processed.

        Returns:
            BarberAchievement records that were updated

        Raises:
            NotFound: If barber not found
        """
        barber = StatsService.get_barber(barber_code)
        backend = get_staff_facts_backend()
        facts = backend.get_facts(barber.pk)
        if facts is None:
            raise NotFound("BARBER_NOT_FOUND", barber_code=barber_code)

        today = today or timezone.localdate()
        updated = []

        for achievement in Achievement.objects.filter(is_active=True).order_by("pk"):
            calculator = get_calculator(achievement.category)
            if calculator is None:
                continue

            try:
                result = calculator.calculate(facts, achievement, backend, today)
                record, completed = cls._apply_progress(barber, achievement, result)
            except Exception:
                logger.exception(
                    "Error updating achievement %s for barber %s", achievement.pk, barber.code
                )
                continue

            updated.append(record)
            if completed:
                logger.info(
                    "Barber %s completed achievement %s (%s)",
                    barber.code,
                    achievement.pk,
                    achievement.title,
                )
                achievement_completed.send(
                    sender=BarberAchievement,
                    barber_achievement=record,
                    achievement=achievement,
                )

        return updated

    @classmethod
    def get_progress(cls, barber_code: str) -> list[AchievementProgress]:
        """
        Every active achievement with the barber's stored progress.

        Raises:
            NotFound: If barber not found
        """
        barber = StatsService.get_barber(barber_code)
        records = {
            r.achievement_id: r
            for r in BarberAchievement.objects.filter(barber=barber)
        }
        achievements = sorted(
            Achievement.objects.filter(is_active=True),
            key=lambda a: (TIER_ORDER.get(a.tier, len(TIER_ORDER)), a.points, a.pk),
        )

        result = []
        for achievement in achievements:
            record = records.get(achievement.pk)
            progress = record.progress if record else 0
            result.append(
                AchievementProgress(
                    achievement_id=achievement.pk,
                    title=achievement.title,
                    description=achievement.description,
                    category=achievement.category,
                    tier=achievement.tier,
                    badge=achievement.badge,
                    color=achievement.color,
                    points=achievement.points,
                    progress=progress,
                    requirement=achievement.requirement,
                    is_completed=record.is_completed if record else False,
                    completed_at=record.completed_at if record else None,
                    completion_count=record.completion_count if record else 0,
                    current_streak=record.current_streak if record else 0,
                    progress_percentage=percentage(progress, achievement.requirement),
                    reward=achievement.reward,
                )
            )
        return result

    @classmethod
    def leaderboard(cls, limit: int | None = None) -> list[AchievementLeaderboardEntry]:
        """Active barbers ranked by points of completed achievements."""
        limit = limit or barberman_settings.LEADERBOARD_LIMIT
        rows = (
            BarberAchievement.objects.filter(is_completed=True, barber__is_active=True)
            .values("barber_id", "barber__code", "barber__name")
            .annotate(
                total_points=Sum("achievement__points"),
                completed_achievements=Count("id"),
                gold_achievements=Count("id", filter=Q(achievement__tier=Tier.GOLD)),
                platinum_achievements=Count("id", filter=Q(achievement__tier=Tier.PLATINUM)),
                diamond_achievements=Count("id", filter=Q(achievement__tier=Tier.DIAMOND)),
            )
            .order_by("-total_points", "-completed_achievements", "barber__name")[:limit]
        )

        return [
            AchievementLeaderboardEntry(
                rank=index,
                barber_id=row["barber_id"],
                barber_code=row["barber__code"],
                name=row["barber__name"],
                total_points=row["total_points"] or 0,
                completed_achievements=row["completed_achievements"],
                gold_achievements=row["gold_achievements"],
                platinum_achievements=row["platinum_achievements"],
                diamond_achievements=row["diamond_achievements"],
            )
            for index, row in enumerate(rows, start=1)
        ]

    @classmethod
    def _apply_progress(
        cls,
        barber: Barber,
        achievement: Achievement,
        result: ProgressResult,
    ) -> tuple[BarberAchievement, bool]:
        """
        Upsert the progress record and apply the completion rule.

        Returns:
            Tuple of (BarberAchievement, completed_now: bool)
        """
        now = timezone.now()
        with transaction.atomic():
            record, _ = BarberAchievement.objects.select_for_update().get_or_create(
                barber=barber,
                achievement=achievement,
            )

            was_completed = record.is_completed
            record.progress = result.progress
            record.last_progress_at = now
            record.metadata = {**record.metadata, **result.metadata}
            if achievement.category == AchievementCategory.CONSISTENCY:
                record.current_streak = result.streak

            completed = False
            if result.progress >= achievement.requirement and not was_completed:
                record.is_completed = True
                record.completed_at = now
                record.completion_count += 1
                completed = True

                if achievement.is_repeatable and (
                    achievement.max_completions is None
                    or record.completion_count < achievement.max_completions
                ):
                    record.is_completed = False
                    record.progress = 0

            record.save()

        return record, completed
