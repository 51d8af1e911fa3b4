"""Staff statistics service — aggregate visits into StaffStats."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from django.apps import apps
from django.db.models import Count, Max
from django.utils import timezone
from django.utils.module_loading import import_string

from barberman.conf import barberman_settings
from barberman.exceptions import NotFound
from barberman.models import Barber, Service, StaffStats, Visit
from barberman.protocols.staff import StaffFactsBackend
from barberman.services.tenure import days_between

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def get_staff_facts_backend() -> StaffFactsBackend:
    """Get configured StaffFactsBackend."""
    backend_class = import_string(barberman_settings.STAFF_FACTS_BACKEND)
    return backend_class()


@dataclass
class RefreshSummary:
    """What a staff refresh changed."""

    barber_code: str
    stats: StaffStats
    achievements_updated: int = 0
    rewards_earned: list = field(default_factory=list)


class StatsService:
    """
    Service for staff statistics.

    Uses @classmethod for extensibility (consistent with other services).
    """

    @classmethod
    def get_stats(cls, barber_code: str) -> StaffStats | None:
        try:
            return StaffStats.objects.select_related("barber").get(barber__code=barber_code)
        except StaffStats.DoesNotExist:
            return None

    @classmethod
    def recalculate(cls, barber_code: str) -> StaffStats:
        """
        Recalculate stored facts for a barber from visit records.

        Raises:
            NotFound: If barber not found
        """
        barber = cls.get_barber(barber_code)
        visits = Visit.objects.filter(barber=barber)

        totals = visits.aggregate(
            total_visits=Count("id"),
            unique_clients=Count("customer", distinct=True),
            last_visit_at=Max("visit_date"),
        )
        total_visits = totals["total_visits"] or 0
        unique_clients = totals["unique_clients"] or 0

        returning_clients = (
            visits.values("customer_id")
            .annotate(visit_total=Count("id"))
            .filter(visit_total__gt=1)
            .count()
        )
        service_variety = (
            Service.objects.filter(visits__barber=barber).distinct().count()
        )

        if unique_clients:
            retention_rate = (
                Decimal(returning_clients * 100) / Decimal(unique_clients)
            ).quantize(TWO_PLACES)
        else:
            retention_rate = Decimal("0")

        days_worked = max(1, days_between(barber.join_date, timezone.localdate()))
        average_per_day = (Decimal(total_visits) / Decimal(days_worked)).quantize(TWO_PLACES)

        stats, _ = StaffStats.objects.update_or_create(
            barber=barber,
            defaults={
                "total_visits": total_visits,
                "unique_clients": unique_clients,
                "returning_clients": returning_clients,
                "retention_rate": retention_rate,
                "service_variety": service_variety,
                "average_visits_per_day": average_per_day,
                "last_visit_at": totals["last_visit_at"],
            },
        )
        return stats

    @classmethod
    def recalculate_all(cls) -> int:
        """
        Recalculate stats for all active barbers.

        Returns:
            Number of barbers processed
        """
        count = 0
        for barber in Barber.objects.filter(is_active=True):
            try:
                cls.recalculate(barber.code)
                count += 1
            except Exception:
                logger.exception("Failed to recalculate stats for barber %s", barber.code)
        return count

    @classmethod
    def refresh(cls, barber_code: str) -> RefreshSummary:
        """
        Recalculate stats, then achievements and staff rewards for a barber.

        Contrib steps run only when their app is installed.
        """
        summary = RefreshSummary(barber_code=barber_code, stats=cls.recalculate(barber_code))

        if apps.is_installed("barberman.contrib.achievements"):
            from barberman.contrib.achievements.service import AchievementService

            summary.achievements_updated = len(AchievementService.update_progress(barber_code))

        if apps.is_installed("barberman.contrib.staff_rewards"):
            from barberman.contrib.staff_rewards.service import StaffRewardService

            summary.rewards_earned = StaffRewardService.update_reward_progress(barber_code)

        return summary

    @classmethod
    def get_barber(cls, barber_code: str) -> Barber:
        try:
            return Barber.objects.get(code=barber_code)
        except Barber.DoesNotExist:
            raise NotFound("BARBER_NOT_FOUND", barber_code=barber_code)
