"""Staff reward service — earn, list and redeem employer-defined rewards."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime

from django.db import transaction
from django.db.models import Count
from django.utils import timezone

from barberman.contrib.staff_rewards.models import (
    BarberReward,
    BarberRewardRedemption,
    RedemptionStatus,
    StaffRequirementType,
)
from barberman.exceptions import NotFound
from barberman.models import Barber
from barberman.protocols.staff import StaffFacts
from barberman.services.stats import StatsService, get_staff_facts_backend
from barberman.services.tenure import duration_progress, whole_months_between
from barberman.signals import staff_reward_earned, staff_reward_redeemed
from barberman.utils import percentage, round_half_up

logger = logging.getLogger(__name__)


@dataclass
class StaffRewardProgress:
    """A staff reward merged with one barber's progress and redemption."""

    reward_id: int
    name: str
    description: str
    reward_type: str
    reward_value: str
    requirement_type: str
    requirement_value: int
    requirement_description: str
    category: str
    icon: str
    color: str
    priority: int
    current_progress: int
    progress_percentage: int
    is_eligible: bool
    is_earned: bool = False
    is_redeemed: bool = False
    redemption_id: int | None = None
    earned_at: datetime | None = None
    redeemed_at: datetime | None = None
    duration_progress: dict | None = None


@dataclass
class StaffRewardStatistics:
    total_rewards: int
    total_redemptions: int
    pending_redemptions: int
    active_barbers: int
    redemption_rate: float
    categories: dict = field(default_factory=dict)
    redemptions_by_type: dict = field(default_factory=dict)
    status_summary: dict = field(default_factory=dict)


def months_worked(facts: StaffFacts, today: date) -> int:
    if facts.join_date is None:
        return 0
    return whole_months_between(facts.join_date, today)


def requirement_value_for(facts: StaffFacts, requirement_type: str, today: date) -> int:
    """Current value of a barber's facts for a requirement type."""
    if requirement_type == StaffRequirementType.VISITS:
        return facts.total_visits
    if requirement_type == StaffRequirementType.CLIENTS:
        return facts.unique_clients
    if requirement_type == StaffRequirementType.MONTHS_WORKED:
        return months_worked(facts, today)
    if requirement_type == StaffRequirementType.CLIENT_RETENTION:
        return round_half_up(facts.retention_rate)
    # custom rewards are granted by hand
    return 0


class StaffRewardService:
    """
    Service for staff reward operations.

    Uses @classmethod for extensibility (consistent with other services).
    """

    @classmethod
    def update_reward_progress(
        cls,
        barber_code: str,
        today: date | None = None,
    ) -> list[BarberRewardRedemption]:
        """
        Create redemption records for every active reward the barber now meets.

        A reward is earned at most once per barber. Custom rewards are never
        earned automatically. A failure on one reward is logged and skipped.

        Returns:
            Newly created BarberRewardRedemption records

        Raises:
            NotFound: If barber not found
        """
        barber = StatsService.get_barber(barber_code)
        facts = get_staff_facts_backend().get_facts(barber.pk)
        if facts is None:
            raise NotFound("BARBER_NOT_FOUND", barber_code=barber_code)

        today = today or timezone.localdate()
        already_earned = set(
            BarberRewardRedemption.objects.filter(barber=barber).values_list("reward_id", flat=True)
        )

        earned = []
        for reward in BarberReward.objects.filter(is_active=True).order_by("priority", "pk"):
            if reward.pk in already_earned:
                continue
            if reward.requirement_type == StaffRequirementType.CUSTOM:
                continue

            try:
                current = requirement_value_for(facts, reward.requirement_type, today)
                if current < reward.requirement_value:
                    continue
                redemption, created = cls._earn(barber, reward, facts, today)
            except Exception:
                logger.exception(
                    "Error checking staff reward %s for barber %s", reward.pk, barber.code
                )
                continue

            if created:
                earned.append(redemption)
                logger.info(
                    "Barber %s earned staff reward %s (%s)", barber.code, reward.pk, reward.name
                )
                staff_reward_earned.send(sender=BarberRewardRedemption, redemption=redemption)

        return earned

    @classmethod
    def get_reward_progress(
        cls,
        barber_code: str,
        today: date | None = None,
    ) -> list[StaffRewardProgress]:
        """
        Every active reward with the barber's progress, by priority then category.

        Months-worked rewards report the day-based tenure percentage and
        include the duration breakdown.

        Raises:
            NotFound: If barber not found
        """
        barber = StatsService.get_barber(barber_code)
        facts = get_staff_facts_backend().get_facts(barber.pk)
        if facts is None:
            raise NotFound("BARBER_NOT_FOUND", barber_code=barber_code)

        today = today or timezone.localdate()
        redemptions = {
            r.reward_id: r for r in BarberRewardRedemption.objects.filter(barber=barber)
        }

        result = []
        for reward in BarberReward.objects.filter(is_active=True).order_by("priority", "category", "pk"):
            current = requirement_value_for(facts, reward.requirement_type, today)
            pct = percentage(current, reward.requirement_value)
            eligible = (
                reward.requirement_type != StaffRequirementType.CUSTOM
                and current >= reward.requirement_value
            )
            duration = None

            if reward.requirement_type == StaffRequirementType.MONTHS_WORKED and facts.join_date:
                tenure = duration_progress(facts.join_date, reward.requirement_value, today=today)
                current = tenure.whole_months_worked
                pct = tenure.progress_percentage
                eligible = tenure.is_eligible
                duration = tenure.as_dict()

            redemption = redemptions.get(reward.pk)
            result.append(
                StaffRewardProgress(
                    reward_id=reward.pk,
                    name=reward.name,
                    description=reward.description,
                    reward_type=reward.reward_type,
                    reward_value=reward.reward_value,
                    requirement_type=reward.requirement_type,
                    requirement_value=reward.requirement_value,
                    requirement_description=reward.requirement_description,
                    category=reward.category,
                    icon=reward.icon,
                    color=reward.color,
                    priority=reward.priority,
                    current_progress=current,
                    progress_percentage=pct,
                    is_eligible=eligible,
                    is_earned=redemption is not None,
                    is_redeemed=bool(redemption and redemption.status == RedemptionStatus.REDEEMED),
                    redemption_id=redemption.pk if redemption else None,
                    earned_at=redemption.earned_at if redemption else None,
                    redeemed_at=redemption.redeemed_at if redemption else None,
                    duration_progress=duration,
                )
            )
        return result

    @classmethod
    def mark_redeemed(cls, redemption_id, admin_id, notes: str = "") -> bool:
        """
        Move an earned redemption to redeemed.

        Returns:
            True if the record transitioned, False if it does not exist
            or was already redeemed.
        """
        now = timezone.now()
        try:
            updated = BarberRewardRedemption.objects.filter(
                pk=redemption_id,
                status=RedemptionStatus.EARNED,
            ).update(
                status=RedemptionStatus.REDEEMED,
                redeemed_at=now,
                redeemed_by=str(admin_id),
                notes=notes or "",
                updated_at=now,
            )
        except (TypeError, ValueError):
            logger.warning("Invalid staff reward redemption id %r", redemption_id)
            return False

        if not updated:
            logger.warning(
                "Staff reward redemption %s not found or already redeemed", redemption_id
            )
            return False

        logger.info("Staff reward redemption %s redeemed by %s", redemption_id, admin_id)
        staff_reward_redeemed.send(
            sender=BarberRewardRedemption,
            redemption_id=redemption_id,
            admin_id=admin_id,
        )
        return True

    @classmethod
    def redemptions(
        cls,
        status: str | None = None,
        barber_code: str | None = None,
        limit: int | None = None,
    ) -> list[BarberRewardRedemption]:
        """Redemptions, newest earned first, optionally filtered."""
        qs = BarberRewardRedemption.objects.select_related("barber", "reward").order_by(
            "-earned_at", "-pk"
        )
        if status:
            qs = qs.filter(status=status)
        if barber_code:
            qs = qs.filter(barber__code=barber_code)
        if limit:
            qs = qs[:limit]
        return list(qs)

    @classmethod
    def statistics(cls) -> StaffRewardStatistics:
        """Totals across all staff rewards and redemptions."""
        total_rewards = BarberReward.objects.filter(is_active=True).count()
        total_redemptions = BarberRewardRedemption.objects.count()
        pending = BarberRewardRedemption.objects.filter(status=RedemptionStatus.EARNED).count()
        active_barbers = Barber.objects.filter(is_active=True).count()

        categories = {
            row["category"] or "uncategorized": row["total"]
            for row in BarberReward.objects.filter(is_active=True)
            .values("category")
            .annotate(total=Count("id"))
        }
        by_type = {
            row["reward__reward_type"]: row["total"]
            for row in BarberRewardRedemption.objects.values("reward__reward_type").annotate(
                total=Count("id")
            )
        }

        return StaffRewardStatistics(
            total_rewards=total_rewards,
            total_redemptions=total_redemptions,
            pending_redemptions=pending,
            active_barbers=active_barbers,
            redemption_rate=round(total_redemptions / active_barbers, 2) if active_barbers else 0.0,
            categories=categories,
            redemptions_by_type=by_type,
            status_summary={
                RedemptionStatus.EARNED.value: pending,
                RedemptionStatus.REDEEMED.value: total_redemptions - pending,
                "total": total_redemptions,
            },
        )

    @classmethod
    def _earn(
        cls,
        barber: Barber,
        reward: BarberReward,
        facts: StaffFacts,
        today: date,
    ) -> tuple[BarberRewardRedemption, bool]:
        """
        Create the redemption record with a snapshot of the barber's facts.

        Returns:
            Tuple of (BarberRewardRedemption, created: bool)
        """
        with transaction.atomic():
            return BarberRewardRedemption.objects.get_or_create(
                barber=barber,
                reward=reward,
                defaults={
                    "status": RedemptionStatus.EARNED,
                    "earned_at": timezone.now(),
                    "progress_at_earning": {
                        "total_visits": facts.total_visits,
                        "unique_clients": facts.unique_clients,
                        "months_worked": months_worked(facts, today),
                        "client_retention_rate": float(facts.retention_rate),
                    },
                },
            )
