"""Customer loyalty service — reward selection, progress, redemption.

Every read-modify-write on a customer's counters runs inside
transaction.atomic() with a row lock on that customer, so concurrent
requests for the same customer are serialized.
"""

import logging
from dataclasses import dataclass, field

from django.db import transaction
from django.db.models import Avg, Count, Q
from django.utils import timezone

from barberman.exceptions import NotEligible, NotFound
from barberman.gates import Gates
from barberman.models import (
    Customer,
    LoyaltyStatus,
    Reward,
    RewardRedemption,
    RewardType,
    Service,
    Visit,
)
from barberman.signals import reward_redeemed, reward_selected, visit_recorded
from barberman.utils import percentage

logger = logging.getLogger(__name__)


@dataclass
class LoyaltyProgress:
    """Customer loyalty status as seen by callers."""

    customer: Customer
    selected_reward: Reward | None
    eligible_rewards: list[Reward]
    visits_to_next_reward: int
    progress_percentage: int
    can_redeem: bool
    total_visits: int
    current_progress_visits: int
    rewards_redeemed: int
    milestone_reached: bool


@dataclass
class RedemptionResult:
    """Outcome of a successful redemption."""

    success: bool
    loyalty: LoyaltyProgress
    redemption: RewardRedemption
    visit_id: int | None = None


@dataclass
class LoyaltyStatistics:
    """Program-wide loyalty figures for the admin dashboard."""

    total_customers: int
    loyalty_members: int
    active_members: int
    milestone_reached: int
    total_redemptions: int
    average_visits: float
    participation_rate: float
    popular_rewards: list[dict] = field(default_factory=list)


class LoyaltyService:
    """
    Service for customer loyalty operations.

    Uses @classmethod for extensibility (consistent with other services).
    """

    # ======================================================================
    # Status
    # ======================================================================

    @classmethod
    def get_loyalty_status(cls, customer_code: str) -> LoyaltyProgress:
        """
        Get loyalty status for a customer.

        Expired selections are cleared and loyalty_status is brought in line
        with the selected reward as a side effect.

        Raises:
            NotFound: If customer not found
        """
        customer = cls._get_customer(customer_code)
        reward = customer.selected_reward

        if reward is not None and not Gates.check_selection_expiry(
            customer.selected_reward_at, reward.valid_for_days, timezone.now()
        ):
            logger.info(
                "Selected reward %s expired for customer %s", reward.pk, customer.code
            )
            cls._clear_selection(customer)
            reward = None

        current = customer.current_progress_visits
        eligible_rewards = list(
            Reward.objects.filter(is_active=True, visits_required__lte=current)
            .prefetch_related("applicable_services")
            .order_by("visits_required", "name")
        ) if current > 0 else []

        visits_to_next_reward = 0
        progress_percentage = 0
        can_redeem = False
        milestone_reached = False

        if reward is not None:
            visits_to_next_reward = max(0, reward.visits_required - current)
            progress_percentage = percentage(current, reward.visits_required)
            reached = current > 0 and current >= reward.visits_required
            can_redeem = reached and Gates.check_redemption_cap(
                cls._redemption_count(customer, reward), reward.max_redemptions
            )
            milestone_reached = reached
            if reached:
                cls._sync_status(customer, LoyaltyStatus.MILESTONE_REACHED)
            elif customer.loyalty_status == LoyaltyStatus.MILESTONE_REACHED:
                cls._sync_status(customer, LoyaltyStatus.ACTIVE)
        elif customer.loyalty_status == LoyaltyStatus.MILESTONE_REACHED:
            # without a selection there is no milestone to reach
            cls._sync_status(customer, LoyaltyStatus.ACTIVE)

        return LoyaltyProgress(
            customer=customer,
            selected_reward=reward,
            eligible_rewards=eligible_rewards,
            visits_to_next_reward=visits_to_next_reward,
            progress_percentage=progress_percentage,
            can_redeem=can_redeem,
            total_visits=customer.total_lifetime_visits,
            current_progress_visits=current,
            rewards_redeemed=customer.rewards_redeemed,
            milestone_reached=milestone_reached,
        )

    # ======================================================================
    # Mutations
    # ======================================================================

    @classmethod
    def select_reward(cls, customer_code: str, reward_id: int) -> LoyaltyProgress:
        """
        Select the reward a customer works toward.

        Progress accrued before the selection still counts.

        Raises:
            NotFound: If customer or reward not found, or reward inactive
        """
        now = timezone.now()
        with transaction.atomic():
            customer = cls._get_customer_for_update(customer_code)
            reward = cls._get_active_reward(reward_id)

            customer.selected_reward = reward
            customer.selected_reward_start_visits = customer.current_progress_visits
            customer.selected_reward_at = now
            customer.loyalty_status = LoyaltyStatus.ACTIVE
            if not customer.loyalty_join_date:
                customer.loyalty_join_date = now

            customer.save(update_fields=[
                "selected_reward",
                "selected_reward_start_visits",
                "selected_reward_at",
                "loyalty_status",
                "loyalty_join_date",
                "updated_at",
            ])

        reward_selected.send(sender=Customer, customer=customer, reward=reward)
        return cls.get_loyalty_status(customer_code)

    @classmethod
    def record_visit_for_loyalty(cls, customer_code: str, visit_id: int) -> LoyaltyProgress:
        """
        Count a recorded visit toward the customer's loyalty progress.

        Increments visit_count, total_lifetime_visits and
        current_progress_visits by exactly one and back-fills the visit's
        visit_number. A visit that was already counted is not counted again.

        Raises:
            NotFound: If customer not found or the visit is not theirs
        """
        now = timezone.now()
        counted = False

        with transaction.atomic():
            customer = cls._get_customer_for_update(customer_code)
            visit = cls._get_visit_for_update(customer, visit_id)

            if visit.loyalty_recorded:
                logger.warning(
                    "Visit %s already counted for customer %s", visit.pk, customer.code
                )
            else:
                customer.visit_count += 1
                customer.total_lifetime_visits += 1
                customer.current_progress_visits += 1
                customer.last_visit = now

                if customer.loyalty_status == LoyaltyStatus.NEW:
                    customer.loyalty_status = LoyaltyStatus.ACTIVE
                    if not customer.loyalty_join_date:
                        customer.loyalty_join_date = now

                customer.save(update_fields=[
                    "visit_count",
                    "total_lifetime_visits",
                    "current_progress_visits",
                    "last_visit",
                    "loyalty_status",
                    "loyalty_join_date",
                    "updated_at",
                ])

                visit.visit_number = customer.visit_count
                visit.loyalty_recorded = True
                visit.save(update_fields=["visit_number", "loyalty_recorded"])
                counted = True

        if counted:
            logger.info(
                "Visit %s recorded for customer %s (lifetime=%s, progress=%s)",
                visit.pk,
                customer.code,
                customer.total_lifetime_visits,
                customer.current_progress_visits,
            )
            visit_recorded.send(sender=Customer, customer=customer, visit=visit)

        return cls.get_loyalty_status(customer_code)

    @classmethod
    def redeem_reward(
        cls,
        customer_code: str,
        reward_id: int,
        redeemed_by: str,
        visit_id: int | None = None,
    ) -> RedemptionResult:
        """
        Redeem a reward the customer is eligible for.

        Any eligible reward can be redeemed, selected or not. On success the
        progress counter resets to 0 and the selection is cleared, so the
        customer has to choose the next goal.

        Args:
            customer_code: Customer code
            reward_id: Reward primary key
            redeemed_by: Name of the barber/admin performing the redemption
            visit_id: Visit to stamp with the redemption (optional)

        Raises:
            NotFound: If customer, reward or visit not found
            NotEligible: If progress is below the requirement, the selection
                expired, or the visit already carries a redemption
            MaxRedemptionsReached: If the per-customer cap is already met
        """
        now = timezone.now()

        with transaction.atomic():
            customer = cls._get_customer_for_update(customer_code)
            reward = cls._get_active_reward(reward_id)
            previous_progress = customer.current_progress_visits

            Gates.redemption_eligibility(previous_progress, reward.visits_required)
            if customer.selected_reward_id == reward.pk:
                Gates.selection_expiry(customer.selected_reward_at, reward.valid_for_days, now)
            Gates.redemption_cap(cls._redemption_count(customer, reward), reward.max_redemptions)

            visit = None
            if visit_id is not None:
                visit = cls._get_visit_for_update(customer, visit_id)
                if visit.reward_redeemed:
                    raise NotEligible("VISIT_ALREADY_REDEEMED", visit_id=visit.pk)

            free_services = []
            if reward.reward_type == RewardType.FREE:
                free_services = [s.code for s in reward.applicable_services.all()]

            redemption = RewardRedemption.objects.create(
                customer=customer,
                reward=reward,
                visit=visit,
                reward_name=reward.name,
                reward_type=reward.reward_type,
                previous_progress_visits=previous_progress,
                discount_applied=reward.discount_percentage if reward.is_discount else None,
                free_services=free_services,
                redeemed_by=redeemed_by,
            )

            if visit is not None:
                visit.reward_redeemed = True
                visit.redeemed_reward = reward
                visit.redemption_metadata = {
                    "reward_id": reward.pk,
                    "reward_name": reward.name,
                    "reward_type": reward.reward_type,
                    "discount_percentage": reward.discount_percentage,
                    "redeemed_at": now.isoformat(),
                    "redeemed_by": redeemed_by,
                }
                visit.save(update_fields=["reward_redeemed", "redeemed_reward", "redemption_metadata"])

            customer.rewards_redeemed += 1
            customer.rewards_earned += 1
            customer.current_progress_visits = 0
            customer.selected_reward = None
            customer.selected_reward_start_visits = None
            customer.selected_reward_at = None
            customer.loyalty_status = LoyaltyStatus.ACTIVE
            customer.save(update_fields=[
                "rewards_redeemed",
                "rewards_earned",
                "current_progress_visits",
                "selected_reward",
                "selected_reward_start_visits",
                "selected_reward_at",
                "loyalty_status",
                "updated_at",
            ])

        logger.info(
            "Reward %s redeemed for customer %s by %s (progress was %s)",
            reward.pk,
            customer.code,
            redeemed_by,
            previous_progress,
        )
        reward_redeemed.send(sender=Customer, customer=customer, redemption=redemption)

        return RedemptionResult(
            success=True,
            loyalty=cls.get_loyalty_status(customer_code),
            redemption=redemption,
            visit_id=visit.pk if visit is not None else None,
        )

    @classmethod
    def reset_client_loyalty(cls, customer_code: str) -> LoyaltyProgress:
        """
        Admin tool: zero progress and clear the selected reward.

        Lifetime visits and redemption history are kept.
        """
        with transaction.atomic():
            customer = cls._get_customer_for_update(customer_code)
            customer.current_progress_visits = 0
            customer.selected_reward = None
            customer.selected_reward_start_visits = None
            customer.selected_reward_at = None
            customer.loyalty_status = LoyaltyStatus.ACTIVE
            customer.save(update_fields=[
                "current_progress_visits",
                "selected_reward",
                "selected_reward_start_visits",
                "selected_reward_at",
                "loyalty_status",
                "updated_at",
            ])

        logger.info("Loyalty progress reset for customer %s", customer_code)
        return cls.get_loyalty_status(customer_code)

    # ======================================================================
    # Rewards
    # ======================================================================

    @classmethod
    def get_available_rewards(cls, customer_code: str) -> list[Reward]:
        """Active rewards the customer can still select (cap not reached)."""
        customer = cls._get_customer(customer_code)
        rewards = (
            Reward.objects.filter(is_active=True)
            .annotate(
                customer_redemptions=Count(
                    "redemptions",
                    filter=Q(redemptions__customer=customer),
                )
            )
            .prefetch_related("applicable_services")
            .order_by("visits_required", "name")
        )
        return [
            r for r in rewards
            if not r.max_redemptions or r.customer_redemptions < r.max_redemptions
        ]

    @classmethod
    def create_reward(
        cls,
        name: str,
        visits_required: int,
        reward_type: str = RewardType.FREE,
        discount_percentage: int | None = None,
        service_codes: list[str] | None = None,
        max_redemptions: int | None = None,
        valid_for_days: int | None = None,
        description: str = "",
        is_active: bool = True,
    ) -> Reward:
        """
        Create a reward definition.

        Raises:
            InvalidDefinition: If the definition is malformed
            NotFound: If a service code does not exist
        """
        Gates.reward_definition(
            visits_required=visits_required,
            reward_type=reward_type,
            discount_percentage=discount_percentage,
            max_redemptions=max_redemptions,
        )

        with transaction.atomic():
            reward = Reward.objects.create(
                name=name,
                description=description,
                visits_required=visits_required,
                reward_type=reward_type,
                discount_percentage=discount_percentage,
                max_redemptions=max_redemptions,
                valid_for_days=valid_for_days,
                is_active=is_active,
            )
            if service_codes:
                services = list(Service.objects.filter(code__in=service_codes))
                missing = set(service_codes) - {s.code for s in services}
                if missing:
                    raise NotFound("SERVICE_NOT_FOUND", service_codes=sorted(missing))
                reward.applicable_services.set(services)

        return reward

    # ======================================================================
    # History & statistics
    # ======================================================================

    @classmethod
    def get_reward_history(
        cls,
        customer_code: str,
        reward_id: int | None = None,
        limit: int = 50,
    ) -> list[RewardRedemption]:
        """Redemption history for a customer (most recent first)."""
        customer = cls._get_customer(customer_code)
        qs = RewardRedemption.objects.filter(customer=customer).select_related("reward", "visit")
        if reward_id is not None:
            qs = qs.filter(reward_id=reward_id)
        return list(qs[:limit])

    @classmethod
    def statistics(cls) -> LoyaltyStatistics:
        """Program-wide loyalty statistics."""
        customers = Customer.objects.filter(is_active=True)
        members = customers.exclude(loyalty_status=LoyaltyStatus.NEW)

        total_customers = customers.count()
        loyalty_members = members.count()
        average_visits = members.aggregate(avg=Avg("total_lifetime_visits"))["avg"] or 0

        popular = (
            RewardRedemption.objects.values("reward_id", "reward__name")
            .annotate(count=Count("id"))
            .order_by("-count", "reward__name")[:5]
        )

        return LoyaltyStatistics(
            total_customers=total_customers,
            loyalty_members=loyalty_members,
            active_members=customers.filter(loyalty_status=LoyaltyStatus.ACTIVE).count(),
            milestone_reached=customers.filter(
                loyalty_status=LoyaltyStatus.MILESTONE_REACHED
            ).count(),
            total_redemptions=RewardRedemption.objects.count(),
            average_visits=float(average_visits),
            participation_rate=(
                round(loyalty_members / total_customers * 100, 1) if total_customers else 0.0
            ),
            popular_rewards=[
                {"reward_id": row["reward_id"], "name": row["reward__name"], "count": row["count"]}
                for row in popular
            ],
        )

    # ======================================================================
    # Internals
    # ======================================================================

    @classmethod
    def _get_customer(cls, customer_code: str) -> Customer:
        try:
            return Customer.objects.select_related("selected_reward").get(
                code=customer_code, is_active=True
            )
        except Customer.DoesNotExist:
            raise NotFound("CUSTOMER_NOT_FOUND", customer_code=customer_code)

    @classmethod
    def _get_customer_for_update(cls, customer_code: str) -> Customer:
        """
        Get customer with row-level lock for mutation.

        MUST be called inside transaction.atomic().
        """
        try:
            return Customer.objects.select_for_update().get(
                code=customer_code, is_active=True
            )
        except Customer.DoesNotExist:
            raise NotFound("CUSTOMER_NOT_FOUND", customer_code=customer_code)

    @classmethod
    def _get_active_reward(cls, reward_id: int) -> Reward:
        try:
            return Reward.objects.get(pk=reward_id, is_active=True)
        except Reward.DoesNotExist:
            raise NotFound("REWARD_NOT_FOUND", reward_id=reward_id)

    @classmethod
    def _get_visit_for_update(cls, customer: Customer, visit_id: int) -> Visit:
        try:
            return Visit.objects.select_for_update().get(pk=visit_id, customer=customer)
        except Visit.DoesNotExist:
            raise NotFound("VISIT_NOT_FOUND", visit_id=visit_id, customer_code=customer.code)

    @classmethod
    def _redemption_count(cls, customer: Customer, reward: Reward) -> int:
        return RewardRedemption.objects.filter(customer=customer, reward=reward).count()

    @classmethod
    def _sync_status(cls, customer: Customer, status: str) -> None:
        """
        Persist a lazily derived loyalty_status change.

        The write only lands while the row still holds the selection, progress
        and status it was derived from; a concurrent redemption or selection
        wins and the row is left untouched.
        """
        if customer.loyalty_status == status:
            return
        updated = Customer.objects.filter(
            pk=customer.pk,
            loyalty_status=customer.loyalty_status,
            selected_reward_id=customer.selected_reward_id,
            current_progress_visits=customer.current_progress_visits,
        ).update(loyalty_status=status, updated_at=timezone.now())
        if not updated:
            logger.debug("Skipped stale loyalty status sync for customer %s", customer.code)
            return
        customer.loyalty_status = status

    @classmethod
    def _clear_selection(cls, customer: Customer) -> None:
        """Drop an expired selection unless it was replaced or consumed meanwhile."""
        updated = Customer.objects.filter(
            pk=customer.pk,
            selected_reward_id=customer.selected_reward_id,
            selected_reward_at=customer.selected_reward_at,
        ).update(
            selected_reward=None,
            selected_reward_start_visits=None,
            selected_reward_at=None,
            loyalty_status=LoyaltyStatus.ACTIVE,
            updated_at=timezone.now(),
        )
        if not updated:
            logger.debug("Skipped stale selection clear for customer %s", customer.code)
        customer.selected_reward = None
        customer.selected_reward_start_visits = None
        customer.selected_reward_at = None
        customer.loyalty_status = LoyaltyStatus.ACTIVE
