"""
Barberman Gates - Validation rules.

G1: RewardDefinition - Reward definition is well formed
G2: RedemptionEligibility - Progress covers the reward requirement
G3: RedemptionCap - Per-customer max redemptions not yet reached
G4: SelectionExpiry - Selected reward has not expired
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from barberman.exceptions import InvalidDefinition, MaxRedemptionsReached, NotEligible


@dataclass
class GateResult:
    """Result of a gate check."""

    passed: bool
    gate_name: str
    message: str = ""


# =============================================================================
# Gates
# =============================================================================


class Gates:
    """Barberman validation gates."""

    # =========================================================================
    # G1: Reward Definition
    # =========================================================================

    @classmethod
    def reward_definition(
        cls,
        visits_required: int | None,
        reward_type: str,
        discount_percentage: int | None = None,
        max_redemptions: int | None = None,
    ) -> GateResult:
        """
        G1: Reward definitions are rejected at creation time, never at evaluation.

        Raises:
            InvalidDefinition: If any rule is violated
        """
        from barberman.models import RewardType

        if visits_required is None or visits_required < 1:
            raise InvalidDefinition("INVALID_VISITS_REQUIRED", visits_required=visits_required)

        if reward_type not in RewardType.values:
            raise InvalidDefinition("INVALID_REWARD_TYPE", reward_type=reward_type)

        if reward_type == RewardType.DISCOUNT:
            if discount_percentage is None or not 1 <= discount_percentage <= 100:
                raise InvalidDefinition(
                    "DISCOUNT_PERCENTAGE_REQUIRED",
                    discount_percentage=discount_percentage,
                )

        if max_redemptions is not None and max_redemptions < 1:
            raise InvalidDefinition("INVALID_MAX_REDEMPTIONS", max_redemptions=max_redemptions)

        return GateResult(True, "G1_RewardDefinition")

    @classmethod
    def check_reward_definition(cls, *args, **kwargs) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.reward_definition(*args, **kwargs)
            return True
        except InvalidDefinition:
            return False

    # =========================================================================
    # G2: Redemption Eligibility
    # =========================================================================

    @classmethod
    def redemption_eligibility(
        cls,
        current_progress_visits: int,
        visits_required: int,
    ) -> GateResult:
        """
        G2: Progress visits must cover the reward requirement.

        Raises:
            NotEligible: If the customer has no visits or too few
        """
        if current_progress_visits <= 0:
            raise NotEligible("NO_VISITS", current=current_progress_visits)

        if current_progress_visits < visits_required:
            missing = visits_required - current_progress_visits
            raise NotEligible(
                "INSUFFICIENT_VISITS",
                message=(
                    f"Customer needs {missing} more visits to redeem this reward. "
                    f"Current progress: {current_progress_visits}/{visits_required}"
                ),
                current=current_progress_visits,
                required=visits_required,
                missing=missing,
            )

        return GateResult(True, "G2_RedemptionEligibility")

    @classmethod
    def check_redemption_eligibility(cls, *args, **kwargs) -> bool:
        try:
            cls.redemption_eligibility(*args, **kwargs)
            return True
        except NotEligible:
            return False

    # =========================================================================
    # G3: Redemption Cap
    # =========================================================================

    @classmethod
    def redemption_cap(cls, previous_redemptions: int, max_redemptions: int | None) -> GateResult:
        """
        G3: A capped reward cannot be redeemed once the cap is met.

        Raises:
            MaxRedemptionsReached: If previous_redemptions >= max_redemptions
        """
        if max_redemptions and previous_redemptions >= max_redemptions:
            raise MaxRedemptionsReached(
                message=(
                    "Customer has already redeemed this reward the maximum "
                    f"number of times ({max_redemptions})"
                ),
                previous=previous_redemptions,
                max_redemptions=max_redemptions,
            )
        return GateResult(True, "G3_RedemptionCap")

    @classmethod
    def check_redemption_cap(cls, *args, **kwargs) -> bool:
        try:
            cls.redemption_cap(*args, **kwargs)
            return True
        except MaxRedemptionsReached:
            return False

    # =========================================================================
    # G4: Selection Expiry
    # =========================================================================

    @classmethod
    def selection_expiry(
        cls,
        selected_at: datetime | None,
        valid_for_days: int | None,
        now: datetime,
    ) -> GateResult:
        """
        G4: A selection expires valid_for_days after it was made.

        Raises:
            NotEligible: With code REWARD_EXPIRED
        """
        if valid_for_days and selected_at:
            expires_at = selected_at + timedelta(days=valid_for_days)
            if now > expires_at:
                raise NotEligible("REWARD_EXPIRED", expired_at=expires_at.isoformat())
        return GateResult(True, "G4_SelectionExpiry")

    @classmethod
    def check_selection_expiry(cls, *args, **kwargs) -> bool:
        try:
            cls.selection_expiry(*args, **kwargs)
            return True
        except NotEligible:
            return False
