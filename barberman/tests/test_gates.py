"""Tests for validation gates and the error taxonomy."""

from datetime import timedelta

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from barberman import Gates
from barberman.exceptions import (
    BarbermanError,
    InvalidDefinition,
    MaxRedemptionsReached,
    NotEligible,
    NotFound,
)
from barberman.models import Reward, RewardType


class TestRewardDefinitionGate:
    """G1: reward definitions."""

    def test_valid_free(self):
        assert Gates.reward_definition(5, RewardType.FREE).passed is True

    def test_valid_discount(self):
        assert Gates.check_reward_definition(3, RewardType.DISCOUNT, discount_percentage=100)

    @pytest.mark.parametrize(
        "kwargs,code",
        [
            ({"visits_required": 0, "reward_type": "free"}, "INVALID_VISITS_REQUIRED"),
            ({"visits_required": None, "reward_type": "free"}, "INVALID_VISITS_REQUIRED"),
            ({"visits_required": 3, "reward_type": "cashback"}, "INVALID_REWARD_TYPE"),
            ({"visits_required": 3, "reward_type": "discount"}, "DISCOUNT_PERCENTAGE_REQUIRED"),
            (
                {"visits_required": 3, "reward_type": "discount", "discount_percentage": 101},
                "DISCOUNT_PERCENTAGE_REQUIRED",
            ),
            (
                {"visits_required": 3, "reward_type": "free", "max_redemptions": 0},
                "INVALID_MAX_REDEMPTIONS",
            ),
        ],
    )
    def test_invalid(self, kwargs, code):
        with pytest.raises(InvalidDefinition) as exc:
            Gates.reward_definition(**kwargs)
        assert exc.value.code == code

    @pytest.mark.django_db
    def test_model_clean(self):
        reward = Reward(name="Broken", visits_required=3, reward_type=RewardType.DISCOUNT)

        with pytest.raises(ValidationError):
            reward.clean()


class TestRedemptionGates:
    """G2-G4: redemption checks."""

    def test_eligibility(self):
        assert Gates.check_redemption_eligibility(5, 5)
        assert not Gates.check_redemption_eligibility(4, 5)
        assert not Gates.check_redemption_eligibility(0, 1)

    def test_insufficient_data(self):
        with pytest.raises(NotEligible) as exc:
            Gates.redemption_eligibility(2, 5)
        assert exc.value.data == {"current": 2, "required": 5, "missing": 3}

    def test_cap(self):
        assert Gates.check_redemption_cap(0, 1)
        assert Gates.check_redemption_cap(10, None)
        with pytest.raises(MaxRedemptionsReached) as exc:
            Gates.redemption_cap(2, 2)
        assert exc.value.code == "MAX_REDEMPTIONS_REACHED"

    def test_selection_expiry(self):
        now = timezone.now()

        assert Gates.check_selection_expiry(now - timedelta(days=6), 7, now)
        assert Gates.check_selection_expiry(now - timedelta(days=60), None, now)
        assert Gates.check_selection_expiry(None, 7, now)
        with pytest.raises(NotEligible) as exc:
            Gates.selection_expiry(now - timedelta(days=8), 7, now)
        assert exc.value.code == "REWARD_EXPIRED"


class TestErrors:
    """Tests for the error taxonomy."""

    def test_default_message(self):
        error = NotFound("CUSTOMER_NOT_FOUND", customer_code="CLI-404")

        assert error.message == "Customer not found"
        assert str(error) == "[CUSTOMER_NOT_FOUND] Customer not found"
        assert error.as_dict() == {
            "code": "CUSTOMER_NOT_FOUND",
            "message": "Customer not found",
            "data": {"customer_code": "CLI-404"},
        }

    def test_default_codes(self):
        assert NotFound().code == "NOT_FOUND"
        assert MaxRedemptionsReached().code == "MAX_REDEMPTIONS_REACHED"
        assert isinstance(InvalidDefinition(), BarbermanError)
