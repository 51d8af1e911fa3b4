"""Barberman models (CORE only).

CORE models are exported here. Contrib models are in their respective modules:
- barberman.contrib.achievements: Achievement, BarberAchievement
- barberman.contrib.staff_rewards: BarberReward, BarberRewardRedemption
"""

from barberman.models.service import Service
from barberman.models.customer import Customer, LoyaltyStatus
from barberman.models.reward import Reward, RewardType
from barberman.models.visit import Visit
from barberman.models.redemption import RewardRedemption
from barberman.models.barber import Barber
from barberman.models.stats import StaffStats

__all__ = [
    # Catalog
    "Service",
    # Customer loyalty
    "Customer",
    "LoyaltyStatus",
    "Reward",
    "RewardType",
    "Visit",
    "RewardRedemption",
    # Staff
    "Barber",
    "StaffStats",
]
