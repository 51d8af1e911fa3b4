"""Barberman services (CORE only).

CORE services are exported here. Contrib services are in their respective modules:
- barberman.contrib.achievements: AchievementService
- barberman.contrib.staff_rewards: StaffRewardService, LeaderboardService
"""

from barberman.services import loyalty
from barberman.services import stats
from barberman.services import tenure

__all__ = ["loyalty", "stats", "tenure"]
