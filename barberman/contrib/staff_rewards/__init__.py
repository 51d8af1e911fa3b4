"""
Barberman Staff Rewards - employer-defined rewards and the staff leaderboard.

Usage:
    INSTALLED_APPS = [
        ...
        "barberman",
        "barberman.contrib.staff_rewards",
    ]

    from barberman.contrib.staff_rewards import StaffRewardService, LeaderboardService

    StaffRewardService.update_reward_progress("BRB-001")
    StaffRewardService.mark_redeemed(redemption_id, admin_id="owner")
    LeaderboardService.get_leaderboard()
"""


def __getattr__(name):
    if name == "StaffRewardService":
        from barberman.contrib.staff_rewards.service import StaffRewardService

        return StaffRewardService
    if name == "LeaderboardService":
        from barberman.contrib.staff_rewards.leaderboard import LeaderboardService

        return LeaderboardService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["StaffRewardService", "LeaderboardService"]
