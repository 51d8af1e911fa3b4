"""
Barberman Achievements - staff tenure and performance achievements.

Usage:
    INSTALLED_APPS = [
        ...
        "barberman",
        "barberman.contrib.achievements",
    ]

    from barberman.contrib.achievements import AchievementService

    AchievementService.update_progress("BRB-001")
    progress = AchievementService.get_progress("BRB-001")
"""


def __getattr__(name):
    if name == "AchievementService":
        from barberman.contrib.achievements.service import AchievementService

        return AchievementService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["AchievementService"]
