"""
Barberman configuration.

Usage in settings.py:
    BARBERMAN = {
        "STAFF_FACTS_BACKEND": "barberman.adapters.orm.DjangoStaffFactsBackend",
        "LEADERBOARD_LIMIT": 50,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class BarbermanSettings:
    """Barberman configuration settings."""

    # Source of aggregated staff facts (dotted path)
    STAFF_FACTS_BACKEND: str = "barberman.adapters.orm.DjangoStaffFactsBackend"

    # Tenure percentage (average days per month)
    AVERAGE_DAYS_PER_MONTH: float = 30.44

    # Consistency windows
    STREAK_LOOKBACK_DAYS: int = 30
    CONSISTENCY_LOOKBACK_WEEKS: int = 12
    DEFAULT_DAILY_MINIMUM: int = 1
    DEFAULT_WEEKLY_MINIMUM: int = 5

    # Leaderboard
    LEADERBOARD_LIMIT: int = 50
    LEADERBOARD_MAX_BADGES: int = 4


def get_barberman_settings() -> BarbermanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "BARBERMAN", {})
    return BarbermanSettings(**user_settings)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_barberman_settings(), name)


barberman_settings = _LazySettings()
