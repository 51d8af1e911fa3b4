"""Achievement models — definitions and per-barber progress."""

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class AchievementCategory(models.TextChoices):
    TENURE = "tenure", _("Tenure")
    VISITS = "visits", _("Visits")
    CLIENTS = "clients", _("Clients")
    CONSISTENCY = "consistency", _("Consistency")
    QUALITY = "quality", _("Quality")
    TEAMWORK = "teamwork", _("Teamwork")
    LEARNING = "learning", _("Learning")
    MILESTONE = "milestone", _("Milestone")


class RequirementType(models.TextChoices):
    COUNT = "count", _("Count")
    DAYS = "days", _("Days")
    STREAK = "streak", _("Streak")
    PERCENTAGE = "percentage", _("Percentage")
    MILESTONE = "milestone", _("Milestone")


class Timeframe(models.TextChoices):
    DAILY = "daily", _("Daily")
    WEEKLY = "weekly", _("Weekly")
    MONTHLY = "monthly", _("Monthly")
    YEARLY = "yearly", _("Yearly")
    ALL_TIME = "all-time", _("All time")


class Tier(models.TextChoices):
    BRONZE = "bronze", _("Bronze")
    SILVER = "silver", _("Silver")
    GOLD = "gold", _("Gold")
    PLATINUM = "platinum", _("Platinum")
    DIAMOND = "diamond", _("Diamond")


TIER_ORDER = {tier: index for index, tier in enumerate(Tier.values)}

# Subcategories with dedicated calculator branches
DAILY_VISITS = "daily_visits"
WEEKLY_CONSISTENCY = "weekly_consistency"
CLIENT_RETENTION = "client_retention"
SERVICE_VARIETY = "service_variety"


class Achievement(models.Model):
    """Achievement definition configured by the shop owner."""

    title = models.CharField(_("title"), max_length=100)
    description = models.CharField(_("description"), max_length=500)

    category = models.CharField(
        _("category"),
        max_length=20,
        choices=AchievementCategory.choices,
        db_index=True,
    )
    subcategory = models.CharField(
        _("subcategory"),
        max_length=50,
        blank=True,
        help_text=_("e.g. daily_visits, weekly_consistency, client_retention, service_variety"),
    )

    requirement = models.PositiveIntegerField(_("requirement"), validators=[MinValueValidator(1)])
    requirement_type = models.CharField(
        _("requirement type"),
        max_length=20,
        choices=RequirementType.choices,
        default=RequirementType.COUNT,
    )
    timeframe = models.CharField(
        _("timeframe"),
        max_length=20,
        choices=Timeframe.choices,
        default=Timeframe.ALL_TIME,
    )
    minimum_value = models.PositiveIntegerField(
        _("minimum per period"),
        null=True,
        blank=True,
        help_text=_("Visits a day/week must reach to count toward consistency"),
    )

    tier = models.CharField(_("tier"), max_length=20, choices=Tier.choices, default=Tier.BRONZE)
    points = models.PositiveIntegerField(_("points"), default=10, validators=[MinValueValidator(1)])
    badge = models.CharField(_("badge"), max_length=20, default="🎯")
    color = models.CharField(_("color"), max_length=50, blank=True)

    # Optional staff perk attached to the achievement
    reward_type = models.CharField(_("reward type"), max_length=20, blank=True)
    reward_value = models.CharField(_("reward value"), max_length=100, blank=True)
    reward_description = models.CharField(_("reward description"), max_length=200, blank=True)

    is_repeatable = models.BooleanField(_("repeatable"), default=False)
    max_completions = models.PositiveIntegerField(
        _("max completions"),
        null=True,
        blank=True,
        help_text=_("Empty means unlimited for repeatable achievements"),
    )
    is_active = models.BooleanField(_("active"), default=True, db_index=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("achievement")
        verbose_name_plural = _("achievements")
        ordering = ["category", "requirement"]

    def __str__(self):
        return f"{self.title} [{self.tier}]"

    @property
    def reward(self) -> dict | None:
        if not self.reward_type:
            return None
        return {
            "type": self.reward_type,
            "value": self.reward_value,
            "description": self.reward_description,
        }


class BarberAchievement(models.Model):
    """
    Progress of one barber on one achievement.

    A non-repeatable achievement never leaves is_completed=True once set.
    A repeatable one resets progress after each completion until
    max_completions is reached.
    """

    barber = models.ForeignKey(
        "barberman.Barber",
        on_delete=models.CASCADE,
        related_name="achievements",
        verbose_name=_("barber"),
    )
    achievement = models.ForeignKey(
        Achievement,
        on_delete=models.CASCADE,
        related_name="barber_progress",
        verbose_name=_("achievement"),
    )

    progress = models.PositiveIntegerField(_("progress"), default=0)
    is_completed = models.BooleanField(_("completed"), default=False)
    completed_at = models.DateTimeField(_("completed at"), null=True, blank=True)
    completion_count = models.PositiveIntegerField(_("completions"), default=0)
    current_streak = models.PositiveIntegerField(_("current streak"), default=0)
    last_progress_at = models.DateTimeField(_("last progress"), null=True, blank=True)
    metadata = models.JSONField(_("metadata"), default=dict, blank=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("barber achievement")
        verbose_name_plural = _("barber achievements")
        constraints = [
            models.UniqueConstraint(
                fields=["barber", "achievement"],
                name="barberman_unique_barber_achievement",
            ),
        ]
        indexes = [
            models.Index(fields=["barber", "is_completed"], name="barberman_achv_barber_done"),
        ]

    def __str__(self):
        state = "done" if self.is_completed else f"{self.progress}/{self.achievement.requirement}"
        return f"{self.barber_id}: {self.achievement.title} ({state})"
