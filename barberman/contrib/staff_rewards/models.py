"""Staff reward models — employer-defined rewards and their redemptions."""

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class StaffRewardType(models.TextChoices):
    MONETARY = "monetary", _("Monetary")
    GIFT = "gift", _("Gift")
    TIME_OFF = "time_off", _("Time off")
    RECOGNITION = "recognition", _("Recognition")


class StaffRequirementType(models.TextChoices):
    VISITS = "visits", _("Total visits")
    CLIENTS = "clients", _("Unique clients")
    MONTHS_WORKED = "months_worked", _("Months worked")
    CLIENT_RETENTION = "client_retention", _("Client retention (%)")
    CUSTOM = "custom", _("Custom (manual)")


class RedemptionStatus(models.TextChoices):
    EARNED = "earned", _("Earned")
    REDEEMED = "redeemed", _("Redeemed")


class BarberReward(models.Model):
    """Reward the shop owner offers staff for reaching a requirement."""

    name = models.CharField(_("name"), max_length=100)
    description = models.TextField(_("description"), blank=True)

    reward_type = models.CharField(_("type"), max_length=20, choices=StaffRewardType.choices)
    reward_value = models.CharField(_("value"), max_length=100, help_text=_("e.g. $100, 1 day off"))

    requirement_type = models.CharField(
        _("requirement type"),
        max_length=20,
        choices=StaffRequirementType.choices,
    )
    requirement_value = models.PositiveIntegerField(
        _("requirement value"),
        validators=[MinValueValidator(1)],
    )
    requirement_description = models.CharField(_("requirement description"), max_length=200, blank=True)

    category = models.CharField(_("category"), max_length=50, blank=True)
    icon = models.CharField(_("icon"), max_length=50, blank=True)
    color = models.CharField(_("color"), max_length=50, blank=True)
    priority = models.IntegerField(_("priority"), default=0)
    is_active = models.BooleanField(_("active"), default=True, db_index=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("staff reward")
        verbose_name_plural = _("staff rewards")
        ordering = ["priority", "category", "name"]

    def __str__(self):
        return f"{self.name} ({self.requirement_type} >= {self.requirement_value})"


class BarberRewardRedemption(models.Model):
    """
    A staff reward earned by a barber.

    At most one per (barber, reward), ever. progress_at_earning freezes the
    barber's facts at the moment of earning and is never updated.
    Transitions earned -> redeemed exactly once, by an admin.
    """

    barber = models.ForeignKey(
        "barberman.Barber",
        on_delete=models.CASCADE,
        related_name="reward_redemptions",
        verbose_name=_("barber"),
    )
    reward = models.ForeignKey(
        BarberReward,
        on_delete=models.PROTECT,
        related_name="redemptions",
        verbose_name=_("reward"),
    )

    status = models.CharField(
        _("status"),
        max_length=20,
        choices=RedemptionStatus.choices,
        default=RedemptionStatus.EARNED,
        db_index=True,
    )
    earned_at = models.DateTimeField(_("earned at"))
    redeemed_at = models.DateTimeField(_("redeemed at"), null=True, blank=True)
    redeemed_by = models.CharField(_("redeemed by"), max_length=100, blank=True)
    notes = models.TextField(_("notes"), blank=True)

    progress_at_earning = models.JSONField(
        _("progress at earning"),
        default=dict,
        help_text=_("total_visits, unique_clients, months_worked, client_retention_rate"),
    )

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("staff reward redemption")
        verbose_name_plural = _("staff reward redemptions")
        ordering = ["-earned_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["barber", "reward"],
                name="barberman_unique_barber_reward_redemption",
            ),
        ]

    def __str__(self):
        return f"{self.barber_id}: {self.reward.name} [{self.status}]"
