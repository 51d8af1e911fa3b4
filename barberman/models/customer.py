"""Customer model with loyalty counters.

Counters:
    visit_count / total_lifetime_visits
        All-time visit count. Never reset, never decremented.
    current_progress_visits
        Visits accrued toward the selected reward. Reset to 0 on redemption
        and by the admin reset tool.

Invariants:
    current_progress_visits <= total_lifetime_visits
    loyalty_status == MILESTONE_REACHED iff a reward is selected and
    current_progress_visits >= selected_reward.visits_required
    (applied lazily by LoyaltyService.get_loyalty_status).
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class LoyaltyStatus(models.TextChoices):
    NEW = "new", _("New")
    ACTIVE = "active", _("Active")
    MILESTONE_REACHED = "milestone_reached", _("Milestone reached")
    INACTIVE = "inactive", _("Inactive")


class Customer(models.Model):
    """Registered shop customer."""

    code = models.CharField(
        _("code"),
        max_length=50,
        unique=True,
        help_text=_("Unique customer code (e.g. CLI-001)"),
    )
    first_name = models.CharField(_("first name"), max_length=100)
    last_name = models.CharField(_("last name"), max_length=100, blank=True)
    phone = models.CharField(_("phone"), max_length=20, blank=True, db_index=True)

    is_active = models.BooleanField(_("active"), default=True, db_index=True)

    # Loyalty counters
    visit_count = models.PositiveIntegerField(_("visit count"), default=0)
    total_lifetime_visits = models.PositiveIntegerField(
        _("lifetime visits"),
        default=0,
        help_text=_("Total visits ever (never reset)"),
    )
    current_progress_visits = models.PositiveIntegerField(
        _("progress visits"),
        default=0,
        help_text=_("Visits since last redemption"),
    )
    rewards_earned = models.PositiveIntegerField(_("rewards earned"), default=0)
    rewards_redeemed = models.PositiveIntegerField(_("rewards redeemed"), default=0)

    # Reward the customer is working toward
    selected_reward = models.ForeignKey(
        "barberman.Reward",
        on_delete=models.SET_NULL,
        related_name="selecting_customers",
        null=True,
        blank=True,
        verbose_name=_("selected reward"),
    )
    selected_reward_start_visits = models.PositiveIntegerField(
        _("progress at selection"),
        null=True,
        blank=True,
        help_text=_("current_progress_visits when the reward was selected"),
    )
    selected_reward_at = models.DateTimeField(_("selected at"), null=True, blank=True)

    loyalty_status = models.CharField(
        _("loyalty status"),
        max_length=20,
        choices=LoyaltyStatus.choices,
        default=LoyaltyStatus.NEW,
        db_index=True,
    )
    loyalty_join_date = models.DateTimeField(_("loyalty join date"), null=True, blank=True)
    last_visit = models.DateTimeField(_("last visit"), null=True, blank=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("customer")
        verbose_name_plural = _("customers")
        ordering = ["first_name", "last_name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(
                    current_progress_visits__lte=models.F("total_lifetime_visits")
                ),
                name="barberman_customer_progress_lte_lifetime",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.code})"

    @property
    def name(self) -> str:
        """Full name (first + last)."""
        return f"{self.first_name} {self.last_name}".strip()
