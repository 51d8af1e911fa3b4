"""Customer reward redemption ledger."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class RewardRedemption(models.Model):
    """
    Immutable record of a customer reward redemption.

    One row per redemption. Max-redemption caps are counted against these
    rows, so loyalty history does not depend on visit records surviving.
    """

    customer = models.ForeignKey(
        "barberman.Customer",
        on_delete=models.CASCADE,
        related_name="redemptions",
        verbose_name=_("customer"),
    )
    reward = models.ForeignKey(
        "barberman.Reward",
        on_delete=models.PROTECT,
        related_name="redemptions",
        verbose_name=_("reward"),
    )
    visit = models.OneToOneField(
        "barberman.Visit",
        on_delete=models.SET_NULL,
        related_name="redemption",
        null=True,
        blank=True,
        verbose_name=_("visit"),
    )

    reward_name = models.CharField(_("reward name"), max_length=100)
    reward_type = models.CharField(_("reward type"), max_length=20)
    previous_progress_visits = models.PositiveIntegerField(_("progress before redemption"))
    discount_applied = models.PositiveSmallIntegerField(_("discount (%)"), null=True, blank=True)
    free_services = models.JSONField(
        _("free services"),
        default=list,
        blank=True,
        help_text=_("Service codes granted for free"),
    )

    redeemed_by = models.CharField(_("redeemed by"), max_length=100)
    redeemed_at = models.DateTimeField(_("redeemed at"), auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _("reward redemption")
        verbose_name_plural = _("reward redemptions")
        ordering = ["-redeemed_at", "-pk"]
        indexes = [
            models.Index(fields=["customer", "reward"], name="barberman_redemption_cust_rwd"),
        ]

    def __str__(self):
        return f"{self.customer_id}: {self.reward_name} by {self.redeemed_by}"
