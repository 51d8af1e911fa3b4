"""Visit model.

Visit creation belongs to the surrounding system. The loyalty engine only
back-fills visit_number, marks the visit as counted and, on redemption,
stamps the redemption metadata.
"""

from decimal import Decimal

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Visit(models.Model):
    """A customer's visit to the shop."""

    customer = models.ForeignKey(
        "barberman.Customer",
        on_delete=models.CASCADE,
        related_name="visits",
        verbose_name=_("customer"),
    )
    barber = models.ForeignKey(
        "barberman.Barber",
        on_delete=models.SET_NULL,
        related_name="visits",
        null=True,
        blank=True,
        verbose_name=_("barber"),
    )
    visit_date = models.DateTimeField(_("visit date"), default=timezone.now, db_index=True)
    services = models.ManyToManyField(
        "barberman.Service",
        related_name="visits",
        blank=True,
        verbose_name=_("services"),
    )
    total_price = models.DecimalField(
        _("total price"),
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
    )
    notes = models.TextField(_("notes"), blank=True)

    visit_number = models.PositiveIntegerField(_("visit number"), default=0)
    loyalty_recorded = models.BooleanField(
        _("counted for loyalty"),
        default=False,
        help_text=_("Set once the visit has incremented the customer counters"),
    )

    # Redemption stamp
    reward_redeemed = models.BooleanField(_("reward redeemed"), default=False)
    redeemed_reward = models.ForeignKey(
        "barberman.Reward",
        on_delete=models.SET_NULL,
        related_name="redeemed_on_visits",
        null=True,
        blank=True,
        verbose_name=_("redeemed reward"),
    )
    redemption_metadata = models.JSONField(_("redemption data"), default=dict, blank=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)

    class Meta:
        verbose_name = _("visit")
        verbose_name_plural = _("visits")
        ordering = ["-visit_date"]
        indexes = [
            models.Index(fields=["barber", "visit_date"], name="barberman_visit_barber_date"),
            models.Index(fields=["customer", "-visit_date"], name="barberman_visit_customer_date"),
        ]

    def __str__(self):
        return f"#{self.visit_number} {self.customer_id} @ {self.visit_date:%Y-%m-%d}"
