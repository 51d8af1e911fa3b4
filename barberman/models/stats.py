"""StaffStats model (calculated staff facts)."""

from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _


class StaffStats(models.Model):
    """
    Aggregated facts about a barber, recalculated from visits.

    Read by progress calculators, staff reward rules and the leaderboard.
    See StatsService.recalculate().
    """

    barber = models.OneToOneField(
        "barberman.Barber",
        on_delete=models.CASCADE,
        related_name="stats",
        verbose_name=_("barber"),
    )

    total_visits = models.PositiveIntegerField(_("total visits"), default=0)
    unique_clients = models.PositiveIntegerField(_("unique clients"), default=0)
    returning_clients = models.PositiveIntegerField(_("returning clients"), default=0)
    retention_rate = models.DecimalField(
        _("retention rate (%)"),
        max_digits=5,
        decimal_places=2,
        default=Decimal("0"),
        help_text=_("Share of clients with more than one visit"),
    )
    service_variety = models.PositiveIntegerField(_("distinct services"), default=0)
    average_visits_per_day = models.DecimalField(
        _("visits per day"),
        max_digits=7,
        decimal_places=2,
        default=Decimal("0"),
    )
    last_visit_at = models.DateTimeField(_("last visit"), null=True, blank=True)
    calculated_at = models.DateTimeField(_("calculated at"), auto_now=True)

    class Meta:
        verbose_name = _("staff statistics")
        verbose_name_plural = _("staff statistics")

    def __str__(self):
        return f"{self.barber_id}: {self.total_visits} visits | {self.retention_rate}%"
