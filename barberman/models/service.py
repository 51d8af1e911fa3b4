"""Service catalog model."""

from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _


class Service(models.Model):
    """A service offered by the shop (haircut, beard trim, ...)."""

    code = models.CharField(_("code"), max_length=50, unique=True)
    name = models.CharField(_("name"), max_length=100)
    price = models.DecimalField(
        _("price"),
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
    )
    duration_minutes = models.PositiveIntegerField(_("duration (minutes)"), default=30)
    is_active = models.BooleanField(_("active"), default=True)

    class Meta:
        verbose_name = _("service")
        verbose_name_plural = _("services")
        ordering = ["name"]

    def __str__(self):
        return self.name
