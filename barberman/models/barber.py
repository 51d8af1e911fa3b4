"""Barber (staff member) model."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Barber(models.Model):
    """Staff member whose tenure and performance drive achievements."""

    code = models.CharField(_("code"), max_length=50, unique=True)
    name = models.CharField(_("name"), max_length=150)
    email = models.EmailField(_("email"), blank=True)
    join_date = models.DateField(_("join date"))
    is_active = models.BooleanField(_("active"), default=True, db_index=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)

    class Meta:
        verbose_name = _("barber")
        verbose_name_plural = _("barbers")
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.code})"
