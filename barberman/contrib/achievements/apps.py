"""Achievements app config."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AchievementsConfig(AppConfig):
    name = "barberman.contrib.achievements"
    label = "barberman_achievements"
    verbose_name = _("Staff Achievements")
