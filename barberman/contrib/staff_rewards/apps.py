"""Staff rewards app config."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class StaffRewardsConfig(AppConfig):
    name = "barberman.contrib.staff_rewards"
    label = "barberman_staff_rewards"
    verbose_name = _("Staff Rewards")
