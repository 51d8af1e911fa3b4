from django.apps import AppConfig


class BarbermanConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "barberman"
    verbose_name = "Barberman - Loyalty & Staff Progression"
