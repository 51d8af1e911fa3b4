# Generated migration for barberman staff rewards

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("barberman", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="BarberReward",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, verbose_name="name")),
                ("description", models.TextField(blank=True, verbose_name="description")),
                (
                    "reward_type",
                    models.CharField(
                        choices=[
                            ("monetary", "Monetary"),
                            ("gift", "Gift"),
                            ("time_off", "Time off"),
                            ("recognition", "Recognition"),
                        ],
                        max_length=20,
                        verbose_name="type",
                    ),
                ),
                (
                    "reward_value",
                    models.CharField(help_text="e.g. $100, 1 day off", max_length=100, verbose_name="value"),
                ),
                (
                    "requirement_type",
                    models.CharField(
                        choices=[
                            ("visits", "Total visits"),
                            ("clients", "Unique clients"),
                            ("months_worked", "Months worked"),
                            ("client_retention", "Client retention (%)"),
                            ("custom", "Custom (manual)"),
                        ],
                        max_length=20,
                        verbose_name="requirement type",
                    ),
                ),
                (
                    "requirement_value",
                    models.PositiveIntegerField(
                        validators=[django.core.validators.MinValueValidator(1)],
                        verbose_name="requirement value",
                    ),
                ),
                (
                    "requirement_description",
                    models.CharField(blank=True, max_length=200, verbose_name="requirement description"),
                ),
                ("category", models.CharField(blank=True, max_length=50, verbose_name="category")),
                ("icon", models.CharField(blank=True, max_length=50, verbose_name="icon")),
                ("color", models.CharField(blank=True, max_length=50, verbose_name="color")),
                ("priority", models.IntegerField(default=0, verbose_name="priority")),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "staff reward",
                "verbose_name_plural": "staff rewards",
                "ordering": ["priority", "category", "name"],
            },
        ),
        migrations.CreateModel(
            name="BarberRewardRedemption",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "status",
                    models.CharField(
                        choices=[("earned", "Earned"), ("redeemed", "Redeemed")],
                        db_index=True,
                        default="earned",
                        max_length=20,
                        verbose_name="status",
                    ),
                ),
                ("earned_at", models.DateTimeField(verbose_name="earned at")),
                ("redeemed_at", models.DateTimeField(blank=True, null=True, verbose_name="redeemed at")),
                ("redeemed_by", models.CharField(blank=True, max_length=100, verbose_name="redeemed by")),
                ("notes", models.TextField(blank=True, verbose_name="notes")),
                (
                    "progress_at_earning",
                    models.JSONField(
                        default=dict,
                        help_text="total_visits, unique_clients, months_worked, client_retention_rate",
                        verbose_name="progress at earning",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "barber",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reward_redemptions",
                        to="barberman.barber",
                        verbose_name="barber",
                    ),
                ),
                (
                    "reward",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="redemptions",
                        to="barberman_staff_rewards.barberreward",
                        verbose_name="reward",
                    ),
                ),
            ],
            options={
                "verbose_name": "staff reward redemption",
                "verbose_name_plural": "staff reward redemptions",
                "ordering": ["-earned_at"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("barber", "reward"),
                        name="barberman_unique_barber_reward_redemption",
                    ),
                ],
            },
        ),
    ]
