# Generated migration for the barberman core models

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Service",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=50, unique=True, verbose_name="code")),
                ("name", models.CharField(max_length=100, verbose_name="name")),
                (
                    "price",
                    models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=10, verbose_name="price"),
                ),
                ("duration_minutes", models.PositiveIntegerField(default=30, verbose_name="duration (minutes)")),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
            ],
            options={
                "verbose_name": "service",
                "verbose_name_plural": "services",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Reward",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, verbose_name="name")),
                ("description", models.TextField(blank=True, verbose_name="description")),
                (
                    "visits_required",
                    models.PositiveIntegerField(
                        db_index=True,
                        validators=[django.core.validators.MinValueValidator(1)],
                        verbose_name="visits required",
                    ),
                ),
                (
                    "reward_type",
                    models.CharField(
                        choices=[("free", "Free service"), ("discount", "Discount")],
                        default="free",
                        max_length=20,
                        verbose_name="type",
                    ),
                ),
                (
                    "discount_percentage",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        help_text="Required for discount rewards (1-100)",
                        null=True,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(100),
                        ],
                        verbose_name="discount (%)",
                    ),
                ),
                (
                    "max_redemptions",
                    models.PositiveIntegerField(
                        blank=True,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(1)],
                        verbose_name="max redemptions per customer",
                    ),
                ),
                (
                    "valid_for_days",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Days a selection stays valid; empty means no expiry",
                        null=True,
                        verbose_name="valid for (days)",
                    ),
                ),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "applicable_services",
                    models.ManyToManyField(
                        blank=True,
                        related_name="rewards",
                        to="barberman.service",
                        verbose_name="applicable services",
                    ),
                ),
            ],
            options={
                "verbose_name": "reward",
                "verbose_name_plural": "rewards",
                "ordering": ["visits_required", "name"],
            },
        ),
        migrations.CreateModel(
            name="Barber",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=50, unique=True, verbose_name="code")),
                ("name", models.CharField(max_length=150, verbose_name="name")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="email")),
                ("join_date", models.DateField(verbose_name="join date")),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
            ],
            options={
                "verbose_name": "barber",
                "verbose_name_plural": "barbers",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "code",
                    models.CharField(
                        help_text="Unique customer code (e.g. CLI-001)",
                        max_length=50,
                        unique=True,
                        verbose_name="code",
                    ),
                ),
                ("first_name", models.CharField(max_length=100, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=100, verbose_name="last name")),
                ("phone", models.CharField(blank=True, db_index=True, max_length=20, verbose_name="phone")),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="active")),
                ("visit_count", models.PositiveIntegerField(default=0, verbose_name="visit count")),
                (
                    "total_lifetime_visits",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Total visits ever (never reset)",
                        verbose_name="lifetime visits",
                    ),
                ),
                (
                    "current_progress_visits",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Visits since last redemption",
                        verbose_name="progress visits",
                    ),
                ),
                ("rewards_earned", models.PositiveIntegerField(default=0, verbose_name="rewards earned")),
                ("rewards_redeemed", models.PositiveIntegerField(default=0, verbose_name="rewards redeemed")),
                (
                    "selected_reward_start_visits",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="current_progress_visits when the reward was selected",
                        null=True,
                        verbose_name="progress at selection",
                    ),
                ),
                ("selected_reward_at", models.DateTimeField(blank=True, null=True, verbose_name="selected at")),
                (
                    "loyalty_status",
                    models.CharField(
                        choices=[
                            ("new", "New"),
                            ("active", "Active"),
                            ("milestone_reached", "Milestone reached"),
                            ("inactive", "Inactive"),
                        ],
                        db_index=True,
                        default="new",
                        max_length=20,
                        verbose_name="loyalty status",
                    ),
                ),
                ("loyalty_join_date", models.DateTimeField(blank=True, null=True, verbose_name="loyalty join date")),
                ("last_visit", models.DateTimeField(blank=True, null=True, verbose_name="last visit")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "selected_reward",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="selecting_customers",
                        to="barberman.reward",
                        verbose_name="selected reward",
                    ),
                ),
            ],
            options={
                "verbose_name": "customer",
                "verbose_name_plural": "customers",
                "ordering": ["first_name", "last_name"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(current_progress_visits__lte=models.F("total_lifetime_visits")),
                        name="barberman_customer_progress_lte_lifetime",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Visit",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "visit_date",
                    models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name="visit date"),
                ),
                (
                    "total_price",
                    models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=10, verbose_name="total price"),
                ),
                ("notes", models.TextField(blank=True, verbose_name="notes")),
                ("visit_number", models.PositiveIntegerField(default=0, verbose_name="visit number")),
                (
                    "loyalty_recorded",
                    models.BooleanField(
                        default=False,
                        help_text="Set once the visit has incremented the customer counters",
                        verbose_name="counted for loyalty",
                    ),
                ),
                ("reward_redeemed", models.BooleanField(default=False, verbose_name="reward redeemed")),
                ("redemption_metadata", models.JSONField(blank=True, default=dict, verbose_name="redemption data")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                (
                    "barber",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="visits",
                        to="barberman.barber",
                        verbose_name="barber",
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="visits",
                        to="barberman.customer",
                        verbose_name="customer",
                    ),
                ),
                (
                    "redeemed_reward",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="redeemed_on_visits",
                        to="barberman.reward",
                        verbose_name="redeemed reward",
                    ),
                ),
                (
                    "services",
                    models.ManyToManyField(
                        blank=True,
                        related_name="visits",
                        to="barberman.service",
                        verbose_name="services",
                    ),
                ),
            ],
            options={
                "verbose_name": "visit",
                "verbose_name_plural": "visits",
                "ordering": ["-visit_date"],
                "indexes": [
                    models.Index(fields=["barber", "visit_date"], name="barberman_visit_barber_date"),
                    models.Index(fields=["customer", "-visit_date"], name="barberman_visit_customer_date"),
                ],
            },
        ),
        migrations.CreateModel(
            name="RewardRedemption",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("reward_name", models.CharField(max_length=100, verbose_name="reward name")),
                ("reward_type", models.CharField(max_length=20, verbose_name="reward type")),
                ("previous_progress_visits", models.PositiveIntegerField(verbose_name="progress before redemption")),
                (
                    "discount_applied",
                    models.PositiveSmallIntegerField(blank=True, null=True, verbose_name="discount (%)"),
                ),
                (
                    "free_services",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Service codes granted for free",
                        verbose_name="free services",
                    ),
                ),
                ("redeemed_by", models.CharField(max_length=100, verbose_name="redeemed by")),
                ("redeemed_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="redeemed at")),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="redemptions",
                        to="barberman.customer",
                        verbose_name="customer",
                    ),
                ),
                (
                    "reward",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="redemptions",
                        to="barberman.reward",
                        verbose_name="reward",
                    ),
                ),
                (
                    "visit",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="redemption",
                        to="barberman.visit",
                        verbose_name="visit",
                    ),
                ),
            ],
            options={
                "verbose_name": "reward redemption",
                "verbose_name_plural": "reward redemptions",
                "ordering": ["-redeemed_at", "-pk"],
                "indexes": [
                    models.Index(fields=["customer", "reward"], name="barberman_redemption_cust_rwd"),
                ],
            },
        ),
        migrations.CreateModel(
            name="StaffStats",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("total_visits", models.PositiveIntegerField(default=0, verbose_name="total visits")),
                ("unique_clients", models.PositiveIntegerField(default=0, verbose_name="unique clients")),
                ("returning_clients", models.PositiveIntegerField(default=0, verbose_name="returning clients")),
                (
                    "retention_rate",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        help_text="Share of clients with more than one visit",
                        max_digits=5,
                        verbose_name="retention rate (%)",
                    ),
                ),
                ("service_variety", models.PositiveIntegerField(default=0, verbose_name="distinct services")),
                (
                    "average_visits_per_day",
                    models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=7, verbose_name="visits per day"),
                ),
                ("last_visit_at", models.DateTimeField(blank=True, null=True, verbose_name="last visit")),
                ("calculated_at", models.DateTimeField(auto_now=True, verbose_name="calculated at")),
                (
                    "barber",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="stats",
                        to="barberman.barber",
                        verbose_name="barber",
                    ),
                ),
            ],
            options={
                "verbose_name": "staff statistics",
                "verbose_name_plural": "staff statistics",
            },
        ),
    ]
