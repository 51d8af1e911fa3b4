# Generated migration for barberman achievements

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
            name="Achievement",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=100, verbose_name="title")),
                ("description", models.CharField(max_length=500, verbose_name="description")),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("tenure", "Tenure"),
                            ("visits", "Visits"),
                            ("clients", "Clients"),
                            ("consistency", "Consistency"),
                            ("quality", "Quality"),
                            ("teamwork", "Teamwork"),
                            ("learning", "Learning"),
                            ("milestone", "Milestone"),
                        ],
                        db_index=True,
                        max_length=20,
                        verbose_name="category",
                    ),
                ),
                (
                    "subcategory",
                    models.CharField(
                        blank=True,
                        help_text="e.g. daily_visits, weekly_consistency, client_retention, service_variety",
                        max_length=50,
                        verbose_name="subcategory",
                    ),
                ),
                (
                    "requirement",
                    models.PositiveIntegerField(
                        validators=[django.core.validators.MinValueValidator(1)],
                        verbose_name="requirement",
                    ),
                ),
                (
                    "requirement_type",
                    models.CharField(
                        choices=[
                            ("count", "Count"),
                            ("days", "Days"),
                            ("streak", "Streak"),
                            ("percentage", "Percentage"),
                            ("milestone", "Milestone"),
                        ],
                        default="count",
                        max_length=20,
                        verbose_name="requirement type",
                    ),
                ),
                (
                    "timeframe",
                    models.CharField(
                        choices=[
                            ("daily", "Daily"),
                            ("weekly", "Weekly"),
                            ("monthly", "Monthly"),
                            ("yearly", "Yearly"),
                            ("all-time", "All time"),
                        ],
                        default="all-time",
                        max_length=20,
                        verbose_name="timeframe",
                    ),
                ),
                (
                    "minimum_value",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Visits a day/week must reach to count toward consistency",
                        null=True,
                        verbose_name="minimum per period",
                    ),
                ),
                (
                    "tier",
                    models.CharField(
                        choices=[
                            ("bronze", "Bronze"),
                            ("silver", "Silver"),
                            ("gold", "Gold"),
                            ("platinum", "Platinum"),
                            ("diamond", "Diamond"),
                        ],
                        default="bronze",
                        max_length=20,
                        verbose_name="tier",
                    ),
                ),
                (
                    "points",
                    models.PositiveIntegerField(
                        default=10,
                        validators=[django.core.validators.MinValueValidator(1)],
                        verbose_name="points",
                    ),
                ),
                ("badge", models.CharField(default="🎯", max_length=20, verbose_name="badge")),
                ("color", models.CharField(blank=True, max_length=50, verbose_name="color")),
                ("reward_type", models.CharField(blank=True, max_length=20, verbose_name="reward type")),
                ("reward_value", models.CharField(blank=True, max_length=100, verbose_name="reward value")),
                (
                    "reward_description",
                    models.CharField(blank=True, max_length=200, verbose_name="reward description"),
                ),
                ("is_repeatable", models.BooleanField(default=False, verbose_name="repeatable")),
                (
                    "max_completions",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Empty means unlimited for repeatable achievements",
                        null=True,
                        verbose_name="max completions",
                    ),
                ),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "achievement",
                "verbose_name_plural": "achievements",
                "ordering": ["category", "requirement"],
            },
        ),
        migrations.CreateModel(
            name="BarberAchievement",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("progress", models.PositiveIntegerField(default=0, verbose_name="progress")),
                ("is_completed", models.BooleanField(default=False, verbose_name="completed")),
                ("completed_at", models.DateTimeField(blank=True, null=True, verbose_name="completed at")),
                ("completion_count", models.PositiveIntegerField(default=0, verbose_name="completions")),
                ("current_streak", models.PositiveIntegerField(default=0, verbose_name="current streak")),
                ("last_progress_at", models.DateTimeField(blank=True, null=True, verbose_name="last progress")),
                ("metadata", models.JSONField(blank=True, default=dict, verbose_name="metadata")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "achievement",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="barber_progress",
                        to="barberman_achievements.achievement",
                        verbose_name="achievement",
                    ),
                ),
                (
                    "barber",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="achievements",
                        to="barberman.barber",
                        verbose_name="barber",
                    ),
                ),
            ],
            options={
                "verbose_name": "barber achievement",
                "verbose_name_plural": "barber achievements",
                "indexes": [
                    models.Index(fields=["barber", "is_completed"], name="barberman_achv_barber_done"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("barber", "achievement"),
                        name="barberman_unique_barber_achievement",
                    ),
                ],
            },
        ),
    ]
