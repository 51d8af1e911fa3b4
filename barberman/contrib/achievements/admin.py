"""Achievements admin."""

from django.contrib import admin
from django.utils.html import format_html

from barberman.contrib.achievements.models import Achievement, BarberAchievement
from barberman.utils import percentage


class BarberAchievementInline(admin.TabularInline):
    model = BarberAchievement
    extra = 0
    fields = ["barber", "progress", "is_completed", "completion_count", "completed_at"]
    readonly_fields = ["progress", "is_completed", "completion_count", "completed_at"]
    raw_id_fields = ["barber"]


@admin.register(Achievement)
class AchievementAdmin(admin.ModelAdmin):
    list_display = [
        "title",
        "category",
        "subcategory",
        "requirement",
        "tier",
        "points",
        "is_repeatable",
        "is_active",
    ]
    list_filter = ["category", "tier", "is_active", "is_repeatable"]
    search_fields = ["title", "description", "subcategory"]


@admin.register(BarberAchievement)
class BarberAchievementAdmin(admin.ModelAdmin):
    list_display = [
        "barber",
        "achievement",
        "progress_display",
        "is_completed",
        "completion_count",
        "current_streak",
        "completed_at",
    ]
    list_filter = ["is_completed", "achievement__category", "achievement__tier"]
    search_fields = ["barber__code", "barber__name", "achievement__title"]
    raw_id_fields = ["barber", "achievement"]
    readonly_fields = ["last_progress_at", "created_at", "updated_at"]

    def progress_display(self, obj):
        requirement = obj.achievement.requirement
        return format_html(
            "{}/{} ({}%)",
            obj.progress,
            requirement,
            percentage(obj.progress, requirement),
        )

    progress_display.short_description = "Progress"
