"""Staff rewards admin."""

from django.contrib import admin, messages
from django.utils.html import format_html

from barberman.contrib.staff_rewards.models import (
    BarberReward,
    BarberRewardRedemption,
    RedemptionStatus,
)
from barberman.contrib.staff_rewards.service import StaffRewardService


@admin.register(BarberReward)
class BarberRewardAdmin(admin.ModelAdmin):
    list_display = [
        "name",
        "reward_type",
        "reward_value",
        "requirement_type",
        "requirement_value",
        "category",
        "priority",
        "is_active",
    ]
    list_filter = ["reward_type", "requirement_type", "category", "is_active"]
    search_fields = ["name", "description", "category"]
    list_editable = ["priority", "is_active"]
    ordering = ["priority", "category", "name"]


@admin.register(BarberRewardRedemption)
class BarberRewardRedemptionAdmin(admin.ModelAdmin):
    list_display = [
        "earned_at",
        "barber",
        "reward",
        "status_badge",
        "redeemed_at",
        "redeemed_by",
    ]
    list_filter = ["status", "reward__reward_type", "reward__category"]
    search_fields = ["barber__code", "barber__name", "reward__name", "notes"]
    readonly_fields = [
        "barber",
        "reward",
        "status",
        "earned_at",
        "redeemed_at",
        "redeemed_by",
        "progress_at_earning",
        "created_at",
        "updated_at",
    ]
    date_hierarchy = "earned_at"
    actions = ["mark_as_redeemed"]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.action(description="Mark selected rewards as redeemed")
    def mark_as_redeemed(self, request, queryset):
        redeemed = 0
        for redemption in queryset.filter(status=RedemptionStatus.EARNED):
            if StaffRewardService.mark_redeemed(redemption.pk, request.user.pk):
                redeemed += 1
        self.message_user(request, f"{redeemed} reward(s) marked as redeemed.", messages.SUCCESS)

    def status_badge(self, obj):
        color = "#28a745" if obj.status == RedemptionStatus.REDEEMED else "#ffc107"
        return format_html(
            '<span style="background:{}; padding:2px 8px; border-radius:3px; font-size:11px;">{}</span>',
            color,
            obj.get_status_display(),
        )

    status_badge.short_description = "Status"
