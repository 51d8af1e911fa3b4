"""Barberman admin (CORE only).

Contrib models have their own admin in their respective modules:
- barberman.contrib.achievements.admin: AchievementAdmin, BarberAchievementAdmin
- barberman.contrib.staff_rewards.admin: BarberRewardAdmin, BarberRewardRedemptionAdmin
"""

from django.contrib import admin, messages
from django.utils.html import format_html

from barberman.models import (
    Barber,
    Customer,
    Reward,
    RewardRedemption,
    Service,
    StaffStats,
    Visit,
)
from barberman.services.loyalty import LoyaltyService
from barberman.services.stats import StatsService
from barberman.utils import percentage


# ===========================================
# Service Admin
# ===========================================


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ["code", "name", "price", "duration_minutes", "is_active"]
    list_filter = ["is_active"]
    search_fields = ["code", "name"]
    list_editable = ["is_active"]


# ===========================================
# Reward Admin
# ===========================================


@admin.register(Reward)
class RewardAdmin(admin.ModelAdmin):
    list_display = [
        "name",
        "reward_type",
        "visits_required",
        "discount_percentage",
        "max_redemptions",
        "valid_for_days",
        "redemption_count",
        "is_active",
    ]
    list_filter = ["reward_type", "is_active"]
    search_fields = ["name", "description"]
    filter_horizontal = ["applicable_services"]

    def redemption_count(self, obj):
        return obj.redemptions.count()

    redemption_count.short_description = "Redemptions"


# ===========================================
# Customer Admin
# ===========================================


class RewardRedemptionInline(admin.TabularInline):
    model = RewardRedemption
    extra = 0
    fields = ["reward_name", "reward_type", "previous_progress_visits", "redeemed_by", "redeemed_at"]
    readonly_fields = fields
    ordering = ["-redeemed_at"]

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = [
        "code",
        "name",
        "phone",
        "loyalty_status",
        "loyalty_progress",
        "total_lifetime_visits",
        "rewards_redeemed",
        "is_active",
    ]
    list_filter = ["loyalty_status", "is_active"]
    search_fields = ["code", "first_name", "last_name", "phone"]
    raw_id_fields = ["selected_reward"]
    readonly_fields = [
        "visit_count",
        "total_lifetime_visits",
        "current_progress_visits",
        "rewards_earned",
        "rewards_redeemed",
        "selected_reward_start_visits",
        "selected_reward_at",
        "loyalty_join_date",
        "last_visit",
        "created_at",
        "updated_at",
    ]
    inlines = [RewardRedemptionInline]
    actions = ["reset_loyalty"]

    fieldsets = [
        ("Identification", {"fields": ["code", "first_name", "last_name", "phone", "is_active"]}),
        (
            "Loyalty",
            {
                "fields": [
                    "loyalty_status",
                    "selected_reward",
                    "selected_reward_start_visits",
                    "selected_reward_at",
                    "current_progress_visits",
                    "total_lifetime_visits",
                    "visit_count",
                    "rewards_earned",
                    "rewards_redeemed",
                    "loyalty_join_date",
                    "last_visit",
                ]
            },
        ),
        ("Timestamps", {"fields": ["created_at", "updated_at"], "classes": ["collapse"]}),
    ]

    def loyalty_progress(self, obj):
        if obj.selected_reward is None:
            return format_html('<span style="color: gray;">{}</span>', obj.current_progress_visits)
        required = obj.selected_reward.visits_required
        return format_html(
            "{}/{} ({}%)",
            obj.current_progress_visits,
            required,
            percentage(obj.current_progress_visits, required),
        )

    loyalty_progress.short_description = "Progress"

    @admin.action(description="Reset loyalty progress")
    def reset_loyalty(self, request, queryset):
        for customer in queryset:
            LoyaltyService.reset_client_loyalty(customer.code)
        self.message_user(request, f"{queryset.count()} customer(s) reset.", messages.SUCCESS)


# ===========================================
# Visit Admin
# ===========================================


@admin.register(Visit)
class VisitAdmin(admin.ModelAdmin):
    list_display = [
        "visit_date",
        "customer",
        "barber",
        "total_price",
        "visit_number",
        "loyalty_recorded",
        "reward_redeemed",
    ]
    list_filter = ["loyalty_recorded", "reward_redeemed", "barber"]
    search_fields = ["customer__code", "customer__first_name", "barber__code", "notes"]
    raw_id_fields = ["customer", "barber", "redeemed_reward"]
    filter_horizontal = ["services"]
    readonly_fields = ["visit_number", "loyalty_recorded", "redemption_metadata", "created_at"]
    date_hierarchy = "visit_date"


# ===========================================
# RewardRedemption Admin (append-only)
# ===========================================


@admin.register(RewardRedemption)
class RewardRedemptionAdmin(admin.ModelAdmin):
    list_display = [
        "redeemed_at",
        "customer_code",
        "reward_name",
        "reward_type",
        "previous_progress_visits",
        "redeemed_by",
    ]
    list_filter = ["reward_type"]
    search_fields = ["customer__code", "reward_name", "redeemed_by"]
    readonly_fields = [
        "customer",
        "reward",
        "visit",
        "reward_name",
        "reward_type",
        "previous_progress_visits",
        "discount_applied",
        "free_services",
        "redeemed_by",
        "redeemed_at",
    ]
    date_hierarchy = "redeemed_at"

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def customer_code(self, obj):
        return obj.customer.code

    customer_code.short_description = "Customer"


# ===========================================
# Barber Admin
# ===========================================


class StaffStatsInline(admin.StackedInline):
    model = StaffStats
    extra = 0
    readonly_fields = [
        "total_visits",
        "unique_clients",
        "returning_clients",
        "retention_rate",
        "service_variety",
        "average_visits_per_day",
        "last_visit_at",
        "calculated_at",
    ]

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Barber)
class BarberAdmin(admin.ModelAdmin):
    list_display = ["code", "name", "join_date", "total_visits", "is_active"]
    list_filter = ["is_active"]
    search_fields = ["code", "name", "email"]
    readonly_fields = ["created_at"]
    inlines = [StaffStatsInline]
    actions = ["refresh_stats"]

    def total_visits(self, obj):
        stats = getattr(obj, "stats", None)
        return stats.total_visits if stats else 0

    total_visits.short_description = "Visits"

    @admin.action(description="Recalculate stats, achievements and rewards")
    def refresh_stats(self, request, queryset):
        for barber in queryset:
            StatsService.refresh(barber.code)
        self.message_user(request, f"{queryset.count()} barber(s) refreshed.", messages.SUCCESS)
