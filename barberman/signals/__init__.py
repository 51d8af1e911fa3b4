"""
Barberman signals — public event API.

Emitted signals:
- visit_recorded: LoyaltyService.record_visit_for_loyalty()
- reward_selected: LoyaltyService.select_reward()
- reward_redeemed: LoyaltyService.redeem_reward()
- achievement_completed: AchievementService.update_progress()
- staff_reward_earned: StaffRewardService.update_reward_progress()
- staff_reward_redeemed: StaffRewardService.mark_redeemed()
"""

from django.dispatch import Signal

# Customer loyalty
visit_recorded = Signal()  # sender=Customer, customer, visit
reward_selected = Signal()  # sender=Customer, customer, reward
reward_redeemed = Signal()  # sender=Customer, customer, redemption

# Staff progression
achievement_completed = Signal()  # sender=BarberAchievement, barber_achievement, achievement
staff_reward_earned = Signal()  # sender=BarberRewardRedemption, redemption
staff_reward_redeemed = Signal()  # sender=BarberRewardRedemption, redemption_id, admin_id
