"""
Django Barberman - Barbershop loyalty and staff progression.

Usage:
    from barberman import LoyaltyService, StatsService
    from barberman.gates import Gates, GateResult

    status = LoyaltyService.get_loyalty_status("CLI-001")
    LoyaltyService.select_reward("CLI-001", reward.pk)
    LoyaltyService.record_visit_for_loyalty("CLI-001", visit.pk)
    LoyaltyService.redeem_reward("CLI-001", reward.pk, redeemed_by="Marco")

    # Staff progression (achievements + staff rewards)
    StatsService.refresh("BRB-001")
"""


def __getattr__(name):
    if name == "LoyaltyService":
        from barberman.services.loyalty import LoyaltyService

        return LoyaltyService
    if name == "StatsService":
        from barberman.services.stats import StatsService

        return StatsService
    if name == "Gates":
        from barberman.gates import Gates

        return Gates
    if name == "GateResult":
        from barberman.gates import GateResult

        return GateResult
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["LoyaltyService", "StatsService", "Gates", "GateResult"]
__version__ = "0.1.0"
