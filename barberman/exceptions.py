"""Barberman exceptions."""


class BarbermanError(Exception):
    """
    Structured exception for loyalty and staff progression operations.

    Every error carries a stable ``code``, a human ``message`` and free-form
    ``data`` describing the failing subject.

    Usage:
        try:
            LoyaltyService.redeem_reward("CLI-001", reward_id, "Marco")
        except BarbermanError as e:
            if e.code == "INSUFFICIENT_VISITS":
                show_progress(e.data)
    """

    default_code = "BARBERMAN_ERROR"

    _default_messages = {
        "BARBERMAN_ERROR": "Loyalty engine error",
        "CUSTOMER_NOT_FOUND": "Customer not found",
        "REWARD_NOT_FOUND": "Reward not found or inactive",
        "VISIT_NOT_FOUND": "Visit not found",
        "BARBER_NOT_FOUND": "Barber not found",
        "REDEMPTION_NOT_FOUND": "Redemption not found",
        "SERVICE_NOT_FOUND": "Service not found",
        "INSUFFICIENT_VISITS": "Not enough visits to redeem this reward",
        "NO_VISITS": "Customer must have at least one visit to redeem a reward",
        "REWARD_EXPIRED": "This reward has expired. Please select a new reward.",
        "MAX_REDEMPTIONS_REACHED": "Reward already redeemed the maximum number of times",
        "VISIT_ALREADY_REDEEMED": "A reward was already redeemed on this visit",
        "DISCOUNT_PERCENTAGE_REQUIRED": "Discount rewards require a percentage between 1 and 100",
        "INVALID_VISITS_REQUIRED": "Visits required must be at least 1",
        "INVALID_REWARD_TYPE": "Unknown reward type",
        "INVALID_MAX_REDEMPTIONS": "Max redemptions must be at least 1",
        "STORAGE_FAILURE": "Record store failure",
    }

    def __init__(self, code: str | None = None, message: str | None = None, **data):
        self.code = code or self.default_code
        self.message = message or self._default_messages.get(self.code, self.code)
        self.data = data
        super().__init__(self.message)

    def __str__(self):
        return f"[{self.code}] {self.message}"

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": self.data}


class NotFound(BarbermanError):
    """Customer, staff member, reward or definition missing."""

    default_code = "NOT_FOUND"


class NotEligible(BarbermanError):
    """Progress below requirement (or selection expired) at redemption time."""

    default_code = "INSUFFICIENT_VISITS"


class MaxRedemptionsReached(BarbermanError):
    """Per-customer redemption cap already met for the reward."""

    default_code = "MAX_REDEMPTIONS_REACHED"


class InvalidDefinition(BarbermanError):
    """Reward definition rejected at creation time."""

    default_code = "INVALID_DEFINITION"


class StorageFailure(BarbermanError):
    """Error bubbled from the record store."""

    default_code = "STORAGE_FAILURE"
