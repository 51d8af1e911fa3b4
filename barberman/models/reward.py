"""Customer-facing reward definitions."""

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class RewardType(models.TextChoices):
    FREE = "free", _("Free service")
    DISCOUNT = "discount", _("Discount")


class Reward(models.Model):
    """
    Reward a customer can work toward.

    Definitions are evaluated as they currently stand: editing
    visits_required after customers started progressing changes their
    eligibility immediately (no snapshot at selection time).
    """

    name = models.CharField(_("name"), max_length=100)
    description = models.TextField(_("description"), blank=True)

    visits_required = models.PositiveIntegerField(
        _("visits required"),
        validators=[MinValueValidator(1)],
        db_index=True,
    )
    reward_type = models.CharField(
        _("type"),
        max_length=20,
        choices=RewardType.choices,
        default=RewardType.FREE,
    )
    discount_percentage = models.PositiveSmallIntegerField(
        _("discount (%)"),
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(100)],
        help_text=_("Required for discount rewards (1-100)"),
    )
    applicable_services = models.ManyToManyField(
        "barberman.Service",
        related_name="rewards",
        blank=True,
        verbose_name=_("applicable services"),
    )
    max_redemptions = models.PositiveIntegerField(
        _("max redemptions per customer"),
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
    )
    valid_for_days = models.PositiveIntegerField(
        _("valid for (days)"),
        null=True,
        blank=True,
        help_text=_("Days a selection stays valid; empty means no expiry"),
    )

    is_active = models.BooleanField(_("active"), default=True, db_index=True)
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("reward")
        verbose_name_plural = _("rewards")
        ordering = ["visits_required", "name"]

    def __str__(self):
        return f"{self.name} ({self.visits_required} visits)"

    def clean(self):
        from barberman.exceptions import InvalidDefinition
        from barberman.gates import Gates

        try:
            Gates.reward_definition(
                visits_required=self.visits_required,
                reward_type=self.reward_type,
                discount_percentage=self.discount_percentage,
                max_redemptions=self.max_redemptions,
            )
        except InvalidDefinition as e:
            raise ValidationError(e.message, code=e.code)

    @property
    def is_discount(self) -> bool:
        return self.reward_type == RewardType.DISCOUNT

    def discounted_price(self, price: Decimal) -> Decimal:
        """Price of a service once this reward is applied."""
        if self.reward_type == RewardType.FREE:
            return Decimal("0.00")
        pct = Decimal(self.discount_percentage or 0)
        return (Decimal(price) * (Decimal(100) - pct) / Decimal(100)).quantize(Decimal("0.01"))
