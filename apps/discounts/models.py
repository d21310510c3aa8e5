"""
Discount code models for Credit Gyems Academy.

Supports:
- Percentage and fixed-amount discounts
- Activation window (start/end date) and a manual kill switch
- Minimum order amount
- Global and per-user redemption caps
- Product restrictions
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, ClassVar

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger(__name__)

# ===============================================================================
# Constants
# ===============================================================================

MAX_DISCOUNT_PERCENT = Decimal("100")
DISCOUNT_CODE_MAX_LENGTH = 50


def normalize_discount_code(code: str) -> str:
    """Codes are stored and looked up upper-cased and trimmed."""
    return code.upper().strip()


# ===============================================================================
# Discount Model
# ===============================================================================


class Discount(models.Model):
    """
    Redeemable discount code.
    Usage counters are only moved by DiscountService.redeem().
    """

    # Discount identification
    code = models.CharField(
        max_length=DISCOUNT_CODE_MAX_LENGTH,
        unique=True,
        help_text=_("Unique discount code (case-insensitive)"),
    )
    description = models.TextField(blank=True, help_text=_("Description shown to customers"))

    # Discount type and value
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"
    DISCOUNT_TYPES: ClassVar[tuple[tuple[str, Any], ...]] = (
        (PERCENTAGE, _("Percentage Discount")),
        (FIXED_AMOUNT, _("Fixed Amount Discount")),
    )
    discount_type = models.CharField(max_length=20, choices=DISCOUNT_TYPES)
    value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Percent (0-100) for percentage discounts, currency amount for fixed discounts"),
    )

    # Minimum requirements
    min_order_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Minimum order subtotal to qualify"),
    )

    # Product restrictions (empty = applies to all products)
    applicable_products = models.ManyToManyField(
        "products.Product",
        blank=True,
        related_name="discounts",
        help_text=_("Restrict discount to these products"),
    )

    # Usage limits
    max_uses = models.PositiveIntegerField(null=True, blank=True, help_text=_("Maximum total redemptions"))
    uses_count = models.PositiveIntegerField(default=0, help_text=_("Current total redemption count"))
    per_user_limit = models.PositiveIntegerField(null=True, blank=True, help_text=_("Maximum uses per user"))

    # Validity period
    start_date = models.DateTimeField(null=True, blank=True, help_text=_("When the code becomes valid"))
    end_date = models.DateTimeField(null=True, blank=True, help_text=_("When the code expires (null = never)"))

    # Status
    is_active = models.BooleanField(default=True, help_text=_("Master switch for the discount"))

    # Audit
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_discounts",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "discounts"
        verbose_name = _("Discount")
        verbose_name_plural = _("Discounts")
        ordering: ClassVar[tuple[str, ...]] = ("-created_at",)
        indexes: ClassVar[tuple[models.Index, ...]] = (
            models.Index(fields=["code"], name="idx_discount_code"),
            models.Index(fields=["is_active", "start_date", "end_date"], name="idx_discount_validity"),
        )

    def __str__(self) -> str:
        return self.code

    def save(self, *args: Any, **kwargs: Any) -> None:
        """Normalize code to uppercase before saving."""
        if self.code:
            self.code = normalize_discount_code(self.code)
        super().save(*args, **kwargs)

    def clean(self) -> None:
        """Validate discount configuration."""
        super().clean()
        if self.discount_type == self.PERCENTAGE and self.value is not None and self.value > MAX_DISCOUNT_PERCENT:
            raise ValidationError({"value": _("Percentage must be between 0 and 100")})
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError({"end_date": _("end_date must be after start_date")})

    @property
    def is_expired(self) -> bool:
        return self.end_date is not None and self.end_date < timezone.now()

    @property
    def remaining_uses(self) -> int | None:
        """Remaining global uses, or None if unlimited."""
        if self.max_uses is None:
            return None
        return max(0, self.max_uses - self.uses_count)

    def get_user_uses(self, user_id: Any) -> int:
        """Times the given user has redeemed this discount (0 when never)."""
        usage = self.user_usage.filter(user_id=user_id).only("uses_count").first()
        return usage.uses_count if usage else 0


# ===============================================================================
# Per-user Usage Model
# ===============================================================================


class DiscountUsage(models.Model):
    """Redemption counter for one user of one discount."""

    discount = models.ForeignKey(Discount, on_delete=models.CASCADE, related_name="user_usage")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="discount_usage")
    uses_count = models.PositiveIntegerField(default=0)
    last_used_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "discount_user_usage"
        verbose_name = _("Discount Usage")
        verbose_name_plural = _("Discount Usage")
        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(fields=["discount", "user"], name="uniq_discount_usage_per_user"),
        ]

    def __str__(self) -> str:
        return f"{self.discount.code}: user {self.user_id} x{self.uses_count}"
