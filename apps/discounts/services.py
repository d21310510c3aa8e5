"""
Discount services for Credit Gyems Academy.
Business logic for discount code validation, calculation, and redemption.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any

from django.db import transaction
from django.db.models import F, Q
from django.utils import timezone

from apps.common.types import Err, Ok, Result

from .models import Discount, DiscountUsage, normalize_discount_code

if TYPE_CHECKING:
    from django.contrib.auth.models import User

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
GENERIC_ERROR_MESSAGE = "Error validating discount"
INTERNAL_ERROR_CODE = "VALIDATION_ERROR"


# ===============================================================================
# Data Classes for Results
# ===============================================================================


@dataclass(frozen=True)
class DiscountValidation:
    """
    Result of validating a discount code against a cart.

    Attributes:
        is_valid: Whether the discount can be applied.
        amount: Discount amount to subtract from the subtotal (only when valid).
        message: Human-readable reason when validation failed.
        error_code: Machine-readable reason. Codes: INVALID_CODE, DISCOUNT_INACTIVE,
            DISCOUNT_NOT_STARTED, DISCOUNT_EXPIRED, MIN_ORDER_NOT_MET, DISCOUNT_DEPLETED,
            USER_LIMIT_REACHED, NO_ELIGIBLE_PRODUCTS, VALIDATION_ERROR
    """

    is_valid: bool
    amount: Decimal | None = None
    message: str = ""
    error_code: str = ""

    @classmethod
    def accept(cls, amount: Decimal) -> DiscountValidation:
        return cls(is_valid=True, amount=amount)

    @classmethod
    def reject(cls, message: str, error_code: str) -> DiscountValidation:
        return cls(is_valid=False, message=message, error_code=error_code)

    @property
    def is_internal_error(self) -> bool:
        """True when the rejection came from an unexpected failure, not a business rule."""
        return self.error_code == INTERNAL_ERROR_CODE

    def to_dict(self) -> dict[str, Any]:
        """Checkout contract: ``{valid, amount}`` on success, ``{valid, message}`` on rejection."""
        if self.is_valid:
            return {"valid": True, "amount": self.amount}
        return {"valid": False, "message": self.message}


# ===============================================================================
# Discount Validator
# ===============================================================================


def _as_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def calculate_discount_amount(discount: Discount, subtotal: Decimal) -> Decimal:
    """Discount amount for an eligible subtotal; never exceeds the subtotal."""
    value = _as_decimal(discount.value)
    if discount.discount_type == Discount.PERCENTAGE:
        return (subtotal * value / Decimal("100")).quantize(CENTS, rounding=ROUND_HALF_UP)
    if discount.discount_type == Discount.FIXED_AMOUNT:
        return min(value, subtotal)
    return Decimal("0")


def validate_discount(  # noqa: PLR0911
    discount: Discount,
    user_id: Any,
    subtotal: Decimal | int | float | str,
    product_ids: Iterable[Any],
    now: datetime | None = None,
) -> DiscountValidation:
    """
    Decide whether ``discount`` may be applied to a cart and compute the amount.

    Checks run in a fixed order and the first failure wins. Both ends of the
    activation window are inclusive. Read-only: usage counters are untouched.
    """
    try:
        if not discount.is_active:
            return DiscountValidation.reject("Discount code is inactive", "DISCOUNT_INACTIVE")

        now = now or timezone.now()

        if discount.start_date and discount.start_date > now:
            return DiscountValidation.reject("Discount code is not yet active", "DISCOUNT_NOT_STARTED")

        if discount.end_date and discount.end_date < now:
            return DiscountValidation.reject("Discount code has expired", "DISCOUNT_EXPIRED")

        subtotal = _as_decimal(subtotal)

        if discount.min_order_amount and subtotal < discount.min_order_amount:
            return DiscountValidation.reject(
                f"Order must be at least ${_as_decimal(discount.min_order_amount):.2f} to use this discount",
                "MIN_ORDER_NOT_MET",
            )

        if discount.max_uses is not None and discount.uses_count >= discount.max_uses:
            return DiscountValidation.reject("Discount code has reached maximum usage", "DISCOUNT_DEPLETED")

        if discount.per_user_limit is not None and discount.get_user_uses(user_id) >= discount.per_user_limit:
            return DiscountValidation.reject(
                f"You have already used this discount code {discount.per_user_limit} times",
                "USER_LIMIT_REACHED",
            )

        applicable = {str(pk) for pk in discount.applicable_products.values_list("pk", flat=True)}
        if applicable and applicable.isdisjoint(str(pk) for pk in product_ids):
            return DiscountValidation.reject(
                "Discount code is not applicable to these products", "NO_ELIGIBLE_PRODUCTS"
            )

        return DiscountValidation.accept(calculate_discount_amount(discount, subtotal))

    except Exception:
        # Checkout must never crash on a bad discount record
        logger.exception(
            "🔥 [Discounts] Error validating discount %s",
            getattr(discount, "code", "?"),
            extra={"discount_code": getattr(discount, "code", None)},
        )
        return DiscountValidation.reject(GENERIC_ERROR_MESSAGE, INTERNAL_ERROR_CODE)


# ===============================================================================
# Discount Service
# ===============================================================================


class DiscountService:
    """
    Service for discount lookup, validation and redemption.
    """

    @staticmethod
    def normalize_code(code: str) -> str:
        """Normalize discount code to uppercase and trimmed."""
        return normalize_discount_code(code)

    @classmethod
    def get_discount_by_code(cls, code: str) -> Discount | None:
        """Get discount by code (case-insensitive)."""
        normalized_code = cls.normalize_code(code)
        if not normalized_code:
            return None
        try:
            return Discount.objects.get(code=normalized_code)
        except Discount.DoesNotExist:
            return None

    @classmethod
    def validate_code(
        cls,
        code: str,
        user_id: Any,
        subtotal: Decimal | int | float | str,
        product_ids: Iterable[Any],
    ) -> DiscountValidation:
        """Look up a code and validate it for a cart."""
        discount = cls.get_discount_by_code(code)
        if discount is None:
            return DiscountValidation.reject("Invalid discount code", "INVALID_CODE")

        validation = validate_discount(discount, user_id, subtotal, product_ids)
        logger.debug(
            "🏷️ [Discounts] Validated %s for user %s: %s",
            discount.code,
            user_id,
            "ok" if validation.is_valid else validation.error_code,
        )
        return validation

    @staticmethod
    def get_user_uses(discount: Discount, user_id: Any) -> int:
        """Prior redemptions of ``discount`` by a user."""
        return discount.get_user_uses(user_id)

    @classmethod
    @transaction.atomic
    def redeem(cls, discount: Discount, user: User) -> Result[Discount, str]:
        """
        Record one redemption of ``discount`` by ``user`` for an already priced order.

        Only the usage caps are enforced here: the global ``max_uses`` through a
        conditional increment and ``per_user_limit`` against the user's count
        read under the discount row lock. Activity, date window, minimum order
        and product restrictions were settled when the order was priced.
        """
        try:
            locked = Discount.objects.select_for_update().get(pk=discount.pk)
        except Discount.DoesNotExist:
            return Err("Invalid discount code")

        if locked.per_user_limit is not None and locked.get_user_uses(user.pk) >= locked.per_user_limit:
            logger.warning(
                "⚠️ [Discounts] Per-user limit reached for %s by user %s",
                locked.code,
                user.pk,
                extra={"discount_code": locked.code, "error_code": "USER_LIMIT_REACHED"},
            )
            return Err(f"You have already used this discount code {locked.per_user_limit} times")

        # Conditional increment guards the cap even without row locking (SQLite)
        updated = (
            Discount.objects.filter(pk=locked.pk)
            .filter(Q(max_uses__isnull=True) | Q(uses_count__lt=F("max_uses")))
            .update(uses_count=F("uses_count") + 1)
        )
        if updated != 1:
            logger.warning(
                "⚠️ [Discounts] Usage cap reached for %s",
                locked.code,
                extra={"discount_code": locked.code, "error_code": "USAGE_LIMIT_REACHED"},
            )
            return Err("Discount code has reached maximum usage")

        usage, _ = DiscountUsage.objects.select_for_update().get_or_create(discount=locked, user=user)
        DiscountUsage.objects.filter(pk=usage.pk).update(
            uses_count=F("uses_count") + 1,
            last_used_at=timezone.now(),
        )

        locked.refresh_from_db(fields=["uses_count"])
        logger.info(
            "✅ [Discounts] Redeemed %s by user %s (%s uses)",
            locked.code,
            user.pk,
            locked.uses_count,
            extra={"discount_code": locked.code},
        )
        return Ok(locked)
