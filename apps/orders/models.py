"""
Order Management models for Credit Gyems Academy
Handles the order lifecycle from checkout to payment and digital fulfilment.
"""

from __future__ import annotations

import secrets
import time
import uuid
from decimal import Decimal
from typing import Any, ClassVar

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

ORDER_NUMBER_PREFIX = "CG-"
ORDER_NUMBER_MAX_ATTEMPTS = 10

# ===============================================================================
# ORDER MANAGEMENT MODELS
# ===============================================================================


def generate_order_number() -> str:
    """``CG-`` followed by the last 6 digits of the epoch seconds and 4 random digits."""
    timestamp = str(int(time.time()))[-6:]
    random_part = f"{secrets.randbelow(10000):04d}"
    return f"{ORDER_NUMBER_PREFIX}{timestamp}{random_part}"


class Order(models.Model):
    """
    Customer order for store products.
    Amounts are snapshotted at checkout; prices come from the catalog.
    """

    # Use UUID for better security and external references
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Order identification
    order_number = models.CharField(max_length=20, unique=True, help_text=_("Human-readable order number"))

    # Customer relationship
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="orders")

    # Amounts
    subtotal = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0"))], help_text=_("Before discount")
    )
    discount = models.ForeignKey(
        "discounts.Discount",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    discount_code = models.CharField(max_length=50, blank=True, help_text=_("Code snapshot at time of order"))
    discount_amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0"))
    tax = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0"))
    total = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0"))])
    currency = models.CharField(max_length=3, default="USD")

    # Payment processing
    PAYMENT_METHOD_CHOICES: ClassVar[tuple[tuple[str, Any], ...]] = (
        ("credit_card", _("Credit Card")),
        ("klarna", _("Klarna")),
        ("afterpay", _("Afterpay")),
    )
    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES)

    PAYMENT_STATUS_CHOICES: ClassVar[tuple[tuple[str, Any], ...]] = (
        ("pending", _("Pending")),  # Awaiting payment
        ("completed", _("Completed")),  # Paid
        ("failed", _("Failed")),  # Payment declined
        ("refunded", _("Refunded")),
    )
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUS_CHOICES, default="pending")

    FULFILLMENT_STATUS_CHOICES: ClassVar[tuple[tuple[str, Any], ...]] = (
        ("pending", _("Pending")),
        ("completed", _("Completed")),
    )
    fulfillment_status = models.CharField(max_length=20, choices=FULFILLMENT_STATUS_CHOICES, default="pending")

    # Customer information snapshot
    customer_email = models.EmailField(blank=True, help_text=_("Customer email at time of order"))
    customer_name = models.CharField(max_length=255, blank=True, help_text=_("Customer name at time of order"))

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    fulfilled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "orders"
        verbose_name = _("Order")
        verbose_name_plural = _("Orders")
        ordering: ClassVar[tuple[str, ...]] = ("-created_at",)
        indexes: ClassVar[tuple[models.Index, ...]] = (
            models.Index(fields=["user", "-created_at"], name="idx_order_user_created"),
            models.Index(fields=["payment_status", "-created_at"], name="idx_order_payment_status"),
        )

    def __str__(self) -> str:
        return f"Order {self.order_number} - {self.customer_email}"

    def save(self, *args: Any, **kwargs: Any) -> None:
        """Auto-generate a unique order number before saving"""
        if not self.order_number:
            self.order_number = self.generate_unique_order_number()
        super().save(*args, **kwargs)

    @classmethod
    def generate_unique_order_number(cls) -> str:
        for _attempt in range(ORDER_NUMBER_MAX_ATTEMPTS):
            order_number = generate_order_number()
            if not cls.objects.filter(order_number=order_number).exists():
                return order_number
        raise RuntimeError("Could not allocate a unique order number")

    @property
    def is_paid(self) -> bool:
        return self.payment_status == "completed"

    @property
    def is_pending(self) -> bool:
        return self.payment_status == "pending"

    def mark_as_fulfilled(self) -> None:
        """Digital goods are delivered as soon as payment clears"""
        self.fulfillment_status = "completed"
        self.fulfilled_at = timezone.now()


class OrderItem(models.Model):
    """
    Line item snapshot: product name, type and unit price at time of order.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey("products.Product", on_delete=models.PROTECT, related_name="order_items")

    product_name = models.CharField(max_length=200)
    product_type = models.CharField(max_length=20, blank=True)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    line_total = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        db_table = "order_items"
        verbose_name = _("Order Item")
        verbose_name_plural = _("Order Items")

    def __str__(self) -> str:
        return f"{self.product_name} x{self.quantity}"

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.line_total = self.unit_price * self.quantity
        super().save(*args, **kwargs)
