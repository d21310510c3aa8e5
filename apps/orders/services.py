"""
Order Management Services for Credit Gyems Academy
Handles checkout, discount application, payment transitions and fulfilment.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, TypedDict

from django.conf import settings
from django.db import transaction
from django.db.models import F, QuerySet
from django.utils import timezone
from django_q.tasks import async_task

from apps.common.types import Err, Ok, Result
from apps.discounts.services import DiscountService, DiscountValidation, validate_discount
from apps.products.models import Product

from .models import Order, OrderItem

if TYPE_CHECKING:
    from django.contrib.auth.models import User

logger = logging.getLogger(__name__)

CONFIRMATION_TASK = "apps.orders.tasks.send_order_confirmation"

# ===============================================================================
# ORDER SERVICE PARAMETER OBJECTS
# ===============================================================================


class OrderItemData(TypedDict):
    """Cart line as submitted by the storefront"""
    product_id: uuid.UUID | str
    quantity: int


@dataclass
class OrderCreateData:
    """Parameter object for order creation"""
    user: User
    items: list[OrderItemData]
    payment_method: str
    discount_code: str = ""
    currency: str = field(default_factory=lambda: getattr(settings, "DEFAULT_CURRENCY", "USD"))


# ===============================================================================
# ORDER SERVICE
# ===============================================================================


class OrderService:
    """Main service for order management operations"""

    @staticmethod
    def _collect_quantities(items: list[OrderItemData]) -> Result[dict[uuid.UUID, int], str]:
        quantities: dict[uuid.UUID, int] = {}
        for item in items:
            try:
                product_id = uuid.UUID(str(item["product_id"]))
                quantity = int(item.get("quantity", 1))
            except (KeyError, TypeError, ValueError):
                return Err("Some products are not available")
            if quantity < 1:
                return Err("Quantity must be at least 1")
            quantities[product_id] = quantities.get(product_id, 0) + quantity
        return Ok(quantities)

    @staticmethod
    @transaction.atomic
    def create_order(data: OrderCreateData) -> Result[Order, str]:
        """Create a pending order from a cart, pricing every line from the catalog"""
        if not data.items:
            return Err("Cart is empty")

        valid_methods = {choice for choice, _label in Order.PAYMENT_METHOD_CHOICES}
        if data.payment_method not in valid_methods:
            return Err("Unsupported payment method")

        quantities_result = OrderService._collect_quantities(data.items)
        if quantities_result.is_err():
            return Err(quantities_result.unwrap_err())
        quantities = quantities_result.unwrap()

        products = {p.pk: p for p in Product.objects.available().filter(pk__in=list(quantities))}
        if len(products) != len(quantities) or not all(p.is_available for p in products.values()):
            return Err("Some products are not available")

        subtotal = sum(
            (products[pid].effective_price * qty for pid, qty in quantities.items()),
            Decimal("0"),
        )

        discount = None
        discount_amount = Decimal("0")
        if data.discount_code:
            discount = DiscountService.get_discount_by_code(data.discount_code)
            if discount is None:
                validation = DiscountValidation.reject("Invalid discount code", "INVALID_CODE")
            else:
                validation = validate_discount(discount, data.user.pk, subtotal, list(products))
            if not validation.is_valid:
                logger.info(
                    "🏷️ [Orders] Discount %s rejected at checkout: %s",
                    data.discount_code,
                    validation.message,
                    extra={"discount_code": data.discount_code, "error_code": validation.error_code},
                )
                return Err(validation.message)
            discount_amount = validation.amount or Decimal("0")

        tax = Decimal("0")  # Digital goods
        total = max(subtotal - discount_amount + tax, Decimal("0"))

        user = data.user
        order = Order.objects.create(
            user=user,
            subtotal=subtotal,
            discount=discount,
            discount_code=discount.code if discount else "",
            discount_amount=discount_amount,
            tax=tax,
            total=total,
            currency=data.currency,
            payment_method=data.payment_method,
            customer_email=user.email,
            customer_name=user.get_full_name() or user.get_username(),
        )

        for product_id, quantity in quantities.items():
            product = products[product_id]
            OrderItem.objects.create(
                order=order,
                product=product,
                product_name=product.name,
                product_type=product.product_type,
                unit_price=product.effective_price,
                quantity=quantity,
            )

        logger.info(
            "🛒 [Orders] Created %s for user %s: total %s",
            order.order_number,
            user.pk,
            order.total,
            extra={
                "order_number": order.order_number,
                "subtotal": str(subtotal),
                "discount_code": order.discount_code,
                "discount_amount": str(discount_amount),
            },
        )
        return Ok(order)

    @staticmethod
    def mark_paid(order: Order) -> Result[Order, str]:
        """
        Complete payment: redeem the discount, fulfil digital goods and queue
        the confirmation e-mail once the transaction commits.
        """
        with transaction.atomic():
            locked = Order.objects.select_for_update().select_related("discount", "user").get(pk=order.pk)
            if not locked.is_pending:
                return Err(f"Order is already {locked.payment_status}")

            items = list(locked.items.all())

            # Payment is already captured at the priced total; a lost cap race is logged, not refused
            if locked.discount is not None:
                redemption = DiscountService.redeem(locked.discount, locked.user)
                if redemption.is_err():
                    logger.warning(
                        "⚠️ [Orders] Completing %s over discount cap: %s %s",
                        locked.order_number,
                        locked.discount_code,
                        redemption.unwrap_err(),
                        extra={"order_number": locked.order_number, "reason": redemption.unwrap_err()},
                    )

            locked.payment_status = "completed"
            locked.paid_at = timezone.now()
            locked.mark_as_fulfilled()
            locked.save(update_fields=["payment_status", "paid_at", "fulfillment_status", "fulfilled_at", "updated_at"])

            for item in items:
                Product.objects.filter(pk=item.product_id).update(sales_count=F("sales_count") + item.quantity)

            order_id = str(locked.pk)
            transaction.on_commit(lambda: async_task(CONFIRMATION_TASK, order_id))

        logger.info(
            "💰 [Orders] Payment completed for %s",
            locked.order_number,
            extra={"order_number": locked.order_number, "total": str(locked.total)},
        )
        return Ok(locked)

    @staticmethod
    @transaction.atomic
    def mark_failed(order: Order) -> Result[Order, str]:
        """Record a declined payment"""
        locked = Order.objects.select_for_update().get(pk=order.pk)
        if not locked.is_pending:
            return Err(f"Order is already {locked.payment_status}")

        locked.payment_status = "failed"
        locked.save(update_fields=["payment_status", "updated_at"])
        logger.info(
            "❌ [Orders] Payment failed for %s",
            locked.order_number,
            extra={"order_number": locked.order_number},
        )
        return Ok(locked)

    @staticmethod
    def get_user_orders(user: User) -> QuerySet[Order]:
        """Orders placed by a user, newest first"""
        return Order.objects.filter(user=user).prefetch_related("items").order_by("-created_at")
