"""
Order background tasks.

Django-Q2 tasks queued by OrderService after a payment commits.
"""

from __future__ import annotations

import logging
from typing import Any

from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string

from apps.orders.models import Order

logger = logging.getLogger(__name__)


def send_order_confirmation(order_id: str) -> dict[str, Any]:
    """
    E-mail the purchase confirmation for a paid order.

    Returns:
        Dictionary with the send result, stored by Django-Q2
    """
    try:
        order = Order.objects.prefetch_related("items").get(pk=order_id)
    except Order.DoesNotExist:
        logger.warning(f"⚠️ [OrderEmail] Order {order_id} not found, skipping confirmation")
        return {"success": False, "error": "Order not found"}

    if not order.customer_email:
        logger.warning(f"⚠️ [OrderEmail] Order {order.order_number} has no customer e-mail, skipping")
        return {"success": False, "error": "No customer email"}

    context = {
        "order": order,
        "items": list(order.items.all()),
        "orders_url": f"{settings.FRONTEND_URL.rstrip('/')}/orders/{order.pk}",
    }
    message = render_to_string("orders/emails/order_confirmation.txt", context)

    send_mail(
        subject=f"Your Credit Gyems Academy order {order.order_number}",
        message=message,
        from_email=settings.ORDER_CONFIRMATION_FROM_EMAIL,
        recipient_list=[order.customer_email],
        fail_silently=False,
    )

    logger.info(f"📧 [OrderEmail] Confirmation sent for {order.order_number} to {order.customer_email}")
    return {"success": True, "order_number": order.order_number}
