"""
Order API Views for Credit Gyems Academy
DRF views for order creation, history and payment transitions.
"""

import logging
import uuid

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle

from apps.orders.models import Order
from apps.orders.services import OrderCreateData, OrderService

from .serializers import (
    OrderCreateInputSerializer,
    OrderDetailSerializer,
    OrderListSerializer,
    PaymentStatusInputSerializer,
)

logger = logging.getLogger(__name__)


# 🔒 SECURITY: Custom throttle classes for order endpoints
class OrderCreateThrottle(ScopedRateThrottle):
    """Throttling for order creation (listing is not throttled)"""
    scope = 'order_create'

    def allow_request(self, request, view):
        if request.method != 'POST':
            return True
        return super().allow_request(request, view)


def _invalid_input(errors) -> Response:
    return Response({
        'error': 'Invalid input',
        'details': errors
    }, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
@throttle_classes([OrderCreateThrottle])
def order_list_create(request: Request) -> Response:
    """
    GET: the caller's orders, newest first.
    POST: create a pending order from cart items with server-side pricing.
    """
    if request.method == 'GET':
        orders = OrderService.get_user_orders(request.user)
        serializer = OrderListSerializer(orders, many=True)
        return Response({
            'results': serializer.data,
            'count': len(serializer.data)
        })

    input_serializer = OrderCreateInputSerializer(data=request.data)
    if not input_serializer.is_valid():
        return _invalid_input(input_serializer.errors)

    validated_data = input_serializer.validated_data
    order_data = OrderCreateData(
        user=request.user,
        items=[dict(item) for item in validated_data['items']],
        payment_method=validated_data['payment_method'],
        discount_code=validated_data['discount_code'],
    )

    result = OrderService.create_order(order_data)
    if result.is_err():
        logger.info(f"🛒 [API] Order rejected for user {request.user.pk}: {result.unwrap_err()}")
        return Response({
            'success': False,
            'message': result.unwrap_err()
        }, status=status.HTTP_400_BAD_REQUEST)

    order = result.unwrap()
    return Response(OrderDetailSerializer(order).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def order_detail(request: Request, order_id: uuid.UUID) -> Response:
    """Order detail, visible to its owner and to staff"""
    try:
        order = Order.objects.prefetch_related('items').get(pk=order_id)
    except Order.DoesNotExist:
        return Response({
            'error': 'Order not found'
        }, status=status.HTTP_404_NOT_FOUND)

    if order.user_id != request.user.pk and not request.user.is_staff:
        logger.warning(f"🚨 [API] User {request.user.pk} denied access to order {order.order_number}")
        return Response({
            'error': 'Access denied'
        }, status=status.HTTP_403_FORBIDDEN)

    return Response(OrderDetailSerializer(order).data)


@api_view(['POST'])
@permission_classes([IsAdminUser])
def update_payment_status(request: Request, order_id: uuid.UUID) -> Response:
    """
    Record the payment outcome for a pending order.
    ``completed`` redeems the discount and queues the confirmation e-mail.
    """
    input_serializer = PaymentStatusInputSerializer(data=request.data)
    if not input_serializer.is_valid():
        return _invalid_input(input_serializer.errors)

    try:
        order = Order.objects.get(pk=order_id)
    except Order.DoesNotExist:
        return Response({
            'error': 'Order not found'
        }, status=status.HTTP_404_NOT_FOUND)

    if input_serializer.validated_data['status'] == 'completed':
        result = OrderService.mark_paid(order)
    else:
        result = OrderService.mark_failed(order)

    if result.is_err():
        return Response({
            'success': False,
            'message': result.unwrap_err()
        }, status=status.HTTP_400_BAD_REQUEST)

    order = Order.objects.prefetch_related('items').get(pk=order_id)
    return Response(OrderDetailSerializer(order).data)
