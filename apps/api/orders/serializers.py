"""
Order API Serializers for Credit Gyems Academy
"""

from rest_framework import serializers

from apps.discounts.models import DISCOUNT_CODE_MAX_LENGTH
from apps.orders.models import Order, OrderItem

MAX_ITEM_QUANTITY = 50


class OrderItemSerializer(serializers.ModelSerializer):
    """Order item with pricing snapshot for API responses"""

    class Meta:
        model = OrderItem
        fields = [
            'id', 'product', 'product_name', 'product_type',
            'unit_price', 'quantity', 'line_total'
        ]


class OrderListSerializer(serializers.ModelSerializer):
    """Slim order info for customer order history"""

    payment_status_display = serializers.CharField(source='get_payment_status_display', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'payment_status', 'payment_status_display',
            'fulfillment_status', 'subtotal', 'discount_amount', 'total', 'currency',
            'created_at', 'paid_at'
        ]


class OrderDetailSerializer(serializers.ModelSerializer):
    """Full order details with items and discount breakdown"""

    items = OrderItemSerializer(many=True, read_only=True)
    payment_status_display = serializers.CharField(source='get_payment_status_display', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'payment_method', 'payment_status', 'payment_status_display',
            'fulfillment_status', 'subtotal', 'discount_code', 'discount_amount', 'tax', 'total',
            'currency', 'customer_name', 'customer_email',
            'created_at', 'updated_at', 'paid_at', 'fulfilled_at', 'items'
        ]


# Input Serializers

class CartItemInputSerializer(serializers.Serializer):
    """Cart line; prices are always resolved server-side"""

    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_ITEM_QUANTITY, default=1)


class OrderCreateInputSerializer(serializers.Serializer):
    """Input serializer for order creation"""

    items = CartItemInputSerializer(many=True, allow_empty=True)
    payment_method = serializers.ChoiceField(choices=Order.PAYMENT_METHOD_CHOICES)
    discount_code = serializers.CharField(
        max_length=DISCOUNT_CODE_MAX_LENGTH, required=False, allow_blank=True, default=''
    )


class PaymentStatusInputSerializer(serializers.Serializer):
    """Payment outcome reported by staff or the payment integration"""

    status = serializers.ChoiceField(choices=['completed', 'failed'])
