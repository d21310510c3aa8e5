"""
Discount API serializers
"""

from decimal import Decimal

from rest_framework import serializers

from apps.discounts.models import DISCOUNT_CODE_MAX_LENGTH


class DiscountValidateInputSerializer(serializers.Serializer):
    """Checkout request to price a discount code against the cart"""

    code = serializers.CharField(max_length=DISCOUNT_CODE_MAX_LENGTH, trim_whitespace=True)
    subtotal = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'))
    product_ids = serializers.ListField(
        child=serializers.CharField(max_length=64),
        required=False,
        default=list,
    )


class DiscountValidateOutputSerializer(serializers.Serializer):
    """``{valid, amount}`` when accepted, ``{valid, message, error_code}`` when rejected"""

    valid = serializers.BooleanField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    message = serializers.CharField(required=False)
    error_code = serializers.CharField(required=False)
