"""
Discount API views
Checkout-time discount code validation. Read-only: redemption happens on payment.
"""

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle

from apps.discounts.services import DiscountService

from .serializers import DiscountValidateInputSerializer, DiscountValidateOutputSerializer

logger = logging.getLogger(__name__)


# 🔒 SECURITY: Limit code guessing
class DiscountValidateThrottle(ScopedRateThrottle):
    """Throttling for discount validation"""
    scope = 'discount_validate'


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@throttle_classes([DiscountValidateThrottle])
def validate_discount_code(request: Request) -> Response:
    """
    Validate a discount code for the caller's cart.
    Business rejections are 200 with ``valid: false``; malformed input is 400.
    """
    input_serializer = DiscountValidateInputSerializer(data=request.data)
    if not input_serializer.is_valid():
        return Response({
            'error': 'Invalid input',
            'details': input_serializer.errors
        }, status=status.HTTP_400_BAD_REQUEST)

    data = input_serializer.validated_data
    validation = DiscountService.validate_code(
        data['code'],
        request.user.pk,
        data['subtotal'],
        data['product_ids'],
    )

    payload = validation.to_dict()
    if not validation.is_valid:
        payload['error_code'] = validation.error_code
        logger.info(
            f"🏷️ [API] Discount {data['code']} rejected for user {request.user.pk}: {validation.error_code}"
        )

    return Response(DiscountValidateOutputSerializer(payload).data)
