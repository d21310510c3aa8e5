"""
Product catalog API views
Public, read-only listing for the storefront.
"""

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle

from apps.products.models import Product

from .serializers import ProductDetailSerializer, ProductListSerializer

logger = logging.getLogger(__name__)


class ProductCatalogThrottle(ScopedRateThrottle):
    """Throttling for product catalog endpoints"""
    scope = 'product_catalog'


@api_view(['GET'])
@permission_classes([AllowAny])
@throttle_classes([ProductCatalogThrottle])
def product_list(request: Request) -> Response:
    """
    Public endpoint for product catalog listing.
    Supports filtering by category, product type and featured status.
    """
    category = request.query_params.get('category')
    product_type = request.query_params.get('type')
    featured = request.query_params.get('featured') == 'true'

    queryset = Product.objects.available()

    if category:
        queryset = queryset.filter(category=category)

    if product_type:
        queryset = queryset.filter(product_type=product_type)

    if featured:
        queryset = queryset.filter(is_featured=True)

    serializer = ProductListSerializer(queryset.order_by('-is_featured', 'name'), many=True)

    return Response({
        'results': serializer.data,
        'count': len(serializer.data)
    })


@api_view(['GET'])
@permission_classes([AllowAny])
@throttle_classes([ProductCatalogThrottle])
def product_detail(request: Request, slug: str) -> Response:
    """
    Public endpoint for product detail by slug.
    """
    try:
        product = Product.objects.available().get(slug=slug)
    except Product.DoesNotExist:
        logger.info(f"🔍 [API] Product not found: {slug}")
        return Response({
            'error': 'Product not found'
        }, status=status.HTTP_404_NOT_FOUND)

    serializer = ProductDetailSerializer(product)
    return Response(serializer.data)
