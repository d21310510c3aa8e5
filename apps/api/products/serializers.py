"""
Product catalog serializers
"""

from rest_framework import serializers

from apps.products.models import Product


class ProductListSerializer(serializers.ModelSerializer):
    """Slim product info for catalog listing"""

    effective_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    category_display = serializers.CharField(source='get_category_display', read_only=True)
    product_type_display = serializers.CharField(source='get_product_type_display', read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'slug', 'name', 'short_description',
            'category', 'category_display', 'product_type', 'product_type_display',
            'price', 'discount_price', 'effective_price', 'is_featured',
        ]


class ProductDetailSerializer(ProductListSerializer):
    """Full product info for detail view"""

    is_available = serializers.BooleanField(read_only=True)

    class Meta(ProductListSerializer.Meta):
        fields = [
            *ProductListSerializer.Meta.fields,
            'description', 'stock', 'is_available', 'sales_count', 'created_at',
        ]
