"""
Django admin configuration for products app.
Store catalog management interface.
"""

from typing import ClassVar

from django.contrib import admin

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for products."""

    list_display: ClassVar[list[str]] = (
        'name', 'slug', 'category', 'product_type', 'price', 'discount_price',
        'is_active', 'is_featured', 'status', 'sales_count'
    )
    list_filter: ClassVar[list[str]] = ('is_active', 'status', 'category', 'product_type', 'is_featured')
    search_fields: ClassVar[list[str]] = ('name', 'slug', 'description')
    prepopulated_fields: ClassVar[dict[str, tuple[str, ...]]] = {'slug': ('name',)}

    fieldsets: ClassVar[tuple] = (
        ('Basic Information', {
            'fields': ('name', 'slug', 'description', 'short_description', 'category', 'product_type')
        }),
        ('Pricing & Inventory', {
            'fields': ('price', 'discount_price', 'stock')
        }),
        ('Status & Visibility', {
            'fields': ('status', 'is_active', 'is_featured')
        }),
        ('Delivery', {
            'fields': ('download_url',),
            'classes': ('collapse',)
        }),
        ('Stats', {
            'fields': ('sales_count', 'created_by', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    readonly_fields: ClassVar[list[str]] = ('sales_count', 'created_at', 'updated_at')
