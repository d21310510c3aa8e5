"""
Django admin configuration for orders app.
Store order review and payment follow-up.
"""


from typing import ClassVar

from django.contrib import admin

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    """Inline admin for order items."""
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields: ClassVar[list[str]] = (
        'product', 'product_name', 'product_type', 'unit_price', 'quantity', 'line_total'
    )
    fields: ClassVar[list[str]] = (
        'product', 'product_name', 'product_type', 'unit_price', 'quantity', 'line_total'
    )


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin interface for orders."""

    list_display: ClassVar[list[str]] = (
        'order_number', 'customer_email', 'payment_status', 'fulfillment_status',
        'discount_code', 'total', 'currency', 'created_at'
    )
    list_filter: ClassVar[list[str]] = (
        'payment_status', 'fulfillment_status', 'payment_method', 'created_at'
    )
    search_fields: ClassVar[list[str]] = (
        'order_number', 'customer_email', 'customer_name', 'discount_code'
    )
    readonly_fields: ClassVar[list[str]] = (
        'order_number', 'subtotal', 'discount', 'discount_code', 'discount_amount',
        'tax', 'total', 'paid_at', 'fulfilled_at', 'created_at', 'updated_at'
    )
    inlines: ClassVar[list] = [OrderItemInline]

    fieldsets: ClassVar[tuple] = (
        ('Order Information', {
            'fields': ('order_number', 'user', 'customer_name', 'customer_email')
        }),
        ('Financial Details', {
            'fields': ('currency', 'subtotal', 'discount', 'discount_code', 'discount_amount', 'tax', 'total')
        }),
        ('Payment & Fulfilment', {
            'fields': ('payment_method', 'payment_status', 'paid_at', 'fulfillment_status', 'fulfilled_at')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        })
    )
