"""
Django Admin configuration for the Discounts app.
"""

from django.contrib import admin

from .models import Discount, DiscountUsage

# ===============================================================================
# Inline Admin Classes
# ===============================================================================


class DiscountUsageInline(admin.TabularInline):
    """Per-user redemption counters within a discount."""

    model = DiscountUsage
    extra = 0
    readonly_fields = ("user", "uses_count", "last_used_at")
    fields = ("user", "uses_count", "last_used_at")
    can_delete = False
    max_num = 0


# ===============================================================================
# Model Admin Classes
# ===============================================================================


@admin.register(Discount)
class DiscountAdmin(admin.ModelAdmin):
    """Admin for discount codes."""

    list_display = (
        "code",
        "discount_type",
        "value",
        "min_order_amount",
        "is_active",
        "usage_display",
        "start_date",
        "end_date",
    )
    list_filter = ("is_active", "discount_type", "created_at")
    search_fields = ("code", "description")
    readonly_fields = ("uses_count", "created_at", "updated_at", "created_by")
    filter_horizontal = ("applicable_products",)
    date_hierarchy = "created_at"
    inlines = [DiscountUsageInline]

    fieldsets = (
        (None, {
            "fields": ("code", "description")
        }),
        ("Discount", {
            "fields": ("discount_type", "value", "min_order_amount", "applicable_products")
        }),
        ("Validity", {
            "fields": ("start_date", "end_date", "is_active")
        }),
        ("Usage Limits", {
            "fields": ("max_uses", "uses_count", "per_user_limit")
        }),
        ("Metadata", {
            "fields": ("created_at", "updated_at", "created_by"),
            "classes": ("collapse",)
        }),
    )

    def usage_display(self, obj):
        if obj.max_uses is not None:
            return f"{obj.uses_count}/{obj.max_uses}"
        return str(obj.uses_count)
    usage_display.short_description = "Usage"

    def save_model(self, request, obj, form, change):
        if not change:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)
