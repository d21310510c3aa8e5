"""
Discounts app configuration for Credit Gyems Academy.
"""

from django.apps import AppConfig


class DiscountsConfig(AppConfig):
    """Configuration for the Discounts app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.discounts"
    verbose_name = "Discount Codes"
