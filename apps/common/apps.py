"""
Common app configuration for Credit Gyems Academy.
"""

from django.apps import AppConfig


class CommonConfig(AppConfig):
    """Shared infrastructure: types, logging, middleware, management commands."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.common"
    verbose_name = "Common"
