# ===============================================================================
# CREDIT GYEMS API APP CONFIGURATION 🛠️
# ===============================================================================

from django.apps import AppConfig


class ApiConfig(AppConfig):
    """
    Configuration for the storefront JSON API.

    Endpoints for the product catalog, discount code checks and orders.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.api"
    label = "store_api"
    verbose_name = "Credit Gyems Store API"
