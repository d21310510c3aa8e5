"""
URL configuration for Credit Gyems Academy
Admin back office plus the JSON API consumed by the storefront.
"""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

# ===============================================================================
# MAIN URL PATTERNS
# ===============================================================================

urlpatterns = [
    path("admin/", admin.site.urls),
    # API endpoints
    path("api/", include("apps.api.urls")),
]

# ===============================================================================
# DEVELOPMENT URLS (static files)
# ===============================================================================

if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
