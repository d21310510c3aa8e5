# ===============================================================================
# CREDIT GYEMS API MAIN URLS 🚀
# ===============================================================================
#
# Central API routing for the storefront.
#
# URL Structure:
#   /api/products/   → Public product catalog
#   /api/discounts/  → Discount code validation at checkout
#   /api/orders/     → Order creation, history and payment status
#

from django.urls import include, path

from .discounts import urls as discount_urls
from .orders import urls as order_urls
from .products import urls as product_urls

app_name = 'api'

urlpatterns = [
    # Product catalog (public)
    path('products/', include((product_urls, 'products'))),

    # Discount codes (authenticated)
    path('discounts/', include((discount_urls, 'discounts'))),

    # Orders (authenticated)
    path('orders/', include((order_urls, 'orders'))),
]
