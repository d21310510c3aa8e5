"""
Order API URLs for Credit Gyems Academy
"""

from django.urls import path

from . import views

urlpatterns = [
    path('', views.order_list_create, name='order_list'),
    path('<uuid:order_id>/', views.order_detail, name='order_detail'),
    path('<uuid:order_id>/payment/', views.update_payment_status, name='order_payment'),
]
