"""
Discount API URLs
"""

from django.urls import path

from . import views

urlpatterns = [
    path('validate/', views.validate_discount_code, name='validate'),
]
