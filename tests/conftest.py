# ===============================================================================
# PYTEST CONFIGURATION FOR CREDIT GYEMS ACADEMY
# ===============================================================================
"""
Global test configuration for the Credit Gyems Academy store.

Test Structure:
- tests/ mirrors apps/ structure for app-specific tests
- Naming convention: test_{app}_{feature}.py

Test Discovery:
- Run specific app tests: pytest tests/discounts/
- Run all tests: pytest tests/
"""

import os

import django


def pytest_configure():
    """Configure Django settings for pytest"""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.test')

    # Configure Django
    django.setup()

# ===============================================================================
# PYTEST FIXTURES
# ===============================================================================

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from django.contrib.auth import get_user_model  # noqa: E402
from rest_framework.test import APIClient  # noqa: E402

from apps.discounts.models import Discount  # noqa: E402
from apps.products.models import Product  # noqa: E402

User = get_user_model()


@pytest.fixture
def user():
    """Create test customer"""
    return User.objects.create_user(
        username='testuser',
        email='test@creditgyemsacademy.com',
        password='testpass123',
        first_name='Test',
        last_name='Customer',
    )


@pytest.fixture
def other_user():
    """Second customer for ownership checks"""
    return User.objects.create_user(
        username='otheruser',
        email='other@creditgyemsacademy.com',
        password='testpass123',
    )


@pytest.fixture
def staff_user():
    """Create staff user for admin-only endpoints"""
    return User.objects.create_user(
        username='staff',
        email='staff@creditgyemsacademy.com',
        password='staffpass123',
        is_staff=True,
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client(user):
    """API client authenticated as the test customer"""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def staff_client(staff_user):
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client


@pytest.fixture
def guide():
    """Digital guide at full price"""
    return Product.objects.create(
        name='Credit Repair Blueprint',
        description='Step-by-step credit repair guide',
        price=Decimal('50.00'),
        category='guide',
    )


@pytest.fixture
def course():
    """Course on sale"""
    return Product.objects.create(
        name='Credit Score Masterclass',
        description='Video course',
        price=Decimal('200.00'),
        discount_price=Decimal('150.00'),
        category='course',
        is_featured=True,
    )


@pytest.fixture
def welcome_discount():
    """10% off, unlimited"""
    return Discount.objects.create(
        code='welcome10',
        discount_type=Discount.PERCENTAGE,
        value=Decimal('10'),
    )
