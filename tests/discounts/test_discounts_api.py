"""
Tests for the discount validation endpoint.
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from apps.discounts.models import Discount

VALIDATE_URL = '/api/discounts/validate/'


@pytest.mark.django_db
def test_valid_code_returns_amount(auth_client, welcome_discount):
    response = auth_client.post(VALIDATE_URL, {
        'code': 'welcome10',
        'subtotal': '200.00',
        'product_ids': [],
    }, format='json')

    assert response.status_code == 200
    assert response.json() == {'valid': True, 'amount': '20.00'}


@pytest.mark.django_db
def test_unknown_code_is_business_rejection(auth_client):
    response = auth_client.post(VALIDATE_URL, {'code': 'NOPE', 'subtotal': '50.00'}, format='json')

    assert response.status_code == 200
    assert response.json() == {
        'valid': False,
        'message': 'Invalid discount code',
        'error_code': 'INVALID_CODE',
    }


@pytest.mark.django_db
def test_expired_code_rejected(auth_client):
    Discount.objects.create(
        code='OLD',
        discount_type=Discount.PERCENTAGE,
        value=Decimal('10'),
        end_date=timezone.now() - timedelta(days=1),
    )

    response = auth_client.post(VALIDATE_URL, {'code': 'old', 'subtotal': '50.00'}, format='json')

    data = response.json()
    assert response.status_code == 200
    assert data['valid'] is False
    assert data['message'] == 'Discount code has expired'
    assert data['error_code'] == 'DISCOUNT_EXPIRED'
    assert 'amount' not in data


@pytest.mark.django_db
def test_product_restricted_code(auth_client, guide, course):
    discount = Discount.objects.create(code='EBOOKONLY', discount_type=Discount.PERCENTAGE, value=Decimal('25'))
    discount.applicable_products.set([guide])

    rejected = auth_client.post(VALIDATE_URL, {
        'code': 'EBOOKONLY', 'subtotal': '150.00', 'product_ids': [str(course.pk)],
    }, format='json')
    accepted = auth_client.post(VALIDATE_URL, {
        'code': 'EBOOKONLY', 'subtotal': '200.00', 'product_ids': [str(guide.pk), str(course.pk)],
    }, format='json')

    assert rejected.json()['error_code'] == 'NO_ELIGIBLE_PRODUCTS'
    assert accepted.json() == {'valid': True, 'amount': '50.00'}


@pytest.mark.django_db
def test_validation_does_not_redeem(auth_client, welcome_discount):
    auth_client.post(VALIDATE_URL, {'code': 'WELCOME10', 'subtotal': '100.00'}, format='json')
    welcome_discount.refresh_from_db()
    assert welcome_discount.uses_count == 0


@pytest.mark.django_db
def test_invalid_input(auth_client):
    response = auth_client.post(VALIDATE_URL, {'code': 'WELCOME10', 'subtotal': 'lots'}, format='json')

    assert response.status_code == 400
    assert response.json()['error'] == 'Invalid input'
    assert 'subtotal' in response.json()['details']


@pytest.mark.django_db
def test_negative_subtotal_rejected(auth_client):
    response = auth_client.post(VALIDATE_URL, {'code': 'WELCOME10', 'subtotal': '-1.00'}, format='json')
    assert response.status_code == 400


@pytest.mark.django_db
def test_requires_authentication(api_client, welcome_discount):
    response = api_client.post(VALIDATE_URL, {'code': 'WELCOME10', 'subtotal': '100.00'}, format='json')
    assert response.status_code in (401, 403)
