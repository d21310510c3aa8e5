"""
Tests for the generate_sample_data management command.
"""

from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from apps.discounts.models import Discount
from apps.products.models import Product


@pytest.mark.django_db
def test_refuses_outside_debug(settings):
    settings.DEBUG = False
    with pytest.raises(CommandError):
        call_command('generate_sample_data', stdout=StringIO())


@pytest.mark.django_db
def test_creates_catalog_and_codes(settings):
    settings.DEBUG = True

    call_command('generate_sample_data', products=3, users=2, stdout=StringIO())

    assert Product.objects.count() == 3
    assert set(Discount.objects.values_list('code', flat=True)) == {'WELCOME10', 'SAVE20', 'EBOOKONLY'}
    ebook_only = Discount.objects.get(code='EBOOKONLY')
    assert [p.category for p in ebook_only.applicable_products.all()] == ['guide']
    assert Discount.objects.get(code='SAVE20').min_order_amount > 0


@pytest.mark.django_db
def test_is_idempotent(settings):
    settings.DEBUG = True

    call_command('generate_sample_data', products=2, users=1, stdout=StringIO())
    call_command('generate_sample_data', products=2, users=1, stdout=StringIO())

    assert Product.objects.count() == 2
    assert Discount.objects.count() == 3
