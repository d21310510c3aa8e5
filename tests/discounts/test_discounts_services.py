"""
Tests for DiscountService: lookup, validation by code and redemption.
"""

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone

from apps.discounts.models import Discount, DiscountUsage
from apps.discounts.services import DiscountService

User = get_user_model()


class DiscountLookupTests(TestCase):
    """Tests for code normalization and lookup."""

    def setUp(self):
        self.discount = Discount.objects.create(
            code="save20",
            discount_type=Discount.FIXED_AMOUNT,
            value=Decimal("20"),
        )

    def test_normalize_code(self):
        self.assertEqual(DiscountService.normalize_code("save20"), "SAVE20")
        self.assertEqual(DiscountService.normalize_code("  SAVE20  "), "SAVE20")

    def test_code_stored_upper_case(self):
        self.discount.refresh_from_db()
        self.assertEqual(self.discount.code, "SAVE20")

    def test_get_discount_by_code_case_insensitive(self):
        discount = DiscountService.get_discount_by_code(" Save20 ")
        self.assertIsNotNone(discount)
        self.assertEqual(discount.pk, self.discount.pk)

    def test_get_discount_by_code_not_found(self):
        self.assertIsNone(DiscountService.get_discount_by_code("NOPE"))
        self.assertIsNone(DiscountService.get_discount_by_code("   "))

    def test_validate_code_unknown(self):
        result = DiscountService.validate_code("NOPE", None, Decimal("100"), [])
        self.assertFalse(result.is_valid)
        self.assertEqual(result.message, "Invalid discount code")
        self.assertEqual(result.error_code, "INVALID_CODE")

    def test_validate_code_known(self):
        result = DiscountService.validate_code("save20", None, Decimal("100"), [])
        self.assertTrue(result.is_valid)
        self.assertEqual(result.amount, Decimal("20"))


class DiscountRedemptionTests(TestCase):
    """Tests for DiscountService.redeem()."""

    def setUp(self):
        self.user = User.objects.create_user(username="buyer", email="buyer@example.com", password="x")
        self.other_user = User.objects.create_user(username="other", email="other@example.com", password="x")
        self.discount = Discount.objects.create(
            code="ONCE",
            discount_type=Discount.PERCENTAGE,
            value=Decimal("25"),
        )

    def redeem(self, user=None):
        return DiscountService.redeem(self.discount, user or self.user)

    def test_redeem_increments_counters(self):
        result = self.redeem()

        self.assertTrue(result.is_ok())
        self.assertEqual(result.unwrap().uses_count, 1)
        self.discount.refresh_from_db()
        self.assertEqual(self.discount.uses_count, 1)
        usage = DiscountUsage.objects.get(discount=self.discount, user=self.user)
        self.assertEqual(usage.uses_count, 1)
        self.assertIsNotNone(usage.last_used_at)

    def test_redeem_twice_accumulates_per_user(self):
        self.redeem()
        self.redeem()
        self.discount.refresh_from_db()
        self.assertEqual(self.discount.uses_count, 2)
        self.assertEqual(DiscountService.get_user_uses(self.discount, self.user.pk), 2)
        self.assertEqual(DiscountUsage.objects.filter(discount=self.discount).count(), 1)

    def test_second_redemption_of_single_use_discount_fails(self):
        self.discount.max_uses = 1
        self.discount.save()

        self.assertTrue(self.redeem().is_ok())
        second = self.redeem(user=self.other_user)

        self.assertTrue(second.is_err())
        self.assertEqual(second.unwrap_err(), "Discount code has reached maximum usage")
        self.discount.refresh_from_db()
        self.assertEqual(self.discount.uses_count, 1)
        self.assertFalse(DiscountUsage.objects.filter(user=self.other_user).exists())

    def test_stale_instance_cannot_exceed_cap(self):
        self.discount.max_uses = 1
        self.discount.save()
        stale = Discount.objects.get(pk=self.discount.pk)
        Discount.objects.filter(pk=self.discount.pk).update(uses_count=1)

        result = DiscountService.redeem(stale, self.user)

        self.assertTrue(result.is_err())
        self.discount.refresh_from_db()
        self.assertEqual(self.discount.uses_count, 1)

    def test_per_user_limit_enforced_on_redeem(self):
        self.discount.per_user_limit = 1
        self.discount.save()

        self.assertTrue(self.redeem().is_ok())
        again = self.redeem()
        self.assertTrue(again.is_err())
        self.assertEqual(again.unwrap_err(), "You have already used this discount code 1 times")
        self.discount.refresh_from_db()
        self.assertEqual(self.discount.uses_count, 1)

        self.assertTrue(self.redeem(user=self.other_user).is_ok())

    def test_redeem_ignores_window_and_activity(self):
        Discount.objects.filter(pk=self.discount.pk).update(
            is_active=False,
            end_date=timezone.now() - timedelta(days=1),
            min_order_amount=Decimal("1000"),
        )

        result = self.redeem()

        self.assertTrue(result.is_ok())
        self.discount.refresh_from_db()
        self.assertEqual(self.discount.uses_count, 1)

    def test_redeem_deleted_discount(self):
        discount = Discount.objects.create(code="GONE", discount_type=Discount.PERCENTAGE, value=Decimal("5"))
        Discount.objects.filter(pk=discount.pk).delete()

        result = DiscountService.redeem(discount, self.user)
        self.assertTrue(result.is_err())
        self.assertEqual(result.unwrap_err(), "Invalid discount code")

    def test_get_user_uses_defaults_to_zero(self):
        self.assertEqual(DiscountService.get_user_uses(self.discount, self.user.pk), 0)
