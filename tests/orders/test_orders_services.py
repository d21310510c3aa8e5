"""
Test suite for order services
Checkout pricing, discount application and payment transitions.
"""

import uuid
from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone

from apps.discounts.models import Discount, DiscountUsage
from apps.discounts.services import DiscountService
from apps.orders.models import Order, OrderItem
from apps.orders.services import CONFIRMATION_TASK, OrderCreateData, OrderService
from apps.products.models import Product

User = get_user_model()


class OrderServiceTestCase(TestCase):
    """Shared fixtures for order service tests"""

    def setUp(self):
        self.user = User.objects.create_user(
            username='buyer',
            email='buyer@example.com',
            password='testpass123',
            first_name='Jamie',
            last_name='Buyer',
        )
        self.guide = Product.objects.create(
            name='Credit Repair Blueprint',
            description='Guide',
            price=Decimal('50.00'),
            category='guide',
        )
        self.course = Product.objects.create(
            name='Credit Score Masterclass',
            description='Course',
            price=Decimal('200.00'),
            discount_price=Decimal('150.00'),
            category='course',
        )
        self.discount = Discount.objects.create(
            code='WELCOME10',
            discount_type=Discount.PERCENTAGE,
            value=Decimal('10'),
        )

    def order_data(self, items=None, discount_code='', payment_method='credit_card'):
        if items is None:
            items = [
                {'product_id': self.guide.pk, 'quantity': 2},
                {'product_id': self.course.pk, 'quantity': 1},
            ]
        return OrderCreateData(
            user=self.user,
            items=items,
            payment_method=payment_method,
            discount_code=discount_code,
        )


class OrderCreationTests(OrderServiceTestCase):
    """Tests for OrderService.create_order()"""

    def test_create_order_prices_from_catalog(self):
        result = OrderService.create_order(self.order_data())

        self.assertTrue(result.is_ok())
        order = result.unwrap()
        # 2 x 50.00 + 1 x 150.00 (sale price)
        self.assertEqual(order.subtotal, Decimal('250.00'))
        self.assertEqual(order.discount_amount, Decimal('0'))
        self.assertEqual(order.total, Decimal('250.00'))
        self.assertEqual(order.payment_status, 'pending')
        self.assertEqual(order.fulfillment_status, 'pending')
        self.assertEqual(order.currency, 'USD')
        self.assertEqual(order.customer_email, 'buyer@example.com')
        self.assertEqual(order.customer_name, 'Jamie Buyer')
        self.assertTrue(order.order_number.startswith('CG-'))
        self.assertEqual(len(order.order_number), 13)

        items = {item.product_id: item for item in order.items.all()}
        self.assertEqual(items[self.guide.pk].line_total, Decimal('100.00'))
        self.assertEqual(items[self.course.pk].unit_price, Decimal('150.00'))
        self.assertEqual(items[self.course.pk].product_name, 'Credit Score Masterclass')

    def test_create_order_with_discount(self):
        result = OrderService.create_order(self.order_data(discount_code='welcome10'))

        order = result.unwrap()
        self.assertEqual(order.discount, self.discount)
        self.assertEqual(order.discount_code, 'WELCOME10')
        self.assertEqual(order.discount_amount, Decimal('25.00'))
        self.assertEqual(order.total, order.subtotal - order.discount_amount)
        self.assertEqual(order.total, Decimal('225.00'))

    def test_create_order_looks_up_discount_once(self):
        with patch(
            'apps.orders.services.DiscountService.get_discount_by_code',
            wraps=DiscountService.get_discount_by_code,
        ) as mock_lookup:
            result = OrderService.create_order(self.order_data(discount_code='WELCOME10'))

        self.assertTrue(result.is_ok())
        mock_lookup.assert_called_once_with('WELCOME10')

    def test_create_order_unknown_discount(self):
        result = OrderService.create_order(self.order_data(discount_code='NOPE'))

        self.assertTrue(result.is_err())
        self.assertEqual(result.unwrap_err(), 'Invalid discount code')
        self.assertFalse(Order.objects.exists())

    def test_order_number_collision_retries(self):
        existing = OrderService.create_order(self.order_data()).unwrap()

        with patch(
            'apps.orders.models.generate_order_number',
            side_effect=[existing.order_number, 'CG-1234560001'],
        ) as mock_generate:
            order = OrderService.create_order(self.order_data()).unwrap()

        self.assertEqual(order.order_number, 'CG-1234560001')
        self.assertEqual(mock_generate.call_count, 2)

    def test_create_order_does_not_redeem_discount(self):
        OrderService.create_order(self.order_data(discount_code='WELCOME10'))
        self.discount.refresh_from_db()
        self.assertEqual(self.discount.uses_count, 0)

    def test_duplicate_lines_are_merged(self):
        items = [
            {'product_id': self.guide.pk, 'quantity': 1},
            {'product_id': str(self.guide.pk), 'quantity': 2},
        ]
        order = OrderService.create_order(self.order_data(items=items)).unwrap()
        self.assertEqual(order.items.count(), 1)
        self.assertEqual(order.items.get().quantity, 3)
        self.assertEqual(order.subtotal, Decimal('150.00'))

    def test_empty_cart_rejected(self):
        result = OrderService.create_order(self.order_data(items=[]))
        self.assertTrue(result.is_err())
        self.assertEqual(result.unwrap_err(), 'Cart is empty')

    def test_unknown_product_rejected(self):
        items = [{'product_id': uuid.uuid4(), 'quantity': 1}]
        result = OrderService.create_order(self.order_data(items=items))
        self.assertEqual(result.unwrap_err(), 'Some products are not available')

    def test_inactive_product_rejected(self):
        self.course.is_active = False
        self.course.save()
        result = OrderService.create_order(self.order_data())
        self.assertEqual(result.unwrap_err(), 'Some products are not available')
        self.assertFalse(Order.objects.exists())

    def test_out_of_stock_product_rejected(self):
        self.guide.stock = 0
        self.guide.save()
        result = OrderService.create_order(self.order_data())
        self.assertEqual(result.unwrap_err(), 'Some products are not available')

    def test_non_positive_quantity_rejected(self):
        items = [{'product_id': self.guide.pk, 'quantity': 0}]
        result = OrderService.create_order(self.order_data(items=items))
        self.assertEqual(result.unwrap_err(), 'Quantity must be at least 1')

    def test_unsupported_payment_method_rejected(self):
        result = OrderService.create_order(self.order_data(payment_method='bitcoin'))
        self.assertTrue(result.is_err())

    def test_rejected_discount_aborts_order(self):
        self.discount.min_order_amount = Decimal('500')
        self.discount.save()

        result = OrderService.create_order(self.order_data(discount_code='WELCOME10'))

        self.assertEqual(result.unwrap_err(), 'Order must be at least $500.00 to use this discount')
        self.assertFalse(Order.objects.exists())
        self.assertFalse(OrderItem.objects.exists())

    def test_unknown_discount_aborts_order(self):
        result = OrderService.create_order(self.order_data(discount_code='BOGUS'))
        self.assertEqual(result.unwrap_err(), 'Invalid discount code')

    def test_fixed_discount_never_makes_total_negative(self):
        Discount.objects.create(code='HUGE', discount_type=Discount.FIXED_AMOUNT, value=Decimal('1000'))
        items = [{'product_id': self.guide.pk, 'quantity': 1}]
        order = OrderService.create_order(self.order_data(items=items, discount_code='HUGE')).unwrap()
        self.assertEqual(order.discount_amount, Decimal('50.00'))
        self.assertEqual(order.total, Decimal('0'))

    def test_get_user_orders_newest_first(self):
        first = OrderService.create_order(self.order_data()).unwrap()
        second = OrderService.create_order(self.order_data()).unwrap()
        other = User.objects.create_user(username='other', email='other@example.com', password='x')
        OrderService.create_order(OrderCreateData(
            user=other,
            items=[{'product_id': self.guide.pk, 'quantity': 1}],
            payment_method='klarna',
        ))

        orders = list(OrderService.get_user_orders(self.user))
        self.assertEqual([o.pk for o in orders], [second.pk, first.pk])


class OrderPaymentTests(OrderServiceTestCase):
    """Tests for OrderService.mark_paid() and mark_failed()"""

    def create_order(self, discount_code='WELCOME10'):
        return OrderService.create_order(self.order_data(discount_code=discount_code)).unwrap()

    @patch('apps.orders.services.async_task')
    def test_mark_paid_completes_order(self, mock_async_task):
        order = self.create_order()

        with self.captureOnCommitCallbacks(execute=True):
            result = OrderService.mark_paid(order)

        self.assertTrue(result.is_ok())
        order.refresh_from_db()
        self.assertEqual(order.payment_status, 'completed')
        self.assertEqual(order.fulfillment_status, 'completed')
        self.assertIsNotNone(order.paid_at)
        self.assertIsNotNone(order.fulfilled_at)
        mock_async_task.assert_called_once_with(CONFIRMATION_TASK, str(order.pk))

    @patch('apps.orders.services.async_task')
    def test_mark_paid_redeems_discount(self, mock_async_task):
        order = self.create_order()

        with self.captureOnCommitCallbacks(execute=True):
            OrderService.mark_paid(order)

        self.discount.refresh_from_db()
        self.assertEqual(self.discount.uses_count, 1)
        self.assertEqual(DiscountUsage.objects.get(discount=self.discount, user=self.user).uses_count, 1)

    @patch('apps.orders.services.async_task')
    def test_mark_paid_increments_sales_count(self, mock_async_task):
        order = self.create_order(discount_code='')

        with self.captureOnCommitCallbacks(execute=True):
            OrderService.mark_paid(order)

        self.guide.refresh_from_db()
        self.course.refresh_from_db()
        self.assertEqual(self.guide.sales_count, 2)
        self.assertEqual(self.course.sales_count, 1)

    @patch('apps.orders.services.async_task')
    def test_mark_paid_completes_when_discount_cap_lost(self, mock_async_task):
        self.discount.max_uses = 1
        self.discount.save()
        order = self.create_order()
        Discount.objects.filter(pk=self.discount.pk).update(uses_count=1)

        with self.assertLogs('apps.orders.services', level='WARNING'):
            with self.captureOnCommitCallbacks(execute=True):
                result = OrderService.mark_paid(order)

        self.assertTrue(result.is_ok())
        order.refresh_from_db()
        self.assertEqual(order.payment_status, 'completed')
        self.assertEqual(order.discount_amount, Decimal('25.00'))
        self.discount.refresh_from_db()
        self.assertEqual(self.discount.uses_count, 1)
        mock_async_task.assert_called_once_with(CONFIRMATION_TASK, str(order.pk))

    @patch('apps.orders.services.async_task')
    def test_mark_paid_after_discount_expired(self, mock_async_task):
        order = self.create_order()
        Discount.objects.filter(pk=self.discount.pk).update(end_date=timezone.now() - timedelta(seconds=1))

        with self.captureOnCommitCallbacks(execute=True):
            result = OrderService.mark_paid(order)

        self.assertTrue(result.is_ok())
        order.refresh_from_db()
        self.assertEqual(order.payment_status, 'completed')
        self.discount.refresh_from_db()
        self.assertEqual(self.discount.uses_count, 1)

    @patch('apps.orders.services.async_task')
    def test_mark_paid_after_discount_deactivated(self, mock_async_task):
        order = self.create_order()
        Discount.objects.filter(pk=self.discount.pk).update(is_active=False)

        with self.captureOnCommitCallbacks(execute=True):
            result = OrderService.mark_paid(order)

        self.assertTrue(result.is_ok())
        order.refresh_from_db()
        self.assertEqual(order.payment_status, 'completed')

    @patch('apps.orders.services.async_task')
    def test_second_pending_order_paid_under_per_user_limit(self, mock_async_task):
        self.discount.per_user_limit = 1
        self.discount.save()
        first = self.create_order()
        second = self.create_order()

        with self.assertLogs('apps.orders.services', level='WARNING'):
            with self.captureOnCommitCallbacks(execute=True):
                OrderService.mark_paid(first)
                result = OrderService.mark_paid(second)

        self.assertTrue(result.is_ok())
        second.refresh_from_db()
        self.assertEqual(second.payment_status, 'completed')
        self.assertEqual(DiscountService.get_user_uses(self.discount, self.user.pk), 1)

    @patch('apps.orders.services.async_task')
    def test_mark_paid_only_from_pending(self, mock_async_task):
        order = self.create_order()
        with self.captureOnCommitCallbacks(execute=True):
            OrderService.mark_paid(order)

        result = OrderService.mark_paid(order)

        self.assertTrue(result.is_err())
        self.discount.refresh_from_db()
        self.assertEqual(self.discount.uses_count, 1)

    def test_mark_failed(self):
        order = self.create_order()

        result = OrderService.mark_failed(order)

        self.assertTrue(result.is_ok())
        order.refresh_from_db()
        self.assertEqual(order.payment_status, 'failed')
        self.discount.refresh_from_db()
        self.assertEqual(self.discount.uses_count, 0)

    def test_mark_failed_only_from_pending(self):
        order = self.create_order()
        OrderService.mark_failed(order)
        self.assertTrue(OrderService.mark_failed(order).is_err())
