"""
Django management command to generate sample data for Credit Gyems Academy
Store catalog, customers and discount codes for local development.
"""

import random
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone
from faker import Faker

from apps.discounts.models import Discount
from apps.products.models import Product

User = get_user_model()

PRODUCT_TEMPLATES = [
    ('Credit Repair Blueprint', 'guide', 'digital', Decimal('29.99')),
    ('Dispute Letter Templates', 'template', 'digital', Decimal('19.99')),
    ('Credit Score Masterclass', 'course', 'digital', Decimal('149.00')),
    ('Debt Payoff Planner', 'template', 'digital', Decimal('9.99')),
    ('Business Credit Starter Kit', 'bundle', 'digital', Decimal('99.00')),
    ('1:1 Credit Coaching Session', 'service', 'service', Decimal('199.00')),
    ('Budgeting Fundamentals eBook', 'guide', 'digital', Decimal('14.99')),
    ('Homebuyer Credit Roadmap', 'course', 'digital', Decimal('79.00')),
]


class Command(BaseCommand):
    help = 'Generate sample products, customers and discount codes'

    def add_arguments(self, parser):
        parser.add_argument(
            '--products',
            type=int,
            default=len(PRODUCT_TEMPLATES),
            help='Number of products to create'
        )
        parser.add_argument(
            '--users',
            type=int,
            default=10,
            help='Number of customers to create'
        )

    def handle(self, *args, **options):
        # Simple safety check - must be in DEBUG mode
        if not settings.DEBUG:
            raise CommandError(
                "🚫 Sample data generation only works in DEBUG mode. "
                "This prevents accidental production usage."
            )

        fake = Faker('en_US')
        Faker.seed(42)  # Consistent data
        random.seed(42)

        self.stdout.write('🛍️ Generating Credit Gyems Academy sample data...')

        admin_user = self.create_admin_user()
        self.create_customers(fake, options['users'])
        products = self.create_products(fake, admin_user, options['products'])
        self.create_discounts(admin_user, products)

        self.stdout.write(
            self.style.SUCCESS('✅ Sample data generated!')
        )

    def create_admin_user(self):
        self.stdout.write('Creating admin user...')

        # Dev credentials only - protected by DEBUG check
        admin_user = User.objects.filter(username='admin').first()
        if admin_user is None:
            admin_user = User.objects.create_superuser(
                username='admin',
                email='admin@creditgyemsacademy.com',
                password='admin123',
                first_name='Admin',
                last_name='Gyems',
            )
            self.stdout.write(f'  ✓ Admin: {admin_user.email}')
        return admin_user

    def create_customers(self, fake, count):
        self.stdout.write(f'Creating {count} customers...')

        created = 0
        for _ in range(count):
            email = fake.unique.email()
            if User.objects.filter(email=email).exists():
                continue
            User.objects.create_user(
                username=email,
                email=email,
                password='customer123',  # Dev only - protected by DEBUG check
                first_name=fake.first_name(),
                last_name=fake.last_name(),
            )
            created += 1

        self.stdout.write(f'  ✓ {created} customers')

    def create_products(self, fake, admin_user, count):
        self.stdout.write(f'Creating {count} products...')

        products = []
        for index in range(count):
            if index < len(PRODUCT_TEMPLATES):
                name, category, product_type, price = PRODUCT_TEMPLATES[index]
            else:
                name = fake.catch_phrase()
                category = random.choice(['guide', 'course', 'template'])
                product_type = 'digital'
                price = Decimal(random.randint(900, 19900)) / 100

            product = Product.objects.filter(name=name).first()
            if product is None:
                on_sale = random.random() < 0.25
                product = Product.objects.create(
                    name=name,
                    description=fake.paragraph(nb_sentences=5),
                    short_description=fake.sentence(nb_words=12),
                    price=price,
                    discount_price=(price * Decimal('0.8')).quantize(Decimal('0.01')) if on_sale else None,
                    category=category,
                    product_type=product_type,
                    is_featured=index < 3,
                    created_by=admin_user,
                )
                self.stdout.write(f'  ✓ Product: {product.name} ({product.display_price})')
            products.append(product)

        return products

    def create_discounts(self, admin_user, products):
        self.stdout.write('Creating discount codes...')

        now = timezone.now()
        discounts = [
            {
                'code': 'WELCOME10',
                'description': '10% off your first purchase',
                'discount_type': Discount.PERCENTAGE,
                'value': Decimal('10'),
                'per_user_limit': 1,
            },
            {
                'code': 'SAVE20',
                'description': '$20 off orders of $100 or more',
                'discount_type': Discount.FIXED_AMOUNT,
                'value': Decimal('20'),
                'min_order_amount': Decimal('100'),
                'max_uses': 100,
                'end_date': now + timedelta(days=90),
            },
            {
                'code': 'EBOOKONLY',
                'description': '25% off guides',
                'discount_type': Discount.PERCENTAGE,
                'value': Decimal('25'),
                'start_date': now,
            },
        ]

        for discount_data in discounts:
            discount, created = Discount.objects.get_or_create(
                code=discount_data['code'],
                defaults={**discount_data, 'created_by': admin_user}
            )
            if created and discount.code == 'EBOOKONLY':
                discount.applicable_products.set([p for p in products if p.category == 'guide'])
            if created:
                self.stdout.write(f'  ✓ Discount: {discount.code}')
