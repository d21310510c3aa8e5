# Generated manually for Discounts App - Discount Codes

from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("products", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Discount",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "code",
                    models.CharField(help_text="Unique discount code (case-insensitive)", max_length=50, unique=True),
                ),
                ("description", models.TextField(blank=True, help_text="Description shown to customers")),
                (
                    "discount_type",
                    models.CharField(
                        choices=[("percentage", "Percentage Discount"), ("fixed_amount", "Fixed Amount Discount")],
                        max_length=20,
                    ),
                ),
                (
                    "value",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Percent (0-100) for percentage discounts, currency amount for fixed discounts",
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                (
                    "min_order_amount",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        help_text="Minimum order subtotal to qualify",
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                (
                    "max_uses",
                    models.PositiveIntegerField(blank=True, help_text="Maximum total redemptions", null=True),
                ),
                ("uses_count", models.PositiveIntegerField(default=0, help_text="Current total redemption count")),
                (
                    "per_user_limit",
                    models.PositiveIntegerField(blank=True, help_text="Maximum uses per user", null=True),
                ),
                (
                    "start_date",
                    models.DateTimeField(blank=True, help_text="When the code becomes valid", null=True),
                ),
                (
                    "end_date",
                    models.DateTimeField(blank=True, help_text="When the code expires (null = never)", null=True),
                ),
                ("is_active", models.BooleanField(default=True, help_text="Master switch for the discount")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "applicable_products",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Restrict discount to these products",
                        related_name="discounts",
                        to="products.product",
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="created_discounts",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Discount",
                "verbose_name_plural": "Discounts",
                "db_table": "discounts",
                "ordering": ("-created_at",),
                "indexes": [
                    models.Index(fields=["code"], name="idx_discount_code"),
                    models.Index(fields=["is_active", "start_date", "end_date"], name="idx_discount_validity"),
                ],
            },
        ),
        migrations.CreateModel(
            name="DiscountUsage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("uses_count", models.PositiveIntegerField(default=0)),
                ("last_used_at", models.DateTimeField(blank=True, null=True)),
                (
                    "discount",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="user_usage",
                        to="discounts.discount",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="discount_usage",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Discount Usage",
                "verbose_name_plural": "Discount Usage",
                "db_table": "discount_user_usage",
                "constraints": [
                    models.UniqueConstraint(fields=("discount", "user"), name="uniq_discount_usage_per_user"),
                ],
            },
        ),
    ]
