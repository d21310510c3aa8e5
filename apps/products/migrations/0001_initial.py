# Generated manually for Products App - Store Catalog

import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(help_text="Display name for customers", max_length=200)),
                (
                    "slug",
                    models.SlugField(blank=True, help_text="URL-friendly identifier", max_length=100, unique=True),
                ),
                ("description", models.TextField(help_text="Detailed product description")),
                (
                    "short_description",
                    models.CharField(blank=True, help_text="Brief description for listings", max_length=500),
                ),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                (
                    "discount_price",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Sale price; overrides price when set",
                        max_digits=10,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("guide", "Guide"),
                            ("course", "Course"),
                            ("template", "Template"),
                            ("bundle", "Bundle"),
                            ("service", "Service"),
                            ("general", "General"),
                        ],
                        default="general",
                        max_length=20,
                    ),
                ),
                (
                    "product_type",
                    models.CharField(
                        choices=[
                            ("digital", "Digital Download"),
                            ("physical", "Physical Product"),
                            ("service", "Service"),
                            ("general", "General"),
                        ],
                        default="digital",
                        max_length=20,
                    ),
                ),
                (
                    "stock",
                    models.IntegerField(default=-1, validators=[django.core.validators.MinValueValidator(-1)]),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("draft", "Draft"), ("published", "Published"), ("archived", "Archived")],
                        default="published",
                        max_length=20,
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(default=True, help_text="Whether product is available for purchase"),
                ),
                (
                    "is_featured",
                    models.BooleanField(default=False, help_text="Show prominently on the storefront"),
                ),
                ("sales_count", models.PositiveIntegerField(default=0)),
                ("download_url", models.URLField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="created_products",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Product",
                "verbose_name_plural": "Products",
                "db_table": "products",
                "ordering": ("-is_featured", "name"),
                "indexes": [
                    models.Index(fields=["slug"], name="idx_product_slug"),
                    models.Index(fields=["category", "is_active"], name="idx_product_category"),
                    models.Index(fields=["is_active", "status"], name="idx_product_availability"),
                ],
            },
        ),
    ]
