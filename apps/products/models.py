"""
Product Catalog models for Credit Gyems Academy
Digital guides, courses, templates and coaching services sold through the store.
"""

from __future__ import annotations

import secrets
import string
import uuid
from decimal import Decimal
from typing import Any, ClassVar

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.text import slugify
from django.utils.translation import gettext_lazy as _

SLUG_BASE_MAX_LENGTH = 50
SLUG_SUFFIX_LENGTH = 6
SLUG_SUFFIX_CHARS = string.ascii_lowercase + string.digits
UNLIMITED_STOCK = -1


class ProductQuerySet(models.QuerySet["Product"]):
    def available(self) -> ProductQuerySet:
        """Products that can be browsed and bought."""
        return self.filter(is_active=True, status="published")


class Product(models.Model):
    """
    Catalog entry a customer can add to the cart.
    Discounts may be restricted to a subset of products.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Basic Information
    name = models.CharField(max_length=200, help_text=_("Display name for customers"))
    slug = models.SlugField(unique=True, max_length=100, blank=True, help_text=_("URL-friendly identifier"))
    description = models.TextField(help_text=_("Detailed product description"))
    short_description = models.CharField(max_length=500, blank=True, help_text=_("Brief description for listings"))

    # Pricing
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0"))])
    discount_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Sale price; overrides price when set"),
    )

    # Categorization
    CATEGORY_CHOICES: ClassVar[tuple[tuple[str, Any], ...]] = (
        ("guide", _("Guide")),
        ("course", _("Course")),
        ("template", _("Template")),
        ("bundle", _("Bundle")),
        ("service", _("Service")),
        ("general", _("General")),
    )
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, default="general")

    PRODUCT_TYPES: ClassVar[tuple[tuple[str, Any], ...]] = (
        ("digital", _("Digital Download")),
        ("physical", _("Physical Product")),
        ("service", _("Service")),
        ("general", _("General")),
    )
    product_type = models.CharField(max_length=20, choices=PRODUCT_TYPES, default="digital")

    # Inventory (-1 = unlimited, digital goods)
    stock = models.IntegerField(default=UNLIMITED_STOCK, validators=[MinValueValidator(UNLIMITED_STOCK)])

    # Status and availability
    STATUS_CHOICES: ClassVar[tuple[tuple[str, str], ...]] = (
        ("draft", "Draft"),
        ("published", "Published"),
        ("archived", "Archived"),
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="published")
    is_active = models.BooleanField(default=True, help_text=_("Whether product is available for purchase"))
    is_featured = models.BooleanField(default=False, help_text=_("Show prominently on the storefront"))

    # Stats
    sales_count = models.PositiveIntegerField(default=0)

    # Delivery
    download_url = models.URLField(blank=True)

    # Audit
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_products",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        db_table = "products"
        verbose_name = _("Product")
        verbose_name_plural = _("Products")
        ordering: ClassVar[tuple[str, ...]] = ("-is_featured", "name")
        indexes: ClassVar[tuple[models.Index, ...]] = (
            models.Index(fields=["slug"], name="idx_product_slug"),
            models.Index(fields=["category", "is_active"], name="idx_product_category"),
            models.Index(fields=["is_active", "status"], name="idx_product_availability"),
        )

    def __str__(self) -> str:
        return self.name

    def save(self, *args: Any, **kwargs: Any) -> None:
        """Generate a unique slug from the name on first save."""
        if not self.slug:
            self.slug = self.generate_slug(self.name)
        super().save(*args, **kwargs)

    def clean(self) -> None:
        super().clean()
        if self.discount_price is not None and self.discount_price > self.price:
            raise ValidationError({"discount_price": _("Sale price cannot exceed the regular price")})

    @staticmethod
    def generate_slug(name: str) -> str:
        """Slugified name plus a short random suffix, e.g. ``credit-repair-guide-a1b2c3``."""
        base = slugify(name)[:SLUG_BASE_MAX_LENGTH].strip("-") or "product"
        suffix = "".join(secrets.choice(SLUG_SUFFIX_CHARS) for _ in range(SLUG_SUFFIX_LENGTH))
        return f"{base}-{suffix}"

    @property
    def effective_price(self) -> Decimal:
        """Price charged at checkout."""
        if self.discount_price is not None:
            return self.discount_price
        return self.price

    @property
    def display_price(self) -> str:
        return f"${self.effective_price:.2f}"

    @property
    def has_unlimited_stock(self) -> bool:
        return self.stock == UNLIMITED_STOCK

    @property
    def is_available(self) -> bool:
        if not (self.is_active and self.status == "published"):
            return False
        return self.has_unlimited_stock or self.stock > 0
