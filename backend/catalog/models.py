from django.core.validators import MinLengthValidator, MinValueValidator
from django.db import models
from django.utils import timezone

STATUS_CHOICES = [
    ("active", "Active"),
    ("inactive", "Inactive"),
]


class Category(models.Model):
    name = models.CharField(max_length=50, unique=True, validators=[MinLengthValidator(2)])
    description = models.CharField(max_length=500, blank=True, default="")
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="active")
    display_order = models.IntegerField(default=0)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["display_order", "name"]
        verbose_name_plural = "categories"
        indexes = [
            models.Index(fields=["status"], name="catalog_cat_status_idx"),
            models.Index(fields=["display_order"], name="catalog_cat_order_idx"),
        ]

    def __str__(self):
        return self.name


class Item(models.Model):
    name = models.CharField(max_length=100, validators=[MinLengthValidator(2)])
    description = models.CharField(max_length=500, blank=True, default="")
    category = models.ForeignKey(Category, on_delete=models.PROTECT, related_name="items")
    price = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(0)]
    )
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="active")

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["name"], name="catalog_item_name_idx"),
            models.Index(fields=["status"], name="catalog_item_status_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def is_active(self):
        return self.status == "active"
