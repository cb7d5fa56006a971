from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from catalog.models import Item
from staff.models import Staff
from tables.models import Table

from .services.totals import compute_totals, line_subtotal

ORDER_STATUS_CHOICES = [
    ("pending", "Pending"),
    ("confirmed", "Confirmed"),
    ("preparing", "Preparing"),
    ("ready", "Ready"),
    ("served", "Served"),
    ("cancelled", "Cancelled"),
]

PAYMENT_STATUS_CHOICES = [
    ("unpaid", "Unpaid"),
    ("paid", "Paid"),
    ("refunded", "Refunded"),
]

ORDER_STATUSES = frozenset(value for value, _ in ORDER_STATUS_CHOICES)
PAYMENT_STATUSES = frozenset(value for value, _ in PAYMENT_STATUS_CHOICES)


class Order(models.Model):
    order_number = models.CharField(max_length=20, unique=True)

    table = models.ForeignKey(Table, on_delete=models.PROTECT, related_name="orders")
    table_number = models.PositiveIntegerField()

    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    tax = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    tax_rate = models.DecimalField(
        max_digits=5,
        decimal_places=4,
        default=Decimal("0"),
        validators=[MinValueValidator(0), MaxValueValidator(1)],
    )
    total = models.DecimalField(max_digits=12, decimal_places=2, default=0)

    status = models.CharField(max_length=12, choices=ORDER_STATUS_CHOICES, default="pending")
    payment_status = models.CharField(max_length=10, choices=PAYMENT_STATUS_CHOICES, default="unpaid")

    order_date = models.DateTimeField(default=timezone.now)
    customer_count = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    notes = models.CharField(max_length=500, blank=True, default="")

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["payment_status"], name="orders_payment_idx"),
            models.Index(fields=["order_date"], name="orders_date_idx"),
            models.Index(fields=["created_at"], name="orders_created_idx"),
        ]

    def __str__(self):
        return self.order_number

    @property
    def total_items(self):
        return sum(line.quantity for line in self.items.all())

    def apply_totals(self, item_lines=None, staff_lines=None):
        """Recompute subtotal/tax/total; lines default to the persisted ones."""
        if item_lines is None:
            item_lines = list(self.items.all())
        if staff_lines is None:
            staff_lines = list(self.staff.all())
        totals = compute_totals(item_lines, staff_lines, self.tax_rate)
        self.subtotal = totals.subtotal
        self.tax = totals.tax
        self.total = totals.total
        return totals


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    item = models.ForeignKey(Item, on_delete=models.SET_NULL, null=True, blank=True, related_name="order_lines")

    # snapshot of the item at order time
    name = models.CharField(max_length=100)
    price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])

    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    notes = models.CharField(max_length=200, blank=True, default="")

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.name} x{self.quantity}"

    def save(self, *args, **kwargs):
        self.subtotal = line_subtotal(self.quantity, self.price)
        super().save(*args, **kwargs)


class OrderStaff(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="staff")
    staff = models.ForeignKey(
        Staff, on_delete=models.SET_NULL, null=True, blank=True, related_name="order_assignments"
    )

    # snapshot of the staff member at order time
    name = models.CharField(max_length=100)
    role = models.CharField(max_length=20)
    bonus = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])

    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=0)

    class Meta:
        ordering = ["id"]
        verbose_name_plural = "order staff"

    def __str__(self):
        return f"{self.name} x{self.quantity}"

    def save(self, *args, **kwargs):
        self.subtotal = line_subtotal(self.quantity, self.bonus)
        super().save(*args, **kwargs)


class OrderSequence(models.Model):
    """Per-day counter behind order numbers."""

    day = models.DateField(unique=True)
    last_value = models.PositiveIntegerField(default=0)

    def __str__(self):
        return f"{self.day.isoformat()}: {self.last_value}"
