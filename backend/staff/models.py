from django.core.validators import MinLengthValidator, MinValueValidator, RegexValidator
from django.db import models
from django.utils import timezone

from catalog.models import STATUS_CHOICES

ROLE_CHOICES = [
    ("admin", "Admin"),
    ("manager", "Manager"),
    ("cashier", "Cashier"),
    ("waiter", "Waiter"),
    ("chef", "Chef"),
]

phone_validator = RegexValidator(r"^[\d\s\-\+\(\)]+$", "Please enter a valid phone number")


class Staff(models.Model):
    name = models.CharField(max_length=100, validators=[MinLengthValidator(2)])
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=30, blank=True, default="", validators=[phone_validator])
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="cashier")
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="active")
    join_date = models.DateField(default=timezone.localdate)
    salary = models.DecimalField(max_digits=12, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    # per-assignment amount charged on an order
    bonus = models.DecimalField(max_digits=12, decimal_places=2, default=0, validators=[MinValueValidator(0)])

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "staff"
        indexes = [
            models.Index(fields=["name"], name="staff_name_idx"),
            models.Index(fields=["role"], name="staff_role_idx"),
            models.Index(fields=["status"], name="staff_status_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.role})"

    @property
    def is_active(self):
        return self.status == "active"
