from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from catalog.models import STATUS_CHOICES


class Table(models.Model):
    table_number = models.PositiveIntegerField(unique=True, validators=[MinValueValidator(1)])
    capacity = models.PositiveIntegerField(validators=[MinValueValidator(1), MaxValueValidator(20)])
    # Only written by order lifecycle events (orders.services.lifecycle).
    occupied = models.BooleanField(default=False)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="active")
    position_x = models.IntegerField(default=0)
    position_y = models.IntegerField(default=0)
    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["table_number"]
        indexes = [
            models.Index(fields=["status"], name="tables_status_idx"),
            models.Index(fields=["occupied"], name="tables_occupied_idx"),
        ]

    def __str__(self):
        return f"Table #{self.table_number}"
