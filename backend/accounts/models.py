from django.conf import settings
from django.db import models

ROLE_CHOICES = (
    ("admin", "Admin"),
    ("manager", "Manager"),
    ("cashier", "Cashier"),
    ("waiter", "Waiter"),
)


class UserProfile(models.Model):
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="cashier")
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.user.username} ({self.role})"
