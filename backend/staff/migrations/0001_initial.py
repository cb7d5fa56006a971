import django.core.validators
from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Staff",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, validators=[django.core.validators.MinLengthValidator(2)])),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("phone", models.CharField(blank=True, default="", max_length=30, validators=[django.core.validators.RegexValidator("^[\\d\\s\\-\\+\\(\\)]+$", "Please enter a valid phone number")])),
                ("role", models.CharField(choices=[("admin", "Admin"), ("manager", "Manager"), ("cashier", "Cashier"), ("waiter", "Waiter"), ("chef", "Chef")], default="cashier", max_length=20)),
                ("status", models.CharField(choices=[("active", "Active"), ("inactive", "Inactive")], default="active", max_length=10)),
                ("join_date", models.DateField(default=django.utils.timezone.localdate)),
                ("salary", models.DecimalField(decimal_places=2, default=0, max_digits=12, validators=[django.core.validators.MinValueValidator(0)])),
                ("bonus", models.DecimalField(decimal_places=2, default=0, max_digits=12, validators=[django.core.validators.MinValueValidator(0)])),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name_plural": "staff",
                "indexes": [
                    models.Index(fields=["name"], name="staff_name_idx"),
                    models.Index(fields=["role"], name="staff_role_idx"),
                    models.Index(fields=["status"], name="staff_status_idx"),
                ],
            },
        ),
    ]
