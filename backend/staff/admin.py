from django.contrib import admin
from .models import Staff


@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "role", "bonus", "status")
    search_fields = ("name", "email")
    list_filter = ("role", "status")
