from django.contrib import admin
from .models import Table


@admin.register(Table)
class TableAdmin(admin.ModelAdmin):
    list_display = ("id", "table_number", "capacity", "occupied", "status")
    list_filter = ("status", "occupied")
