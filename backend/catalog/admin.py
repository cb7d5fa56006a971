from django.contrib import admin
from .models import Category, Item


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "status", "display_order")
    search_fields = ("name",)
    list_filter = ("status",)


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "category", "price", "status")
    search_fields = ("name",)
    list_filter = ("status", "category")
