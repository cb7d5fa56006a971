from django.contrib import admin
from .models import Order, OrderItem, OrderSequence, OrderStaff


class SnapshotLineInline(admin.TabularInline):
    """Order lines are frozen snapshots; they only change through the orders API."""

    extra = 0
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class OrderItemInline(SnapshotLineInline):
    model = OrderItem
    fields = ("item", "name", "price", "quantity", "subtotal", "notes")
    readonly_fields = fields


class OrderStaffInline(SnapshotLineInline):
    model = OrderStaff
    fields = ("staff", "name", "role", "bonus", "quantity", "subtotal")
    readonly_fields = fields


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("order_number", "table_number", "status", "payment_status", "total", "order_date")
    search_fields = ("order_number",)
    list_filter = ("status", "payment_status")
    # pricing and lifecycle fields have side effects handled by orders.services
    readonly_fields = (
        "order_number",
        "table",
        "table_number",
        "subtotal",
        "tax_rate",
        "tax",
        "total",
        "status",
        "payment_status",
    )
    inlines = [OrderItemInline, OrderStaffInline]

    def has_add_permission(self, request):
        return False

    def save_model(self, request, obj, form, change):
        obj.apply_totals()
        super().save_model(request, obj, form, change)


@admin.register(OrderSequence)
class OrderSequenceAdmin(admin.ModelAdmin):
    list_display = ("day", "last_value")
