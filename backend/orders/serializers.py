from rest_framework import serializers

from .models import PAYMENT_STATUS_CHOICES, Order, OrderItem, OrderStaff


class OrderItemInputSerializer(serializers.Serializer):
    item_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)
    notes = serializers.CharField(required=False, allow_blank=True, default="", max_length=200)


class OrderStaffInputSerializer(serializers.Serializer):
    staff_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class OrderCreateSerializer(serializers.Serializer):
    table_id = serializers.IntegerField()
    items = OrderItemInputSerializer(many=True)
    staff = OrderStaffInputSerializer(many=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="", max_length=500)
    customer_count = serializers.IntegerField(required=False, min_value=1, default=1)
    tax_rate = serializers.DecimalField(
        max_digits=5, decimal_places=4, min_value=0, max_value=1, required=False, allow_null=True
    )
    payment_status = serializers.ChoiceField(choices=PAYMENT_STATUS_CHOICES, required=False)

    def validate(self, attrs):
        if not attrs.get("items"):
            raise serializers.ValidationError({"items": "Order must contain at least one item."})
        if not attrs.get("staff"):
            raise serializers.ValidationError({"staff": "At least one staff member is required."})
        return attrs


class OrderUpdateSerializer(serializers.Serializer):
    # table, staff and order number are deliberately absent: they are fixed at creation
    items = OrderItemInputSerializer(many=True, required=False)
    notes = serializers.CharField(required=False, allow_blank=True, max_length=500)
    customer_count = serializers.IntegerField(required=False, min_value=1)
    tax_rate = serializers.DecimalField(
        max_digits=5, decimal_places=4, min_value=0, max_value=1, required=False
    )

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError("Order must contain at least one item.")
        return value


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = ["id", "item_id", "name", "price", "quantity", "subtotal", "notes"]


class OrderStaffSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderStaff
        fields = ["id", "staff_id", "name", "role", "bonus", "quantity", "subtotal"]


class OrderSerializer(serializers.ModelSerializer):
    table = serializers.SerializerMethodField()
    items = OrderItemSerializer(many=True, read_only=True)
    staff = OrderStaffSerializer(many=True, read_only=True)
    total_items = serializers.IntegerField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "table",
            "table_number",
            "items",
            "staff",
            "subtotal",
            "tax_rate",
            "tax",
            "total",
            "total_items",
            "status",
            "payment_status",
            "order_date",
            "customer_count",
            "notes",
            "created_at",
            "updated_at",
        ]

    def get_table(self, obj):
        table = obj.table
        return {"id": table.id, "table_number": table.table_number, "capacity": table.capacity}
