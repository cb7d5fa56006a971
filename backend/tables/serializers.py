from rest_framework import serializers

from .models import Table


class TableSerializer(serializers.ModelSerializer):
    class Meta:
        model = Table
        fields = [
            "id",
            "table_number",
            "capacity",
            "occupied",
            "status",
            "position_x",
            "position_y",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "occupied", "created_at", "updated_at"]
        extra_kwargs = {"table_number": {"validators": []}}

    def validate_table_number(self, value):
        qs = Table.objects.filter(table_number=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Table with this number already exists.")
        return value

    def validate_capacity(self, value):
        if value < 1 or value > 20:
            raise serializers.ValidationError("Capacity must be between 1 and 20.")
        return value
