from rest_framework import permissions, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from accounts.permissions import ManagerOrReadOnly

from .models import Table
from .serializers import TableSerializer


class TableViewSet(viewsets.ModelViewSet):
    queryset = Table.objects.all()
    serializer_class = TableSerializer
    permission_classes = [permissions.IsAuthenticated, ManagerOrReadOnly]

    def get_queryset(self):
        qs = super().get_queryset()
        if self.action == "list":
            qs = qs.filter(status=self.request.query_params.get("status") or "active")
        return qs

    @action(detail=False, methods=["get"], url_path="all")
    def all_tables(self, request):
        return Response(TableSerializer(Table.objects.all(), many=True).data)

    def perform_destroy(self, instance):
        if instance.orders.exists():
            raise ValidationError("Cannot delete a table that has orders.")
        instance.delete()
