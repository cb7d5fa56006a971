from rest_framework import permissions, viewsets
from rest_framework.exceptions import ValidationError

from accounts.permissions import ManagerOrReadOnly

from .models import Category, Item
from .serializers import CategorySerializer, ItemSerializer


class CategoryViewSet(viewsets.ModelViewSet):
    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    permission_classes = [permissions.IsAuthenticated, ManagerOrReadOnly]

    def get_queryset(self):
        qs = super().get_queryset()
        status = self.request.query_params.get("status")
        if status:
            qs = qs.filter(status=status)
        return qs

    def perform_destroy(self, instance):
        if instance.items.exists():
            raise ValidationError("Cannot delete a category that still has items.")
        instance.delete()


class ItemViewSet(viewsets.ModelViewSet):
    queryset = Item.objects.select_related("category")
    serializer_class = ItemSerializer
    permission_classes = [permissions.IsAuthenticated, ManagerOrReadOnly]

    def get_queryset(self):
        qs = super().get_queryset()
        status = self.request.query_params.get("status")
        if status:
            qs = qs.filter(status=status)
        category_id = self.request.query_params.get("category_id")
        if category_id:
            qs = qs.filter(category_id=category_id)
        return qs.order_by("name")
