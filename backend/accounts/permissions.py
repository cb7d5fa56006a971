from rest_framework import permissions
from .utils import get_user_role


class RolePermission(permissions.BasePermission):
    """
    Allow access based on the user's role.
    allowed_roles: list of roles allowed.
    """
    allowed_roles = []

    def has_permission(self, request, view):
        role = get_user_role(request)
        return role in self.allowed_roles


class ManagerPermission(RolePermission):
    allowed_roles = ['admin', 'manager']


class WaiterPermission(RolePermission):
    allowed_roles = ['admin', 'manager', 'waiter']


class CashierPermission(RolePermission):
    allowed_roles = ['admin', 'manager', 'cashier']


class ManagerOrReadOnly(ManagerPermission):
    """Any authenticated user may read; writes need admin/manager."""

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True
        return super().has_permission(request, view)
