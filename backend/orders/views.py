from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound, PermissionDenied

from accounts.permissions import CashierPermission, ManagerPermission
from accounts.utils import get_user_role
from utils.responses import success_response

from .serializers import OrderCreateSerializer, OrderSerializer, OrderUpdateSerializer
from .services.lifecycle import delete_order, set_order_status, set_payment_status
from .services.orders import create_order, update_order
from .services.queries import base_queryset, list_orders, orders_for_table
from .services.stats import order_stats

UPDATE_ROLES = {"admin", "manager", "waiter"}
DELETE_ROLES = {"admin", "manager"}


def _get_order(order_id):
    order = base_queryset().filter(id=order_id).first()
    if not order:
        raise NotFound("Order not found")
    return order


def _require_role(request, roles, message):
    if get_user_role(request) not in roles:
        raise PermissionDenied(message)


def _order_payload(order_id):
    return {"order": OrderSerializer(_get_order(order_id)).data}


@api_view(["GET", "POST"])
@permission_classes([permissions.IsAuthenticated])
def orders_collection(request):
    if request.method == "POST":
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        order = create_order(
            table_id=data["table_id"],
            items_payload=data["items"],
            staff_payload=data["staff"],
            notes=data.get("notes"),
            customer_count=data.get("customer_count"),
            tax_rate=data.get("tax_rate"),
            payment_status=data.get("payment_status"),
        )
        return success_response(
            _order_payload(order.id),
            message="Order created successfully",
            status=status.HTTP_201_CREATED,
        )

    page = list_orders(request.query_params)
    return success_response(
        {
            "orders": OrderSerializer(page.orders, many=True).data,
            "pagination": page.pagination(),
        }
    )


@api_view(["GET", "PUT", "PATCH", "DELETE"])
@permission_classes([permissions.IsAuthenticated])
def order_detail(request, order_id: int):
    order = _get_order(order_id)

    if request.method == "GET":
        return success_response({"order": OrderSerializer(order).data})

    if request.method == "DELETE":
        _require_role(request, DELETE_ROLES, "Only admins and managers can delete orders.")
        delete_order(order)
        return success_response(message="Order deleted successfully")

    _require_role(request, UPDATE_ROLES, "Your role cannot edit orders.")
    serializer = OrderUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    update_order(
        order,
        items_payload=data.get("items"),
        notes=data.get("notes"),
        customer_count=data.get("customer_count"),
        tax_rate=data.get("tax_rate"),
    )
    return success_response(_order_payload(order.id), message="Order updated successfully")


@api_view(["PATCH"])
@permission_classes([permissions.IsAuthenticated])
def order_status(request, order_id: int):
    order = _get_order(order_id)
    new_status = request.data.get("status")
    set_order_status(order, new_status)
    return success_response(_order_payload(order.id), message=f"Order status updated to {new_status}")


@api_view(["PATCH"])
@permission_classes([permissions.IsAuthenticated, CashierPermission])
def order_payment(request, order_id: int):
    order = _get_order(order_id)
    payment_status = request.data.get("payment_status")
    set_payment_status(order, payment_status)
    return success_response(
        _order_payload(order.id), message=f"Payment status updated to {payment_status}"
    )


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def orders_by_table(request, table_id: int):
    orders = orders_for_table(table_id, status=request.query_params.get("status"))
    return success_response({"orders": OrderSerializer(orders, many=True).data})


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated, ManagerPermission])
def order_stats_view(request):
    return success_response(order_stats())
