# backend/orders/services/lifecycle.py
import logging

from django.conf import settings
from django.db import transaction

from restaurant_pos.metrics import track_status_change
from tables.models import Table

from ..models import ORDER_STATUSES, PAYMENT_STATUSES, Order
from .errors import InvalidOrderStateError, InvalidStatusError

logger = logging.getLogger(__name__)

# Any status may follow any other; only membership is enforced.
TERMINAL_STATUSES = frozenset({"served", "cancelled"})
DELETABLE_STATUSES = frozenset({"pending", "cancelled"})
OPEN_STATUSES = ORDER_STATUSES - TERMINAL_STATUSES

OCCUPANCY_FLAG = "flag"
OCCUPANCY_REFCOUNT = "refcount"


def occupancy_mode() -> str:
    mode = getattr(settings, "ORDERS_TABLE_OCCUPANCY_MODE", OCCUPANCY_FLAG)
    return OCCUPANCY_REFCOUNT if mode == OCCUPANCY_REFCOUNT else OCCUPANCY_FLAG


def validate_order_status(status):
    if not isinstance(status, str) or status not in ORDER_STATUSES:
        raise InvalidStatusError("Invalid order status", field="status", value=status)
    return status


def validate_payment_status(payment_status):
    if not isinstance(payment_status, str) or payment_status not in PAYMENT_STATUSES:
        raise InvalidStatusError("Invalid payment status", field="payment_status", value=payment_status)
    return payment_status


def _lock_table(table_id):
    return Table.objects.select_for_update().filter(id=table_id).first()


def occupy_table(table) -> bool:
    if table is None or table.occupied:
        return False
    table.occupied = True
    table.save(update_fields=["occupied", "updated_at"])
    logger.info("Table #%s occupied", table.table_number)
    return True


def release_table(table) -> bool:
    """
    Clear the occupied flag.

    In the default "flag" mode the table is freed even if other open orders
    still point at it; "refcount" mode keeps it occupied while any remain.
    """
    if table is None or not table.occupied:
        return False
    if occupancy_mode() == OCCUPANCY_REFCOUNT:
        if Order.objects.filter(table_id=table.id, status__in=OPEN_STATUSES).exists():
            logger.info("Table #%s kept occupied: open orders remain", table.table_number)
            return False
    table.occupied = False
    table.save(update_fields=["occupied", "updated_at"])
    logger.info("Table #%s released", table.table_number)
    return True


def set_order_status(order: Order, status: str) -> Order:
    validate_order_status(status)
    with transaction.atomic():
        order.status = status
        order.save(update_fields=["status", "updated_at"])
        if status in TERMINAL_STATUSES:
            release_table(_lock_table(order.table_id))

    track_status_change(status)
    logger.info("Order %s status -> %s", order.order_number, status)
    return order


def set_payment_status(order: Order, payment_status: str) -> Order:
    validate_payment_status(payment_status)
    order.payment_status = payment_status
    order.save(update_fields=["payment_status", "updated_at"])
    logger.info("Order %s payment -> %s", order.order_number, payment_status)
    return order


def delete_order(order: Order):
    if order.status not in DELETABLE_STATUSES:
        raise InvalidOrderStateError(
            "Cannot delete order that is in progress", status=order.status
        )

    order_number = order.order_number
    with transaction.atomic():
        table = _lock_table(order.table_id)
        order.delete()
        release_table(table)

    logger.info("Order %s deleted", order_number)
