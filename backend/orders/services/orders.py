# backend/orders/services/orders.py
import logging

from django.conf import settings
from django.db import transaction

from restaurant_pos.metrics import track_order_created
from tables.models import Table

from ..models import Order, OrderItem, OrderStaff
from .lifecycle import occupy_table, validate_payment_status
from .numbering import generate_order_number
from .references import resolve_items, resolve_staff, resolve_table
from .totals import line_subtotal

logger = logging.getLogger(__name__)

# Orders taken at the counter are already settled when they are recorded.
CREATED_ORDER_STATUS = "served"
CREATED_PAYMENT_STATUS = "paid"


def default_tax_rate():
    return getattr(settings, "ORDERS_DEFAULT_TAX_RATE", None)


def _item_rows(order, item_lines):
    return [
        OrderItem(
            order=order,
            item_id=line.item_id,
            name=line.name,
            price=line.price,
            quantity=line.quantity,
            subtotal=line_subtotal(line.quantity, line.price),
            notes=line.notes,
        )
        for line in item_lines
    ]


def _staff_rows(order, staff_lines):
    return [
        OrderStaff(
            order=order,
            staff_id=line.staff_id,
            name=line.name,
            role=line.role,
            bonus=line.bonus,
            quantity=line.quantity,
            subtotal=line_subtotal(line.quantity, line.bonus),
        )
        for line in staff_lines
    ]


def create_order(
    table_id,
    items_payload,
    staff_payload,
    notes="",
    customer_count=1,
    tax_rate=None,
    payment_status=None,
):
    # every reference is checked before anything is computed or written
    table = resolve_table(table_id)
    staff_lines = resolve_staff(staff_payload)
    item_lines = resolve_items(items_payload)
    if payment_status:
        validate_payment_status(payment_status)

    order = Order(
        table=table,
        table_number=table.table_number,
        notes=notes or "",
        customer_count=customer_count or 1,
        tax_rate=default_tax_rate() if tax_rate is None else tax_rate,
        status=CREATED_ORDER_STATUS,
        payment_status=payment_status or CREATED_PAYMENT_STATUS,
    )
    order.apply_totals(item_lines, staff_lines)

    with transaction.atomic():
        order.order_number = generate_order_number()
        # uniqueness is left to the database; a clash becomes a 409 and is not retried
        order.full_clean(validate_unique=False)
        order.save()
        OrderItem.objects.bulk_create(_item_rows(order, item_lines))
        OrderStaff.objects.bulk_create(_staff_rows(order, staff_lines))

        occupy_table(Table.objects.select_for_update().get(id=table.id))

    track_order_created()
    logger.info(
        "Order %s created for table #%s total=%s",
        order.order_number,
        order.table_number,
        order.total,
    )
    return order


def update_order(order: Order, items_payload=None, notes=None, customer_count=None, tax_rate=None):
    """
    Replace the item list and/or free-form fields. Table, staff and order
    number are fixed at creation and cannot be changed here.
    """
    item_lines = resolve_items(items_payload) if items_payload is not None else None

    with transaction.atomic():
        order = Order.objects.select_for_update().get(pk=order.pk)
        if notes is not None:
            order.notes = notes
        if customer_count is not None:
            order.customer_count = customer_count
        if tax_rate is not None:
            order.tax_rate = tax_rate

        if item_lines is not None:
            order.items.all().delete()
            OrderItem.objects.bulk_create(_item_rows(order, item_lines))

        order.apply_totals()
        order.full_clean()
        order.save()

    logger.info("Order %s updated total=%s", order.order_number, order.total)
    return order
