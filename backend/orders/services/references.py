# backend/orders/services/references.py
import logging
from dataclasses import dataclass
from decimal import Decimal

from rest_framework import serializers

from catalog.models import Item
from restaurant_pos.metrics import track_order_rejection
from staff.models import Staff
from tables.models import Table

from .errors import ReferenceInactive, ReferenceNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemSnapshot:
    """Item values frozen onto an order line; never re-read from the Item."""

    item_id: int
    name: str
    price: Decimal
    quantity: int
    notes: str = ""


@dataclass(frozen=True)
class StaffSnapshot:
    """Staff values frozen onto an order assignment."""

    staff_id: int
    name: str
    role: str
    bonus: Decimal
    quantity: int = 1


def _require_quantity(value, label):
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise serializers.ValidationError({label: "Quantity must be a whole number of at least 1."})
    return value


def _not_found(message, entity, ref):
    logger.warning("Order rejected: %s %s not found", entity, ref)
    track_order_rejection("not_found")
    return ReferenceNotFound(message, entity=entity, ref=ref)


def _inactive(message, entity, ref):
    logger.warning("Order rejected: %s %s inactive", entity, ref)
    track_order_rejection("inactive")
    return ReferenceInactive(message, entity=entity, ref=ref)


def resolve_table(table_id) -> Table:
    table = Table.objects.filter(id=table_id).first() if table_id else None
    if not table:
        raise _not_found("Table not found", "table", table_id)
    return table


def resolve_staff(staff_payload):
    """
    staff_payload: list of {"staff_id", "quantity"}; quantity defaults to 1.
    Returns StaffSnapshot list in payload order.
    """
    if not staff_payload:
        raise serializers.ValidationError({"staff": "At least one staff member is required."})

    ids = [row["staff_id"] for row in staff_payload]
    staff_map = Staff.objects.in_bulk(ids)

    snapshots = []
    for row in staff_payload:
        quantity = _require_quantity(row.get("quantity", 1), "staff")
        member = staff_map.get(row["staff_id"])
        if not member:
            raise _not_found(f"Staff member with ID {row['staff_id']} not found", "staff", row["staff_id"])
        if not member.is_active:
            raise _inactive(f'Staff member "{member.name}" is not active', "staff", member.id)
        snapshots.append(
            StaffSnapshot(
                staff_id=member.id,
                name=member.name,
                role=member.role,
                bonus=member.bonus,
                quantity=quantity,
            )
        )
    return snapshots


def resolve_items(items_payload):
    """
    items_payload: list of {"item_id", "quantity", "notes"}.
    Returns ItemSnapshot list in payload order.
    """
    if not items_payload:
        raise serializers.ValidationError({"items": "Order must contain at least one item."})

    ids = [row["item_id"] for row in items_payload]
    item_map = Item.objects.in_bulk(ids)

    snapshots = []
    for row in items_payload:
        quantity = _require_quantity(row.get("quantity"), "items")
        item = item_map.get(row["item_id"])
        if not item:
            raise _not_found(f"Item with ID {row['item_id']} not found", "item", row["item_id"])
        if not item.is_active:
            raise _inactive(f'Item "{item.name}" is not available', "item", item.id)
        snapshots.append(
            ItemSnapshot(
                item_id=item.id,
                name=item.name,
                price=item.price,
                quantity=quantity,
                notes=row.get("notes") or "",
            )
        )
    return snapshots
