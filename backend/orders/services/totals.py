# backend/orders/services/totals.py
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")
ZERO = Decimal("0")


@dataclass(frozen=True)
class OrderTotals:
    items_subtotal: Decimal
    staff_subtotal: Decimal
    subtotal: Decimal
    tax: Decimal
    total: Decimal


def to_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    # str() first so floats keep their printed value instead of binary noise
    return Decimal(str(value))


def line_subtotal(quantity, unit_amount) -> Decimal:
    return to_decimal(unit_amount) * int(quantity)


def compute_totals(item_lines, staff_lines, tax_rate) -> OrderTotals:
    """
    Order totals from the raw lines.

    Item lines need ``quantity`` and ``price``, staff lines ``quantity`` and
    ``bonus`` (model rows and snapshots both qualify). Tax is rounded to the
    cent, so ``total == subtotal + tax`` holds exactly.
    """
    items_subtotal = sum(
        (line_subtotal(line.quantity, line.price) for line in item_lines), ZERO
    )
    staff_subtotal = sum(
        (line_subtotal(line.quantity, line.bonus) for line in staff_lines), ZERO
    )
    subtotal = items_subtotal + staff_subtotal
    tax = (subtotal * to_decimal(tax_rate)).quantize(CENT, rounding=ROUND_HALF_UP)
    return OrderTotals(
        items_subtotal=items_subtotal,
        staff_subtotal=staff_subtotal,
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
    )
