# backend/orders/services/numbering.py
import logging

from django.db import transaction
from django.utils import timezone

from ..models import Order, OrderSequence

logger = logging.getLogger(__name__)

ORDER_NUMBER_PREFIX = "ORD"
SEQUENCE_PADDING = 3


def order_number_prefix(day) -> str:
    return f"{ORDER_NUMBER_PREFIX}{day:%y%m%d}"


def format_order_number(day, seq: int) -> str:
    return f"{order_number_prefix(day)}{seq:0{SEQUENCE_PADDING}d}"


def max_existing_sequence(day) -> int:
    prefix = order_number_prefix(day)
    max_seq = 0
    numbers = (
        Order.objects.filter(order_number__startswith=prefix)
        .values_list("order_number", flat=True)
        .iterator()
    )
    for number in numbers:
        suffix = number[len(prefix):]
        if suffix.isdigit():
            max_seq = max(max_seq, int(suffix))
    return max_seq


def generate_order_number(today=None) -> str:
    """
    Next ORDyymmddNNN number for ``today`` (local date by default).

    The per-day OrderSequence row is locked and incremented in one step, so
    concurrent creations never compute the same sequence. A fresh counter is
    seeded from orders already carrying that day's prefix.
    Call it inside the transaction that persists the order so the row lock
    is held until the order is written.
    """
    day = today or timezone.localdate()
    with transaction.atomic():
        counter, _ = OrderSequence.objects.select_for_update().get_or_create(day=day)
        seq = int(counter.last_value or 0)
        if seq < 1:
            seq = max_existing_sequence(day)
        seq += 1
        counter.last_value = seq
        counter.save(update_fields=["last_value"])

    number = format_order_number(day, seq)
    logger.debug("Allocated order number %s", number)
    return number
