# backend/orders/services/queries.py
import math
import re
from dataclasses import dataclass
from datetime import datetime, time, timedelta

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from ..models import Order

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200
DEFAULT_SORT_FIELD = "created_at"

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass
class OrderPage:
    orders: list
    page: int
    pages: int
    total: int
    limit: int

    def pagination(self):
        return {
            "current": self.page,
            "pages": self.pages,
            "total": self.total,
            "limit": self.limit,
        }


def base_queryset():
    return Order.objects.select_related("table").prefetch_related("items", "staff")


def _positive_int(value, default):
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def parse_bound(value, end=False):
    """
    ISO date or datetime -> aware datetime. A bare end date covers the whole
    day, so the returned bound is exclusive in that case.
    """
    if not value:
        return None, False
    try:
        # parse_datetime also accepts a bare date (as midnight), so dates go first
        day = parse_date(value)
        dt = None if day is not None else parse_datetime(value)
    except ValueError:
        return None, False

    if dt is not None:
        if timezone.is_naive(dt):
            dt = timezone.make_aware(dt)
        return dt, False
    if day is None:
        return None, False
    if end:
        day = day + timedelta(days=1)
    return timezone.make_aware(datetime.combine(day, time.min)), end


def sortable_fields():
    names = set()
    for field in Order._meta.concrete_fields:
        names.add(field.name)
        names.add(field.attname)
    return names


def resolve_ordering(sort_by=None, sort_order=None) -> str:
    field = _CAMEL_RE.sub("_", (sort_by or DEFAULT_SORT_FIELD).strip()).lower()
    if field not in sortable_fields():
        field = DEFAULT_SORT_FIELD
    # only an omitted order or "desc" sorts descending
    return f"-{field}" if (sort_order or "desc") == "desc" else field


def filter_orders(qs, status=None, payment_status=None, table_id=None, start_date=None, end_date=None):
    if status:
        qs = qs.filter(status=status)
    if payment_status:
        qs = qs.filter(payment_status=payment_status)
    if table_id:
        qs = qs.filter(table_id=table_id)

    start, _ = parse_bound(start_date)
    if start:
        qs = qs.filter(order_date__gte=start)
    end, exclusive = parse_bound(end_date, end=True)
    if end:
        qs = qs.filter(order_date__lt=end) if exclusive else qs.filter(order_date__lte=end)
    return qs


def paginate(qs, page=None, limit=None) -> OrderPage:
    page = _positive_int(page, 1)
    limit = min(_positive_int(limit, DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE)
    total = qs.count()
    offset = (page - 1) * limit
    return OrderPage(
        orders=list(qs[offset:offset + limit]),
        page=page,
        pages=math.ceil(total / limit),
        total=total,
        limit=limit,
    )


def list_orders(params) -> OrderPage:
    """params: mapping of query parameters (request.query_params)."""
    qs = filter_orders(
        base_queryset(),
        status=params.get("status"),
        payment_status=params.get("payment_status"),
        table_id=params.get("table_id"),
        start_date=params.get("start_date"),
        end_date=params.get("end_date"),
    )
    qs = qs.order_by(resolve_ordering(params.get("sort_by"), params.get("sort_order")), "-id")
    return paginate(qs, params.get("page"), params.get("limit"))


def orders_for_table(table_id, status=None):
    qs = base_queryset().filter(table_id=table_id)
    if status:
        qs = qs.filter(status=status)
    return list(qs.order_by("-created_at", "-id"))
