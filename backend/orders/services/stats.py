# backend/orders/services/stats.py
from datetime import datetime, time, timedelta

from django.db.models import Avg, Count, Q, Sum
from django.utils import timezone

from ..models import ORDER_STATUS_CHOICES, Order, OrderItem
from .totals import CENT, to_decimal

POPULAR_ITEMS_LIMIT = 10


def _money(value) -> str:
    return str(to_decimal(value).quantize(CENT))


def order_overview():
    aggregates = {
        "total_orders": Count("id"),
        "total_revenue": Sum("total"),
        "average_order_value": Avg("total"),
        "paid_orders": Count("id", filter=Q(payment_status="paid")),
        "unpaid_orders": Count("id", filter=Q(payment_status="unpaid")),
    }
    for status, _ in ORDER_STATUS_CHOICES:
        aggregates[f"{status}_orders"] = Count("id", filter=Q(status=status))

    data = Order.objects.aggregate(**aggregates)
    data["total_revenue"] = _money(data["total_revenue"])
    data["average_order_value"] = _money(data["average_order_value"])
    return data


def today_summary(now=None):
    today = timezone.localdate(now)
    start = timezone.make_aware(datetime.combine(today, time.min))
    end = start + timedelta(days=1)
    data = Order.objects.filter(order_date__gte=start, order_date__lt=end).aggregate(
        today_orders=Count("id"),
        today_revenue=Sum("total"),
        today_average_order_value=Avg("total"),
    )
    data["today_revenue"] = _money(data["today_revenue"])
    data["today_average_order_value"] = _money(data["today_average_order_value"])
    return data


def popular_items(limit=POPULAR_ITEMS_LIMIT):
    rows = (
        OrderItem.objects.values("name")
        .annotate(
            total_quantity=Sum("quantity"),
            total_revenue=Sum("subtotal"),
            order_count=Count("id"),
        )
        .order_by("-total_quantity", "name")[:limit]
    )
    return [
        {
            "name": row["name"],
            "total_quantity": row["total_quantity"],
            "total_revenue": _money(row["total_revenue"]),
            "order_count": row["order_count"],
        }
        for row in rows
    ]


def order_stats(now=None):
    return {
        "overview": order_overview(),
        "today": today_summary(now),
        "popular_items": popular_items(),
    }
