from django.http import HttpResponse
from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

ORDERS_CREATED = Counter(
    "restaurant_pos_orders_created_total",
    "Orders created",
)
ORDER_STATUS_CHANGES = Counter(
    "restaurant_pos_order_status_changes_total",
    "Order status updates",
    ["status"],
)
ORDER_REJECTIONS = Counter(
    "restaurant_pos_order_rejections_total",
    "Order requests rejected before persistence",
    ["reason"],
)


def metrics_view(request):
    payload = generate_latest()
    return HttpResponse(payload, content_type=CONTENT_TYPE_LATEST)


def track_order_created():
    ORDERS_CREATED.inc()


def track_status_change(status):
    ORDER_STATUS_CHANGES.labels(status=status or "unknown").inc()


def track_order_rejection(reason):
    ORDER_REJECTIONS.labels(reason=reason or "unknown").inc()
