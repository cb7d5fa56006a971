from datetime import datetime
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from orders.services.orders import create_order
from orders.services.queries import parse_bound, resolve_ordering
from orders.services.stats import order_stats

from .factories import ItemFactory, OrderFactory, TableFactory, UserFactory


def _auth_client(user):
    client = APIClient()
    token = RefreshToken.for_user(user).access_token
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    return client


def _aware(year, month, day, hour=12):
    return timezone.make_aware(datetime(year, month, day, hour))


def _numbers(res):
    return [order["order_number"] for order in res.data["data"]["orders"]]


def test_resolve_ordering():
    assert resolve_ordering() == "-created_at"
    assert resolve_ordering("total", "asc") == "total"
    assert resolve_ordering("orderDate") == "-order_date"
    assert resolve_ordering("paymentStatus", "asc") == "payment_status"
    assert resolve_ordering("password", "asc") == "created_at"
    assert resolve_ordering("total", "desc") == "-total"
    assert resolve_ordering("total", "") == "-total"
    assert resolve_ordering("total", "ASC") == "total"
    assert resolve_ordering("total", "ascending") == "total"


@pytest.mark.django_db
def test_parse_bound_end_date_covers_whole_day():
    bound, exclusive = parse_bound("2025-03-01", end=True)
    assert exclusive is True
    assert bound == timezone.make_aware(datetime(2025, 3, 2))

    bound, exclusive = parse_bound("2025-03-01T10:30:00", end=True)
    assert exclusive is False
    assert bound == timezone.make_aware(datetime(2025, 3, 1, 10, 30))

    assert parse_bound("not-a-date") == (None, False)
    assert parse_bound("2025-13-45", end=True) == (None, False)
    assert parse_bound("2025-03-01") == (timezone.make_aware(datetime(2025, 3, 1)), False)
    assert parse_bound(None) == (None, False)


@pytest.mark.django_db
def test_list_filters_by_status_payment_and_table():
    table = TableFactory()
    OrderFactory(order_number="A1", status="pending", payment_status="unpaid")
    OrderFactory(order_number="A2", status="served", payment_status="paid", table=table)
    OrderFactory(order_number="A3", status="served", payment_status="unpaid")
    client = _auth_client(UserFactory(profile="cashier"))

    assert _numbers(client.get("/api/orders/", {"status": "served", "sort_by": "order_number", "sort_order": "asc"})) == ["A2", "A3"]
    assert _numbers(client.get("/api/orders/", {"payment_status": "unpaid", "sort_by": "order_number", "sort_order": "asc"})) == ["A1", "A3"]
    assert _numbers(client.get("/api/orders/", {"table_id": table.id})) == ["A2"]
    assert _numbers(client.get("/api/orders/", {"status": "eaten"})) == []


@pytest.mark.django_db
def test_list_date_range_is_inclusive_of_end_day():
    OrderFactory(order_number="D1", order_date=_aware(2025, 2, 28, 23))
    OrderFactory(order_number="D2", order_date=_aware(2025, 3, 1, 9))
    OrderFactory(order_number="D3", order_date=_aware(2025, 3, 1, 23))
    OrderFactory(order_number="D4", order_date=_aware(2025, 3, 2, 0))
    client = _auth_client(UserFactory())

    res = client.get(
        "/api/orders/",
        {"start_date": "2025-03-01", "end_date": "2025-03-01", "sort_by": "orderDate", "sort_order": "asc"},
    )

    assert _numbers(res) == ["D2", "D3"]


@pytest.mark.django_db
def test_list_pagination():
    for n in range(5):
        OrderFactory(order_number=f"P{n}", total=Decimal(n))
    client = _auth_client(UserFactory())

    res = client.get("/api/orders/", {"page": 2, "limit": 2, "sort_by": "total", "sort_order": "asc"})

    assert res.status_code == 200
    assert _numbers(res) == ["P2", "P3"]
    assert res.data["data"]["pagination"] == {"current": 2, "pages": 3, "total": 5, "limit": 2}


@pytest.mark.django_db
def test_list_pagination_bad_values_fall_back():
    OrderFactory()
    client = _auth_client(UserFactory())

    res = client.get("/api/orders/", {"page": "zero", "limit": "-3"})
    assert res.data["data"]["pagination"] == {"current": 1, "pages": 1, "total": 1, "limit": 50}

    res = client.get("/api/orders/", {"limit": 10000})
    assert res.data["data"]["pagination"]["limit"] == 200


@pytest.mark.django_db
def test_list_default_sort_is_newest_first():
    OrderFactory(order_number="OLD", created_at=_aware(2024, 1, 1))
    OrderFactory(order_number="NEW", created_at=_aware(2024, 6, 1))
    client = _auth_client(UserFactory())

    assert _numbers(client.get("/api/orders/")) == ["NEW", "OLD"]
    assert _numbers(client.get("/api/orders/", {"sort_by": "bogus", "sort_order": "asc"})) == ["OLD", "NEW"]


@pytest.mark.django_db
def test_orders_by_table():
    table = TableFactory()
    OrderFactory(order_number="T1", table=table, status="pending", created_at=_aware(2024, 1, 1))
    OrderFactory(order_number="T2", table=table, status="served", created_at=_aware(2024, 1, 2))
    OrderFactory(order_number="X1")
    client = _auth_client(UserFactory(profile="waiter"))

    res = client.get(f"/api/orders/table/{table.id}/")
    assert res.status_code == 200
    assert _numbers(res) == ["T2", "T1"]

    res = client.get(f"/api/orders/table/{table.id}/", {"status": "pending"})
    assert _numbers(res) == ["T1"]


@pytest.mark.django_db
def test_stats(menu):
    fries = ItemFactory(name="Fries", price="3.00")
    staff = [{"staff_id": menu["staff"].id}]
    create_order(
        menu["table"].id,
        [{"item_id": menu["item"].id, "quantity": 2}, {"item_id": fries.id, "quantity": 1}],
        staff,
    )
    create_order(menu["table"].id, [{"item_id": fries.id, "quantity": 4}], staff, payment_status="unpaid")
    OrderFactory(status="cancelled", order_date=_aware(2020, 1, 1))

    stats = order_stats()

    overview = stats["overview"]
    assert overview["total_orders"] == 3
    # (20 + 3 + 5) * 1.08 = 30.24 ; (12 + 5) * 1.08 = 18.36
    assert overview["total_revenue"] == "48.60"
    assert overview["average_order_value"] == "16.20"
    assert overview["paid_orders"] == 1
    assert overview["unpaid_orders"] == 2
    assert overview["served_orders"] == 2
    assert overview["cancelled_orders"] == 1
    assert overview["pending_orders"] == 0

    today = stats["today"]
    assert today["today_orders"] == 2
    assert today["today_revenue"] == "48.60"
    assert today["today_average_order_value"] == "24.30"

    popular = stats["popular_items"]
    assert popular[0] == {"name": "Fries", "total_quantity": 5, "total_revenue": "15.00", "order_count": 2}
    assert popular[1] == {"name": "Burger", "total_quantity": 2, "total_revenue": "20.00", "order_count": 1}


@pytest.mark.django_db
def test_stats_endpoint_needs_manager():
    assert _auth_client(UserFactory(profile="waiter")).get("/api/orders/stats/").status_code == 403

    res = _auth_client(UserFactory(profile="manager")).get("/api/orders/stats/")
    assert res.status_code == 200
    assert res.data["data"]["overview"]["total_orders"] == 0
    assert res.data["data"]["overview"]["total_revenue"] == "0.00"
    assert res.data["data"]["popular_items"] == []
