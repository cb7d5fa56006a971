from decimal import Decimal

import pytest
from django.contrib import admin
from django.test import RequestFactory

from orders.models import Order, OrderItem
from orders.services.orders import create_order


def _order(menu):
    return create_order(
        menu["table"].id,
        [{"item_id": menu["item"].id, "quantity": 2}],
        [{"staff_id": menu["staff"].id}],
    )


@pytest.mark.django_db
def test_admin_lines_and_pricing_fields_are_read_only(menu, admin_user):
    order = _order(menu)
    model_admin = admin.site._registry[Order]
    request = RequestFactory().get("/")
    request.user = admin_user

    inlines = model_admin.get_inline_instances(request, order)
    assert len(inlines) == 2
    for inline in inlines:
        assert not inline.has_add_permission(request, order)
        assert not inline.has_change_permission(request, order)
        assert not inline.has_delete_permission(request, order)

    readonly = set(model_admin.get_readonly_fields(request, order))
    assert {"tax_rate", "subtotal", "tax", "total", "status", "payment_status"} <= readonly
    assert not model_admin.has_add_permission(request)


@pytest.mark.django_db
def test_admin_save_recomputes_totals(menu, admin_user):
    order = _order(menu)
    # stale line quantity written behind the order's back
    OrderItem.objects.filter(order=order).update(quantity=9)
    model_admin = admin.site._registry[Order]
    request = RequestFactory().post("/")
    request.user = admin_user

    order.notes = "birthday"
    model_admin.save_model(request, order, form=None, change=True)

    order.refresh_from_db()
    assert order.notes == "birthday"
    assert order.subtotal == Decimal("95.00")
    assert order.tax == Decimal("7.60")
    assert order.total == Decimal("102.60")


@pytest.mark.django_db
def test_admin_change_page_renders(menu, admin_client):
    order = _order(menu)

    res = admin_client.get(f"/admin/orders/order/{order.id}/change/")

    assert res.status_code == 200
    assert order.order_number in res.content.decode()
