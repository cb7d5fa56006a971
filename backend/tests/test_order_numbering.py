from datetime import date

import pytest

from orders.models import OrderSequence
from orders.services.numbering import format_order_number, generate_order_number, order_number_prefix

from .factories import OrderFactory

DAY = date(2025, 1, 15)


def test_format():
    assert order_number_prefix(DAY) == "ORD250115"
    assert format_order_number(DAY, 7) == "ORD250115007"
    assert format_order_number(DAY, 1234) == "ORD2501151234"


@pytest.mark.django_db
def test_first_number_of_the_day():
    assert generate_order_number(today=DAY) == "ORD250115001"


@pytest.mark.django_db
def test_counter_is_seeded_from_existing_orders():
    for seq in range(1, 7):
        OrderFactory(order_number=format_order_number(DAY, seq))

    assert generate_order_number(today=DAY) == "ORD250115007"
    assert generate_order_number(today=DAY) == "ORD250115008"
    assert OrderSequence.objects.get(day=DAY).last_value == 8


@pytest.mark.django_db
def test_malformed_suffixes_are_ignored():
    OrderFactory(order_number="ORD250115002")
    OrderFactory(order_number="ORD250115ABC")

    assert generate_order_number(today=DAY) == "ORD250115003"


@pytest.mark.django_db
def test_days_are_numbered_independently():
    OrderFactory(order_number="ORD250115005")

    assert generate_order_number(today=date(2025, 1, 16)) == "ORD250116001"
    assert generate_order_number(today=DAY) == "ORD250115006"
