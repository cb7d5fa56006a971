from decimal import Decimal

import pytest
from rest_framework.exceptions import ValidationError

from orders.services.errors import ReferenceInactive, ReferenceNotFound
from orders.services.references import resolve_items, resolve_staff, resolve_table

from .factories import ItemFactory, StaffFactory, TableFactory


@pytest.mark.django_db
def test_missing_table():
    with pytest.raises(ReferenceNotFound) as exc:
        resolve_table(999)
    assert exc.value.message == "Table not found"
    assert exc.value.status_code == 404


@pytest.mark.django_db
def test_table_found():
    table = TableFactory(table_number=9)
    assert resolve_table(table.id) == table


@pytest.mark.django_db
def test_inactive_staff_is_named():
    alex = StaffFactory(name="Alex", status="inactive")

    with pytest.raises(ReferenceInactive) as exc:
        resolve_staff([{"staff_id": alex.id, "quantity": 1}])
    assert "Alex" in exc.value.message
    assert exc.value.code == "reference_inactive"


@pytest.mark.django_db
def test_missing_staff():
    with pytest.raises(ReferenceNotFound) as exc:
        resolve_staff([{"staff_id": 4242}])
    assert exc.value.message == "Staff member with ID 4242 not found"


@pytest.mark.django_db
def test_staff_snapshot_defaults_quantity():
    sam = StaffFactory(name="Sam", bonus="5.00")
    [snapshot] = resolve_staff([{"staff_id": sam.id}])

    assert snapshot.name == "Sam"
    assert snapshot.role == "waiter"
    assert snapshot.bonus == Decimal("5.00")
    assert snapshot.quantity == 1


@pytest.mark.django_db
def test_inactive_item_is_not_available():
    item = ItemFactory(name="Soup", status="inactive")

    with pytest.raises(ReferenceInactive) as exc:
        resolve_items([{"item_id": item.id, "quantity": 1}])
    assert exc.value.message == 'Item "Soup" is not available'


@pytest.mark.django_db
def test_missing_item():
    with pytest.raises(ReferenceNotFound) as exc:
        resolve_items([{"item_id": 31337, "quantity": 1}])
    assert "31337" in exc.value.message


@pytest.mark.django_db
def test_item_snapshots_keep_payload_order():
    first = ItemFactory(name="Fries", price="3.50")
    second = ItemFactory(name="Cola", price="2.00")

    lines = resolve_items(
        [
            {"item_id": second.id, "quantity": 2, "notes": "no ice"},
            {"item_id": first.id, "quantity": 1},
        ]
    )

    assert [line.name for line in lines] == ["Cola", "Fries"]
    assert lines[0].notes == "no ice"
    assert lines[1].notes == ""
    assert lines[0].price == Decimal("2.00")


@pytest.mark.django_db
@pytest.mark.parametrize("quantity", [0, -1, "2", None, True])
def test_bad_quantity(quantity):
    item = ItemFactory()
    with pytest.raises(ValidationError):
        resolve_items([{"item_id": item.id, "quantity": quantity}])


@pytest.mark.django_db
def test_empty_lists():
    with pytest.raises(ValidationError):
        resolve_items([])
    with pytest.raises(ValidationError):
        resolve_staff([])
