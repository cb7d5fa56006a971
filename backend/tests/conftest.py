import pytest

from .factories import ItemFactory, StaffFactory, TableFactory


@pytest.fixture
def menu():
    """Table #4, an active dish at 10.00 and an active waiter with a 5.00 bonus."""
    return {
        "table": TableFactory(table_number=4),
        "item": ItemFactory(name="Burger", price="10.00"),
        "staff": StaffFactory(name="Sam", bonus="5.00"),
    }
