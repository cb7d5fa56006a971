import factory
from django.contrib.auth import get_user_model
from django.utils import timezone

from accounts.models import UserProfile
from catalog.models import Category, Item
from orders.models import Order
from staff.models import Staff
from tables.models import Table

User = get_user_model()


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    password = factory.PostGenerationMethodCall("set_password", "password123")

    @factory.post_generation
    def profile(self, create, extracted, **kwargs):
        if not create:
            return
        UserProfile.objects.create(user=self, role=extracted or "manager")


class CategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")


class ItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Item

    name = factory.Sequence(lambda n: f"Dish {n}")
    category = factory.SubFactory(CategoryFactory)
    price = "10.00"
    status = "active"


class StaffFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Staff

    name = factory.Sequence(lambda n: f"Staff {n}")
    role = "waiter"
    bonus = "5.00"
    status = "active"


class TableFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Table

    table_number = factory.Sequence(lambda n: n + 101)
    capacity = 4


class OrderFactory(factory.django.DjangoModelFactory):
    """Bare order row (no lines); use orders.services.orders.create_order for full ones."""

    class Meta:
        model = Order

    order_number = factory.Sequence(lambda n: f"ORD991231{n + 1:03d}")
    table = factory.SubFactory(TableFactory)
    table_number = factory.LazyAttribute(lambda o: o.table.table_number)
    status = "pending"
    payment_status = "unpaid"
    order_date = factory.LazyFunction(timezone.now)
