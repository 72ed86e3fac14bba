"""Small builders shared by the order tests."""

from decimal import Decimal

from django.contrib.auth import get_user_model

from orders.services.checkout import place_order
from products.models import Category, Product

User = get_user_model()


def make_user(email="shopper@example.com", role="user", **extra):
    return User.objects.create_user(email=email, password="pass", role=role, **extra)


def make_admin(email="admin@example.com", **extra):
    return make_user(email=email, role="admin", **extra)


def make_product(name="Jollof Pack", price="2300.00", dmc="200.00", stock=10, remaining=None, **extra):
    category = extra.pop("category", None)
    if category is None:
        category, _ = Category.objects.get_or_create(name="Food")
    return Product.objects.create(
        name=name,
        price=Decimal(price),
        dmc=Decimal(dmc),
        stock=stock,
        remaining_stock=stock if remaining is None else remaining,
        category=category,
        **extra,
    )


def line(product, quantity=1, **extra):
    return {"id": str(product.id), "quantity": quantity, **extra}


def place(actor=None, items=(), guest_email="guest@example.com", **kwargs):
    """Check out as actor, or as a guest when actor is None."""
    return place_order(
        actor=actor,
        items=list(items),
        guest_email=None if actor else guest_email,
        guest_name=kwargs.pop("guest_name", None if actor else "Guest Shopper"),
        address=kwargs.pop("address", "Hall A, Room 12"),
        notifier=kwargs.pop("notifier", None),
    )
