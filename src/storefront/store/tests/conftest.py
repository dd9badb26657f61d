"""Shared pytest fixtures for storefront.store tests."""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.test import Client

from storefront.store.models import CartItem, Category, Product


User = get_user_model()


@pytest.fixture(autouse=True)
def clear_cache():
    """Keep the cached category list from leaking between tests."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def customer(db):
    """Create a customer account."""
    return User.objects.create_user(
        username="shopper",
        email="shopper@example.com",
        password="testpass123",
    )


@pytest.fixture
def other_customer(db):
    """Create a second customer account."""
    return User.objects.create_user(
        username="someoneelse",
        email="someoneelse@example.com",
        password="testpass123",
    )


@pytest.fixture
def store_admin(db):
    """Create an admin account."""
    return User.objects.create_user(
        username="storeadmin",
        email="admin@example.com",
        password="testpass123",
        role=User.Role.ADMIN,
    )


@pytest.fixture
def customer_client(customer):
    """Client logged in as the customer."""
    client = Client()
    client.force_login(customer)
    return client


@pytest.fixture
def other_client(other_customer):
    client = Client()
    client.force_login(other_customer)
    return client


@pytest.fixture
def admin_api_client(store_admin):
    """Client logged in as a store admin."""
    client = Client()
    client.force_login(store_admin)
    return client


@pytest.fixture
def electronics(db):
    return Category.objects.create(
        name="Electronics",
        slug="electronics",
        description="Latest gadgets",
    )


@pytest.fixture
def kitchen(db):
    return Category.objects.create(
        name="Home & Kitchen",
        slug="home-kitchen",
        description="For your space",
    )


@pytest.fixture
def earbuds(electronics):
    return Product.objects.create(
        name="SoundMax Pro Wireless Earbuds",
        slug="soundmax-pro-wireless-earbuds",
        description="Noise cancellation, 24h battery",
        price=Decimal("129.99"),
        compare_price=Decimal("169.99"),
        category=electronics,
        rating=4.5,
        review_count=120,
        stock=45,
        tags=["wireless", "earbuds", "audio"],
        featured_tag="New",
        is_new=True,
        is_featured=True,
    )


@pytest.fixture
def watch(electronics):
    return Product.objects.create(
        name="FitPro X Smart Watch",
        slug="fitpro-x-smart-watch",
        description="Health tracking, GPS, 7-day battery",
        price=Decimal("179.99"),
        category=electronics,
        rating=5,
        review_count=248,
        stock=2,
        tags=["smartwatch", "fitness", "wearable"],
        is_featured=True,
        is_best_seller=True,
    )


@pytest.fixture
def coffee_maker(kitchen):
    return Product.objects.create(
        name="BrewMaster Coffee Maker",
        slug="brewmaster-coffee-maker",
        description="Programmable, 12-cup capacity",
        price=Decimal("89.99"),
        category=kitchen,
        rating=4.5,
        review_count=127,
        stock=0,
        tags=["coffee", "kitchen", "appliances"],
        is_best_seller=True,
    )


@pytest.fixture
def cart_with_items(customer, earbuds, watch):
    """Customer cart holding two earbuds and one watch."""
    return [
        CartItem.objects.create(user=customer, product=earbuds, quantity=2),
        CartItem.objects.create(user=customer, product=watch, quantity=1),
    ]

