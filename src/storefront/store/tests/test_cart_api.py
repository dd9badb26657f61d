"""Tests for the cart API.

TDD tests for:
- Adding products (merge into an existing line, stock checks)
- Changing quantities, removing lines, emptying the cart
- Ownership and authentication checks
"""

import pytest
from django.test import Client
from django.urls import reverse

from storefront.store.models import CartItem


@pytest.fixture
def client():
    """Return a Django test client."""
    return Client()


class TestGetCart:
    """Tests for GET /api/cart"""

    def test_anonymous_is_401(self, client, db):
        response = client.get(reverse("store:cart"))

        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized"}

    def test_empty_cart(self, customer_client):
        response = customer_client.get(reverse("store:cart"))

        assert response.status_code == 200
        assert response.json() == []

    def test_lines_embed_their_product(self, customer_client, cart_with_items):
        response = customer_client.get(reverse("store:cart"))

        lines = response.json()
        assert len(lines) == 2
        assert lines[0]["quantity"] == 2
        assert lines[0]["product"]["slug"] == "soundmax-pro-wireless-earbuds"
        assert lines[1]["product"]["price"] == 179.99

    def test_only_own_lines_are_returned(self, other_client, cart_with_items):
        response = other_client.get(reverse("store:cart"))

        assert response.json() == []


class TestAddToCart:
    """Tests for POST /api/cart"""

    def test_creates_line(self, customer_client, customer, earbuds):
        response = customer_client.post(
            reverse("store:cart"),
            {"productId": earbuds.pk, "quantity": 1},
            content_type="application/json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["productId"] == earbuds.pk
        assert data["userId"] == customer.pk
        assert data["quantity"] == 1

    def test_adding_same_product_twice_increments_quantity(self, customer_client, customer, earbuds):
        url = reverse("store:cart")

        first = customer_client.post(url, {"productId": earbuds.pk, "quantity": 1}, content_type="application/json")
        second = customer_client.post(url, {"productId": earbuds.pk, "quantity": 1}, content_type="application/json")

        assert first.status_code == 201
        assert second.status_code == 200
        assert second.json()["quantity"] == 2
        assert CartItem.objects.filter(user=customer, product=earbuds).count() == 1

    def test_quantity_defaults_to_one(self, customer_client, earbuds):
        response = customer_client.post(
            reverse("store:cart"),
            {"productId": earbuds.pk},
            content_type="application/json",
        )

        assert response.status_code == 201
        assert response.json()["quantity"] == 1

    def test_unknown_product_is_404(self, customer_client, db):
        response = customer_client.post(
            reverse("store:cart"),
            {"productId": 9999, "quantity": 1},
            content_type="application/json",
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"

    def test_more_than_stock_is_400(self, customer_client, watch):
        response = customer_client.post(
            reverse("store:cart"),
            {"productId": watch.pk, "quantity": 3},
            content_type="application/json",
        )

        assert response.status_code == 400
        assert "stock" in response.json()["message"].lower()
        assert not CartItem.objects.exists()

    def test_merged_quantity_cannot_exceed_stock(self, customer_client, customer, watch):
        CartItem.objects.create(user=customer, product=watch, quantity=2)

        response = customer_client.post(
            reverse("store:cart"),
            {"productId": watch.pk, "quantity": 1},
            content_type="application/json",
        )

        assert response.status_code == 400
        assert CartItem.objects.get(user=customer, product=watch).quantity == 2

    def test_out_of_stock_product_is_400(self, customer_client, coffee_maker):
        response = customer_client.post(
            reverse("store:cart"),
            {"productId": coffee_maker.pk, "quantity": 1},
            content_type="application/json",
        )

        assert response.status_code == 400

    @pytest.mark.parametrize("body", [{"quantity": 1}, {"productId": "abc"}, {"productId": 1, "quantity": 0}])
    def test_invalid_body_is_400(self, customer_client, earbuds, body):
        response = customer_client.post(reverse("store:cart"), body, content_type="application/json")

        assert response.status_code == 400
        assert "errors" in response.json()

    def test_malformed_json_is_400(self, customer_client, earbuds):
        response = customer_client.post(reverse("store:cart"), "{not json", content_type="application/json")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid JSON"

    def test_anonymous_is_401(self, client, earbuds):
        response = client.post(
            reverse("store:cart"),
            {"productId": earbuds.pk, "quantity": 1},
            content_type="application/json",
        )

        assert response.status_code == 401


class TestUpdateCartItem:
    """Tests for PUT /api/cart/<id>"""

    def test_sets_quantity(self, customer_client, cart_with_items):
        line = cart_with_items[0]

        response = customer_client.put(
            reverse("store:cart-item", args=[line.pk]),
            {"quantity": 5},
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json()["quantity"] == 5
        line.refresh_from_db()
        assert line.quantity == 5

    def test_quantity_above_stock_is_400(self, customer_client, cart_with_items):
        watch_line = cart_with_items[1]

        response = customer_client.put(
            reverse("store:cart-item", args=[watch_line.pk]),
            {"quantity": 3},
            content_type="application/json",
        )

        assert response.status_code == 400
        watch_line.refresh_from_db()
        assert watch_line.quantity == 1

    def test_zero_quantity_is_400(self, customer_client, cart_with_items):
        response = customer_client.put(
            reverse("store:cart-item", args=[cart_with_items[0].pk]),
            {"quantity": 0},
            content_type="application/json",
        )

        assert response.status_code == 400

    def test_unknown_line_is_404(self, customer_client, db):
        response = customer_client.put(
            reverse("store:cart-item", args=[12345]),
            {"quantity": 1},
            content_type="application/json",
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Cart item not found"

    def test_other_users_line_is_403(self, other_client, cart_with_items):
        response = other_client.put(
            reverse("store:cart-item", args=[cart_with_items[0].pk]),
            {"quantity": 1},
            content_type="application/json",
        )

        assert response.status_code == 403


class TestDeleteCartItem:
    """Tests for DELETE /api/cart/<id>"""

    def test_owner_can_delete(self, customer_client, cart_with_items):
        line = cart_with_items[0]

        response = customer_client.delete(reverse("store:cart-item", args=[line.pk]))

        assert response.status_code == 204
        assert not CartItem.objects.filter(pk=line.pk).exists()

    def test_non_owner_gets_403(self, other_client, cart_with_items):
        line = cart_with_items[0]

        response = other_client.delete(reverse("store:cart-item", args=[line.pk]))

        assert response.status_code == 403
        assert CartItem.objects.filter(pk=line.pk).exists()

    def test_unknown_line_is_404(self, customer_client, db):
        response = customer_client.delete(reverse("store:cart-item", args=[777]))

        assert response.status_code == 404


class TestClearCart:
    """Tests for DELETE /api/cart"""

    def test_empties_only_own_cart(self, customer_client, customer, other_customer, cart_with_items, earbuds):
        CartItem.objects.create(user=other_customer, product=earbuds, quantity=1)

        response = customer_client.delete(reverse("store:cart"))

        assert response.status_code == 204
        assert not CartItem.objects.filter(user=customer).exists()
        assert CartItem.objects.filter(user=other_customer).count() == 1

    def test_anonymous_is_401(self, client, db):
        response = client.delete(reverse("store:cart"))

        assert response.status_code == 401


class TestCartCsrf:
    """Cart writes are protected against cross-site request forgery"""

    @pytest.fixture
    def csrf_client(self, customer):
        client = Client(enforce_csrf_checks=True)
        client.force_login(customer)
        return client

    def test_add_without_token_is_403(self, csrf_client, earbuds):
        response = csrf_client.post(
            reverse("store:cart"),
            {"productId": earbuds.pk, "quantity": 1},
            content_type="application/json",
        )

        assert response.status_code == 403
        assert not CartItem.objects.exists()

    def test_add_with_token_succeeds(self, csrf_client, earbuds):
        csrf_client.get(reverse("accounts:current-user"))
        token = csrf_client.cookies["csrftoken"].value

        response = csrf_client.post(
            reverse("store:cart"),
            {"productId": earbuds.pk, "quantity": 1},
            content_type="application/json",
            HTTP_X_CSRFTOKEN=token,
        )

        assert response.status_code == 201
