"""Store API URL patterns."""

from django.urls import path

from . import api_views

app_name = "store"

urlpatterns = [
    # Catalogue
    path("categories", api_views.CategoryListView.as_view(), name="category-list"),
    path("categories/<slug:slug>", api_views.CategoryDetailView.as_view(), name="category-detail"),
    path("products", api_views.ProductListView.as_view(), name="product-list"),
    path("products/<slug:slug>", api_views.ProductDetailView.as_view(), name="product-detail"),

    # Cart
    path("cart", api_views.CartView.as_view(), name="cart"),
    path("cart/<int:item_id>", api_views.CartItemView.as_view(), name="cart-item"),

    # Orders
    path("orders", api_views.OrderListView.as_view(), name="order-list"),
    path("orders/<int:order_id>", api_views.OrderDetailView.as_view(), name="order-detail"),

    # Analytics (admin only)
    path("analytics", api_views.AnalyticsView.as_view(), name="analytics"),
]
