"""URL configuration for the Storefront project."""

from django.contrib import admin
from django.urls import include, path

from storefront.core.views import health_check

urlpatterns = [
    # Health check
    path("health/", health_check, name="health_check"),

    # Django admin (back office)
    path("admin/", admin.site.urls),

    # Session authentication API
    path("api/", include("storefront.core.urls", namespace="accounts")),

    # Catalogue, cart, orders and analytics API
    path("api/", include("storefront.store.api_urls", namespace="store")),
]
