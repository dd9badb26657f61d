"""JSON API views for the storefront.

These endpoints back the browser client:
- Catalogue browsing and search (public)
- Catalogue maintenance (admins)
- Cart and checkout (logged-in customers)
- Sales analytics (admins)

Access checks happen here; everything else is delegated to .services,
whose errors are rendered by storefront.core.middleware.ApiErrorMiddleware.
"""

import logging

from django.http import HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View

from storefront.core.decorators import admin_required_json, login_required_json
from storefront.core.exceptions import InvalidRequest
from storefront.core.utils import form_errors, load_json_body, snake_case_keys

from . import services
from .forms import AddToCartForm, CartQuantityForm
from .serializers import (
    product_payload,
    serialize_cart_item,
    serialize_category,
    serialize_daily_analytics,
    serialize_order,
    serialize_order_item,
    serialize_product,
)

logger = logging.getLogger(__name__)


class CategoryListView(View):
    """GET /api/categories, POST /api/categories (admin)"""

    def get(self, request):
        categories = services.list_categories()
        return JsonResponse([serialize_category(c) for c in categories], safe=False)

    @method_decorator(admin_required_json)
    def post(self, request):
        category = services.create_category(snake_case_keys(load_json_body(request)))
        return JsonResponse(serialize_category(category), status=201)


class CategoryDetailView(View):
    """GET /api/categories/<slug>"""

    def get(self, request, slug):
        return JsonResponse(serialize_category(services.get_category_by_slug(slug)))


class ProductListView(View):
    """Catalogue listing.

    GET /api/products?category=<slug>&featured=true|new&search=<text>
        &minPrice=<n>&maxPrice=<n>&tags=a,b&availability=in-stock|out-of-stock
        &sort=popularity|price-low-high|price-high-low|newest|rating

    POST /api/products (admin) creates a product.
    """

    def get(self, request):
        params = request.GET
        tags = [tag.strip() for tag in params.get("tags", "").split(",") if tag.strip()]

        products = services.list_products(
            category=params.get("category"),
            featured=params.get("featured"),
            search=params.get("search", "").strip(),
            min_price=params.get("minPrice"),
            max_price=params.get("maxPrice"),
            tags=tags,
            availability=params.get("availability"),
            sort=params.get("sort"),
        )
        return JsonResponse([serialize_product(p) for p in products], safe=False)

    @method_decorator(admin_required_json)
    def post(self, request):
        product = services.create_product(product_payload(load_json_body(request)))
        return JsonResponse(serialize_product(product), status=201)


class ProductDetailView(View):
    """GET /api/products/<slug>, PATCH /api/products/<slug> (admin)"""

    def get(self, request, slug):
        return JsonResponse(serialize_product(services.get_product_by_slug(slug)))

    @method_decorator(admin_required_json)
    def patch(self, request, slug):
        product = services.get_product_by_slug(slug)
        product = services.update_product(product, product_payload(load_json_body(request)))
        return JsonResponse(serialize_product(product))


class CartView(View):
    """The current user's cart.

    GET /api/cart
    POST /api/cart
    {
        "productId": 1,
        "quantity": 1
    }
    DELETE /api/cart empties the cart.
    """

    @method_decorator(login_required_json)
    def get(self, request):
        items = services.get_cart_items(request.user)
        return JsonResponse([serialize_cart_item(item) for item in items], safe=False)

    @method_decorator(login_required_json)
    def post(self, request):
        form = AddToCartForm(snake_case_keys(load_json_body(request)))
        if not form.is_valid():
            raise InvalidRequest("Invalid cart item", errors=form_errors(form))

        item, created = services.add_to_cart(
            request.user,
            form.cleaned_data["product_id"],
            form.cleaned_data["quantity"],
        )
        return JsonResponse(serialize_cart_item(item), status=201 if created else 200)

    @method_decorator(login_required_json)
    def delete(self, request):
        services.clear_cart(request.user)
        return HttpResponse(status=204)


class CartItemView(View):
    """PUT /api/cart/<id> {"quantity": n}, DELETE /api/cart/<id>"""

    @method_decorator(login_required_json)
    def put(self, request, item_id):
        form = CartQuantityForm(load_json_body(request))
        if not form.is_valid():
            raise InvalidRequest("Quantity must be at least 1", errors=form_errors(form))

        item = services.update_cart_item(request.user, item_id, form.cleaned_data["quantity"])
        return JsonResponse(serialize_cart_item(item))

    @method_decorator(login_required_json)
    def delete(self, request, item_id):
        services.remove_cart_item(request.user, item_id)
        return HttpResponse(status=204)


class OrderListView(View):
    """GET /api/orders lists the user's orders; POST /api/orders checks out the cart."""

    @method_decorator(login_required_json)
    def get(self, request):
        orders = services.get_orders(request.user)
        return JsonResponse([serialize_order(order) for order in orders], safe=False)

    @method_decorator(login_required_json)
    def post(self, request):
        order = services.place_order(request.user)
        return JsonResponse(serialize_order(order), status=201)


class OrderDetailView(View):
    """GET /api/orders/<id> returns the order with its items."""

    @method_decorator(login_required_json)
    def get(self, request, order_id):
        order = services.get_order_for_user(request.user, order_id)
        items = services.get_order_items(order)
        return JsonResponse({
            "order": serialize_order(order),
            "items": [serialize_order_item(item) for item in items],
        })


class AnalyticsView(View):
    """Sales dashboard data.

    GET /api/analytics?days=7

    Returns daily rows for the window, the best-selling products and
    period totals with growth of the second half over the first.
    """

    @method_decorator(admin_required_json)
    def get(self, request):
        days = services.parse_days(request.GET.get("days"))
        rows = services.get_daily_analytics(days)
        best_sellers = services.get_best_selling_products()

        return JsonResponse({
            "days": days,
            "dailyAnalytics": [serialize_daily_analytics(row) for row in rows],
            "bestSellingProducts": [
                {**serialize_product(product), "unitsSold": product.units_sold}
                for product in best_sellers
            ],
            "summary": services.summarize_analytics(rows),
        })
