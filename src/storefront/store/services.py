"""Store service layer.

Every catalogue, cart, order and analytics operation lives here.
Views should call these functions instead of manipulating models directly.
Failures are raised as ApiError subclasses from .exceptions.
"""

import logging
from datetime import timedelta
from decimal import Decimal

from django.core.cache import cache
from django.db import transaction
from django.db.models import F, Q, Sum
from django.forms.models import model_to_dict
from django.utils import timezone

from storefront.core.utils import form_errors

from .conf import get_setting
from .exceptions import (
    CartItemNotFound,
    CategoryNotFound,
    EmptyCart,
    Forbidden,
    InsufficientStock,
    InvalidRequest,
    OrderNotFound,
    ProductNotFound,
)
from .forms import CategoryForm, ProductForm
from .models import CartItem, Category, DailyAnalytics, Order, OrderItem, Product

logger = logging.getLogger(__name__)

CATEGORY_CACHE_KEY = "store:categories"

SORT_OPTIONS = {
    "popularity": ("-review_count", "id"),
    "price-low-high": ("price", "id"),
    "price-high-low": ("-price", "id"),
    "newest": ("-is_new", "-created_at", "-id"),
    "rating": ("-rating", "id"),
}
DEFAULT_SORT = "popularity"

AVAILABILITY_IN_STOCK = "in-stock"
AVAILABILITY_OUT_OF_STOCK = "out-of-stock"


# =============================================================================
# Categories
# =============================================================================


def list_categories() -> list[Category]:
    """All categories, served from the cache when possible."""
    categories = cache.get(CATEGORY_CACHE_KEY)
    if categories is None:
        categories = list(Category.objects.all())
        cache.set(CATEGORY_CACHE_KEY, categories, get_setting("CATEGORY_CACHE_TIMEOUT"))
    return categories


def invalidate_category_cache():
    cache.delete(CATEGORY_CACHE_KEY)


def get_category_by_slug(slug: str) -> Category:
    try:
        return Category.objects.get(slug=slug)
    except Category.DoesNotExist:
        raise CategoryNotFound()


def create_category(data: dict) -> Category:
    """Create a category from validated form data.

    Raises:
        InvalidRequest: If the data does not validate
    """
    form = CategoryForm(data)
    if not form.is_valid():
        raise InvalidRequest("Invalid category", errors=form_errors(form))
    category = form.save()
    logger.info("Created category %s", category.slug)
    return category


# =============================================================================
# Products
# =============================================================================


def _parse_decimal(value, name):
    try:
        amount = Decimal(str(value))
    except ArithmeticError:
        raise InvalidRequest(f"Invalid {name}")
    if not amount.is_finite():
        raise InvalidRequest(f"Invalid {name}")
    return amount


def list_products(
    category: str = None,
    featured: str = None,
    search: str = None,
    min_price=None,
    max_price=None,
    tags: list[str] = None,
    availability: str = None,
    sort: str = None,
):
    """Filter and sort the catalogue.

    All filters compose. Search matches the name or the description,
    case-insensitively.

    Args:
        category: Category slug; an unknown slug raises CategoryNotFound
        featured: "true" for featured products, "new" for new arrivals
        search: Substring to look for in name or description
        min_price: Lowest price to include
        max_price: Highest price to include
        tags: Keep products carrying any of these tags
        availability: "in-stock" or "out-of-stock"
        sort: One of SORT_OPTIONS; defaults to popularity (review count)

    Returns:
        A list of Product instances
    """
    queryset = Product.objects.all()

    if category:
        queryset = queryset.filter(category=get_category_by_slug(category))

    if featured == "true":
        queryset = queryset.filter(is_featured=True)
    elif featured == "new":
        queryset = queryset.filter(is_new=True)

    if search:
        queryset = queryset.filter(Q(name__icontains=search) | Q(description__icontains=search))

    if min_price not in (None, ""):
        queryset = queryset.filter(price__gte=_parse_decimal(min_price, "minPrice"))
    if max_price not in (None, ""):
        queryset = queryset.filter(price__lte=_parse_decimal(max_price, "maxPrice"))

    if availability == AVAILABILITY_IN_STOCK:
        queryset = queryset.filter(stock__gt=0)
    elif availability == AVAILABILITY_OUT_OF_STOCK:
        queryset = queryset.filter(stock=0)

    ordering = SORT_OPTIONS.get(sort or DEFAULT_SORT, SORT_OPTIONS[DEFAULT_SORT])
    products = list(queryset.order_by(*ordering))

    # Tag membership is checked in Python; JSON containment lookups differ per backend
    if tags:
        wanted = set(tags)
        products = [product for product in products if wanted.intersection(product.tags or [])]

    return products


def get_product(product_id: int) -> Product:
    try:
        return Product.objects.get(pk=product_id)
    except Product.DoesNotExist:
        raise ProductNotFound()


def get_product_by_slug(slug: str) -> Product:
    try:
        return Product.objects.get(slug=slug)
    except Product.DoesNotExist:
        raise ProductNotFound()


def create_product(data: dict) -> Product:
    """Create a product from ProductForm field data.

    Raises:
        InvalidRequest: If the data does not validate
    """
    form = ProductForm(data)
    if not form.is_valid():
        raise InvalidRequest("Invalid product", errors=form_errors(form))
    product = form.save()
    logger.info("Created product %s", product.slug)
    return product


def update_product(product: Product, changes: dict) -> Product:
    """Apply a partial update; fields absent from ``changes`` keep their values.

    Raises:
        InvalidRequest: If the merged data does not validate
    """
    data = model_to_dict(product, fields=ProductForm.Meta.fields)
    data.update(changes)
    form = ProductForm(data, instance=product)
    if not form.is_valid():
        raise InvalidRequest("Invalid product", errors=form_errors(form))
    return form.save()


# =============================================================================
# Cart
# =============================================================================


def get_cart_items(user) -> list[CartItem]:
    """The user's cart lines with their products loaded."""
    return list(CartItem.objects.filter(user=user).select_related("product"))


def get_cart_item_for_user(user, item_id: int) -> CartItem:
    """Fetch a cart line, checking it belongs to ``user``.

    Raises:
        CartItemNotFound: No such line
        Forbidden: The line belongs to someone else
    """
    try:
        item = CartItem.objects.select_related("product").get(pk=item_id)
    except CartItem.DoesNotExist:
        raise CartItemNotFound()
    if item.user_id != user.pk:
        raise Forbidden()
    return item


def _check_stock(product: Product, quantity: int):
    if product.stock < quantity:
        logger.info(
            "Rejected quantity %s for product %s with stock %s",
            quantity,
            product.pk,
            product.stock,
        )
        raise InsufficientStock(product=product, requested=quantity)


def add_to_cart(user, product_id: int, quantity: int = 1) -> tuple[CartItem, bool]:
    """Add a product to the cart, merging with an existing line.

    Returns:
        (cart_item, created) where created is False when an existing line's
        quantity was incremented

    Raises:
        ProductNotFound: Unknown product
        InsufficientStock: Stock cannot cover the resulting quantity
    """
    product = get_product(product_id)
    _check_stock(product, quantity)

    item = CartItem.objects.filter(user=user, product=product).first()
    if item is None:
        item = CartItem.objects.create(user=user, product=product, quantity=quantity)
        return item, True

    new_quantity = item.quantity + quantity
    _check_stock(product, new_quantity)
    item.quantity = new_quantity
    item.save(update_fields=["quantity", "updated_at"])
    return item, False


def update_cart_item(user, item_id: int, quantity: int) -> CartItem:
    """Set the quantity of one of the user's cart lines."""
    item = get_cart_item_for_user(user, item_id)
    _check_stock(item.product, quantity)
    item.quantity = quantity
    item.save(update_fields=["quantity", "updated_at"])
    return item


def remove_cart_item(user, item_id: int):
    item = get_cart_item_for_user(user, item_id)
    item.delete()


def clear_cart(user) -> int:
    """Delete every line in the user's cart; returns the number removed."""
    deleted, _ = CartItem.objects.filter(user=user).delete()
    return deleted


# =============================================================================
# Orders
# =============================================================================


@transaction.atomic
def place_order(user) -> Order:
    """Turn the user's cart into an order.

    Locks the products being bought, verifies stock for every line, then
    creates the order and its item snapshots, decrements stock, empties the
    cart and updates today's analytics. Any failure rolls everything back.

    Raises:
        EmptyCart: The cart has no lines
        InsufficientStock: A line asks for more than is in stock
    """
    lines = list(CartItem.objects.filter(user=user).order_by("product_id"))
    if not lines:
        raise EmptyCart()

    products = Product.objects.select_for_update().in_bulk([line.product_id for line in lines])

    total = Decimal("0")
    for line in lines:
        product = products[line.product_id]
        _check_stock(product, line.quantity)
        total += product.price * line.quantity

    order = Order.objects.create(user=user, total=total, status=Order.Status.PENDING)
    OrderItem.objects.bulk_create([
        OrderItem(
            order=order,
            product=products[line.product_id],
            price=products[line.product_id].price,
            quantity=line.quantity,
        )
        for line in lines
    ])

    for line in lines:
        Product.objects.filter(pk=line.product_id).update(stock=F("stock") - line.quantity)

    CartItem.objects.filter(pk__in=[line.pk for line in lines]).delete()

    record_order_analytics(order)

    logger.info("Order %s placed by user %s for %s", order.pk, user.pk, total)
    return order


def get_orders(user) -> list[Order]:
    """The user's orders, newest first."""
    return list(Order.objects.filter(user=user))


def get_order_for_user(user, order_id: int) -> Order:
    """Fetch an order visible to ``user`` (its owner or an admin).

    Raises:
        OrderNotFound: No such order
        Forbidden: Neither the owner nor an admin
    """
    try:
        order = Order.objects.get(pk=order_id)
    except Order.DoesNotExist:
        raise OrderNotFound()
    if order.user_id != user.pk and not user.is_admin:
        raise Forbidden()
    return order


def get_order_items(order: Order) -> list[OrderItem]:
    return list(order.items.select_related("product"))


# =============================================================================
# Analytics
# =============================================================================


def upsert_daily_analytics(date=None, sales=None, orders=None, customers=None) -> DailyAnalytics:
    """Create or overwrite the analytics row for ``date`` (default today).

    Values left as None keep what the row already holds.
    """
    date = date or timezone.localdate()
    row, created = DailyAnalytics.objects.get_or_create(date=date)

    update_fields = []
    for field, value in (("sales", sales), ("orders", orders), ("customers", customers)):
        if value is not None:
            setattr(row, field, value)
            update_fields.append(field)
    if update_fields:
        row.save(update_fields=update_fields)

    logger.debug("%s analytics for %s", "Created" if created else "Updated", date)
    return row


def record_order_analytics(order: Order) -> DailyAnalytics:
    """Fold a newly placed order into the analytics row for its day.

    All three counters are incremented; the buyer counts as a new customer
    only on their first order of the day.
    """
    date = timezone.localdate(order.created_at)
    row, _ = DailyAnalytics.objects.get_or_create(date=date)

    returning = (
        Order.objects.filter(user_id=order.user_id, created_at__date=date)
        .exclude(pk=order.pk)
        .exists()
    )
    DailyAnalytics.objects.filter(pk=row.pk).update(
        sales=F("sales") + order.total,
        orders=F("orders") + 1,
        customers=F("customers") + (0 if returning else 1),
    )
    row.refresh_from_db()
    return row


def parse_days(raw) -> int:
    """Window length from the ``days`` query parameter.

    Missing or non-positive values fall back to the configured default; large
    values are capped.
    """
    default = get_setting("ANALYTICS_DEFAULT_DAYS")
    try:
        days = int(raw)
    except (TypeError, ValueError):
        return default
    if days <= 0:
        return default
    return min(days, get_setting("ANALYTICS_MAX_DAYS"))


def get_daily_analytics(days: int) -> list[DailyAnalytics]:
    """Analytics rows for the last ``days`` days including today, oldest first."""
    start = timezone.localdate() - timedelta(days=days - 1)
    return list(DailyAnalytics.objects.filter(date__gte=start).order_by("date"))


def get_best_selling_products(limit: int = None) -> list[Product]:
    """Products ranked by units sold across all orders."""
    limit = limit or get_setting("BEST_SELLERS_LIMIT")
    return list(
        Product.objects.annotate(units_sold=Sum("order_items__quantity"))
        .filter(units_sold__gt=0)
        .order_by("-units_sold", "id")[:limit]
    )


def _growth(recent, previous) -> float:
    if not previous:
        return 0.0
    return float((recent - previous) / previous * 100)


def summarize_analytics(rows: list[DailyAnalytics]) -> dict:
    """Totals over the window plus growth of its second half over its first."""
    midpoint = len(rows) // 2
    previous, recent = rows[:midpoint], rows[midpoint:]

    def total(period, field):
        return sum((getattr(row, field) for row in period), Decimal("0"))

    return {
        "totalSales": float(total(rows, "sales")),
        "totalOrders": int(total(rows, "orders")),
        "totalCustomers": int(total(rows, "customers")),
        "salesGrowth": round(_growth(total(recent, "sales"), total(previous, "sales")), 2),
        "ordersGrowth": round(_growth(total(recent, "orders"), total(previous, "orders")), 2),
        "customersGrowth": round(_growth(total(recent, "customers"), total(previous, "customers")), 2),
    }
