"""JSON representations of store models.

Keys are camelCase to match what the browser client consumes. Decimal
amounts are emitted as numbers.
"""

from storefront.core.utils import snake_case_keys


def _money(value):
    return float(value) if value is not None else None


def serialize_category(category):
    return {
        "id": category.pk,
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "imageUrl": category.image_url,
    }


def serialize_product(product):
    return {
        "id": product.pk,
        "name": product.name,
        "slug": product.slug,
        "description": product.description,
        "price": _money(product.price),
        "comparePrice": _money(product.compare_price),
        "categoryId": product.category_id,
        "imageUrl": product.image_url,
        "rating": product.rating,
        "reviewCount": product.review_count,
        "stock": product.stock,
        "tags": product.tags or [],
        "featuredTag": product.featured_tag,
        "isNew": product.is_new,
        "isFeatured": product.is_featured,
        "isBestSeller": product.is_best_seller,
    }


def serialize_cart_item(item, include_product=True):
    data = {
        "id": item.pk,
        "userId": item.user_id,
        "productId": item.product_id,
        "quantity": item.quantity,
    }
    if include_product:
        data["product"] = serialize_product(item.product)
    return data


def serialize_order(order):
    return {
        "id": order.pk,
        "userId": order.user_id,
        "total": _money(order.total),
        "status": order.status,
        "createdAt": order.created_at.isoformat() if order.created_at else None,
    }


def serialize_order_item(item):
    return {
        "id": item.pk,
        "orderId": item.order_id,
        "productId": item.product_id,
        "price": _money(item.price),
        "quantity": item.quantity,
        "product": serialize_product(item.product),
    }


def serialize_daily_analytics(row):
    return {
        "id": row.pk,
        "date": row.date.isoformat(),
        "sales": _money(row.sales),
        "orders": row.orders,
        "customers": row.customers,
    }


def product_payload(data: dict) -> dict:
    """Turn a camelCase product body into ProductForm field names."""
    payload = snake_case_keys(data)
    if "category_id" in payload:
        payload.setdefault("category", payload.pop("category_id"))
    return payload
