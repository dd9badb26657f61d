from django.contrib import admin

from .conf import get_site_name
from .models import CartItem, Category, DailyAnalytics, Order, OrderItem, Product

admin.site.site_header = f"{get_site_name()} administration"
admin.site.site_title = get_site_name()


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}
    search_fields = ("name",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "stock", "is_new", "is_featured", "is_best_seller")
    list_filter = ("category", "is_new", "is_featured", "is_best_seller")
    list_editable = ("price", "stock")
    prepopulated_fields = {"slug": ("name",)}
    search_fields = ("name", "description")


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ("user", "product", "quantity", "updated_at")
    list_select_related = ("user", "product")


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("product", "price", "quantity")
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "total", "status", "created_at")
    list_filter = ("status",)
    readonly_fields = ("user", "total", "created_at")
    inlines = [OrderItemInline]


@admin.register(DailyAnalytics)
class DailyAnalyticsAdmin(admin.ModelAdmin):
    list_display = ("date", "sales", "orders", "customers")
    date_hierarchy = "date"
