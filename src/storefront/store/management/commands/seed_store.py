"""Management command to seed the sample catalogue and recent analytics."""

import random
from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from storefront.store.models import CartItem, Category, OrderItem, Product
from storefront.store.services import upsert_daily_analytics


CATEGORIES = [
    {
        "name": "Electronics",
        "slug": "electronics",
        "description": "Latest gadgets",
        "image_url": "https://images.unsplash.com/photo-1498049794561-7780e7231661?w=600&h=400&fit=crop",
    },
    {
        "name": "Fashion",
        "slug": "fashion",
        "description": "Trendy styles",
        "image_url": "https://images.unsplash.com/photo-1441984904996-e0b6ba687e04?w=600&h=400&fit=crop",
    },
    {
        "name": "Home & Kitchen",
        "slug": "home-kitchen",
        "description": "For your space",
        "image_url": "https://images.unsplash.com/photo-1583847268964-b28dc8f51f92?w=600&h=400&fit=crop",
    },
    {
        "name": "Beauty & Health",
        "slug": "beauty-health",
        "description": "Self-care essentials",
        "image_url": "https://images.unsplash.com/photo-1571781926291-c477ebfd024b?w=600&h=400&fit=crop",
    },
]


PRODUCTS = [
    {
        "name": "SoundMax Pro Wireless Earbuds",
        "slug": "soundmax-pro-wireless-earbuds",
        "category_slug": "electronics",
        "description": "Noise cancellation, 24h battery",
        "price": "129.99",
        "compare_price": "169.99",
        "image_url": "https://images.unsplash.com/photo-1590658268037-6bf12165a8df?w=600&h=600&fit=crop",
        "rating": 4.5,
        "review_count": 120,
        "stock": 45,
        "tags": ["wireless", "earbuds", "audio"],
        "featured_tag": "New",
        "is_new": True,
        "is_featured": True,
    },
    {
        "name": "FitPro X Smart Watch",
        "slug": "fitpro-x-smart-watch",
        "category_slug": "electronics",
        "description": "Health tracking, GPS, 7-day battery",
        "price": "179.99",
        "compare_price": "229.99",
        "image_url": "https://images.unsplash.com/photo-1579586337278-3befd40fd17a?w=600&h=600&fit=crop",
        "rating": 5,
        "review_count": 248,
        "stock": 32,
        "tags": ["smartwatch", "fitness", "wearable"],
        "featured_tag": "Best Seller",
        "is_featured": True,
        "is_best_seller": True,
    },
    {
        "name": "PowerBoost Wireless Charging Pad",
        "slug": "powerboost-wireless-charging-pad",
        "category_slug": "electronics",
        "description": "Fast charging, LED indicator",
        "price": "39.99",
        "compare_price": "49.99",
        "image_url": "https://images.unsplash.com/photo-1623126908029-58cb08a2b272?w=600&h=600&fit=crop",
        "rating": 4,
        "review_count": 86,
        "stock": 65,
        "tags": ["charger", "wireless", "accessories"],
        "is_featured": True,
    },
    {
        "name": "SoundWave Mini Bluetooth Speaker",
        "slug": "soundwave-mini-bluetooth-speaker",
        "category_slug": "electronics",
        "description": "Waterproof, 12h playtime",
        "price": "59.99",
        "compare_price": "89.99",
        "image_url": "https://images.unsplash.com/photo-1608043152269-423dbba4e7e1?w=600&h=600&fit=crop",
        "rating": 4.5,
        "review_count": 157,
        "stock": 28,
        "tags": ["speaker", "bluetooth", "audio"],
        "is_featured": True,
    },
    {
        "name": "UltraBook Pro X15",
        "slug": "ultrabook-pro-x15",
        "category_slug": "electronics",
        "description": "15\" 4K display, 16GB RAM, 512GB SSD",
        "price": "1299.99",
        "compare_price": "1499.99",
        "image_url": "https://images.unsplash.com/photo-1496181133206-80ce9b88a853?w=600&h=600&fit=crop",
        "rating": 5,
        "review_count": 92,
        "stock": 15,
        "tags": ["laptop", "computer", "productivity"],
        "featured_tag": "New",
        "is_new": True,
    },
    {
        "name": "Florale Summer Dress",
        "slug": "florale-summer-dress",
        "category_slug": "fashion",
        "description": "100% cotton, floral pattern",
        "price": "49.99",
        "compare_price": "69.99",
        "image_url": "https://images.unsplash.com/photo-1548549557-dbe9946621da?w=600&h=600&fit=crop",
        "rating": 4,
        "review_count": 64,
        "stock": 42,
        "tags": ["dress", "summer", "women"],
    },
    {
        "name": "BrewMaster Coffee Maker",
        "slug": "brewmaster-coffee-maker",
        "category_slug": "home-kitchen",
        "description": "Programmable, 12-cup capacity",
        "price": "89.99",
        "compare_price": "119.99",
        "image_url": "https://images.unsplash.com/photo-1495474472287-4d71bcdd2085?w=600&h=600&fit=crop",
        "rating": 4.5,
        "review_count": 127,
        "stock": 0,
        "tags": ["coffee", "kitchen", "appliances"],
        "featured_tag": "Best Seller",
        "is_best_seller": True,
    },
    {
        "name": "NaturalGlow Skincare Set",
        "slug": "naturalglow-skincare-set",
        "category_slug": "beauty-health",
        "description": "Organic ingredients, 5-piece set",
        "price": "79.99",
        "compare_price": "99.99",
        "image_url": "https://images.unsplash.com/photo-1556228578-8c89e6adf883?w=600&h=600&fit=crop",
        "rating": 5,
        "review_count": 215,
        "stock": 22,
        "tags": ["skincare", "beauty", "organic"],
    },
]


class Command(BaseCommand):
    help = "Seed the sample catalogue and the last week of analytics"

    def add_arguments(self, parser):
        parser.add_argument(
            "--clear",
            action="store_true",
            help="Delete existing products and categories before seeding",
        )
        parser.add_argument(
            "--days",
            type=int,
            default=7,
            help="Number of days of sample analytics to generate (default: 7)",
        )
        parser.add_argument(
            "--seed",
            type=int,
            default=None,
            help="Random seed for reproducible analytics figures",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["clear"]:
            self.clear_catalogue()

        categories = self.create_categories()
        self.create_products(categories)
        self.create_analytics(options["days"], options["seed"])

        self.stdout.write(self.style.SUCCESS("Store seeded successfully!"))

    def clear_catalogue(self):
        if OrderItem.objects.exists():
            self.stdout.write(self.style.WARNING(
                "Orders reference existing products; keeping the catalogue"
            ))
            return
        CartItem.objects.all().delete()
        Product.objects.all().delete()
        Category.objects.all().delete()
        self.stdout.write("Cleared existing catalogue")

    def create_categories(self):
        """Create or update store categories."""
        categories = {}
        for data in CATEGORIES:
            category, created = Category.objects.update_or_create(
                slug=data["slug"],
                defaults={
                    "name": data["name"],
                    "description": data["description"],
                    "image_url": data["image_url"],
                },
            )
            categories[data["slug"]] = category
            action = "Created" if created else "Updated"
            self.stdout.write(f"  {action} category: {category.name}")
        return categories

    def create_products(self, categories):
        """Create or update sample products."""
        for data in PRODUCTS:
            fields = dict(data)
            category = categories[fields.pop("category_slug")]
            slug = fields.pop("slug")
            fields["price"] = Decimal(fields["price"])
            fields["compare_price"] = Decimal(fields["compare_price"])

            product, created = Product.objects.update_or_create(
                slug=slug,
                defaults={"category": category, **fields},
            )
            action = "Created" if created else "Updated"
            self.stdout.write(f"  {action} product: {product.name}")

    def create_analytics(self, days, seed):
        """Fill in sample daily figures for the dashboard."""
        rng = random.Random(seed)
        today = timezone.localdate()
        for offset in range(days):
            date = today - timedelta(days=offset)
            upsert_daily_analytics(
                date=date,
                sales=Decimal(rng.randint(1000, 3999)),
                orders=rng.randint(10, 59),
                customers=rng.randint(5, 34),
            )
        self.stdout.write(f"  Generated analytics for {days} days")
