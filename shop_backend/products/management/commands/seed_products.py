from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from products.models import Category, Product


class Command(BaseCommand):
    help = "Seed demo categories and products for local development"

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding categories and products..."))

        # -------------------------------
        # CATEGORIES
        # -------------------------------
        categories = [
            "Provisions",
            "Toiletries",
            "Stationery",
            "Snacks",
            "Drinks",
        ]

        category_objs = {}
        for name in categories:
            obj, _ = Category.objects.get_or_create(name=name)
            category_objs[name] = obj

        # -------------------------------
        # PRODUCTS
        # -------------------------------
        # (name, category, brand, price, discount, dmc, stock)
        products_data = [
            ("Cornflakes 500g", "Provisions", "Kellogg's", 2300, 0, 200, 40),
            ("Toothpaste 140g", "Toiletries", "Close-Up", 900, 50, 50, 60),
            ("A4 Notebook (80 leaves)", "Stationery", "Campus", 600, 0, 30, 100),
            ("Chin Chin 250g", "Snacks", "Mama's", 700, 100, 40, 35),
            ("Bottled Water (75cl)", "Drinks", "Eva", 250, 0, 20, 120),
        ]

        created = 0
        for name, cat, brand, price, discount, dmc, stock in products_data:
            _, was_created = Product.objects.get_or_create(
                name=name,
                defaults={
                    "category": category_objs[cat],
                    "brand": brand,
                    "price": Decimal(price),
                    "discount": Decimal(discount),
                    "dmc": Decimal(dmc),
                    "stock": stock,
                    "remaining_stock": stock,
                },
            )
            created += int(was_created)

        self.stdout.write(
            self.style.SUCCESS(f"Seeded {created} new products ({len(products_data)} total).")
        )
