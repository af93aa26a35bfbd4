from __future__ import annotations

from django.core.management.base import BaseCommand

from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService
from modules.products.validation import parse_create_payload

SEED_PRODUCTS = [
    {
        "name": "Fester Impermeabilizante Acrílico",
        "category": "roofs",
        "description": "Acrylic waterproofing for roofs.",
        "image": "/images/products/acrilico.png",
        "fullDescription": "Elastomeric acrylic coating for concrete roofs.",
        "rating": 4.8,
        "features": ["Elastic", "UV resistant"],
        "applications": ["Concrete roofs", "Terraces"],
        "specifications": {
            "presentation": "19 L bucket",
            "coverage": "1 L/m2 in two coats",
            "dryingTime": "4 h",
            "colors": "White, red",
        },
    },
    {
        "name": "Fester Sellador Vinílico",
        "category": "walls",
        "description": "Vinyl primer for porous surfaces.",
        "image": "/images/products/sellador.png",
        "fullDescription": "Primer that seals porous walls before painting.",
        "features": ["Water based"],
        "applications": ["Interior walls", "Exterior walls"],
    },
    {
        "name": "Fester Cementoso",
        "category": "foundations",
        "description": "Cement-based waterproofing.",
        "image": "/images/products/cementoso.png",
        "fullDescription": "Rigid cementitious coating for foundations and tanks.",
        "specifications": {"presentation": "25 kg bag", "colors": "Grey"},
    },
]


class Command(BaseCommand):
    help = "Seed the catalog with a few development products."

    def handle(self, *args, **options):
        self.stdout.write("Seeding products...")
        service = ProductService(repository=ProductDjangoRepository())

        created = 0
        for payload in SEED_PRODUCTS:
            if Product.objects.filter(name=payload["name"]).exists():
                continue
            service.create_product(parse_create_payload(payload))
            created += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: created={created}, "
                f"total={Product.objects.count()}"
            )
        )
