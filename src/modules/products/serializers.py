"""Product DRF serializer for API output.

Input is validated by ``modules.products.validation`` (Pydantic DTOs);
this serializer only renders products with the API's camelCase keys.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read-only representation of the Product resource."""

    fullDescription = serializers.CharField(source="full_description", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "category",
            "description",
            "image",
            "brand",
            "rating",
            "fullDescription",
            "features",
            "applications",
            "specifications",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields
