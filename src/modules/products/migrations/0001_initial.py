import django.core.validators
import uuid6
from django.db import migrations, models

import modules.products.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255)),
                ("category", models.CharField(max_length=120)),
                ("description", models.TextField()),
                ("image", models.CharField(max_length=2048)),
                ("brand", models.CharField(default="Fester", max_length=120)),
                (
                    "rating",
                    models.FloatField(
                        default=5,
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(5),
                        ],
                    ),
                ),
                ("full_description", models.TextField()),
                (
                    "features",
                    models.JSONField(
                        blank=True,
                        default=list,
                        validators=[modules.products.models.validate_string_list],
                    ),
                ),
                (
                    "applications",
                    models.JSONField(
                        blank=True,
                        default=list,
                        validators=[modules.products.models.validate_string_list],
                    ),
                ),
                (
                    "specifications",
                    models.JSONField(
                        default=modules.products.models.empty_specifications,
                        validators=[modules.products.models.validate_specifications],
                    ),
                ),
            ],
            options={
                "db_table": "products",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(
                        fields=["-created_at"], name="products_created_at_idx"
                    )
                ],
            },
        ),
    ]
