"""Product model for the catalog.

Field rules enforced by ``full_clean`` (called by the repository before
every save):
- ``name``, ``category``, ``description``, ``image`` and
  ``full_description`` are required and non-empty.
- ``rating`` lies in ``[0, 5]``.
- ``features`` / ``applications`` are lists of strings, never null.
- ``specifications`` is a record with exactly the four specification keys, all
  strings.
"""

from __future__ import annotations

from typing import Any, Dict

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from modules.core.models import BaseModel

DEFAULT_BRAND = "Fester"
DEFAULT_RATING = 5
SPECIFICATION_KEYS = ("presentation", "coverage", "dryingTime", "colors")
LIST_FIELDS = ("features", "applications")


def empty_specifications() -> Dict[str, str]:
    return {key: "" for key in SPECIFICATION_KEYS}


def normalize_specifications(value: Any) -> Any:
    """Fill absent specification keys with ``""``.

    Non-dict values are returned untouched so validation can reject them.
    """
    if value is None:
        return empty_specifications()
    if not isinstance(value, dict):
        return value
    return {**empty_specifications(), **value}


def validate_string_list(value: Any) -> None:
    if not isinstance(value, list):
        raise ValidationError("Must be a list of strings.", code="invalid")
    if not all(isinstance(item, str) for item in value):
        raise ValidationError("Every item must be a string.", code="invalid")


def validate_specifications(value: Any) -> None:
    if not isinstance(value, dict):
        raise ValidationError("Must be an object.", code="invalid")
    unknown = sorted(set(value) - set(SPECIFICATION_KEYS))
    if unknown:
        raise ValidationError(
            "Unknown keys: %(keys)s.", code="invalid", params={"keys": ", ".join(unknown)}
        )
    missing = [key for key in SPECIFICATION_KEYS if key not in value]
    if missing:
        raise ValidationError(
            "Missing keys: %(keys)s.", code="invalid", params={"keys": ", ".join(missing)}
        )
    if not all(isinstance(v, str) for v in value.values()):
        raise ValidationError("Every value must be a string.", code="invalid")


class Product(BaseModel):
    """Catalog product.  Flat entity, no relations."""

    name = models.CharField(max_length=255)
    category = models.CharField(max_length=120)
    description = models.TextField()
    image = models.CharField(max_length=2048)
    brand = models.CharField(max_length=120, default=DEFAULT_BRAND)
    rating = models.FloatField(
        default=DEFAULT_RATING,
        validators=[MinValueValidator(0), MaxValueValidator(5)],
    )
    full_description = models.TextField()
    features = models.JSONField(
        default=list, blank=True, validators=[validate_string_list]
    )
    applications = models.JSONField(
        default=list, blank=True, validators=[validate_string_list]
    )
    specifications = models.JSONField(
        default=empty_specifications, validators=[validate_specifications]
    )

    class Meta:
        db_table = "products"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["-created_at"], name="products_created_at_idx"),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        # clean_fields skips None on blank fields
        errors = {
            name: ValidationError("This field cannot be null.", code="null")
            for name in LIST_FIELDS
            if getattr(self, name) is None
        }
        if errors:
            raise ValidationError(errors)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.name} ({self.category})"
