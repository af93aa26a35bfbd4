"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (views) and the Service
layer.  DTOs are immutable (``frozen=True``) and accept the API's
camelCase names (``fullDescription``, ``dryingTime``) as aliases.

- ``CreateProductDTO``: input for product creation, with defaults applied.
- ``UpdateProductDTO``: input for partial updates; remembers which keys
  the client actually sent.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.products.models import DEFAULT_BRAND, DEFAULT_RATING

# Update allow-list, in API names and in the order fields are reported.
UPDATABLE_FIELDS = (
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
)

# API name -> model attribute, where they differ.
MODEL_FIELD_NAMES = {"fullDescription": "full_description"}
API_FIELD_NAMES = {v: k for k, v in MODEL_FIELD_NAMES.items()}


class SpecificationsDTO(BaseModel):
    """The fixed-shape ``specifications`` record.  Absent keys are ``""``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    presentation: str = ""
    coverage: str = ""
    drying_time: str = Field(default="", alias="dryingTime")
    colors: str = ""

    def as_record(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Required-field presence is checked before this DTO is built (see
    ``modules.products.validation``); here only types and defaults apply:
    - ``brand`` falls back to ``"Fester"`` when absent or empty.
    - ``rating`` falls back to ``5`` when absent or null.
    - ``features`` / ``applications`` fall back to ``[]``.
    - ``specifications`` falls back to four empty strings.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    category: str
    description: str
    image: str
    full_description: str = Field(alias="fullDescription")
    brand: str = DEFAULT_BRAND
    rating: float = DEFAULT_RATING
    features: List[str] = Field(default_factory=list)
    applications: List[str] = Field(default_factory=list)
    specifications: SpecificationsDTO = Field(default_factory=SpecificationsDTO)

    @field_validator("brand", mode="before")
    @classmethod
    def brand_default(cls, v: Any) -> Any:
        return v or DEFAULT_BRAND

    @field_validator("rating", mode="before")
    @classmethod
    def rating_default(cls, v: Any) -> Any:
        return DEFAULT_RATING if v is None else v

    @field_validator("features", "applications", mode="before")
    @classmethod
    def list_default(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("specifications", mode="before")
    @classmethod
    def specifications_default(cls, v: Any) -> Any:
        return {} if v is None else v

    def to_model_fields(self) -> Dict[str, Any]:
        """Keyword arguments for ``Product(...)``."""
        return {
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "image": self.image,
            "brand": self.brand,
            "rating": self.rating,
            "full_description": self.full_description,
            "features": list(self.features),
            "applications": list(self.applications),
            "specifications": self.specifications.as_record(),
        }


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional.  A key sent as ``null`` still counts as
    supplied: ``model_fields_set`` is the source of truth, not the value.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    brand: Optional[str] = None
    rating: Optional[float] = None
    full_description: Optional[str] = Field(default=None, alias="fullDescription")
    features: Optional[List[str]] = None
    applications: Optional[List[str]] = None
    specifications: Optional[SpecificationsDTO] = None

    def supplied_fields(self) -> List[str]:
        """API names of the supplied fields, in allow-list order."""
        return [
            api_name
            for api_name in UPDATABLE_FIELDS
            if MODEL_FIELD_NAMES.get(api_name, api_name) in self.model_fields_set
        ]

    def changes(self) -> Dict[str, Any]:
        """``{model_attribute: value}`` for every supplied field."""
        result: Dict[str, Any] = {}
        for api_name in self.supplied_fields():
            attr = MODEL_FIELD_NAMES.get(api_name, api_name)
            value = getattr(self, attr)
            if isinstance(value, SpecificationsDTO):
                value = value.as_record()
            elif isinstance(value, list):
                value = list(value)
            result[attr] = value
        return result
