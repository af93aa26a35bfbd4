"""Request payload validation and mapping.

Turns raw request bodies into product DTOs, raising the tagged catalog
errors on failure:

- ``MissingFields`` when required fields are absent or falsy (create).
- ``ValidationFailed`` when the body is not an object or a field has the
  wrong type; every offending field is reported, not only the first.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from pydantic import ValidationError as PydanticValidationError

from modules.core.exceptions import FieldError, MissingFields, ValidationFailed
from modules.products.dtos import API_FIELD_NAMES, CreateProductDTO, UpdateProductDTO

REQUIRED_FIELDS = ("name", "category", "description", "image", "fullDescription")


def find_missing_fields(payload: Mapping[str, Any]) -> List[str]:
    """Required fields whose value is absent or falsy, in declaration order."""
    return [field for field in REQUIRED_FIELDS if not payload.get(field)]


def field_errors_from_pydantic(exc: PydanticValidationError) -> List[FieldError]:
    errors = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "body"
        errors.append(FieldError(field=field, message=err["msg"]))
    return errors


def ensure_object(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationFailed(
            [FieldError(field="body", message="Request body must be a JSON object.")]
        )
    return dict(payload)


def parse_create_payload(payload: Any) -> CreateProductDTO:
    """Validate a creation body.

    Raises:
        ValidationFailed: body is not an object, or field types are wrong.
        MissingFields: one or more required fields are absent or empty.
    """
    data = ensure_object(payload)
    missing = find_missing_fields(data)
    if missing:
        raise MissingFields(missing)
    try:
        return CreateProductDTO.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationFailed(field_errors_from_pydantic(exc)) from exc


def parse_update_payload(payload: Any) -> UpdateProductDTO:
    """Validate a partial update body.  Unknown keys are ignored.

    Raises:
        ValidationFailed: body is not an object, or field types are wrong.
    """
    data = ensure_object(payload)
    try:
        return UpdateProductDTO.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationFailed(field_errors_from_pydantic(exc)) from exc


def api_field_name(model_field: str) -> str:
    """Map a model attribute to the name clients use."""
    return API_FIELD_NAMES.get(model_field, model_field)
