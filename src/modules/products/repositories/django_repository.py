"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.  This is
the store-client boundary: ORM and database exceptions never leave this
module.  They are mapped to the tagged catalog errors instead:

- invalid UUID                  -> ``MalformedIdentifier``
- no row                        -> ``NotFound``
- ``full_clean`` field errors   -> ``ValidationFailed``
- ``unique`` violations         -> ``DuplicateEntity``
- any other database error      -> ``StoreFailure``
"""

from __future__ import annotations

import re
from typing import List, Optional

import structlog
from django.core.exceptions import NON_FIELD_ERRORS, ValidationError
from django.db import DatabaseError, IntegrityError, transaction

from modules.core.exceptions import (
    CatalogError,
    DuplicateEntity,
    FieldError,
    MalformedIdentifier,
    NotFound,
    StoreFailure,
    ValidationFailed,
)
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository
from modules.products.validation import api_field_name

logger = structlog.get_logger(__name__)

# SQLite: "UNIQUE constraint failed: products.name"
# PostgreSQL: 'duplicate key value violates unique constraint ... Key (name)=(x)'
_UNIQUE_COLUMN = re.compile(
    r"UNIQUE constraint failed: \w+\.(?P<sqlite>\w+)|Key \((?P<pg>\w+)\)="
)


def duplicate_field_from(exc: IntegrityError) -> Optional[str]:
    """Column named by a uniqueness violation, or ``None`` for other integrity errors."""
    match = _UNIQUE_COLUMN.search(str(exc))
    if not match:
        return None
    return api_field_name(match.group("sqlite") or match.group("pg"))


def translate_validation_error(exc: ValidationError) -> CatalogError:
    """Map a ``full_clean`` failure to ``DuplicateEntity`` or ``ValidationFailed``."""
    error_dict = getattr(exc, "error_dict", None) or {NON_FIELD_ERRORS: exc.error_list}

    for field, errors in error_dict.items():
        if any(err.code == "unique" for err in errors):
            return DuplicateEntity(api_field_name(field))

    field_errors = []
    for field, errors in error_dict.items():
        name = "product" if field == NON_FIELD_ERRORS else api_field_name(field)
        for message in ValidationError(errors).messages:
            field_errors.append(FieldError(field=name, message=message))
    return ValidationFailed(field_errors)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Product:
        """Retrieve a product by primary key.

        Raises:
            MalformedIdentifier: ``id`` is not a UUID.
            NotFound: no product with that id.
            StoreFailure: the database failed.
        """
        try:
            product = Product.objects.filter(id=id).first()
        except (ValueError, ValidationError) as exc:
            raise MalformedIdentifier(id) from exc
        except DatabaseError as exc:
            raise StoreFailure(cause=exc) from exc
        if product is None:
            raise NotFound(id)
        return product

    def list(self) -> List[Product]:
        """All products, newest first."""
        try:
            return list(Product.objects.order_by("-created_at", "-id"))
        except DatabaseError as exc:
            raise StoreFailure(cause=exc) from exc

    def save(self, entity: Product) -> Product:
        """Validate every field, then persist (create or update).

        All field errors are collected before anything is written.
        """
        try:
            entity.full_clean()
        except ValidationError as exc:
            error = translate_validation_error(exc)
            logger.warning("product.validation_failed", error_kind=error.kind.value)
            raise error from exc

        try:
            with transaction.atomic():
                entity.save()
        except IntegrityError as exc:
            field = duplicate_field_from(exc)
            if field is None:
                raise StoreFailure(cause=exc) from exc
            raise DuplicateEntity(field) from exc
        except DatabaseError as exc:
            raise StoreFailure(cause=exc) from exc

        logger.debug("product.saved", product_id=str(entity.id))
        return entity

    def delete(self, entity: Product) -> None:
        """Permanently delete ``entity``."""
        product_id = str(entity.pk)
        try:
            with transaction.atomic():
                entity.delete()
        except DatabaseError as exc:
            raise StoreFailure(cause=exc) from exc
        logger.debug("product.deleted", product_id=product_id)
