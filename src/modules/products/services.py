"""Product service layer (Use Cases).

Orchestrates the Product operations, delegating persistence to the
injected ``IProductRepository``.  Failures surface as the tagged catalog
errors raised by the repository; nothing is retried.

Update and delete are a load-then-write sequence without optimistic or
pessimistic locking: concurrent updates of the same product may race and
the last write wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List

import structlog

from modules.products.models import Product, normalize_specifications

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class UpdateResult:
    product: Product
    updated_fields: List[str]


@dataclass(frozen=True)
class DeletedProduct:
    """Snapshot of a product taken before it was removed."""

    id: str
    name: str
    category: str


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: CreateProductDTO) -> Product:
        """Build a product from a validated DTO and persist it."""
        product = Product(**dto.to_model_fields())
        product = self._repo.save(product)
        logger.info("product.created", product_id=str(product.id), name=product.name)
        return product

    def apply_update(self, product: Product, dto: UpdateProductDTO) -> UpdateResult:
        """Overwrite the fields present in ``dto`` on a loaded product.

        Fields absent from ``dto`` keep their current values; ``updated_fields``
        lists the supplied ones in allow-list order.
        """
        log = logger.bind(product_id=str(product.id))

        updated_fields = dto.supplied_fields()
        for attr, value in dto.changes().items():
            if attr == "specifications":
                value = normalize_specifications(value)
            setattr(product, attr, value)

        log.info("product.applying_update", updated_fields=updated_fields)
        product = self._repo.save(product)
        log.info("product.updated")
        return UpdateResult(product=product, updated_fields=updated_fields)

    def delete_product(self, id: str) -> DeletedProduct:
        """Remove a product unconditionally once it is found.

        Raises:
            MalformedIdentifier, NotFound: from the lookup.
        """
        product = self._repo.get_by_id(id)
        snapshot = DeletedProduct(
            id=str(product.id), name=product.name, category=product.category
        )
        self._repo.delete(product)
        logger.info("product.removed", product_id=snapshot.id, name=snapshot.name)
        return snapshot

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> List[Product]:
        """Return every product, newest first."""
        return self._repo.list()

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            MalformedIdentifier, NotFound: from the lookup.
        """
        product = self._repo.get_by_id(id)
        logger.info("product.retrieved", product_id=str(id))
        return product
