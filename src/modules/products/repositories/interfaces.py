"""Product repository interface.

The service layer only needs the generic operations of
``IRepository[Product]``: find-all, find-by-id, save and delete.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product  # noqa: F401


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product entity."""
