"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that domain-specific
repository interfaces extend.  Service-layer code depends on this
abstraction, never on Django ORM directly.

Implementations report failures only through the tagged
``modules.core.exceptions.CatalogError`` variants.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, List, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Product``).
    """

    @abstractmethod
    def get_by_id(self, id: str) -> T:
        """Retrieve an entity by its primary key.

        Raises ``MalformedIdentifier`` or ``NotFound``.
        """

    @abstractmethod
    def list(self) -> List[T]:
        """List all entities, newest first."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Validate and persist (create or update) an entity."""

    @abstractmethod
    def delete(self, entity: T) -> None:
        """Permanently remove an entity."""
