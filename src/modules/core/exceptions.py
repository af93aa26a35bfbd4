"""Catalog error taxonomy.

Every failure that can reach a client is a ``CatalogError`` carrying an
``ErrorKind`` tag.  The repository raises these at the store boundary and
the credential verifier raises the authentication variants; the
translator in ``modules.core.exception_handler`` matches on ``kind`` only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(str, Enum):
    UNAUTHENTICATED = "Unauthenticated"
    INVALID_CREDENTIAL = "InvalidCredential"
    MALFORMED_IDENTIFIER = "MalformedIdentifier"
    MISSING_FIELDS = "MissingFields"
    VALIDATION_ERROR = "ValidationError"
    DUPLICATE_ENTITY = "DuplicateEntity"
    NOT_FOUND = "NotFound"
    STORE_FAILURE = "StoreFailure"


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation problem."""

    field: str
    message: str

    def as_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


class CatalogError(Exception):
    """Base class for all tagged catalog failures."""

    kind: ErrorKind = ErrorKind.STORE_FAILURE
    default_message = "Internal error."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def payload(self) -> Dict[str, Any]:
        """Structured detail merged into the error envelope."""
        return {}


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


class Unauthenticated(CatalogError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "Authentication credentials were not provided."


class InvalidCredential(CatalogError):
    kind = ErrorKind.INVALID_CREDENTIAL
    default_message = "Invalid or expired token."


# ---------------------------------------------------------------------------
# Request validation
# ---------------------------------------------------------------------------


class MissingFields(CatalogError):
    kind = ErrorKind.MISSING_FIELDS
    default_message = "Required fields are missing."

    def __init__(self, fields: List[str], message: Optional[str] = None) -> None:
        self.fields = list(fields)
        super().__init__(message)

    def payload(self) -> Dict[str, Any]:
        return {"missingFields": self.fields}


class ValidationFailed(CatalogError):
    """Field validation rejected by the DTO layer or by the store."""

    kind = ErrorKind.VALIDATION_ERROR
    default_message = "Validation error."

    def __init__(
        self, errors: List[FieldError], message: Optional[str] = None
    ) -> None:
        self.errors = list(errors)
        super().__init__(message)

    def payload(self) -> Dict[str, Any]:
        return {"validationErrors": [e.as_dict() for e in self.errors]}


# ---------------------------------------------------------------------------
# Store boundary
# ---------------------------------------------------------------------------


class MalformedIdentifier(CatalogError):
    kind = ErrorKind.MALFORMED_IDENTIFIER
    default_message = "Invalid product id."

    def __init__(self, identifier: Any, message: Optional[str] = None) -> None:
        self.identifier = str(identifier)
        super().__init__(message)

    def payload(self) -> Dict[str, Any]:
        return {"id": self.identifier}


class NotFound(CatalogError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Product not found."

    def __init__(self, identifier: Any, message: Optional[str] = None) -> None:
        self.identifier = str(identifier)
        super().__init__(message)

    def payload(self) -> Dict[str, Any]:
        return {"id": self.identifier}


class DuplicateEntity(CatalogError):
    kind = ErrorKind.DUPLICATE_ENTITY
    default_message = "A product with those values already exists."

    def __init__(self, field: str, message: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message)

    def payload(self) -> Dict[str, Any]:
        return {"duplicateField": self.field}


class StoreFailure(CatalogError):
    """Unclassified failure.  ``cause`` is kept for logs, never for clients."""

    kind = ErrorKind.STORE_FAILURE

    def __init__(
        self, message: Optional[str] = None, cause: Optional[BaseException] = None
    ) -> None:
        self.cause = cause
        super().__init__(message)
