"""Unit tests for the error translator.

Covers:
- Status table is total over ErrorKind.
- Payload merging for each tagged error.
- Unclassified failures: generic message, details only in debug.
- DRF exception mapping (parse errors, auth, method not allowed).
"""

from __future__ import annotations

import pytest
from rest_framework import exceptions

from modules.core.exception_handler import (
    AUTHENTICATE_HEADER,
    STATUS_BY_KIND,
    catalog_exception_handler,
    translate,
)
from modules.core.exceptions import (
    DuplicateEntity,
    ErrorKind,
    FieldError,
    InvalidCredential,
    MalformedIdentifier,
    MissingFields,
    NotFound,
    StoreFailure,
    Unauthenticated,
    ValidationFailed,
)

pytestmark = pytest.mark.unit


# ===========================================================================
# translate
# ===========================================================================


class TestTranslate:
    def test_every_kind_has_a_status(self):
        assert set(STATUS_BY_KIND) == set(ErrorKind)

    @pytest.mark.parametrize(
        "exc,status,extra",
        [
            (Unauthenticated(), 401, {}),
            (InvalidCredential(), 403, {}),
            (MalformedIdentifier("x"), 400, {"id": "x"}),
            (MissingFields(["name"]), 400, {"missingFields": ["name"]}),
            (
                ValidationFailed([FieldError("rating", "bad")]),
                400,
                {"validationErrors": [{"field": "rating", "message": "bad"}]},
            ),
            (DuplicateEntity("name"), 400, {"duplicateField": "name"}),
            (NotFound("abc"), 404, {"id": "abc"}),
        ],
    )
    def test_tagged_errors(self, exc, status, extra):
        error = translate(exc, debug=False)
        assert error.status == status
        assert error.body == {
            "success": False,
            "error": exc.kind.value,
            "message": exc.message,
            **extra,
        }

    def test_unauthenticated_sets_challenge_header(self):
        error = translate(Unauthenticated(), debug=False)
        assert error.headers == {"WWW-Authenticate": AUTHENTICATE_HEADER}

    def test_invalid_credential_has_no_challenge(self):
        assert translate(InvalidCredential(), debug=False).headers == {}

    def test_store_failure_hides_details(self):
        exc = StoreFailure(cause=RuntimeError("connection refused"))
        error = translate(exc, failure_message="Failed to fetch products.", debug=False)
        assert error.status == 500
        assert error.body == {
            "success": False,
            "error": "StoreFailure",
            "message": "Failed to fetch products.",
        }

    def test_store_failure_details_in_debug(self):
        exc = StoreFailure(cause=RuntimeError("connection refused"))
        error = translate(exc, debug=True)
        assert error.body["details"] == "connection refused"

    def test_unclassified_exception_is_store_failure(self):
        error = translate(KeyError("k"), failure_message="Failed.", debug=False)
        assert error.status == 500
        assert error.body["error"] == "StoreFailure"
        assert error.body["message"] == "Failed."

    def test_debug_defaults_to_settings(self, settings):
        settings.DEBUG = True
        error = translate(ValueError("oops"))
        assert error.body["details"] == "oops"


# ===========================================================================
# catalog_exception_handler
# ===========================================================================


class TestCatalogExceptionHandler:
    def test_catalog_error(self):
        response = catalog_exception_handler(NotFound("x"), {})
        assert response.status_code == 404
        assert response.data["error"] == "NotFound"

    def test_parse_error(self):
        response = catalog_exception_handler(exceptions.ParseError("bad json"), {})
        assert response.status_code == 400
        assert response.data["error"] == "ValidationError"
        assert response.data["validationErrors"][0]["field"] == "body"

    def test_not_authenticated(self):
        response = catalog_exception_handler(exceptions.NotAuthenticated(), {})
        assert response.status_code == 401
        assert response["WWW-Authenticate"] == AUTHENTICATE_HEADER

    def test_authentication_failed(self):
        response = catalog_exception_handler(
            exceptions.AuthenticationFailed("nope"), {}
        )
        assert response.status_code == 403
        assert response.data["error"] == "InvalidCredential"

    def test_method_not_allowed(self):
        response = catalog_exception_handler(exceptions.MethodNotAllowed("PATCH"), {})
        assert response.status_code == 405
        assert response.data == {
            "success": False,
            "error": "MethodNotAllowed",
            "message": 'Method "PATCH" not allowed.',
        }

    def test_unknown_exception(self, settings):
        settings.DEBUG = False
        response = catalog_exception_handler(RuntimeError("boom"), {})
        assert response.status_code == 500
        assert response.data["error"] == "StoreFailure"
        assert "details" not in response.data
