"""Unit tests for ProductService.

Covers:
- create_product: defaults reach the repository.
- apply_update: partial update, null fields, idempotence,
  specifications normalisation.
- get_product / delete_product: lookup errors propagate; delete snapshot.
- list_products: delegation to repository.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from modules.core.exceptions import (
    FieldError,
    MalformedIdentifier,
    NotFound,
    ValidationFailed,
)
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.models import Product
from modules.products.services import DeletedProduct, ProductService

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_product(**overrides) -> Product:
    defaults = {
        "name": "Sealer",
        "category": "walls",
        "description": "d",
        "image": "i",
        "brand": "X",
        "rating": 4,
        "full_description": "fd",
        "features": ["a"],
        "applications": [],
        "specifications": {
            "presentation": "19 L",
            "coverage": "",
            "dryingTime": "",
            "colors": "",
        },
    }
    defaults.update(overrides)
    return Product(**defaults)


@pytest.fixture()
def repo():
    mock = MagicMock()
    mock.save.side_effect = lambda product: product
    return mock


@pytest.fixture()
def service(repo):
    return ProductService(repository=repo)


# ===========================================================================
# create_product
# ===========================================================================


class TestCreateProduct:
    def test_persists_product_with_defaults(self, service, repo):
        dto = CreateProductDTO(
            name="Paint",
            category="wall",
            description="d",
            image="i",
            fullDescription="fd",
        )

        product = service.create_product(dto)

        repo.save.assert_called_once_with(product)
        assert product.brand == "Fester"
        assert product.rating == 5
        assert product.features == []
        assert product.specifications["dryingTime"] == ""
        assert product.full_description == "fd"

    def test_repository_errors_propagate(self, service, repo):
        repo.save.side_effect = RuntimeError("down")
        dto = CreateProductDTO(
            name="n", category="c", description="d", image="i", fullDescription="f"
        )
        with pytest.raises(RuntimeError):
            service.create_product(dto)


# ===========================================================================
# apply_update
# ===========================================================================


class TestApplyUpdate:
    def test_only_supplied_fields_change(self, service, repo):
        product = _make_product()

        result = service.apply_update(product, UpdateProductDTO(name="Y"))

        assert result.updated_fields == ["name"]
        assert result.product.name == "Y"
        assert result.product.brand == "X"
        assert result.product.rating == 4
        repo.get_by_id.assert_not_called()
        repo.save.assert_called_once_with(product)

    def test_null_value_is_written(self, service):
        result = service.apply_update(_make_product(), UpdateProductDTO(brand=None))

        assert result.updated_fields == ["brand"]
        assert result.product.brand is None

    def test_specifications_are_normalised(self, service):
        dto = UpdateProductDTO.model_validate({"specifications": {"colors": "Red"}})

        result = service.apply_update(_make_product(), dto)

        assert result.product.specifications == {
            "presentation": "",
            "coverage": "",
            "dryingTime": "",
            "colors": "Red",
        }

    def test_null_specifications_reset_to_empty_record(self, service):
        dto = UpdateProductDTO.model_validate({"specifications": None})

        result = service.apply_update(_make_product(), dto)

        assert result.updated_fields == ["specifications"]
        assert result.product.specifications == {
            "presentation": "",
            "coverage": "",
            "dryingTime": "",
            "colors": "",
        }

    def test_full_description_uses_model_attribute(self, service):
        dto = UpdateProductDTO.model_validate({"fullDescription": "new"})

        result = service.apply_update(_make_product(), dto)

        assert result.updated_fields == ["fullDescription"]
        assert result.product.full_description == "new"

    def test_same_update_twice_is_idempotent(self, service):
        product = _make_product()
        dto = UpdateProductDTO(name="Twice", features=["x"])

        first = service.apply_update(product, dto)
        snapshot = (product.name, list(product.features), product.brand)
        second = service.apply_update(product, dto)

        assert first.updated_fields == second.updated_fields
        assert (product.name, product.features, product.brand) == snapshot

    def test_empty_update_still_saves(self, service, repo):
        result = service.apply_update(_make_product(), UpdateProductDTO())

        assert result.updated_fields == []
        repo.save.assert_called_once()

    def test_repository_errors_propagate(self, service, repo):
        repo.save.side_effect = ValidationFailed([FieldError("features", "null")])

        with pytest.raises(ValidationFailed):
            service.apply_update(_make_product(), UpdateProductDTO(features=None))


# ===========================================================================
# get_product / list_products
# ===========================================================================


class TestQueries:
    def test_get_product(self, service, repo):
        product = _make_product()
        repo.get_by_id.return_value = product
        assert service.get_product("id") is product

    def test_get_product_malformed_id(self, service, repo):
        repo.get_by_id.side_effect = MalformedIdentifier("bad")
        with pytest.raises(MalformedIdentifier):
            service.get_product("bad")

    def test_list_delegates(self, service, repo):
        products = [_make_product(name="a"), _make_product(name="b")]
        repo.list.return_value = products
        assert service.list_products() == products
        repo.list.assert_called_once_with()


# ===========================================================================
# delete_product
# ===========================================================================


class TestDeleteProduct:
    def test_returns_snapshot_before_delete(self, service, repo):
        product = _make_product()
        product_id = str(product.id)
        repo.get_by_id.return_value = product

        snapshot = service.delete_product(product_id)

        assert snapshot == DeletedProduct(id=product_id, name="Sealer", category="walls")
        repo.delete.assert_called_once_with(product)

    def test_not_found_deletes_nothing(self, service, repo):
        repo.get_by_id.side_effect = NotFound("gone")

        with pytest.raises(NotFound):
            service.delete_product("gone")
        repo.delete.assert_not_called()
