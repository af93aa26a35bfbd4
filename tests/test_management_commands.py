from io import StringIO

import jwt as pyjwt
import pytest
from django.core.management import CommandError, call_command

from modules.products.models import Product

pytestmark = pytest.mark.integration


class TestSeedProducts:
    def test_seeds_products(self):
        out = StringIO()
        call_command("seed_products", stdout=out)
        assert Product.objects.count() == 3
        assert "created=3" in out.getvalue()

    def test_second_run_creates_nothing(self):
        call_command("seed_products", stdout=StringIO())
        out = StringIO()
        call_command("seed_products", stdout=out)
        assert Product.objects.count() == 3
        assert "created=0" in out.getvalue()

    def test_defaults_applied(self):
        call_command("seed_products", stdout=StringIO())
        product = Product.objects.get(name="Fester Cementoso")
        assert product.brand == "Fester"
        assert product.specifications["dryingTime"] == ""


class TestIssueToken:
    def test_token_is_accepted_by_api(self, api_client, product_payload):
        out = StringIO()
        call_command("issue_token", "--email", "ops@example.com", stdout=out)
        token = out.getvalue().strip()

        claims = pyjwt.decode(token, options={"verify_signature": False})
        assert claims["email"] == "ops@example.com"

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        response = api_client.post("/api/products", product_payload, format="json")
        assert response.status_code == 201

    def test_refuses_when_jwks_configured(self, settings):
        settings.CATALOG_AUTH = {
            **settings.CATALOG_AUTH,
            "JWKS_URL": "https://idp.example.com/.well-known/jwks.json",
        }
        with pytest.raises(CommandError):
            call_command("issue_token", stdout=StringIO())
