"""OpenAPI descriptions for the catalog's custom DRF classes."""

from drf_spectacular.extensions import OpenApiAuthenticationExtension

BEARER_SCHEME = "BearerAuth"


class BearerTokenScheme(OpenApiAuthenticationExtension):
    target_class = "modules.core.authentication.BearerTokenAuthentication"
    name = BEARER_SCHEME

    def get_security_definition(self, auto_schema):
        return {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}
