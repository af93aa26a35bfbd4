from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt as pyjwt
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = "Print a signed bearer token for local development."

    def add_arguments(self, parser):
        parser.add_argument("--email", default="dev@example.com")
        parser.add_argument("--minutes", type=int, default=60)

    def handle(self, *args, **options):
        conf = settings.CATALOG_AUTH
        if conf.get("JWKS_URL"):
            raise CommandError(
                "Tokens are issued by the identity provider when JWT_JWKS_URL is set."
            )

        now = datetime.now(tz=timezone.utc)
        claims = {
            "sub": options["email"],
            "email": options["email"],
            "iat": now,
            "exp": now + timedelta(minutes=options["minutes"]),
        }
        if conf.get("AUDIENCE"):
            claims["aud"] = conf["AUDIENCE"]
        if conf.get("ISSUER"):
            claims["iss"] = conf["ISSUER"]

        token = pyjwt.encode(claims, conf["SIGNING_KEY"], algorithm=conf["ALGORITHM"])
        self.stdout.write(token)
