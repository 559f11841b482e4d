import logging
from typing import Any, Dict, List

from aiohttp import web

from social.graze.login.app.config import (
    ProvidersAppKey,
    SettingsAppKey,
    TokenIssuerAppKey,
)

logger = logging.getLogger(__name__)


def _public_key_text(request: web.Request) -> str:
    return request.app[TokenIssuerAppKey].public_pem()


async def handle_public_key(request: web.Request):
    """
    Handle public key request.

    Returns the PEM encoded public key and the algorithm that session tokens are signed
    with, so that other services can verify tokens issued by this server.
    """
    settings = request.app[SettingsAppKey]
    return web.json_response(
        {
            "publicKey": _public_key_text(request),
            "algorithm": settings.jwt_algorithm,
        }
    )


async def handle_jwks(request: web.Request):
    """
    Handle JWKS (JSON Web Key Set) endpoint request.

    Returns a JWKS document containing the public portion of the signing key.
    """
    token_issuer = request.app[TokenIssuerAppKey]
    return web.json_response({"keys": [token_issuer.public_jwk()]})


async def handle_providers(request: web.Request):
    providers: List[Dict[str, Any]] = [
        provider.public_dict() for provider in request.app[ProvidersAppKey]
    ]
    return web.json_response(providers)


async def handle_about(request: web.Request):
    settings = request.app[SettingsAppKey]
    return web.json_response(
        {
            "title": settings.title,
            "env": settings.environment,
            "publicKey": _public_key_text(request),
            "algorithm": settings.jwt_algorithm,
            "providers": [
                provider.public_dict() for provider in request.app[ProvidersAppKey]
            ],
        }
    )
