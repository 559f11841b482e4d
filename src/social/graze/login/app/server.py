import logging
from typing import List, Optional

from aiohttp import web
import sentry_sdk
from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from social.graze.login.app.config import (
    ProvidersAppKey,
    ProvisioningOutcomeAppKey,
    Settings,
    SettingsAppKey,
    TokenIssuerAppKey,
)
from social.graze.login.app.handlers.internal import handle_internal_alive
from social.graze.login.app.handlers.keys import (
    handle_about,
    handle_jwks,
    handle_providers,
    handle_public_key,
)
from social.graze.login.app.providers import Provider, load_providers
from social.graze.login.keys.model import ProvisioningOutcome
from social.graze.login.tokens import TokenIssuer

logger = logging.getLogger(__name__)


@web.middleware
async def sentry_middleware(request: web.Request, handler):
    try:
        response = await handler(request)
        return response
    except web.HTTPException:
        raise
    except Exception as e:
        sentry_sdk.capture_exception(e)
        raise e


async def start_web_server(
    settings: Settings,
    outcome: ProvisioningOutcome,
    providers: Optional[List[Provider]] = None,
):
    """Build the web application around an already resolved keypair."""

    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            send_default_pii=False,
            integrations=[AioHttpIntegration()],
        )
    app = web.Application(middlewares=[sentry_middleware])

    if providers is None:
        providers = load_providers(settings)

    app[SettingsAppKey] = settings
    app[ProvisioningOutcomeAppKey] = outcome
    app[TokenIssuerAppKey] = TokenIssuer(outcome.material, settings.signing_options)
    app[ProvidersAppKey] = providers

    logger.info("Allowed origins: %s", ", ".join(settings.origins))

    app.add_routes([web.get("/.well-known/jwks.json", handle_jwks)])

    app.add_routes(
        [
            web.get("/publicKey", handle_public_key),
            web.get("/about", handle_about),
            web.get("/providers", handle_providers),
        ]
    )

    app.add_routes([web.get("/internal/alive", handle_internal_alive)])

    return app
