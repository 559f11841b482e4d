from aiohttp import web

from social.graze.login.app.config import ProvisioningOutcomeAppKey


async def handle_internal_alive(request: web.Request):
    outcome = request.app[ProvisioningOutcomeAppKey]
    return web.json_response({"status": "alive", "keys": outcome.status.value})
