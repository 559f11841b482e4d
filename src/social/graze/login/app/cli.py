import os
import sys
from aiohttp import web
import logging
from logging.config import dictConfig
import json

from pydantic import ValidationError

from social.graze.login.app.config import Settings
from social.graze.login.keys.errors import ProvisioningError
from social.graze.login.keys.model import ProvisioningOutcome
from social.graze.login.keys.provision import KeyProvisioner

logger = logging.getLogger(__name__)


def configure_logging():
    logging_config_file = os.getenv("LOGGING_CONFIG_FILE", "")

    if len(logging_config_file) > 0:
        with open(logging_config_file) as fl:
            dictConfig(json.load(fl))
        return

    logging.basicConfig()
    logging.getLogger().setLevel(logging.DEBUG)


def provision_keys(settings: Settings) -> ProvisioningOutcome:
    provisioner = KeyProvisioner(
        settings.key_paths, settings.signing_options, key_size=settings.jwt_key_size
    )
    return provisioner.resolve()


def invoke():
    configure_logging()

    try:
        settings = Settings()  # type: ignore
    except ValidationError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    try:
        outcome = provision_keys(settings)
    except ProvisioningError as e:
        logger.error("Error: %s", e.message)
        sys.exit(1)

    from social.graze.login.app.server import start_web_server

    web.run_app(start_web_server(settings, outcome), port=settings.http_port)


if __name__ == "__main__":
    invoke()
