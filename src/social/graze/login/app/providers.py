"""Login provider metadata.

Providers are read from providers.json and enriched with the URLs the login pages need.
"""

import json
import logging
import os
from typing import Any, Dict, Final, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from social.graze.login.app.config import Settings

logger = logging.getLogger(__name__)

IMAGE_FORMATS: Final = ("svg", "png", "jpg")

TEST_PROVIDER: Final[Dict[str, Any]] = {
    "id": "test",
    "strategy": "test",
    "name": "Test",
    "credentialsNecessary": True,
    "options": {
        "users": [
            {
                "username": "testuser",
                "password": "testtest",
                "displayName": "A Test User",
            }
        ]
    },
}
"""Fixed provider used in the test environment instead of providers.json."""


class Provider(BaseModel):
    """A configured login provider.

    Unknown keys from providers.json are kept so that strategy specific settings survive.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    strategy: str
    name: str
    template: Optional[str] = None
    image: Optional[str] = None
    credentials_necessary: bool = Field(False, alias="credentialsNecessary")
    options: Dict[str, Any] = Field(default_factory=dict)
    login_url: Optional[str] = Field(None, alias="loginURL")
    callback_url: Optional[str] = Field(None, alias="callbackURL")

    def public_dict(self) -> Dict[str, Any]:
        """Serialized form without strategy options, which may contain secrets."""
        return self.model_dump(by_alias=True, exclude={"options"}, exclude_none=True)


def enrich_provider(provider: Provider, base_url: str, static_dir: str) -> Provider:
    """Add login and callback URLs and resolve the provider image URL.

    Without an image, the first existing ``static/<id>.<svg|png|jpg>`` file is used. A
    relative image path is made absolute with the base URL.
    """
    update: Dict[str, Any] = {
        "login_url": f"{base_url}/login/{provider.id}",
        "callback_url": f"{base_url}/login/{provider.id}/return",
    }

    if not provider.image:
        for image_format in IMAGE_FORMATS:
            filename = f"{provider.id}.{image_format}"
            if os.path.exists(os.path.join(static_dir, filename)):
                update["image"] = f"{base_url}/static/{filename}"
                break
    elif not provider.image.startswith("http"):
        update["image"] = f"{base_url}/{provider.image}"

    return provider.model_copy(update=update)


def load_providers(
    settings: Settings, path: str = "providers.json", static_dir: str = "static"
) -> List[Provider]:
    """Load and enrich the provider list.

    A missing or unreadable providers file results in an empty list. In the test
    environment the fixed test provider is returned instead.
    """
    if settings.environment == "test":
        return [Provider.model_validate(TEST_PROVIDER)]

    try:
        with open(path) as fd:
            raw_providers = json.load(fd)
    except FileNotFoundError:
        logger.info("No providers file at %s", path)
        return []
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not load providers from %s: %s", path, e)
        return []

    return [
        enrich_provider(Provider.model_validate(item), settings.base_url, static_dir)
        for item in raw_providers
    ]
