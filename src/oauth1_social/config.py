from collections.abc import Mapping
from typing import Any

import dotenv

from .errors import ConfigurationError
from .types import ClientCredentials

CLIENT_ID = "OAUTH1_CLIENT_ID"
CLIENT_SECRET = "OAUTH1_CLIENT_SECRET"
CALLBACK_URI = "OAUTH1_CALLBACK_URI"
CACHE_PREFIX_KEY = "OAUTH1_CACHE_PREFIX"


def load_client_credentials(config: Mapping[str, Any]) -> ClientCredentials:
    """Reads the consumer key, secret and callback from a Flask-style config."""

    missing = [
        name for name in (CLIENT_ID, CLIENT_SECRET, CALLBACK_URI) if not config.get(name)
    ]
    if missing:
        raise ConfigurationError(f"missing configuration: {', '.join(missing)}")

    return ClientCredentials(
        identifier=str(config[CLIENT_ID]),
        secret=str(config[CLIENT_SECRET]),
        callback_uri=str(config[CALLBACK_URI]),
    )


def load_dotenv_config(path: str | None = None) -> dict[str, str | None]:
    # strip the FLASK_ prefix, as app.config.from_prefixed_env does
    values = dotenv.dotenv_values(path)
    config: dict[str, str | None] = {}
    for key, value in values.items():
        if key.startswith("FLASK_"):
            key = key[len("FLASK_") :]
        config[key] = value
    return config
