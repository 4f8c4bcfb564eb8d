from .blueprint import make_blueprint
from .config import load_client_credentials, load_dotenv_config
from .errors import (
    ConfigurationError,
    MissingCredentialsError,
    MissingVerifierError,
    OAuth1SocialError,
)
from .kv import Cache, FlaskSessionStore, MemoryCache, SessionStore, nocache
from .provider import Provider
from .server import Server
from .types import (
    ClientCredentials,
    ProviderUser,
    TemporaryCredentials,
    TokenCredentials,
    User,
)

__all__ = [
    "Cache",
    "ClientCredentials",
    "ConfigurationError",
    "FlaskSessionStore",
    "MemoryCache",
    "MissingCredentialsError",
    "MissingVerifierError",
    "OAuth1SocialError",
    "Provider",
    "ProviderUser",
    "Server",
    "SessionStore",
    "TemporaryCredentials",
    "TokenCredentials",
    "User",
    "load_client_credentials",
    "load_dotenv_config",
    "make_blueprint",
    "nocache",
]
