from logging import getLogger
from typing import Self
from urllib.parse import urlencode

from authlib.common.security import generate_token
from flask import Request, redirect
from werkzeug.wrappers import Response

from .credentials import CacheCredentials, SessionCredentials
from .errors import MissingCredentialsError, MissingVerifierError
from .kv import Cache, SessionStore, nocache
from .server import Server
from .types import ProviderUser, TemporaryCredentials, TokenCredentials, User

logger = getLogger(__name__)

TEMP_ID_PARAM = "tempId"
TEMP_ID_LENGTH = 40
CACHE_PREFIX = "oauth1-temp"


class Provider:
    """Drives the three-legged OAuth 1.0a handshake for one incoming request.

    By default the temporary credentials live in the user's session between
    the redirect and the callback. Stateless providers instead put them in a
    shared cache and correlate the callback through a ``tempId`` query
    parameter appended to the callback URL.
    """

    request: Request
    server: Server

    def __init__(
        self,
        request: Request,
        server: Server,
        sessions: SessionStore,
        cache: Cache = nocache,
        stateless: bool = False,
        cache_prefix: str = CACHE_PREFIX,
    ):
        self.request = request
        self.server = server
        self.session_credentials = SessionCredentials(sessions)
        self.cache_credentials = CacheCredentials(cache, cache_prefix)
        self._stateless = stateless

    def redirect(self) -> Response:
        """Redirects the user to the provider's authorization page."""

        if self._stateless:
            temp_id = generate_token(TEMP_ID_LENGTH)
            callback_uri = _with_temp_id(
                self.server.client_credentials.callback_uri or "", temp_id
            )
            temp = self.server.get_temporary_credentials(callback_uri=callback_uri)
            self.cache_credentials.save(temp_id, temp)
        else:
            temp = self.server.get_temporary_credentials()
            self.session_credentials.save(temp)

        return redirect(self.server.get_authorization_url(temp))

    def user(self) -> User:
        """Completes the handshake from the callback request."""

        if not self.has_necessary_verifier():
            raise MissingVerifierError()

        token = self.get_token()
        return self.user_from_token_and_secret(token.identifier, token.secret)

    def user_from_token_and_secret(self, token: str, secret: str) -> User:
        details = self.server.get_user_details(TokenCredentials(token, secret))
        return _map_user(details, token, secret)

    def get_token(self) -> TokenCredentials:
        temp = self._temporary_credentials()
        if temp is None:
            raise MissingCredentialsError()

        return self.server.get_token_credentials(
            temp,
            self.request.values["oauth_token"],
            self.request.values["oauth_verifier"],
        )

    def has_necessary_verifier(self) -> bool:
        values = self.request.values
        return bool(values.get("oauth_token")) and bool(values.get("oauth_verifier"))

    def set_request(self, request: Request) -> Self:
        self.request = request
        return self

    def stateless(self) -> Self:
        self._stateless = True
        return self

    def is_stateless(self) -> bool:
        return self._stateless

    def _temporary_credentials(self) -> TemporaryCredentials | None:
        temp_id = self.request.values.get(TEMP_ID_PARAM)
        if self._stateless:
            return self.cache_credentials.pop(temp_id)

        temp = self.session_credentials.pop()
        if temp is None and temp_id:
            logger.debug(f"no session credentials, looking up {TEMP_ID_PARAM}")
            temp = self.cache_credentials.pop(temp_id)
        return temp


def _with_temp_id(callback_uri: str, temp_id: str) -> str:
    separator = "&" if "?" in callback_uri else "?"
    return callback_uri + separator + urlencode({TEMP_ID_PARAM: temp_id})


def _map_user(details: ProviderUser, token: str, secret: str) -> User:
    return User(
        id=details.uid,
        nickname=details.nickname,
        name=details.name,
        email=details.email,
        avatar=details.image_url,
        raw=details.extra if details.extra is not None else {},
        token=token,
        token_secret=secret,
    )
