from abc import ABC, abstractmethod
from logging import getLogger
from typing import Any

from authlib.integrations.requests_client import OAuth1Session, OAuthError

from .types import (
    ClientCredentials,
    ProviderUser,
    TemporaryCredentials,
    TokenCredentials,
)

logger = getLogger(__name__)

# (connect, read) seconds
DEFAULT_TIMEOUT = (5, 20)


class Server(ABC):
    """OAuth 1.0a service provider, signing and transport are handled by Authlib.

    Concrete providers fill in the three handshake endpoints and describe how
    to read the user's profile.
    """

    request_token_url: str
    authorize_url: str
    access_token_url: str
    user_agent: str = "oauth1-social/0"

    client_credentials: ClientCredentials
    timeout: tuple[float, float]

    def __init__(
        self,
        client_credentials: ClientCredentials,
        timeout: tuple[float, float] = DEFAULT_TIMEOUT,
    ):
        self.client_credentials = client_credentials
        self.timeout = timeout

    @property
    @abstractmethod
    def user_details_url(self) -> str:
        pass

    @abstractmethod
    def parse_user_details(self, data: dict[str, Any]) -> ProviderUser:
        pass

    def get_temporary_credentials(
        self,
        callback_uri: str | None = None,
    ) -> TemporaryCredentials:
        """Fetches request credentials, the callback defaults to the configured one."""

        callback_uri = callback_uri or self.client_credentials.callback_uri
        with self._session(redirect_uri=callback_uri) as session:
            token = session.fetch_request_token(
                self.request_token_url, timeout=self.timeout
            )

        # OAuth 1.0a providers must acknowledge the callback
        if str(token.get("oauth_callback_confirmed", "")).lower() != "true":
            raise OAuthError(
                "callback_not_confirmed",
                "Error in retrieving temporary credentials.",
            )

        logger.debug(f"received temporary credentials {token['oauth_token']}")
        return TemporaryCredentials(token["oauth_token"], token["oauth_token_secret"])

    def get_authorization_url(self, temp: TemporaryCredentials) -> str:
        with self._session() as session:
            return session.create_authorization_url(
                self.authorize_url, request_token=temp.identifier
            )

    def get_token_credentials(
        self,
        temp: TemporaryCredentials,
        oauth_token: str,
        verifier: str,
    ) -> TokenCredentials:
        if temp.identifier != oauth_token:
            raise OAuthError(
                "token_mismatch",
                "Temporary identifier passed back by server does not match that of stored temporary credentials.",
            )

        with self._session(token=temp.identifier, token_secret=temp.secret) as session:
            token = session.fetch_access_token(
                self.access_token_url, verifier=verifier, timeout=self.timeout
            )

        logger.debug(f"received token credentials {token['oauth_token']}")
        return TokenCredentials(token["oauth_token"], token["oauth_token_secret"])

    def fetch_user_details(self, token: TokenCredentials) -> dict[str, Any]:
        with self._session(token=token.identifier, token_secret=token.secret) as session:
            response = session.get(self.user_details_url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def get_user_details(self, token: TokenCredentials) -> ProviderUser:
        return self.parse_user_details(self.fetch_user_details(token))

    def _session(self, **kwargs: Any) -> OAuth1Session:
        session = OAuth1Session(
            self.client_credentials.identifier,
            self.client_credentials.secret,
            **kwargs,
        )
        session.headers["User-Agent"] = self.user_agent
        return session
