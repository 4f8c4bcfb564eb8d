from typing import Any, override

import pytest
from authlib.integrations.requests_client import OAuthError
from flask import Flask

from oauth1_social import (
    ClientCredentials,
    ProviderUser,
    Server,
    TemporaryCredentials,
    TokenCredentials,
)

CALLBACK_URI = "https://app.example.com/oauth1/callback"

PROFILE = {
    "id_str": "42",
    "screen_name": "jdoe",
    "name": "Jane Doe",
    "email": "j@example.com",
    "profile_image_url_https": "http://x/img.png",
}


class ExampleServer(Server):
    request_token_url = "https://api.example.com/oauth/request_token"
    authorize_url = "https://api.example.com/oauth/authenticate"
    access_token_url = "https://api.example.com/oauth/access_token"
    user_details_url = "https://api.example.com/1.1/account/verify_credentials.json"

    @override
    def parse_user_details(self, data: dict[str, Any]) -> ProviderUser:
        return ProviderUser(
            uid=data["id_str"],
            nickname=data.get("screen_name"),
            name=data.get("name"),
            email=data.get("email"),
            image_url=data.get("profile_image_url_https"),
            extra=data,
        )


class FakeServer(ExampleServer):
    """Records calls instead of talking to the provider."""

    def __init__(self, client_credentials: ClientCredentials):
        super().__init__(client_credentials)
        self.temp = TemporaryCredentials("temp-id", "temp-secret")
        self.token = TokenCredentials("token-id", "token-secret")
        self.profile = dict(PROFILE)
        self.callbacks: list[str | None] = []
        self.exchanges: list[tuple[TemporaryCredentials, str, str]] = []
        self.profile_fetches: list[TokenCredentials] = []

    @property
    def calls(self) -> int:
        return len(self.callbacks) + len(self.exchanges) + len(self.profile_fetches)

    @override
    def get_temporary_credentials(
        self,
        callback_uri: str | None = None,
    ) -> TemporaryCredentials:
        self.callbacks.append(callback_uri or self.client_credentials.callback_uri)
        return self.temp

    @override
    def get_token_credentials(
        self,
        temp: TemporaryCredentials,
        oauth_token: str,
        verifier: str,
    ) -> TokenCredentials:
        self.exchanges.append((temp, oauth_token, verifier))
        if temp.identifier != oauth_token:
            raise OAuthError("token_mismatch")
        return self.token

    @override
    def fetch_user_details(self, token: TokenCredentials) -> dict[str, Any]:
        self.profile_fetches.append(token)
        return self.profile


@pytest.fixture
def client_credentials():
    return ClientCredentials("consumer-key", "consumer-secret", CALLBACK_URI)


@pytest.fixture
def server(client_credentials: ClientCredentials):
    return FakeServer(client_credentials)


@pytest.fixture
def app():
    app = Flask(__name__)
    app.config.update(TESTING=True, SECRET_KEY="test-secret-key")
    return app
