from typing import Any, NamedTuple


class ClientCredentials(NamedTuple):
    identifier: str
    secret: str
    callback_uri: str | None = None


class TemporaryCredentials(NamedTuple):
    identifier: str
    secret: str


class TokenCredentials(NamedTuple):
    identifier: str
    secret: str


class ProviderUser(NamedTuple):
    uid: str
    nickname: str | None = None
    name: str | None = None
    email: str | None = None
    image_url: str | None = None
    # only for passing through
    extra: dict[str, Any] | None = None


class User(NamedTuple):
    id: str
    nickname: str | None
    name: str | None
    email: str | None
    avatar: str | None
    raw: dict[str, Any]
    token: str
    token_secret: str
