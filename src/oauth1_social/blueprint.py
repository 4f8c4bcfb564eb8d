from typing import Callable

import requests
from authlib.integrations.requests_client import OAuthError
from flask import Blueprint, current_app, redirect, request, session, url_for
from flask.typing import ResponseReturnValue

from .config import CACHE_PREFIX_KEY
from .errors import OAuth1SocialError
from .kv import Cache, FlaskSessionStore, nocache
from .provider import CACHE_PREFIX as DEFAULT_CACHE_PREFIX
from .provider import Provider
from .server import Server
from .types import User


def make_blueprint(
    server_factory: Callable[[], Server],
    on_user: Callable[[User], ResponseReturnValue],
    name: str = "oauth1",
    url_prefix: str = "/oauth1",
    cache_factory: Callable[[], Cache] = lambda: nocache,
    stateless: bool = False,
    failure_endpoint: str | None = None,
) -> Blueprint:
    """Builds a blueprint with ``/start`` and ``/callback`` routes.

    ``on_user`` receives the authenticated user and returns the response for
    the callback, usually after persisting the token credentials.
    """

    oauth1 = Blueprint(name, __name__, url_prefix=url_prefix)

    def make_provider() -> Provider:
        return Provider(
            request,
            server_factory(),
            FlaskSessionStore(session),
            cache=cache_factory(),
            stateless=stateless,
            cache_prefix=current_app.config.get(CACHE_PREFIX_KEY, DEFAULT_CACHE_PREFIX),
        )

    def failed(message: str) -> ResponseReturnValue:
        if failure_endpoint is not None:
            return redirect(url_for(failure_endpoint), 303)
        return message, 400

    @oauth1.get("/start")
    def oauth1_start():
        return make_provider().redirect()

    @oauth1.get("/callback")
    def oauth1_callback():
        try:
            user = make_provider().user()
        except (OAuth1SocialError, OAuthError, requests.RequestException) as exception:
            current_app.logger.warning(f"oauth1 handshake failed: {exception}")
            return failed("oauth1 handshake failed")

        current_app.logger.debug(f"authenticated user {user.id}")
        return on_user(user)

    return oauth1
