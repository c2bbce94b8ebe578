"""OAuth2 authorization-code login against a Mastodon server.

Flow:
1. If the caller has a stored authorization, verify it and stop if it works
2. Register an app with the server (POST /api/v1/apps)
3. Build the /oauth/authorize URL; the caller sends the user's browser there
4. The server redirects back with ?code=...&state=... (or ?error=...)
5. Exchange the code at /oauth/token, using HTTP Basic auth
6. Fetch the account with the new token; only then is the token usable

Step 3 leaves the process. Nothing is kept in memory across the redirect:
the server and app registration travel inside the ``state`` parameter
(base64 of a small JSON object) and come back with the redirect, so a fresh
process can pick up at step 4 with ``LoginFlow.resume(url)``.

The library doesn't persist anything. Callers store the Authorization from
a LoginSuccess however they like and pass it back to ``start`` next time.
"""

import base64
import json
import logging
from dataclasses import dataclass
from enum import Enum
from urllib.parse import parse_qs, urlsplit

import httpx

from .builder import normalize_server
from .client import DEFAULT_TIMEOUT, MastodonClient, response_metadata
from .codec import decode_app, encode_app
from .errors import (
    AppRegistrationError,
    AuthorizationDenied,
    BadBody,
    BadStatus,
    BadUrl,
    DecodeError,
    MastodonError,
    NetworkError,
    StateDecodeError,
    Timeout,
    TokenExchangeError,
)
from .models import Account, App
from .request import GetVerifyCredentials, PostApp

logger = logging.getLogger(__name__)

DEFAULT_SCOPES = ("read", "write", "follow")

authorize_path = "/oauth/authorize"
token_path = "/oauth/token"


class LoginState(Enum):
    NO_CREDENTIAL = "no credential"
    APP_REGISTERED = "app registered"
    AWAITING_REDIRECT = "awaiting redirect"
    CODE_RECEIVED = "code received"
    TOKEN_MINTED = "token minted"
    ACCOUNT_VERIFIED = "account verified"


@dataclass
class Authorization:
    """A minted credential. ``token`` is ready for the Authorization header."""

    client_id: str
    client_secret: str
    token: str


@dataclass
class Redirect:
    """Send the user's browser to ``url``; resume from the redirect back."""

    url: str
    server: str
    app: App


@dataclass
class LoginSuccess:
    server: str
    authorization: Authorization
    account: Account


def encode_state(server: str, app: App) -> str:
    """Pack the pending login into an opaque OAuth ``state`` value."""
    payload = json.dumps(
        {"server": server, "app": encode_app(app)},
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii").rstrip("=")


def decode_state(state: str) -> tuple[str, App]:
    """Unpack a ``state`` value made by encode_state.

    Raises StateDecodeError if it didn't survive the round trip.
    """
    try:
        padded = state + "=" * (-len(state) % 4)
        payload = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))
    except ValueError as e:
        raise StateDecodeError(f"Login state is not valid base64 JSON: {e}") from e

    if not isinstance(payload, dict) or not isinstance(payload.get("server"), str):
        raise StateDecodeError("Login state has no server")
    try:
        app = decode_app(payload.get("app"))
    except DecodeError as e:
        raise StateDecodeError(f"Login state has no usable app: {e}") from e
    return payload["server"], app


def compose_token(access_token: str, token_type: str | None) -> str:
    """Combine an OAuth token response into one Authorization header value."""
    return f"{(token_type or 'bearer').capitalize()} {access_token}"


class LoginFlow:
    """Drives one login attempt. Create a fresh one after each restart."""

    def __init__(
        self,
        client_name: str,
        redirect_uri: str,
        scopes: tuple[str, ...] = DEFAULT_SCOPES,
        website: str | None = None,
        user_agent: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.client_name = client_name
        self.redirect_uri = redirect_uri
        self.scopes = tuple(scopes)
        self.website = website
        self.user_agent = user_agent
        self.timeout = timeout
        self.state = LoginState.NO_CREDENTIAL

    def _transition(self, state: LoginState, server: str) -> None:
        logger.info("Login on %s: %s -> %s", server, self.state.value, state.value)
        self.state = state

    def _client(self, server: str, token: str | None = None) -> MastodonClient:
        return MastodonClient(
            server, token, user_agent=self.user_agent, timeout=self.timeout
        )

    def start(
        self, server: str, authorization: Authorization | None = None
    ) -> LoginSuccess | Redirect:
        """Log in to ``server``, reusing ``authorization`` if it still works.

        Returns a LoginSuccess when the stored authorization is still good,
        otherwise registers an app and returns the Redirect to follow.
        """
        server = normalize_server(server)
        if authorization is not None:
            try:
                account = self.verify(server, authorization.token)
            except MastodonError as e:
                logger.info(
                    "Stored token for %s was rejected (%s); registering again",
                    server,
                    e,
                )
            else:
                return LoginSuccess(server, authorization, account)

        app = self.register_app(server)
        self._transition(LoginState.APP_REGISTERED, server)

        url = self.authorization_url(server, app)
        self._transition(LoginState.AWAITING_REDIRECT, server)
        return Redirect(url=url, server=server, app=app)

    def resume(self, url: str) -> LoginSuccess | None:
        """Finish a login from the URL the browser was redirected back to.

        Returns None when the URL carries neither ``code`` nor ``error``,
        meaning no login is in progress.
        """
        query = parse_qs(urlsplit(url).query)
        code = query.get("code", [None])[0]
        error = query.get("error", [None])[0]
        if code is None and error is None:
            return None

        description = query.get("error_description", [None])[0]
        state = query.get("state", [None])[0]
        server = app = None
        if state is None:
            if error is None:
                logger.error("Redirect has a code but no state")
                raise StateDecodeError("Redirect carries no state parameter")
        else:
            try:
                server, app = decode_state(state)
            except StateDecodeError as e:
                logger.error("Could not decode login state from redirect: %s", e)
                if error is None:
                    raise

        # The server's own error wins over a missing or broken state
        if error is not None:
            logger.warning("Authorization on %s refused: %s", server or "unknown server", error)
            raise AuthorizationDenied(error, description, server, app)

        self._transition(LoginState.CODE_RECEIVED, server)
        authorization = self.mint_token(server, app, code)
        self._transition(LoginState.TOKEN_MINTED, server)
        account = self.verify(server, authorization.token)
        return LoginSuccess(server, authorization, account)

    def register_app(self, server: str) -> App:
        request = PostApp(
            client_name=self.client_name,
            redirect_uris=self.redirect_uri,
            scopes=self.scopes,
            website=self.website,
        )
        try:
            with self._client(server) as client:
                response = client.send(request)
        except MastodonError as e:
            logger.error("App registration with %s failed: %s", server, e)
            raise AppRegistrationError(server, e) from e
        return response.entity.value

    def authorization_url(self, server: str, app: App) -> str:
        params = {
            "client_id": app.client_id,
            "redirect_uri": app.redirect_uri or self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(self.scopes),
            "state": encode_state(server, app),
        }
        return f"https://{server}{authorize_path}?{httpx.QueryParams(params)}"

    def mint_token(self, server: str, app: App, code: str) -> Authorization:
        """Exchange an authorization code for a token."""
        url = f"https://{server}{token_path}"
        data = {
            "grant_type": "authorization_code",
            "client_id": app.client_id,
            "client_secret": app.client_secret,
            "redirect_uri": app.redirect_uri or self.redirect_uri,
            "code": code,
        }
        headers = {"Accept": "application/json"}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent

        try:
            with httpx.Client(timeout=self.timeout) as http:
                response = http.post(
                    url,
                    data=data,
                    auth=(app.client_id, app.client_secret),
                    headers=headers,
                )
        except httpx.TimeoutException as e:
            raise TokenExchangeError(server, Timeout(str(e))) from e
        except httpx.InvalidURL as e:
            raise TokenExchangeError(server, BadUrl(url, str(e))) from e
        except httpx.HTTPError as e:
            raise TokenExchangeError(server, NetworkError(str(e))) from e

        metadata = response_metadata(response)
        if not response.is_success:
            raise TokenExchangeError(server, BadStatus(metadata, response.text))
        try:
            body = response.json()
            if not isinstance(body, dict) or not isinstance(body.get("access_token"), str):
                raise DecodeError("missing required field", ["access_token"])
        except ValueError as e:
            error = e if isinstance(e, DecodeError) else DecodeError(f"invalid JSON: {e}")
            raise TokenExchangeError(server, BadBody(metadata, error, response.text)) from e

        token = compose_token(body["access_token"], body.get("token_type"))
        return Authorization(app.client_id, app.client_secret, token)

    def verify(self, server: str, token: str) -> Account:
        """Fetch the account the token belongs to, proving the token works."""
        with self._client(server, token) as client:
            account = client.send(GetVerifyCredentials()).entity.value
        self._transition(LoginState.ACCOUNT_VERIFIED, server)
        logger.info("Logged in to %s as @%s", server, account.acct)
        return account
