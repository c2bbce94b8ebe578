"""Exceptions raised by the Mastodon client.

Transport failures mirror what can go wrong with an HTTP call:

    BadUrl        the URL could not be used at all
    Timeout       no response in time
    NetworkError  the connection failed
    BadStatus     the server answered with a non-2xx status
    BadBody       a 2xx response whose body didn't decode

Nothing in this package retries. A failed call is raised once and the caller
decides what to do about it.
"""


class DecodeError(ValueError):
    """JSON didn't match the shape a decoder expects.

    ``path`` is the list of keys and indexes leading to the offending value,
    outermost first.
    """

    def __init__(self, message: str, path: list | None = None):
        super().__init__(message)
        self.message = message
        self.path = path or []

    def at(self, key) -> "DecodeError":
        """Return a copy of this error located one level further out."""
        return DecodeError(self.message, [key, *self.path])

    def __str__(self) -> str:
        if not self.path:
            return self.message
        location = "".join(
            f"[{p}]" if isinstance(p, int) else f".{p}" for p in self.path
        )
        return f"{self.message} at ${location}"


class MastodonError(Exception):
    """Base class for every error raised by a client call."""


class BadUrl(MastodonError):
    def __init__(self, url: str, message: str = ""):
        super().__init__(f"Bad URL {url!r}{': ' + message if message else ''}")
        self.url = url


class Timeout(MastodonError):
    pass


class NetworkError(MastodonError):
    pass


class BadStatus(MastodonError):
    """The server answered with a non-2xx status.

    ``metadata`` describes the response, ``body`` is its undecoded text.
    """

    def __init__(self, metadata, body: str):
        super().__init__(
            f"HTTP {metadata.status_code} {metadata.reason} from {metadata.url}"
        )
        self.metadata = metadata
        self.body = body


class BadBody(MastodonError):
    """A successful response whose body didn't decode."""

    def __init__(self, metadata, error: DecodeError, body: str):
        super().__init__(f"Could not decode response from {metadata.url}: {error}")
        self.metadata = metadata
        self.error = error
        self.body = body


# ── Login ──


class LoginError(MastodonError):
    """Base class for failures of the authorization-code login flow."""


class AppRegistrationError(LoginError):
    """The server refused to register the app, so login can't proceed."""

    def __init__(self, server: str, cause: MastodonError):
        super().__init__(f"Could not register app with {server}: {cause}")
        self.server = server
        self.cause = cause


class AuthorizationDenied(LoginError):
    """The authorization server redirected back with ``error=...``.

    Carries the decoded server and app so the caller can retry. Both are
    None when the redirect came back without a usable ``state``.
    """

    def __init__(
        self,
        error: str,
        description: str | None = None,
        server: str | None = None,
        app=None,
    ):
        message = f"Authorization failed on {server or 'the server'}: {error}"
        if description:
            message += f" ({description})"
        super().__init__(message)
        self.error = error
        self.description = description
        self.server = server
        self.app = app


class StateDecodeError(LoginError):
    """The ``state`` parameter we sent out didn't come back intact."""


class TokenExchangeError(LoginError):
    def __init__(self, server: str, cause: MastodonError):
        super().__init__(f"Could not exchange authorization code with {server}: {cause}")
        self.server = server
        self.cause = cause
