"""HTTP transport for the Mastodon REST API.

A client is bound to one server and, optionally, one access token. ``send``
builds the call for a request, executes it, and returns a Response holding
the decoded Entity. Failures are raised as the exceptions in ``errors``:
BadUrl, Timeout, NetworkError, BadStatus (non-2xx) and BadBody (2xx whose
body didn't decode). Bodies are only decoded for 2xx responses.

There are no retries, no rate-limit handling beyond reporting the status,
and no caching.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs, urlsplit

import httpx

from .builder import CallDescriptor, build
from .codec import decode_no_entity
from .errors import BadBody, BadStatus, BadUrl, DecodeError, NetworkError, Timeout
from .models import Entity, NoEntity
from .request import Paging, Request, requires_auth

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass
class Metadata:
    """What we know about an HTTP response besides its body."""

    url: str
    status_code: int
    reason: str
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class Response:
    """A successful call: the decoded entity plus response metadata."""

    entity: Entity
    metadata: Metadata
    request: Request
    links: dict[str, str] = field(default_factory=dict)  # rel -> URL

    def next_paging(self) -> Paging | None:
        """Paging for the next (older) page, from the Link header."""
        return _paging_from_link(self.links.get("next"))

    def prev_paging(self) -> Paging | None:
        """Paging for the previous (newer) page, from the Link header."""
        return _paging_from_link(self.links.get("prev"))


def _paging_from_link(url: str | None) -> Paging | None:
    if not url:
        return None
    query = parse_qs(urlsplit(url).query)

    def first(name: str) -> str | None:
        values = query.get(name)
        return values[0] if values else None

    limit = first("limit")
    return Paging(
        max_id=first("max_id"),
        since_id=first("since_id"),
        min_id=first("min_id"),
        limit=int(limit) if limit and limit.isdigit() else None,
    )


def response_metadata(response: httpx.Response) -> Metadata:
    return Metadata(
        url=str(response.url),
        status_code=response.status_code,
        reason=response.reason_phrase,
        headers=dict(response.headers),
    )


def _links(response: httpx.Response) -> dict[str, str]:
    return {
        rel: link["url"]
        for rel, link in response.links.items()
        if "url" in link
    }


def _transport_error(call: CallDescriptor, error: Exception) -> Exception:
    """Map an httpx exception onto our taxonomy."""
    if isinstance(error, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return BadUrl(call.url, str(error))
    if isinstance(error, httpx.TimeoutException):
        return Timeout(f"Timed out calling {call.method} {call.url}")
    return NetworkError(f"{call.method} {call.url} failed: {error}")


def _classify(call: CallDescriptor, response: httpx.Response) -> Response:
    """Turn a raw HTTP response into a Response, or raise."""
    metadata = response_metadata(response)
    body = response.text

    if not response.is_success:
        logger.debug(
            "%s %s -> %d %s", call.method, call.url, response.status_code, body[:200]
        )
        raise BadStatus(metadata, body)

    # Empty-result calls may answer with any body at all, JSON or not
    if call.decoder is decode_no_entity:
        return Response(
            entity=NoEntity(),
            metadata=metadata,
            request=call.request,
            links=_links(response),
        )

    try:
        value: Any = json.loads(body) if body.strip() else None
    except ValueError as e:
        raise BadBody(metadata, DecodeError(f"invalid JSON: {e}"), body) from None

    try:
        entity = call.decoder(value)
    except DecodeError as e:
        raise BadBody(metadata, e, body) from None

    return Response(
        entity=entity,
        metadata=metadata,
        request=call.request,
        links=_links(response),
    )


def _send_kwargs(call: CallDescriptor) -> dict:
    kwargs: dict[str, Any] = {"headers": call.headers}
    if call.json is not None:
        kwargs["json"] = call.json
    if call.data is not None:
        kwargs["data"] = call.data
    if call.files:
        kwargs["files"] = call.files
    return kwargs


class _Base:
    def __init__(
        self,
        server: str,
        token: str | None = None,
        user_agent: str | None = None,
    ):
        self.server = server
        self.token = token
        self.user_agent = user_agent

    def build(self, request: Request) -> CallDescriptor:
        if self.token is None and requires_auth(request):
            logger.debug(
                "%s usually needs a token; sending without one",
                type(request).__name__,
            )
        return build(self.server, self.token, request, self.user_agent)


class MastodonClient(_Base):
    """Synchronous client for one Mastodon server."""

    def __init__(
        self,
        server: str,
        token: str | None = None,
        user_agent: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        super().__init__(server, token, user_agent)
        self._client = httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    def send(self, request: Request) -> Response:
        """Build and execute a request."""
        return self.execute(self.build(request))

    def execute(self, call: CallDescriptor) -> Response:
        logger.info("%s %s", call.method, call.url)
        try:
            response = self._client.request(call.method, call.url, **_send_kwargs(call))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise _transport_error(call, e) from e
        return _classify(call, response)

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class AsyncMastodonClient(_Base):
    """Asynchronous client for one Mastodon server; one awaited response per call."""

    def __init__(
        self,
        server: str,
        token: str | None = None,
        user_agent: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(server, token, user_agent)
        self._client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def send(self, request: Request) -> Response:
        return await self.execute(self.build(request))

    async def execute(self, call: CallDescriptor) -> Response:
        logger.info("%s %s", call.method, call.url)
        try:
            response = await self._client.request(
                call.method, call.url, **_send_kwargs(call)
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise _transport_error(call, e) from e
        return _classify(call, response)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()
