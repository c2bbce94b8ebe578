"""Tests for the Mastodon HTTP clients."""

import asyncio

import httpx
import pytest
import respx

from mastodon_client.client import AsyncMastodonClient, MastodonClient
from mastodon_client.errors import BadBody, BadStatus, BadUrl, NetworkError, Timeout
from mastodon_client.models import (
    InstanceEntity,
    NoEntity,
    StatusEntity,
    StatusListEntity,
)
from mastodon_client.request import (
    DeleteStatus,
    GetHomeTimeline,
    GetInstance,
    GetStatus,
    Paging,
    PostStatus,
)

API = "https://example.social/api/v1"


class TestMastodonClient:
    @respx.mock
    def test_get_status(self, status_json):
        route = respx.get(f"{API}/statuses/111940028839495190").mock(
            return_value=httpx.Response(200, json=status_json)
        )

        with MastodonClient("example.social", "xyz") as client:
            response = client.send(GetStatus(id="111940028839495190"))

        assert isinstance(response.entity, StatusEntity)
        assert response.entity.value.reblog.status.account.acct == "bob@birds.example"
        assert response.metadata.status_code == 200
        assert route.call_count == 1
        sent = route.calls.last.request
        assert sent.headers["Authorization"] == "Bearer xyz"
        assert sent.headers["Accept"] == "application/json"

    @respx.mock
    def test_post_status_sends_json(self, status_json):
        route = respx.post(f"{API}/statuses").mock(
            return_value=httpx.Response(200, json=status_json)
        )

        with MastodonClient("example.social", "xyz") as client:
            client.send(PostStatus(status="hello", idempotency_key="k1"))

        sent = route.calls.last.request
        assert sent.headers["Idempotency-Key"] == "k1"
        assert sent.headers["Content-Type"] == "application/json"
        assert b'"status":"hello"' in sent.content.replace(b" ", b"")

    @respx.mock
    def test_empty_body_decodes_as_no_entity(self):
        respx.delete(f"{API}/statuses/1").mock(return_value=httpx.Response(200))

        with MastodonClient("example.social", "xyz") as client:
            response = client.send(DeleteStatus(id="1"))

        assert response.entity == NoEntity()

    @respx.mock
    def test_non_json_body_ignored_when_nothing_expected(self):
        respx.delete(f"{API}/statuses/1").mock(
            return_value=httpx.Response(200, text="OK")
        )

        with MastodonClient("example.social", "xyz") as client:
            response = client.send(DeleteStatus(id="1"))

        assert response.entity == NoEntity()
        assert response.metadata.status_code == 200

    @respx.mock
    def test_unauthenticated_request(self, instance_json):
        route = respx.get(f"{API}/instance").mock(
            return_value=httpx.Response(200, json=instance_json)
        )

        with MastodonClient("example.social") as client:
            response = client.send(GetInstance())

        assert isinstance(response.entity, InstanceEntity)
        assert response.entity.value.stats.user_count == 812
        assert "Authorization" not in route.calls.last.request.headers

    @respx.mock
    def test_bad_status(self):
        respx.get(f"{API}/statuses/404").mock(
            return_value=httpx.Response(404, json={"error": "Record not found"})
        )

        with MastodonClient("example.social", "xyz") as client:
            with pytest.raises(BadStatus) as excinfo:
                client.send(GetStatus(id="404"))

        assert excinfo.value.metadata.status_code == 404
        assert "Record not found" in excinfo.value.body

    @respx.mock
    def test_rate_limited_is_bad_status(self):
        respx.get(f"{API}/timelines/home").mock(
            return_value=httpx.Response(
                429,
                json={"error": "Too many requests"},
                headers={"X-RateLimit-Reset": "2024-02-22T09:00:00.000Z"},
            )
        )

        with MastodonClient("example.social", "xyz") as client:
            with pytest.raises(BadStatus) as excinfo:
                client.send(GetHomeTimeline())

        metadata = excinfo.value.metadata
        assert metadata.status_code == 429
        assert metadata.headers["x-ratelimit-reset"] == "2024-02-22T09:00:00.000Z"

    @respx.mock
    def test_body_of_wrong_shape(self):
        respx.get(f"{API}/statuses/1").mock(
            return_value=httpx.Response(200, json={"id": "1"})
        )

        with MastodonClient("example.social", "xyz") as client:
            with pytest.raises(BadBody) as excinfo:
                client.send(GetStatus(id="1"))

        assert excinfo.value.error.path == ["uri"]
        assert '"id"' in excinfo.value.body

    @respx.mock
    def test_body_not_json(self):
        respx.get(f"{API}/statuses/1").mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )

        with MastodonClient("example.social", "xyz") as client:
            with pytest.raises(BadBody, match="invalid JSON"):
                client.send(GetStatus(id="1"))

    @respx.mock
    def test_timeout(self):
        respx.get(f"{API}/statuses/1").mock(side_effect=httpx.ReadTimeout)

        with MastodonClient("example.social", "xyz") as client:
            with pytest.raises(Timeout):
                client.send(GetStatus(id="1"))

    @respx.mock
    def test_network_error(self):
        respx.get(f"{API}/statuses/1").mock(side_effect=httpx.ConnectError)

        with MastodonClient("example.social", "xyz") as client:
            with pytest.raises(NetworkError):
                client.send(GetStatus(id="1"))

    @respx.mock
    def test_bad_url(self):
        respx.get(f"{API}/statuses/1").mock(side_effect=httpx.UnsupportedProtocol)

        with MastodonClient("example.social", "xyz") as client:
            with pytest.raises(BadUrl) as excinfo:
                client.send(GetStatus(id="1"))

        assert excinfo.value.url == f"{API}/statuses/1"

    @respx.mock
    def test_link_header_paging(self, status_json):
        respx.get(f"{API}/timelines/home").mock(
            return_value=httpx.Response(
                200,
                json=[status_json],
                headers={
                    "Link": (
                        f'<{API}/timelines/home?limit=20&max_id=1000>; rel="next", '
                        f'<{API}/timelines/home?limit=20&min_id=2000>; rel="prev"'
                    )
                },
            )
        )

        with MastodonClient("example.social", "xyz") as client:
            response = client.send(GetHomeTimeline())

        assert isinstance(response.entity, StatusListEntity)
        assert response.next_paging() == Paging(max_id="1000", limit=20)
        assert response.prev_paging() == Paging(min_id="2000", limit=20)

    @respx.mock
    def test_no_link_header(self):
        respx.get(f"{API}/timelines/home").mock(
            return_value=httpx.Response(200, json=[])
        )

        with MastodonClient("example.social", "xyz") as client:
            response = client.send(GetHomeTimeline())

        assert response.entity == StatusListEntity([])
        assert response.next_paging() is None


class TestAsyncMastodonClient:
    @respx.mock
    def test_get_status(self, status_json):
        route = respx.get(f"{API}/statuses/1").mock(
            return_value=httpx.Response(200, json=status_json)
        )

        async def run():
            async with AsyncMastodonClient("example.social", "xyz") as client:
                return await client.send(GetStatus(id="1"))

        response = asyncio.run(run())

        assert isinstance(response.entity, StatusEntity)
        assert route.call_count == 1

    @respx.mock
    def test_bad_status(self):
        respx.get(f"{API}/statuses/1").mock(return_value=httpx.Response(500))

        async def run():
            async with AsyncMastodonClient("example.social", "xyz") as client:
                await client.send(GetStatus(id="1"))

        with pytest.raises(BadStatus):
            asyncio.run(run())

    @respx.mock
    def test_timeout(self):
        respx.get(f"{API}/statuses/1").mock(side_effect=httpx.ConnectTimeout)

        async def run():
            async with AsyncMastodonClient("example.social", "xyz") as client:
                await client.send(GetStatus(id="1"))

        with pytest.raises(Timeout):
            asyncio.run(run())

    @respx.mock
    def test_non_json_body_ignored_when_nothing_expected(self):
        respx.delete(f"{API}/statuses/1").mock(
            return_value=httpx.Response(200, text="OK")
        )

        async def run():
            async with AsyncMastodonClient("example.social", "xyz") as client:
                return await client.send(DeleteStatus(id="1"))

        assert asyncio.run(run()).entity == NoEntity()
