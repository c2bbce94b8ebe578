"""Shared test fixtures."""

import json
import logging
from pathlib import Path

import pytest

from mastodon_client.models import App

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str):
    with open(FIXTURES_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def account_json() -> dict:
    """A local account as returned by GET /api/v1/accounts/:id."""
    return load_fixture("account.json")


@pytest.fixture
def status_json() -> dict:
    """A boost of a remote status with an image attachment."""
    return load_fixture("status.json")


@pytest.fixture
def instance_json() -> dict:
    return load_fixture("instance.json")


@pytest.fixture
def notification_json() -> dict:
    return load_fixture("notification.json")


@pytest.fixture
def app_json() -> dict:
    """The body of a successful POST /api/v1/apps."""
    return load_fixture("app.json")


@pytest.fixture
def app(app_json) -> App:
    return App(
        client_id=app_json["client_id"],
        client_secret=app_json["client_secret"],
        id=app_json["id"],
        name=app_json["name"],
        redirect_uri=app_json["redirect_uri"],
    )


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI attached; they point at CliRunner's closed streams."""
    yield
    logger = logging.getLogger("mastodon_client")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logging.getLogger("httpx").setLevel(logging.NOTSET)
    logging.getLogger("httpcore").setLevel(logging.NOTSET)
