"""Tests for config loading and saving."""

import stat

import pytest

from mastodon_client.config import (
    AppConfig,
    ClientConfig,
    config_exists,
    load_config,
    load_or_default,
    save_config,
)
from mastodon_client.login import Authorization


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "mastodon-client" / "config.toml"


class TestConfig:
    def test_round_trip(self, config_path):
        config = AppConfig(
            client=ClientConfig(scopes=("read",), user_agent="test-agent/1.0", timeout=5.0),
            server="example.social",
            authorizations={
                "example.social": Authorization("cid", "secret", "Bearer tok"),
                "birds.example": Authorization("cid2", "secret2", "Bearer tok2"),
            },
        )
        save_config(config, config_path)

        assert load_config(config_path) == config

    def test_file_is_private(self, config_path):
        save_config(AppConfig(), config_path)
        mode = stat.S_IMODE(config_path.stat().st_mode)
        assert mode == 0o600

    def test_defaults(self, config_path):
        config = load_or_default(config_path)

        assert not config_exists(config_path)
        assert config.server is None
        assert config.client.scopes == ("read", "write", "follow")
        assert config.authorization_for() is None

    def test_missing_file(self, config_path):
        with pytest.raises(FileNotFoundError):
            load_config(config_path)

    def test_partial_file(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text('[session]\nserver = "example.social"\n')

        config = load_config(config_path)

        assert config.server == "example.social"
        assert config.client == ClientConfig()

    def test_incomplete_authorization(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text('[authorizations."example.social"]\nclient_id = "x"\n')

        with pytest.raises(ValueError, match="example.social"):
            load_config(config_path)

    def test_authorization_for(self):
        auth = Authorization("cid", "secret", "Bearer tok")
        config = AppConfig(server="example.social", authorizations={"example.social": auth})

        assert config.authorization_for() is auth
        assert config.authorization_for("example.social") is auth
        assert config.authorization_for("birds.example") is None
