"""Configuration loading and saving for the command-line front end.

Config file location: ~/.config/mastodon-client/config.toml

Schema:
    [client]
    client_name = "mastodon-client"
    redirect_uri = "http://localhost:8765/callback"
    scopes = ["read", "write", "follow"]
    website = "..."      # optional
    user_agent = "..."   # optional
    timeout = 30.0

    [session]
    server = "example.social"  # last server logged in to

    [authorizations."example.social"]
    client_id = "..."
    client_secret = "..."
    token = "Bearer ..."

The library itself never reads this file; the CLI loads it and passes the
values in.
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import tomli_w

from .login import DEFAULT_SCOPES, Authorization

CONFIG_DIR = Path.home() / ".config" / "mastodon-client"
CONFIG_FILE = CONFIG_DIR / "config.toml"

DEFAULT_REDIRECT_URI = "http://localhost:8765/callback"


@dataclass
class ClientConfig:
    client_name: str = "mastodon-client"
    redirect_uri: str = DEFAULT_REDIRECT_URI
    scopes: tuple[str, ...] = DEFAULT_SCOPES
    website: str | None = None
    user_agent: str | None = None
    timeout: float = 30.0


@dataclass
class AppConfig:
    client: ClientConfig = field(default_factory=ClientConfig)
    server: str | None = None
    authorizations: dict[str, Authorization] = field(default_factory=dict)

    def authorization_for(self, server: str | None = None) -> Authorization | None:
        server = server or self.server
        if server is None:
            return None
        return self.authorizations.get(server)


def load_config(config_path: Path = CONFIG_FILE) -> AppConfig:
    """Load and validate config from TOML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    client_data = data.get("client", {})
    session_data = data.get("session", {})

    authorizations = {}
    for server, auth in data.get("authorizations", {}).items():
        try:
            authorizations[server] = Authorization(
                client_id=auth["client_id"],
                client_secret=auth["client_secret"],
                token=auth["token"],
            )
        except (KeyError, TypeError):
            raise ValueError(
                f"Config authorization for {server} needs client_id, "
                "client_secret and token"
            ) from None

    return AppConfig(
        client=ClientConfig(
            client_name=client_data.get("client_name", "mastodon-client"),
            redirect_uri=client_data.get("redirect_uri", DEFAULT_REDIRECT_URI),
            scopes=tuple(client_data.get("scopes", DEFAULT_SCOPES)),
            website=client_data.get("website"),
            user_agent=client_data.get("user_agent"),
            timeout=float(client_data.get("timeout", 30.0)),
        ),
        server=session_data.get("server"),
        authorizations=authorizations,
    )


def save_config(config: AppConfig, config_path: Path = CONFIG_FILE) -> None:
    """Write config to TOML file with restricted permissions."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    client = {
        "client_name": config.client.client_name,
        "redirect_uri": config.client.redirect_uri,
        "scopes": list(config.client.scopes),
        "timeout": config.client.timeout,
    }
    if config.client.website:
        client["website"] = config.client.website
    if config.client.user_agent:
        client["user_agent"] = config.client.user_agent

    data: dict = {"client": client}
    if config.server:
        data["session"] = {"server": config.server}
    if config.authorizations:
        data["authorizations"] = {
            server: {
                "client_id": auth.client_id,
                "client_secret": auth.client_secret,
                "token": auth.token,
            }
            for server, auth in config.authorizations.items()
        }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)

    # Restrict permissions, the file holds access tokens
    os.chmod(config_path, 0o600)


def load_or_default(config_path: Path = CONFIG_FILE) -> AppConfig:
    """Load the config, or return defaults if there isn't one yet."""
    if not config_path.exists():
        return AppConfig()
    return load_config(config_path)


def config_exists(config_path: Path = CONFIG_FILE) -> bool:
    """Check if config file exists."""
    return config_path.exists()
