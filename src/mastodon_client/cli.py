"""CLI interface for mastodon-client.

Commands:
    login     - Log in to a server (prints the URL to authorize in a browser)
    callback  - Finish a login from the URL the browser was redirected to
    whoami    - Show the logged-in account
    instance  - Show a server's instance information
    timeline  - Show the home, public, local or hashtag timeline
    post      - Publish a status
    status    - Show configuration and stored logins
"""

import json
import re
import sys
from pathlib import Path

import click

from .builder import normalize_server
from .config import CONFIG_FILE, AppConfig, config_exists, load_or_default, save_config
from .errors import AuthorizationDenied, MastodonError, StateDecodeError
from .logging_config import setup_logging

VISIBILITIES = ["public", "unlisted", "private", "direct"]


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--config", type=click.Path(), default=None, help="Config file path")
@click.pass_context
def main(ctx, verbose, config):
    """Mastodon API client — log in and talk to a server from the terminal."""
    setup_logging(debug=verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else CONFIG_FILE


def _login_flow(config: AppConfig):
    from .login import LoginFlow

    return LoginFlow(
        client_name=config.client.client_name,
        redirect_uri=config.client.redirect_uri,
        scopes=config.client.scopes,
        website=config.client.website,
        user_agent=config.client.user_agent,
        timeout=config.client.timeout,
    )


def _remember(config: AppConfig, success, config_path: Path) -> None:
    config.server = success.server
    config.authorizations[success.server] = success.authorization
    save_config(config, config_path)
    click.echo(f"Logged in to {success.server} as @{success.account.acct}")


def _session_client(config: AppConfig, server: str | None = None):
    from .client import MastodonClient

    server = normalize_server(server) if server else config.server
    if not server:
        click.echo("Error: No server given and not logged in. Run 'mastodon-client login SERVER' first.", err=True)
        sys.exit(1)
    authorization = config.authorization_for(server)
    return MastodonClient(
        server,
        authorization.token if authorization else None,
        user_agent=config.client.user_agent,
        timeout=config.client.timeout,
    )


def _plain_text(html: str) -> str:
    text = re.sub(r"<br\s*/?>|</p>\s*<p>", "\n", html)
    return re.sub(r"<[^>]+>", "", text).strip()


@main.command()
@click.argument("server")
@click.pass_context
def login(ctx, server):
    """Log in to SERVER (e.g. mastodon.social)."""
    from .login import Redirect

    config_path = ctx.obj["config_path"]
    config = load_or_default(config_path)
    server = normalize_server(server)

    try:
        outcome = _login_flow(config).start(server, config.authorizations.get(server))
    except MastodonError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if isinstance(outcome, Redirect):
        click.echo("Open this URL in your browser and authorize the app:")
        click.echo()
        click.echo(f"  {outcome.url}")
        click.echo()
        click.echo("Then copy the address you are redirected to and run:")
        click.echo("  mastodon-client callback '<redirected URL>'")
        return

    _remember(config, outcome, config_path)


@main.command()
@click.argument("url")
@click.pass_context
def callback(ctx, url):
    """Finish a login from the URL the browser was redirected to."""
    config_path = ctx.obj["config_path"]
    config = load_or_default(config_path)

    try:
        outcome = _login_flow(config).resume(url)
    except AuthorizationDenied as e:
        click.echo(f"Error: {e.server or 'the server'} refused authorization: {e.error}", err=True)
        if e.server:
            click.echo(f"Run 'mastodon-client login {e.server}' to try again.", err=True)
        sys.exit(1)
    except StateDecodeError as e:
        click.echo(f"Error: the redirect's login state is corrupt ({e}).", err=True)
        sys.exit(1)
    except MastodonError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if outcome is None:
        click.echo("That URL carries no authorization code; nothing to do.")
        return

    _remember(config, outcome, config_path)


@main.command()
@click.option("--server", default=None, help="Server to ask (default: last login)")
@click.pass_context
def whoami(ctx, server):
    """Show the logged-in account."""
    from .request import GetVerifyCredentials

    config = load_or_default(ctx.obj["config_path"])
    try:
        with _session_client(config, server) as client:
            account = client.send(GetVerifyCredentials()).entity.value
    except MastodonError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"@{account.acct} ({account.display_name})")
    click.echo(f"{account.url}")
    click.echo(
        f"{account.statuses_count} posts, {account.following_count} following, "
        f"{account.followers_count} followers"
    )


@main.command()
@click.argument("server", required=False)
@click.pass_context
def instance(ctx, server):
    """Show instance information as JSON, exactly as the server sent it."""
    from .codec import encode_entity
    from .request import GetInstance

    config = load_or_default(ctx.obj["config_path"])
    try:
        with _session_client(config, server) as client:
            response = client.send(GetInstance())
    except MastodonError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(encode_entity(response.entity), indent=2, ensure_ascii=False))


@main.command()
@click.option("--public", is_flag=True, help="Federated timeline")
@click.option("--local", is_flag=True, help="Only statuses from this server")
@click.option("--tag", default=None, help="Hashtag timeline")
@click.option("--limit", type=int, default=20, help="Number of statuses")
@click.option("--max-id", default=None, help="Only statuses older than this ID")
@click.pass_context
def timeline(ctx, public, local, tag, limit, max_id):
    """Show the home timeline (or a public/hashtag one)."""
    from .request import GetHomeTimeline, GetPublicTimeline, GetTagTimeline, Paging

    paging = Paging(max_id=max_id, limit=limit)
    if tag:
        request = GetTagTimeline(hashtag=tag.lstrip("#"), local=local, paging=paging)
    elif public or local:
        request = GetPublicTimeline(local=local, paging=paging)
    else:
        request = GetHomeTimeline(paging=paging)

    config = load_or_default(ctx.obj["config_path"])
    try:
        with _session_client(config) as client:
            response = client.send(request)
    except MastodonError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for status in response.entity.value:
        shown = status.reblog.status if status.reblog else status
        prefix = f"@{status.account.acct} boosted " if status.reblog else ""
        click.echo(f"[{status.id}] {prefix}@{shown.account.acct}:")
        if shown.spoiler_text:
            click.echo(f"  CW: {shown.spoiler_text}")
        else:
            for line in _plain_text(shown.content).splitlines():
                click.echo(f"  {line}")
        click.echo()

    next_page = response.next_paging()
    if next_page and next_page.max_id:
        click.echo(f"More: --max-id {next_page.max_id}")


@main.command()
@click.argument("text")
@click.option(
    "--visibility",
    type=click.Choice(VISIBILITIES),
    default=None,
    help="Who can see the post (default: account setting)",
)
@click.option("--spoiler", default=None, help="Content warning")
@click.option("--reply-to", default=None, help="ID of the status to reply to")
@click.option(
    "--idempotency-key",
    default=None,
    help="Reuse to make retries of the same post safe",
)
@click.pass_context
def post(ctx, text, visibility, spoiler, reply_to, idempotency_key):
    """Publish TEXT as a new status."""
    from .models import Visibility
    from .request import PostStatus

    request = PostStatus(
        status=text,
        visibility=Visibility(visibility) if visibility else None,
        spoiler_text=spoiler,
        in_reply_to_id=reply_to,
        idempotency_key=idempotency_key,
    )

    config = load_or_default(ctx.obj["config_path"])
    try:
        with _session_client(config) as client:
            status = client.send(request).entity.value
    except MastodonError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Posted {status.url or status.uri}")


@main.command()
@click.pass_context
def status(ctx):
    """Show configuration and stored logins."""
    config_path = ctx.obj["config_path"]
    has_config = config_exists(config_path)

    click.echo("Mastodon Client — Status")
    click.echo("=" * 40)
    click.echo(f"Config: {'Found' if has_config else 'Not configured'} ({config_path})")

    if not has_config:
        click.echo("\nRun 'mastodon-client login SERVER' to get started.")
        return

    config = load_or_default(config_path)
    click.echo(f"Current server: {config.server or 'none'}")
    click.echo(f"Redirect URI: {config.client.redirect_uri}")
    click.echo(f"Scopes: {' '.join(config.client.scopes)}")
    click.echo(f"Stored logins: {len(config.authorizations)}")
    for server in sorted(config.authorizations):
        marker = "*" if server == config.server else " "
        click.echo(f"  {marker} {server}")
