"""Logging setup for the command-line front end.

The library modules only create loggers under ``mastodon_client``; attaching
handlers is left to whoever embeds it. The CLI calls setup_logging once per
invocation.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
HANDLER_NAME = "mastodon_client"


def setup_logging(debug: bool = False) -> logging.Logger:
    level = logging.DEBUG if debug else logging.INFO
    root = logging.getLogger("mastodon_client")
    root.setLevel(level)

    # The CLI can be invoked repeatedly in one process (tests do); keep one handler
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.set_name(HANDLER_NAME)
    root.addHandler(handler)

    # Request lines are already logged by mastodon_client.client
    httpx_level = logging.DEBUG if debug else logging.WARNING
    logging.getLogger("httpx").setLevel(httpx_level)
    logging.getLogger("httpcore").setLevel(httpx_level)
    return root
