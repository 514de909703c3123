"""Standalone mock server.

Starts a pounce ASGI server around a live ``Mock`` object. Requires the
``server`` extra (``pip install fauxapi[server]``).
"""

from fauxapi.adapters.asgi import MockASGIApp
from fauxapi.mock import Mock


def serve(mock: Mock, host: str = "127.0.0.1", port: int = 3000) -> None:
    """Serve *mock* over HTTP until interrupted.

    Pounce's ``run()`` takes an import string, but here we have a live
    ``Mock``, so ``pounce.Server`` is driven directly with the ASGI callable.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=1)
    Server(config, MockASGIApp(mock)).run()
