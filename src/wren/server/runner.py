"""Serve a wren App with pounce.

Pounce's ``run()`` takes an import string (e.g., ``"myapp:app"``), but
callers hold a live ``App`` object, so ``pounce.Server`` is used
directly with the ASGI callable.
"""

import logging

from wren.config import AppConfig


def run_server(app: object, config: AppConfig) -> None:
    """Start a pounce server for *app* using *config*.

    Applies ``config.log_level`` to the ``wren`` logger hierarchy only.
    Reload is enabled in debug mode, which forces a single worker.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    logging.getLogger("wren").setLevel(config.log_level.upper())

    server_config = ServerConfig(
        host=config.host,
        port=config.port,
        workers=1 if config.debug else config.workers,
        reload=config.debug,
    )
    Server(server_config, app).run()
