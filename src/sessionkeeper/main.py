"""Entry point for the SessionKeeper server."""

import structlog

from sessionkeeper.app import App
from sessionkeeper.config import Config
from sessionkeeper.logging import setup_logging
from sessionkeeper.web.runner import run_server

logger = structlog.get_logger(__name__)


def main() -> None:
    config = Config()  # type: ignore[call-arg]
    setup_logging(config.debug)
    # Never log the secret itself
    logger.info(
        "starting_session_server",
        host=config.host,
        port=config.port,
        cookie_name=config.cookie_name,
        session_ttl=config.session_ttl.total_seconds(),
        sweep_interval=config.sweep_interval.total_seconds(),
    )
    run_server(App(config), config)


if __name__ == "__main__":
    main()
