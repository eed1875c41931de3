"""Run the inventory API with uvicorn."""

import logging

import uvicorn

from fleetims.server.app import create_app
from fleetims.server.config import ServerConfig


def main() -> None:
    config = ServerConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
