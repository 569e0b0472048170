"""Run the deals server with uvicorn on the configured host and port."""

import logging

import uvicorn

from .config import get_server_config


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    listen = get_server_config().listen
    uvicorn.run("deals_server.main:app", host=listen.host, port=listen.port)


if __name__ == "__main__":
    main()
