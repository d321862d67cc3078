"""Entry point for running the speed test service."""

from __future__ import annotations

import argparse
import logging

from speedprobe import bootstrap

LOGGER = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Network speed test service")
    parser.add_argument("--config", help="Path to an optional config.yaml", default=None)
    parser.add_argument("--host", default=None, help="Override web server bind address")
    parser.add_argument("--port", type=int, default=None, help="Override web server port")
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    context = bootstrap(args.config)

    host = args.host or context.config.web.host
    port = args.port or context.config.web.port
    LOGGER.info("Server listening on %s:%s", host, port)
    context.web_app.run(host=host, port=port, debug=args.debug)


if __name__ == "__main__":
    main()
