#!/usr/bin/env python3
"""
Screen-Share Signaling Server - Main Entry Point

Relays session codes, offers, answers and ICE candidates between a sharing
host and its viewers over WebSocket connections.

Usage:
    python main_server.py

Optional arguments:
    --host HOST           Bind address (default: 0.0.0.0)
    --port PORT           WebSocket port (default: 9000)
    --log-dir DIR         Session audit log directory (default: logs)
    --log-level LEVEL     Console log level (default: INFO)
    --silent-disconnect   Do not notify viewers when a host's connection drops
"""

import argparse
import asyncio
import logging

from common.constants import DEFAULT_SERVER_HOST, DEFAULT_PORT, LOG_DIR
from server.main_server import SignalingServer
from server.utils.config import ServerConfig
from server.utils.logger import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Screen-Share Signaling Server')
    parser.add_argument('--host', type=str, default=DEFAULT_SERVER_HOST,
                        help=f'Host to bind to (default: {DEFAULT_SERVER_HOST})')
    parser.add_argument('--port', type=int, default=DEFAULT_PORT,
                        help=f'WebSocket port (default: {DEFAULT_PORT})')
    parser.add_argument('--log-dir', type=str, default=LOG_DIR,
                        help=f'Directory for the session audit log (default: {LOG_DIR})')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Console log level (default: INFO)')
    parser.add_argument('--silent-disconnect', action='store_true',
                        help="Do not send screenShareEnded to viewers when the host's connection drops")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logger.set_level(getattr(logging, args.log_level))
    config = ServerConfig(host=args.host, port=args.port, logs_dir=args.log_dir)
    config.notify_peers_on_host_disconnect = not args.silent_disconnect

    server = SignalingServer(config)
    try:
        asyncio.run(server.serve_forever())
    except KeyboardInterrupt:
        logger.info("Server shutting down...")


if __name__ == "__main__":
    main()
