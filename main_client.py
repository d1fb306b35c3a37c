#!/usr/bin/env python3
"""
Screen-Share Signaling Client - Main Entry Point

Command-line test client for a signaling server. It opens a share (printing the
session code) or joins one by code and logs every signaling message it
receives. No media is captured; offers and answers are left to a real media
stack built on top of SignalingClient.

Usage:
    python main_client.py --share
    python main_client.py --join CODE

Optional arguments:
    --host HOST           Server host (default: localhost)
    --port PORT           Server port (default: 9000)
"""

import argparse
import asyncio

from client.signaling_client import SignalingClient
from client.utils.config import ClientConfig
from client.utils.logger import logger
from common.constants import DEFAULT_HOST, DEFAULT_PORT, MessageTypes


async def run(args):
    client = SignalingClient(ClientConfig(args.host, args.port))
    if not await client.connect():
        return 1

    for msg_type in (MessageTypes.SESSION_CODE, MessageTypes.JOIN_SUCCESS, MessageTypes.JOIN_FAILURE,
                     MessageTypes.GET_OFFER, MessageTypes.ON_OFFER, MessageTypes.ON_ANSWER,
                     MessageTypes.ON_ICE_CANDIDATE, MessageTypes.SCREEN_SHARE_ENDED,
                     MessageTypes.PEER_LEFT, MessageTypes.ERROR):
        client.set_handler(msg_type, lambda message: logger.info(f"<- {message}"))

    listener = client.start_listening()
    if args.share:
        await client.start_screen_share()
    else:
        await client.join_session(args.join)

    try:
        await listener
    finally:
        await client.close()
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Screen-Share Signaling Client')
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument('--share', action='store_true', help='Start a share and print its code')
    mode.add_argument('--join', type=str, metavar='CODE', help='Join a share by code')
    parser.add_argument('--host', type=str, default=DEFAULT_HOST,
                        help=f'Server host (default: {DEFAULT_HOST})')
    parser.add_argument('--port', type=int, default=DEFAULT_PORT,
                        help=f'Server port (default: {DEFAULT_PORT})')

    try:
        raise SystemExit(asyncio.run(run(parser.parse_args())))
    except KeyboardInterrupt:
        logger.info("Client shutting down...")
