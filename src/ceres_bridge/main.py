"""
Ceres climate bridge - command line entry point
"""

import argparse
import asyncio
import logging
import os
import sys

import yaml

from . import __version__
from .config_loader import get_sample_config
from .services.bridge_server import BridgeServer

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ceres-bridge",
        description="Discover ceres-http climate devices over mDNS and expose them over HTTP"
    )
    parser.add_argument("--config", default=os.environ.get('CONFIG_FILE', 'config/config.yaml'),
                        help="Path to the YAML configuration (default: $CONFIG_FILE or config/config.yaml)")
    parser.add_argument("--sample-config", action="store_true",
                        help="Print a sample configuration and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser

async def serve(config_path: str) -> int:
    """Run the bridge until uvicorn exits on SIGINT/SIGTERM"""
    try:
        server = BridgeServer(config_path=config_path)
    except (FileNotFoundError, ValueError) as e:
        print(f"Cannot load configuration {config_path}: {e}", file=sys.stderr)
        return 1

    logger.info(f"Using configuration file: {config_path}")
    try:
        # start() already stops the server when it fails
        await server.start()
    except Exception as e:
        logger.error(f"Bridge failed: {e}")
        return 1

    await server.stop()
    return 0

def run(argv=None):
    args = build_parser().parse_args(argv)

    if args.sample_config:
        sys.stdout.write(yaml.safe_dump(get_sample_config(), sort_keys=False))
        sys.exit(0)

    try:
        sys.exit(asyncio.run(serve(args.config)))
    except KeyboardInterrupt:
        print("\nBridge stopped by user")
        sys.exit(0)

if __name__ == "__main__":
    run()
