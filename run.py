"""
Run script for starting the ConvoAI server.

This script loads the .env file, validates the configuration and starts the
FastAPI server with uvicorn.

Usage:
    python run.py [--port PORT] [--host HOST] [--log-level LEVEL]
"""

import argparse
import os
import sys
from pathlib import Path

import dotenv
import uvicorn

sys.path.append(str(Path(__file__).parent))

from convoai_server.config.logging_config import configure_logging
from convoai_server.errors import ConfigError
from convoai_server.main import create_app, load_validated_config


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Start the ConvoAI server")
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to run the server on (default: PORT env var or 8080)",
    )
    parser.add_argument(
        "--host",
        default=os.getenv("HOST", "0.0.0.0"),
        help="Host to bind the server to (default: 0.0.0.0 or HOST env var)",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO or LOG_LEVEL env var)",
    )
    return parser.parse_args()


def main():
    """Main entry point for starting the server."""
    env_path = Path(".") / ".env"
    if env_path.exists():
        dotenv.load_dotenv(env_path)

    args = parse_args()
    logger = configure_logging(args.log_level)

    try:
        config = load_validated_config()
    except ConfigError as e:
        logger.critical(f"FATAL ERROR: {e}")
        sys.exit(1)

    port = args.port or config.port
    logger.info(f"Starting server on http://{args.host}:{port}")
    logger.info(f"TTS vendor: {config.tts_vendor}")

    uvicorn.run(
        create_app(config),
        host=args.host,
        port=port,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
