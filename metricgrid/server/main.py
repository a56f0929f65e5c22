#!/usr/bin/env python3
"""
metricgrid FastAPI server

Entry point that loads the YAML config, builds the app and runs it under
uvicorn.
"""

import argparse
import logging

import uvicorn

from .app import create_app
from .config import load_config_from


def main():
    """Main entry point for metricgrid server."""
    parser = argparse.ArgumentParser(description="metricgrid server")
    parser.add_argument("-c", "--config", help="Path to YAML config", default="config.yaml")
    args = parser.parse_args()

    # Load configuration
    config = load_config_from(args.config)
    logging.basicConfig(level=getattr(logging, config.log_level.upper(), logging.INFO))

    # Create FastAPI app
    app = create_app(config)

    # Run the server
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        reload=False,
        access_log=False,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
