#!/usr/bin/env python3
"""
FastAPI application factory.

The grid page lives in the server process: on startup the controller loads
the metric list into it and arms the refresh timer, on shutdown the timer
is cancelled.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from ..client.controller import MetricsGridController
from ..client.http_client import MetricGridHttpClient
from ..client.page import Document
from .config import ServerConfig
from .routes import create_ui_routes

logger = logging.getLogger("metricgrid.server")


def create_app(config: ServerConfig, http_client: Optional[MetricGridHttpClient] = None) -> FastAPI:
    """Create the UI server for the given configuration."""
    grid_config = config.grid_config()
    # Charts are served by the metrics server, not by this app
    if not grid_config.image_base_url:
        grid_config.image_base_url = grid_config.server
    if http_client is None:
        http_client = MetricGridHttpClient(grid_config.server, timeout=grid_config.timeout)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        document = Document.with_container(grid_config.container_selector)
        controller = MetricsGridController(document, http_client, grid_config)
        app.state.controller = controller

        logger.info(f"loading metrics from {grid_config.server}")
        await controller.initialize()
        logger.info(f"metrics grid {controller.state.value}")
        try:
            yield
        finally:
            controller.dispose()

    app = FastAPI(title=config.page_title, lifespan=lifespan)
    app.state.config = config
    app.include_router(create_ui_routes(config, grid_config))
    return app
