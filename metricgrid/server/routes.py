#!/usr/bin/env python3
"""
UI Routes - Grid Page, Grid Fragment and Static Assets
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, HTMLResponse
from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from ..client.config import GridConfig
from ..client.controller import GridState, MetricsGridController
from .config import ServerConfig

logger = logging.getLogger("metricgrid.server")

PACKAGE_DIR = Path(__file__).parent


def _grid_html(controller: MetricsGridController) -> str:
    if controller.container is None:
        return ""
    return controller.container.inner_html()


def create_ui_routes(config: ServerConfig, grid_config: GridConfig) -> APIRouter:
    """Create the page, fragment and asset routes."""
    router = APIRouter()
    templates = Jinja2Templates(directory=str(PACKAGE_DIR / "templates"))

    @router.get("/", response_class=HTMLResponse)
    def index(request: Request):
        """Grid page; the container polls /grid while the refresh timer runs."""
        controller: MetricsGridController = request.app.state.controller
        container = controller.container

        return templates.TemplateResponse(request, "index.html", {
            "page_title": config.page_title,
            "container_class": container.class_name if container is not None else "",
            "container_id": container.id if container is not None else "",
            "grid_html": Markup(_grid_html(controller)),
            "polling": controller.state == GridState.RENDERED,
            "refresh_interval": grid_config.refresh_interval,
        })

    @router.get("/grid", response_class=HTMLResponse)
    def grid_fragment(request: Request):
        """Current contents of the grid container, swapped in by htmx."""
        controller: MetricsGridController = request.app.state.controller
        logger.debug("Serving grid fragment")
        return HTMLResponse(_grid_html(controller))

    @router.get("/css/style.css")
    def stylesheet():
        return FileResponse(PACKAGE_DIR / "static" / "style.css", media_type="text/css")

    @router.get("/health")
    def health(request: Request):
        controller: MetricsGridController = request.app.state.controller
        return {
            "status": "ok",
            "state": controller.state.value,
            "metrics": len(controller.metric_names),
        }

    return router
