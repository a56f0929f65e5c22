#!/usr/bin/env python3
"""
metricgrid Server Configuration Management

The YAML file holds the listener settings at the top level and the grid
settings under `grid:`, e.g.

    host: 0.0.0.0
    port: 8000
    grid:
      server: http://metrics:8080
      refresh_interval: 30
"""

import logging
from typing import Any, Dict

import yaml
from pydantic import BaseModel

from ..client.config import GridConfig

logger = logging.getLogger("metricgrid.server")


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    page_title: str = "Metrics"
    # Passed through to GridConfig
    grid: Dict[str, Any] = {}

    def grid_config(self) -> GridConfig:
        return GridConfig.from_dict(self.grid)


def load_config_from(path: str) -> ServerConfig:
    """Load server configuration from YAML file."""
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    return ServerConfig(**data)
