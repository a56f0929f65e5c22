"""
metricgrid Server Module

Serves the metrics grid page; the grid itself is built and refreshed by
the client-side MetricsGridController running inside the server process.
"""

from .app import create_app

__all__ = ["create_app"]
