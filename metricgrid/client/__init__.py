"""
metricgrid client

Page model, image cells, metrics server client and the grid controller.
"""

from .cells import AggregationOp, ImageCell
from .config import GridConfig
from .controller import FAILURE_MESSAGE, GridState, MetricsGridController
from .http_client import MetricGridHttpClient, MetricsFetchError
from .page import Document, Element

__all__ = [
    "AggregationOp",
    "Document",
    "Element",
    "FAILURE_MESSAGE",
    "GridConfig",
    "GridState",
    "ImageCell",
    "MetricGridHttpClient",
    "MetricsFetchError",
    "MetricsGridController",
]
