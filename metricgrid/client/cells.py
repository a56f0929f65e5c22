"""
Image cells of the metrics grid.

Every metric name is expanded into one chart image per aggregation
operation. A cell knows its identity, its label and how to build the
chart URL served by the metrics server.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional
from urllib.parse import quote, urlencode

# Characters encodeURIComponent leaves alone besides alphanumerics
URI_COMPONENT_SAFE = "-_.!~*'()"


class AggregationOp(str, Enum):
    SUM = "sum"
    COUNT = "count"
    AVG = "avg"


def encode_metric_name(name: str) -> str:
    """Percent-encode a metric name for use as a single path segment."""
    return quote(name, safe=URI_COMPONENT_SAFE)


@dataclass(frozen=True)
class ImageCell:
    name: str
    op: AggregationOp

    @property
    def identity(self) -> str:
        return f"{self.name}-{self.op.value}"

    @property
    def label(self) -> str:
        return f"{self.name} {self.op.value}"

    @property
    def path(self) -> str:
        return f"/metric/{encode_metric_name(self.name)}/{self.op.value}.png"

    def src(self, width: int, height: int, timestamp: Optional[int] = None, base_url: str = "") -> str:
        """
        Build the chart image URL.

        Args:
            width: Target image width in pixels
            height: Target image height in pixels
            timestamp: Cache-busting value; omitted on first render
            base_url: Optional metrics server origin prepended to the path
        """
        params = []
        if timestamp is not None:
            params.append(("t", timestamp))
        params.extend([("width", width), ("height", height)])
        return f"{base_url.rstrip('/')}{self.path}?{urlencode(params)}"


def iter_cells(metric_names: Iterable[str]) -> Iterator[ImageCell]:
    """Yield cells in grid order: outer loop over names, inner over operations."""
    for name in metric_names:
        for op in AggregationOp:
            yield ImageCell(name, op)
