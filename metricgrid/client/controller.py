"""
Metrics Grid Controller

Owns the grid mounted into a page: the container handle, the metric names
captured at load time, the handle of every chart image and the refresh
timer. Loading happens once; afterwards only image sources change.
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .cells import AggregationOp, ImageCell, iter_cells
from .config import GridConfig
from .http_client import MetricGridHttpClient, MetricsFetchError
from .page import Document, Element

logger = logging.getLogger("metricgrid.client")

FAILURE_MESSAGE = "Failed to load metrics."


class GridState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    FAILED = "failed"
    RENDERED = "rendered"


class MetricsGridController:
    """
    Loads the metric list once, renders one chart per (metric, operation)
    and keeps the charts fresh by rewriting their sources on a timer.
    """

    def __init__(self, document: Document, http_client: MetricGridHttpClient, config: Optional[GridConfig] = None):
        self.document = document
        self.http_client = http_client
        self.config = config or GridConfig()

        self.state = GridState.UNINITIALIZED
        self.container: Optional[Element] = None
        self._metric_names: Tuple[str, ...] = ()
        self._images: Dict[Tuple[str, AggregationOp], Element] = {}
        self._refresh_task: Optional[asyncio.Task] = None

    # ---------------- accessors ----------------

    @property
    def metric_names(self) -> Tuple[str, ...]:
        return self._metric_names

    @property
    def cells(self) -> Tuple[ImageCell, ...]:
        return tuple(iter_cells(self._metric_names))

    @property
    def refresh_armed(self) -> bool:
        return self._refresh_task is not None and not self._refresh_task.done()

    def image_for(self, name: str, op: AggregationOp) -> Optional[Element]:
        return self._images.get((name, AggregationOp(op)))

    # ---------------- lifecycle ----------------

    async def initialize(self) -> None:
        """Locate the grid container and load the metrics into it."""
        container = self.document.query_selector(self.config.container_selector)
        if container is None:
            logger.debug(f"No element matches {self.config.container_selector!r}, nothing to render")
            return

        self.container = container
        await self.load_metrics()

    async def load_metrics(self) -> None:
        """Fetch the metric list once; render it or show the failure message."""
        self.state = GridState.LOADING
        loop = asyncio.get_running_loop()

        try:
            # Blocking urllib call runs in the default executor
            names = await loop.run_in_executor(None, self.http_client.fetch_metric_names)
        except MetricsFetchError as e:
            logger.error(f"Failed to load metrics: {e}")
            self.container.text_content = FAILURE_MESSAGE
            self.state = GridState.FAILED
            return

        logger.info(f"Loaded {len(names)} metrics from {self.http_client.server_base}")
        self.render_metrics(self.container, names)

    def render_metrics(self, container: Element, metric_names: Sequence[str]) -> None:
        """Mount one image per (metric, operation) and arm the refresh timer."""
        self.container = container
        self._metric_names = self._unique_names(metric_names)
        self._images = {}

        container.replace_children()
        fragment = self.document.create_document_fragment()

        for cell in iter_cells(self._metric_names):
            wrapper = self.document.create_element("div", {"class": self.config.cell_class})
            img = self.document.create_element("img", {
                "loading": "lazy",
                "alt": cell.label,
                "id": cell.identity,
                "class": self.config.image_class,
                "src": cell.src(self.config.width, self.config.height, base_url=self.config.image_base_url),
            })
            wrapper.append_child(img)
            fragment.append_child(wrapper)
            self._images[(cell.name, cell.op)] = img

        container.append_child(fragment)
        self.state = GridState.RENDERED
        logger.debug(f"Rendered {len(self._images)} metric images")

        self._arm_refresh()

    def refresh_metrics(self, container: Element, metric_names: Sequence[str]) -> int:
        """
        Point every mounted image at a fresh render.

        Returns:
            Number of images whose source was rewritten
        """
        now = int(time.time() * 1000)
        updated = 0

        for cell in iter_cells(metric_names):
            img = self._images.get((cell.name, cell.op))
            if img is None or not container.contains(img):
                logger.debug(f"Image {cell.identity!r} is no longer mounted, skipping")
                continue
            img.set_attribute("src", cell.src(
                self.config.width, self.config.height, timestamp=now, base_url=self.config.image_base_url
            ))
            updated += 1

        logger.debug(f"Refreshed {updated} metric images (t={now})")
        return updated

    def dispose(self) -> None:
        """Stop the refresh timer. Safe to call more than once."""
        if self._refresh_task is not None:
            self._refresh_task.cancel()
            self._refresh_task = None
            logger.debug("Metrics refresh timer cancelled")

    # ---------------- internals ----------------

    def _arm_refresh(self) -> None:
        self.dispose()
        self._refresh_task = asyncio.get_running_loop().create_task(self._refresh_loop())

    async def _refresh_loop(self) -> None:
        container = self.container
        names = self._metric_names

        while True:
            await asyncio.sleep(self.config.refresh_interval)
            try:
                self.refresh_metrics(container, names)
            except Exception as e:
                logger.exception(f"Metrics refresh failed: {e}")

    @staticmethod
    def _unique_names(metric_names: Sequence[str]) -> Tuple[str, ...]:
        seen = set()
        unique: List[str] = []
        for name in metric_names:
            if name in seen:
                logger.warning(f"Duplicate metric name {name!r} ignored")
                continue
            seen.add(name)
            unique.append(name)
        return tuple(unique)
