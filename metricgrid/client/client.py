#!/usr/bin/env python3
"""
metricgrid headless renderer

Flow:
- build a page holding a single metrics container
- load the metric list from --server and render the chart grid
- write the page to --output
- with --once stop there; otherwise rewrite the snapshot after every
  refresh tick until interrupted
"""

import argparse
import asyncio
import logging
from pathlib import Path

from .config import GridConfig
from .controller import GridState, MetricsGridController
from .http_client import MetricGridHttpClient
from .page import Document

logger = logging.getLogger("metricgrid.client")


def write_snapshot(document: Document, output: Path) -> None:
    """Write the current page to disk, replacing any previous snapshot."""
    tmp_path = output.with_suffix(output.suffix + ".tmp")
    tmp_path.write_text(document.to_html(), encoding="utf-8")
    tmp_path.replace(output)
    logger.debug("wrote snapshot to %s", output)


async def run_renderer(config: GridConfig) -> GridState:
    """Render the grid and keep its snapshot current."""
    document = Document.with_container(config.container_selector)
    # A snapshot on disk cannot resolve chart paths relative to itself
    if not config.image_base_url:
        config.image_base_url = config.server
    http_client = MetricGridHttpClient(config.server, timeout=config.timeout)
    controller = MetricsGridController(document, http_client, config)
    output = Path(config.output)

    try:
        await controller.initialize()
        write_snapshot(document, output)
        logger.info("grid %s; snapshot written to %s", controller.state.value, output)

        if config.once or controller.state != GridState.RENDERED:
            return controller.state

        while controller.refresh_armed:
            await asyncio.sleep(max(1, config.refresh_interval))
            write_snapshot(document, output)
    finally:
        controller.dispose()

    return controller.state


def main():
    parser = argparse.ArgumentParser(description="metricgrid headless renderer")
    parser.add_argument("--config", "-c", type=Path, default=Path("config.yml"),
                        help="YAML configuration file (default: config.yml)")
    parser.add_argument("--server",
                        help="metrics server base URL (e.g., http://localhost:8080)")
    parser.add_argument("--interval", type=float,
                        help="seconds between image refreshes")
    parser.add_argument("--output", "-o", type=Path,
                        help="HTML snapshot path")
    parser.add_argument("--once", action="store_true",
                        help="render one snapshot and exit")
    parser.add_argument("--log-level",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging level")
    args = parser.parse_args()

    # Load config: YAML first, then CLI overrides
    try:
        config = GridConfig.from_file(args.config).override_with_args(args)
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(level=getattr(logging, config.log_level.upper(), logging.INFO))
    logger.info(f"metricgrid renderer starting: server={config.server}, interval={config.refresh_interval}s")

    try:
        state = asyncio.run(run_renderer(config))
    except KeyboardInterrupt:
        print("\nInterrupted. Bye!")
        return

    if state == GridState.FAILED:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
