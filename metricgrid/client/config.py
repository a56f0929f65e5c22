import argparse
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger("metricgrid.client")


@dataclass
class GridConfig:
    """Metrics grid configuration with defaults"""
    server: str = "http://127.0.0.1:8080"
    container_selector: str = ".metrics"
    cell_class: str = "col-lg-4 col-md-6 col-sm-12"
    image_class: str = "image-responsive"
    image_base_url: str = ""
    width: int = 800
    height: int = 500
    refresh_interval: float = 30
    timeout: int = 10
    log_level: str = "INFO"
    output: str = "metrics.html"
    once: bool = False

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Reject values the grid cannot run with"""
        if not isinstance(self.refresh_interval, (int, float)) or self.refresh_interval <= 0:
            raise ValueError(f"refresh_interval must be a positive number of seconds, got {self.refresh_interval!r}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"image size must be positive, got {self.width}x{self.height}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GridConfig":
        """Create config from dictionary, ignoring unknown keys"""
        known_fields = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known_fields)
        if unknown:
            logger.warning(f"Ignoring unknown grid config keys: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known_fields})

    @classmethod
    def from_file(cls, config_path: Path) -> "GridConfig":
        """Load configuration from YAML file"""
        if not config_path.exists():
            logger.debug(f"Config file not found: {config_path}, using defaults")
            return cls()

        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
            logger.debug(f"Loaded config from {config_path}: {data}")
            return cls.from_dict(data)
        except Exception as e:
            logger.warning(f"Failed to load config from {config_path}: {e}, using defaults")
            return cls()

    def override_with_args(self, args: argparse.Namespace) -> "GridConfig":
        """Override config with command line arguments if provided"""
        # Only override if explicitly provided - preserves config file values
        self.server = args.server if args.server is not None else self.server
        self.refresh_interval = args.interval if args.interval is not None else self.refresh_interval
        self.output = str(args.output) if args.output is not None else self.output
        self.log_level = args.log_level if args.log_level is not None else self.log_level
        self.once = args.once
        self.validate()
        return self
