"""Application bootstrap helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

from .config import AppConfig, load_config
from .logging_setup import configure_logging
from .measurements.manager import MeasurementManager
from .web.app import create_web_app


class ApplicationContext:
    """Holds shared singletons for the service."""

    def __init__(self, config: AppConfig):
        self.config = config
        self.log_path = configure_logging(config)
        self.measurements = MeasurementManager(config)
        self.web_app = create_web_app(config=config, measurement_manager=self.measurements)


def bootstrap(config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> ApplicationContext:
    """Load configuration and wire dependencies."""

    config_file = str(Path(config_path).resolve()) if config_path else None
    return ApplicationContext(load_config(config_file, environ=environ))
