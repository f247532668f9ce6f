from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from titanic_dash.config.model import GlobalConfig
from titanic_dash.core.view_registry import ViewRegistry
from titanic_dash.services.annotation_service import AnnotationManager
from titanic_dash.services.dataset_service import DatasetAggregator


@dataclass
class AppConfig:
    """
    Shared state for the Dash app, passed into layout + callback registration
    instead of module-level globals.
    """
    config_root: Path
    global_config: GlobalConfig

    aggregator: Optional[DatasetAggregator] = None
    annotations: Optional[AnnotationManager] = None
    registry: Optional[ViewRegistry] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.aggregator is None:
            raise RuntimeError("AppConfig.aggregator must be initialized.")
        if self.annotations is None:
            raise RuntimeError("AppConfig.annotations must be initialized.")
        if self.registry is None:
            raise RuntimeError("AppConfig.registry must be initialized.")
