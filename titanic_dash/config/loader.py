from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from titanic_dash.config.model import (
    DEFAULT_DASHBOARDS,
    ColumnMapping,
    DashboardConfig,
    GlobalConfig,
)
from titanic_dash.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = "data/titanic.csv"
DEFAULT_STORAGE_ROOT = "storage"


def _resolve(root: Path, raw: str, env_var: str) -> Path:
    """
    Absolute paths are kept. Relative paths resolve against $env_var when set,
    otherwise against the config root.
    """
    path = Path(raw)
    if path.is_absolute():
        return path

    env_root = os.environ.get(env_var)
    if env_root:
        return Path(env_root) / path
    return (root / path).resolve()


def _parse_columns(raw: Any) -> ColumnMapping:
    if raw is None:
        return ColumnMapping()
    if not isinstance(raw, dict):
        raise ConfigError(f"'columns' must be an object, got {type(raw).__name__}")

    allowed = set(ColumnMapping().as_dict())
    unknown = sorted(set(raw) - allowed)
    if unknown:
        raise ConfigError(f"Unknown column mapping keys: {unknown}")
    return ColumnMapping(**{k: str(v) for k, v in raw.items()})


def _parse_dashboards(raw: Any, known_views: Optional[Iterable[str]]) -> List[DashboardConfig]:
    if raw is None:
        dashboards = list(DEFAULT_DASHBOARDS)
    else:
        if not isinstance(raw, list):
            raise ConfigError("'dashboards' must be a list")
        try:
            dashboards = [DashboardConfig.from_raw(d) for d in raw]
        except (KeyError, TypeError) as e:
            raise ConfigError(f"Invalid dashboard entry: {e}") from e

    ids = [d.id for d in dashboards]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise ConfigError(f"Duplicate dashboard ids in config: {duplicates}")

    if known_views is not None:
        known = set(known_views)
        for d in dashboards:
            missing = [v for v in d.views if v not in known]
            if missing:
                raise ConfigError(f"Dashboard '{d.id}' references unknown views: {missing}")

    return dashboards


def load_global_config(root: Path, known_views: Optional[Iterable[str]] = None) -> GlobalConfig:
    """
    Load configuration from <root>/global.json.

    :param root: config directory
    :param known_views: view ids available in the registry; when given, every
        dashboard's view list is checked against it
    """
    root = Path(root)
    logger.info(
        "Loading global config",
        extra={"config_root": str(root)},
    )

    global_path = root / "global.json"
    if not global_path.is_file():
        raise ConfigError(f"File not found at {global_path}")

    try:
        with global_path.open() as f:
            raw: Dict[str, Any] = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    data_file = _resolve(root, raw.get("data_file", DEFAULT_DATA_FILE), "TITANIC_DASH_DATA_ROOT")
    storage_root = _resolve(root, raw.get("storage_root", DEFAULT_STORAGE_ROOT), "TITANIC_DASH_STORAGE_ROOT")

    config = GlobalConfig(
        ui_title=raw.get("ui_title", "Titanic Dashboard"),
        subtitle=raw.get("subtitle", "Passenger survival explorer"),
        data_file=data_file,
        storage_root=storage_root,
        columns=_parse_columns(raw.get("columns")),
        dashboards=_parse_dashboards(raw.get("dashboards"), known_views),
        source_path=global_path,
    )

    logger.info(
        "Global config loaded",
        extra={
            "config_root": str(root),
            "data_file": str(config.data_file),
            "storage_root": str(config.storage_root),
            "dashboard_ids": [d.id for d in config.dashboards],
        },
    )
    return config
