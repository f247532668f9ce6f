from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from titanic_dash.config.loader import load_global_config
from titanic_dash.core.table_loader import CsvTableSource
from titanic_dash.core.view_registry import ViewRegistry
from titanic_dash.services.annotation_service import AnnotationManager
from titanic_dash.services.dataset_service import DatasetAggregator
from titanic_dash.services.storage import InMemoryStorage, LocalFileSystemStorage, StateStore
from titanic_dash.ui.callbacks.callbacks_annotations import register_annotation_callbacks
from titanic_dash.ui.callbacks.callbacks_render import register_render_callbacks
from titanic_dash.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)

ANNOTATIONS_KEY = "annotations.json"
DATASET_KEY = "dataset.json"


def _build_view_registry() -> ViewRegistry:
    from titanic_dash.views import (
        AgeDistributionView,
        BodyRecoveryView,
        ClassSurvivalView,
        SexSurvivalView,
        SurvivalSplitView,
    )

    registry = ViewRegistry()
    registry.register(SurvivalSplitView)
    registry.register(ClassSurvivalView)
    registry.register(SexSurvivalView)
    registry.register(AgeDistributionView)
    registry.register(BodyRecoveryView)
    return registry


def build_app_config(config_root: Path | str = Path("config"), *, start_load: bool = True) -> AppConfig:
    """
    Construct the services the UI runs on.

    - dataset snapshot -> session-scope store (process memory)
    - annotations + drafts -> durable store under global_config.storage_root
    """
    config_root = Path(config_root)

    # 1) Load Config
    registry = _build_view_registry()
    global_config = load_global_config(config_root, known_views=registry.ids())

    # 2) Initialize Service Layer
    session_store = StateStore(InMemoryStorage(), DATASET_KEY)
    durable_store = StateStore(LocalFileSystemStorage(global_config.storage_root), ANNOTATIONS_KEY)

    aggregator = DatasetAggregator(store=session_store)
    annotations = AnnotationManager(store=durable_store)

    # 3) One-shot background load
    if start_load:
        aggregator.load(CsvTableSource(global_config.data_file, global_config.columns))

    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        aggregator=aggregator,
        annotations=annotations,
        registry=registry,
    )
    ctx.validate()
    return ctx


def create_dash_app(config_root: Path | str = Path("config"), *, start_load: bool = True) -> Dash:
    ctx = build_app_config(config_root, start_load=start_load)

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
    )
    app.title = ctx.global_config.ui_title

    # Rebuilt per page load so drafts and loading state are current
    app.layout = lambda: build_layout(ctx)

    # Register callbacks
    register_render_callbacks(app, ctx)
    register_annotation_callbacks(app, ctx)

    logger.info(
        "Dash app created",
        extra={
            "dashboards": [d.id for d in ctx.global_config.dashboards],
            "n_annotations": ctx.annotations.total_count(),
        },
    )
    return app
