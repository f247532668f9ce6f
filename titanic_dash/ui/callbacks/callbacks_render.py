from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

import dash
import dash_bootstrap_components as dbc
import plotly.graph_objs as go
from dash import ALL, Input, Output

from titanic_dash.ui.ids import IDs, parse_chart_id

if TYPE_CHECKING:
    from titanic_dash.ui.config import AppConfig

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helper: Empty/Error Figures
# -----------------------------------------------------------------------------
def _message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
    return fig


def _error_figure(details: str) -> go.Figure:
    return _message_figure("Something went wrong while rendering this chart.", details)


def render_chart(ctx: AppConfig, component_id: dict) -> go.Figure:
    """
    Figure for one chart component. Never raises: failures become an error figure.
    """
    _, view_id = parse_chart_id(component_id)
    try:
        view = ctx.registry.create(view_id, ctx.aggregator)
    except KeyError:
        return _error_figure(f"Unknown chart '{view_id}'.")

    try:
        return view.figure()
    except Exception:
        logger.exception("Failed to render chart", extra={"view_id": view_id})
        return _error_figure("See the server log for details.")


def chart_figures(ctx: AppConfig, component_ids: List[dict]) -> tuple[list, object, bool]:
    """
    -> (figures, banner, stop_polling)

    While the dataset is loading every chart shows a placeholder and polling
    continues; once loaded, charts are rendered and polling stops.
    """
    aggregator = ctx.aggregator

    if aggregator.is_loading:
        placeholders = [_message_figure("Loading passenger data...") for _ in component_ids]
        banner = dbc.Alert("Loading passenger data...", color="info", className="mt-2 mb-0 py-2")
        return placeholders, banner, False

    figures = [render_chart(ctx, cid) for cid in component_ids]

    banner = None
    if not aggregator.records:
        banner = dbc.Alert(
            "No passenger data available. Check the data file and the server log.",
            color="warning",
            className="mt-2 mb-0 py-2",
        )
    return figures, banner, True


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # All charts: poll until loaded, then render once
    # ---------------------------------------------------------
    @app.callback(
        Output({"type": IDs.Pattern.CHART, "index": ALL}, "figure"),
        Output(IDs.Control.LOADING_BANNER, "children"),
        Output(IDs.Control.LOAD_POLL, "disabled"),
        Input(IDs.Control.LOAD_POLL, "n_intervals"),
    )
    def update_charts(_n_intervals):
        component_ids = [o["id"] for o in dash.ctx.outputs_list[0]]
        figures, banner, stop_polling = chart_figures(ctx, component_ids)
        if stop_polling:
            logger.info(
                "Charts rendered",
                extra={"n_charts": len(figures), "n_records": len(ctx.aggregator.records)},
            )
        return figures, banner, stop_polling
