from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc, html

from titanic_dash.ui.ids import IDs, dashboard_id
from titanic_dash.ui.layout.build_dashboard_panel import build_dashboard_panel
from titanic_dash.ui.layout.build_navbar import build_navbar

if TYPE_CHECKING:
    from titanic_dash.ui.config import AppConfig

LOAD_POLL_MS = 500


def build_layout(ctx: AppConfig):
    """
    Built per page load so persisted drafts are restored into the textareas.
    """
    global_config = ctx.global_config
    dashboards = global_config.dashboards

    tabs = [
        dcc.Tab(
            id=dashboard_id(IDs.Pattern.DASHBOARD_TAB, d.id),
            label=d.label,
            value=d.id,
            children=[build_dashboard_panel(d, draft=ctx.annotations.get_draft(d.id))],
        )
        for d in dashboards
    ]

    return dbc.Container(
        fluid=True,
        children=[
            build_navbar(global_config),

            # App-level stores
            dcc.Store(id=IDs.Store.ANNOTATIONS_VERSION, data=0),
            dcc.Store(id=IDs.Store.DRAFTS_SYNCED),

            # Polls the aggregator until the one-shot load has finished
            dcc.Interval(
                id=IDs.Control.LOAD_POLL,
                interval=LOAD_POLL_MS,
                disabled=False,
            ),
            html.Div(id=IDs.Control.LOADING_BANNER),

            dcc.Tabs(
                id=IDs.Control.DASHBOARD_TABS,
                value=dashboards[0].id if dashboards else None,
                children=tabs,
                className="mt-2",
            ),
        ],
    )
