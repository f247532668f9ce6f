from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from titanic_dash.config.model import DashboardConfig
from titanic_dash.ui.ids import chart_id
from titanic_dash.ui.layout.build_annotations_panel import build_annotations_panel


def build_dashboard_panel(dashboard: DashboardConfig, draft: str = "") -> html.Div:
    """
    One dashboard tab: its charts in a responsive grid, comments underneath.
    Figures are filled in by the render callbacks once the dataset is loaded.
    """
    charts = [
        dbc.Col(
            dbc.Card(
                dbc.CardBody(
                    dcc.Loading(
                        type="default",
                        children=dcc.Graph(
                            id=chart_id(dashboard.id, view_id),
                            config={"responsive": True, "displaylogo": False},
                        ),
                    )
                ),
                className="h-100",
            ),
            md=6 if len(dashboard.views) > 1 else 12,
            className="mb-3",
        )
        for view_id in dashboard.views
    ]

    return html.Div(
        [
            dbc.Row(charts, className="gx-3 mt-3"),
            build_annotations_panel(dashboard.id, draft=draft),
        ]
    )
